from __future__ import annotations
from typing import Final, Dict

# Raw observation row layout (0-based field positions)
TIMESTAMP_FIELD: Final[int] = 0
WIND_SPEED_FIELD: Final[int] = 10
SOLAR_RADIATION_FIELD: Final[int] = 11
TEMPERATURE_FIELD: Final[int] = 17
MIN_FIELDS: Final[int] = 18
# widest line the CSV reader accepts; wider lines are logged and skipped
MAX_CSV_FIELDS: Final[int] = 64

MISSING_TOKEN: Final[str] = "N/A"

# Fallback for timestamps whose date part cannot be parsed: 1/1/1900 00:00
SENTINEL_DATE: Final[tuple[int, int, int]] = (1900, 1, 1)

MEASUREMENTS: Final[tuple[str, ...]] = ("wind_speed", "temperature", "solar_radiation")

MONTH_NAMES: Final[tuple[str, ...]] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Correlation type token -> (x measurement, y measurement)
CORRELATION_PAIRS: Dict[str, tuple[str, str]] = {
    "S_T": ("solar_radiation", "temperature"),
    "S_R": ("solar_radiation", "wind_speed"),
    "T_R": ("temperature", "wind_speed"),
}

# Year value meaning "every year" in correlation queries
ALL_YEARS: Final[int] = 0

# Pearson denominators below this are treated as zero
PEARSON_EPSILON: Final[float] = 1e-10

REPORT_COLUMNS: Final[list[str]] = [
    "Month",
    "Avg_Wind(StdDev,MAD)",
    "Avg_Temp(StdDev,MAD)",
    "Total_Solar_Radiation",
]
NO_DATA: Final[str] = "No Data"


def valid_month(month: int) -> bool:
    return 1 <= month <= 12


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]
