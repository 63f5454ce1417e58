from __future__ import annotations
from pathlib import Path
from typing import IO, Optional

import pandas as pd

from . import canon, query, stats
from .collection import WeatherCollection
from .core.record import Record
from .schema import MonthlySummary, SeriesCell


def format_record(record: Record) -> str:
    """'D/M/Y H:MM | WS: w | Temp: t | Solar: s'"""
    return str(record)


def dump_lines(collection: WeatherCollection) -> list[str]:
    lines = [f"=== All Weather Data ({collection.total_records()} records) ==="]
    collection.store.traverse(lambda r: lines.append(format_record(r)))
    return lines


def structure_lines(collection: WeatherCollection) -> list[str]:
    store = collection.store
    lines = [
        "=== Data Structure Information ===",
        f"Total records: {store.size()}",
        f"Tree height: {store.height()}",
        f"Duplicate policy: {store.duplicate_policy}",
    ]
    for month, count in collection.index.counts().items():
        lines.append(f"{canon.month_name(month)}: {count} indexed")
    return lines


def wind_speed_line(collection: WeatherCollection, year: int, month: int) -> str:
    summary = collection.average_wind_speed(year, month)
    if summary is None:
        return f"{month}/{year}: {canon.NO_DATA}"
    return (
        f"{month}/{year}: Average speed: {summary.mean:g} km/h, "
        f"Sample stdev: {summary.stdev:g}"
    )


def temperature_lines(collection: WeatherCollection, year: int) -> list[str]:
    lines = [str(year)]
    for t in collection.monthly_temperatures(year):
        name = canon.month_name(t.month)
        if not t.has_data:
            lines.append(f"{name}: {canon.NO_DATA}")
            continue
        lines.append(
            f"{name}: average: {t.mean:g} degrees C, stdev: {t.stdev:g}"
        )
    return lines


def correlation_lines(collection: WeatherCollection, year: int, month: int) -> list[str]:
    scope = "all years" if year == canon.ALL_YEARS else str(year)
    lines = [f"Sample Pearson Correlation Coefficient for {month}/{scope}"]
    for kind, value in collection.correlations(year, month).items():
        lines.append(f"{kind}: {value:g}")
    return lines


def _cell(values: list[float]) -> SeriesCell:
    d = stats.describe(values)
    return SeriesCell(mean=d["mean"], stdev=d["stdev"], mad=d["mad"])


def monthly_summaries(collection: WeatherCollection, year: int) -> list[MonthlySummary]:
    out: list[MonthlySummary] = []
    for month in range(1, 13):
        records = collection.data_for_year_month(year, month)
        if not records:
            out.append(MonthlySummary(year=year, month=month))
            continue
        out.append(
            MonthlySummary(
                year=year,
                month=month,
                count=len(records),
                wind=_cell(query.column(records, "wind_speed")),
                temperature=_cell(query.column(records, "temperature")),
                # solar is reported as the month's total, not a mean
                total_solar=stats.total(query.column(records, "solar_radiation")),
            )
        )
    return out


def monthly_stats_frame(collection: WeatherCollection, year: int) -> pd.DataFrame:
    """
    Twelve rows, one per month, with columns:
      Month, Avg_Wind(StdDev,MAD), Avg_Temp(StdDev,MAD), Total_Solar_Radiation

    Months without data read 'No Data' followed by empty cells.
    """
    rows = [s.cells() for s in monthly_summaries(collection, year)]
    return pd.DataFrame(rows, columns=canon.REPORT_COLUMNS)


def report_filename(year: int) -> str:
    return f"MonthlyStats_{year}.txt"


def _report_line(summary: MonthlySummary) -> str:
    # cells are written unquoted; a month with no data trails three commas
    if not summary.has_data:
        return f"{summary.month_name},{canon.NO_DATA},,,"
    return ",".join(summary.cells())


def render_monthly_stats(collection: WeatherCollection, year: int) -> str:
    """
    Report text: a 'Year,<year>' line, the column header, then one line
    per month, e.g. 'June,8(1,0.666667),26(0,0),600'.
    """
    lines = [f"Year,{year}", ",".join(canon.REPORT_COLUMNS)]
    lines.extend(_report_line(s) for s in monthly_summaries(collection, year))
    return "\n".join(lines) + "\n"


def write_monthly_stats(
    collection: WeatherCollection,
    year: int,
    sink: Optional[str | Path | IO[str]] = None,
) -> Path | None:
    """
    Write the yearly report to a path or an open text sink.

    With no sink, writes MonthlyStats_<year>.txt in the working directory.
    Returns the path written, or None for a stream sink.
    """
    text = render_monthly_stats(collection, year)
    if sink is None:
        sink = report_filename(year)
    if isinstance(sink, (str, Path)):
        path = Path(sink)
        path.write_text(text)
        return path
    sink.write(text)
    return None
