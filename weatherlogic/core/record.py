from __future__ import annotations
import dataclasses
from dataclasses import dataclass
from functools import total_ordering

from .timestamp import Timestamp


@total_ordering
@dataclass(frozen=True, eq=False)
class Record:
    """
    One observation. Identity is the timestamp alone: two records with the
    same timestamp compare equal whatever their measurements are.
    """

    timestamp: Timestamp
    wind_speed: float = 0.0
    temperature: float = 0.0
    solar_radiation: float = 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.timestamp == other.timestamp

    def __lt__(self, other: "Record") -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.timestamp < other.timestamp

    def __hash__(self) -> int:
        return hash(self.timestamp)

    @property
    def year(self) -> int:
        return self.timestamp.year

    @property
    def month(self) -> int:
        return self.timestamp.month

    def copy(self) -> "Record":
        """Detached copy; never the same object as self."""
        return dataclasses.replace(self)

    def same_values(self, other: "Record") -> bool:
        return (
            self.timestamp == other.timestamp
            and self.wind_speed == other.wind_speed
            and self.temperature == other.temperature
            and self.solar_radiation == other.solar_radiation
        )

    def __str__(self) -> str:
        return (
            f"{self.timestamp} | WS: {self.wind_speed:g}"
            f" | Temp: {self.temperature:g} | Solar: {self.solar_radiation:g}"
        )
