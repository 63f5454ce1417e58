from __future__ import annotations
import calendar
import logging
from dataclasses import dataclass
from datetime import datetime
from itertools import takewhile

import pandas as pd

from .. import canon

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H:%M"


@dataclass(frozen=True, order=True)
class Timestamp:
    """
    Minute-resolution observation time.

    Field order drives the generated comparisons, so ordering is
    lexicographic on (year, month, day, hour, minute).
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0

    def __post_init__(self):
        if not canon.valid_month(self.month):
            raise ValueError(f"month out of range: {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"year out of range: {self.year}")
        if not 1 <= self.day <= calendar.monthrange(self.year, self.month)[1]:
            raise ValueError(f"day out of range for {self.month}/{self.year}: {self.day}")
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour out of range: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute out of range: {self.minute}")

    @classmethod
    def sentinel(cls) -> "Timestamp":
        year, month, day = canon.SENTINEL_DATE
        return cls(year, month, day)

    @property
    def is_sentinel(self) -> bool:
        return self == Timestamp.sentinel()

    def to_datetime(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute)

    def __str__(self) -> str:
        return f"{self.day}/{self.month}/{self.year} {self.hour}:{self.minute:02d}"


def _parse_date(text: str) -> tuple[int, int, int] | None:
    # NaT covers both bad syntax and impossible calendar dates (31/02)
    parsed = pd.to_datetime(text.strip(), format=DATE_FORMAT, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.year, parsed.month, parsed.day


def _parse_time(text: str) -> tuple[int, int] | None:
    """Read a leading H:MM and ignore whatever follows (seconds, suffixes)."""
    hour, sep, rest = text.strip().partition(":")
    minute = "".join(takewhile(str.isdigit, rest))
    if not sep or not minute:
        return None
    parsed = pd.to_datetime(f"{hour}:{minute}", format=TIME_FORMAT, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.hour, parsed.minute


def parse_timestamp(text: str) -> Timestamp:
    """
    Parse 'D/M/Y H:MM' (e.g. '1/01/2010 9:00'); text after the minutes is ignored.

    Never raises:
      - unparsable date (or no time part at all) -> sentinel 1/1/1900 00:00
      - parsable date with a bad time -> that date at 00:00
    """
    s = str(text).strip()
    date_part, sep, time_part = s.partition(" ")
    if not sep:
        logger.debug("No time part in %r; using sentinel timestamp", text)
        return Timestamp.sentinel()

    date = _parse_date(date_part)
    if date is None:
        logger.debug("Unparsable date in %r; using sentinel timestamp", text)
        return Timestamp.sentinel()

    year, month, day = date
    clock = _parse_time(time_part)
    if clock is None:
        logger.debug("Unparsable time in %r; keeping date at 00:00", text)
        return Timestamp(year, month, day)
    return Timestamp(year, month, day, *clock)
