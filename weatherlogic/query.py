from __future__ import annotations
from typing import Callable, Iterable

import pandas as pd

from . import canon
from .core.index import MonthIndex
from .core.record import Record
from .core.store import OrderedStore
from .types import Measurement

Predicate = Callable[[Record], bool]


def select(store: OrderedStore[Record], predicate: Predicate) -> list[Record]:
    """
    In-order filter over the whole store.

    Matches are appended as detached copies, so the result can be kept or
    dropped without touching the store.
    """

    def collect(rec: Record, out: list[Record]) -> None:
        if predicate(rec):
            out.append(rec.copy())

    return store.accumulate(collect, [])


def by_month(store: OrderedStore[Record], month: int) -> list[Record]:
    """Every record in month across all years; [] for a month outside 1..12."""
    if not canon.valid_month(month):
        return []
    return select(store, lambda r: r.timestamp.month == month)


def by_year_month(store: OrderedStore[Record], year: int, month: int) -> list[Record]:
    """Records for one month of one year; [] when year < 1 or month outside 1..12."""
    if year < 1 or not canon.valid_month(month):
        return []
    return select(
        store, lambda r: r.timestamp.year == year and r.timestamp.month == month
    )


def by_index(store: OrderedStore[Record], index: MonthIndex, month: int) -> list[Record]:
    """Month lookup through the index. Insertion order, not chronological."""
    if not canon.valid_month(month):
        return []
    return [store.get(slot).copy() for slot in index.bucket(month)]


def column(records: Iterable[Record], field: Measurement) -> list[float]:
    if field not in canon.MEASUREMENTS:
        raise ValueError(f"Unknown measurement {field!r}; expected one of {canon.MEASUREMENTS}")
    return [float(getattr(r, field)) for r in records]


def to_frame(records: Iterable[Record]) -> pd.DataFrame:
    """
    Tabular view of records:
      - index: naive DatetimeIndex named 'timestamp'
      - columns: wind_speed, temperature, solar_radiation
    """
    rows = list(records)
    idx = pd.DatetimeIndex(
        [r.timestamp.to_datetime() for r in rows], name="timestamp"
    )
    return pd.DataFrame(
        {m: column(rows, m) for m in canon.MEASUREMENTS},  # type: ignore[arg-type]
        index=idx,
        columns=list(canon.MEASUREMENTS),
        dtype=float,
    )
