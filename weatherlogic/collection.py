from __future__ import annotations
import logging
from typing import Optional

from . import canon, query, stats
from .config import StoreConfig
from .core.index import MonthIndex
from .core.record import Record
from .core.store import OrderedStore
from .types import (
    CorrelationKind,
    CorrelationSet,
    DuplicatePolicy,
    InsertOutcome,
    TemperatureSummary,
    WindSummary,
)

logger = logging.getLogger(__name__)


class WeatherCollection:
    """
    The record store plus its month index, kept in step.

    The store is the only owner of records. The index holds slot ids that
    the store handed back from an insert that created a node; rejected or
    replaced inserts leave the index alone.
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        *,
        duplicate_policy: Optional[DuplicatePolicy] = None,
    ) -> None:
        cfg = config or StoreConfig()
        policy = duplicate_policy or cfg.duplicate_policy
        self.store: OrderedStore[Record] = OrderedStore(policy)
        self.index = MonthIndex()

    def add_record(self, record: Record) -> InsertOutcome:
        outcome, slot = self.store.insert_slot(record)
        if outcome == "inserted" and slot is not None:
            self.index.append(record.timestamp.month, slot)
        return outcome

    def total_records(self) -> int:
        return self.store.size()

    def __len__(self) -> int:
        return self.total_records()

    def records(self) -> list[Record]:
        """All records, oldest first, as copies."""
        return [r.copy() for r in self.store]

    def month_records(self, month: int) -> list[Record]:
        return query.by_index(self.store, self.index, month)

    def data_for_month(self, month: int) -> list[Record]:
        return query.by_month(self.store, month)

    def data_for_year_month(self, year: int, month: int) -> list[Record]:
        return query.by_year_month(self.store, year, month)

    # -- derived statistics ---------------------------------------------

    def correlation(self, year: int, month: int, kind: CorrelationKind | str) -> float:
        """
        Pearson correlation between two measurements for a month.

        year == 0 pools that month across every year. Invalid month, unknown
        kind or no data all give 0.0.
        """
        if not canon.valid_month(month):
            logger.warning("Correlation requested for invalid month %s", month)
            return 0.0
        pair = canon.CORRELATION_PAIRS.get(kind)
        if pair is None:
            logger.warning("Invalid correlation type: %s", kind)
            return 0.0

        if year == canon.ALL_YEARS:
            records = self.data_for_month(month)
        else:
            records = self.data_for_year_month(year, month)
        if not records:
            logger.info("No data for %s/%s", month, year)
            return 0.0

        x_field, y_field = pair
        return stats.pearson(
            query.column(records, x_field),  # type: ignore[arg-type]
            query.column(records, y_field),  # type: ignore[arg-type]
        )

    def correlations(self, year: int, month: int) -> CorrelationSet:
        return {kind: self.correlation(year, month, kind) for kind in canon.CORRELATION_PAIRS}  # type: ignore[misc]

    def average_wind_speed(self, year: int, month: int) -> Optional[WindSummary]:
        records = self.data_for_year_month(year, month)
        if not records:
            return None
        winds = query.column(records, "wind_speed")
        return WindSummary(
            year=year,
            month=month,
            mean=stats.mean(winds),
            stdev=stats.sample_stdev(winds),
            count=len(winds),
        )

    def monthly_temperatures(self, year: int) -> list[TemperatureSummary]:
        out: list[TemperatureSummary] = []
        for month in range(1, 13):
            records = self.data_for_year_month(year, month)
            if not records:
                out.append(TemperatureSummary(year=year, month=month))
                continue
            temps = query.column(records, "temperature")
            d = stats.describe(temps)
            out.append(
                TemperatureSummary(
                    year=year,
                    month=month,
                    mean=d["mean"],
                    stdev=d["stdev"],
                    mad=d["mad"],
                    count=len(temps),
                )
            )
        return out

    # -- copying ---------------------------------------------------------

    def copy(self) -> "WeatherCollection":
        """Independent collection; slot ids survive the store copy, so the index copies as-is."""
        out = WeatherCollection(duplicate_policy=self.store.duplicate_policy)
        out.store = self.store.copy()
        out.index = self.index.copy()
        return out

    def __repr__(self) -> str:
        return (
            f"WeatherCollection(records={self.total_records()}, "
            f"height={self.store.height()}, months={self.index.months()})"
        )
