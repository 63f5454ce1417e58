from __future__ import annotations
from typing import Dict, Iterator

from .. import canon, exceptions


class MonthIndex:
    """
    month (1-12) -> slot ids into an OrderedStore, in insertion order.

    Holds no records itself; resolve slots through the store that issued
    them. Append-only: the owner appends only when the store created a new
    node, so every slot here is live.
    """

    def __init__(self) -> None:
        self._buckets: Dict[int, list[int]] = {}

    @staticmethod
    def _check(month: int) -> None:
        exceptions.require(
            canon.valid_month(month),
            f"Month must be in 1..12, got {month}",
            exceptions.MonthIndexError,
        )

    def ensure_bucket(self, month: int) -> list[int]:
        self._check(month)
        return self._buckets.setdefault(month, [])

    def append(self, month: int, slot: int) -> None:
        self.ensure_bucket(month).append(slot)

    def bucket(self, month: int) -> list[int]:
        """Copy of the slots for month; empty when never seen."""
        self._check(month)
        return list(self._buckets.get(month, ()))

    def months(self) -> list[int]:
        return sorted(self._buckets)

    def counts(self) -> Dict[int, int]:
        return {m: len(self._buckets[m]) for m in self.months()}

    def __contains__(self, month: object) -> bool:
        return month in self._buckets

    def __len__(self) -> int:
        return sum(len(b) for b in self._buckets.values())

    def __iter__(self) -> Iterator[tuple[int, list[int]]]:
        for m in self.months():
            yield m, list(self._buckets[m])

    def copy(self) -> "MonthIndex":
        out = MonthIndex()
        out._buckets = {m: list(b) for m, b in self._buckets.items()}
        return out

    def clear(self) -> None:
        self._buckets = {}
