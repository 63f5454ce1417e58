from __future__ import annotations
from typing import TypedDict, Literal, Optional, Dict
from dataclasses import dataclass

Measurement = Literal["wind_speed", "temperature", "solar_radiation"]
CorrelationKind = Literal["S_T", "S_R", "T_R"]
TraversalOrder = Literal["in", "pre", "post"]

# What the store does when an incoming key is already present
DuplicatePolicy = Literal["reject", "raise", "overwrite", "ignore"]
InsertOutcome = Literal["inserted", "replaced", "rejected"]


class SeriesStats(TypedDict):
    mean: float
    stdev: float
    mad: float


class IngestSummary(TypedDict):
    parsed: int  # rows turned into records
    skipped: int  # rows dropped before staging
    inserted: int
    replaced: int
    duplicates: int  # rejected by the store


CorrelationSet = Dict[CorrelationKind, float]


@dataclass
class WindSummary:
    year: int
    month: int
    mean: float
    stdev: float
    count: int


@dataclass
class TemperatureSummary:
    year: int
    month: int
    mean: Optional[float] = None
    stdev: Optional[float] = None
    mad: Optional[float] = None
    count: int = 0

    @property
    def has_data(self) -> bool:
        return self.count > 0
