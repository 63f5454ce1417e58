from __future__ import annotations

from dataclasses import dataclass, field

from . import canon
from .schema import RowLayout
from .types import DuplicatePolicy


@dataclass
class StoreConfig:
    # reject: keep existing, report "rejected" and log
    # raise: DuplicateRecordError
    # overwrite: replace payload in place
    # ignore: drop silently
    duplicate_policy: DuplicatePolicy = "reject"


@dataclass
class IngestConfig:
    layout: RowLayout = field(default_factory=RowLayout)
    missing_token: str = canon.MISSING_TOKEN
    # Shuffle staged records before insert so sorted input doesn't build a list-shaped tree
    shuffle: bool = True


@dataclass
class WeatherConfig:
    store: StoreConfig = field(default_factory=StoreConfig)
    ingest: IngestConfig = field(default_factory=IngestConfig)


def default_config() -> WeatherConfig:
    return WeatherConfig()
