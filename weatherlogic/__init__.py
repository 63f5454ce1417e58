from . import (
    canon,
    exceptions,
    types,
    config,
    schema,
    core,
    stats,
    query,
    collection,
    ingest,
    report,
)
from .collection import WeatherCollection
from .core import MonthIndex, OrderedStore, Record, Timestamp, parse_timestamp

__all__ = [
    "canon",
    "exceptions",
    "types",
    "config",
    "schema",
    "core",
    "stats",
    "query",
    "collection",
    "ingest",
    "report",
    "MonthIndex",
    "OrderedStore",
    "Record",
    "Timestamp",
    "WeatherCollection",
    "parse_timestamp",
]
