"""Core data structures: timestamps, records, the ordered store and its month index."""

from . import index, record, store, timestamp
from .index import MonthIndex
from .record import Record
from .store import OrderedStore
from .timestamp import Timestamp, parse_timestamp

__all__ = [
    "index",
    "record",
    "store",
    "timestamp",
    "MonthIndex",
    "OrderedStore",
    "Record",
    "Timestamp",
    "parse_timestamp",
]
