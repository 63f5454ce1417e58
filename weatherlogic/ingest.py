from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from . import canon, exceptions
from .collection import WeatherCollection
from .config import IngestConfig, WeatherConfig, default_config
from .core.record import Record
from .core.timestamp import parse_timestamp
from .schema import RowLayout
from .types import IngestSummary

logger = logging.getLogger(__name__)

Row = Sequence[str]
RandomSource = Optional[np.random.Generator | int]


def parse_measurement(token: str, missing: str = canon.MISSING_TOKEN) -> float:
    """Float value of a field; the missing-value token reads as 0.0."""
    s = str(token).strip()
    if s == missing:
        return 0.0
    try:
        return float(s)
    except ValueError as e:
        raise exceptions.IngestError(f"Bad measurement value {token!r}") from e


def parse_row(
    fields: Row,
    layout: Optional[RowLayout] = None,
    missing: str = canon.MISSING_TOKEN,
) -> Optional[Record]:
    """
    Build a Record from one tokenised row, or None if the row is unusable.

    Short rows and unparsable measurements are logged and skipped; a bad
    timestamp never skips a row (it degrades to the sentinel instead).
    """
    layout = layout or RowLayout()
    if len(fields) < layout.min_fields:
        logger.warning(
            "Skipping row with %d fields (need %d): %r",
            len(fields),
            layout.min_fields,
            list(fields)[:3],
        )
        return None
    try:
        return Record(
            timestamp=parse_timestamp(fields[layout.timestamp]),
            wind_speed=parse_measurement(fields[layout.wind_speed], missing),
            temperature=parse_measurement(fields[layout.temperature], missing),
            solar_radiation=parse_measurement(fields[layout.solar_radiation], missing),
        )
    except exceptions.IngestError as e:
        logger.warning("Skipping row at %r: %s", fields[layout.timestamp], e)
        return None


def stage_rows(
    rows: Iterable[Row], config: Optional[IngestConfig] = None
) -> tuple[list[Record], int]:
    """Parse rows into a staging list. Returns (records, skipped_count)."""
    cfg = config or IngestConfig()
    staged: list[Record] = []
    skipped = 0
    for fields in rows:
        rec = parse_row(fields, cfg.layout, cfg.missing_token)
        if rec is None:
            skipped += 1
        else:
            staged.append(rec)
    return staged, skipped


def shuffle(records: Sequence[Record], rng: RandomSource = None) -> list[Record]:
    """
    Uniformly permuted copy of the list.

    rng may be a numpy Generator or a seed; None draws fresh OS entropy, so
    the order differs from run to run.
    """
    gen = np.random.default_rng(rng)
    order = gen.permutation(len(records))
    return [records[int(i)] for i in order]


def insert_all(collection: WeatherCollection, records: Iterable[Record]) -> IngestSummary:
    summary: IngestSummary = {
        "parsed": 0,
        "skipped": 0,
        "inserted": 0,
        "replaced": 0,
        "duplicates": 0,
    }
    for rec in records:
        outcome = collection.add_record(rec)
        if outcome == "inserted":
            summary["inserted"] += 1
        elif outcome == "replaced":
            summary["replaced"] += 1
        else:
            summary["duplicates"] += 1
    return summary


def load_rows(
    collection: WeatherCollection,
    rows: Iterable[Row],
    *,
    config: Optional[IngestConfig] = None,
    rng: RandomSource = None,
) -> IngestSummary:
    """Stage, shuffle, then insert every parsed row into collection."""
    cfg = config or IngestConfig()
    staged, skipped = stage_rows(rows, cfg)
    if not staged:
        logger.warning("No valid records were parsed (%d rows skipped)", skipped)
        return {
            "parsed": 0,
            "skipped": skipped,
            "inserted": 0,
            "replaced": 0,
            "duplicates": 0,
        }

    logger.info("Parsed %d records (%d rows skipped)", len(staged), skipped)
    if cfg.shuffle:
        logger.debug("Shuffling %d records before insert", len(staged))
        staged = shuffle(staged, rng)

    summary = insert_all(collection, staged)
    summary["parsed"] = len(staged)
    summary["skipped"] = skipped
    logger.info(
        "Load complete: %d inserted, %d duplicates; collection holds %d records",
        summary["inserted"],
        summary["duplicates"],
        collection.total_records(),
    )
    return summary


def _trim(row: Sequence[str]) -> list[str]:
    # pandas pads every line out to MAX_CSV_FIELDS; drop the padding
    out = list(row)
    while out and (pd.isna(out[-1]) or out[-1] == ""):
        out.pop()
    return [str(v) for v in out]


def read_csv_rows(path: str | Path) -> list[list[str]]:
    """
    Read an observation CSV (header line skipped) as rows of raw strings.

    Rows keep their own width whatever the header says; lines wider than
    canon.MAX_CSV_FIELDS are logged and skipped.

    Raises SourceError when the file cannot be opened or parsed.
    """

    def _bad_line(line: list[str]) -> None:
        logger.warning("Skipping malformed line in %s: %r", path, line[:3])
        return None

    try:
        df = pd.read_csv(
            path,
            header=None,
            skiprows=1,
            names=list(range(canon.MAX_CSV_FIELDS)),
            index_col=False,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_bad_line,
        )
    except pd.errors.EmptyDataError:
        logger.warning("Empty CSV file: %s", path)
        return []
    except (OSError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise exceptions.SourceError(f"Failed to read CSV file {path}: {e}") from e

    return [_trim(row) for row in df.itertuples(index=False, name=None)]


def load_csv(
    collection: WeatherCollection,
    path: str | Path,
    *,
    config: Optional[IngestConfig] = None,
    rng: RandomSource = None,
) -> IngestSummary:
    return load_rows(collection, read_csv_rows(path), config=config, rng=rng)


def read_file_list(list_path: str | Path) -> list[str]:
    """CSV names from a list file: one per line, CR stripped, blanks ignored."""
    try:
        text = Path(list_path).read_text()
    except OSError as e:
        raise exceptions.SourceError(f"Failed to open file list {list_path}: {e}") from e
    names = [line.replace("\r", "").strip() for line in text.splitlines()]
    return [n for n in names if n]


def load_file_list(
    collection: WeatherCollection,
    list_path: str | Path,
    *,
    data_dir: Optional[str | Path] = None,
    config: Optional[IngestConfig] = None,
    rng: RandomSource = None,
) -> IngestSummary:
    """
    Load every CSV named in list_path into collection.

    Relative names resolve against data_dir (default: the list file's own
    directory). Unreadable CSVs are logged and skipped. Rows from all files
    are shuffled together before the first insert.
    """
    base = Path(data_dir) if data_dir is not None else Path(list_path).parent
    rows: list[list[str]] = []
    for name in read_file_list(list_path):
        csv_path = base / name
        try:
            rows.extend(read_csv_rows(csv_path))
        except exceptions.SourceError as e:
            logger.error("%s", e)
            continue
        logger.debug("Read %s", csv_path)
    return load_rows(collection, rows, config=config, rng=rng)


def from_rows(
    rows: Iterable[Row],
    *,
    config: Optional[WeatherConfig] = None,
    rng: RandomSource = None,
) -> WeatherCollection:
    """New collection filled from rows."""
    cfg = config or default_config()
    collection = WeatherCollection(cfg.store)
    load_rows(collection, rows, config=cfg.ingest, rng=rng)
    return collection


def from_file_list(
    list_path: str | Path,
    *,
    data_dir: Optional[str | Path] = None,
    config: Optional[WeatherConfig] = None,
    rng: RandomSource = None,
) -> WeatherCollection:
    cfg = config or default_config()
    collection = WeatherCollection(cfg.store)
    load_file_list(collection, list_path, data_dir=data_dir, config=cfg.ingest, rng=rng)
    return collection
