from __future__ import annotations
from typing import Sequence

import numpy as np

from . import canon
from .types import SeriesStats

Values = Sequence[float] | np.ndarray


def _arr(xs: Values) -> np.ndarray:
    return np.asarray(xs, dtype=float)


def mean(xs: Values) -> float:
    a = _arr(xs)
    if a.size == 0:
        return 0.0
    return float(a.sum() / a.size)


def sample_stdev(xs: Values) -> float:
    """Standard deviation with Bessel's correction (n - 1); 0.0 when n < 2."""
    a = _arr(xs)
    n = a.size
    if n < 2:
        return 0.0
    dev = a - mean(a)
    return float(np.sqrt((dev * dev).sum() / (n - 1)))


def mean_absolute_deviation(xs: Values) -> float:
    a = _arr(xs)
    if a.size == 0:
        return 0.0
    return float(np.abs(a - mean(a)).sum() / a.size)


def total(xs: Values) -> float:
    a = _arr(xs)
    return float(a.sum()) if a.size else 0.0


def pearson(xs: Values, ys: Values) -> float:
    """
    Sample Pearson correlation via the sum formula.

    0.0 when lengths differ, n < 2, or the denominator is ~0 (e.g. a
    constant series).
    """
    x = _arr(xs)
    y = _arr(ys)
    n = x.size
    if n != y.size or n < 2:
        return 0.0

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_x2 = (x * x).sum()
    sum_y2 = (y * y).sum()

    numerator = n * sum_xy - sum_x * sum_y
    radicand = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    # rounding can push a zero variance product slightly negative
    denominator = float(np.sqrt(radicand)) if radicand > 0 else 0.0
    if abs(denominator) < canon.PEARSON_EPSILON:
        return 0.0
    return float(numerator / denominator)


def describe(xs: Values) -> SeriesStats:
    return {
        "mean": mean(xs),
        "stdev": sample_stdev(xs),
        "mad": mean_absolute_deviation(xs),
    }
