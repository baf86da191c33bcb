"""
Basic statistics primitives.
Pure functions over numeric sequences; empty input yields 0 rather than raising.
"""

import numpy as np
from typing import Sequence


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean (0 for empty input)."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))


def variance(values: Sequence[float], sample: bool = True) -> float:
    """
    Variance of a series.

    Args:
        values: Numeric series
        sample: Divide by n-1 (sample) when True, by n (population) otherwise

    Returns:
        Variance, or 0 when fewer than 2 values
    """
    if len(values) < 2:
        return 0.0
    ddof = 1 if sample else 0
    return float(np.var(np.asarray(values, dtype=float), ddof=ddof))


def standard_deviation(values: Sequence[float], sample: bool = True) -> float:
    """Square root of variance(values, sample)."""
    return float(np.sqrt(variance(values, sample)))


def median(values: Sequence[float]) -> float:
    """Median; averages the two middle values for even-length input."""
    if len(values) == 0:
        return 0.0
    return float(np.median(np.asarray(values, dtype=float)))


def percentile(values: Sequence[float], p: float) -> float:
    """
    Percentile with linear interpolation between order statistics.

    Index into the sorted series is (p / 100) * (n - 1).

    Args:
        values: Numeric series
        p: Percentile in [0, 100]

    Returns:
        Interpolated value (0 for empty input)
    """
    if len(values) == 0:
        return 0.0
    return float(np.percentile(np.asarray(values, dtype=float), p))


def total(values: Sequence[float]) -> float:
    """Sum of values."""
    return float(np.sum(np.asarray(values, dtype=float))) if len(values) else 0.0


def minimum(values: Sequence[float]) -> float:
    """Smallest value (0 for empty input)."""
    return float(np.min(values)) if len(values) else 0.0


def maximum(values: Sequence[float]) -> float:
    """Largest value (0 for empty input)."""
    return float(np.max(values)) if len(values) else 0.0
