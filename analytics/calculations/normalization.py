"""
Normalization and scoring utilities.
Pure functions for z-scores, min-max scaling and percentile ranks.
"""

from typing import List, Sequence

from analytics.calculations.basic_stats import mean, standard_deviation, minimum, maximum


def z_score(value: float, data_mean: float, data_std: float) -> float:
    """Standard deviations between value and data_mean (0 when data_std is 0)."""
    if data_std == 0:
        return 0.0
    return (value - data_mean) / data_std


def z_score_normalize(values: Sequence[float]) -> List[float]:
    """Convert every value to its z-score against the series itself."""
    avg = mean(values)
    std = standard_deviation(values)
    return [z_score(v, avg, std) for v in values]


def min_max_normalize(
    values: Sequence[float],
    target_min: float = 0.0,
    target_max: float = 100.0
) -> List[float]:
    """
    Rescale values linearly onto [target_min, target_max].

    A constant series maps every value to the midpoint of the target range.
    """
    data_min = minimum(values)
    data_max = maximum(values)
    value_range = data_max - data_min

    if value_range == 0:
        midpoint = (target_min + target_max) / 2
        return [midpoint for _ in values]

    scale = target_max - target_min
    return [(v - data_min) / value_range * scale + target_min for v in values]


def percentile_rank(value: float, values: Sequence[float]) -> float:
    """
    Percentage of the reference population strictly below value.

    Args:
        value: Value to rank
        values: Reference population

    Returns:
        Rank in [0, 100]; 50 for an empty population
    """
    if len(values) == 0:
        return 50.0
    below = sum(1 for v in values if v < value)
    return below / len(values) * 100
