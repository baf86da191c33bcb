"""
Trend utilities.
Pure functions for regression-based trend detection and moving averages.
"""

from typing import Dict, List, Sequence, Any

from analytics.calculations.basic_stats import mean
from analytics.calculations.regression import linear_regression


# Minimum |slope| per step to call a direction; scale-independent tuning knob
TREND_SLOPE_THRESHOLD = 0.1
TREND_P_THRESHOLD = 0.1
SIGNIFICANCE_LEVEL = 0.05


def analyze_trend(
    values: Sequence[float],
    slope_threshold: float = TREND_SLOPE_THRESHOLD,
    p_threshold: float = TREND_P_THRESHOLD
) -> Dict[str, Any]:
    """
    Detect trend direction and strength by regressing values on their index.

    Direction is 'up' when slope > slope_threshold and p < p_threshold,
    'down' when slope < -slope_threshold and p < p_threshold, else 'neutral'.

    Args:
        values: Series in chronological order
        slope_threshold: Minimum |slope| for a directional call
        p_threshold: Maximum slope p-value for a directional call

    Returns:
        TrendAnalysis dictionary: direction, strength (R² × 100), momentum
        (slope), significance (p < 0.05), r_squared, p_value
    """
    if len(values) < 3:
        return {
            'direction': 'neutral',
            'strength': 0.0,
            'momentum': 0.0,
            'significance': False,
            'r_squared': 0.0,
            'p_value': 1.0
        }

    x = list(range(len(values)))
    regression = linear_regression(x, values)

    slope = regression['slope']
    p_value = regression['p_value']

    direction = 'neutral'
    if slope > slope_threshold and p_value < p_threshold:
        direction = 'up'
    elif slope < -slope_threshold and p_value < p_threshold:
        direction = 'down'

    return {
        'direction': direction,
        'strength': regression['r_squared'] * 100,
        'momentum': slope,
        'significance': p_value < SIGNIFICANCE_LEVEL,
        'r_squared': regression['r_squared'],
        'p_value': p_value
    }


def simple_moving_average(values: Sequence[float], period: int) -> List[float]:
    """Mean of each full window of `period` values (empty if too short)."""
    if period < 1 or len(values) < period:
        return []
    return [mean(values[i - period + 1:i + 1]) for i in range(period - 1, len(values))]


def exponential_moving_average(values: Sequence[float], period: int) -> List[float]:
    """
    Exponential moving average seeded with the first value.

    Formula: EMA_t = (v_t - EMA_{t-1}) × 2/(period+1) + EMA_{t-1}
    """
    if len(values) == 0:
        return []

    multiplier = 2 / (period + 1)
    result = [float(values[0])]

    for value in values[1:]:
        result.append((value - result[-1]) * multiplier + result[-1])

    return result


def weighted_moving_average(values: Sequence[float], period: int) -> List[float]:
    """Linearly weighted moving average; the newest value in a window weighs `period`."""
    if period < 1 or len(values) < period:
        return []

    weight_sum = period * (period + 1) / 2
    result = []

    for i in range(period - 1, len(values)):
        window = values[i - period + 1:i + 1]
        weighted = sum(v * (j + 1) for j, v in enumerate(window))
        result.append(weighted / weight_sum)

    return result
