"""
Risk-adjusted performance utilities.
Pure functions for the Sharpe-like ratio and the consistency score.
"""

import math
from typing import Dict, Sequence, Any

from analytics.calculations.basic_stats import mean, standard_deviation
from analytics.calculations.volatility import calculate_volatility
from analytics.labelers import classify_sharpe_ratio


# Ratio reported for a zero-variance series with positive excess return
ZERO_VARIANCE_SHARPE = 10.0


def sharpe_percentile(ratio: float) -> float:
    """Map a ratio onto 0-100 with a tanh curve centred on a ratio of 1."""
    return max(0.0, min(100.0, 50 + 25 * math.tanh(ratio - 1)))


def calculate_sharpe_ratio(
    values: Sequence[float],
    risk_free_rate: float = 0.0,
    zero_variance_ratio: float = ZERO_VARIANCE_SHARPE
) -> Dict[str, Any]:
    """
    Sharpe-like ratio of a metric series.

    Formula: (mean - risk_free_rate) / sample standard deviation

    Args:
        values: Series in chronological order
        risk_free_rate: Baseline subtracted from the mean
        zero_variance_ratio: Ratio used when the series has no variance and a
            positive excess; a non-positive excess gives 0

    Returns:
        {'ratio', 'interpretation', 'percentile_rank'}; fewer than 2 values
        give ratio 0, 'poor', percentile 0
    """
    if len(values) < 2:
        return {'ratio': 0.0, 'interpretation': 'poor', 'percentile_rank': 0.0}

    excess_return = mean(values) - risk_free_rate
    std_dev = standard_deviation(values)

    if std_dev == 0:
        ratio = zero_variance_ratio if excess_return > 0 else 0.0
    else:
        ratio = excess_return / std_dev

    return {
        'ratio': ratio,
        'interpretation': classify_sharpe_ratio(ratio),
        'percentile_rank': sharpe_percentile(ratio)
    }


def consistency_score(values: Sequence[float]) -> float:
    """
    Consistency as the normalized inverse of the coefficient of variation.

    Formula: 100 × (1 - min(2·CV, 1)); a CV of 0.5 or more scores 0.

    Returns:
        Score in [0, 100]; 100 for fewer than 2 values
    """
    if len(values) < 2:
        return 100.0

    cv = calculate_volatility(values)['coefficient_of_variation']
    return max(0.0, min(100.0, 100 * (1 - min(cv * 2, 1))))
