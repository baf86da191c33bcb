"""
Volatility calculation utilities.
Pure functions for series dispersion, rolling volatility and a 0-100 stability score.
"""

import numpy as np
import math
from typing import Dict, List, Sequence, Any


# Daily samples annualized over a trading-year convention, applied uniformly
ANNUALIZATION_FACTOR = 252
DEFAULT_WINDOW = 7


def rolling_volatility(values: Sequence[float], window: int = DEFAULT_WINDOW) -> List[float]:
    """
    Population standard deviation over every full sliding window.

    Args:
        values: Series in chronological order
        window: Rolling window size

    Returns:
        One value per window ending at index window-1 .. n-1
        (empty when the series is shorter than the window)
    """
    if window < 1 or len(values) < window:
        return []

    arr = np.asarray(values, dtype=float)
    rolling_vols = []

    for i in range(window - 1, len(arr)):
        window_values = arr[i - window + 1:i + 1]
        rolling_vols.append(float(np.std(window_values)))

    return rolling_vols


def volatility_score(coefficient_of_variation: float) -> float:
    """Map CV onto 0-100 where 100 means no variation: clamp(100 - 200·CV)."""
    return max(0.0, min(100.0, 100 - coefficient_of_variation * 200))


def calculate_volatility(
    values: Sequence[float],
    window: int = DEFAULT_WINDOW,
    annualization_factor: int = ANNUALIZATION_FACTOR
) -> Dict[str, Any]:
    """
    Volatility metrics for a metric series.

    Formula: σ_annual = σ × √annualization_factor, CV = σ / |μ|

    Args:
        values: Series in chronological order
        window: Rolling window size (default 7)
        annualization_factor: Periods per year (default 252)

    Returns:
        Dictionary with standard_deviation, rolling_volatility,
        annualized_volatility, coefficient_of_variation and volatility_score.
        Fewer than 2 values yield zeros and an empty rolling list.
    """
    if len(values) < 2:
        return {
            'standard_deviation': 0.0,
            'rolling_volatility': [],
            'annualized_volatility': 0.0,
            'coefficient_of_variation': 0.0,
            'volatility_score': 0.0
        }

    arr = np.asarray(values, dtype=float)
    std_dev = float(np.std(arr))
    avg = float(np.mean(arr))

    coefficient_of_variation = 0.0 if avg == 0 else std_dev / abs(avg)

    return {
        'standard_deviation': std_dev,
        'rolling_volatility': rolling_volatility(arr, window),
        'annualized_volatility': std_dev * math.sqrt(annualization_factor),
        'coefficient_of_variation': coefficient_of_variation,
        'volatility_score': volatility_score(coefficient_of_variation)
    }
