"""
Regression engine.
Ordinary least squares with R², standard errors, slope significance and
prediction intervals.
"""

import math
import numpy as np
from typing import Dict, List, Sequence, Any

from analytics.calculations.basic_stats import mean
from analytics.calculations.distributions import t_distribution_p_value, t_critical_value


DEFAULT_CONFIDENCE_LEVEL = 0.95


def linear_regression(
    x: Sequence[float],
    y: Sequence[float],
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL
) -> Dict[str, Any]:
    """
    Simple linear regression y = slope * x + intercept.

    Confidence bounds per observed point:
        ŷ ± t* · SE · √(1/n + (xᵢ - x̄)² / Σ(x - x̄)²)
    with t* = t_critical_value(1 - confidence_level, n - 2).

    Args:
        x: Independent variable
        y: Dependent variable
        confidence_level: Interval coverage (default 0.95)

    Returns:
        RegressionResult dictionary. With fewer than 3 points: slope 0,
        intercept mean(y), R² 0, p-value 1 and zero-width bounds. An exact
        fit reports t-statistic 0 with p-value 0 for a non-zero slope, so
        every number in the result is finite.
    """
    n = min(len(x), len(y))

    if n < 3:
        observed = [float(v) for v in y[:n]]
        return {
            'slope': 0.0,
            'intercept': mean(y),
            'r_squared': 0.0,
            'standard_error': 0.0,
            'slope_standard_error': 0.0,
            't_statistic': 0.0,
            'p_value': 1.0,
            'confidence_interval': {
                'lower': list(observed),
                'upper': list(observed),
                'level': confidence_level
            },
            'predictions': observed,
            'residuals': [0.0] * n
        }

    x_arr = np.asarray(x[:n], dtype=float)
    y_arr = np.asarray(y[:n], dtype=float)

    x_mean = float(x_arr.mean())
    y_mean = float(y_arr.mean())

    x_diff = x_arr - x_mean
    sxx = float(np.sum(x_diff ** 2))
    sxy = float(np.sum(x_diff * (y_arr - y_mean)))

    slope = 0.0 if sxx == 0 else sxy / sxx
    intercept = y_mean - slope * x_mean

    predictions = slope * x_arr + intercept
    residuals = y_arr - predictions

    ss_res = float(np.sum(residuals ** 2))
    ss_tot = float(np.sum((y_arr - y_mean) ** 2))
    r_squared = 0.0 if ss_tot == 0 else 1 - ss_res / ss_tot
    r_squared = max(0.0, min(1.0, r_squared))

    standard_error = math.sqrt(ss_res / (n - 2))
    slope_standard_error = 0.0 if sxx == 0 else standard_error / math.sqrt(sxx)

    if slope_standard_error == 0:
        # Exact fit: t is 0 and p follows the slope
        t_statistic = 0.0
        p_value = 1.0 if slope == 0 else 0.0
    else:
        t_statistic = slope / slope_standard_error
        p_value = t_distribution_p_value(abs(t_statistic), n - 2)

    t_crit = t_critical_value(1 - confidence_level, n - 2)
    lower: List[float] = []
    upper: List[float] = []

    for xi, pred in zip(x_arr, predictions):
        leverage = 1 / n + ((xi - x_mean) ** 2 / sxx if sxx > 0 else 0.0)
        margin = t_crit * standard_error * math.sqrt(leverage)
        lower.append(float(pred - margin))
        upper.append(float(pred + margin))

    return {
        'slope': float(slope),
        'intercept': float(intercept),
        'r_squared': r_squared,
        'standard_error': standard_error,
        'slope_standard_error': slope_standard_error,
        't_statistic': t_statistic,
        'p_value': p_value,
        'confidence_interval': {
            'lower': lower,
            'upper': upper,
            'level': confidence_level
        },
        'predictions': [float(p) for p in predictions],
        'residuals': [float(r) for r in residuals]
    }


def predict_with_confidence(
    regression: Dict[str, Any],
    x_value: float,
    x_data: Sequence[float],
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL
) -> Dict[str, float]:
    """
    Predict y at x_value with an interval from the fitted regression.

    Args:
        regression: Result of linear_regression
        x_value: Point to predict (may lie outside x_data)
        x_data: Independent values the regression was fitted on
        confidence_level: Interval coverage

    Returns:
        {'predicted', 'lower', 'upper'}; zero-width when the fit is degenerate
    """
    predicted = regression['slope'] * x_value + regression['intercept']

    n = len(x_data)
    x_mean = mean(x_data)
    sxx = sum((xi - x_mean) ** 2 for xi in x_data)

    if n < 3 or sxx == 0:
        return {'predicted': predicted, 'lower': predicted, 'upper': predicted}

    t_crit = t_critical_value(1 - confidence_level, n - 2)
    leverage = 1 / n + (x_value - x_mean) ** 2 / sxx
    margin = t_crit * regression['standard_error'] * math.sqrt(leverage)

    return {
        'predicted': predicted,
        'lower': predicted - margin,
        'upper': predicted + margin
    }
