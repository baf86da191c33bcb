"""
Trend forecasting.
Extrapolates a metric history with its index regression and attaches
prediction intervals.
"""

import time
from typing import Dict, Optional, Sequence, Tuple, Any

from analytics.calculations.regression import linear_regression, predict_with_confidence
from analytics.calculations.trend import analyze_trend, TREND_SLOPE_THRESHOLD


DAY_MS = 24 * 60 * 60 * 1000
PERCENT_RANGE = (0.0, 100.0)


def _clamp(value: float, bounds: Optional[Tuple[float, float]]) -> float:
    if bounds is None:
        return value
    low, high = bounds
    return max(low, min(high, value))


def forecast_confidence(significant: bool, r_squared: float) -> float:
    """Overall confidence: up to 0.95 for significant trends, 0.7 otherwise."""
    if significant:
        return min(0.95, 0.5 + r_squared * 0.45)
    return min(0.7, 0.3 + r_squared * 0.4)


def generate_trend_forecast(
    history: Sequence[Dict[str, Any]],
    days_ahead: int,
    metric_name: str = 'performance',
    confidence_level: float = 0.95,
    clamp_range: Optional[Tuple[float, float]] = PERCENT_RANGE,
    slope_threshold: float = TREND_SLOPE_THRESHOLD
) -> Dict[str, Any]:
    """
    Forecast a metric `days_ahead` steps past its last observation.

    The history is regressed on its index 0..n-1 and every future index is
    predicted with a prediction interval. Predicted value and bounds are
    clamped to `clamp_range`, which suits percentage metrics; pass None for
    unbounded metrics.

    Args:
        history: TimeSeriesPoint list in chronological order
        days_ahead: Number of daily steps to forecast
        metric_name: Label carried into the result
        confidence_level: Interval coverage
        clamp_range: (low, high) bounds or None
        slope_threshold: Minimum |slope| for a directional trend call

    Returns:
        TrendForecast dictionary
    """
    values = [float(point['value']) for point in history]

    trend = analyze_trend(values, slope_threshold=slope_threshold)

    x = list(range(len(values)))
    regression = linear_regression(x, values, confidence_level)

    if history:
        last_timestamp = int(history[-1]['timestamp'])
    else:
        last_timestamp = int(time.time() * 1000)

    predictions = []
    for step in range(1, days_ahead + 1):
        pred = predict_with_confidence(regression, len(values) - 1 + step, x, confidence_level)
        predictions.append({
            'timestamp': last_timestamp + step * DAY_MS,
            'value': _clamp(pred['predicted'], clamp_range),
            'lower': _clamp(pred['lower'], clamp_range),
            'upper': _clamp(pred['upper'], clamp_range),
            'confidence': confidence_level
        })

    current_value = values[-1] if values else 0.0
    final_value = predictions[-1]['value'] if predictions else current_value
    expected_change = 0.0 if current_value == 0 else (final_value - current_value) / current_value * 100

    return {
        'metric': metric_name,
        'current_value': current_value,
        'trend': trend,
        'predictions': predictions,
        'expected_change': expected_change,
        'confidence': forecast_confidence(trend['significance'], regression['r_squared'])
    }
