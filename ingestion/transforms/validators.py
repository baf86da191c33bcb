"""
Core validators for canonical node rows.
Pure functions - no IO, network, or side effects.
"""

import math
from typing import Dict, Any


class ValidationError(ValueError):
    """Raised when data validation fails."""
    pass


REQUIRED_KEYS = {
    'id', 'performance_score', 'uptime', 'average_latency',
    'storage_utilization', 'capacity_bytes'
}

PERCENT_FIELDS = ['performance_score', 'uptime', 'storage_utilization']


def _check_number(field: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be numeric, got {type(value)}")

    if not math.isfinite(value):
        raise ValidationError(f"{field} must be finite, got {value}")


def validate_history_points(series: str, points: Any) -> None:
    """
    Validate one history series.

    Raises:
        ValidationError: If the series is not a list of {timestamp, value} points
    """
    if not isinstance(points, list):
        raise ValidationError(f"history.{series} must be a list, got {type(points)}")

    for i, point in enumerate(points):
        if not isinstance(point, dict):
            raise ValidationError(f"history.{series}[{i}] must be a dict")

        missing = {'timestamp', 'value'} - set(point.keys())
        if missing:
            raise ValidationError(f"history.{series}[{i}] missing keys: {missing}")

        if not isinstance(point['timestamp'], int) or isinstance(point['timestamp'], bool):
            raise ValidationError(
                f"history.{series}[{i}].timestamp must be integer, got {type(point['timestamp'])}"
            )

        _check_number(f"history.{series}[{i}].value", point['value'])


def validate_node_row(row: Dict[str, Any]) -> None:
    """
    Validate a canonical node row.

    Args:
        row: Dictionary containing node data

    Raises:
        ValidationError: If validation fails
    """
    # Check for missing keys
    missing = REQUIRED_KEYS - set(row.keys())
    if missing:
        raise ValidationError(f"Missing required keys: {missing}")

    if not isinstance(row['id'], str) or not row['id']:
        raise ValidationError(f"id must be a non-empty string, got {row['id']!r}")

    for field in REQUIRED_KEYS - {'id'}:
        _check_number(field, row[field])

    # Percentages must be 0-100
    for field in PERCENT_FIELDS:
        if not 0 <= row[field] <= 100:
            raise ValidationError(f"{field} must be between 0 and 100, got {row[field]}")

    if row['average_latency'] < 0:
        raise ValidationError(f"average_latency must be non-negative, got {row['average_latency']}")

    if row['capacity_bytes'] < 0:
        raise ValidationError(f"capacity_bytes must be non-negative, got {row['capacity_bytes']}")

    history = row.get('history')
    if history is not None:
        if not isinstance(history, dict):
            raise ValidationError(f"history must be a dict, got {type(history)}")
        for series, points in history.items():
            validate_history_points(series, points)
