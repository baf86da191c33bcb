"""
Normalizers for transforming provider data to canonical shape.
Pure functions - no IO, network, or side effects.
Minimal normalization - only when necessary.
"""

import math
from typing import Dict, Any, List, Optional


class NormalizationError(Exception):
    """Raised when a provider record cannot be mapped to a node row."""
    pass


# Canonical history series -> provider field name
HISTORY_FIELDS = {
    'performance_scores': 'performanceScores',
    'storage_utilization': 'storageUtilization',
    'uptime_history': 'uptimeHistory',
}


def _to_float(value: Any) -> Optional[float]:
    """Finite float or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _first(raw: Dict[str, Any], *paths: str) -> Any:
    """First present value among dotted paths, e.g. 'performance.uptime'."""
    for path in paths:
        current: Any = raw
        for part in path.split('.'):
            if not isinstance(current, dict) or part not in current:
                current = None
                break
            current = current[part]
        if current is not None:
            return current
    return None


def normalize_history_points(raw_points: Optional[List[Any]]) -> List[Dict[str, Any]]:
    """
    Coerce provider history points to {'timestamp': int, 'value': float}.

    Points with a missing timestamp or a missing or non-finite value are
    dropped. Order is preserved.
    """
    if not raw_points:
        return []

    points = []
    for raw in raw_points:
        if not isinstance(raw, dict):
            continue
        timestamp = _to_float(raw.get('timestamp'))
        value = _to_float(raw.get('value'))
        if timestamp is None or value is None:
            continue
        points.append({'timestamp': int(timestamp), 'value': value})

    return points


def normalize_node(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Transform one provider pNode record to a canonical node row.

    Field mapping:
    - performanceScore -> performance_score
    - performance.uptime -> uptime
    - performance.averageLatency -> average_latency
    - storage.utilization -> storage_utilization
    - storage.capacityBytes -> capacity_bytes
    - history.{performanceScores,storageUtilization,uptimeHistory} -> history

    Already-canonical keys are accepted as well.

    Raises:
        NormalizationError: If the record has no id
    """
    node_id = raw.get('id')
    if node_id is None or node_id == '':
        raise NormalizationError("pNode record is missing 'id'")

    canonical = {
        'id': str(node_id),
        'performance_score': _to_float(_first(raw, 'performance_score', 'performanceScore')),
        'uptime': _to_float(_first(raw, 'uptime', 'performance.uptime')),
        'average_latency': _to_float(_first(raw, 'average_latency', 'performance.averageLatency')),
        'storage_utilization': _to_float(_first(raw, 'storage_utilization', 'storage.utilization')),
        'capacity_bytes': _to_float(_first(raw, 'capacity_bytes', 'storage.capacityBytes')),
    }

    raw_history = raw.get('history')
    if isinstance(raw_history, dict):
        canonical['history'] = {
            series: normalize_history_points(
                raw_history.get(series, raw_history.get(provider_field))
            )
            for series, provider_field in HISTORY_FIELDS.items()
        }

    return canonical


def normalize_nodes(raw_rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Transform provider pNode records to canonical node rows.

    Deduplication by id (keep last to handle re-exported records), in the
    order each id was first seen.
    """
    if not raw_rows:
        return []

    seen_ids: Dict[str, Dict[str, Any]] = {}
    for raw in raw_rows:
        canonical = normalize_node(raw)
        seen_ids[canonical['id']] = canonical

    return list(seen_ids.values())
