"""
Accessors for canonical node rows.
Reads scalar metrics and history series without mutating the row.
"""

from typing import Dict, List, Any


class UnknownMetricError(ValueError):
    """Raised when a metric name is not a known node metric."""
    pass


BYTES_PER_TB = 1e12

# Canonical metric name -> accepted aliases
METRIC_ALIASES = {
    'performance': ('performance', 'performance_score', 'performanceScore'),
    'uptime': ('uptime',),
    'latency': ('latency', 'average_latency', 'averageLatency'),
    'storage_utilization': ('storage_utilization', 'storageUtilization', 'utilization'),
    'capacity': ('capacity', 'capacity_tb', 'capacity_bytes', 'capacityBytes'),
}

NETWORK_METRICS = list(METRIC_ALIASES.keys())


def canonical_metric(metric: str) -> str:
    """
    Resolve a metric name or alias to its canonical name.

    Raises:
        UnknownMetricError: If the name matches no metric
    """
    for canonical, aliases in METRIC_ALIASES.items():
        if metric in aliases:
            return canonical
    raise UnknownMetricError(
        f"Unknown metric: {metric}. Supported metrics: {', '.join(NETWORK_METRICS)}"
    )


def metric_value(node: Dict[str, Any], metric: str) -> float:
    """
    Current value of a metric for a node.

    Capacity is reported in terabytes.
    """
    name = canonical_metric(metric)

    if name == 'performance':
        return float(node['performance_score'])
    if name == 'uptime':
        return float(node['uptime'])
    if name == 'latency':
        return float(node['average_latency'])
    if name == 'storage_utilization':
        return float(node['storage_utilization'])
    return float(node['capacity_bytes']) / BYTES_PER_TB


def history_points(node: Dict[str, Any], series: str = 'performance_scores') -> List[Dict[str, Any]]:
    """TimeSeriesPoint list for a named history series (empty if absent)."""
    history = node.get('history') or {}
    return list(history.get(series) or [])


def history_values(node: Dict[str, Any], series: str = 'performance_scores') -> List[float]:
    """Values of a named history series in stored order."""
    return [float(point['value']) for point in history_points(node, series)]
