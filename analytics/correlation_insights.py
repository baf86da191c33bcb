"""
Correlation insights across the network.
Correlation matrix over node metrics with interpretations and recommendations.
"""

import pandas as pd
from typing import Dict, List, Optional, Sequence, Any

from analytics.calculations.correlation import (
    correlation_matrix,
    matrix_pairs,
    pearson_correlation,
    top_correlated_pairs
)
from analytics.labelers import interpret_correlation
from analytics.node_metrics import NETWORK_METRICS, history_values, metric_value


RECOMMENDATION_MIN_STRENGTH = 0.4
NODE_CORRELATION_MIN_POINTS = 10


def network_metric_frame(nodes: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    """One row per node, one column per network metric (capacity in TB)."""
    rows = [{metric: metric_value(node, metric) for metric in NETWORK_METRICS} for node in nodes]
    return pd.DataFrame(rows, columns=NETWORK_METRICS)


def correlation_recommendation(metric1: str, metric2: str, result: Dict[str, Any]) -> Optional[str]:
    """
    Contextual advice for notable metric pairs.

    Only significant pairs with |r| >= 0.4 get a recommendation.
    """
    if not result['significant']:
        return None

    coefficient = result['coefficient']
    if abs(coefficient) < RECOMMENDATION_MIN_STRENGTH:
        return None

    if (metric1, metric2) == ('performance', 'storage_utilization'):
        if coefficient > 0:
            return 'Higher storage utilization correlates with better performance. Consider load balancing.'
        return 'Storage utilization negatively impacts performance. Monitor capacity closely.'

    if (metric1, metric2) == ('uptime', 'latency') and coefficient < 0:
        return 'Lower latency nodes tend to have better uptime. Network proximity matters.'

    if (metric1, metric2) == ('performance', 'capacity') and coefficient > 0:
        return 'Larger capacity nodes show better performance. Scale may provide advantages.'

    return None


def _insight(metric1: str, metric2: str, result: Dict[str, Any], with_recommendation: bool = True) -> Dict[str, Any]:
    """CorrelationInsight from a CorrelationResult."""
    return {
        'metric1': metric1,
        'metric2': metric2,
        'correlation': result['coefficient'],
        'p_value': result['p_value'],
        'significant': result['significant'],
        'strength': result['strength'],
        'direction': result['direction'],
        'interpretation': interpret_correlation(result['coefficient']),
        'recommendation': correlation_recommendation(metric1, metric2, result) if with_recommendation else None,
        'sample_size': result['sample_size']
    }


def generate_correlation_matrix(nodes: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Correlate network metrics across nodes.

    Metrics: performance, uptime, latency, storage_utilization, capacity (TB).

    Args:
        nodes: Canonical node rows

    Returns:
        CorrelationMatrixData dictionary with the full matrix, significant
        pairs, top 3 positive and top 3 negative pairs, and metric order
    """
    frame = network_metric_frame(nodes)
    data = {metric: frame[metric].tolist() for metric in NETWORK_METRICS}

    matrix = correlation_matrix(data)

    all_pairs = [_insight(p['metric1'], p['metric2'], p) for p in matrix_pairs(matrix)]
    top = top_correlated_pairs(matrix, limit=3)

    return {
        'matrix': matrix,
        'significant_pairs': [p for p in all_pairs if p['significant']],
        'top_positive': [_insight(p['metric1'], p['metric2'], p) for p in top['positive']],
        'top_negative': [_insight(p['metric1'], p['metric2'], p) for p in top['negative']],
        'metrics': list(NETWORK_METRICS)
    }


def calculate_node_correlations(node: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Correlate a node's own performance and storage-utilization histories.

    Requires more than 10 points in both series; otherwise no insight.

    Returns:
        List with zero or one CorrelationInsight
    """
    performance = history_values(node, 'performance_scores')
    storage = history_values(node, 'storage_utilization')

    if len(performance) <= NODE_CORRELATION_MIN_POINTS or len(storage) <= NODE_CORRELATION_MIN_POINTS:
        return []

    result = pearson_correlation(performance, storage)
    return [_insight('performance', 'storage_utilization', result, with_recommendation=False)]
