"""
Peer benchmark aggregation.
Positions one node's metrics against the whole network.
"""

from datetime import datetime, timezone
from typing import Dict, List, Sequence, Any

from analytics.calculations.basic_stats import mean, median, standard_deviation
from analytics.calculations.normalization import percentile_rank, z_score
from analytics.calculations.risk_adjusted import consistency_score
from analytics.labelers import classify_benchmark_rating, classify_overall_rating
from analytics.node_metrics import history_values


PEER_SCORE_RANGE = 10.0
MAX_PEERS = 5


def _peer_population(value: float, all_values: Sequence[float]) -> List[float]:
    """Network values that differ from the node's own value; ties are excluded."""
    return [v for v in all_values if v != value]


def metric_benchmark(
    value: float,
    all_values: Sequence[float],
    higher_is_better: bool = True
) -> Dict[str, Any]:
    """
    Compare a value with the network distribution of the same metric.

    Average, median and z-score use the full population. The percentile is
    the share of the nodes with a different value that lie strictly below
    it, so the network maximum ranks at 100 and the minimum at 0 even when
    tied. A network where every value is equal ranks the node at 50.

    Args:
        value: The node's metric value
        all_values: Metric values of every node (including this one)
        higher_is_better: False for metrics such as latency

    Returns:
        MetricBenchmark dictionary
    """
    avg = mean(all_values)
    std = standard_deviation(all_values)
    pctile = percentile_rank(value, _peer_population(value, all_values))
    deviation = 0.0 if avg == 0 else (value - avg) / avg * 100

    return {
        'value': value,
        'network_avg': avg,
        'network_median': median(all_values),
        'percentile': pctile,
        'z_score': z_score(value, avg, std),
        'deviation': deviation,
        'rating': classify_benchmark_rating(pctile, higher_is_better)
    }


def find_peer_group(node: Dict[str, Any], all_nodes: Sequence[Dict[str, Any]]) -> List[str]:
    """Ids of up to 5 other nodes within ±10 performance points, in input order."""
    score = node['performance_score']
    peers = [
        other['id'] for other in all_nodes
        if other['id'] != node['id']
        and abs(other['performance_score'] - score) <= PEER_SCORE_RANGE
    ]
    return peers[:MAX_PEERS]


def network_rank(node: Dict[str, Any], all_nodes: Sequence[Dict[str, Any]]) -> int:
    """1-based position by performance score, highest first (0 if absent)."""
    ordered = sorted(all_nodes, key=lambda n: n['performance_score'], reverse=True)
    for position, other in enumerate(ordered, start=1):
        if other['id'] == node['id']:
            return position
    return 0


def benchmark_node(node: Dict[str, Any], all_nodes: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Benchmark a node against every node in the network.

    Metrics: performance, uptime, latency (lower is better), storage
    utilization and consistency of the performance history.

    Args:
        node: Canonical node row
        all_nodes: Every node in the network

    Returns:
        BenchmarkComparison dictionary
    """
    network_consistency = [consistency_score(history_values(n)) for n in all_nodes]

    metrics = {
        'performance': metric_benchmark(
            node['performance_score'],
            [n['performance_score'] for n in all_nodes]
        ),
        'uptime': metric_benchmark(
            node['uptime'],
            [n['uptime'] for n in all_nodes]
        ),
        'latency': metric_benchmark(
            node['average_latency'],
            [n['average_latency'] for n in all_nodes],
            higher_is_better=False
        ),
        'storage_utilization': metric_benchmark(
            node['storage_utilization'],
            [n['storage_utilization'] for n in all_nodes]
        ),
        'consistency': metric_benchmark(
            consistency_score(history_values(node)),
            network_consistency
        ),
    }

    overall_percentile = (
        metrics['performance']['percentile']
        + metrics['uptime']['percentile']
        + (100 - metrics['latency']['percentile'])
        + metrics['consistency']['percentile']
    ) / 4

    return {
        'node_id': node['id'],
        'metrics': metrics,
        'overall_rating': classify_overall_rating(overall_percentile),
        'overall_percentile': overall_percentile,
        'peer_group': find_peer_group(node, all_nodes),
        'rank_in_network': network_rank(node, all_nodes),
        'total_in_network': len(all_nodes),
        'last_updated': datetime.now(timezone.utc).isoformat()
    }
