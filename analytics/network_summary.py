"""
Network-wide aggregation.
Folds per-node risk profiles, correlation highlights and Sharpe-like rankings
into the network risk distribution and the quant summary snapshot.
"""

import math
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Any

from analytics.calculations.basic_stats import mean, median, percentile, standard_deviation
from analytics.calculations.risk_adjusted import calculate_sharpe_ratio, consistency_score
from analytics.calculations.volatility import calculate_volatility
from analytics.config import QuantConfig
from analytics.correlation_insights import generate_correlation_matrix
from analytics.labelers import classify_risk_level
from analytics.node_metrics import history_points, history_values
from analytics.risk_profile import calculate_risk_profile, network_risk_context


RISK_LEVELS = ['low', 'medium', 'high', 'very_high']
LEADERBOARD_SIZE = 5


def network_risk_scores(
    nodes: Sequence[Dict[str, Any]],
    config: Optional[QuantConfig] = None
) -> List[float]:
    """Risk score of every node, from its performance history."""
    context = network_risk_context(nodes, config)
    return [
        calculate_risk_profile(
            node, history_points(node), nodes, config=config, network_context=context
        )['risk_score']
        for node in nodes
    ]


def calculate_network_risk_distribution(
    nodes: Sequence[Dict[str, Any]],
    config: Optional[QuantConfig] = None
) -> Dict[str, Any]:
    """
    Distribution of node risk scores across risk levels.

    Levels: low (< 25), medium (< 50), high (< 75), very_high (>= 75).

    Args:
        nodes: Canonical node rows
        config: Tunable parameters

    Returns:
        NetworkRiskDistribution dictionary; percentages sum to 100 for a
        non-empty network
    """
    risk_scores = network_risk_scores(nodes, config)
    levels = [classify_risk_level(score) for score in risk_scores]
    total = len(risk_scores)

    distribution = []
    for level in RISK_LEVELS:
        count = levels.count(level)
        distribution.append({
            'level': level,
            'count': count,
            'percentage': 0.0 if total == 0 else count / total * 100
        })

    return {
        'distribution': distribution,
        'average': mean(risk_scores),
        'median': median(risk_scores),
        'standard_deviation': standard_deviation(risk_scores),
        'quartiles': {
            'q1': percentile(risk_scores, 25),
            'q2': percentile(risk_scores, 50),
            'q3': percentile(risk_scores, 75)
        }
    }


def rank_by_sharpe_ratio(
    nodes: Sequence[Dict[str, Any]],
    config: Optional[QuantConfig] = None
) -> List[Dict[str, Any]]:
    """
    Nodes ordered by Sharpe-like ratio, best first.

    Returns:
        [{node_id, sharpe_ratio, consistency, volatility}] with non-finite
        ratios excluded
    """
    if config is None:
        config = QuantConfig()

    ranked = []
    for node in nodes:
        values = history_values(node)
        ratio = calculate_sharpe_ratio(values, zero_variance_ratio=config.zero_variance_sharpe)['ratio']
        if not math.isfinite(ratio):
            continue
        ranked.append({
            'node_id': node['id'],
            'sharpe_ratio': ratio,
            'consistency': consistency_score(values),
            'volatility': calculate_volatility(values)['standard_deviation']
        })

    # Stable sort keeps input order among ties
    return sorted(ranked, key=lambda r: r['sharpe_ratio'], reverse=True)


def generate_network_quant_summary(
    nodes: Sequence[Dict[str, Any]],
    config: Optional[QuantConfig] = None
) -> Dict[str, Any]:
    """
    Network quant snapshot: correlation highlights, risk distribution,
    and the top and bottom 5 nodes by Sharpe-like ratio.

    Args:
        nodes: Canonical node rows
        config: Tunable parameters

    Returns:
        NetworkQuantSummary dictionary. strongest_positive/strongest_negative
        are None when the network has no pair with that sign.
    """
    correlation_data = generate_correlation_matrix(nodes)
    risk_distribution = calculate_network_risk_distribution(nodes, config)
    ranked = rank_by_sharpe_ratio(nodes, config)

    top_performers = [
        {'node_id': r['node_id'], 'sharpe_ratio': r['sharpe_ratio'], 'consistency': r['consistency']}
        for r in ranked[:LEADERBOARD_SIZE]
    ]
    bottom_performers = [
        {'node_id': r['node_id'], 'sharpe_ratio': r['sharpe_ratio'], 'volatility': r['volatility']}
        for r in reversed(ranked[-LEADERBOARD_SIZE:])
    ]

    top_positive = correlation_data['top_positive']
    top_negative = correlation_data['top_negative']

    return {
        'correlations': {
            'strongest_positive': top_positive[0] if top_positive else None,
            'strongest_negative': top_negative[0] if top_negative else None,
            'significant_count': len(correlation_data['significant_pairs'])
        },
        'risk': risk_distribution,
        'top_performers': top_performers,
        'bottom_performers': bottom_performers,
        'last_updated': datetime.now(timezone.utc).isoformat()
    }
