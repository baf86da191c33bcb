"""
Risk profile aggregation.
Combines volatility, drawdown, Sharpe-like ratio and consistency for one node
and positions it against the rest of the network.
"""

import math
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Any

from analytics.calculations.basic_stats import mean
from analytics.calculations.drawdown import calculate_drawdown
from analytics.calculations.normalization import percentile_rank
from analytics.calculations.risk_adjusted import calculate_sharpe_ratio, consistency_score
from analytics.calculations.volatility import calculate_volatility
from analytics.config import QuantConfig
from analytics.labelers import classify_reliability, classify_risk_level, classify_volatility_trend
from analytics.node_metrics import history_values


# Risk score weights
VOLATILITY_WEIGHT = 0.4
DRAWDOWN_WEIGHT = 0.35
RECOVERY_WEIGHT = 0.25
UNRECOVERED_SCORE = 50.0


def consistency_streak(
    values: Sequence[float],
    threshold: float = 10.0,
    window: int = 30
) -> int:
    """
    Count trailing consecutive steps whose change is within threshold.

    Only the last `window` points are inspected.
    """
    if len(values) < 2:
        return 0

    recent = list(values)[-window:]
    streak = 0

    for i in range(len(recent) - 1, 0, -1):
        if abs(recent[i] - recent[i - 1]) <= threshold:
            streak += 1
        else:
            break

    return streak


def volatility_trend(rolling_values: Sequence[float], window: int = 7) -> str:
    """Compare the latest `window` rolling volatilities with the `window` before them."""
    rolling_values = list(rolling_values)
    recent = rolling_values[-window:]
    older = rolling_values[-2 * window:-window]

    recent_avg = mean(recent) if recent else 0.0
    older_avg = mean(older) if older else recent_avg

    return classify_volatility_trend(recent_avg, older_avg)


def risk_score(volatility_score: float, max_drawdown: float, recovery_time: Optional[int]) -> float:
    """
    Weighted 0-100 risk score (higher is riskier).

    Components:
    - Volatility: 100 - volatility_score (weight 0.4)
    - Drawdown: min(100, 2 × max_drawdown) (weight 0.35)
    - Recovery: min(100, 10 × recovery_time), 50 if never recovered (weight 0.25)
    """
    vol_component = 100 - volatility_score
    drawdown_component = min(100.0, max_drawdown * 2)
    if recovery_time is None:
        recovery_component = UNRECOVERED_SCORE
    else:
        recovery_component = min(100.0, recovery_time * 10)

    score = (
        vol_component * VOLATILITY_WEIGHT
        + drawdown_component * DRAWDOWN_WEIGHT
        + recovery_component * RECOVERY_WEIGHT
    )
    return max(0.0, min(100.0, score))


def network_risk_context(
    all_nodes: Sequence[Dict[str, Any]],
    config: Optional[QuantConfig] = None
) -> Dict[str, List[float]]:
    """
    Per-node reference values a risk profile is ranked against.

    Returns:
        {'volatilities': [...], 'sharpe_ratios': [...]} from each node's
        performance history; non-finite ratios are dropped
    """
    if config is None:
        config = QuantConfig()

    volatilities = []
    sharpe_ratios = []

    for other in all_nodes:
        values = history_values(other)
        volatilities.append(calculate_volatility(values)['standard_deviation'])
        ratio = calculate_sharpe_ratio(values, zero_variance_ratio=config.zero_variance_sharpe)['ratio']
        if math.isfinite(ratio):
            sharpe_ratios.append(ratio)

    return {'volatilities': volatilities, 'sharpe_ratios': sharpe_ratios}


def calculate_risk_profile(
    node: Dict[str, Any],
    history: Sequence[Dict[str, Any]],
    all_nodes: Sequence[Dict[str, Any]],
    config: Optional[QuantConfig] = None,
    network_context: Optional[Dict[str, List[float]]] = None
) -> Dict[str, Any]:
    """
    Build the risk profile of a node from its performance history.

    Args:
        node: Canonical node row
        history: TimeSeriesPoint list to analyse (usually performance scores)
        all_nodes: Every node in the network, used for percentile and rank
        config: Tunable parameters (defaults when omitted)
        network_context: Precomputed network_risk_context(all_nodes), to avoid
            recomputing it for every node of a network-wide run

    Returns:
        RiskProfile dictionary
    """
    if config is None:
        config = QuantConfig()

    if network_context is None:
        network_context = network_risk_context(all_nodes, config)

    values = [float(point['value']) for point in history]

    volatility = calculate_volatility(
        values,
        window=config.rolling_window,
        annualization_factor=config.annualization_factor
    )
    drawdown = calculate_drawdown(values)
    sharpe = calculate_sharpe_ratio(values, zero_variance_ratio=config.zero_variance_sharpe)
    consistency = consistency_score(values)

    network_volatilities = network_context['volatilities']
    network_sharpes = network_context['sharpe_ratios']

    score = risk_score(
        volatility['volatility_score'],
        drawdown['max_drawdown'],
        drawdown['recovery_time']
    )

    return {
        'node_id': node['id'],
        'volatility': {
            'score': volatility['volatility_score'],
            'raw': volatility['standard_deviation'],
            'percentile': percentile_rank(volatility['standard_deviation'], network_volatilities),
            'trend': volatility_trend(volatility['rolling_volatility'], config.volatility_trend_window),
            'rolling_values': volatility['rolling_volatility']
        },
        'consistency': {
            'score': consistency,
            'streak_days': consistency_streak(values, config.streak_threshold, config.streak_window),
            'reliability': classify_reliability(consistency)
        },
        'risk_adjusted_performance': {
            'sharpe_ratio': sharpe['ratio'],
            'interpretation': sharpe['interpretation'],
            'network_rank': sum(1 for s in network_sharpes if s > sharpe['ratio']) + 1,
            'percentile': sharpe['percentile_rank']
        },
        'drawdown': {
            'max_drawdown': drawdown['max_drawdown'],
            'current_drawdown': drawdown['current_drawdown'],
            'recovery_factor': drawdown['recovery_time'] or 0,
            'days_in_drawdown': drawdown['max_drawdown_duration'],
            'current_drawdown_days': drawdown['current_drawdown_duration'],
            'average_drawdown': drawdown['average_drawdown']
        },
        'overall_risk_level': classify_risk_level(score),
        'risk_score': score,
        'last_updated': datetime.now(timezone.utc).isoformat()
    }
