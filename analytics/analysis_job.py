"""
Orchestrated analysis jobs - network snapshot to result envelopes.
Dispatches network-wide and per-node analyses and wraps the output in
{success, type, data, meta} envelopes for the CLI and other callers.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Sequence

from analytics.benchmark import benchmark_node
from analytics.config import QuantConfig
from analytics.correlation_insights import calculate_node_correlations, generate_correlation_matrix
from analytics.forecast import generate_trend_forecast
from analytics.guardrails import (
    DataQualityError,
    MIN_FORECAST_POINTS,
    find_non_finite,
    run_network_guardrails
)
from analytics.network_summary import calculate_network_risk_distribution, generate_network_quant_summary
from analytics.node_metrics import history_points
from analytics.regression_insight import perform_network_regression
from analytics.risk_profile import calculate_risk_profile

# Set up logger
logger = logging.getLogger(__name__)


NETWORK_ANALYSIS_TYPES = ['summary', 'correlations', 'risk', 'regression']
NODE_ANALYSIS_TYPES = ['all', 'risk', 'benchmark', 'forecast']

DEFAULT_DEPENDENT = 'performance'
DEFAULT_INDEPENDENT = 'storage_utilization'


class AnalysisJobError(Exception):
    """Raised when an analysis job fails."""
    pass


def _failed(error: str) -> Dict[str, Any]:
    return {'success': False, 'error': error}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _non_finite_error(label: str, data: Dict[str, Any]) -> Optional[str]:
    """Error message when a result holds NaN or infinite numbers, else None."""
    paths = find_non_finite(data)
    if not paths:
        return None
    logger.error(f"{label} result has non-finite values at {paths}")
    return f"Non-finite values in {label} result: {', '.join(paths)}"


def require_success(envelope: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a successful envelope unchanged.

    Raises:
        AnalysisJobError: If the envelope reports a failure
    """
    if not envelope.get('success'):
        raise AnalysisJobError(envelope.get('error', 'Analysis failed'))
    return envelope


def run_network_analysis(
    nodes: Sequence[Dict[str, Any]],
    analysis_type: str = 'summary',
    config: Optional[QuantConfig] = None,
    dependent: str = DEFAULT_DEPENDENT,
    independent: str = DEFAULT_INDEPENDENT
) -> Dict[str, Any]:
    """
    Run a network-wide analysis.

    Args:
        nodes: Canonical node rows
        analysis_type: One of summary, correlations, risk, regression
        config: Tunable parameters
        dependent: Regression y metric (regression only)
        independent: Regression x metric (regression only)

    Returns:
        {'success': True, 'type', 'data', 'meta'} or
        {'success': False, 'error'}; results holding NaN or infinities fail
    """
    if config is None:
        config = QuantConfig()

    try:
        guardrails = run_network_guardrails(nodes, config)
    except DataQualityError as e:
        return _failed(str(e))

    if analysis_type not in NETWORK_ANALYSIS_TYPES:
        return _failed(
            f"Unknown analysis type: {analysis_type}. "
            f"Supported types: {', '.join(NETWORK_ANALYSIS_TYPES)}"
        )

    logger.info(f"Running {analysis_type} analysis over {len(nodes)} nodes")

    try:
        if analysis_type == 'summary':
            data = generate_network_quant_summary(nodes, config)
        elif analysis_type == 'correlations':
            data = generate_correlation_matrix(nodes)
        elif analysis_type == 'risk':
            data = calculate_network_risk_distribution(nodes, config)
        else:
            data = perform_network_regression(
                nodes, dependent, independent, config.confidence_level
            )
    except ValueError as e:
        logger.error(f"Network {analysis_type} analysis failed: {e}")
        return _failed(str(e))

    error = _non_finite_error(analysis_type, data)
    if error:
        return _failed(error)

    return {
        'success': True,
        'type': analysis_type,
        'data': data,
        'meta': {
            'node_count': len(nodes),
            'warnings': guardrails['warnings'],
            'timestamp': _timestamp()
        }
    }


def _find_node(node_id: str, nodes: Sequence[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    for node in nodes:
        if node['id'] == node_id:
            return node
    return None


def analyze_node(
    node_id: str,
    nodes: Sequence[Dict[str, Any]],
    analysis_type: str = 'all',
    config: Optional[QuantConfig] = None
) -> Dict[str, Any]:
    """
    Run per-node analyses against the rest of the network.

    'all' bundles risk profile, benchmark, own-history correlations and the
    performance forecast. The forecast is None with fewer than 3 history
    points.

    Args:
        node_id: Id of the node to analyse
        nodes: Every node in the network
        analysis_type: One of all, risk, benchmark, forecast
        config: Tunable parameters

    Returns:
        {'success': True, 'node_id', 'type', 'data', 'meta'} or
        {'success': False, 'error'}; results holding NaN or infinities fail
    """
    if config is None:
        config = QuantConfig()

    if analysis_type not in NODE_ANALYSIS_TYPES:
        return _failed(
            f"Unknown analysis type: {analysis_type}. "
            f"Supported types: {', '.join(NODE_ANALYSIS_TYPES)}"
        )

    node = _find_node(node_id, nodes)
    if node is None:
        return _failed(f"Node not found: {node_id}")

    history = history_points(node)
    data: Dict[str, Any] = {}

    logger.info(f"Running {analysis_type} analysis for node {node_id} ({len(history)} points)")

    if analysis_type in ('all', 'risk'):
        data['risk_profile'] = calculate_risk_profile(node, history, nodes, config)

    if analysis_type in ('all', 'benchmark'):
        data['benchmark'] = benchmark_node(node, nodes)

    if analysis_type == 'all':
        data['correlations'] = calculate_node_correlations(node)

    if analysis_type in ('all', 'forecast'):
        if len(history) >= MIN_FORECAST_POINTS:
            data['forecast'] = generate_trend_forecast(
                history,
                config.forecast_days,
                metric_name='performance',
                confidence_level=config.confidence_level,
                slope_threshold=config.trend_slope_threshold
            )
        else:
            logger.warning(f"Skipping forecast for {node_id}: only {len(history)} history points")
            data['forecast'] = None

    error = _non_finite_error(f"node {node_id} {analysis_type}", data)
    if error:
        return _failed(error)

    return {
        'success': True,
        'node_id': node_id,
        'type': analysis_type,
        'data': data,
        'meta': {
            'has_history': bool(node.get('history')),
            'network_size': len(nodes),
            'timestamp': _timestamp()
        }
    }
