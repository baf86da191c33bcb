"""
Guardrails for the analytics engine - data quality checks on a network snapshot.
Blocks analyses that need more nodes than the snapshot has and flags thin histories.
"""

import logging
import math
import warnings
import pandas as pd
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional, Sequence

from analytics.config import QuantConfig

# Set up logger
logger = logging.getLogger(__name__)


HISTORY_SERIES = ['performance_scores', 'storage_utilization', 'uptime_history']

# Minimum points for each history-driven analysis
MIN_FORECAST_POINTS = 3
MIN_NODE_CORRELATION_POINTS = 11


class DataQualityError(Exception):
    """Raised when data quality issues require user intervention."""
    pass


class DataQualityWarning(UserWarning):
    """Raised when data quality issues should be noted but don't block execution."""
    pass


def validate_network_size(nodes: Sequence[Dict[str, Any]], min_size: int = 3) -> None:
    """
    Require enough nodes for network-wide statistics.

    Raises:
        DataQualityError: If the network has fewer than `min_size` nodes
    """
    if len(nodes) < min_size:
        raise DataQualityError(
            f"Insufficient nodes for network analysis: have {len(nodes)}, "
            f"need at least {min_size}."
        )


def history_coverage(nodes: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    """
    Points per history series for every node.

    Returns:
        DataFrame indexed by node id with one column per history series
    """
    rows = []
    for node in nodes:
        history = node.get('history') or {}
        row = {'node_id': node['id']}
        for series in HISTORY_SERIES:
            row[series] = len(history.get(series) or [])
        rows.append(row)

    return pd.DataFrame(rows, columns=['node_id'] + HISTORY_SERIES).set_index('node_id')


def check_history_lengths(
    coverage: pd.DataFrame,
    min_points: int = MIN_FORECAST_POINTS
) -> List[str]:
    """
    Warn about nodes whose performance history is too short to analyse.

    Args:
        coverage: Output of history_coverage
        min_points: Minimum performance points for trends and forecasts

    Returns:
        List of warning messages (also emitted as DataQualityWarning)
    """
    messages = []
    if coverage.empty:
        return messages

    short = coverage[coverage['performance_scores'] < min_points]
    if not short.empty:
        message = (
            f"{len(short)} of {len(coverage)} nodes have fewer than {min_points} "
            f"performance points: {list(short.index)}"
        )
        warnings.warn(message, DataQualityWarning)
        messages.append(message)

    no_storage = coverage[coverage['storage_utilization'] < MIN_NODE_CORRELATION_POINTS]
    if len(no_storage) == len(coverage):
        messages.append(
            "No node has enough storage utilization history for per-node correlations"
        )

    return messages


def find_non_finite(data: Any, path: str = '') -> List[str]:
    """Paths of NaN or infinite numbers inside a nested result."""
    found = []

    if isinstance(data, dict):
        for key, value in data.items():
            found.extend(find_non_finite(value, f"{path}.{key}" if path else str(key)))
    elif isinstance(data, (list, tuple)):
        for i, value in enumerate(data):
            found.extend(find_non_finite(value, f"{path}[{i}]"))
    elif isinstance(data, float) and not math.isfinite(data):
        found.append(path)

    return found


def coverage_summary(coverage: pd.DataFrame) -> Dict[str, Any]:
    """Min/median/max points per series across the network."""
    summary = {}
    for series in HISTORY_SERIES:
        column = coverage[series] if not coverage.empty else pd.Series(dtype=int)
        summary[series] = {
            'min': int(column.min()) if not column.empty else 0,
            'median': float(column.median()) if not column.empty else 0.0,
            'max': int(column.max()) if not column.empty else 0,
            'nodes_with_data': int((column > 0).sum())
        }
    return summary


def run_network_guardrails(
    nodes: Sequence[Dict[str, Any]],
    config: Optional[QuantConfig] = None,
    require_network: bool = True
) -> Dict[str, Any]:
    """
    Run all data quality checks for a network snapshot.

    Args:
        nodes: Canonical node rows
        config: Tunable parameters (min_network_size)
        require_network: Enforce the minimum network size

    Returns:
        Dictionary with coverage summary, warnings and errors

    Raises:
        DataQualityError: If the snapshot cannot support network analysis
    """
    if config is None:
        config = QuantConfig()

    results = {
        'node_count': len(nodes),
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'coverage': None,
        'warnings': [],
        'errors': []
    }

    try:
        if require_network:
            validate_network_size(nodes, config.min_network_size)

        coverage = history_coverage(nodes)
        results['coverage'] = coverage_summary(coverage)

        with warnings.catch_warnings():
            warnings.simplefilter('ignore', DataQualityWarning)
            results['warnings'].extend(check_history_lengths(coverage))

        for message in results['warnings']:
            logger.warning(message)

        return results

    except DataQualityError as e:
        results['errors'].append(str(e))
        logger.error(f"Data quality check failed: {e}")
        raise
