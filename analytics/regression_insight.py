"""
Network regression insight.
Regresses one node metric on another across the network and explains the fit.
"""

from typing import Dict, Sequence, Any

from analytics.calculations.regression import linear_regression, predict_with_confidence
from analytics.node_metrics import UnknownMetricError, canonical_metric, metric_value


SIGNIFICANCE_LEVEL = 0.05


class RegressionInsightError(UnknownMetricError):
    """Raised when a regression is requested for unknown metrics."""
    pass


def describe_regression(regression: Dict[str, Any], dependent: str, independent: str) -> str:
    """Plain-language summary of fit quality and slope."""
    p_value = regression['p_value']

    if p_value >= SIGNIFICANCE_LEVEL:
        return (
            f"No significant relationship found between {dependent} and {independent} "
            f"(p={p_value:.3f})."
        )

    r2_pct = regression['r_squared'] * 100
    if regression['r_squared'] > 0.5:
        text = f"Strong predictive relationship (R²={r2_pct:.1f}%). "
    elif regression['r_squared'] > 0.25:
        text = f"Moderate predictive relationship (R²={r2_pct:.1f}%). "
    else:
        text = f"Weak but significant relationship (R²={r2_pct:.1f}%). "

    verb = 'increases' if regression['slope'] > 0 else 'decreases'
    text += (
        f"For each unit increase in {independent}, {dependent} {verb} "
        f"by {abs(regression['slope']):.3f}."
    )
    return text


def perform_network_regression(
    nodes: Sequence[Dict[str, Any]],
    dependent: str,
    independent: str,
    confidence_level: float = 0.95
) -> Dict[str, Any]:
    """
    Regress `dependent` on `independent` across all nodes.

    Args:
        nodes: Canonical node rows
        dependent: Metric name or alias for y
        independent: Metric name or alias for x
        confidence_level: Interval coverage for predictions

    Returns:
        RegressionInsight dictionary with equation, interpretation and
        predictions (sorted by x) carrying lower/upper bounds

    Raises:
        RegressionInsightError: If either metric name is unknown
    """
    try:
        dependent = canonical_metric(dependent)
        independent = canonical_metric(independent)
    except UnknownMetricError as e:
        raise RegressionInsightError(str(e))

    x = [metric_value(node, independent) for node in nodes]
    y = [metric_value(node, dependent) for node in nodes]

    regression = linear_regression(x, y, confidence_level)

    predictions = []
    for xi in sorted(x):
        pred = predict_with_confidence(regression, xi, x, confidence_level)
        predictions.append({
            'x': xi,
            'y': pred['predicted'],
            'lower': pred['lower'],
            'upper': pred['upper']
        })

    equation = (
        f"{dependent} = {regression['slope']:.3f}×{independent} "
        f"+ {regression['intercept']:.2f}"
    )

    return {
        'dependent': dependent,
        'independent': independent,
        'r_squared': regression['r_squared'],
        'slope': regression['slope'],
        'intercept': regression['intercept'],
        'p_value': regression['p_value'],
        'significant': regression['p_value'] < SIGNIFICANCE_LEVEL,
        'interpretation': describe_regression(regression, dependent, independent),
        'equation': equation,
        'predictions': predictions,
        'confidence_level': confidence_level
    }
