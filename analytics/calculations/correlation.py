"""
Correlation engine.
Pearson correlation with a t-test for significance, and correlation matrices
over named metric series.
"""

import math
import numpy as np
from typing import Dict, List, Sequence, Any

from analytics.calculations.distributions import t_distribution_p_value
from analytics.labelers import classify_correlation_strength, classify_correlation_direction


SIGNIFICANCE_LEVEL = 0.05


def _correlation_result(coefficient: float, p_value: float, n: int) -> Dict[str, Any]:
    return {
        'coefficient': coefficient,
        'p_value': p_value,
        'significant': p_value < SIGNIFICANCE_LEVEL,
        'strength': classify_correlation_strength(coefficient),
        'direction': classify_correlation_direction(coefficient),
        'sample_size': n
    }


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> Dict[str, Any]:
    """
    Pearson correlation coefficient between two series.

    Only the first min(len(x), len(y)) points are used.

    Formula: r = Σ(x-x̄)(y-ȳ) / √(Σ(x-x̄)² Σ(y-ȳ)²)
    Significance: t = r √((n-2) / (1-r²)) with n-2 degrees of freedom

    Args:
        x: First series
        y: Second series

    Returns:
        CorrelationResult dictionary. With fewer than 3 points the result is
        coefficient 0, p-value 1, not significant.
    """
    n = min(len(x), len(y))

    if n < 3:
        return {
            'coefficient': 0.0,
            'p_value': 1.0,
            'significant': False,
            'strength': 'none',
            'direction': 'none',
            'sample_size': n
        }

    x_arr = np.asarray(x[:n], dtype=float)
    y_arr = np.asarray(y[:n], dtype=float)

    x_diff = x_arr - x_arr.mean()
    y_diff = y_arr - y_arr.mean()

    numerator = float(np.sum(x_diff * y_diff))
    denominator = math.sqrt(float(np.sum(x_diff ** 2)) * float(np.sum(y_diff ** 2)))

    coefficient = 0.0 if denominator == 0 else numerator / denominator
    coefficient = max(-1.0, min(1.0, coefficient))

    remainder = 1 - coefficient * coefficient
    if remainder <= 0:
        t_statistic = math.inf
    else:
        t_statistic = coefficient * math.sqrt((n - 2) / remainder)

    p_value = t_distribution_p_value(abs(t_statistic), n - 2)

    return _correlation_result(coefficient, p_value, n)


def _self_correlation(n: int) -> Dict[str, Any]:
    """
    Diagonal entry, fixed by construction rather than computed.

    Coefficient is always 1 (p 0 with at least 3 points, else 1), even for a
    constant series where pearson_correlation(x, x) reports 0 because the
    variance is zero.
    """
    return _correlation_result(1.0, 0.0 if n >= 3 else 1.0, n)


def correlation_matrix(data: Dict[str, Sequence[float]]) -> Dict[str, Dict[str, Dict[str, Any]]]:
    """
    Pairwise correlation matrix for named metric series.

    Each off-diagonal pair is computed once and mirrored, so the matrix is
    exactly symmetric; diagonal entries have coefficient 1 by construction,
    including for constant series.

    Args:
        data: Mapping of metric name to series

    Returns:
        Nested mapping matrix[m1][m2] -> CorrelationResult
    """
    metrics = list(data.keys())
    matrix: Dict[str, Dict[str, Dict[str, Any]]] = {m: {} for m in metrics}

    for i, m1 in enumerate(metrics):
        matrix[m1][m1] = _self_correlation(len(data[m1]))

        for m2 in metrics[i + 1:]:
            result = pearson_correlation(data[m1], data[m2])
            matrix[m1][m2] = result
            matrix[m2][m1] = dict(result)

    return matrix


def matrix_pairs(matrix: Dict[str, Dict[str, Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Flatten the upper triangle of a correlation matrix into pair records.

    Returns:
        List of {'metric1', 'metric2', **CorrelationResult} in metric order
    """
    metrics = list(matrix.keys())
    pairs = []

    for i, m1 in enumerate(metrics):
        for m2 in metrics[i + 1:]:
            pairs.append({'metric1': m1, 'metric2': m2, **matrix[m1][m2]})

    return pairs


def significant_pairs(matrix: Dict[str, Dict[str, Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Off-diagonal pairs with p < 0.05."""
    return [p for p in matrix_pairs(matrix) if p['p_value'] < SIGNIFICANCE_LEVEL]


def top_correlated_pairs(
    matrix: Dict[str, Dict[str, Dict[str, Any]]],
    limit: int = 3
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Strongest positive and negative off-diagonal pairs.

    Pairs are ordered by signed coefficient: most positive first for the
    positive list, most negative first for the negative list.

    Returns:
        {'positive': [...], 'negative': [...]} each with at most `limit` pairs
    """
    pairs = matrix_pairs(matrix)

    positive = sorted(
        (p for p in pairs if p['coefficient'] > 0),
        key=lambda p: p['coefficient'],
        reverse=True
    )
    negative = sorted(
        (p for p in pairs if p['coefficient'] < 0),
        key=lambda p: p['coefficient']
    )

    return {'positive': positive[:limit], 'negative': negative[:limit]}
