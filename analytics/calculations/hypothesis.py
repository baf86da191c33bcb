"""
Hypothesis testing utilities.
Welch's two-sample t-test and t-based confidence intervals for a mean.
"""

import math
from typing import Dict, Sequence, Any

from analytics.calculations.basic_stats import mean, variance
from analytics.calculations.distributions import t_distribution_p_value, t_critical_value


SIGNIFICANCE_LEVEL = 0.05


def t_test(x: Sequence[float], y: Sequence[float]) -> Dict[str, Any]:
    """
    Welch's t-test for a difference in means with unequal variances.

    Degrees of freedom follow Welch-Satterthwaite:
        df = (v1/n1 + v2/n2)² / ((v1/n1)²/(n1-1) + (v2/n2)²/(n2-1))

    Args:
        x: First sample
        y: Second sample

    Returns:
        {'t_statistic', 'p_value', 'significant', 'mean_difference',
         'degrees_of_freedom'}
    """
    n1, n2 = len(x), len(y)

    if n1 < 2 or n2 < 2:
        return {
            't_statistic': 0.0,
            'p_value': 1.0,
            'significant': False,
            'mean_difference': 0.0,
            'degrees_of_freedom': 0.0
        }

    mean_difference = mean(x) - mean(y)
    se1 = variance(x) / n1
    se2 = variance(y) / n2
    se = math.sqrt(se1 + se2)

    if se == 0:
        # Both samples constant: the means either coincide or differ with certainty
        return {
            't_statistic': 0.0,
            'p_value': 1.0 if mean_difference == 0 else 0.0,
            'significant': mean_difference != 0,
            'mean_difference': mean_difference,
            'degrees_of_freedom': float(n1 + n2 - 2)
        }

    t_statistic = mean_difference / se
    df = (se1 + se2) ** 2 / (se1 ** 2 / (n1 - 1) + se2 ** 2 / (n2 - 1))
    p_value = t_distribution_p_value(abs(t_statistic), df)

    return {
        't_statistic': t_statistic,
        'p_value': p_value,
        'significant': p_value < SIGNIFICANCE_LEVEL,
        'mean_difference': mean_difference,
        'degrees_of_freedom': df
    }


def confidence_interval(
    data_mean: float,
    data_std: float,
    n: int,
    level: float = 0.95
) -> Dict[str, float]:
    """
    Confidence interval for a mean: mean ± t* · std / √n.

    Args:
        data_mean: Sample mean
        data_std: Sample standard deviation
        n: Sample size
        level: Coverage (default 0.95)

    Returns:
        {'lower', 'upper', 'level', 'margin_of_error'}; zero width for n < 2
    """
    if n < 2:
        return {'lower': data_mean, 'upper': data_mean, 'level': level, 'margin_of_error': 0.0}

    t_crit = t_critical_value(1 - level, n - 1)
    margin = t_crit * data_std / math.sqrt(n)

    return {
        'lower': data_mean - margin,
        'upper': data_mean + margin,
        'level': level,
        'margin_of_error': margin
    }
