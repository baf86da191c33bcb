"""
Classification labelers for quant analytics output.
Deterministic threshold-based buckets shared by the engines and aggregations.
"""


def classify_correlation_strength(coefficient: float) -> str:
    """
    Classify correlation strength from |r|.

    Thresholds:
    - Strong: >= 0.7
    - Moderate: 0.4 - 0.7
    - Weak: 0.2 - 0.4
    - None: < 0.2
    """
    abs_coef = abs(coefficient)

    if abs_coef >= 0.7:
        return "strong"
    elif abs_coef >= 0.4:
        return "moderate"
    elif abs_coef >= 0.2:
        return "weak"
    else:
        return "none"


def classify_correlation_direction(coefficient: float) -> str:
    """Positive above +0.1, negative below -0.1, otherwise none."""
    if coefficient > 0.1:
        return "positive"
    elif coefficient < -0.1:
        return "negative"
    else:
        return "none"


def classify_sharpe_ratio(ratio: float) -> str:
    """
    Interpret a Sharpe-like ratio.

    Thresholds:
    - Excellent: >= 3
    - Good: 2 - 3
    - Average: 1 - 2
    - Below average: 0.5 - 1
    - Poor: < 0.5
    """
    if ratio >= 3:
        return "excellent"
    elif ratio >= 2:
        return "good"
    elif ratio >= 1:
        return "average"
    elif ratio >= 0.5:
        return "below_average"
    else:
        return "poor"


def classify_reliability(consistency: float) -> str:
    """Reliability bucket from a 0-100 consistency score (80/60/40 cut points)."""
    if consistency >= 80:
        return "very_high"
    elif consistency >= 60:
        return "high"
    elif consistency >= 40:
        return "medium"
    else:
        return "low"


def classify_risk_level(risk_score: float) -> str:
    """
    Overall risk level from a 0-100 risk score.

    Thresholds:
    - Low: < 25
    - Medium: 25 - 50
    - High: 50 - 75
    - Very high: >= 75
    """
    if risk_score >= 75:
        return "very_high"
    elif risk_score >= 50:
        return "high"
    elif risk_score >= 25:
        return "medium"
    else:
        return "low"


def classify_benchmark_rating(percentile: float, higher_is_better: bool = True) -> str:
    """
    Rate a metric from its network percentile.

    For lower-is-better metrics (latency) the percentile is inverted first.

    Thresholds on the effective percentile:
    - Excellent: >= 90
    - Above average: 70 - 90
    - Average: 30 - 70
    - Below average: 10 - 30
    - Poor: < 10
    """
    effective = percentile if higher_is_better else 100 - percentile

    if effective >= 90:
        return "excellent"
    elif effective >= 70:
        return "above_average"
    elif effective >= 30:
        return "average"
    elif effective >= 10:
        return "below_average"
    else:
        return "poor"


def classify_overall_rating(overall_percentile: float) -> str:
    """Overall benchmark rating (90/60/40 cut points)."""
    if overall_percentile >= 90:
        return "top_performer"
    elif overall_percentile >= 60:
        return "above_average"
    elif overall_percentile >= 40:
        return "average"
    else:
        return "below_average"


def classify_volatility_trend(recent_avg: float, older_avg: float) -> str:
    """Increasing if recent volatility is >10% above older, decreasing if >10% below."""
    if recent_avg > older_avg * 1.1:
        return "increasing"
    elif recent_avg < older_avg * 0.9:
        return "decreasing"
    else:
        return "stable"


def interpret_correlation(coefficient: float) -> str:
    """Plain-language description of a correlation coefficient."""
    abs_coef = abs(coefficient)
    direction = "positive" if coefficient > 0 else "negative"

    if abs_coef >= 0.8:
        return f"Strong {direction} correlation"
    if abs_coef >= 0.6:
        return f"Moderate-to-strong {direction} correlation"
    if abs_coef >= 0.4:
        return f"Moderate {direction} correlation"
    if abs_coef >= 0.2:
        return f"Weak {direction} correlation"
    return "No significant correlation"
