"""
Display formatters for quant analytics results.
Deterministic string formatting for p-values, percentages, timestamps and
plain-text summaries of analysis envelopes.
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class FormatterError(Exception):
    """Raised when formatter input validation fails."""
    pass


def _require_number(value: Any, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"{label} must be numeric, got {type(value)}")


def significance_stars(p_value: float) -> str:
    """
    Significance marker for a p-value.

    Returns:
        '***' (< 0.001), '**' (< 0.01), '*' (< 0.05) or ''
    """
    _require_number(p_value, "p-value")

    if p_value < 0.001:
        return '***'
    if p_value < 0.01:
        return '**'
    if p_value < 0.05:
        return '*'
    return ''


def format_p_value(p_value: float) -> str:
    """
    Format a p-value for display.

    Args:
        p_value: Probability in [0, 1]

    Returns:
        '< 0.001', three decimals below 0.01, otherwise two decimals
    """
    _require_number(p_value, "p-value")

    if p_value < 0.001:
        return '< 0.001'
    if p_value < 0.01:
        return f"{p_value:.3f}"
    return f"{p_value:.2f}"


def format_percentage(value: Optional[float], decimal_places: int = 1) -> str:
    """
    Format a value already on the 0-100 scale as a percentage.

    Args:
        value: Percentage value (84.5 = 84.5%)
        decimal_places: Number of decimal places (default: 1)

    Returns:
        Formatted percentage string (e.g., "84.5%")
    """
    if value is None:
        return "Not available"

    _require_number(value, "Percentage value")

    return f"{value:.{decimal_places}f}%"


def format_number(value: Optional[float], decimal_places: int = 2) -> str:
    """Fixed-point number, 'Not available' for None, '∞' for infinities."""
    if value is None:
        return "Not available"

    _require_number(value, "Value")

    if math.isinf(value):
        return '∞' if value > 0 else '-∞'
    return f"{value:.{decimal_places}f}"


def format_timestamp(timestamp_ms: Optional[int]) -> str:
    """
    Format a millisecond epoch timestamp as "Month D, YYYY" (UTC).

    Raises:
        FormatterError: If the timestamp is not numeric
    """
    if timestamp_ms is None:
        return "Not available"

    _require_number(timestamp_ms, "Timestamp")

    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return moment.strftime("%B %d, %Y")


def _correlation_line(label: str, insight: Optional[Dict[str, Any]]) -> str:
    if insight is None:
        return f"  {label}: none"
    return (
        f"  {label}: {insight['metric1']} vs {insight['metric2']} "
        f"r={insight['correlation']:.3f}{significance_stars(insight['p_value'])} "
        f"(p {format_p_value(insight['p_value'])}) - {insight['interpretation']}"
    )


def _render_risk_distribution(risk: Dict[str, Any]) -> List[str]:
    lines = ["Risk distribution:"]
    for bucket in risk['distribution']:
        lines.append(
            f"  {bucket['level']:<10} {bucket['count']:>4}  {format_percentage(bucket['percentage'])}"
        )
    lines.append(
        f"  average {format_number(risk['average'], 1)}, "
        f"median {format_number(risk['median'], 1)}, "
        f"std {format_number(risk['standard_deviation'], 1)}"
    )
    return lines


def render_network_summary(analysis_type: str, data: Dict[str, Any]) -> str:
    """
    Plain-text summary of a network analysis result.

    Args:
        analysis_type: summary, correlations, risk or regression
        data: The 'data' member of a successful envelope

    Returns:
        Multi-line text

    Raises:
        FormatterError: If the analysis type is unknown
    """
    if analysis_type == 'summary':
        lines = ["Network quant summary", "", "Correlations:"]
        correlations = data['correlations']
        lines.append(_correlation_line("Strongest positive", correlations['strongest_positive']))
        lines.append(_correlation_line("Strongest negative", correlations['strongest_negative']))
        lines.append(f"  Significant pairs: {correlations['significant_count']}")
        lines.append("")
        lines.extend(_render_risk_distribution(data['risk']))
        lines.append("")
        lines.append("Top performers (Sharpe-like ratio):")
        for row in data['top_performers']:
            lines.append(
                f"  {row['node_id']}: {format_number(row['sharpe_ratio'])} "
                f"(consistency {format_number(row['consistency'], 1)})"
            )
        lines.append("Bottom performers (Sharpe-like ratio):")
        for row in data['bottom_performers']:
            lines.append(
                f"  {row['node_id']}: {format_number(row['sharpe_ratio'])} "
                f"(volatility {format_number(row['volatility'])})"
            )
        return "\n".join(lines)

    if analysis_type == 'correlations':
        lines = ["Correlation matrix", "", "Significant pairs:"]
        if not data['significant_pairs']:
            lines.append("  none")
        for pair in data['significant_pairs']:
            lines.append(_correlation_line("pair", pair))
            if pair['recommendation']:
                lines.append(f"    -> {pair['recommendation']}")
        return "\n".join(lines)

    if analysis_type == 'risk':
        return "\n".join(_render_risk_distribution(data))

    if analysis_type == 'regression':
        stars = significance_stars(data['p_value'])
        return "\n".join([
            f"Regression: {data['equation']}",
            f"  R² {format_number(data['r_squared'], 3)}, p {format_p_value(data['p_value'])}{stars}",
            f"  {data['interpretation']}"
        ])

    raise FormatterError(f"Unknown analysis type: {analysis_type}")


def render_node_summary(node_id: str, data: Dict[str, Any]) -> str:
    """
    Plain-text summary of a per-node analysis result.

    Sections appear only for the analyses present in `data`.
    """
    lines = [f"Node {node_id}"]

    profile = data.get('risk_profile')
    if profile is not None:
        drawdown = profile['drawdown']
        lines.extend([
            "",
            f"Risk: {profile['overall_risk_level']} (score {format_number(profile['risk_score'], 1)})",
            f"  Volatility score {format_number(profile['volatility']['score'], 1)}, "
            f"trend {profile['volatility']['trend']}",
            f"  Sharpe-like ratio {format_number(profile['risk_adjusted_performance']['sharpe_ratio'])} "
            f"({profile['risk_adjusted_performance']['interpretation']}), "
            f"rank {profile['risk_adjusted_performance']['network_rank']}",
            f"  Consistency {format_number(profile['consistency']['score'], 1)} "
            f"({profile['consistency']['reliability']}), streak {profile['consistency']['streak_days']}",
            f"  Max drawdown {format_percentage(drawdown['max_drawdown'])}, "
            f"current {format_percentage(drawdown['current_drawdown'])}",
        ])

    benchmark = data.get('benchmark')
    if benchmark is not None:
        lines.extend([
            "",
            f"Benchmark: {benchmark['overall_rating']} "
            f"({format_percentage(benchmark['overall_percentile'])} percentile), "
            f"rank {benchmark['rank_in_network']} of {benchmark['total_in_network']}",
        ])
        for name, metric in benchmark['metrics'].items():
            lines.append(
                f"  {name:<20} {format_number(metric['value'])}  "
                f"p{metric['percentile']:.0f}  {metric['rating']}"
            )

    if 'correlations' in data:
        lines.extend(["", "History correlations:"])
        if not data['correlations']:
            lines.append("  none (needs more than 10 points)")
        for insight in data['correlations']:
            lines.append(_correlation_line("pair", insight))

    if 'forecast' in data:
        forecast = data['forecast']
        lines.append("")
        if forecast is None:
            lines.append("Forecast: not enough history")
        else:
            lines.append(
                f"Forecast: {forecast['trend']['direction']} trend, "
                f"expected change {format_number(forecast['expected_change'], 1)}% "
                f"(confidence {format_number(forecast['confidence'])})"
            )
            for prediction in forecast['predictions']:
                lines.append(
                    f"  {format_timestamp(prediction['timestamp'])}: "
                    f"{format_number(prediction['value'], 1)} "
                    f"[{format_number(prediction['lower'], 1)}, {format_number(prediction['upper'], 1)}]"
                )

    return "\n".join(lines)
