"""
Drawdown and recovery calculation utilities.
Pure functions for peak-to-trough analysis of a metric series.
"""

from typing import Dict, List, Optional, Sequence, Any

from analytics.calculations.basic_stats import mean


def _drawdown_pct(peak: float, value: float) -> float:
    """Percentage decline from peak to value (0 for non-positive peaks)."""
    if peak <= 0:
        return 0.0
    return (peak - value) * 100 / peak


def _recovery_time(values: Sequence[float], trough_idx: int, peak_value: float) -> Optional[int]:
    """Bars from trough until the series regains peak_value, or None."""
    for i in range(trough_idx + 1, len(values)):
        if values[i] >= peak_value:
            return i - trough_idx
    return None


def calculate_drawdown(values: Sequence[float]) -> Dict[str, Any]:
    """
    Drawdown analysis using a running peak.

    A point is in drawdown when it is strictly below the running peak; an
    episode ends when the series regains (>=) that peak. Every episode is
    recorded, and the deepest one is reported as the maximum drawdown.

    Args:
        values: Series in chronological order

    Returns:
        Dictionary with:
        - max_drawdown: Deepest peak-to-trough decline (%)
        - max_drawdown_duration: Bars from start of that episode to its trough
        - current_drawdown: Decline of the last point from the running peak (%)
        - current_drawdown_duration: Bars since the unresolved episode began
        - recovery_time: Bars from the deepest trough until its peak is regained
          (0 when the series never drew down, None if not yet recovered)
        - average_drawdown: Mean decline over all points in drawdown (%)
        - drawdown_periods: [{start, end, depth, duration, recovered}]
    """
    if len(values) < 2:
        return {
            'max_drawdown': 0.0,
            'max_drawdown_duration': 0,
            'current_drawdown': 0.0,
            'current_drawdown_duration': 0,
            'recovery_time': None,
            'average_drawdown': 0.0,
            'drawdown_periods': []
        }

    peak = values[0]
    in_drawdown = False
    episode_start = 0
    episode_trough = values[0]

    max_drawdown = 0.0
    max_start = 0
    max_end = 0
    max_peak = peak

    drawdowns: List[float] = []
    periods: List[Dict[str, Any]] = []

    for i, value in enumerate(values):
        if value >= peak:
            if in_drawdown:
                periods.append({
                    'start': episode_start,
                    'end': i - 1,
                    'depth': _drawdown_pct(peak, episode_trough),
                    'duration': i - 1 - episode_start,
                    'recovered': True
                })
            peak = value
            in_drawdown = False
            continue

        drawdown = _drawdown_pct(peak, value)
        drawdowns.append(drawdown)

        if not in_drawdown:
            in_drawdown = True
            episode_start = i
            episode_trough = value
        else:
            episode_trough = min(episode_trough, value)

        if drawdown > max_drawdown:
            max_drawdown = drawdown
            max_start = episode_start
            max_end = i
            max_peak = peak

    last_idx = len(values) - 1
    current_drawdown = _drawdown_pct(peak, values[last_idx]) if in_drawdown else 0.0
    current_duration = last_idx - episode_start if in_drawdown else 0

    if in_drawdown:
        periods.append({
            'start': episode_start,
            'end': last_idx,
            'depth': _drawdown_pct(peak, episode_trough),
            'duration': current_duration,
            'recovered': False
        })

    if max_drawdown == 0:
        recovery_time: Optional[int] = 0
    else:
        recovery_time = _recovery_time(values, max_end, max_peak)

    return {
        'max_drawdown': max_drawdown,
        'max_drawdown_duration': max_end - max_start,
        'current_drawdown': current_drawdown,
        'current_drawdown_duration': current_duration,
        'recovery_time': recovery_time,
        'average_drawdown': mean(drawdowns) if drawdowns else 0.0,
        'drawdown_periods': periods
    }
