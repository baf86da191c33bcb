"""
Tests for risk profile aggregation.
Uses small synthetic networks with stable, rising and volatile nodes.
"""

import pytest

from analytics.config import QuantConfig
from analytics.node_metrics import history_points
from analytics.risk_profile import (
    consistency_streak,
    volatility_trend,
    risk_score,
    network_risk_context,
    calculate_risk_profile
)


DAY_MS = 86_400_000


def make_node(node_id, values, **overrides):
    """Canonical node row with a performance history."""
    node = {
        'id': node_id,
        'performance_score': values[-1] if values else 50.0,
        'uptime': 99.0,
        'average_latency': 50.0,
        'storage_utilization': 50.0,
        'capacity_bytes': 1e12,
        'history': {
            'performance_scores': [
                {'timestamp': 1_760_000_000_000 + i * DAY_MS, 'value': float(v)}
                for i, v in enumerate(values)
            ]
        }
    }
    node.update(overrides)
    return node


@pytest.fixture
def network():
    """Stable, rising, volatile and declining nodes."""
    return [
        make_node('stable', [80, 81, 80, 81, 80, 81, 80, 81, 80, 81]),
        make_node('rising', [60, 62, 64, 66, 68, 70, 72, 74, 76, 78]),
        make_node('volatile', [90, 40, 85, 30, 95, 35, 80, 25, 90, 45]),
        make_node('declining', [90, 85, 80, 75, 70, 65, 60, 55, 50, 45]),
    ]


class TestConsistencyStreak:
    """Tests for consistency_streak."""

    def test_trailing_streak(self):
        """Counts trailing steps within the threshold."""
        assert consistency_streak([1, 2, 3, 20, 21]) == 1
        assert consistency_streak([50, 52, 55, 57]) == 3

    def test_window_limits_streak(self):
        """Only the last `window` points count."""
        assert consistency_streak(list(range(100)), threshold=10, window=30) == 29

    def test_threshold_parameter(self):
        """Tighter threshold breaks the streak."""
        assert consistency_streak([50, 52, 55, 57], threshold=2.5) == 1

    def test_short_series(self):
        """Fewer than 2 points have no streak."""
        assert consistency_streak([5]) == 0


class TestVolatilityTrend:
    """Tests for volatility_trend."""

    def test_increasing(self):
        """Latest window more volatile than the one before."""
        assert volatility_trend([1.0] * 7 + [2.0] * 7) == 'increasing'

    def test_decreasing(self):
        """Latest window calmer than the one before."""
        assert volatility_trend([2.0] * 7 + [1.0] * 7) == 'decreasing'

    def test_no_older_window_is_stable(self):
        """Without an older window the trend is stable."""
        assert volatility_trend([1.0, 5.0, 3.0]) == 'stable'
        assert volatility_trend([]) == 'stable'


class TestRiskScore:
    """Tests for risk_score."""

    def test_weighted_components(self):
        """0.4 volatility + 0.35 drawdown + 0.25 recovery."""
        assert risk_score(100, 0, 0) == 0.0
        assert risk_score(50, 10, 2) == pytest.approx(50 * 0.4 + 20 * 0.35 + 20 * 0.25)

    def test_unrecovered_scores_fifty(self):
        """Never-recovered drawdowns use 50 for recovery."""
        assert risk_score(0, 50, None) == pytest.approx(40 + 35 + 12.5)

    def test_components_capped(self):
        """Drawdown and recovery components cap at 100."""
        assert risk_score(0, 500, 1000) == pytest.approx(100.0)


class TestCalculateRiskProfile:
    """Tests for calculate_risk_profile."""

    def test_profile_shape(self, network):
        """Every section is populated."""
        node = network[0]
        profile = calculate_risk_profile(node, history_points(node), network)

        assert profile['node_id'] == 'stable'
        assert set(profile) == {
            'node_id', 'volatility', 'consistency', 'risk_adjusted_performance',
            'drawdown', 'overall_risk_level', 'risk_score', 'last_updated'
        }
        assert set(profile['volatility']) == {'score', 'raw', 'percentile', 'trend', 'rolling_values'}
        assert set(profile['drawdown']) == {
            'max_drawdown', 'current_drawdown', 'recovery_factor',
            'days_in_drawdown', 'current_drawdown_days', 'average_drawdown'
        }
        assert len(profile['volatility']['rolling_values']) == 4

    def test_stable_node_less_risky_than_volatile(self, network):
        """Volatility and drawdown raise the risk score."""
        stable = calculate_risk_profile(network[0], history_points(network[0]), network)
        volatile = calculate_risk_profile(network[2], history_points(network[2]), network)

        assert stable['risk_score'] < volatile['risk_score']
        assert stable['consistency']['score'] > volatile['consistency']['score']
        assert stable['volatility']['percentile'] < volatile['volatility']['percentile']

    def test_scores_in_bounds(self, network):
        """Scores stay within [0, 100] and levels match scores."""
        for node in network:
            profile = calculate_risk_profile(node, history_points(node), network)

            assert 0 <= profile['risk_score'] <= 100
            assert 0 <= profile['consistency']['score'] <= 100
            assert 0 <= profile['volatility']['score'] <= 100
            assert profile['overall_risk_level'] in {'low', 'medium', 'high', 'very_high'}

    def test_declining_node_in_drawdown(self, network):
        """An unrecovered decline shows up as current drawdown."""
        node = network[3]
        profile = calculate_risk_profile(node, history_points(node), network)

        assert profile['drawdown']['max_drawdown'] == pytest.approx(50.0)
        assert profile['drawdown']['current_drawdown'] == pytest.approx(50.0)
        assert profile['drawdown']['current_drawdown_days'] == 8
        assert profile['drawdown']['recovery_factor'] == 0

    def test_network_rank(self, network):
        """Rank counts nodes with a strictly better Sharpe-like ratio."""
        ranks = [
            calculate_risk_profile(n, history_points(n), network)['risk_adjusted_performance']['network_rank']
            for n in network
        ]
        assert min(ranks) == 1
        assert all(1 <= r <= len(network) for r in ranks)

    def test_precomputed_context_matches(self, network):
        """Passing a precomputed network context gives the same profile."""
        node = network[1]
        context = network_risk_context(network)

        with_context = calculate_risk_profile(node, history_points(node), network, network_context=context)
        without = calculate_risk_profile(node, history_points(node), network)

        with_context.pop('last_updated')
        without.pop('last_updated')
        assert with_context == without

    def test_config_rolling_window(self, network):
        """Rolling window comes from the config."""
        node = network[0]
        profile = calculate_risk_profile(
            node, history_points(node), network, config=QuantConfig(rolling_window=3)
        )
        assert len(profile['volatility']['rolling_values']) == 8

    def test_empty_history(self, network):
        """A node without history still gets a full profile."""
        node = make_node('fresh', [], history=None)
        profile = calculate_risk_profile(node, [], network + [node])

        assert profile['volatility']['raw'] == 0.0
        assert profile['consistency']['score'] == 100.0
        assert profile['consistency']['streak_days'] == 0
