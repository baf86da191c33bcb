"""
Tests for threshold-based classification labelers.
"""

import pytest

from analytics.labelers import (
    classify_correlation_strength,
    classify_correlation_direction,
    classify_sharpe_ratio,
    classify_reliability,
    classify_risk_level,
    classify_benchmark_rating,
    classify_overall_rating,
    classify_volatility_trend,
    interpret_correlation
)


class TestCorrelationLabels:
    """Tests for correlation strength, direction and interpretation."""

    @pytest.mark.parametrize("coefficient,expected", [
        (0.95, 'strong'), (-0.7, 'strong'), (0.5, 'moderate'),
        (-0.25, 'weak'), (0.1, 'none'), (0.0, 'none'),
    ])
    def test_strength(self, coefficient, expected):
        """Buckets on |r| at 0.7, 0.4 and 0.2."""
        assert classify_correlation_strength(coefficient) == expected

    @pytest.mark.parametrize("coefficient,expected", [
        (0.5, 'positive'), (-0.5, 'negative'), (0.1, 'none'), (-0.05, 'none'),
    ])
    def test_direction(self, coefficient, expected):
        """Dead zone of ±0.1."""
        assert classify_correlation_direction(coefficient) == expected

    def test_interpretation(self):
        """Plain-language descriptions."""
        assert interpret_correlation(0.85) == 'Strong positive correlation'
        assert interpret_correlation(-0.65) == 'Moderate-to-strong negative correlation'
        assert interpret_correlation(0.45) == 'Moderate positive correlation'
        assert interpret_correlation(-0.3) == 'Weak negative correlation'
        assert interpret_correlation(0.1) == 'No significant correlation'


class TestPerformanceLabels:
    """Tests for Sharpe, reliability and risk buckets."""

    @pytest.mark.parametrize("ratio,expected", [
        (3.5, 'excellent'), (2.0, 'good'), (1.5, 'average'),
        (0.7, 'below_average'), (0.1, 'poor'), (-1, 'poor'),
    ])
    def test_sharpe_ratio(self, ratio, expected):
        """Cut points at 3, 2, 1 and 0.5."""
        assert classify_sharpe_ratio(ratio) == expected

    @pytest.mark.parametrize("score,expected", [
        (85, 'very_high'), (60, 'high'), (45, 'medium'), (10, 'low'),
    ])
    def test_reliability(self, score, expected):
        """Cut points at 80, 60 and 40."""
        assert classify_reliability(score) == expected

    @pytest.mark.parametrize("score,expected", [
        (0, 'low'), (24.9, 'low'), (25, 'medium'), (50, 'high'), (75, 'very_high'), (100, 'very_high'),
    ])
    def test_risk_level(self, score, expected):
        """Cut points at 25, 50 and 75."""
        assert classify_risk_level(score) == expected


class TestBenchmarkLabels:
    """Tests for benchmark and overall ratings."""

    def test_benchmark_rating_higher_is_better(self):
        """Top and bottom of the network."""
        assert classify_benchmark_rating(100) == 'excellent'
        assert classify_benchmark_rating(75) == 'above_average'
        assert classify_benchmark_rating(50) == 'average'
        assert classify_benchmark_rating(20) == 'below_average'
        assert classify_benchmark_rating(0) == 'poor'

    def test_benchmark_rating_lower_is_better(self):
        """Percentile is inverted for latency-like metrics."""
        assert classify_benchmark_rating(0, higher_is_better=False) == 'excellent'
        assert classify_benchmark_rating(100, higher_is_better=False) == 'poor'

    def test_overall_rating(self):
        """Cut points at 90, 60 and 40."""
        assert classify_overall_rating(95) == 'top_performer'
        assert classify_overall_rating(65) == 'above_average'
        assert classify_overall_rating(45) == 'average'
        assert classify_overall_rating(10) == 'below_average'

    def test_volatility_trend(self):
        """±10% band around the older average."""
        assert classify_volatility_trend(1.2, 1.0) == 'increasing'
        assert classify_volatility_trend(0.8, 1.0) == 'decreasing'
        assert classify_volatility_trend(1.05, 1.0) == 'stable'
