"""
Tests for volatility, Sharpe-like ratio and consistency utilities.
Uses crafted series with known dispersion for verification.
"""

import math
import pytest

from analytics.calculations.volatility import (
    rolling_volatility,
    volatility_score,
    calculate_volatility,
    ANNUALIZATION_FACTOR
)
from analytics.calculations.risk_adjusted import (
    calculate_sharpe_ratio,
    consistency_score,
    sharpe_percentile
)


class TestCalculateVolatility:
    """Tests for calculate_volatility."""

    def test_constant_series(self):
        """No dispersion: stdev 0 and a perfect score."""
        result = calculate_volatility([10, 10, 10, 10])

        assert result['standard_deviation'] == 0.0
        assert result['coefficient_of_variation'] == 0.0
        assert result['volatility_score'] == 100.0

    def test_population_standard_deviation(self):
        """Series dispersion divides by n."""
        result = calculate_volatility([2, 4, 4, 4, 5, 5, 7, 9])

        assert result['standard_deviation'] == pytest.approx(2.0)
        assert result['coefficient_of_variation'] == pytest.approx(2.0 / 5.0)
        assert result['volatility_score'] == pytest.approx(20.0)
        assert result['annualized_volatility'] == pytest.approx(2.0 * math.sqrt(ANNUALIZATION_FACTOR))

    def test_custom_annualization_factor(self):
        """Annualization factor is a parameter."""
        result = calculate_volatility([1, 3], annualization_factor=365)
        assert result['annualized_volatility'] == pytest.approx(1.0 * math.sqrt(365))

    def test_short_series(self):
        """Fewer than 2 values give zeros."""
        result = calculate_volatility([42])

        assert result['standard_deviation'] == 0.0
        assert result['rolling_volatility'] == []
        assert result['volatility_score'] == 0.0

    def test_zero_mean_series(self):
        """Zero mean leaves CV at 0."""
        result = calculate_volatility([-1, 1, -1, 1])
        assert result['coefficient_of_variation'] == 0.0

    @pytest.mark.parametrize("values", [
        [1, 100, 1, 100],
        [50, 51, 49, 50],
        [0.001, 1000, 3, 7, 0.5],
    ])
    def test_score_in_bounds(self, values):
        """Volatility score stays within [0, 100]."""
        assert 0.0 <= calculate_volatility(values)['volatility_score'] <= 100.0


class TestRollingVolatility:
    """Tests for rolling_volatility."""

    def test_rolling_windows(self):
        """One population stdev per full window."""
        assert rolling_volatility([1, 3, 5], window=2) == pytest.approx([1.0, 1.0])

    def test_rolling_length(self):
        """n - window + 1 values."""
        values = list(range(20))
        assert len(rolling_volatility(values, window=7)) == 14

    def test_series_shorter_than_window(self):
        """Too-short series give no windows."""
        assert rolling_volatility([1, 2, 3], window=7) == []


class TestVolatilityScore:
    """Tests for volatility_score."""

    def test_score_mapping(self):
        """100 - 200·CV clamped to [0, 100]."""
        assert volatility_score(0) == 100.0
        assert volatility_score(0.25) == pytest.approx(50.0)
        assert volatility_score(0.75) == 0.0


class TestSharpeRatio:
    """Tests for calculate_sharpe_ratio."""

    def test_sample_standard_deviation(self):
        """Mean 2, sample stdev 1 gives ratio 2."""
        result = calculate_sharpe_ratio([1, 2, 3])

        assert result['ratio'] == pytest.approx(2.0)
        assert result['interpretation'] == 'good'
        assert result['percentile_rank'] == pytest.approx(50 + 25 * math.tanh(1))

    def test_zero_variance_positive_mean(self):
        """Constant positive series uses the zero-variance ratio."""
        result = calculate_sharpe_ratio([10, 10, 10])
        assert result['ratio'] == 10.0
        assert result['interpretation'] == 'excellent'

    def test_zero_variance_ratio_configurable(self):
        """Zero-variance ratio is a parameter."""
        assert calculate_sharpe_ratio([10, 10], zero_variance_ratio=5.0)['ratio'] == 5.0

    def test_zero_variance_no_excess(self):
        """Constant series at the risk-free rate gives 0."""
        assert calculate_sharpe_ratio([3, 3, 3], risk_free_rate=3)['ratio'] == 0.0

    def test_short_series(self):
        """Fewer than 2 values give the poor default."""
        result = calculate_sharpe_ratio([5])
        assert result == {'ratio': 0.0, 'interpretation': 'poor', 'percentile_rank': 0.0}

    def test_sharpe_percentile_centre(self):
        """A ratio of 1 maps to the 50th percentile."""
        assert sharpe_percentile(1.0) == pytest.approx(50.0)
        assert 0 <= sharpe_percentile(-50) <= sharpe_percentile(50) <= 100


class TestConsistencyScore:
    """Tests for consistency_score."""

    def test_constant_series_fully_consistent(self):
        """CV 0 scores 100."""
        assert consistency_score([80, 80, 80]) == 100.0

    def test_short_series(self):
        """Fewer than 2 values score 100."""
        assert consistency_score([1]) == 100.0

    def test_known_cv(self):
        """CV 0.4 scores 100 × (1 - 0.8)."""
        assert consistency_score([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(20.0)

    @pytest.mark.parametrize("values", [
        [1, 100, 1, 100],
        [95, 96, 94, 95],
        [0.1, 50, 3],
    ])
    def test_score_in_bounds(self, values):
        """Consistency stays within [0, 100]."""
        assert 0.0 <= consistency_score(values) <= 100.0
