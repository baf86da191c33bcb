"""
Tests for the special functions behind significance tests.
Checks known values and inverse/round-trip properties.
"""

import math
import pytest

from analytics.calculations.distributions import (
    normal_cdf,
    normal_inverse_cdf,
    gamma_ln,
    incomplete_beta,
    t_distribution_p_value,
    t_critical_value,
    P_LOW,
    P_HIGH
)


class TestNormalCdf:
    """Tests for normal_cdf."""

    def test_normal_cdf_center(self):
        """CDF at 0 is one half."""
        assert normal_cdf(0) == pytest.approx(0.5, abs=1e-6)

    def test_normal_cdf_known_quantiles(self):
        """CDF at familiar z values."""
        assert normal_cdf(1.96) == pytest.approx(0.975, abs=1e-4)
        assert normal_cdf(-1.96) == pytest.approx(0.025, abs=1e-4)
        assert normal_cdf(1.0) == pytest.approx(0.8413, abs=1e-4)

    def test_normal_cdf_symmetry(self):
        """Φ(-x) = 1 - Φ(x)."""
        for x in [0.3, 1.2, 2.5]:
            assert normal_cdf(-x) == pytest.approx(1 - normal_cdf(x), abs=1e-7)

    def test_normal_cdf_monotonic(self):
        """CDF never decreases."""
        xs = [-4, -2, -1, -0.5, 0, 0.5, 1, 2, 4]
        values = [normal_cdf(x) for x in xs]
        assert values == sorted(values)


class TestNormalInverseCdf:
    """Tests for normal_inverse_cdf."""

    def test_inverse_known_values(self):
        """Quantiles of the standard normal."""
        assert normal_inverse_cdf(0.5) == pytest.approx(0.0, abs=1e-9)
        assert normal_inverse_cdf(0.975) == pytest.approx(1.959964, abs=1e-4)
        assert normal_inverse_cdf(0.025) == pytest.approx(-1.959964, abs=1e-4)

    @pytest.mark.parametrize("p", [0.001, 0.01, P_LOW / 2, 0.1, 0.3, 0.5, 0.7, 0.9, 0.99, (1 + P_HIGH) / 2])
    def test_cdf_of_inverse_round_trip(self, p):
        """normal_cdf(normal_inverse_cdf(p)) ~= p across all three branches."""
        assert normal_cdf(normal_inverse_cdf(p)) == pytest.approx(p, abs=1e-6)

    def test_inverse_bounds(self):
        """p at or beyond 0 and 1 maps to infinities."""
        assert normal_inverse_cdf(0) == -math.inf
        assert normal_inverse_cdf(1) == math.inf


class TestGammaLn:
    """Tests for gamma_ln."""

    @pytest.mark.parametrize("n", [1, 2, 3, 5, 10, 20])
    def test_gamma_ln_factorials(self, n):
        """ln Γ(n) = ln((n-1)!)."""
        assert gamma_ln(n) == pytest.approx(math.log(math.factorial(n - 1)), abs=1e-8)

    def test_gamma_ln_half(self):
        """Γ(1/2) = √π."""
        assert gamma_ln(0.5) == pytest.approx(math.log(math.sqrt(math.pi)), abs=1e-8)


class TestIncompleteBeta:
    """Tests for incomplete_beta."""

    def test_incomplete_beta_limits(self):
        """I_0 = 0 and I_1 = 1."""
        assert incomplete_beta(0, 2, 3) == 0.0
        assert incomplete_beta(1, 2, 3) == 1.0

    def test_incomplete_beta_symmetric_midpoint(self):
        """I_0.5(a, a) = 0.5."""
        assert incomplete_beta(0.5, 3, 3) == pytest.approx(0.5, abs=1e-8)

    def test_incomplete_beta_uniform(self):
        """I_x(1, 1) = x."""
        assert incomplete_beta(0.3, 1, 1) == pytest.approx(0.3, abs=1e-8)

    def test_incomplete_beta_reflection(self):
        """I_x(a, b) = 1 - I_(1-x)(b, a)."""
        x, a, b = 0.2, 2.5, 4.0
        assert incomplete_beta(x, a, b) == pytest.approx(1 - incomplete_beta(1 - x, b, a), abs=1e-8)


class TestTDistribution:
    """Tests for t_distribution_p_value and t_critical_value."""

    def test_p_value_zero_statistic(self):
        """t = 0 gives p = 1."""
        assert t_distribution_p_value(0, 10) == pytest.approx(1.0)

    def test_p_value_table_value(self):
        """t = 2.228 with 10 df is the two-tailed 5% point."""
        assert t_distribution_p_value(2.228, 10) == pytest.approx(0.05, abs=1e-3)

    def test_p_value_large_df_uses_normal(self):
        """df > 100 follows the normal tail."""
        assert t_distribution_p_value(1.96, 500) == pytest.approx(0.05, abs=1e-3)

    def test_p_value_degenerate_inputs(self):
        """Non-positive df, NaN and infinite statistics."""
        assert t_distribution_p_value(3.0, 0) == 1.0
        assert t_distribution_p_value(math.nan, 5) == 1.0
        assert t_distribution_p_value(math.inf, 5) == 0.0

    def test_p_value_in_unit_interval(self):
        """p-values stay within [0, 1]."""
        for t in [0.1, 0.5, 1, 2, 5, 20]:
            for df in [1, 3, 30, 150]:
                assert 0.0 <= t_distribution_p_value(t, df) <= 1.0

    def test_critical_value_branches(self):
        """Coarse lookup on alpha / 2 with a 1/df correction."""
        assert t_critical_value(0.01, 10) == pytest.approx(2.576 + 0.3)
        assert t_critical_value(0.02, 10) == pytest.approx(2.326 + 0.25)
        assert t_critical_value(0.05, 10) == pytest.approx(1.96 + 0.2)
        assert t_critical_value(0.10, 10) == pytest.approx(1.645 + 0.15)
        assert t_critical_value(0.20, 10) == pytest.approx(1.282 + 0.1)

    def test_critical_value_from_confidence_level(self):
        """1 - 0.95 lands just above 0.05 in floating point, so the 1.645 branch applies."""
        assert t_critical_value(1 - 0.95, 10) == pytest.approx(1.645 + 0.15)

    def test_critical_value_large_df(self):
        """df > 100 uses the normal quantile."""
        assert t_critical_value(0.05, 200) == pytest.approx(1.96, abs=1e-3)

    def test_critical_value_no_df(self):
        """No degrees of freedom gives 0."""
        assert t_critical_value(0.05, 0) == 0.0
