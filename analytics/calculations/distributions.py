"""
Distribution helpers.
Pure functions approximating the special functions behind significance tests:
standard normal CDF and its inverse, log-gamma, regularized incomplete beta,
and Student's t tail probabilities / critical values.
"""

import math


# Abramowitz & Stegun 7.1.26
_AS_A1 = 0.254829592
_AS_A2 = -0.284496736
_AS_A3 = 1.421413741
_AS_A4 = -1.453152027
_AS_A5 = 1.061405429
_AS_P = 0.3275911

# Rational approximation coefficients for the inverse normal CDF
_INV_A = [
    -3.969683028665376e1, 2.209460984245205e2, -2.759285104469687e2,
    1.383577518672690e2, -3.066479806614716e1, 2.506628277459239e0,
]
_INV_B = [
    -5.447609879822406e1, 1.615858368580409e2, -1.556989798598866e2,
    6.680131188771972e1, -1.328068155288572e1,
]
_INV_C = [
    -7.784894002430293e-3, -3.223964580411365e-1, -2.400758277161838e0,
    -2.549732539343734e0, 4.374664141464968e0, 2.938163982698783e0,
]
_INV_D = [
    7.784695709041462e-3, 3.224671290700398e-1, 2.445134137142996e0,
    3.754408661907416e0,
]
P_LOW = 0.02425
P_HIGH = 1 - P_LOW

# Numerical Recipes Lanczos series (g = 5.5)
_LANCZOS_COF = [
    76.18009172947146, -86.50532032941677, 24.01409824083091,
    -1.231739572450155, 0.1208650973866179e-2, -0.5395239384953e-5,
]

BETA_CF_MAX_ITERATIONS = 100
BETA_CF_EPSILON = 1e-10

# Above this many degrees of freedom the t-distribution is treated as normal
LARGE_DF = 100


def normal_cdf(x: float) -> float:
    """
    Standard normal cumulative distribution function.

    Uses the Abramowitz-Stegun erf approximation (max error ~1.5e-7).

    Args:
        x: Point at which to evaluate the CDF

    Returns:
        P(Z <= x) for Z ~ N(0, 1)
    """
    sign = -1.0 if x < 0 else 1.0
    z = abs(x) / math.sqrt(2)

    t = 1.0 / (1.0 + _AS_P * z)
    poly = ((((_AS_A5 * t + _AS_A4) * t + _AS_A3) * t + _AS_A2) * t + _AS_A1) * t
    y = 1.0 - poly * math.exp(-z * z)

    return 0.5 * (1.0 + sign * y)


def normal_inverse_cdf(p: float) -> float:
    """
    Inverse of the standard normal CDF (quantile function).

    Three-branch rational approximation: lower tail (p < 0.02425),
    central region, and upper tail (p > 0.97575).

    Args:
        p: Probability

    Returns:
        z such that normal_cdf(z) ~= p; -inf for p <= 0 and +inf for p >= 1
    """
    if p <= 0:
        return -math.inf
    if p >= 1:
        return math.inf

    c, d = _INV_C, _INV_D

    if p < P_LOW:
        q = math.sqrt(-2 * math.log(p))
        return (
            (((((c[0] * q + c[1]) * q + c[2]) * q + c[3]) * q + c[4]) * q + c[5])
            / ((((d[0] * q + d[1]) * q + d[2]) * q + d[3]) * q + 1)
        )

    if p <= P_HIGH:
        a, b = _INV_A, _INV_B
        q = p - 0.5
        r = q * q
        return (
            (((((a[0] * r + a[1]) * r + a[2]) * r + a[3]) * r + a[4]) * r + a[5]) * q
            / (((((b[0] * r + b[1]) * r + b[2]) * r + b[3]) * r + b[4]) * r + 1)
        )

    q = math.sqrt(-2 * math.log(1 - p))
    return -(
        (((((c[0] * q + c[1]) * q + c[2]) * q + c[3]) * q + c[4]) * q + c[5])
        / ((((d[0] * q + d[1]) * q + d[2]) * q + d[3]) * q + 1)
    )


def gamma_ln(x: float) -> float:
    """
    Natural log of the gamma function for x > 0 (Lanczos approximation).

    Args:
        x: Positive argument

    Returns:
        ln(Gamma(x))
    """
    y = x
    tmp = x + 5.5
    tmp -= (x + 0.5) * math.log(tmp)

    ser = 1.000000000190015
    for cof in _LANCZOS_COF:
        y += 1
        ser += cof / y

    return -tmp + math.log(2.5066282746310005 * ser / x)


def _beta_continued_fraction(x: float, a: float, b: float) -> float:
    """Evaluate the incomplete beta continued fraction with modified Lentz."""
    eps = BETA_CF_EPSILON

    qab = a + b
    qap = a + 1
    qam = a - 1

    c = 1.0
    d = 1 - qab * x / qap
    if abs(d) < eps:
        d = eps
    d = 1 / d
    h = d

    for m in range(1, BETA_CF_MAX_ITERATIONS + 1):
        m2 = 2 * m

        # Even step
        aa = m * (b - m) * x / ((qam + m2) * (a + m2))
        d = 1 + aa * d
        if abs(d) < eps:
            d = eps
        c = 1 + aa / c
        if abs(c) < eps:
            c = eps
        d = 1 / d
        h *= d * c

        # Odd step
        aa = -(a + m) * (qab + m) * x / ((a + m2) * (qap + m2))
        d = 1 + aa * d
        if abs(d) < eps:
            d = eps
        c = 1 + aa / c
        if abs(c) < eps:
            c = eps
        d = 1 / d
        delta = d * c
        h *= delta

        if abs(delta - 1) < eps:
            break

    return h


def incomplete_beta(x: float, a: float, b: float) -> float:
    """
    Regularized incomplete beta function I_x(a, b).

    The continued fraction converges quickly for x < (a+1)/(a+b+2); above
    that point the symmetry I_x(a, b) = 1 - I_{1-x}(b, a) is used instead.

    Args:
        x: Upper integration limit in [0, 1]
        a: First shape parameter (> 0)
        b: Second shape parameter (> 0)

    Returns:
        I_x(a, b) in [0, 1]
    """
    if x <= 0:
        return 0.0
    if x >= 1:
        return 1.0

    bt = math.exp(
        gamma_ln(a + b) - gamma_ln(a) - gamma_ln(b)
        + a * math.log(x) + b * math.log(1 - x)
    )

    if x < (a + 1) / (a + b + 2):
        return bt * _beta_continued_fraction(x, a, b) / a
    return 1 - bt * _beta_continued_fraction(1 - x, b, a) / b


def t_distribution_p_value(t: float, df: float) -> float:
    """
    Two-tailed p-value for a Student's t statistic.

    Args:
        t: Test statistic
        df: Degrees of freedom

    Returns:
        P(|T| >= |t|); 1 when df <= 0, snaps to 0/1 for non-finite t
    """
    if df <= 0:
        return 1.0
    if math.isnan(t):
        return 1.0
    if math.isinf(t):
        return 0.0 if t > 0 else 1.0

    if df > LARGE_DF:
        return 2 * (1 - normal_cdf(abs(t)))

    x = df / (df + t * t)
    return incomplete_beta(x, df / 2, 0.5)


def t_critical_value(alpha: float, df: float) -> float:
    """
    Approximate two-sided critical value of Student's t.

    For df <= 100 this is a coarse lookup on alpha/2 with a 1/df correction,
    not an exact t-table.

    Args:
        alpha: Significance level (0.05 for a 95% interval)
        df: Degrees of freedom

    Returns:
        Critical value t* (0 when df <= 0)
    """
    if df <= 0:
        return 0.0

    if df > LARGE_DF:
        return normal_inverse_cdf(1 - alpha / 2)

    alpha_half = alpha / 2

    if alpha_half <= 0.005:
        return 2.576 + 3 / df
    if alpha_half <= 0.01:
        return 2.326 + 2.5 / df
    if alpha_half <= 0.025:
        return 1.96 + 2 / df
    if alpha_half <= 0.05:
        return 1.645 + 1.5 / df

    return 1.282 + 1 / df
