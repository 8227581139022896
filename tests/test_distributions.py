# tests/test_distributions.py
"""
Tests for the univariate distributions.

Every continuous family is compared with its SciPy counterpart for density,
CDF, survival and quantile functions and moments. Estimation is checked on
large simulated samples.
"""

import math
import warnings

import numpy as np
import pandas as pd
import pytest
from hypothesis import given, settings, strategies as st
from numpy.testing import assert_allclose
from scipy import integrate, stats

from numkit.core.exceptions import (
    DataError, DistributionError, NotSupportedError, ParameterError
)
from numkit.models.distributions import (
    BetaDistribution, Binomial, Exponential, GammaDistribution, Gompertz, InverseGamma,
    KolmogorovSmirnovDistribution, Laplace, Normal, StudentT, Weibull,
    distribution_from_name, get_available_distributions, standard_normal
)


# (distribution, SciPy oracle, points inside the support)
CONTINUOUS_CASES = [
    (Normal(1.5, 2.0), stats.norm(loc=1.5, scale=2.0), [-3.0, 0.0, 1.5, 4.2]),
    (Exponential(2.5), stats.expon(scale=0.4), [0.01, 0.3, 1.0, 3.0]),
    (GammaDistribution(2.5, 1.5), stats.gamma(a=2.5, scale=1.5), [0.1, 1.0, 3.7, 10.0]),
    (BetaDistribution(2.0, 5.0), stats.beta(a=2.0, b=5.0), [0.05, 0.2, 0.5, 0.9]),
    (StudentT(4.0), stats.t(df=4.0), [-4.0, -0.5, 0.0, 2.5]),
    (Gompertz(0.7, 1.3), stats.gompertz(c=0.7, scale=1 / 1.3), [0.05, 0.4, 1.0, 2.5]),
    (Weibull(1.8, 2.0), stats.weibull_min(c=1.8, scale=2.0), [0.1, 1.0, 2.0, 5.0]),
    (InverseGamma(3.0, 2.0), stats.invgamma(a=3.0, scale=2.0), [0.2, 0.5, 1.0, 4.0]),
    (Laplace(-1.0, 0.5), stats.laplace(loc=-1.0, scale=0.5), [-3.0, -1.2, -1.0, 0.7]),
]

CASE_IDS = [type(case[0]).__name__ for case in CONTINUOUS_CASES]


class TestAgainstScipy:
    """Continuous families agree with SciPy."""

    @pytest.mark.parametrize("dist, oracle, x", CONTINUOUS_CASES, ids=CASE_IDS)
    def test_pdf_cdf_sf(self, dist, oracle, x):
        x = np.asarray(x)
        assert_allclose(dist.pdf(x), oracle.pdf(x), rtol=1e-9)
        assert_allclose(dist.logpdf(x), oracle.logpdf(x), rtol=1e-9, atol=1e-12)
        assert_allclose(dist.cdf(x), oracle.cdf(x), rtol=1e-9, atol=1e-14)
        assert_allclose(dist.sf(x), oracle.sf(x), rtol=1e-9, atol=1e-14)

    @pytest.mark.parametrize("dist, oracle, x", CONTINUOUS_CASES, ids=CASE_IDS)
    def test_ppf(self, dist, oracle, x):
        q = np.array([0.01, 0.1, 0.5, 0.9, 0.99])
        assert_allclose(dist.ppf(q), oracle.ppf(q), rtol=1e-8)

    @pytest.mark.parametrize("dist, oracle, x", CONTINUOUS_CASES, ids=CASE_IDS)
    def test_median(self, dist, oracle, x):
        assert_allclose(dist.median, oracle.median(), rtol=1e-8)

    @pytest.mark.parametrize("dist, oracle, x", [
        case for case in CONTINUOUS_CASES if not isinstance(case[0], Gompertz)
    ])
    def test_moments(self, dist, oracle, x):
        assert_allclose(dist.mean, oracle.mean(), rtol=1e-10)
        assert_allclose(dist.variance, oracle.var(), rtol=1e-10)
        assert_allclose(dist.std, oracle.std(), rtol=1e-10)
        assert_allclose(dist.entropy, oracle.entropy(), rtol=1e-8)


class TestDistributionInterface:
    """Behaviour shared by every family."""

    @pytest.mark.parametrize("dist, oracle, x", CONTINUOUS_CASES, ids=CASE_IDS)
    def test_cdf_is_monotone(self, dist, oracle, x):
        grid = np.linspace(*oracle.ppf([0.001, 0.999]), 200)
        values = dist.cdf(grid)
        assert np.all(np.diff(values) >= -1e-15)
        assert np.all((values >= 0) & (values <= 1))

    @pytest.mark.parametrize("dist, oracle, x", CONTINUOUS_CASES, ids=CASE_IDS)
    def test_ppf_inverts_cdf(self, dist, oracle, x):
        q = np.linspace(0.02, 0.98, 25)
        assert_allclose(dist.cdf(dist.ppf(q)), q, rtol=1e-8, atol=1e-10)

    def test_scalar_in_scalar_out(self):
        dist = Normal(0.0, 1.0)
        assert isinstance(dist.pdf(0.0), float)
        assert isinstance(dist.cdf(0.0), float)
        assert dist.pdf(np.zeros((2, 3))).shape == (2, 3)

    def test_outside_support(self):
        dist = Exponential(1.0)
        assert dist.pdf(-1.0) == 0.0
        assert dist.logpdf(-1.0) == -np.inf
        assert dist.cdf(-1.0) == 0.0
        assert dist.sf(-1.0) == 1.0

    def test_ppf_rejects_invalid_probability(self):
        with pytest.raises(ParameterError):
            Normal().ppf(1.5)
        with pytest.raises(ParameterError):
            Normal().ppf([0.5, -0.1])

    def test_ppf_boundaries(self):
        dist = Exponential(1.0)
        assert dist.ppf(0.0) == 0.0
        assert dist.ppf(1.0) == np.inf

    @pytest.mark.parametrize("factory", [
        lambda: Normal(0.0, -1.0),
        lambda: Normal(0.0, 0.0),
        lambda: Exponential(0.0),
        lambda: GammaDistribution(-1.0, 1.0),
        lambda: BetaDistribution(1.0, 0.0),
        lambda: StudentT(0.0),
        lambda: Laplace(0.0, -2.0),
        lambda: Binomial(10, 1.5),
        lambda: Binomial(-1, 0.5),
    ])
    def test_invalid_parameters_raise(self, factory):
        with pytest.raises(ParameterError):
            factory()

    def test_clone_and_equality(self):
        dist = GammaDistribution(2.0, 3.0)
        copy = dist.clone()
        assert copy == dist
        assert copy is not dist
        assert hash(copy) == hash(dist)
        assert GammaDistribution(2.0, 3.5) != dist
        assert "shape=2.0" in repr(dist)

    def test_rvs_is_reproducible(self):
        dist = Normal(0.0, 1.0)
        first = dist.rvs(size=5, random_state=7)
        second = dist.rvs(size=5, random_state=np.random.default_rng(7))
        assert_allclose(first, second)
        assert isinstance(dist.rvs(random_state=1), float)
        assert dist.rvs(size=(2, 3), random_state=1).shape == (2, 3)

    def test_loglikelihood(self, rng):
        x = rng.standard_normal(50)
        dist = Normal(0.0, 1.0)
        assert_allclose(dist.loglikelihood(x), np.sum(stats.norm.logpdf(x)), rtol=1e-12)
        assert_allclose(dist.loglikelihood(x, weights=np.ones(50)), dist.loglikelihood(x),
                        rtol=1e-12)

    def test_registry(self):
        names = get_available_distributions()
        assert "normal" in names and "mann_whitney" in names
        assert distribution_from_name("normal") is Normal
        with pytest.raises(ParameterError):
            distribution_from_name("cauchy")

    def test_standard_normal(self):
        dist = standard_normal()
        assert dist.mean == 0.0 and dist.std == 1.0
        assert_allclose(dist.ppf(0.975), 1.959963984540054, rtol=1e-12)


class TestNotSupported:
    """Quantities without a closed form raise instead of returning a value."""

    def test_student_t_moments(self):
        with pytest.raises(NotSupportedError):
            StudentT(1.0).mean
        with pytest.raises(NotSupportedError):
            StudentT(2.0).variance
        assert StudentT(3.0).mean == 0.0

    def test_gompertz_moments(self):
        with pytest.raises(NotSupportedError):
            Gompertz(1.0, 1.0).mean
        with pytest.raises(NotSupportedError):
            Gompertz(1.0, 1.0).entropy

    def test_kolmogorov_smirnov_estimate(self):
        with pytest.raises(NotSupportedError):
            KolmogorovSmirnovDistribution.estimate([0.1, 0.2, 0.3])

    def test_not_supported_is_not_implemented(self):
        """Callers may catch the standard exception type."""
        with pytest.raises(NotImplementedError):
            Gompertz(1.0, 1.0).variance


class TestEstimation:
    """Maximum likelihood and moment estimators."""

    def test_exponential_rate(self, rng):
        x = Exponential(2.5).rvs(1_000_000, random_state=rng)
        fitted = Exponential.estimate(x)
        assert abs(fitted.rate - 2.5) < 0.01

    def test_normal(self, rng):
        x = rng.normal(3.0, 0.5, size=100_000)
        fitted = Normal.estimate(x)
        assert fitted.mean == pytest.approx(3.0, abs=0.01)
        assert fitted.std == pytest.approx(0.5, abs=0.01)

    def test_normal_from_pandas(self, rng):
        x = rng.normal(size=500)
        assert Normal.estimate(pd.Series(x)) == Normal.estimate(x)

    def test_weighted_normal(self):
        x = np.array([0.0, 1.0, 10.0])
        fitted = Normal.estimate(x, weights=[1.0, 1.0, 0.0])
        assert fitted.mean == pytest.approx(0.5)

    def test_gamma(self, rng):
        x = rng.gamma(shape=3.0, scale=2.0, size=200_000)
        fitted = GammaDistribution.estimate(x)
        assert fitted.shape == pytest.approx(3.0, rel=0.02)
        assert fitted.scale == pytest.approx(2.0, rel=0.02)

    def test_gompertz_numerical_mle(self, rng):
        truth = Gompertz(0.5, 2.0)
        x = truth.rvs(size=20_000, random_state=rng)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            fitted = Gompertz.estimate(x)
        assert fitted.eta == pytest.approx(0.5, rel=0.1)
        assert fitted.b == pytest.approx(2.0, rel=0.1)

    def test_fit_returns_new_instance(self, rng):
        dist = Laplace(0.0, 1.0)
        x = rng.laplace(2.0, 0.5, size=50_000)
        fitted = dist.fit(x)
        assert fitted is not dist
        assert dist.location == 0.0
        assert fitted.location == pytest.approx(2.0, abs=0.02)
        assert fitted.scale == pytest.approx(0.5, rel=0.05)

    def test_binomial_with_known_trials(self, rng):
        x = rng.binomial(20, 0.3, size=10_000)
        fitted = Binomial.estimate(x, trials=20)
        assert fitted.trials == 20
        assert fitted.probability == pytest.approx(0.3, abs=0.01)

    def test_binomial_rejects_out_of_support(self):
        with pytest.raises(DistributionError):
            Binomial.estimate([1.0, 5.0], trials=3)

    def test_empty_or_nan_sample(self):
        with pytest.raises(DataError):
            Normal.estimate([])
        with pytest.raises(DataError):
            Normal.estimate([1.0, np.nan])

    def test_positive_family_rejects_negative_data(self):
        with pytest.raises((DataError, DistributionError)):
            Exponential.estimate([-3.0, 1.0])


class TestDensityNormalization:
    """Densities integrate to one over their support."""

    @pytest.mark.parametrize("dist", [
        GammaDistribution(0.7, 2.0),
        GammaDistribution(3.0, 1.5),
        GammaDistribution(12.0, 0.25),
        BetaDistribution(0.5, 0.5),
        BetaDistribution(2.0, 5.0),
        BetaDistribution(1.0, 1.0),
    ], ids=["gamma-0.7", "gamma-3", "gamma-12", "beta-arcsine", "beta-2-5", "beta-uniform"])
    def test_gamma_and_beta(self, dist):
        lower, upper = dist.support
        total, _ = integrate.quad(dist.pdf, lower, upper, limit=200)
        assert total == pytest.approx(1.0, abs=1e-7)

    @pytest.mark.parametrize("dist, oracle, x", CONTINUOUS_CASES, ids=CASE_IDS)
    def test_all_families(self, dist, oracle, x):
        lower, upper = dist.support
        total, _ = integrate.quad(dist.pdf, lower, upper, limit=200)
        assert total == pytest.approx(1.0, abs=1e-6)


class TestSampling:
    """Moments of the library's own variates match the declared moments."""

    @pytest.mark.parametrize("dist", [
        Weibull(1.8, 2.0),
        InverseGamma(8.0, 2.0),
        Laplace(-1.0, 0.5),
        Exponential(2.5),
        GammaDistribution(2.5, 1.5),
        BetaDistribution(2.0, 5.0),
    ], ids=lambda d: type(d).__name__)
    def test_moments_converge(self, dist, rng):
        x = dist.rvs(400_000, random_state=rng)
        assert np.mean(x) == pytest.approx(dist.mean, rel=0.01, abs=0.005)
        assert np.var(x) == pytest.approx(dist.variance, rel=0.03)

    def test_gompertz_against_scipy_moments(self, rng):
        x = Gompertz(0.7, 1.3).rvs(400_000, random_state=rng)
        oracle = stats.gompertz(c=0.7, scale=1 / 1.3)
        assert np.mean(x) == pytest.approx(oracle.mean(), rel=0.01)
        assert np.var(x) == pytest.approx(oracle.var(), rel=0.03)

    def test_variates_stay_in_support(self, rng):
        x = InverseGamma(3.0, 2.0).rvs(10_000, random_state=rng)
        assert np.all(x > 0)
        y = BetaDistribution(0.5, 0.5).rvs(10_000, random_state=rng)
        assert np.all((y >= 0) & (y <= 1))

    def test_estimate_recovers_generating_parameters(self, rng):
        truth = Weibull(1.8, 2.0)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            fitted = Weibull.estimate(truth.rvs(50_000, random_state=rng))
        assert fitted.shape == pytest.approx(1.8, rel=0.03)
        assert fitted.scale == pytest.approx(2.0, rel=0.03)


class TestBinomial:
    """Discrete binomial distribution."""

    def test_pmf_and_cdf(self):
        dist = Binomial(10, 0.5)
        oracle = stats.binom(10, 0.5)
        k = np.arange(-1, 12, dtype=float)
        assert_allclose(dist.pdf(k), oracle.pmf(k), atol=1e-14)
        assert_allclose(dist.cdf(k), oracle.cdf(k), atol=1e-12)
        assert_allclose(dist.sf(k), oracle.sf(k), atol=1e-12)

    def test_non_integer_points(self):
        dist = Binomial(10, 0.3)
        assert dist.pdf(2.5) == 0.0
        assert dist.cdf(2.5) == pytest.approx(dist.cdf(2.0))

    def test_ppf(self):
        dist = Binomial(18, 0.5)
        q = np.array([0.05, 0.5, 0.95, 1.0])
        assert_allclose(dist.ppf(q), stats.binom(18, 0.5).ppf(q))

    def test_moments(self):
        dist = Binomial(12, 0.25)
        assert dist.mean == 3.0
        assert dist.variance == pytest.approx(2.25)
        assert dist.discrete

    @given(n=st.integers(min_value=1, max_value=60), p=st.floats(min_value=0.01, max_value=0.99))
    @settings(deadline=None, max_examples=30)
    def test_pmf_sums_to_one(self, n, p):
        dist = Binomial(n, p)
        assert_allclose(np.sum(dist.pdf(np.arange(n + 1, dtype=float))), 1.0, rtol=1e-10)


class TestKolmogorovSmirnovDistribution:
    """Distribution of the Kolmogorov-Smirnov statistic."""

    def test_matches_scipy(self):
        dist = KolmogorovSmirnovDistribution(10)
        x = np.array([0.1, 0.2, 0.3, 0.5])
        assert_allclose(dist.cdf(x), stats.kstwo(10).cdf(x), rtol=1e-12)
        assert_allclose(dist.one_sided_sf(x), stats.ksone(10).sf(x), rtol=1e-12)

    def test_critical_value(self):
        assert KolmogorovSmirnovDistribution(10).ppf(0.95) == pytest.approx(0.409, abs=1e-3)

    def test_invalid_sample_count(self):
        with pytest.raises(ParameterError):
            KolmogorovSmirnovDistribution(0)


class TestPositiveFamilies:
    """Property tests over parameter ranges."""

    @given(shape=st.floats(min_value=0.2, max_value=20.0), scale=st.floats(min_value=0.1, max_value=10.0))
    @settings(deadline=None, max_examples=30)
    def test_gamma_against_scipy(self, shape, scale):
        dist = GammaDistribution(shape, scale)
        oracle = stats.gamma(a=shape, scale=scale)
        x = oracle.ppf([0.05, 0.5, 0.95])
        assert_allclose(dist.cdf(x), [0.05, 0.5, 0.95], rtol=1e-7)

    @given(dof=st.floats(min_value=0.5, max_value=200.0))
    @settings(deadline=None, max_examples=30)
    def test_student_t_symmetry(self, dof):
        dist = StudentT(dof)
        x = np.array([0.3, 1.0, 2.5])
        assert_allclose(dist.cdf(-x), dist.sf(x), rtol=1e-10)
        assert_allclose(dist.ppf(0.5), 0.0, atol=1e-10)

    def test_exponential_memoryless(self):
        dist = Exponential(0.7)
        assert_allclose(dist.sf(3.0), dist.sf(1.0) * dist.sf(2.0), rtol=1e-12)
        assert dist.mean == pytest.approx(1 / 0.7)
        assert dist.median == pytest.approx(math.log(2) / 0.7)
