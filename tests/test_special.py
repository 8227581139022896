# tests/test_special.py
"""
Tests for the special functions.

Reference values for the Gamma family come from published tables; the
incomplete Gamma and Beta functions are checked against SciPy, which serves
as the numerical oracle throughout the suite.
"""

import math
import warnings

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st
from numpy.testing import assert_allclose
from scipy import special as sp_special

from numkit.core.exceptions import ParameterError
from numkit.special import (
    beta, digamma, gamma, incomplete_beta, inverse_incomplete_beta,
    inverse_lower_incomplete_gamma, log_beta, log_gamma, lower_incomplete_gamma,
    upper_incomplete_gamma
)


class TestGamma:
    """Tests for the Gamma function."""

    @pytest.mark.parametrize("x, expected", [
        (1.0, 1.0),
        (2.0, 1.0),
        (1.5, 0.886226925452758),
        (5.7, 72.52763452022295),
        (114.2, 5.749274244634086e184),
        (-52.1252, -6.188338737526232e-68),
        (-0.10817480950786047, -9.940515795403039),
    ])
    def test_reference_values(self, x, expected):
        """Gamma matches tabulated values for positive and negative arguments."""
        assert_allclose(gamma(x), expected, rtol=1e-10)

    def test_integer_arguments_are_factorials(self):
        """Gamma(n) equals (n - 1)! for small integers."""
        for n in range(1, 20):
            assert gamma(n) == pytest.approx(math.factorial(n - 1), rel=1e-14)

    @pytest.mark.parametrize("x", [1024.6271, 281982742.13])
    def test_overflow_is_infinite(self, x):
        """Arguments beyond the double range give +inf rather than an error."""
        assert gamma(x) == np.inf

    @pytest.mark.parametrize("x", [0.0, -1.0, -2.0, -17.0])
    def test_poles_raise(self, x):
        """Zero and negative integers are poles."""
        with pytest.raises(ParameterError):
            gamma(x)

    def test_scalar_and_array_shapes(self):
        """Scalar input gives a float, array input keeps its shape."""
        assert isinstance(gamma(3.0), float)
        values = gamma(np.array([[1.0, 2.0], [3.0, 4.0]]))
        assert values.shape == (2, 2)
        assert_allclose(values, [[1.0, 1.0], [2.0, 6.0]])

    def test_nan_propagates(self):
        """NaN input gives NaN output without raising."""
        assert np.isnan(gamma(np.nan))

    @given(x=st.floats(min_value=0.01, max_value=150.0))
    @settings(deadline=None, max_examples=50)
    def test_recurrence(self, x):
        """Gamma(x + 1) = x Gamma(x)."""
        assert_allclose(gamma(x + 1.0), x * gamma(x), rtol=1e-11)

    @given(x=st.floats(min_value=0.01, max_value=150.0))
    @settings(deadline=None, max_examples=50)
    def test_agrees_with_scipy(self, x):
        """Gamma agrees with scipy.special.gamma."""
        assert_allclose(gamma(x), sp_special.gamma(x), rtol=1e-11)


class TestLogGamma:
    """Tests for the log-Gamma function."""

    def test_reference_values(self):
        """log-Gamma matches tabulated values far beyond the Gamma overflow."""
        assert_allclose(log_gamma(281982742.12985912), 5.204655969482103e9, rtol=1e-10)
        assert_allclose(log_gamma(-52.1252), -154.7531196513472, rtol=1e-10)

    def test_ones_and_twos(self):
        """log-Gamma vanishes at 1 and 2."""
        assert log_gamma(1.0) == 0.0
        assert log_gamma(2.0) == 0.0

    def test_pole_raises(self):
        with pytest.raises(ParameterError):
            log_gamma(-3.0)

    @given(x=st.floats(min_value=0.01, max_value=1e6))
    @settings(deadline=None, max_examples=50)
    def test_agrees_with_scipy(self, x):
        """log-Gamma agrees with scipy.special.gammaln on the positive axis."""
        assert_allclose(log_gamma(x), sp_special.gammaln(x), rtol=1e-11, atol=1e-12)


class TestDigamma:
    """Tests for the digamma function."""

    def test_reference_values(self):
        assert_allclose(digamma(1.0), -0.5772156649015329, rtol=1e-13)
        assert_allclose(digamma(2.0), 0.4227843350984671, rtol=1e-13)

    def test_pole_raises(self):
        with pytest.raises(ParameterError):
            digamma(0.0)

    @given(x=st.floats(min_value=-20.0, max_value=200.0).filter(lambda v: abs(v - round(v)) > 1e-3))
    @settings(deadline=None, max_examples=50)
    def test_agrees_with_scipy(self, x):
        """Digamma agrees with scipy.special.psi away from the poles."""
        assert_allclose(digamma(x), sp_special.psi(x), rtol=1e-9, atol=1e-10)


class TestIncompleteGamma:
    """Tests for the regularized incomplete Gamma functions and their inverse."""

    @pytest.mark.parametrize("a, x", [
        (0.5, 0.1), (1.0, 1.0), (2.5, 3.0), (10.0, 4.0), (10.0, 25.0), (100.0, 90.0),
    ])
    def test_agrees_with_scipy(self, a, x):
        assert_allclose(lower_incomplete_gamma(a, x), sp_special.gammainc(a, x), rtol=1e-10)
        assert_allclose(upper_incomplete_gamma(a, x), sp_special.gammaincc(a, x), rtol=1e-10)

    def test_complementary(self):
        """P(a, x) + Q(a, x) = 1."""
        a = np.array([0.5, 1.0, 3.0, 20.0])
        x = np.array([0.2, 1.5, 2.0, 30.0])
        assert_allclose(lower_incomplete_gamma(a, x) + upper_incomplete_gamma(a, x), 1.0)

    def test_broadcast_arguments(self):
        """Mixed-shape arguments broadcast without warnings."""
        a = np.array([[0.5], [2.0], [7.5]])
        x = np.array([0.1, 1.0, 4.0, 12.0])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            lower = lower_incomplete_gamma(a, x)
            upper = upper_incomplete_gamma(a, x)
        assert lower.shape == (3, 4)
        assert_allclose(lower, sp_special.gammainc(a, x), rtol=1e-10)
        assert_allclose(upper, sp_special.gammaincc(a, x), rtol=1e-10)

    def test_boundaries(self):
        assert lower_incomplete_gamma(2.0, 0.0) == 0.0
        assert upper_incomplete_gamma(2.0, 0.0) == 1.0

    def test_domain_errors(self):
        with pytest.raises(ParameterError):
            lower_incomplete_gamma(0.0, 1.0)
        with pytest.raises(ParameterError):
            upper_incomplete_gamma(1.0, -1.0)
        with pytest.raises(ParameterError):
            inverse_lower_incomplete_gamma(1.0, 1.5)

    @given(a=st.floats(min_value=0.1, max_value=50.0), p=st.floats(min_value=0.001, max_value=0.999))
    @settings(deadline=None, max_examples=50)
    def test_inverse(self, a, p):
        """The inverse recovers the probability."""
        x = inverse_lower_incomplete_gamma(a, p)
        assert_allclose(lower_incomplete_gamma(a, x), p, rtol=1e-8, atol=1e-12)


class TestBeta:
    """Tests for the Beta function family."""

    def test_beta_from_gamma(self):
        """B(a, b) = Gamma(a) Gamma(b) / Gamma(a + b)."""
        for a, b in [(0.5, 0.5), (1.0, 1.0), (2.0, 3.0), (7.5, 1.25)]:
            expected = gamma(a) * gamma(b) / gamma(a + b)
            assert_allclose(beta(a, b), expected, rtol=1e-10)
            assert_allclose(log_beta(a, b), math.log(expected), rtol=1e-12, atol=1e-14)

    def test_incomplete_beta_reference(self):
        assert_allclose(incomplete_beta(5.0, 4.0, 0.5), 0.36328125, rtol=1e-10)

    def test_incomplete_beta_boundaries(self):
        assert incomplete_beta(2.0, 3.0, 0.0) == 0.0
        assert incomplete_beta(2.0, 3.0, 1.0) == 1.0

    def test_incomplete_beta_symmetry(self):
        """I_x(a, b) = 1 - I_{1-x}(b, a)."""
        x = np.linspace(0.05, 0.95, 10)
        assert_allclose(incomplete_beta(2.5, 7.0, x), 1.0 - incomplete_beta(7.0, 2.5, 1.0 - x),
                        rtol=1e-10)

    def test_domain_errors(self):
        with pytest.raises(ParameterError):
            beta(-1.0, 2.0)
        with pytest.raises(ParameterError):
            incomplete_beta(1.0, 1.0, 1.5)
        with pytest.raises(ParameterError):
            inverse_incomplete_beta(1.0, 1.0, -0.1)

    @given(a=st.floats(min_value=0.2, max_value=30.0), b=st.floats(min_value=0.2, max_value=30.0),
           x=st.floats(min_value=0.0, max_value=1.0))
    @settings(deadline=None, max_examples=50)
    def test_agrees_with_scipy(self, a, b, x):
        assert_allclose(incomplete_beta(a, b, x), sp_special.betainc(a, b, x), rtol=1e-9, atol=1e-12)

    @given(a=st.floats(min_value=0.5, max_value=20.0), b=st.floats(min_value=0.5, max_value=20.0),
           p=st.floats(min_value=0.001, max_value=0.999))
    @settings(deadline=None, max_examples=50)
    def test_inverse(self, a, b, p):
        x = inverse_incomplete_beta(a, b, p)
        assert_allclose(incomplete_beta(a, b, x), p, rtol=1e-8, atol=1e-10)

    def test_broadcast_arguments(self):
        """Scalar and array arguments broadcast without warnings."""
        x = np.array([[0.05, 0.3], [0.6, 0.95]])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            values = incomplete_beta(2.0, np.array([1.5, 4.0]), x)
            betas = beta(np.array([[1.0], [2.5]]), 3.0)
        assert values.shape == (2, 2)
        assert_allclose(values, sp_special.betainc(2.0, np.array([1.5, 4.0]), x), rtol=1e-10)
        assert_allclose(betas, sp_special.beta(np.array([[1.0], [2.5]]), 3.0), rtol=1e-12)
