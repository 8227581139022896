# tests/test_rank_distributions.py
"""
Tests for the Mann-Whitney and Wilcoxon rank distributions and the ranking
helpers.

Exact tables are compared with brute-force enumeration over small rank
vectors; the normal approximations are compared with the exact tables where
both are available.
"""

import itertools
import logging

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st
from numpy.testing import assert_allclose, assert_array_equal

from numkit.core.config import set_config
from numkit.core.exceptions import DimensionError, ParameterError
from numkit.models.distributions import (
    MannWhitneyDistribution, WilcoxonDistribution, rank_data, w_minimum, w_negative, w_positive
)


def brute_force_u(ranks, n1):
    """All U statistics of the first group, one per assignment."""
    ranks = np.asarray(ranks, dtype=float)
    n2 = len(ranks) - n1
    values = []
    for group in itertools.combinations(range(len(ranks)), n1):
        rank_sum = ranks[list(group)].sum()
        values.append(n1 * n2 + n1 * (n1 + 1) / 2.0 - rank_sum)
    return np.sort(values)


def brute_force_w(ranks):
    """All W+ statistics, one per sign pattern."""
    ranks = np.asarray(ranks, dtype=float)
    values = []
    for signs in itertools.product([0, 1], repeat=len(ranks)):
        values.append(float(np.dot(signs, ranks)))
    return np.sort(values)


class TestRanking:
    """Tests for rank_data and the signed-rank sums."""

    def test_ranks_without_ties(self):
        assert_array_equal(rank_data([3.0, 1.0, 2.0]), [3.0, 1.0, 2.0])

    def test_ties_share_average_rank(self):
        assert_array_equal(rank_data([10.0, 20.0, 10.0, 30.0]), [1.5, 3.0, 1.5, 4.0])
        assert_array_equal(rank_data([5, 5, 5]), [2.0, 2.0, 2.0])

    def test_signed_sums(self):
        signs = [1, -1, 1, -1, 0]
        ranks = [1.0, 2.0, 3.0, 4.0, 5.0]
        assert w_positive(signs, ranks) == 4.0
        assert w_negative(signs, ranks) == 6.0
        assert w_minimum(signs, ranks) == 4.0

    def test_magnitude_of_sign_is_ignored(self):
        assert w_positive([2.5, -0.1], [1.0, 2.0]) == 1.0

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            w_positive([1, -1], [1.0, 2.0, 3.0])

    @given(st.lists(st.sampled_from([-1, 1]), min_size=1, max_size=30))
    @settings(deadline=None, max_examples=50)
    def test_sums_total_triangular_number(self, signs):
        n = len(signs)
        ranks = np.arange(1, n + 1, dtype=float)
        assert w_positive(signs, ranks) + w_negative(signs, ranks) == n * (n + 1) / 2


class TestMannWhitneyDistribution:
    """Tests for the Mann-Whitney U distribution."""

    def test_reference_pmf(self):
        dist = MannWhitneyDistribution([1, 2, 3, 4, 5], n1=2, n2=3)
        assert dist.exact
        assert_allclose(dist.pdf(np.arange(9.0)),
                        [0.1, 0.1, 0.2, 0.2, 0.2, 0.1, 0.1, 0.0, 0.0], atol=1e-15)
        assert dist.pdf(2) == pytest.approx(0.2)
        assert dist.cdf(2) == pytest.approx(0.4)

    def test_table_matches_enumeration(self):
        ranks = rank_data([1.1, 2.5, 2.5, 4.0, 7.2, 7.2, 9.9])
        dist = MannWhitneyDistribution(ranks, n1=3)
        assert dist.n2 == 4
        assert_allclose(dist.table, brute_force_u(ranks, 3))

    def test_table_is_read_only(self):
        dist = MannWhitneyDistribution([1, 2, 3, 4], n1=2)
        with pytest.raises(ValueError):
            dist.table[0] = 100.0

    def test_pmf_sums_to_one(self):
        dist = MannWhitneyDistribution(np.arange(1, 9), n1=4)
        support = np.arange(0.0, 17.0)
        assert_allclose(np.sum(dist.pdf(support)), 1.0)
        assert dist.cdf(16.0) == 1.0
        assert dist.cdf(-0.5) == 0.0

    def test_cdf_plus_upper_tail_is_one(self):
        dist = MannWhitneyDistribution(np.arange(1, 10), n1=4)
        x = np.arange(0.0, 21.0)
        assert_allclose(dist.cdf(x) + dist.sf(x), 1.0)

    def test_moments(self):
        dist = MannWhitneyDistribution(np.arange(1, 11), n1=4)
        assert dist.mean == 12.0
        assert dist.variance == pytest.approx(4 * 6 * 11 / 12.0)
        assert_allclose(np.mean(dist.table), dist.mean)

    def test_approximation_is_close_to_exact(self):
        ranks = np.arange(1, 25)
        exact = MannWhitneyDistribution(ranks, n1=12, exact=True)
        approx = MannWhitneyDistribution(ranks, n1=12, exact=False)
        assert not approx.exact
        assert approx.table is None
        x = np.array([40.0, 55.0, 72.0, 90.0, 105.0])
        assert_allclose(approx.cdf(x), exact.cdf(x), atol=0.01)

    def test_configured_cutoff_selects_approximation(self, clean_config, caplog):
        set_config("testing", "exact_max_assignments", 10)
        with caplog.at_level(logging.WARNING, logger="numkit"):
            dist = MannWhitneyDistribution(np.arange(1, 11), n1=5)
        assert not dist.exact
        assert "normal approximation" in caplog.text

    def test_approximate_ppf_within_support(self):
        dist = MannWhitneyDistribution(np.arange(1, 31), n1=15, exact=False)
        assert dist.ppf(0.0) == 0.0
        assert dist.ppf(1.0) == 225.0
        assert dist.ppf(0.5) == pytest.approx(112.0, abs=1.0)

    def test_exact_ppf(self):
        dist = MannWhitneyDistribution([1, 2, 3, 4, 5], n1=2)
        assert dist.ppf(0.1) == 0.0
        assert dist.ppf(0.4) == 2.0
        assert dist.ppf(1.0) == 6.0

    def test_invalid_sizes(self):
        with pytest.raises(ParameterError):
            MannWhitneyDistribution([1, 2, 3], n1=2, n2=2)
        with pytest.raises(ParameterError):
            MannWhitneyDistribution([1, 2, 3], n1=0)

    def test_exact_request_beyond_limit(self):
        with pytest.raises(ParameterError):
            MannWhitneyDistribution(np.arange(1, 71), n1=35, exact=True)
        with pytest.raises(ParameterError):
            MannWhitneyDistribution(np.arange(1, 41), n1=20, exact=True)

    def test_large_groups_fall_back_to_approximation(self):
        dist = MannWhitneyDistribution(np.arange(1, 71), n1=35)
        assert not dist.exact
        assert dist.mean == 35 * 35 / 2.0

    def test_equality_uses_ranks(self):
        a = MannWhitneyDistribution([1, 2, 3, 4], n1=2)
        b = MannWhitneyDistribution(np.array([1.0, 2.0, 3.0, 4.0]), n1=2)
        assert a == b
        assert a != MannWhitneyDistribution([1, 2, 3, 4], n1=1)


class TestWilcoxonDistribution:
    """Tests for the Wilcoxon W distribution."""

    def test_reference_pmf(self):
        dist = WilcoxonDistribution([1, 2, 3])
        expected = np.array([1, 1, 1, 2, 1, 1, 1]) / 8.0
        assert_allclose(dist.pdf(np.arange(7.0)), expected)
        assert dist.pdf(3) == 0.25

    def test_zeros_are_dropped(self):
        dist = WilcoxonDistribution([0.0, 1.0, 0.0, 2.0, 3.0])
        assert dist.samples == 3
        assert_array_equal(dist.ranks, [1.0, 2.0, 3.0])

    def test_negative_ranks_use_magnitude(self):
        assert WilcoxonDistribution([-1, 2, -3]) == WilcoxonDistribution([1, 2, 3])

    def test_table_matches_enumeration(self):
        ranks = [1.0, 2.5, 2.5, 4.0, 5.0, 6.0]
        dist = WilcoxonDistribution(ranks)
        assert_allclose(dist.table, brute_force_w(ranks))

    def test_moments_for_integer_ranks(self):
        n = 10
        dist = WilcoxonDistribution(np.arange(1, n + 1))
        assert dist.mean == n * (n + 1) / 4.0
        assert dist.variance == pytest.approx(n * (n + 1) * (2 * n + 1) / 24.0)
        assert dist.support == (0.0, 55.0)

    def test_symmetry(self):
        dist = WilcoxonDistribution(np.arange(1, 9))
        total = 36.0
        x = np.arange(0.0, 37.0)
        assert_allclose(dist.pdf(x), dist.pdf(total - x))

    def test_approximation_is_close_to_exact(self):
        ranks = np.arange(1, 21)
        exact = WilcoxonDistribution(ranks, exact=True)
        approx = WilcoxonDistribution(ranks, exact=False)
        x = np.array([50.0, 80.0, 105.0, 130.0, 160.0])
        assert_allclose(approx.cdf(x), exact.cdf(x), atol=0.01)

    def test_empty_ranks_raise(self):
        with pytest.raises(ParameterError):
            WilcoxonDistribution([0.0, 0.0])

    def test_exact_request_beyond_limit(self):
        with pytest.raises(ParameterError):
            WilcoxonDistribution(np.arange(1, 40), exact=True)

    @given(st.lists(st.integers(min_value=1, max_value=20), min_size=1, max_size=10))
    @settings(deadline=None, max_examples=30)
    def test_cdf_is_monotone_and_bounded(self, ranks):
        dist = WilcoxonDistribution(ranks)
        x = np.linspace(-1.0, sum(ranks) + 1.0, 50)
        values = dist.cdf(x)
        assert np.all(np.diff(values) >= 0)
        assert values[0] == 0.0
        assert values[-1] == 1.0
