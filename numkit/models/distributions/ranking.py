'''
Ranking helpers and the shared machinery of the exact rank distributions.

``RankDistribution`` holds the sorted table of statistic values produced by
enumerating every group or sign assignment of a rank vector. Each assignment
is equally likely under the null hypothesis, so the probability mass of a
value is its multiplicity in the table divided by the table length and the
CDF is a binary search. The table is built once, marked read-only and never
rebuilt.

When enumeration is too expensive, the distribution falls back to a normal
approximation with the exact mean and variance of the statistic and a
continuity correction of one half. The cutoff is the number of assignments,
compared against ``testing.exact_max_assignments`` in the configuration.
'''

import logging
from typing import Any, Optional, Tuple

import numpy as np
from scipy import special as sp_special
from scipy import stats

from numkit.core.config import get_testing_config
from numkit.core.exceptions import DimensionError
from numkit.models.distributions.base import UnivariateDistribution

logger = logging.getLogger("numkit.models.distributions.ranking")


def rank_data(x: Any) -> np.ndarray:
    """Ranks of ``x`` starting at 1, with tied values sharing their average rank.

    Examples:
        >>> rank_data([10.0, 20.0, 10.0, 30.0])
        array([1.5, 3. , 1.5, 4. ])
    """
    return stats.rankdata(np.asarray(x, dtype=np.float64), method="average")


def _signs_and_ranks(signs: Any, ranks: Any) -> Tuple[np.ndarray, np.ndarray]:
    signs = np.sign(np.asarray(signs, dtype=np.float64)).ravel()
    ranks = np.asarray(ranks, dtype=np.float64).ravel()
    if signs.shape != ranks.shape:
        raise DimensionError(
            f"signs and ranks must have the same length, got {len(signs)} and {len(ranks)}",
            array_name="ranks",
            expected_shape=signs.shape,
            actual_shape=ranks.shape
        )
    return signs, ranks


def w_positive(signs: Any, ranks: Any) -> float:
    """Sum of the ranks whose sign is positive (the W+ statistic)."""
    signs, ranks = _signs_and_ranks(signs, ranks)
    return float(np.sum(ranks[signs > 0]))


def w_negative(signs: Any, ranks: Any) -> float:
    """Sum of the ranks whose sign is negative (the W- statistic)."""
    signs, ranks = _signs_and_ranks(signs, ranks)
    return float(np.sum(ranks[signs < 0]))


def w_minimum(signs: Any, ranks: Any) -> float:
    """The smaller of W+ and W-.

    Zero signs contribute to neither sum, so for nonzero signs and ranks
    1..N the two sums always total N(N + 1) / 2.
    """
    signs, ranks = _signs_and_ranks(signs, ranks)
    return float(min(np.sum(ranks[signs > 0]), np.sum(ranks[signs < 0])))


def use_exact(assignments: int, exact: Optional[bool], family: str) -> bool:
    """Decide between enumeration and the normal approximation.

    Args:
        assignments: Number of assignments enumeration would visit
        exact: Caller's choice; None applies the configured cutoff
        family: Distribution name for log messages

    Returns:
        bool: True to enumerate
    """
    if exact is not None:
        if exact:
            logger.debug(f"{family}: exact enumeration of {assignments} assignments requested")
        return bool(exact)

    limit = get_testing_config().exact_max_assignments
    if assignments <= limit:
        logger.debug(f"{family}: enumerating {assignments} assignments")
        return True

    logger.warning(f"{family}: {assignments} assignments exceed the exact limit of {limit}, "
                   f"using the normal approximation")
    return False


class RankDistribution(UnivariateDistribution):
    """Base class of the discrete rank-sum distributions.

    Subclasses build ``self._table`` (or leave it None in approximate mode)
    and provide ``mean`` and ``variance``.
    """

    discrete = True

    def __init__(self, params: Any, name: str, table: Optional[np.ndarray]):
        super().__init__(params, name=name)
        if table is not None:
            table.flags.writeable = False
        self._table = table

    @property
    def exact(self) -> bool:
        """Whether the distribution was built by exact enumeration."""
        return self._table is not None

    @property
    def table(self) -> Optional[np.ndarray]:
        """Sorted statistic values of all assignments (read-only), None when approximate."""
        return self._table

    def _continuity(self, x: np.ndarray) -> np.ndarray:
        with np.errstate(divide="ignore", invalid="ignore"):
            return (x + 0.5 - self.mean) / np.sqrt(self.variance)

    def _pdf(self, x: np.ndarray) -> np.ndarray:
        if self._table is None:
            return self._cdf(x) - self._cdf(x - 1.0)
        left = np.searchsorted(self._table, x, side="left")
        right = np.searchsorted(self._table, x, side="right")
        return (right - left) / float(len(self._table))

    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        with np.errstate(divide="ignore"):
            return np.log(self._pdf(x))

    def _cdf(self, x: np.ndarray) -> np.ndarray:
        if self._table is None:
            return sp_special.ndtr(self._continuity(x))
        return np.searchsorted(self._table, x, side="right") / float(len(self._table))

    def _sf(self, x: np.ndarray) -> np.ndarray:
        if self._table is None:
            return sp_special.ndtr(-self._continuity(x))
        total = len(self._table)
        return (total - np.searchsorted(self._table, x, side="right")) / float(total)

    def _ppf(self, q: np.ndarray) -> np.ndarray:
        lower, upper = self.support
        if self._table is None:
            value = self.mean + np.sqrt(self.variance) * sp_special.ndtri(q) - 0.5
            return np.clip(np.ceil(value), lower, upper)
        total = len(self._table)
        index = np.clip(np.ceil(q * total - 1e-9).astype(np.int64) - 1, 0, total - 1)
        return self._table[index]

    def _rvs(self, rng: np.random.Generator, size: Any) -> np.ndarray:
        if self._table is None:
            return self._ppf(rng.random(size))
        return rng.choice(self._table, size=size)
