'''
Mann-Whitney U distribution.

Given the ranks of a combined sample of size N = n1 + n2, the statistic of
the first group is

    U = n1 n2 + n1 (n1 + 1) / 2 - R1

where R1 is the sum of the ranks assigned to it. Under the null hypothesis
every one of the C(N, n1) ways to assign ranks to the first group is equally
likely; exact mode enumerates all of them. Ties are handled by passing
averaged ranks, which makes half-integer values of U possible.

The approximate mode uses the normal distribution with mean n1 n2 / 2 and
the tie-corrected variance

    n1 n2 / 12 * ((N + 1) - sum(t**3 - t) / (N (N - 1)))

where t runs over the sizes of the groups of tied ranks.
'''

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from numkit.core.exceptions import raise_parameter_error
from numkit.core.parameters import ParameterBase, validate_integer
from numkit.models.distributions._numba_core import mann_whitney_table
from numkit.models.distributions.ranking import RankDistribution, use_exact
from numkit.models.distributions.utils import register_distribution

logger = logging.getLogger("numkit.models.distributions.mann_whitney")

# Above this many rank assignments the table cannot be allocated
MAX_EXACT_ASSIGNMENTS = 2 ** 30


@dataclass(frozen=True)
class MannWhitneyParameters(ParameterBase):
    """Parameters of the Mann-Whitney U distribution.

    Attributes:
        ranks: Ranks of the combined sample
        n1: Size of the first group
        n2: Size of the second group
        exact: Whether the distribution is enumerated exactly
    """

    ranks: Tuple[float, ...]
    n1: int
    n2: int
    exact: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        validate_integer(self.n1, "n1", min_value=1)
        validate_integer(self.n2, "n2", min_value=1)
        if len(self.ranks) != self.n1 + self.n2:
            raise_parameter_error(
                f"Expected {self.n1 + self.n2} ranks for groups of {self.n1} and {self.n2}, "
                f"got {len(self.ranks)}",
                param_name="ranks",
                param_value=len(self.ranks),
                constraint="len(ranks) == n1 + n2"
            )
        if not all(math.isfinite(r) and r > 0 for r in self.ranks):
            raise_parameter_error(
                "Ranks must be positive finite numbers",
                param_name="ranks",
                constraint="> 0"
            )


@register_distribution("mann_whitney")
class MannWhitneyDistribution(RankDistribution):
    """Distribution of the Mann-Whitney U statistic of the first group.

    Args:
        ranks: Ranks of the combined sample, first group first
        n1: Size of the first group
        n2: Size of the second group, defaults to ``len(ranks) - n1``
        exact: True to enumerate, False for the normal approximation, None to
            enumerate when C(N, n1) is within the configured limit

    Examples:
        >>> dist = MannWhitneyDistribution([1, 2, 3, 4, 5], n1=2, n2=3)
        >>> dist.pdf(2)
        0.2
        >>> dist.cdf(2)
        0.4
    """

    params_class = MannWhitneyParameters

    def __init__(self, ranks: Any, n1: int, n2: Optional[int] = None,
                 exact: Optional[bool] = None):
        ranks = np.ascontiguousarray(np.asarray(ranks, dtype=np.float64).ravel())
        n1 = validate_integer(n1, "n1", min_value=1)
        n2 = len(ranks) - n1 if n2 is None else validate_integer(n2, "n2", min_value=1)
        n = len(ranks)
        assignments = math.comb(n, n1) if n >= n1 else 0

        if exact and assignments > MAX_EXACT_ASSIGNMENTS:
            raise_parameter_error(
                f"Exact enumeration of {assignments} rank assignments is not feasible",
                param_name="exact",
                param_value=exact,
                constraint=f"at most {MAX_EXACT_ASSIGNMENTS} assignments"
            )

        exact = use_exact(assignments, exact, "MannWhitneyDistribution")
        params = MannWhitneyParameters(ranks=tuple(float(r) for r in ranks), n1=n1, n2=n2,
                                       exact=exact)
        table = mann_whitney_table(ranks, n1, assignments) if exact else None
        super().__init__(params, name="MannWhitney", table=table)

        _, counts = np.unique(ranks, return_counts=True)
        self._tie_sum = float(np.sum(counts.astype(np.float64) ** 3 - counts))

    @property
    def n1(self) -> int:
        return self._params.n1

    @property
    def n2(self) -> int:
        return self._params.n2

    @property
    def ranks(self) -> np.ndarray:
        return np.array(self._params.ranks)

    @property
    def mean(self) -> float:
        return 0.5 * self._params.n1 * self._params.n2

    @property
    def variance(self) -> float:
        n1, n2 = self._params.n1, self._params.n2
        n = n1 + n2
        correction = self._tie_sum / (n * (n - 1.0)) if n > 1 else 0.0
        return n1 * n2 / 12.0 * ((n + 1.0) - correction)

    @property
    def support(self) -> Tuple[float, float]:
        return (0.0, float(self._params.n1 * self._params.n2))
