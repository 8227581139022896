'''
Wilcoxon signed-rank W distribution.

Given the magnitudes of N signed ranks, the statistic W+ is the sum of the
ranks carrying a positive sign. Under the null hypothesis all 2**N sign
patterns are equally likely; exact mode enumerates them. Zero ranks (ties
with the hypothesized value) are dropped before anything else.

For ranks 1..N the mean is N (N + 1) / 4 and the variance
N (N + 1) (2N + 1) / 24; with averaged ranks the general forms sum(r) / 2
and sum(r**2) / 4 are used, which reduce to the former.
'''

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from numkit.core.exceptions import raise_parameter_error
from numkit.core.parameters import ParameterBase
from numkit.models.distributions._numba_core import wilcoxon_table
from numkit.models.distributions.ranking import RankDistribution, use_exact
from numkit.models.distributions.utils import register_distribution

logger = logging.getLogger("numkit.models.distributions.wilcoxon")

# Above this many ranks the 2**N table cannot be allocated
MAX_EXACT_RANKS = 30


@dataclass(frozen=True)
class WilcoxonParameters(ParameterBase):
    """Parameters of the Wilcoxon W distribution.

    Attributes:
        ranks: Nonzero rank magnitudes
        exact: Whether the distribution is enumerated exactly
    """

    ranks: Tuple[float, ...]
    exact: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if len(self.ranks) == 0:
            raise_parameter_error(
                "At least one nonzero rank is required",
                param_name="ranks",
                constraint="non-empty"
            )
        if not all(np.isfinite(r) and r > 0 for r in self.ranks):
            raise_parameter_error(
                "Rank magnitudes must be positive finite numbers",
                param_name="ranks",
                constraint="> 0"
            )


@register_distribution("wilcoxon")
class WilcoxonDistribution(RankDistribution):
    """Distribution of the Wilcoxon signed-rank statistic W+.

    Args:
        ranks: Rank magnitudes; zeros are removed
        exact: True to enumerate, False for the normal approximation, None to
            enumerate when 2**N is within the configured limit

    Examples:
        >>> dist = WilcoxonDistribution([1, 2, 3])
        >>> dist.pdf(3)
        0.25
    """

    params_class = WilcoxonParameters

    def __init__(self, ranks: Any, exact: Optional[bool] = None):
        ranks = np.abs(np.asarray(ranks, dtype=np.float64).ravel())
        ranks = np.ascontiguousarray(ranks[ranks != 0])
        n = len(ranks)

        if exact and n > MAX_EXACT_RANKS:
            raise_parameter_error(
                f"Exact enumeration of {n} signed ranks is not feasible",
                param_name="exact",
                param_value=exact,
                constraint=f"at most {MAX_EXACT_RANKS} ranks"
            )
        assignments = 2 ** n
        exact = use_exact(assignments, exact, "WilcoxonDistribution")
        params = WilcoxonParameters(ranks=tuple(float(r) for r in ranks), exact=exact)
        table = wilcoxon_table(ranks) if exact else None
        super().__init__(params, name="Wilcoxon", table=table)

    @property
    def samples(self) -> int:
        """Number of nonzero ranks N."""
        return len(self._params.ranks)

    @property
    def ranks(self) -> np.ndarray:
        return np.array(self._params.ranks)

    @property
    def mean(self) -> float:
        return 0.5 * float(np.sum(self._params.ranks))

    @property
    def variance(self) -> float:
        ranks = np.asarray(self._params.ranks)
        return 0.25 * float(np.sum(ranks * ranks))

    @property
    def support(self) -> Tuple[float, float]:
        return (0.0, float(np.sum(self._params.ranks)))
