'''
Beta distribution on the unit interval.

The CDF is the regularized incomplete Beta function; parameters are
estimated by the method of moments.
'''

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np
from scipy import special as sp_special

from numkit.core.exceptions import DistributionError
from numkit.core.parameters import ParameterBase, PositiveParameters
from numkit.models.distributions.base import UnivariateDistribution
from numkit.models.distributions.utils import (
    register_distribution, require_unit_interval_sample, weighted_mean, weighted_variance
)
from numkit.special import digamma, incomplete_beta, inverse_incomplete_beta, log_beta

logger = logging.getLogger("numkit.models.distributions.beta")


@dataclass(frozen=True)
class BetaParameters(PositiveParameters):
    """Parameters of the Beta distribution.

    Attributes:
        alpha: First shape, must be positive
        beta: Second shape, must be positive
    """

    alpha: float = 1.0
    beta: float = 1.0


@register_distribution("beta")
class BetaDistribution(UnivariateDistribution[BetaParameters]):
    """Beta distribution with density

        x**(alpha - 1) (1 - x)**(beta - 1) / B(alpha, beta),  0 <= x <= 1
    """

    params_class = BetaParameters

    def __init__(self, alpha: float = 1.0, beta: float = 1.0):
        super().__init__(BetaParameters(alpha=float(alpha), beta=float(beta)), name="Beta")

    @property
    def alpha(self) -> float:
        return self._params.alpha

    @property
    def beta(self) -> float:
        return self._params.beta

    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        a, b = self._params.alpha, self._params.beta
        inside = (x >= 0) & (x <= 1)
        safe = np.where(inside, x, 0.5)
        with np.errstate(divide="ignore"):
            # xlogy treats 0 * log(0) as 0, which gives the right boundary values
            value = (sp_special.xlogy(a - 1.0, safe) + sp_special.xlog1py(b - 1.0, -safe)
                     - log_beta(a, b))
        return np.where(inside, value, -np.inf)

    def _cdf(self, x: np.ndarray) -> np.ndarray:
        return np.asarray(incomplete_beta(self._params.alpha, self._params.beta, np.clip(x, 0.0, 1.0)))

    def _sf(self, x: np.ndarray) -> np.ndarray:
        return np.asarray(incomplete_beta(self._params.beta, self._params.alpha,
                                          1.0 - np.clip(x, 0.0, 1.0)))

    def _ppf(self, q: np.ndarray) -> np.ndarray:
        return np.asarray(inverse_incomplete_beta(self._params.alpha, self._params.beta, q))

    def _rvs(self, rng: np.random.Generator, size: Any) -> np.ndarray:
        return rng.beta(self._params.alpha, self._params.beta, size)

    @property
    def mean(self) -> float:
        a, b = self._params.alpha, self._params.beta
        return a / (a + b)

    @property
    def variance(self) -> float:
        a, b = self._params.alpha, self._params.beta
        return a * b / ((a + b) ** 2 * (a + b + 1.0))

    @property
    def entropy(self) -> float:
        a, b = self._params.alpha, self._params.beta
        return (log_beta(a, b) - (a - 1.0) * digamma(a) - (b - 1.0) * digamma(b)
                + (a + b - 2.0) * digamma(a + b))

    @property
    def support(self) -> Tuple[float, float]:
        return (0.0, 1.0)

    @classmethod
    def _estimate(cls, samples: np.ndarray, weights: Optional[np.ndarray],
                  start: Optional[ParameterBase], **kwargs: Any) -> 'BetaDistribution':
        require_unit_interval_sample(samples, "Beta")
        mean = weighted_mean(samples, weights)
        variance = weighted_variance(samples, weights, mean)
        common = mean * (1.0 - mean) / variance - 1.0 if variance > 0 else -1.0
        if not common > 0:
            raise DistributionError(
                "Sample variance is too large for a Beta distribution",
                distribution_type="Beta",
                value=variance,
                issue="method of moments has no solution"
            )
        return cls(alpha=mean * common, beta=(1.0 - mean) * common)
