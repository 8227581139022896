'''
Exponential distribution with rate parameterization.
'''

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from numkit.core.exceptions import DistributionError
from numkit.core.parameters import ParameterBase, PositiveParameters
from numkit.models.distributions.base import UnivariateDistribution
from numkit.models.distributions.utils import register_distribution, weighted_mean

logger = logging.getLogger("numkit.models.distributions.exponential")


@dataclass(frozen=True)
class ExponentialParameters(PositiveParameters):
    """Parameters of the exponential distribution.

    Attributes:
        rate: Inverse of the mean, must be positive
    """

    rate: float = 1.0


@register_distribution("exponential")
class Exponential(UnivariateDistribution[ExponentialParameters]):
    """Exponential distribution with density ``rate * exp(-rate * x)`` on x >= 0.

    The maximum likelihood estimate of the rate is the reciprocal of the
    (weighted) sample mean.
    """

    params_class = ExponentialParameters

    def __init__(self, rate: float = 1.0):
        super().__init__(ExponentialParameters(rate=float(rate)), name="Exponential")

    @property
    def rate(self) -> float:
        return self._params.rate

    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        rate = self._params.rate
        with np.errstate(invalid="ignore"):
            return np.where(x >= 0, math.log(rate) - rate * x, -np.inf)

    def _cdf(self, x: np.ndarray) -> np.ndarray:
        return np.where(x > 0, -np.expm1(-self._params.rate * np.maximum(x, 0.0)), 0.0)

    def _sf(self, x: np.ndarray) -> np.ndarray:
        return np.where(x > 0, np.exp(-self._params.rate * np.maximum(x, 0.0)), 1.0)

    def _ppf(self, q: np.ndarray) -> np.ndarray:
        with np.errstate(divide="ignore"):
            return -np.log1p(-q) / self._params.rate

    def _rvs(self, rng: np.random.Generator, size: Any) -> np.ndarray:
        return rng.exponential(1.0 / self._params.rate, size)

    @property
    def mean(self) -> float:
        return 1.0 / self._params.rate

    @property
    def variance(self) -> float:
        return 1.0 / self._params.rate ** 2

    @property
    def entropy(self) -> float:
        return 1.0 - math.log(self._params.rate)

    @property
    def median(self) -> float:
        return math.log(2.0) / self._params.rate

    @property
    def support(self) -> Tuple[float, float]:
        return (0.0, np.inf)

    @classmethod
    def _estimate(cls, samples: np.ndarray, weights: Optional[np.ndarray],
                  start: Optional[ParameterBase], **kwargs: Any) -> 'Exponential':
        mean = weighted_mean(samples, weights)
        if not mean > 0:
            raise DistributionError(
                "Exponential estimation requires a positive sample mean",
                distribution_type="Exponential",
                parameter="rate",
                value=mean,
                issue="non-positive mean"
            )
        return cls(rate=1.0 / mean)
