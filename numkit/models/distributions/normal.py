'''
Normal (Gaussian) distribution.

The CDF and quantile function use SciPy's ``ndtr``/``ndtri`` which keep full
relative precision far into both tails; the survival function is evaluated
as ``ndtr(-z)`` rather than a complement. Estimation is the closed-form
weighted maximum likelihood estimate.
'''

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Type

import numpy as np
from scipy import special

from numkit.core.exceptions import DistributionError
from numkit.core.parameters import ParameterBase, validate_finite, validate_positive
from numkit.models.distributions.base import UnivariateDistribution
from numkit.models.distributions.utils import (
    register_distribution, weighted_mean, weighted_variance
)

logger = logging.getLogger("numkit.models.distributions.normal")

LOG_SQRT_2PI = 0.5 * math.log(2.0 * math.pi)


@dataclass(frozen=True)
class NormalParameters(ParameterBase):
    """Parameters of the normal distribution.

    Attributes:
        mean: Location, any finite value
        std: Standard deviation, must be positive
    """

    mean: float = 0.0
    std: float = 1.0

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        validate_finite(self.mean, "mean")
        validate_positive(self.std, "std")

    def transform(self) -> np.ndarray:
        return np.array([self.mean, math.log(self.std)])

    @classmethod
    def inverse_transform(cls, array: np.ndarray, **kwargs: Any) -> 'NormalParameters':
        return cls(mean=float(array[0]), std=float(np.exp(array[1])))


@register_distribution("normal")
class Normal(UnivariateDistribution[NormalParameters]):
    """Normal distribution N(mean, std**2).

    Examples:
        >>> from numkit.models.distributions import Normal
        >>> dist = Normal(mean=0.0, std=1.0)
        >>> dist.cdf(1.96)
        0.9750021048517795
        >>> dist.ppf(0.975)
        1.959963984540054
    """

    params_class = NormalParameters

    def __init__(self, mean: float = 0.0, std: float = 1.0):
        super().__init__(NormalParameters(mean=float(mean), std=float(std)), name="Normal")

    @property
    def location(self) -> float:
        return self._params.mean

    @property
    def scale(self) -> float:
        return self._params.std

    def _standardize(self, x: np.ndarray) -> np.ndarray:
        return (x - self._params.mean) / self._params.std

    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        z = self._standardize(x)
        return -0.5 * z * z - LOG_SQRT_2PI - math.log(self._params.std)

    def _cdf(self, x: np.ndarray) -> np.ndarray:
        return special.ndtr(self._standardize(x))

    def _sf(self, x: np.ndarray) -> np.ndarray:
        return special.ndtr(-self._standardize(x))

    def _ppf(self, q: np.ndarray) -> np.ndarray:
        return self._params.mean + self._params.std * special.ndtri(q)

    def _rvs(self, rng: np.random.Generator, size: Any) -> np.ndarray:
        return rng.normal(self._params.mean, self._params.std, size)

    @property
    def mean(self) -> float:
        return self._params.mean

    @property
    def variance(self) -> float:
        return self._params.std ** 2

    @property
    def std(self) -> float:
        return self._params.std

    @property
    def entropy(self) -> float:
        return 0.5 * math.log(2.0 * math.pi * math.e * self._params.std ** 2)

    @property
    def support(self) -> Tuple[float, float]:
        return (-np.inf, np.inf)

    @classmethod
    def _estimate(cls, samples: np.ndarray, weights: Optional[np.ndarray],
                  start: Optional[ParameterBase], **kwargs: Any) -> 'Normal':
        mean = weighted_mean(samples, weights)
        variance = weighted_variance(samples, weights, mean)
        if not variance > 0:
            raise DistributionError(
                "Cannot estimate a normal distribution from a constant sample",
                distribution_type="Normal",
                parameter="std",
                value=variance,
                issue="zero variance"
            )
        return cls(mean=mean, std=math.sqrt(variance))


def standard_normal() -> Normal:
    """The standard normal distribution N(0, 1)."""
    return Normal(0.0, 1.0)
