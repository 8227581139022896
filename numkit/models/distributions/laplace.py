'''
Laplace (double exponential) distribution.
'''

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from numkit.core.exceptions import DistributionError
from numkit.core.parameters import ParameterBase, validate_finite, validate_positive
from numkit.models.distributions.base import UnivariateDistribution
from numkit.models.distributions.utils import register_distribution, weighted_mean, weighted_median

logger = logging.getLogger("numkit.models.distributions.laplace")


@dataclass(frozen=True)
class LaplaceParameters(ParameterBase):
    """Parameters of the Laplace distribution.

    Attributes:
        location: Location mu, any finite value
        scale: Scale b, must be positive
    """

    location: float = 0.0
    scale: float = 1.0

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        validate_finite(self.location, "location")
        validate_positive(self.scale, "scale")

    def transform(self) -> np.ndarray:
        return np.array([self.location, math.log(self.scale)])

    @classmethod
    def inverse_transform(cls, array: np.ndarray, **kwargs: Any) -> 'LaplaceParameters':
        return cls(location=float(array[0]), scale=float(np.exp(array[1])))


@register_distribution("laplace")
class Laplace(UnivariateDistribution[LaplaceParameters]):
    """Laplace distribution with density ``exp(-|x - mu| / b) / (2 b)``.

    The maximum likelihood estimates are the (weighted) median for the
    location and the mean absolute deviation around it for the scale.
    """

    params_class = LaplaceParameters

    def __init__(self, location: float = 0.0, scale: float = 1.0):
        super().__init__(LaplaceParameters(location=float(location), scale=float(scale)),
                         name="Laplace")

    @property
    def location(self) -> float:
        return self._params.location

    @property
    def scale(self) -> float:
        return self._params.scale

    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        b = self._params.scale
        return -math.log(2.0 * b) - np.abs(x - self._params.location) / b

    def _cdf(self, x: np.ndarray) -> np.ndarray:
        z = (x - self._params.location) / self._params.scale
        return np.where(z < 0, 0.5 * np.exp(np.minimum(z, 0.0)), 1.0 - 0.5 * np.exp(-np.maximum(z, 0.0)))

    def _sf(self, x: np.ndarray) -> np.ndarray:
        z = (x - self._params.location) / self._params.scale
        return np.where(z > 0, 0.5 * np.exp(-np.maximum(z, 0.0)), 1.0 - 0.5 * np.exp(np.minimum(z, 0.0)))

    def _ppf(self, q: np.ndarray) -> np.ndarray:
        centered = q - 0.5
        with np.errstate(divide="ignore"):
            return (self._params.location
                    - self._params.scale * np.sign(centered) * np.log1p(-2.0 * np.abs(centered)))

    def _rvs(self, rng: np.random.Generator, size: Any) -> np.ndarray:
        return rng.laplace(self._params.location, self._params.scale, size)

    @property
    def mean(self) -> float:
        return self._params.location

    @property
    def median(self) -> float:
        return self._params.location

    @property
    def variance(self) -> float:
        return 2.0 * self._params.scale ** 2

    @property
    def entropy(self) -> float:
        return math.log(2.0 * math.e * self._params.scale)

    @property
    def support(self) -> Tuple[float, float]:
        return (-np.inf, np.inf)

    @classmethod
    def _estimate(cls, samples: np.ndarray, weights: Optional[np.ndarray],
                  start: Optional[ParameterBase], **kwargs: Any) -> 'Laplace':
        location = weighted_median(samples, weights)
        scale = weighted_mean(np.abs(samples - location), weights)
        if not scale > 0:
            raise DistributionError(
                "Cannot estimate a Laplace distribution from a constant sample",
                distribution_type="Laplace",
                parameter="scale",
                value=scale,
                issue="zero absolute deviation"
            )
        return cls(location=location, scale=scale)
