'''
Weibull distribution with shape/scale parameterization.
'''

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np
from scipy import special as sp_special

from numkit.core.parameters import ParameterBase, PositiveParameters
from numkit.models.distributions.base import UnivariateDistribution
from numkit.models.distributions.utils import (
    register_distribution, require_positive_sample, weighted_mean, weighted_variance
)
from numkit.special import gamma

logger = logging.getLogger("numkit.models.distributions.weibull")

EULER_GAMMA = 0.57721566490153286


@dataclass(frozen=True)
class WeibullParameters(PositiveParameters):
    """Parameters of the Weibull distribution.

    Attributes:
        shape: Shape k, must be positive
        scale: Scale lambda, must be positive
    """

    shape: float = 1.0
    scale: float = 1.0


@register_distribution("weibull")
class Weibull(UnivariateDistribution[WeibullParameters]):
    """Weibull distribution with CDF ``1 - exp(-(x / scale)**shape)`` on x >= 0.

    Estimated by numerical maximum likelihood, seeded from the log-moments of
    the sample.
    """

    params_class = WeibullParameters

    def __init__(self, shape: float = 1.0, scale: float = 1.0):
        super().__init__(WeibullParameters(shape=float(shape), scale=float(scale)), name="Weibull")

    @property
    def shape(self) -> float:
        return self._params.shape

    @property
    def scale(self) -> float:
        return self._params.scale

    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        k, lam = self._params.shape, self._params.scale
        inside = x >= 0
        z = np.where(inside, x, 0.0) / lam
        with np.errstate(divide="ignore"):
            value = math.log(k / lam) + sp_special.xlogy(k - 1.0, z) - z ** k
        return np.where(inside, value, -np.inf)

    def _cdf(self, x: np.ndarray) -> np.ndarray:
        z = np.maximum(x, 0.0) / self._params.scale
        return -np.expm1(-z ** self._params.shape)

    def _sf(self, x: np.ndarray) -> np.ndarray:
        z = np.maximum(x, 0.0) / self._params.scale
        return np.exp(-z ** self._params.shape)

    def _ppf(self, q: np.ndarray) -> np.ndarray:
        with np.errstate(divide="ignore"):
            return self._params.scale * (-np.log1p(-q)) ** (1.0 / self._params.shape)

    def _rvs(self, rng: np.random.Generator, size: Any) -> np.ndarray:
        return self._params.scale * rng.weibull(self._params.shape, size)

    @property
    def mean(self) -> float:
        return self._params.scale * gamma(1.0 + 1.0 / self._params.shape)

    @property
    def variance(self) -> float:
        k, lam = self._params.shape, self._params.scale
        g1 = gamma(1.0 + 1.0 / k)
        return lam ** 2 * (gamma(1.0 + 2.0 / k) - g1 * g1)

    @property
    def entropy(self) -> float:
        k, lam = self._params.shape, self._params.scale
        return EULER_GAMMA * (1.0 - 1.0 / k) + math.log(lam / k) + 1.0

    @property
    def median(self) -> float:
        return self._params.scale * math.log(2.0) ** (1.0 / self._params.shape)

    @property
    def support(self) -> Tuple[float, float]:
        return (0.0, np.inf)

    @classmethod
    def _initial_params(cls, samples: np.ndarray, weights: Optional[np.ndarray]) -> ParameterBase:
        require_positive_sample(samples, "Weibull")
        log_x = np.log(samples)
        log_std = math.sqrt(max(weighted_variance(log_x, weights), 1e-12))
        # Var(log X) = pi**2 / (6 k**2)
        shape = math.pi / (math.sqrt(6.0) * log_std)
        log_scale = weighted_mean(log_x, weights) + EULER_GAMMA / shape
        return WeibullParameters(shape=shape, scale=math.exp(log_scale))
