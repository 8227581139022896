'''
Inverse Gamma distribution.

If X ~ Gamma(shape, 1 / scale) then 1 / X ~ InverseGamma(shape, scale). The
CDF is the regularized upper incomplete Gamma function of ``scale / x``.
'''

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from numkit.core.exceptions import raise_not_supported
from numkit.core.parameters import ParameterBase, PositiveParameters
from numkit.models.distributions.base import UnivariateDistribution
from numkit.models.distributions.utils import (
    register_distribution, require_positive_sample, weighted_mean, weighted_variance
)
from numkit.special import (
    digamma, inverse_lower_incomplete_gamma, log_gamma,
    lower_incomplete_gamma, upper_incomplete_gamma
)

logger = logging.getLogger("numkit.models.distributions.inverse_gamma")


@dataclass(frozen=True)
class InverseGammaParameters(PositiveParameters):
    """Parameters of the inverse Gamma distribution.

    Attributes:
        shape: Shape alpha, must be positive
        scale: Scale beta, must be positive
    """

    shape: float = 1.0
    scale: float = 1.0


@register_distribution("inverse_gamma")
class InverseGamma(UnivariateDistribution[InverseGammaParameters]):
    """Inverse Gamma distribution with density

        scale**shape / Gamma(shape) x**(-shape - 1) exp(-scale / x),  x > 0
    """

    params_class = InverseGammaParameters

    def __init__(self, shape: float = 1.0, scale: float = 1.0):
        super().__init__(InverseGammaParameters(shape=float(shape), scale=float(scale)),
                         name="InverseGamma")

    @property
    def shape(self) -> float:
        return self._params.shape

    @property
    def scale(self) -> float:
        return self._params.scale

    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        alpha, beta = self._params.shape, self._params.scale
        positive = x > 0
        safe = np.where(positive, x, 1.0)
        value = (alpha * math.log(beta) - log_gamma(alpha)
                 - (alpha + 1.0) * np.log(safe) - beta / safe)
        return np.where(positive, value, -np.inf)

    def _cdf(self, x: np.ndarray) -> np.ndarray:
        positive = x > 0
        with np.errstate(divide="ignore"):
            z = np.where(positive, self._params.scale / np.where(positive, x, 1.0), np.inf)
        return np.where(positive, np.asarray(upper_incomplete_gamma(self._params.shape, z)), 0.0)

    def _sf(self, x: np.ndarray) -> np.ndarray:
        positive = x > 0
        z = np.where(positive, self._params.scale / np.where(positive, x, 1.0), np.inf)
        return np.where(positive, np.asarray(lower_incomplete_gamma(self._params.shape, z)), 1.0)

    def _ppf(self, q: np.ndarray) -> np.ndarray:
        inner = np.asarray(inverse_lower_incomplete_gamma(self._params.shape, 1.0 - q))
        with np.errstate(divide="ignore"):
            return self._params.scale / inner

    def _rvs(self, rng: np.random.Generator, size: Any) -> np.ndarray:
        return self._params.scale / rng.gamma(self._params.shape, 1.0, size)

    @property
    def mean(self) -> float:
        alpha, beta = self._params.shape, self._params.scale
        if alpha <= 1:
            raise_not_supported("InverseGamma", "mean", details="The mean is undefined for shape <= 1")
        return beta / (alpha - 1.0)

    @property
    def variance(self) -> float:
        alpha, beta = self._params.shape, self._params.scale
        if alpha <= 2:
            raise_not_supported("InverseGamma", "variance",
                                details="The variance is undefined for shape <= 2")
        return beta ** 2 / ((alpha - 1.0) ** 2 * (alpha - 2.0))

    @property
    def mode(self) -> float:
        return self._params.scale / (self._params.shape + 1.0)

    @property
    def entropy(self) -> float:
        alpha, beta = self._params.shape, self._params.scale
        return alpha + math.log(beta) + log_gamma(alpha) - (1.0 + alpha) * digamma(alpha)

    @property
    def support(self) -> Tuple[float, float]:
        return (0.0, np.inf)

    @classmethod
    def _initial_params(cls, samples: np.ndarray, weights: Optional[np.ndarray]) -> ParameterBase:
        require_positive_sample(samples, "InverseGamma")
        mean = weighted_mean(samples, weights)
        variance = weighted_variance(samples, weights, mean)
        shape = mean ** 2 / variance + 2.0 if variance > 0 else 3.0
        return InverseGammaParameters(shape=shape, scale=mean * (shape - 1.0))
