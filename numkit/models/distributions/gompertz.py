'''
Gompertz distribution.

Density ``b eta exp(eta + b x - eta exp(b x))`` on x >= 0 with shape ``eta``
and scale ``b``. The mean and entropy involve the exponential integral and
have no closed form here; they raise ``NotSupportedError``. Estimation is by
numerical maximum likelihood.
'''

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from numkit.core.exceptions import raise_not_supported
from numkit.core.parameters import ParameterBase, PositiveParameters
from numkit.models.distributions.base import UnivariateDistribution
from numkit.models.distributions.utils import (
    register_distribution, require_positive_sample, weighted_mean
)

logger = logging.getLogger("numkit.models.distributions.gompertz")


@dataclass(frozen=True)
class GompertzParameters(PositiveParameters):
    """Parameters of the Gompertz distribution.

    Attributes:
        eta: Shape, must be positive
        b: Scale, must be positive
    """

    eta: float = 1.0
    b: float = 1.0


@register_distribution("gompertz")
class Gompertz(UnivariateDistribution[GompertzParameters]):
    """Gompertz distribution with shape ``eta`` and scale ``b``."""

    params_class = GompertzParameters

    def __init__(self, eta: float = 1.0, b: float = 1.0):
        super().__init__(GompertzParameters(eta=float(eta), b=float(b)), name="Gompertz")

    @property
    def eta(self) -> float:
        return self._params.eta

    @property
    def b(self) -> float:
        return self._params.b

    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        eta, b = self._params.eta, self._params.b
        inside = x >= 0
        safe = np.where(inside, x, 0.0)
        with np.errstate(over="ignore"):
            value = math.log(b * eta) + eta + b * safe - eta * np.exp(b * safe)
        return np.where(inside, value, -np.inf)

    def _cdf(self, x: np.ndarray) -> np.ndarray:
        eta, b = self._params.eta, self._params.b
        with np.errstate(over="ignore"):
            return np.where(x > 0, -np.expm1(-eta * np.expm1(b * np.maximum(x, 0.0))), 0.0)

    def _sf(self, x: np.ndarray) -> np.ndarray:
        eta, b = self._params.eta, self._params.b
        with np.errstate(over="ignore"):
            return np.where(x > 0, np.exp(-eta * np.expm1(b * np.maximum(x, 0.0))), 1.0)

    def _ppf(self, q: np.ndarray) -> np.ndarray:
        eta, b = self._params.eta, self._params.b
        with np.errstate(divide="ignore"):
            return np.log1p(-np.log1p(-q) / eta) / b

    @property
    def mean(self) -> float:
        raise_not_supported("Gompertz", "mean",
                            details="The mean requires the exponential integral")

    @property
    def entropy(self) -> float:
        raise_not_supported("Gompertz", "entropy")

    @property
    def median(self) -> float:
        return math.log1p(math.log(2.0) / self._params.eta) / self._params.b

    @property
    def mode(self) -> float:
        eta, b = self._params.eta, self._params.b
        return math.log(1.0 / eta) / b if eta < 1.0 else 0.0

    @property
    def support(self) -> Tuple[float, float]:
        return (0.0, np.inf)

    @classmethod
    def _initial_params(cls, samples: np.ndarray, weights: Optional[np.ndarray]) -> ParameterBase:
        require_positive_sample(samples, "Gompertz")
        return GompertzParameters(eta=1.0, b=1.0 / weighted_mean(samples, weights))
