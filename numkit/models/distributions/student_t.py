'''
Student's t-distribution.

The CDF is expressed through the regularized incomplete Beta function,

    P(T <= t) = 1 - I_x(dof / 2, 1 / 2) / 2,  x = dof / (dof + t**2),  t > 0

and by symmetry for negative t. The quantile function inverts the
incomplete Beta function: in the tails it solves for x directly, near the
median it solves for the complementary variable t**2 / (dof + t**2) which
keeps full precision where x is close to one.
'''

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np
from scipy import stats

from numkit.core.exceptions import raise_not_supported
from numkit.core.parameters import ParameterBase, PositiveParameters
from numkit.models.distributions.base import UnivariateDistribution
from numkit.models.distributions.utils import register_distribution
from numkit.special import digamma, incomplete_beta, inverse_incomplete_beta, log_beta, log_gamma

logger = logging.getLogger("numkit.models.distributions.student_t")


@dataclass(frozen=True)
class StudentTParameters(PositiveParameters):
    """Parameters of Student's t-distribution.

    Attributes:
        dof: Degrees of freedom, must be positive
    """

    dof: float = 1.0


@register_distribution("t")
class StudentT(UnivariateDistribution[StudentTParameters]):
    """Student's t-distribution with ``dof`` degrees of freedom.

    The mean exists only for dof > 1 and the variance only for dof > 2;
    requesting them otherwise raises ``NotSupportedError``.

    Examples:
        >>> dist = StudentT(dof=9)
        >>> 2 * dist.sf(3.1254485381338246)
        0.01221092432...
    """

    params_class = StudentTParameters

    def __init__(self, dof: float = 1.0):
        super().__init__(StudentTParameters(dof=float(dof)), name="StudentT")

    @property
    def dof(self) -> float:
        return self._params.dof

    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        nu = self._params.dof
        norm = log_gamma(0.5 * (nu + 1.0)) - log_gamma(0.5 * nu) - 0.5 * math.log(nu * math.pi)
        return norm - 0.5 * (nu + 1.0) * np.log1p(x * x / nu)

    def _lower_tail(self, t: np.ndarray) -> np.ndarray:
        # P(T <= -|t|)
        nu = self._params.dof
        with np.errstate(divide="ignore", invalid="ignore"):
            x = np.where(np.isinf(t), 0.0, nu / (nu + t * t))
        return 0.5 * np.asarray(incomplete_beta(0.5 * nu, 0.5, x))

    def _cdf(self, x: np.ndarray) -> np.ndarray:
        tail = self._lower_tail(x)
        return np.where(x > 0, 1.0 - tail, tail)

    def _sf(self, x: np.ndarray) -> np.ndarray:
        tail = self._lower_tail(x)
        return np.where(x > 0, tail, 1.0 - tail)

    def _ppf(self, q: np.ndarray) -> np.ndarray:
        nu = self._params.dof
        tail = np.minimum(q, 1.0 - q)
        sign = np.where(q < 0.5, -1.0, 1.0)

        with np.errstate(divide="ignore", invalid="ignore"):
            # Tails: x = dof / (dof + t**2) with I_x(dof/2, 1/2) = 2 * tail
            x = np.asarray(inverse_incomplete_beta(0.5 * nu, 0.5, 2.0 * tail))
            t_tail = np.sqrt(nu * (1.0 / x - 1.0))
            # Center: y = t**2 / (dof + t**2) with I_y(1/2, dof/2) = 1 - 2 * tail
            y = np.asarray(inverse_incomplete_beta(0.5, 0.5 * nu, 1.0 - 2.0 * tail))
            t_center = np.sqrt(nu * y / (1.0 - y))

        magnitude = np.where(tail < 0.25, t_tail, t_center)
        magnitude = np.where(tail == 0, np.inf, magnitude)
        return sign * magnitude

    def _rvs(self, rng: np.random.Generator, size: Any) -> np.ndarray:
        return rng.standard_t(self._params.dof, size)

    @property
    def mean(self) -> float:
        if self._params.dof <= 1:
            raise_not_supported("StudentT", "mean", details="The mean is undefined for dof <= 1")
        return 0.0

    @property
    def variance(self) -> float:
        nu = self._params.dof
        if nu <= 2:
            raise_not_supported("StudentT", "variance",
                                details="The variance is undefined or infinite for dof <= 2")
        return nu / (nu - 2.0)

    @property
    def median(self) -> float:
        return 0.0

    @property
    def entropy(self) -> float:
        nu = self._params.dof
        return (0.5 * (nu + 1.0) * (digamma(0.5 * (nu + 1.0)) - digamma(0.5 * nu))
                + 0.5 * math.log(nu) + log_beta(0.5 * nu, 0.5))

    @property
    def support(self) -> Tuple[float, float]:
        return (-np.inf, np.inf)

    @classmethod
    def _initial_params(cls, samples: np.ndarray, weights: Optional[np.ndarray]) -> ParameterBase:
        excess_kurtosis = stats.kurtosis(samples, fisher=True, bias=True)
        dof = 6.0 / excess_kurtosis + 4.0 if excess_kurtosis > 0 else 30.0
        return StudentTParameters(dof=float(dof))
