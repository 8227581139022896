'''
Sampling distribution of the Kolmogorov-Smirnov statistic.

For a sample of size n drawn from a continuous distribution, the two-sided
statistic Dn = sup |F_n(x) - F(x)| follows SciPy's ``kstwo(n)`` and the
one-sided statistics Dn+ and Dn- both follow ``ksone(n)``. The distribution
itself describes Dn; the one-sided tail probabilities are exposed through
``one_sided_cdf``/``one_sided_sf``.
'''

import logging
from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np
from scipy import stats

from numkit.core.exceptions import raise_not_supported
from numkit.core.parameters import ParameterBase, validate_integer
from numkit.models.distributions.base import ArrayOrScalar, UnivariateDistribution
from numkit.models.distributions.utils import register_distribution

logger = logging.getLogger("numkit.models.distributions.kolmogorov_smirnov")


@dataclass(frozen=True)
class KolmogorovSmirnovParameters(ParameterBase):
    """Parameters of the Kolmogorov-Smirnov distribution.

    Attributes:
        samples: Sample size n, at least one
    """

    samples: int = 1

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        validate_integer(self.samples, "samples", min_value=1)


@register_distribution("kolmogorov_smirnov")
class KolmogorovSmirnovDistribution(UnivariateDistribution[KolmogorovSmirnovParameters]):
    """Distribution of the two-sided Kolmogorov-Smirnov statistic Dn.

    The 95% quantile for n = 10 is about 0.409, the familiar tabulated
    critical value.
    """

    params_class = KolmogorovSmirnovParameters

    def __init__(self, samples: int = 1):
        samples = validate_integer(samples, "samples", min_value=1)
        super().__init__(KolmogorovSmirnovParameters(samples=samples), name="KolmogorovSmirnov")
        self._two_sided = stats.kstwo(samples)
        self._one_sided = stats.ksone(samples)

    @property
    def samples(self) -> int:
        return self._params.samples

    def _pdf(self, x: np.ndarray) -> np.ndarray:
        return self._two_sided.pdf(x)

    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        return self._two_sided.logpdf(x)

    def _cdf(self, x: np.ndarray) -> np.ndarray:
        return self._two_sided.cdf(x)

    def _sf(self, x: np.ndarray) -> np.ndarray:
        return self._two_sided.sf(x)

    def _ppf(self, q: np.ndarray) -> np.ndarray:
        return self._two_sided.ppf(q)

    def one_sided_cdf(self, x: Any) -> ArrayOrScalar:
        """CDF of the one-sided statistics Dn+ and Dn-."""
        return self._evaluate(self._one_sided.cdf, x)

    def one_sided_sf(self, x: Any) -> ArrayOrScalar:
        """Survival function P(Dn+ > x) of the one-sided statistics."""
        return self._evaluate(self._one_sided.sf, x)

    def one_sided_ppf(self, q: Any) -> ArrayOrScalar:
        """Quantile function of the one-sided statistics."""
        return self._evaluate(self._one_sided.ppf, q)

    @property
    def mean(self) -> float:
        return float(self._two_sided.mean())

    @property
    def variance(self) -> float:
        return float(self._two_sided.var())

    @property
    def entropy(self) -> float:
        raise_not_supported("KolmogorovSmirnovDistribution", "entropy")

    @property
    def support(self) -> Tuple[float, float]:
        lower, upper = self._two_sided.support()
        return (float(lower), float(upper))

    def _rvs(self, rng: np.random.Generator, size: Any) -> np.ndarray:
        return self._two_sided.rvs(size=size, random_state=rng)

    @classmethod
    def _initial_params(cls, samples: np.ndarray, weights: Any) -> ParameterBase:
        raise_not_supported("KolmogorovSmirnovDistribution", "estimate",
                            details="The sample size is not estimable from statistic values")
