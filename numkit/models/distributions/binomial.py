'''
Binomial distribution.

A discrete family on {0, 1, ..., trials}. The CDF uses the identity

    P(X <= k) = I_{1 - p}(n - k, k + 1),  0 <= k < n

so that both tails are evaluated without summing probabilities, and the
survival function uses the mirrored form ``I_p(k + 1, n - k)``.
'''

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np
from scipy import special as sp_special

from numkit.core.exceptions import DistributionError
from numkit.core.parameters import ParameterBase, validate_integer, validate_probability
from numkit.models.distributions.base import UnivariateDistribution
from numkit.models.distributions.utils import register_distribution, weighted_mean
from numkit.special import incomplete_beta, log_gamma

logger = logging.getLogger("numkit.models.distributions.binomial")


@dataclass(frozen=True)
class BinomialParameters(ParameterBase):
    """Parameters of the binomial distribution.

    Attributes:
        trials: Number of trials, a non-negative integer
        probability: Success probability in [0, 1]
    """

    trials: int = 1
    probability: float = 0.5

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        validate_integer(self.trials, "trials", min_value=0)
        validate_probability(self.probability, "probability")


@register_distribution("binomial")
class Binomial(UnivariateDistribution[BinomialParameters]):
    """Binomial distribution of the number of successes in ``trials``
    independent Bernoulli trials with success ``probability``.

    Examples:
        >>> dist = Binomial(trials=10, probability=0.5)
        >>> dist.pdf(5)
        0.24609375
    """

    params_class = BinomialParameters
    discrete = True

    def __init__(self, trials: int = 1, probability: float = 0.5):
        trials = validate_integer(trials, "trials", min_value=0)
        super().__init__(BinomialParameters(trials=trials, probability=float(probability)),
                         name="Binomial")

    @property
    def trials(self) -> int:
        return self._params.trials

    @property
    def probability(self) -> float:
        return self._params.probability

    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        n, p = self._params.trials, self._params.probability
        valid = (x >= 0) & (x <= n) & (x == np.floor(x))
        k = np.where(valid, x, 0.0)
        log_choose = (log_gamma(n + 1.0) - np.asarray(log_gamma(k + 1.0))
                      - np.asarray(log_gamma(n - k + 1.0)))
        with np.errstate(divide="ignore"):
            value = log_choose + sp_special.xlogy(k, p) + sp_special.xlog1py(n - k, -p)
        return np.where(valid, value, -np.inf)

    def _cdf(self, x: np.ndarray) -> np.ndarray:
        n, p = self._params.trials, self._params.probability
        k = np.floor(x)
        inner = (k >= 0) & (k < n)
        safe = np.where(inner, k, 0.0)
        value = np.asarray(incomplete_beta(n - safe if n > 0 else 1.0, safe + 1.0, 1.0 - p))
        result = np.where(k < 0, 0.0, np.where(k >= n, 1.0, value))
        return np.where(np.isnan(x), np.nan, result)

    def _sf(self, x: np.ndarray) -> np.ndarray:
        n, p = self._params.trials, self._params.probability
        k = np.floor(x)
        inner = (k >= 0) & (k < n)
        safe = np.where(inner, k, 0.0)
        value = np.asarray(incomplete_beta(safe + 1.0, n - safe if n > 0 else 1.0, p))
        result = np.where(k < 0, 1.0, np.where(k >= n, 0.0, value))
        return np.where(np.isnan(x), np.nan, result)

    def _ppf(self, q: np.ndarray) -> np.ndarray:
        # Smallest k with P(X <= k) >= q
        table = self._cdf(np.arange(self._params.trials + 1, dtype=np.float64))
        table[-1] = 1.0
        index = np.searchsorted(table, q, side="left")
        return np.minimum(index, self._params.trials).astype(np.float64)

    def _rvs(self, rng: np.random.Generator, size: Any) -> np.ndarray:
        return rng.binomial(self._params.trials, self._params.probability, size).astype(np.float64)

    @property
    def mean(self) -> float:
        return self._params.trials * self._params.probability

    @property
    def variance(self) -> float:
        p = self._params.probability
        return self._params.trials * p * (1.0 - p)

    @property
    def entropy(self) -> float:
        pmf = self._pdf(np.arange(self._params.trials + 1, dtype=np.float64))
        return float(-np.sum(sp_special.xlogy(pmf, pmf)))

    @property
    def support(self) -> Tuple[float, float]:
        return (0.0, float(self._params.trials))

    @classmethod
    def _estimate(cls, samples: np.ndarray, weights: Optional[np.ndarray],
                  start: Optional[ParameterBase], **kwargs: Any) -> 'Binomial':
        if start is not None:
            default_trials = start.trials  # type: ignore[attr-defined]
        else:
            default_trials = int(math.ceil(np.max(samples)))
        trials = validate_integer(kwargs.get("trials", default_trials), "trials", min_value=0)
        if np.any(samples < 0) or np.any(samples > trials):
            raise DistributionError(
                f"Binomial observations must lie in [0, {trials}]",
                distribution_type="Binomial",
                parameter="trials",
                value=trials,
                issue="observations outside the support"
            )
        probability = weighted_mean(samples, weights) / trials if trials > 0 else 0.0
        return cls(trials=trials, probability=probability)
