'''
Base class for univariate probability distributions.

``UnivariateDistribution`` is the capability interface every family in
``numkit.models.distributions`` implements: density, log-density, CDF,
survival function, quantile function, moments, sampling, likelihood and
parameter estimation. Concrete families hold a frozen parameter dataclass
validated at construction; instances are immutable values that compare equal
by parameters and can be shared freely between readers.

Public methods accept scalars or array-likes and coerce them once; the
protected ``_pdf``/``_logpdf``/``_cdf``/``_sf``/``_ppf`` hooks implemented by
subclasses always receive a float64 array and return an array of the same
shape. A scalar argument yields a Python float.

Sampling never touches a process-wide generator: ``rvs`` takes an explicit
``numpy.random.Generator`` or a seed.

Parameter estimation uses a closed form where the family has one (overriding
``_estimate``) and otherwise maximizes the weighted log-likelihood with
``scipy.optimize.minimize`` in the unconstrained space given by the parameter
container's ``transform``/``inverse_transform``.
'''

import abc
import logging
from typing import Any, Callable, ClassVar, Generic, Optional, Tuple, Type, TypeVar, Union

import numpy as np
from scipy import optimize

from numkit.core.base import DistributionBase
from numkit.core.config import get_numerical_config
from numkit.core.exceptions import (
    DistributionError, ParameterError, raise_not_supported, raise_parameter_error,
    warn_convergence
)
from numkit.core.parameters import ParameterBase
from numkit.core.validation import ensure_array, validate_sample, validate_weights

logger = logging.getLogger("numkit.models.distributions.base")

P = TypeVar('P', bound=ParameterBase)
D = TypeVar('D', bound='UnivariateDistribution')

ArrayOrScalar = Union[float, np.ndarray]
RandomState = Optional[Union[int, np.random.Generator]]


def check_random_state(random_state: RandomState) -> np.random.Generator:
    """Turn a seed, a Generator or None into a Generator.

    Args:
        random_state: Seed, Generator, or None for fresh OS entropy

    Returns:
        np.random.Generator: The generator to draw from
    """
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)


class UnivariateDistribution(DistributionBase, Generic[P]):
    """Abstract base class for univariate distributions.

    Subclasses declare ``params_class`` and implement at least ``_logpdf``,
    ``_cdf`` and ``_ppf``; the remaining hooks have generic defaults.
    Constructor keyword names must match the parameter container's fields,
    which lets ``clone`` and numerical estimation rebuild instances.

    Attributes:
        params: The frozen parameter container
        discrete: Whether the distribution is supported on the integers
    """

    params_class: ClassVar[Type[ParameterBase]]
    discrete: ClassVar[bool] = False

    def __init__(self, params: P, name: str = "Distribution"):
        super().__init__(name=name)
        self._params = params

    @property
    def params(self) -> P:
        """The distribution parameters."""
        return self._params

    @classmethod
    def from_params(cls: Type[D], params: ParameterBase) -> D:
        """Create a distribution from a parameter container."""
        return cls(**params.to_dict())

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    @staticmethod
    def _evaluate(func: Callable[[np.ndarray], np.ndarray], x: Any) -> ArrayOrScalar:
        values = ensure_array(x, dtype=np.float64)
        scalar = values.ndim == 0
        result = func(np.atleast_1d(values))
        if scalar:
            return float(result[0])
        return result

    def pdf(self, x: Any) -> ArrayOrScalar:
        """Probability density (probability mass for discrete families).

        Zero outside the support, never negative.
        """
        return self._evaluate(self._pdf, x)

    def logpdf(self, x: Any) -> ArrayOrScalar:
        """Log-density computed directly, ``-inf`` where the density is zero."""
        return self._evaluate(self._logpdf, x)

    def cdf(self, x: Any) -> ArrayOrScalar:
        """Cumulative distribution function P(X <= x)."""
        return self._evaluate(self._cdf, x)

    def sf(self, x: Any) -> ArrayOrScalar:
        """Survival function P(X > x) = 1 - cdf(x)."""
        return self._evaluate(self._sf, x)

    def ppf(self, q: Any) -> ArrayOrScalar:
        """Percent point function, the inverse of the CDF.

        Raises:
            ParameterError: If any probability lies outside [0, 1]
        """
        values = ensure_array(q, dtype=np.float64)
        bad = (values < 0) | (values > 1)
        if np.any(bad):
            value = float(np.atleast_1d(values)[np.flatnonzero(np.atleast_1d(bad))[0]])
            raise_parameter_error(
                f"Probabilities must lie in [0, 1], got {value}",
                param_name="q", param_value=value, constraint="[0, 1]"
            )
        return self._evaluate(self._ppf, values)

    def _pdf(self, x: np.ndarray) -> np.ndarray:
        return np.exp(self._logpdf(x))

    @abc.abstractmethod
    def _logpdf(self, x: np.ndarray) -> np.ndarray:
        """Log-density on a float64 array."""

    @abc.abstractmethod
    def _cdf(self, x: np.ndarray) -> np.ndarray:
        """CDF on a float64 array."""

    def _sf(self, x: np.ndarray) -> np.ndarray:
        return 1.0 - self._cdf(x)

    @abc.abstractmethod
    def _ppf(self, q: np.ndarray) -> np.ndarray:
        """Quantiles on a float64 array of probabilities in [0, 1]."""

    # ------------------------------------------------------------------
    # Moments and support
    # ------------------------------------------------------------------

    @property
    def mean(self) -> float:
        """Mean of the distribution.

        Raises:
            NotSupportedError: If the family has no closed form
        """
        raise_not_supported(self.__class__.__name__, "mean")

    @property
    def variance(self) -> float:
        """Variance of the distribution.

        Raises:
            NotSupportedError: If the family has no closed form
        """
        raise_not_supported(self.__class__.__name__, "variance")

    @property
    def std(self) -> float:
        """Standard deviation, the square root of ``variance``."""
        return float(np.sqrt(self.variance))

    @property
    def entropy(self) -> float:
        """Differential (or Shannon, for discrete families) entropy.

        Raises:
            NotSupportedError: If the family has no closed form
        """
        raise_not_supported(self.__class__.__name__, "entropy")

    @property
    def median(self) -> float:
        return float(self.ppf(0.5))

    @property
    @abc.abstractmethod
    def support(self) -> Tuple[float, float]:
        """Lower and upper bound of the support."""

    # ------------------------------------------------------------------
    # Sampling and likelihood
    # ------------------------------------------------------------------

    def rvs(self,
            size: Optional[Union[int, Tuple[int, ...]]] = None,
            random_state: RandomState = None) -> ArrayOrScalar:
        """Generate random variates.

        Args:
            size: Number or shape of variates, None for a single draw
            random_state: Generator or seed; None draws fresh entropy

        Returns:
            A float for ``size=None``, otherwise an array of shape ``size``
        """
        rng = check_random_state(random_state)
        draws = self._rvs(rng, 1 if size is None else size)
        if size is None:
            return float(np.ravel(draws)[0])
        return np.asarray(draws, dtype=np.float64)

    def _rvs(self, rng: np.random.Generator, size: Union[int, Tuple[int, ...]]) -> np.ndarray:
        # Inverse transform sampling
        return self._ppf(rng.random(size))

    def loglikelihood(self, x: Any, weights: Any = None) -> float:
        """Sum of the log-densities of a sample.

        Args:
            x: Sample to evaluate
            weights: Optional observation weights; the weighted sum is scaled
                so that the weights sum to the sample size

        Returns:
            float: The (weighted) log-likelihood
        """
        sample = validate_sample(x, "x")
        logpdf = self._logpdf(sample)
        w = validate_weights(weights, len(sample))
        if w is None:
            return float(np.sum(logpdf))
        return float(len(sample) * np.sum(w * logpdf))

    # ------------------------------------------------------------------
    # Estimation
    # ------------------------------------------------------------------

    @classmethod
    def estimate(cls: Type[D], samples: Any, weights: Any = None, **kwargs: Any) -> D:
        """Estimate a distribution of this family from a sample.

        Args:
            samples: Observations
            weights: Optional non-negative observation weights
            **kwargs: Family-specific options

        Returns:
            A new distribution instance

        Raises:
            DataError: If the sample is empty or contains non-finite values
            DistributionError: If the sample cannot be fitted
            NotSupportedError: If the family cannot be estimated from data
        """
        sample = validate_sample(samples, "samples")
        w = validate_weights(weights, len(sample))
        return cls._estimate(sample, w, None, **kwargs)

    def fit(self: D, samples: Any, weights: Any = None, **kwargs: Any) -> D:
        """Fit the distribution to a sample, returning a new instance.

        The current parameters seed numerical maximization where one is
        needed; the instance itself is left unchanged.
        """
        sample = validate_sample(samples, "samples")
        w = validate_weights(weights, len(sample))
        return type(self)._estimate(sample, w, self._params, **kwargs)

    @classmethod
    def _estimate(cls: Type[D], samples: np.ndarray, weights: Optional[np.ndarray],
                  start: Optional[ParameterBase], **kwargs: Any) -> D:
        if start is None:
            start = cls._initial_params(samples, weights)
        return cls._maximize_likelihood(samples, weights, start)

    @classmethod
    def _initial_params(cls, samples: np.ndarray, weights: Optional[np.ndarray]) -> ParameterBase:
        raise_not_supported(cls.__name__, "estimate")

    @classmethod
    def _maximize_likelihood(cls: Type[D], samples: np.ndarray, weights: Optional[np.ndarray],
                             start: ParameterBase) -> D:
        """Numerical MLE in the unconstrained parameter space."""
        config = get_numerical_config()
        params_class = type(start)
        w = np.full(len(samples), 1.0 / len(samples)) if weights is None else weights

        def neg_loglikelihood(theta: np.ndarray) -> float:
            try:
                candidate = cls.from_params(params_class.inverse_transform(theta))
            except (ParameterError, OverflowError):
                return 1e10
            value = -np.sum(w * candidate._logpdf(samples))
            return float(value) if np.isfinite(value) else 1e10

        result = optimize.minimize(
            neg_loglikelihood,
            start.transform(),
            method=config.optimization_method,
            tol=config.mle_tolerance,
            options={"maxiter": config.mle_max_iterations}
        )
        logger.debug(f"{cls.__name__} likelihood maximization: {result.nit} iterations, "
                     f"success={result.success}")

        if not result.success:
            logger.warning(f"{cls.__name__} likelihood maximization did not converge: "
                           f"{result.message}")
            warn_convergence(
                f"{cls.__name__} likelihood maximization did not converge",
                iterations=int(result.nit),
                tolerance=config.mle_tolerance,
                final_value=float(result.fun),
                details=str(result.message)
            )

        try:
            return cls.from_params(params_class.inverse_transform(result.x))
        except ParameterError as e:
            raise DistributionError(
                f"{cls.__name__} estimation produced invalid parameters",
                distribution_type=cls.__name__,
                issue="invalid estimate",
                details=str(e)
            ) from e

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def clone(self: D) -> D:
        """Return an independent copy with identical parameters."""
        return type(self).from_params(self._params.copy())

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._params == other._params  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._params))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._params.to_dict().items())
        return f"{self.__class__.__name__}({fields})"

    def __str__(self) -> str:
        fields = ", ".join(f"{k}={v}" for k, v in self._params.to_dict().items())
        return f"{self._name}({fields})"
