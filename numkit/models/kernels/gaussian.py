'''
Gaussian (radial basis function) kernel.
'''

import logging
import math
from typing import Any, Optional

import numpy as np
from scipy.spatial import distance as sp_distance

from numkit.core.exceptions import raise_data_error
from numkit.core.parameters import validate_positive
from numkit.core.validation import validate_matrix, validate_numeric_array
from numkit.models.distributions.base import RandomState, check_random_state
from numkit.models.kernels._numba_core import gaussian_gram
from numkit.models.kernels.base import Kernel

logger = logging.getLogger("numkit.models.kernels.gaussian")


class Gaussian(Kernel):
    """Gaussian kernel k(x, y) = exp(-gamma ||x - y||^2).

    ``sigma`` and ``gamma`` are two views of the same hyperparameter,
    related by gamma = 1 / (2 sigma^2); setting either updates the other.

    Args:
        sigma: Kernel width, must be positive

    Examples:
        >>> kernel = Gaussian(sigma=11.5)
        >>> round(kernel.function([0.2, 5.0], [3.0, 0.7]), 10)
        0.9052480234
    """

    def __init__(self, sigma: float = 1.0):
        self.sigma = sigma

    @property
    def sigma(self) -> float:
        return self._sigma

    @sigma.setter
    def sigma(self, value: float) -> None:
        value = float(validate_positive(float(value), "sigma"))
        self._sigma = value
        self._gamma = 1.0 / (2.0 * value * value)

    @property
    def gamma(self) -> float:
        return self._gamma

    @gamma.setter
    def gamma(self, value: float) -> None:
        value = float(validate_positive(float(value), "gamma"))
        self._gamma = value
        self._sigma = math.sqrt(1.0 / (2.0 * value))

    def _function(self, x: np.ndarray, y: np.ndarray) -> float:
        diff = x - y
        return math.exp(-self._gamma * float(np.dot(diff, diff)))

    def _gram(self, X: np.ndarray, Y: np.ndarray) -> np.ndarray:
        return gaussian_gram(X, Y, self._gamma)

    @classmethod
    def estimate(cls, X: Any, samples: Optional[int] = None,
                 random_state: RandomState = None) -> 'Gaussian':
        """Choose sigma as the median pairwise Euclidean distance of the data.

        Args:
            X: Matrix with one observation per row
            samples: Optional number of rows drawn without replacement to
                bound the quadratic cost
            random_state: Generator or seed for the subsample

        Returns:
            Gaussian: A kernel with the estimated width

        Raises:
            DataError: If fewer than two distinct observations are available
        """
        X = validate_numeric_array(validate_matrix(X, "X"), "X")
        if samples is not None and samples < X.shape[0]:
            rng = check_random_state(random_state)
            X = X[rng.choice(X.shape[0], size=samples, replace=False)]

        distances = sp_distance.pdist(X, metric="euclidean") if X.shape[0] > 1 else np.empty(0)
        sigma = float(np.median(distances)) if distances.size else 0.0
        if not sigma > 0:
            raise_data_error(
                "Gaussian kernel width cannot be estimated from fewer than two distinct points",
                data_name="X",
                issue="degenerate data"
            )
        logger.debug(f"Estimated Gaussian sigma {sigma:.6g} from {X.shape[0]} observations")
        return cls(sigma=sigma)

    def __repr__(self) -> str:
        return f"Gaussian(sigma={self._sigma!r})"
