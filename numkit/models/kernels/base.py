'''
Base class for Mercer kernels.

A kernel is a symmetric positive semi-definite similarity k(x, y) between
feature vectors. Through the kernel trick it induces the squared distance

    d(x, y) = k(x, x) + k(y, y) - 2 k(x, y)

in the kernel's feature space, which is non-negative, symmetric and zero
for identical vectors. Rounding can make the expression slightly negative
for nearly identical vectors; ``distance`` clips it at zero.

Kernels are immutable-by-convention value objects; their hyperparameters
are validated when set.
'''

import abc
import logging
from typing import Any, Optional

import numpy as np

from numkit.core.exceptions import DimensionError
from numkit.core.validation import validate_matrix, validate_numeric_array, validate_same_dimension

logger = logging.getLogger("numkit.models.kernels.base")


class Kernel(abc.ABC):
    """Abstract base class for kernels.

    Subclasses implement ``_function`` on validated float64 vectors and may
    override ``_gram`` with a compiled routine.
    """

    def function(self, x: Any, y: Any) -> float:
        """Kernel value k(x, y).

        Raises:
            DimensionError: If ``x`` and ``y`` have different lengths
        """
        x, y = validate_same_dimension(x, y)
        return float(self._function(x, y))

    def __call__(self, x: Any, y: Any) -> float:
        return self.function(x, y)

    def distance(self, x: Any, y: Any) -> float:
        """Squared feature-space distance k(x, x) + k(y, y) - 2 k(x, y), at least zero.

        Raises:
            DimensionError: If ``x`` and ``y`` have different lengths
        """
        x, y = validate_same_dimension(x, y)
        value = self._function(x, x) + self._function(y, y) - 2.0 * self._function(x, y)
        return float(max(value, 0.0))

    @abc.abstractmethod
    def _function(self, x: np.ndarray, y: np.ndarray) -> float:
        """Kernel value on two validated vectors of equal length."""

    def gram(self, X: Any, Y: Optional[Any] = None) -> np.ndarray:
        """Kernel matrix K[i, j] = k(X[i], Y[j]).

        Args:
            X: Matrix with one observation per row
            Y: Second matrix, defaults to ``X``

        Returns:
            np.ndarray: Matrix of shape (len(X), len(Y))

        Raises:
            DimensionError: If the column counts differ
        """
        X = np.ascontiguousarray(validate_numeric_array(validate_matrix(X, "X"), "X"))
        if Y is None:
            Y = X
        else:
            Y = np.ascontiguousarray(validate_numeric_array(validate_matrix(Y, "Y"), "Y"))
        if X.shape[1] != Y.shape[1]:
            raise DimensionError(
                f"X and Y must have the same number of columns, got {X.shape[1]} and {Y.shape[1]}",
                array_name="Y",
                expected_shape=f"(n, {X.shape[1]})",
                actual_shape=Y.shape
            )
        return self._gram(X, Y)

    def _gram(self, X: np.ndarray, Y: np.ndarray) -> np.ndarray:
        K = np.empty((X.shape[0], Y.shape[0]))
        for i in range(X.shape[0]):
            for j in range(Y.shape[0]):
                K[i, j] = self._function(X[i], Y[j])
        return K
