'''
Polynomial kernel.
'''

import logging

import numpy as np

from numkit.core.parameters import validate_integer, validate_non_negative
from numkit.models.kernels._numba_core import polynomial_gram
from numkit.models.kernels.base import Kernel

logger = logging.getLogger("numkit.models.kernels.polynomial")


class Polynomial(Kernel):
    """Polynomial kernel k(x, y) = (<x, y> + constant)^degree.

    Args:
        degree: Positive integer exponent
        constant: Non-negative offset; zero gives the homogeneous kernel

    Examples:
        >>> Polynomial(degree=1, constant=0).function([1, 1], [1, 1])
        2.0
    """

    def __init__(self, degree: int = 1, constant: float = 1.0):
        self.degree = degree
        self.constant = constant

    @property
    def degree(self) -> int:
        return self._degree

    @degree.setter
    def degree(self, value: int) -> None:
        self._degree = validate_integer(value, "degree", min_value=1)

    @property
    def constant(self) -> float:
        return self._constant

    @constant.setter
    def constant(self, value: float) -> None:
        self._constant = float(validate_non_negative(float(value), "constant"))

    def _function(self, x: np.ndarray, y: np.ndarray) -> float:
        return (float(np.dot(x, y)) + self._constant) ** self._degree

    def _gram(self, X: np.ndarray, Y: np.ndarray) -> np.ndarray:
        return polynomial_gram(X, Y, self._degree, self._constant)

    def __repr__(self) -> str:
        return f"Polynomial(degree={self._degree}, constant={self._constant!r})"
