"""
Numba-accelerated Gram matrix kernels.

Each routine fills the matrix K[i, j] = k(X[i], Y[j]) row by row. Inputs are
contiguous float64 matrices with matching column counts.
"""

import logging
import math

import numpy as np
from numba import jit

logger = logging.getLogger("numkit.models.kernels._numba_core")


@jit(nopython=True, cache=True)
def gaussian_gram(X: np.ndarray, Y: np.ndarray, gamma: float) -> np.ndarray:
    """Gram matrix of exp(-gamma ||x - y||^2)."""
    n, m, d = X.shape[0], Y.shape[0], X.shape[1]
    K = np.empty((n, m))
    for i in range(n):
        for j in range(m):
            norm = 0.0
            for k in range(d):
                diff = X[i, k] - Y[j, k]
                norm += diff * diff
            K[i, j] = math.exp(-gamma * norm)
    return K


@jit(nopython=True, cache=True)
def polynomial_gram(X: np.ndarray, Y: np.ndarray, degree: int, constant: float) -> np.ndarray:
    """Gram matrix of (<x, y> + c)^d."""
    n, m, d = X.shape[0], Y.shape[0], X.shape[1]
    K = np.empty((n, m))
    for i in range(n):
        for j in range(m):
            dot = 0.0
            for k in range(d):
                dot += X[i, k] * Y[j, k]
            K[i, j] = (dot + constant) ** degree
    return K
