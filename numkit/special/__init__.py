"""
numkit Special Functions

Gamma, log-Gamma, Digamma, the regularized incomplete Gamma and Beta
functions with their inverses, and the Beta function. All functions accept
scalars or array-likes and are evaluated by Numba-compiled kernels.
"""

import logging

logger = logging.getLogger("numkit.special")

from .gamma import (
    gamma,
    log_gamma,
    digamma,
    lower_incomplete_gamma,
    upper_incomplete_gamma,
    inverse_lower_incomplete_gamma,
)
from .beta import (
    beta,
    log_beta,
    incomplete_beta,
    inverse_incomplete_beta,
)

__all__ = [
    'gamma',
    'log_gamma',
    'digamma',
    'lower_incomplete_gamma',
    'upper_incomplete_gamma',
    'inverse_lower_incomplete_gamma',
    'beta',
    'log_beta',
    'incomplete_beta',
    'inverse_incomplete_beta',
]
