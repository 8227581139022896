'''
Beta-family special functions.

``beta`` and ``log_beta`` are computed through ``log_gamma`` so that large
arguments do not overflow in intermediate products. The regularized
incomplete Beta function switches to the symmetric form
I_x(a, b) = 1 - I_{1-x}(b, a) on the side of (a + 1) / (a + b + 2) where the
continued fraction converges fastest.
'''

import logging
from typing import Any, Optional

import numpy as np

from numkit.special._numba_core import (
    incomplete_beta_array,
    inverse_incomplete_beta_array,
    log_beta_array,
)
from numkit.special.gamma import (
    ArrayOrScalar,
    _broadcast,
    _check_positive,
    _check_unit_interval,
    _finish,
    _tolerances,
)

logger = logging.getLogger("numkit.special.beta")


def log_beta(a: Any, b: Any) -> ArrayOrScalar:
    """Natural logarithm of the Beta function.

    Raises:
        ParameterError: If ``a <= 0`` or ``b <= 0``
    """
    (a_values, b_values), shape, scalar = _broadcast(a, b)
    _check_positive(a_values, "a", "log_beta")
    _check_positive(b_values, "b", "log_beta")
    return _finish(log_beta_array(a_values, b_values), shape, scalar)


def beta(a: Any, b: Any) -> ArrayOrScalar:
    """Beta function B(a, b) = Gamma(a) Gamma(b) / Gamma(a + b).

    Raises:
        ParameterError: If ``a <= 0`` or ``b <= 0``
    """
    result = np.exp(log_beta(a, b))
    return float(result) if np.ndim(result) == 0 else result


def incomplete_beta(a: Any, b: Any, x: Any,
                    tolerance: Optional[float] = None,
                    max_iterations: Optional[int] = None) -> ArrayOrScalar:
    """Regularized incomplete Beta function I_x(a, b).

    Args:
        a: First shape, must be positive
        b: Second shape, must be positive
        x: Upper integration limit in [0, 1]
        tolerance: Relative tolerance of the continued fraction
        max_iterations: Iteration cap of the continued fraction

    Returns:
        I_x(a, b), exactly 0 at x = 0 and exactly 1 at x = 1

    Raises:
        ParameterError: If a shape is not positive or x lies outside [0, 1]

    Examples:
        >>> incomplete_beta(5, 4, 0.5)
        0.36328125
    """
    (a_values, b_values, x_values), shape, scalar = _broadcast(a, b, x)
    _check_positive(a_values, "a", "incomplete_beta")
    _check_positive(b_values, "b", "incomplete_beta")
    _check_unit_interval(x_values, "x", "incomplete_beta")
    eps, max_iter = _tolerances(tolerance, max_iterations)
    return _finish(incomplete_beta_array(a_values, b_values, x_values, eps, max_iter),
                   shape, scalar)


def inverse_incomplete_beta(a: Any, b: Any, p: Any,
                            tolerance: Optional[float] = None,
                            max_iterations: Optional[int] = None) -> ArrayOrScalar:
    """Inverse of the regularized incomplete Beta function in x.

    Returns x in [0, 1] such that I_x(a, b) = p.

    Raises:
        ParameterError: If a shape is not positive or p lies outside [0, 1]
    """
    (a_values, b_values, p_values), shape, scalar = _broadcast(a, b, p)
    _check_positive(a_values, "a", "inverse_incomplete_beta")
    _check_positive(b_values, "b", "inverse_incomplete_beta")
    _check_unit_interval(p_values, "p", "inverse_incomplete_beta")
    eps, max_iter = _tolerances(tolerance, max_iterations)
    return _finish(inverse_incomplete_beta_array(a_values, b_values, p_values, eps, max_iter),
                   shape, scalar)
