'''
Gamma-family special functions.

Public wrappers around the JIT-compiled kernels in
``numkit.special._numba_core``. Each function accepts a scalar or any
array-like (NumPy arrays, Python sequences, pandas Series), broadcasts its
arguments and evaluates the kernel elementwise. A scalar argument yields a
Python float; anything else yields an ``np.ndarray`` of the broadcast shape.

Arguments outside the mathematical domain raise ``ParameterError`` at call
time (Gamma at zero or a negative integer, a non-positive shape for the
incomplete functions). NaN arguments are not an error and propagate as NaN.
Large arguments overflow to ``+inf`` following IEEE semantics.

Iteration caps and tolerances for the series and continued fractions come
from the ``numerical`` configuration section and may be overridden per call.
'''

import logging
from typing import Any, Optional, Tuple, Union

import numpy as np

from numkit.core.config import get_numerical_config
from numkit.core.exceptions import raise_parameter_error
from numkit.special._numba_core import (
    digamma_array,
    gamma_array,
    inverse_lower_incomplete_gamma_array,
    log_gamma_array,
    lower_incomplete_gamma_array,
    upper_incomplete_gamma_array,
)

logger = logging.getLogger("numkit.special.gamma")

ArrayOrScalar = Union[float, np.ndarray]


def _broadcast(*args: Any) -> Tuple[Tuple[np.ndarray, ...], Tuple[int, ...], bool]:
    """Broadcast arguments to flat, owned float64 arrays.

    Returns:
        The flattened arrays, the common shape and whether every argument
        was a scalar
    """
    arrays = [np.asarray(arg, dtype=np.float64) for arg in args]
    scalar = all(arr.ndim == 0 for arr in arrays)
    broadcast = np.broadcast_arrays(*arrays)
    shape = broadcast[0].shape
    # Copies, since broadcast views are read-only
    flat = tuple(np.array(arr, dtype=np.float64).ravel() for arr in broadcast)
    return flat, shape, scalar


def _finish(result: np.ndarray, shape: Tuple[int, ...], scalar: bool) -> ArrayOrScalar:
    if scalar:
        return float(result[0])
    return result.reshape(shape)


def _tolerances(tolerance: Optional[float], max_iterations: Optional[int]) -> Tuple[float, int]:
    config = get_numerical_config()
    eps = config.special_tolerance if tolerance is None else float(tolerance)
    max_iter = config.special_max_iterations if max_iterations is None else int(max_iterations)
    return eps, max_iter


def _check_poles(x: np.ndarray, function_name: str) -> None:
    # Zero and the negative integers; NaN compares False and passes through
    poles = (x <= 0) & (x == np.floor(x))
    if poles.any():
        value = float(x[np.flatnonzero(poles)[0]])
        raise_parameter_error(
            f"{function_name} is undefined at {value}",
            param_name="x",
            param_value=value,
            constraint="x not in {0, -1, -2, ...}"
        )


def _check_positive(values: np.ndarray, name: str, function_name: str) -> None:
    bad = values <= 0
    if bad.any():
        value = float(values[np.flatnonzero(bad)[0]])
        raise_parameter_error(
            f"{function_name} requires {name} > 0, got {value}",
            param_name=name,
            param_value=value,
            constraint="> 0"
        )


def _check_non_negative(values: np.ndarray, name: str, function_name: str) -> None:
    bad = values < 0
    if bad.any():
        value = float(values[np.flatnonzero(bad)[0]])
        raise_parameter_error(
            f"{function_name} requires {name} >= 0, got {value}",
            param_name=name,
            param_value=value,
            constraint=">= 0"
        )


def _check_unit_interval(values: np.ndarray, name: str, function_name: str) -> None:
    bad = (values < 0) | (values > 1)
    if bad.any():
        value = float(values[np.flatnonzero(bad)[0]])
        raise_parameter_error(
            f"{function_name} requires 0 <= {name} <= 1, got {value}",
            param_name=name,
            param_value=value,
            constraint="[0, 1]"
        )


def gamma(x: Any) -> ArrayOrScalar:
    """Gamma function.

    Exact for positive integers up to 171, Lanczos approximation elsewhere,
    with the reflection formula for arguments below 0.5.

    Args:
        x: Argument(s)

    Returns:
        Gamma(x); ``+inf`` where the value overflows double precision

    Raises:
        ParameterError: If any argument is zero or a negative integer

    Examples:
        >>> gamma(5)
        24.0
        >>> gamma(114.2) > 1e184
        True
    """
    (values,), shape, scalar = _broadcast(x)
    _check_poles(values, "gamma")
    return _finish(gamma_array(values), shape, scalar)


def log_gamma(x: Any) -> ArrayOrScalar:
    """Natural logarithm of the absolute value of the Gamma function.

    Finite wherever the argument is finite and not a pole, including
    arguments for which ``gamma`` itself overflows.

    Raises:
        ParameterError: If any argument is zero or a negative integer
    """
    (values,), shape, scalar = _broadcast(x)
    _check_poles(values, "log_gamma")
    return _finish(log_gamma_array(values), shape, scalar)


def digamma(x: Any) -> ArrayOrScalar:
    """Digamma function, the derivative of ``log_gamma``.

    Raises:
        ParameterError: If any argument is zero or a negative integer
    """
    (values,), shape, scalar = _broadcast(x)
    _check_poles(values, "digamma")
    return _finish(digamma_array(values), shape, scalar)


def lower_incomplete_gamma(a: Any, x: Any,
                           tolerance: Optional[float] = None,
                           max_iterations: Optional[int] = None) -> ArrayOrScalar:
    """Regularized lower incomplete Gamma function P(a, x).

    Args:
        a: Shape, must be positive
        x: Upper integration limit, must be non-negative
        tolerance: Relative tolerance of the series and continued fraction
        max_iterations: Iteration cap of the series and continued fraction

    Returns:
        P(a, x), with P(a, 0) = 0 and P(a, inf) = 1

    Raises:
        ParameterError: If ``a <= 0`` or ``x < 0``
    """
    (a_values, x_values), shape, scalar = _broadcast(a, x)
    _check_positive(a_values, "a", "lower_incomplete_gamma")
    _check_non_negative(x_values, "x", "lower_incomplete_gamma")
    eps, max_iter = _tolerances(tolerance, max_iterations)
    return _finish(lower_incomplete_gamma_array(a_values, x_values, eps, max_iter), shape, scalar)


def upper_incomplete_gamma(a: Any, x: Any,
                           tolerance: Optional[float] = None,
                           max_iterations: Optional[int] = None) -> ArrayOrScalar:
    """Regularized upper incomplete Gamma function Q(a, x) = 1 - P(a, x).

    Computed directly rather than as a complement where the continued
    fraction applies, so small upper tails keep their relative accuracy.

    Raises:
        ParameterError: If ``a <= 0`` or ``x < 0``
    """
    (a_values, x_values), shape, scalar = _broadcast(a, x)
    _check_positive(a_values, "a", "upper_incomplete_gamma")
    _check_non_negative(x_values, "x", "upper_incomplete_gamma")
    eps, max_iter = _tolerances(tolerance, max_iterations)
    return _finish(upper_incomplete_gamma_array(a_values, x_values, eps, max_iter), shape, scalar)


def inverse_lower_incomplete_gamma(a: Any, p: Any,
                                   tolerance: Optional[float] = None,
                                   max_iterations: Optional[int] = None) -> ArrayOrScalar:
    """Inverse of the regularized lower incomplete Gamma function in x.

    Returns x such that P(a, x) = p.

    Raises:
        ParameterError: If ``a <= 0`` or ``p`` lies outside [0, 1]
    """
    (a_values, p_values), shape, scalar = _broadcast(a, p)
    _check_positive(a_values, "a", "inverse_lower_incomplete_gamma")
    _check_unit_interval(p_values, "p", "inverse_lower_incomplete_gamma")
    eps, max_iter = _tolerances(tolerance, max_iterations)
    return _finish(inverse_lower_incomplete_gamma_array(a_values, p_values, eps, max_iter),
                   shape, scalar)
