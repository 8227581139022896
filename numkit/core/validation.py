# numkit/core/validation.py

"""
Validation utilities for sample arrays.

Every public routine that consumes samples funnels them through these helpers,
so NumPy arrays, Python sequences and pandas Series/DataFrames are accepted
uniformly and problems (wrong dimensionality, empty input, NaN or infinite
values, mismatched weights) surface as ``DimensionError`` or ``DataError``
before any computation starts.
"""

from typing import Any, Optional, Tuple

import numpy as np
import pandas as pd

from numkit.core.exceptions import DimensionError, raise_data_error


def ensure_array(data: Any, dtype: Optional[np.dtype] = None) -> np.ndarray:
    """
    Ensure input is a NumPy array.

    Args:
        data: Input data to convert to a NumPy array
        dtype: NumPy data type to use for the array (optional)

    Returns:
        Input data as a NumPy array

    Examples:
        >>> ensure_array([1, 2, 3])
        array([1, 2, 3])
        >>> ensure_array(pd.Series([1.0, 2.0]))
        array([1., 2.])
    """
    if isinstance(data, np.ndarray) and (dtype is None or data.dtype == dtype):
        return data

    if isinstance(data, (pd.Series, pd.DataFrame)):
        return data.to_numpy() if dtype is None else data.to_numpy(dtype=dtype)

    return np.asarray(data) if dtype is None else np.asarray(data, dtype=dtype)


def validate_vector(
    vector: Any,
    vector_name: str = "vector",
    expected_length: Optional[int] = None,
    allow_empty: bool = False
) -> np.ndarray:
    """Validate that the input is a one-dimensional float vector.

    Column and row vectors are flattened.

    Args:
        vector: Vector to validate
        vector_name: Name of the vector for error messages
        expected_length: Expected length, or None for any
        allow_empty: Whether a vector of length zero is acceptable

    Returns:
        np.ndarray: The validated float64 vector

    Raises:
        TypeError: If vector is None
        DimensionError: If vector is not 1-dimensional or has wrong length
        DataError: If the vector is empty and ``allow_empty`` is False
    """
    if vector is None:
        raise TypeError(f"{vector_name} cannot be None")

    vector = ensure_array(vector, dtype=np.float64)

    if vector.ndim == 0:
        vector = vector.reshape(1)
    elif vector.ndim == 2 and (vector.shape[0] == 1 or vector.shape[1] == 1):
        vector = vector.ravel()
    elif vector.ndim != 1:
        raise DimensionError(
            f"{vector_name} must be 1-dimensional, got shape {vector.shape}",
            array_name=vector_name,
            expected_shape="1D vector",
            actual_shape=vector.shape
        )

    if expected_length is not None and len(vector) != expected_length:
        raise DimensionError(
            f"{vector_name} has length {len(vector)}, expected {expected_length}",
            array_name=vector_name,
            expected_shape=f"vector of length {expected_length}",
            actual_shape=vector.shape
        )

    if not allow_empty and len(vector) == 0:
        raise_data_error(
            f"{vector_name} must not be empty",
            data_name=vector_name,
            issue="empty"
        )

    return vector


def validate_matrix(matrix: Any, matrix_name: str = "matrix") -> np.ndarray:
    """Validate that the input is a non-empty two-dimensional float matrix.

    A one-dimensional input is treated as a single column of observations.

    Raises:
        DimensionError: If the input has more than two dimensions
        DataError: If the matrix has no rows
    """
    matrix = ensure_array(matrix, dtype=np.float64)
    if matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)
    if matrix.ndim != 2:
        raise DimensionError(
            f"{matrix_name} must be 2-dimensional, got {matrix.ndim} dimensions",
            array_name=matrix_name,
            expected_shape="(n_samples, n_features)",
            actual_shape=matrix.shape
        )
    if matrix.shape[0] == 0:
        raise_data_error(f"{matrix_name} must not be empty", data_name=matrix_name, issue="empty")
    return matrix


def validate_numeric_array(
    array: np.ndarray,
    array_name: str = "array",
    allow_nan: bool = False,
    allow_inf: bool = False
) -> np.ndarray:
    """Validate that an array contains valid numeric values.

    Args:
        array: Array to validate
        array_name: Name of the array for error messages
        allow_nan: Whether to allow NaN values
        allow_inf: Whether to allow infinite values

    Returns:
        np.ndarray: The validated array

    Raises:
        DataError: If array contains invalid values
    """
    if not allow_nan and np.isnan(array).any():
        raise_data_error(
            f"{array_name} contains NaN values",
            data_name=array_name,
            issue="contains NaN values",
            index=int(np.flatnonzero(np.isnan(array))[0])
        )

    if not allow_inf and np.isinf(array).any():
        raise_data_error(
            f"{array_name} contains infinite values",
            data_name=array_name,
            issue="contains infinite values",
            index=int(np.flatnonzero(np.isinf(array))[0])
        )

    return array


def validate_sample(sample: Any, sample_name: str = "sample", min_size: int = 1) -> np.ndarray:
    """Validate a finite one-dimensional sample with at least ``min_size`` values.

    Raises:
        DimensionError: If the sample is not one-dimensional
        DataError: If the sample is too small or contains non-finite values
    """
    sample = validate_vector(sample, sample_name)
    validate_numeric_array(sample, sample_name)
    if len(sample) < min_size:
        raise_data_error(
            f"{sample_name} must contain at least {min_size} observations, got {len(sample)}",
            data_name=sample_name,
            issue="too few observations"
        )
    return sample


def validate_weights(weights: Any, n: int, weights_name: str = "weights") -> Optional[np.ndarray]:
    """Validate optional non-negative observation weights.

    Weights are normalized to sum to one.

    Returns:
        Optional[np.ndarray]: Normalized weights, or None when none were given

    Raises:
        DimensionError: If the length does not match the sample
        DataError: If weights are negative, non-finite, or all zero
    """
    if weights is None:
        return None
    weights = validate_vector(weights, weights_name, expected_length=n)
    validate_numeric_array(weights, weights_name)
    if (weights < 0).any():
        raise_data_error(f"{weights_name} must be non-negative", data_name=weights_name,
                         issue="negative weights")
    total = weights.sum()
    if total <= 0:
        raise_data_error(f"{weights_name} must not sum to zero", data_name=weights_name,
                         issue="zero total weight")
    return weights / total


def validate_same_dimension(x: Any, y: Any,
                            names: Tuple[str, str] = ("x", "y")) -> Tuple[np.ndarray, np.ndarray]:
    """Validate two feature vectors of equal length.

    Raises:
        DimensionError: If the vectors have different lengths
    """
    x = validate_vector(x, names[0], allow_empty=True)
    y = validate_vector(y, names[1], allow_empty=True)
    if x.shape != y.shape:
        raise DimensionError(
            f"{names[0]} and {names[1]} must have the same length, got {len(x)} and {len(y)}",
            array_name=names[1],
            expected_shape=x.shape,
            actual_shape=y.shape
        )
    return x, y
