'''
Utility functions for the distribution families.

Weighted sample statistics used by the closed-form estimators, and a small
registry that resolves distribution classes by name.
'''

import logging
from typing import Dict, List, Optional, Type

import numpy as np

from numkit.core.exceptions import raise_data_error, raise_parameter_error

logger = logging.getLogger("numkit.models.distributions.utils")

_REGISTRY: Dict[str, Type] = {}


def register_distribution(name: str):
    """Class decorator adding a distribution family to the name registry."""
    def decorator(cls: Type) -> Type:
        _REGISTRY[name.lower()] = cls
        return cls
    return decorator


def distribution_from_name(name: str) -> Type:
    """Resolve a distribution class from its registered name.

    Args:
        name: Case-insensitive family name, for example ``"gamma"``

    Returns:
        The distribution class

    Raises:
        ParameterError: If no family is registered under ``name``
    """
    try:
        return _REGISTRY[name.lower()]
    except KeyError:
        raise_parameter_error(
            f"Unknown distribution '{name}'",
            param_name="name",
            param_value=name,
            constraint=f"one of {sorted(_REGISTRY)}"
        )


def get_available_distributions() -> List[str]:
    """Names of all registered distribution families, sorted."""
    return sorted(_REGISTRY)


def weighted_mean(x: np.ndarray, weights: Optional[np.ndarray] = None) -> float:
    """Mean of ``x``; ``weights`` are assumed normalized."""
    if weights is None:
        return float(np.mean(x))
    return float(np.dot(weights, x))


def weighted_variance(x: np.ndarray, weights: Optional[np.ndarray] = None,
                      mean: Optional[float] = None) -> float:
    """Biased (maximum likelihood) variance of ``x``."""
    if mean is None:
        mean = weighted_mean(x, weights)
    if weights is None:
        return float(np.mean((x - mean) ** 2))
    return float(np.dot(weights, (x - mean) ** 2))


def weighted_median(x: np.ndarray, weights: Optional[np.ndarray] = None) -> float:
    """Median of ``x``; with weights, the smallest value whose cumulative
    weight reaches one half."""
    if weights is None:
        return float(np.median(x))
    order = np.argsort(x)
    cumulative = np.cumsum(weights[order])
    index = int(np.searchsorted(cumulative, 0.5 * cumulative[-1], side="left"))
    return float(x[order][min(index, len(x) - 1)])


def require_positive_sample(x: np.ndarray, family: str) -> None:
    """Raise DataError unless every observation is strictly positive."""
    if np.any(x <= 0):
        raise_data_error(
            f"{family} estimation requires strictly positive observations",
            data_name="samples",
            issue="non-positive observations",
            index=int(np.flatnonzero(x <= 0)[0])
        )


def require_unit_interval_sample(x: np.ndarray, family: str) -> None:
    """Raise DataError unless every observation lies strictly inside (0, 1)."""
    bad = (x <= 0) | (x >= 1)
    if np.any(bad):
        raise_data_error(
            f"{family} estimation requires observations inside (0, 1)",
            data_name="samples",
            issue="observations outside (0, 1)",
            index=int(np.flatnonzero(bad)[0])
        )
