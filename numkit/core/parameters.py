# numkit/core/parameters.py

"""
Parameter containers and validation infrastructure.

Distribution parameters are stored in frozen dataclasses deriving from
``ParameterBase``. Each container validates its constraints in
``__post_init__`` so that an invalid combination can never be constructed,
and converts itself to and from flat arrays and an unconstrained
representation used by numerical likelihood maximization.

The ``validate_*`` helpers raise ``ParameterError`` and never clamp a value
into range.
"""

import math
from dataclasses import dataclass, asdict, is_dataclass
from typing import Any, Dict, Optional, Type, TypeVar

import numpy as np

from .exceptions import ParameterError

P = TypeVar('P', bound='ParameterBase')


class ParameterBase:
    """Base class for all parameter containers.

    Subclasses are dataclasses; ``validate`` is called from ``__post_init__``
    and ``to_array``/``from_array``/``transform``/``inverse_transform`` map
    between the container and flat NumPy arrays.
    """

    def validate(self) -> None:
        """Validate parameter constraints.

        Raises:
            ParameterError: If parameter constraints are violated
        """

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to a dictionary.

        Returns:
            Dict[str, Any]: Dictionary representation of parameters
        """
        if is_dataclass(self):
            return asdict(self)
        return {k: v for k, v in self.__dict__.items() if not k.startswith('_')}

    def to_array(self) -> np.ndarray:
        """Convert parameters to a NumPy array, in field order."""
        return np.array([float(v) for v in self.to_dict().values()])

    @classmethod
    def from_array(cls: Type[P], array: np.ndarray, **kwargs: Any) -> P:
        """Create parameters from a NumPy array in field order.

        Args:
            array: Array representation of parameters
            **kwargs: Additional keyword arguments for parameter creation

        Returns:
            P: Parameter object

        Raises:
            ValueError: If the array length does not match the field count
        """
        names = [f for f in cls.__dataclass_fields__]  # type: ignore[attr-defined]
        array = np.asarray(array, dtype=np.float64)
        if len(array) != len(names):
            raise ValueError(f"Array length must be {len(names)}, got {len(array)}")
        return cls(**{name: float(value) for name, value in zip(names, array)}, **kwargs)

    def transform(self) -> np.ndarray:
        """Transform parameters to unconstrained space for optimization.

        Raises:
            NotImplementedError: If not implemented by subclass
        """
        raise NotImplementedError("transform must be implemented by subclass")

    @classmethod
    def inverse_transform(cls: Type[P], array: np.ndarray, **kwargs: Any) -> P:
        """Transform parameters from unconstrained space back to constrained space.

        Raises:
            NotImplementedError: If not implemented by subclass
        """
        raise NotImplementedError("inverse_transform must be implemented by subclass")

    def copy(self: P) -> P:
        """Create a copy of the parameter object.

        Returns:
            P: Copy of the parameter object
        """
        return type(self)(**self.to_dict())


# Parameter validation helpers

def validate_finite(value: float, param_name: str) -> float:
    """Validate that a parameter is a finite real number.

    Raises:
        ParameterError: If the parameter is NaN or infinite
    """
    if not math.isfinite(value):
        raise ParameterError(
            f"Parameter {param_name} must be finite, got {value}",
            param_name=param_name, param_value=value, constraint="finite"
        )
    return value


def validate_positive(value: float, param_name: str) -> float:
    """Validate that a parameter is positive.

    Args:
        value: Parameter value to validate
        param_name: Name of the parameter for error messages

    Returns:
        float: The validated parameter value

    Raises:
        ParameterError: If the parameter is not positive
    """
    if not value > 0 or not math.isfinite(value):
        raise ParameterError(
            f"Parameter {param_name} must be positive, got {value}",
            param_name=param_name, param_value=value, constraint="> 0"
        )
    return value


def validate_non_negative(value: float, param_name: str) -> float:
    """Validate that a parameter is non-negative.

    Args:
        value: Parameter value to validate
        param_name: Name of the parameter for error messages

    Returns:
        float: The validated parameter value

    Raises:
        ParameterError: If the parameter is negative
    """
    if not value >= 0:
        raise ParameterError(
            f"Parameter {param_name} must be non-negative, got {value}",
            param_name=param_name, param_value=value, constraint=">= 0"
        )
    return value


def validate_probability(value: float, param_name: str) -> float:
    """Validate that a parameter is a probability (between 0 and 1).

    Raises:
        ParameterError: If the parameter is not between 0 and 1
    """
    if not 0 <= value <= 1:
        raise ParameterError(
            f"Parameter {param_name} must be between 0 and 1, got {value}",
            param_name=param_name, param_value=value, constraint="[0, 1]"
        )
    return value


def validate_integer(value: Any, param_name: str, min_value: Optional[int] = None) -> int:
    """Validate that a parameter is an integer, optionally bounded below.

    Floats with an integral value are accepted and converted.

    Raises:
        ParameterError: If the parameter is not integral or below ``min_value``
    """
    if isinstance(value, bool):
        raise ParameterError(
            f"Parameter {param_name} must be an integer, got {value!r}",
            param_name=param_name, param_value=value
        )
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        raise ParameterError(
            f"Parameter {param_name} must be an integer, got {value!r}",
            param_name=param_name, param_value=value
        ) from None
    if not math.isfinite(as_float) or as_float != int(as_float):
        raise ParameterError(
            f"Parameter {param_name} must be an integer, got {value!r}",
            param_name=param_name, param_value=value
        )
    result = int(as_float)
    if min_value is not None and result < min_value:
        raise ParameterError(
            f"Parameter {param_name} must be at least {min_value}, got {result}",
            param_name=param_name, param_value=value
        )
    return result


@dataclass(frozen=True)
class PositiveParameters(ParameterBase):
    """Base for containers whose fields are all strictly positive.

    Provides log transforms for every field; subclasses only declare fields.
    """

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for name, value in self.to_dict().items():
            validate_positive(value, name)

    def transform(self) -> np.ndarray:
        return np.log(self.to_array())

    @classmethod
    def inverse_transform(cls: Type[P], array: np.ndarray, **kwargs: Any) -> P:
        return cls.from_array(np.exp(np.asarray(array, dtype=np.float64)), **kwargs)
