# numkit/convergence/trackers.py
"""
Convergence trackers for iterative algorithms.

A tracker is a small mutable state machine owned by a single fitting loop.
The loop pushes the quantity it monitors (a log-likelihood, an error, a
parameter vector) after every iteration and stops once ``has_converged``
becomes true:

    Initial -> Iterating -> Converged | MaxIterationsReached | Diverged

Three criteria are provided:

- ``AbsoluteConvergence``: ``|old - new| <= tolerance``
- ``RelativeConvergence``: ``|old - new| <= tolerance * |old|``
- ``RelativeParameterConvergence``: the largest per-element relative change
  of a parameter vector is at most ``tolerance``

A tolerance of zero disables the change criterion, leaving the iteration
count as the only stopping rule; a ``max_iterations`` of zero removes the
iteration bound. At least one of the two must be positive. A NaN or infinite
value stops the loop as well. This is a terminal condition rather than an
error, and ``state`` (or ``has_diverged``) tells the caller which of the
terminal states was reached.
"""

import abc
import logging
from enum import Enum
from typing import Any, Optional

import numpy as np

from numkit.core.exceptions import DimensionError, raise_parameter_error
from numkit.core.validation import ensure_array

logger = logging.getLogger("numkit.convergence.trackers")


class ConvergenceState(Enum):
    """States of a convergence tracker."""
    INITIAL = "initial"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"
    DIVERGED = "diverged"


class ConvergenceTracker(abc.ABC):
    """Abstract base class for convergence trackers.

    Holds the tolerance, the iteration bound and the iteration counter, and
    derives ``has_converged`` and ``state`` from the criterion implemented by
    subclasses in ``_change_within_tolerance``.

    Attributes:
        tolerance: Non-negative change tolerance, zero to disable it
        max_iterations: Non-negative iteration bound, zero for unbounded; not
            zero together with ``tolerance``
        iterations: Number of updates since construction or ``clear``
    """

    def __init__(self, tolerance: float = 0.0, max_iterations: int = 100):
        self._tolerance = self._check_tolerance(tolerance)
        self._max_iterations = self._check_max_iterations(max_iterations)
        self._check_stopping_rule(self._tolerance, self._max_iterations)
        self.iterations = 0
        self._reported: Optional[ConvergenceState] = None

    @property
    def tolerance(self) -> float:
        """Change tolerance, zero to stop on the iteration count only."""
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value: float) -> None:
        value = self._check_tolerance(value)
        self._check_stopping_rule(value, self._max_iterations)
        self._tolerance = value

    @property
    def max_iterations(self) -> int:
        """Iteration bound, zero for no bound."""
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, value: int) -> None:
        value = self._check_max_iterations(value)
        self._check_stopping_rule(self._tolerance, value)
        self._max_iterations = value

    @staticmethod
    def _check_tolerance(value: float) -> float:
        if not value >= 0:
            raise_parameter_error(
                f"Tolerance must be non-negative, got {value}",
                param_name="tolerance", param_value=value, constraint=">= 0"
            )
        return float(value)

    @staticmethod
    def _check_max_iterations(value: int) -> int:
        if int(value) != value or value < 0:
            raise_parameter_error(
                f"Maximum number of iterations must be a non-negative integer, got {value}",
                param_name="max_iterations", param_value=value, constraint=">= 0"
            )
        return int(value)

    @staticmethod
    def _check_stopping_rule(tolerance: float, max_iterations: int) -> None:
        if tolerance == 0 and max_iterations == 0:
            raise_parameter_error(
                "A zero tolerance requires a positive max_iterations",
                param_name="max_iterations", param_value=max_iterations, constraint="> 0"
            )

    @property
    def iterations_exhausted(self) -> bool:
        """Whether the iteration counter reached a positive ``max_iterations``."""
        return self._max_iterations > 0 and self.iterations >= self._max_iterations

    @property
    @abc.abstractmethod
    def has_diverged(self) -> bool:
        """Whether the most recent value is NaN or infinite."""

    @abc.abstractmethod
    def _change_within_tolerance(self) -> bool:
        """Whether the last change satisfies the tolerance criterion."""

    @abc.abstractmethod
    def _has_values(self) -> bool:
        """Whether at least one value has been pushed."""

    @property
    def has_converged(self) -> bool:
        """Whether the driving loop should stop.

        True when the tolerance criterion is met (only if ``tolerance > 0``),
        when the iteration bound is reached, or when the value diverged.
        """
        return self.state in (
            ConvergenceState.CONVERGED,
            ConvergenceState.MAX_ITERATIONS_REACHED,
            ConvergenceState.DIVERGED,
        )

    @property
    def state(self) -> ConvergenceState:
        """Current state of the tracker."""
        if not self._has_values():
            return ConvergenceState.INITIAL

        if self.has_diverged:
            state = ConvergenceState.DIVERGED
        elif self._tolerance > 0 and self._change_within_tolerance():
            state = ConvergenceState.CONVERGED
        elif self.iterations_exhausted:
            state = ConvergenceState.MAX_ITERATIONS_REACHED
        else:
            return ConvergenceState.ITERATING

        if self._reported is not state:
            logger.debug(f"{self.__class__.__name__} reached {state.value} "
                         f"after {self.iterations} iterations")
            self._reported = state
        return state

    def clear(self) -> None:
        """Reset the history and the iteration counter."""
        self.iterations = 0
        self._reported = None

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(tolerance={self._tolerance}, "
                f"max_iterations={self._max_iterations}, iterations={self.iterations})")


class _ScalarConvergence(ConvergenceTracker):
    """Shared state of the scalar trackers."""

    def __init__(self, tolerance: float = 0.0, max_iterations: int = 100,
                 start_value: float = 0.0):
        super().__init__(tolerance, max_iterations)
        self._start_value = float(start_value)
        self._old_value = self._start_value
        self._new_value = self._start_value

    @property
    def old_value(self) -> float:
        """Value before the most recent update."""
        return self._old_value

    @property
    def new_value(self) -> float:
        """Most recent value."""
        return self._new_value

    @new_value.setter
    def new_value(self, value: float) -> None:
        self.update(value)

    def update(self, value: float) -> bool:
        """Push a new value and advance the iteration counter.

        Args:
            value: The monitored quantity after the current iteration

        Returns:
            bool: ``has_converged`` after the update
        """
        self._old_value = self._new_value
        self._new_value = float(value)
        self.iterations += 1
        return self.has_converged

    @property
    def delta(self) -> float:
        """Absolute change between the last two values."""
        return abs(self._old_value - self._new_value)

    @property
    def has_diverged(self) -> bool:
        return not np.isfinite(self._new_value)

    def _has_values(self) -> bool:
        return self.iterations > 0

    def clear(self) -> None:
        super().clear()
        self._old_value = self._start_value
        self._new_value = self._start_value


class AbsoluteConvergence(_ScalarConvergence):
    """Stop when consecutive values differ by at most ``tolerance``.

    Examples:
        >>> tracker = AbsoluteConvergence(tolerance=0.01)
        >>> tracker.update(10.0)
        False
        >>> tracker.update(10.005)
        True
    """

    def _change_within_tolerance(self) -> bool:
        return self.delta <= self._tolerance


class RelativeConvergence(_ScalarConvergence):
    """Stop when consecutive values differ by at most ``tolerance * |old|``."""

    def _change_within_tolerance(self) -> bool:
        return self.delta <= self._tolerance * abs(self._old_value)


class RelativeParameterConvergence(ConvergenceTracker):
    """Stop when every element of a parameter vector stops changing.

    The monitored change is the largest per-element relative change
    ``|old_i - new_i| / |old_i|``. An element whose previous value is exactly
    zero contributes its absolute change instead.
    """

    def __init__(self, tolerance: float = 0.0, max_iterations: int = 100):
        super().__init__(tolerance, max_iterations)
        self._old_values: Optional[np.ndarray] = None
        self._new_values: Optional[np.ndarray] = None

    @property
    def old_values(self) -> Optional[np.ndarray]:
        return None if self._old_values is None else self._old_values.copy()

    @property
    def new_values(self) -> Optional[np.ndarray]:
        return None if self._new_values is None else self._new_values.copy()

    @new_values.setter
    def new_values(self, values: Any) -> None:
        self.update(values)

    def update(self, values: Any) -> bool:
        """Push a copy of the current parameter vector.

        Returns:
            bool: ``has_converged`` after the update

        Raises:
            DimensionError: If the length differs from the previous vector
        """
        values = np.array(ensure_array(values, dtype=np.float64), dtype=np.float64).ravel()
        if self._new_values is not None and values.shape != self._new_values.shape:
            raise DimensionError(
                f"Parameter vector length changed from {len(self._new_values)} to {len(values)}",
                array_name="values",
                expected_shape=self._new_values.shape,
                actual_shape=values.shape
            )
        self._old_values = self._new_values
        self._new_values = values
        self.iterations += 1
        return self.has_converged

    @property
    def delta(self) -> float:
        """Largest per-element relative change, NaN before two updates."""
        if self._old_values is None or self._new_values is None or len(self._new_values) == 0:
            return np.nan
        change = np.abs(self._old_values - self._new_values)
        scale = np.abs(self._old_values)
        relative = np.where(scale > 0, change / np.where(scale > 0, scale, 1.0), change)
        return float(np.max(relative))

    @property
    def has_diverged(self) -> bool:
        return self._new_values is not None and not np.all(np.isfinite(self._new_values))

    def _has_values(self) -> bool:
        return self._new_values is not None

    def _change_within_tolerance(self) -> bool:
        delta = self.delta
        return not np.isnan(delta) and delta <= self._tolerance

    def clear(self) -> None:
        super().clear()
        self._old_values = None
        self._new_values = None
