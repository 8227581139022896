'''
Custom exception classes for numkit.

This module defines the exception and warning hierarchy used throughout
numkit. Errors carry a primary message, optional details and a context
dictionary, and record the location of the code that raised them, which
makes failures deep inside numerical routines easier to trace.

The taxonomy separates three kinds of failure that callers usually want to
handle differently:

- domain violations (``ParameterError``), raised when a parameter or an
  argument lies outside the mathematically valid domain;
- unsupported quantities (``NotSupportedError``), raised when a distribution
  has no closed form for a requested property;
- data problems (``DataError``, ``DimensionError``), raised when samples are
  empty, contain non-finite values or have incompatible shapes.

Convergence trouble is reported through warnings rather than errors, since
iterative routines stop on their own iteration bound.
'''

from typing import Any, Dict, Optional, Tuple, Union
import inspect
import warnings
from pathlib import Path


class NumkitError(Exception):
    """Base exception class for all numkit errors.

    Attributes:
        message: The error message
        details: Additional details about the error
        context: Dictionary containing contextual information about the error
    """

    def __init__(self,
                 message: str,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the NumkitError.

        Args:
            message: The primary error message
            details: Additional details about the error
            context: Dictionary containing contextual information about the error
        """
        self.message = message
        self.details = details
        self.context = context or {}

        full_message = message
        if details:
            full_message += f"\n\nDetails: {details}"

        if context:
            context_str = "\n".join(f"  {k}: {v}" for k, v in context.items())
            full_message += f"\n\nContext:\n{context_str}"

        # Caller location, skipping the constructors of subclasses
        frame = inspect.currentframe()
        if frame:
            try:
                frame = frame.f_back
                while frame and frame.f_code.co_name == "__init__":
                    frame = frame.f_back
                if frame:
                    caller_info = inspect.getframeinfo(frame)
                    full_message += f"\n\nLocation: {Path(caller_info.filename).name}:{caller_info.lineno}"
            finally:
                del frame

        super().__init__(full_message)


class ParameterError(NumkitError, ValueError):
    """Exception raised when a parameter violates its domain.

    Used at construction time of distributions, kernels, trackers and tests,
    and at call time by special functions evaluated at a pole.

    Attributes:
        param_name: The name of the parameter that caused the error
        param_value: The invalid parameter value
        constraint: Description of the constraint that was violated
    """

    def __init__(self,
                 message: str,
                 param_name: Optional[str] = None,
                 param_value: Optional[Any] = None,
                 constraint: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the ParameterError.

        Args:
            message: The primary error message
            param_name: The name of the parameter that caused the error
            param_value: The invalid parameter value
            constraint: Description of the constraint that was violated
            details: Additional details about the error
            context: Dictionary containing contextual information about the error
        """
        self.param_name = param_name
        self.param_value = param_value
        self.constraint = constraint

        context_dict = context or {}
        if param_name:
            context_dict["Parameter"] = param_name
        if param_value is not None:
            context_dict["Value"] = param_value
        if constraint:
            context_dict["Constraint"] = constraint

        super().__init__(message, details, context_dict)


class NotSupportedError(NumkitError, NotImplementedError):
    """Exception raised when a quantity has no closed form.

    Distinct from ``ParameterError``: the object is valid, but the requested
    property (for instance the mean of a Gompertz distribution) is not
    available.

    Attributes:
        owner: The class or object name that lacks the quantity
        quantity: The name of the unsupported quantity
    """

    def __init__(self,
                 message: str,
                 owner: Optional[str] = None,
                 quantity: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.owner = owner
        self.quantity = quantity

        context_dict = context or {}
        if owner:
            context_dict["Owner"] = owner
        if quantity:
            context_dict["Quantity"] = quantity

        super().__init__(message, details, context_dict)


class DimensionError(NumkitError, ValueError):
    """Exception raised for errors related to array dimensions.

    Attributes:
        array_name: The name of the array that caused the error
        expected_shape: The expected shape of the array
        actual_shape: The actual shape of the array
    """

    def __init__(self,
                 message: str,
                 array_name: Optional[str] = None,
                 expected_shape: Optional[Union[Tuple[int, ...], str]] = None,
                 actual_shape: Optional[Tuple[int, ...]] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the DimensionError.

        Args:
            message: The primary error message
            array_name: The name of the array that caused the error
            expected_shape: The expected shape of the array
            actual_shape: The actual shape of the array
            details: Additional details about the error
            context: Dictionary containing contextual information about the error
        """
        self.array_name = array_name
        self.expected_shape = expected_shape
        self.actual_shape = actual_shape

        context_dict = context or {}
        if array_name:
            context_dict["Array"] = array_name
        if expected_shape is not None:
            context_dict["Expected Shape"] = expected_shape
        if actual_shape is not None:
            context_dict["Actual Shape"] = actual_shape

        super().__init__(message, details, context_dict)


class DataError(NumkitError, ValueError):
    """Exception raised for errors related to input samples.

    Raised when a sample is empty, contains NaN or infinite values, or is
    otherwise unsuitable for the requested operation.

    Attributes:
        data_name: The name of the data that caused the error
        issue: Description of the issue with the data
        index: The index or location where the issue was detected
    """

    def __init__(self,
                 message: str,
                 data_name: Optional[str] = None,
                 issue: Optional[str] = None,
                 index: Optional[Union[int, Tuple[int, ...], str]] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the DataError.

        Args:
            message: The primary error message
            data_name: The name of the data that caused the error
            issue: Description of the issue with the data
            index: The index or location where the issue was detected
            details: Additional details about the error
            context: Dictionary containing contextual information about the error
        """
        self.data_name = data_name
        self.issue = issue
        self.index = index

        context_dict = context or {}
        if data_name:
            context_dict["Data"] = data_name
        if issue:
            context_dict["Issue"] = issue
        if index is not None:
            context_dict["Index"] = index

        super().__init__(message, details, context_dict)


class DistributionError(NumkitError):
    """Exception raised when a distribution cannot be estimated or evaluated.

    Attributes:
        distribution_type: The type of distribution
        parameter: The parameter that caused the error
        value: The offending value
        issue: Description of the issue with the distribution
    """

    def __init__(self,
                 message: str,
                 distribution_type: Optional[str] = None,
                 parameter: Optional[str] = None,
                 value: Optional[Any] = None,
                 issue: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.distribution_type = distribution_type
        self.parameter = parameter
        self.value = value
        self.issue = issue

        context_dict = context or {}
        if distribution_type:
            context_dict["Distribution"] = distribution_type
        if parameter:
            context_dict["Parameter"] = parameter
        if value is not None:
            context_dict["Value"] = value
        if issue:
            context_dict["Issue"] = issue

        super().__init__(message, details, context_dict)


class TestError(NumkitError):
    """Exception raised when a hypothesis test cannot be computed.

    Attributes:
        test_type: The type of statistical test
        parameter: The parameter that caused the error
        issue: Description of the issue with the test
    """

    __test__ = False

    def __init__(self,
                 message: str,
                 test_type: Optional[str] = None,
                 parameter: Optional[str] = None,
                 issue: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.test_type = test_type
        self.parameter = parameter
        self.issue = issue

        context_dict = context or {}
        if test_type:
            context_dict["Test Type"] = test_type
        if parameter:
            context_dict["Parameter"] = parameter
        if issue:
            context_dict["Issue"] = issue

        super().__init__(message, details, context_dict)


class ConfigurationError(NumkitError):
    """Exception raised for invalid configuration settings.

    Attributes:
        setting: The configuration setting that caused the error
        value: The invalid value
        issue: Description of the issue with the configuration
    """

    def __init__(self,
                 message: str,
                 setting: Optional[str] = None,
                 value: Optional[Any] = None,
                 issue: Optional[str] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.setting = setting
        self.value = value
        self.issue = issue

        context_dict = context or {}
        if setting:
            context_dict["Setting"] = setting
        if value is not None:
            context_dict["Value"] = value
        if issue:
            context_dict["Issue"] = issue

        super().__init__(message, details, context_dict)


class NumkitWarning(Warning):
    """Base warning class for all numkit warnings.

    Attributes:
        message: The warning message
        details: Additional details about the warning
        context: Dictionary containing contextual information about the warning
    """

    def __init__(self,
                 message: str,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details
        self.context = context or {}

        full_message = message
        if details:
            full_message += f"\n\nDetails: {details}"

        if context:
            context_str = "\n".join(f"  {k}: {v}" for k, v in context.items())
            full_message += f"\n\nContext:\n{context_str}"

        super().__init__(full_message)


class ConvergenceWarning(NumkitWarning):
    """Warning issued when an iterative routine stops on its iteration bound.

    Attributes:
        iterations: The number of iterations performed
        tolerance: The convergence tolerance that was used
        final_value: The last tracked value
    """

    def __init__(self,
                 message: str,
                 iterations: Optional[int] = None,
                 tolerance: Optional[float] = None,
                 final_value: Optional[float] = None,
                 details: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None) -> None:
        self.iterations = iterations
        self.tolerance = tolerance
        self.final_value = final_value

        context_dict = context or {}
        if iterations is not None:
            context_dict["Iterations"] = iterations
        if tolerance is not None:
            context_dict["Tolerance"] = tolerance
        if final_value is not None:
            context_dict["Final Value"] = final_value

        super().__init__(message, details, context_dict)


# Helper functions for raising exceptions with consistent formatting

def raise_parameter_error(message: str,
                          param_name: Optional[str] = None,
                          param_value: Optional[Any] = None,
                          constraint: Optional[str] = None,
                          details: Optional[str] = None,
                          context: Optional[Dict[str, Any]] = None) -> None:
    """Raise a ParameterError with consistent formatting.

    Raises:
        ParameterError: The formatted parameter error
    """
    raise ParameterError(message, param_name, param_value, constraint, details, context)


def raise_not_supported(owner: str, quantity: str, details: Optional[str] = None) -> None:
    """Raise a NotSupportedError for ``owner.quantity``.

    Args:
        owner: Name of the class lacking the quantity
        quantity: Name of the quantity
        details: Additional details about the error

    Raises:
        NotSupportedError: Always
    """
    raise NotSupportedError(
        f"{quantity} is not supported by {owner}",
        owner=owner, quantity=quantity, details=details
    )


def raise_data_error(message: str,
                     data_name: Optional[str] = None,
                     issue: Optional[str] = None,
                     index: Optional[Union[int, Tuple[int, ...], str]] = None,
                     details: Optional[str] = None,
                     context: Optional[Dict[str, Any]] = None) -> None:
    """Raise a DataError with consistent formatting.

    Raises:
        DataError: The formatted data error
    """
    raise DataError(message, data_name, issue, index, details, context)


# Helper functions for issuing warnings with consistent formatting

def warn_convergence(message: str,
                     iterations: Optional[int] = None,
                     tolerance: Optional[float] = None,
                     final_value: Optional[float] = None,
                     details: Optional[str] = None,
                     context: Optional[Dict[str, Any]] = None) -> None:
    """Issue a ConvergenceWarning with consistent formatting.

    Args:
        message: The primary warning message
        iterations: The number of iterations performed
        tolerance: The convergence tolerance that was used
        final_value: The last tracked value
        details: Additional details about the warning
        context: Dictionary containing contextual information about the warning
    """
    warnings.warn(
        ConvergenceWarning(message, iterations, tolerance, final_value, details, context),
        stacklevel=2
    )
