"""
numkit Core Module

Foundation shared by every other numkit component: the exception and warning
hierarchy, the configuration system, parameter containers with validation,
input validation helpers, and the abstract bases for distributions and
statistical tests.
"""

import logging

logger = logging.getLogger("numkit.core")

from .exceptions import (
    NumkitError,
    ParameterError,
    NotSupportedError,
    DimensionError,
    DataError,
    DistributionError,
    TestError,
    ConfigurationError,
    NumkitWarning,
    ConvergenceWarning,
)
from .config import (
    get_config,
    set_config,
    reset_config,
    save_config,
    get_config_manager,
    get_numerical_config,
    get_testing_config,
)
from .parameters import ParameterBase
from .base import DistributionBase, StatisticalTestBase

__all__ = [
    # Exceptions
    'NumkitError',
    'ParameterError',
    'NotSupportedError',
    'DimensionError',
    'DataError',
    'DistributionError',
    'TestError',
    'ConfigurationError',
    'NumkitWarning',
    'ConvergenceWarning',

    # Configuration
    'get_config',
    'set_config',
    'reset_config',
    'save_config',
    'get_config_manager',
    'get_numerical_config',
    'get_testing_config',

    # Bases
    'ParameterBase',
    'DistributionBase',
    'StatisticalTestBase',
]
