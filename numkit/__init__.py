# numkit/__init__.py
"""
numkit - Numerical and Statistical Toolkit for Python

A library of numerical building blocks for statistics and machine learning.

The toolkit provides:
- Special functions: Gamma, log-Gamma, digamma, Beta and the regularized
  incomplete Gamma and Beta functions with their inverses
- Convergence trackers for iterative algorithms
- Univariate distributions with densities, quantiles, moments, sampling and
  maximum likelihood estimation
- Exact Mann-Whitney and Wilcoxon rank distributions
- Gaussian and polynomial kernels
- Hypothesis tests (t, z, binomial, Kolmogorov-Smirnov, Mann-Whitney-Wilcoxon,
  Wilcoxon signed-rank)
- K-means clustering

This module serves as the main entry point for the numkit package.
"""

import logging
from typing import Union

# Set up package-wide logger
logger = logging.getLogger("numkit")
logger.setLevel(logging.WARNING)
_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
logger.addHandler(_handler)

from .version import __version__, __title__, __description__, __license__

from . import core
from . import special
from . import convergence
from . import models


def get_version() -> str:
    """
    Return the version of numkit.

    Returns:
        str: Version string in format MAJOR.MINOR.PATCH
    """
    return __version__


def set_log_level(level: Union[str, int]) -> None:
    """
    Set the logging level for numkit.

    Args:
        level: Logging level, either as string ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
              or as an integer constant from the logging module
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logger.setLevel(level)
    logger.info(f"Log level set to {logging.getLevelName(level)}")


__all__ = [
    'core',
    'special',
    'convergence',
    'models',
    'get_version',
    'set_log_level',
    '__version__',
]
