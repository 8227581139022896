"""
numkit Convergence

Stopping criteria for iterative learners: absolute and relative change of a
scalar objective, and relative change of a parameter vector.
"""

import logging

logger = logging.getLogger("numkit.convergence")

from .trackers import (
    ConvergenceState,
    ConvergenceTracker,
    AbsoluteConvergence,
    RelativeConvergence,
    RelativeParameterConvergence,
)

__all__ = [
    'ConvergenceState',
    'ConvergenceTracker',
    'AbsoluteConvergence',
    'RelativeConvergence',
    'RelativeParameterConvergence',
]
