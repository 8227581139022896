"""
numkit Kernels

Mercer kernels over feature vectors with kernel-trick distances and compiled
Gram matrix construction.
"""

import logging

logger = logging.getLogger("numkit.models.kernels")

from .base import Kernel
from .gaussian import Gaussian
from .polynomial import Polynomial

__all__ = [
    'Kernel',
    'Gaussian',
    'Polynomial',
]
