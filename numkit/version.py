# numkit/version.py
"""
numkit Version Information

Version number and metadata, exposed as ``numkit.__version__``.

numkit follows semantic versioning (MAJOR.MINOR.PATCH):
- MAJOR: Incompatible API changes
- MINOR: Backwards-compatible functionality additions
- PATCH: Backwards-compatible bug fixes
"""

# Version components
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# Full version string
__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"

# Package metadata
__title__ = "numkit"
__description__ = "Special functions, distributions, kernels and hypothesis tests for Python"
__license__ = "MIT"
