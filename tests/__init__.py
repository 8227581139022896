"""
numkit Test Suite

Tests for the special functions, convergence trackers, distributions, kernels,
hypothesis tests and clustering, with SciPy and statsmodels as numerical
oracles.
"""
