'''
Pytest configuration and fixtures for the numkit test suite.

This module provides common fixtures used across the test suite: a seeded
random generator, reference samples with published results, hypothesis
strategies and a configuration reset.
'''

from typing import Tuple

import numpy as np
import pytest
from hypothesis import strategies as st

from numkit.core.config import reset_config


# ---- Basic Data Generation Fixtures ----

@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def sample_size() -> int:
    """Default sample size for test data."""
    return 1000


@pytest.fixture
def normal_data(rng: np.random.Generator, sample_size: int) -> np.ndarray:
    """Standard normal data."""
    return rng.standard_normal(sample_size)


# ---- Reference Samples ----

@pytest.fixture
def t_test_sample() -> np.ndarray:
    """Ten observations whose one-sample t statistic against zero is 3.1254485381338246."""
    return np.array([
        -0.849886940156521, 3.53492346633185, 1.22540422494611, 0.436945126810344,
        1.21474290382610, 0.295033941700225, 0.375855651783688, 1.98969760778547,
        1.90903448980048, 1.91719241342961,
    ])


@pytest.fixture
def vassar_samples() -> Tuple[np.ndarray, np.ndarray]:
    """Two samples from the VassarStats Mann-Whitney example (rank sums 96.5 and 134.5)."""
    sample1 = np.array([4.6, 4.7, 4.9, 5.1, 5.2, 5.5, 5.8, 6.1, 6.5, 6.5, 7.2])
    sample2 = np.array([5.2, 5.3, 5.4, 5.6, 6.2, 6.3, 6.8, 7.7, 8.0, 8.1])
    return sample1, sample2


@pytest.fixture
def clustered_data(rng: np.random.Generator) -> Tuple[np.ndarray, np.ndarray]:
    """Three well separated Gaussian blobs and their true labels."""
    centers = np.array([[0.0, 0.0], [10.0, 10.0], [-10.0, 10.0]])
    labels = np.repeat(np.arange(3), 50)
    X = centers[labels] + 0.5 * rng.standard_normal((150, 2))
    return X, labels


# ---- Configuration ----

@pytest.fixture
def clean_config():
    """Reset the global configuration before and after a test."""
    reset_config()
    yield
    reset_config()


# ---- Hypothesis Strategies ----

@pytest.fixture
def positive_float_strategy() -> st.SearchStrategy:
    """Strategy for moderately sized positive floats."""
    return st.floats(min_value=0.05, max_value=50.0, allow_nan=False, allow_infinity=False)


@pytest.fixture
def probability_strategy() -> st.SearchStrategy:
    """Strategy for probabilities strictly inside (0, 1)."""
    return st.floats(min_value=0.001, max_value=0.999)
