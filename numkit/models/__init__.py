"""
numkit Models Module

Statistical models built on the special functions and convergence trackers:
univariate distributions, exact rank distributions, kernels, hypothesis
tests and clustering.
"""

import logging

logger = logging.getLogger("numkit.models")

from . import distributions
from . import kernels
from . import testing
from . import clustering

from .distributions import (
    UnivariateDistribution,
    Normal,
    Exponential,
    GammaDistribution,
    BetaDistribution,
    StudentT,
    Gompertz,
    Weibull,
    InverseGamma,
    Laplace,
    Binomial,
    KolmogorovSmirnovDistribution,
    MannWhitneyDistribution,
    WilcoxonDistribution,
)
from .kernels import Kernel, Gaussian, Polynomial
from .testing import (
    DistributionTail,
    OneSampleHypothesis,
    TwoSampleHypothesis,
    HypothesisTest,
    TestResult,
    TTest,
    ZTest,
    BinomialTest,
    KolmogorovSmirnovTest,
    TwoSampleKolmogorovSmirnovTest,
    MannWhitneyWilcoxonTest,
    WilcoxonSignedRankTest,
)
from .clustering import KMeans, KMeansResult

__all__ = [
    'distributions',
    'kernels',
    'testing',
    'clustering',

    # Distributions
    'UnivariateDistribution',
    'Normal',
    'Exponential',
    'GammaDistribution',
    'BetaDistribution',
    'StudentT',
    'Gompertz',
    'Weibull',
    'InverseGamma',
    'Laplace',
    'Binomial',
    'KolmogorovSmirnovDistribution',
    'MannWhitneyDistribution',
    'WilcoxonDistribution',

    # Kernels
    'Kernel',
    'Gaussian',
    'Polynomial',

    # Hypothesis tests
    'DistributionTail',
    'OneSampleHypothesis',
    'TwoSampleHypothesis',
    'HypothesisTest',
    'TestResult',
    'TTest',
    'ZTest',
    'BinomialTest',
    'KolmogorovSmirnovTest',
    'TwoSampleKolmogorovSmirnovTest',
    'MannWhitneyWilcoxonTest',
    'WilcoxonSignedRankTest',

    # Clustering
    'KMeans',
    'KMeansResult',
]
