"""
numkit Hypothesis Tests

Hypothesis tests that combine an observed statistic, its null distribution
and a tail selector. Every test computes its statistic, p-value and
significance eagerly at construction.

Key components:
- Student's t and z tests for one and two samples
- Exact binomial test
- One- and two-sample Kolmogorov-Smirnov tests
- Mann-Whitney-Wilcoxon rank-sum and Wilcoxon signed-rank tests
- Power and sample size analysis for the z and t tests
"""

import logging

logger = logging.getLogger("numkit.models.testing")

from .base import (
    DistributionTail,
    HypothesisTest,
    OneSampleHypothesis,
    TestResult,
    TwoSampleHypothesis,
)
from .t_test import TTest
from .z_test import ZTest
from .binomial_test import BinomialTest
from .kolmogorov_smirnov import KolmogorovSmirnovTest, TwoSampleKolmogorovSmirnovTest
from .mann_whitney_wilcoxon import MannWhitneyWilcoxonTest
from .wilcoxon_signed_rank import WilcoxonSignedRankTest
from .power import PowerAnalysis, TTestPowerAnalysis, ZTestPowerAnalysis

__all__ = [
    'DistributionTail',
    'HypothesisTest',
    'OneSampleHypothesis',
    'TwoSampleHypothesis',
    'TestResult',
    'TTest',
    'ZTest',
    'BinomialTest',
    'KolmogorovSmirnovTest',
    'TwoSampleKolmogorovSmirnovTest',
    'MannWhitneyWilcoxonTest',
    'WilcoxonSignedRankTest',
    'PowerAnalysis',
    'ZTestPowerAnalysis',
    'TTestPowerAnalysis',
]
