# numkit/models/distributions/__init__.py
"""
numkit Univariate Distributions

Continuous and discrete univariate distributions sharing the
``UnivariateDistribution`` interface (density, log-density, CDF, survival and
quantile functions, moments, sampling with an explicit generator, likelihood,
estimation and cloning), together with the exact rank distributions used by
the nonparametric tests.

Key components:
- Normal, Exponential, Gamma, Beta, Student's t, Gompertz, Weibull,
  inverse Gamma and Laplace distributions
- Binomial distribution
- Kolmogorov-Smirnov statistic distribution
- Mann-Whitney U and Wilcoxon W rank distributions, exact by enumeration or
  normal approximations
"""

import logging

logger = logging.getLogger("numkit.models.distributions")

from .base import UnivariateDistribution, check_random_state
from .normal import Normal, NormalParameters, standard_normal
from .exponential import Exponential, ExponentialParameters
from .gamma import GammaDistribution, GammaParameters
from .beta import BetaDistribution, BetaParameters
from .student_t import StudentT, StudentTParameters
from .gompertz import Gompertz, GompertzParameters
from .weibull import Weibull, WeibullParameters
from .inverse_gamma import InverseGamma, InverseGammaParameters
from .laplace import Laplace, LaplaceParameters
from .binomial import Binomial, BinomialParameters
from .kolmogorov_smirnov import KolmogorovSmirnovDistribution, KolmogorovSmirnovParameters
from .ranking import RankDistribution, rank_data, w_positive, w_negative, w_minimum
from .mann_whitney import MannWhitneyDistribution, MannWhitneyParameters
from .wilcoxon import WilcoxonDistribution, WilcoxonParameters
from .utils import distribution_from_name, get_available_distributions

__all__ = [
    # Base
    'UnivariateDistribution',
    'check_random_state',

    # Continuous families
    'Normal',
    'standard_normal',
    'Exponential',
    'GammaDistribution',
    'BetaDistribution',
    'StudentT',
    'Gompertz',
    'Weibull',
    'InverseGamma',
    'Laplace',

    # Discrete families
    'Binomial',

    # Statistic distributions
    'KolmogorovSmirnovDistribution',
    'RankDistribution',
    'MannWhitneyDistribution',
    'WilcoxonDistribution',

    # Parameter containers
    'NormalParameters',
    'ExponentialParameters',
    'GammaParameters',
    'BetaParameters',
    'StudentTParameters',
    'GompertzParameters',
    'WeibullParameters',
    'InverseGammaParameters',
    'LaplaceParameters',
    'BinomialParameters',
    'KolmogorovSmirnovParameters',
    'MannWhitneyParameters',
    'WilcoxonParameters',

    # Ranking helpers
    'rank_data',
    'w_positive',
    'w_negative',
    'w_minimum',

    # Registry
    'distribution_from_name',
    'get_available_distributions',
]
