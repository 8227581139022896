'''
Wilcoxon signed-rank test for the median of a sample or of paired differences.
'''

import logging
from typing import Any, Dict, Optional

import numpy as np

from numkit.core.exceptions import raise_data_error
from numkit.core.validation import validate_same_dimension, validate_sample
from numkit.models.distributions.ranking import rank_data, w_negative, w_positive
from numkit.models.distributions.wilcoxon import WilcoxonDistribution
from numkit.models.testing.base import HypothesisTest, OneSampleHypothesis, as_hypothesis

logger = logging.getLogger("numkit.models.testing.wilcoxon_signed_rank")


class WilcoxonSignedRankTest(HypothesisTest):
    """Wilcoxon signed-rank test.

    Differences from the hypothesized median are ranked by absolute value;
    zero differences are dropped. The statistic W+ sums the ranks of the
    positive differences, so large values favour a median above the
    hypothesized one.

    Args:
        sample: Observed sample
        hypothesized_median: Median under the null hypothesis
        alternate: Alternative hypothesis about the median
        exact: True for the exact distribution, False for the normal
            approximation, None to decide from the number of assignments
        size: Significance level
    """

    def __init__(self, sample: Any, hypothesized_median: float = 0.0,
                 alternate: OneSampleHypothesis = OneSampleHypothesis.VALUE_IS_DIFFERENT,
                 exact: Optional[bool] = None, size: Optional[float] = None):
        super().__init__(name="Wilcoxon signed-rank", size=size)
        self._alternate = as_hypothesis(alternate, OneSampleHypothesis)
        self._hypothesized_median = float(hypothesized_median)

        differences = validate_sample(sample, "sample") - self._hypothesized_median
        nonzero = differences[differences != 0]
        if nonzero.size == 0:
            raise_data_error(
                "All observations equal the hypothesized median",
                data_name="sample",
                issue="no nonzero differences"
            )
        if nonzero.size < differences.size:
            logger.debug(f"Dropped {differences.size - nonzero.size} zero differences")

        signs = np.sign(nonzero)
        ranks = rank_data(np.abs(nonzero))
        self._signs = signs
        self._ranks = ranks
        self._w_positive = w_positive(signs, ranks)
        self._w_negative = w_negative(signs, ranks)

        self._null_hypothesis = f"Median equals {self._hypothesized_median:g}"
        self._alternative_hypothesis = f"Median is {self._alternate.value}"
        self._compute(self._w_positive, WilcoxonDistribution(ranks, exact=exact),
                      self._alternate.tail)

    @classmethod
    def paired(cls, x: Any, y: Any, hypothesized_difference: float = 0.0,
               alternate: OneSampleHypothesis = OneSampleHypothesis.VALUE_IS_DIFFERENT,
               exact: Optional[bool] = None,
               size: Optional[float] = None) -> 'WilcoxonSignedRankTest':
        """Test the median of the paired differences ``x - y``.

        Raises:
            DimensionError: If ``x`` and ``y`` have different lengths
        """
        x, y = validate_same_dimension(x, y)
        return cls(x - y, hypothesized_median=hypothesized_difference,
                   alternate=alternate, exact=exact, size=size)

    @property
    def hypothesized_median(self) -> float:
        return self._hypothesized_median

    @property
    def ranks(self) -> np.ndarray:
        """Ranks of the absolute nonzero differences."""
        return self._ranks.copy()

    @property
    def signs(self) -> np.ndarray:
        return self._signs.copy()

    @property
    def w_positive(self) -> float:
        return self._w_positive

    @property
    def w_negative(self) -> float:
        return self._w_negative

    @property
    def hypothesis(self) -> OneSampleHypothesis:
        return self._alternate

    def _additional_info(self) -> Dict[str, Any]:
        return {
            "w_positive": self._w_positive,
            "w_negative": self._w_negative,
            "samples": int(self._ranks.size),
            "exact": self._statistic_distribution.exact,
        }
