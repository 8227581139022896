'''
Abstract base classes for numkit.

These classes establish the contract shared by the two families of
user-facing objects: probability distributions and statistical tests. They
hold no mutable state beyond what their constructors assign, so concrete
subclasses can be treated as immutable values.
'''

import abc
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np


class DistributionBase(abc.ABC):
    """Abstract base class for probability distributions.

    Defines the evaluation and sampling surface every distribution exposes.
    """

    def __init__(self, name: str = "Distribution"):
        """Initialize the probability distribution.

        Args:
            name: A descriptive name for the distribution
        """
        self._name = name

    @property
    def name(self) -> str:
        """Get the distribution name.

        Returns:
            str: The distribution name
        """
        return self._name

    @abc.abstractmethod
    def pdf(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute the probability density (or mass) function.

        Args:
            x: Values to compute the PDF for

        Returns:
            PDF values, scalar for scalar input
        """

    @abc.abstractmethod
    def cdf(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute the cumulative distribution function P(X <= x).

        Args:
            x: Values to compute the CDF for

        Returns:
            CDF values, scalar for scalar input
        """

    @abc.abstractmethod
    def ppf(self, q: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute the percent point function (inverse of CDF).

        Args:
            q: Probabilities in [0, 1]

        Returns:
            Quantiles, scalar for scalar input
        """

    @abc.abstractmethod
    def rvs(self,
            size: Optional[Union[int, Tuple[int, ...]]] = None,
            random_state: Optional[Union[int, np.random.Generator]] = None) -> Union[float, np.ndarray]:
        """Generate random variates.

        Args:
            size: Number or shape of variates, None for a single scalar draw
            random_state: Random number generator or seed

        Returns:
            Random variates
        """

    @abc.abstractmethod
    def loglikelihood(self, x: np.ndarray) -> float:
        """Compute the log-likelihood of a sample.

        Args:
            x: Sample to evaluate

        Returns:
            float: Sum of the log densities
        """

    def __str__(self) -> str:
        return f"{self._name} distribution"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self._name}')"


class StatisticalTestBase(abc.ABC):
    """Abstract base class for statistical tests.

    Concrete tests fill the protected attributes when they are constructed;
    the properties below expose them read-only and ``summary`` renders them.
    """

    def __init__(self, name: str = "StatisticalTest"):
        """Initialize the statistical test.

        Args:
            name: A descriptive name for the test
        """
        self._name = name
        self._test_statistic: Optional[float] = None
        self._p_value: Optional[float] = None
        self._critical_values: Optional[Dict[str, float]] = None
        self._null_hypothesis: Optional[str] = None
        self._alternative_hypothesis: Optional[str] = None

    @property
    def name(self) -> str:
        """Get the test name."""
        return self._name

    @property
    def test_statistic(self) -> Optional[float]:
        """Get the test statistic, None before the test has been computed."""
        return self._test_statistic

    @property
    def p_value(self) -> Optional[float]:
        """Get the p-value, None before the test has been computed."""
        return self._p_value

    @property
    def critical_values(self) -> Optional[Dict[str, float]]:
        """Get the critical values keyed by significance level."""
        return self._critical_values

    @property
    def null_hypothesis(self) -> Optional[str]:
        return self._null_hypothesis

    @property
    def alternative_hypothesis(self) -> Optional[str]:
        return self._alternative_hypothesis

    def summary(self) -> str:
        """Generate a text summary of the test results.

        Returns:
            str: A formatted string containing the test results summary
        """
        if self._test_statistic is None or self._p_value is None:
            return f"Test: {self._name} (not run)"

        header = f"Test: {self._name}\n"
        header += "=" * (len(header) - 1) + "\n\n"

        if self._null_hypothesis is not None:
            header += f"Null Hypothesis: {self._null_hypothesis}\n"
        if self._alternative_hypothesis is not None:
            header += f"Alternative Hypothesis: {self._alternative_hypothesis}\n\n"

        results = f"Test Statistic: {self._test_statistic:.6f}\n"
        results += f"P-value: {self._p_value:.6f}\n\n"

        if self._critical_values:
            results += "Critical Values:\n"
            for level, value in self._critical_values.items():
                results += f"  {level}: {value:.6f}\n"

        conclusion = "\nConclusion: "
        if self._p_value < 0.01:
            conclusion += "Reject the null hypothesis at the 1% significance level."
        elif self._p_value < 0.05:
            conclusion += "Reject the null hypothesis at the 5% significance level."
        elif self._p_value < 0.1:
            conclusion += "Reject the null hypothesis at the 10% significance level."
        else:
            conclusion += "Fail to reject the null hypothesis."

        return header + results + conclusion

    def __str__(self) -> str:
        return self.summary()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self._name}')"
