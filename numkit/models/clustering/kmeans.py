'''
K-means clustering with k-means++ seeding.

Lloyd iterations alternate between assigning every observation to its
nearest centroid and moving each centroid to the mean of its observations.
Iteration stops when the total within-cluster sum of squares changes by at
most ``tolerance`` relative to its previous value, or when the iteration
limit is reached.
'''

import logging
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from numkit.convergence import ConvergenceState, RelativeConvergence
from numkit.core.exceptions import DimensionError, raise_parameter_error, warn_convergence
from numkit.core.parameters import validate_integer
from numkit.core.validation import validate_matrix, validate_numeric_array
from numkit.models.clustering._numba_core import assign_nearest, update_centroids
from numkit.models.distributions.base import RandomState, check_random_state

logger = logging.getLogger("numkit.models.clustering.kmeans")


@dataclass
class KMeansResult:
    """Outcome of a k-means run.

    Attributes:
        centroids: Cluster centroids, shape (k, d)
        labels: Cluster index of every observation
        error: Total within-cluster sum of squared distances
        iterations: Number of Lloyd iterations performed
        converged: Whether the relative change criterion was met
    """
    centroids: np.ndarray
    labels: np.ndarray
    error: float
    iterations: int
    converged: bool


class KMeans:
    """K-means clustering.

    Args:
        k: Number of clusters
        tolerance: Relative change of the error at which iteration stops
        max_iterations: Iteration limit, zero for no limit

    Examples:
        >>> X = [[0.0, 0.0], [0.1, 0.0], [5.0, 5.0], [5.1, 5.0]]
        >>> result = KMeans(k=2).compute(X, random_state=0)
        >>> sorted(np.bincount(result.labels).tolist())
        [2, 2]
    """

    def __init__(self, k: int, tolerance: float = 1e-5, max_iterations: int = 100):
        self.k = validate_integer(k, "k", min_value=1)
        # Validated by the tracker
        self._tracker = RelativeConvergence(tolerance=tolerance, max_iterations=max_iterations)
        self.centroids: Optional[np.ndarray] = None

    @property
    def tolerance(self) -> float:
        return self._tracker.tolerance

    @property
    def max_iterations(self) -> int:
        return self._tracker.max_iterations

    def _seed(self, X: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        n = X.shape[0]
        centroids = np.empty((self.k, X.shape[1]))
        centroids[0] = X[rng.integers(n)]
        closest = np.sum((X - centroids[0]) ** 2, axis=1)
        for c in range(1, self.k):
            total = closest.sum()
            if total > 0:
                index = rng.choice(n, p=closest / total)
            else:
                index = rng.integers(n)
            centroids[c] = X[index]
            closest = np.minimum(closest, np.sum((X - centroids[c]) ** 2, axis=1))
        return centroids

    def compute(self, X: Any, random_state: RandomState = None) -> KMeansResult:
        """Cluster the rows of ``X``.

        Args:
            X: Matrix with one observation per row
            random_state: Generator or seed for the k-means++ seeding

        Returns:
            KMeansResult: Centroids, labels and fit diagnostics

        Raises:
            ParameterError: If ``k`` exceeds the number of observations
        """
        X = np.ascontiguousarray(validate_numeric_array(validate_matrix(X, "X"), "X"))
        if self.k > X.shape[0]:
            raise_parameter_error(
                f"k ({self.k}) cannot exceed the number of observations ({X.shape[0]})",
                param_name="k", param_value=self.k, constraint=f"<= {X.shape[0]}"
            )

        rng = check_random_state(random_state)
        centroids = self._seed(X, rng)
        tracker = self._tracker
        tracker.clear()

        while True:
            labels, distances = assign_nearest(X, centroids)
            error = float(distances.sum())
            if tracker.update(error):
                break
            centroids = update_centroids(X, labels, centroids)

        state = tracker.state
        converged = state is ConvergenceState.CONVERGED
        if state is ConvergenceState.MAX_ITERATIONS_REACHED:
            logger.warning(f"K-means stopped after {tracker.iterations} iterations "
                           f"without converging")
            warn_convergence(
                "K-means reached the iteration limit before converging",
                iterations=tracker.iterations,
                tolerance=tracker.tolerance,
                final_value=error
            )
        else:
            logger.debug(f"K-means converged after {tracker.iterations} iterations, "
                         f"error {error:.6g}")

        self.centroids = centroids
        return KMeansResult(centroids=centroids.copy(), labels=labels, error=error,
                            iterations=tracker.iterations, converged=converged)

    def predict(self, X: Any) -> np.ndarray:
        """Label new observations with their nearest centroid.

        Raises:
            ParameterError: If the model has not been computed
            DimensionError: If the column count differs from the centroids
        """
        if self.centroids is None:
            raise_parameter_error("KMeans.compute must be called before predict",
                                  param_name="centroids", constraint="computed model")
        X = np.ascontiguousarray(validate_numeric_array(validate_matrix(X, "X"), "X"))
        if X.shape[1] != self.centroids.shape[1]:
            raise DimensionError(
                f"X must have {self.centroids.shape[1]} columns, got {X.shape[1]}",
                array_name="X",
                expected_shape=f"(n, {self.centroids.shape[1]})",
                actual_shape=X.shape
            )
        labels, _ = assign_nearest(X, self.centroids)
        return labels

    def __repr__(self) -> str:
        return (f"KMeans(k={self.k}, tolerance={self.tolerance}, "
                f"max_iterations={self.max_iterations})")
