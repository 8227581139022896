"""
Numba-accelerated nearest-centroid assignment for k-means.

Each row is processed independently and writes only its own label and
distance, so the parallel loop gives the same result for any thread count.
"""

import logging

import numpy as np
from numba import jit, prange

logger = logging.getLogger("numkit.models.clustering._numba_core")


@jit(nopython=True, cache=True, parallel=True)
def assign_nearest(X: np.ndarray, centroids: np.ndarray):
    """Label every row of ``X`` with its nearest centroid.

    Ties go to the lowest centroid index.

    Args:
        X: Observations, shape (n, d)
        centroids: Centroids, shape (k, d)

    Returns:
        Tuple of integer labels (n,) and squared distances to the assigned
        centroid (n,)
    """
    n, d = X.shape
    k = centroids.shape[0]
    labels = np.empty(n, dtype=np.int64)
    distances = np.empty(n)
    for i in prange(n):
        best = np.inf
        best_index = 0
        for c in range(k):
            dist = 0.0
            for j in range(d):
                diff = X[i, j] - centroids[c, j]
                dist += diff * diff
            if dist < best:
                best = dist
                best_index = c
        labels[i] = best_index
        distances[i] = best
    return labels, distances


@jit(nopython=True, cache=True)
def update_centroids(X: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Mean of the rows assigned to each centroid.

    A centroid with no assigned rows keeps its previous position.
    """
    k, d = centroids.shape
    sums = np.zeros((k, d))
    counts = np.zeros(k, dtype=np.int64)
    for i in range(X.shape[0]):
        c = labels[i]
        counts[c] += 1
        for j in range(d):
            sums[c, j] += X[i, j]
    out = centroids.copy()
    for c in range(k):
        if counts[c] > 0:
            for j in range(d):
                out[c, j] = sums[c, j] / counts[c]
    return out
