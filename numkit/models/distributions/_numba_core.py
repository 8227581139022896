"""
Numba-accelerated enumeration kernels for the exact rank distributions.

Both kernels return the statistic value of every assignment, sorted in
ascending order; the distributions derive their probability mass and
cumulative functions from the sorted table by binary search.

The caller bounds the number of assignments before calling: C(N, n1) for
the Mann-Whitney kernel and 2**N for the Wilcoxon kernel.
"""

import logging

import numpy as np
from numba import jit

logger = logging.getLogger("numkit.models.distributions._numba_core")


@jit(nopython=True, cache=True)
def mann_whitney_table(ranks: np.ndarray, n1: int, total: int) -> np.ndarray:
    """U statistic of group 1 for every subset of ``n1`` ranks.

    Subsets are visited in lexicographic order of their index tuples.

    Args:
        ranks: Ranks of the combined sample, length N
        n1: Size of the first group
        total: Number of subsets, C(N, n1)

    Returns:
        np.ndarray: Sorted U values, length ``total``
    """
    n = ranks.shape[0]
    n2 = n - n1
    offset = n1 * n2 + n1 * (n1 + 1) / 2.0
    index = np.arange(n1)
    out = np.empty(total)

    for c in range(total):
        rank_sum = 0.0
        for j in range(n1):
            rank_sum += ranks[index[j]]
        out[c] = offset - rank_sum

        # Advance to the next combination
        i = n1 - 1
        while i >= 0 and index[i] == i + n - n1:
            i -= 1
        if i < 0:
            break
        index[i] += 1
        for j in range(i + 1, n1):
            index[j] = index[j - 1] + 1

    out.sort()
    return out


@jit(nopython=True, cache=True)
def wilcoxon_table(ranks: np.ndarray) -> np.ndarray:
    """Sum of positively signed ranks for every one of the 2**N sign patterns.

    Pattern ``mask`` gives rank j a positive sign when bit j is set.

    Returns:
        np.ndarray: Sorted W+ values, length 2**N
    """
    n = ranks.shape[0]
    total = 1 << n
    out = np.empty(total)
    for mask in range(total):
        w = 0.0
        for j in range(n):
            if (mask >> j) & 1:
                w += ranks[j]
        out[mask] = w
    out.sort()
    return out
