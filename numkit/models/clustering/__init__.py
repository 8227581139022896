"""
numkit Clustering

K-means clustering with k-means++ seeding and compiled nearest-centroid
assignment.
"""

import logging

logger = logging.getLogger("numkit.models.clustering")

from .kmeans import KMeans, KMeansResult

__all__ = [
    'KMeans',
    'KMeansResult',
]
