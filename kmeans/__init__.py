"""
K-means clustering implementation for vector data.
"""

from .kmeans import KMeans, k_means_clusters, DEFAULT_SAFETY_CAP
from .utils import default_n_clusters, evaluate_clustering, create_sample_dataset

__all__ = [
    "KMeans",
    "k_means_clusters",
    "DEFAULT_SAFETY_CAP",
    "default_n_clusters",
    "evaluate_clustering",
    "create_sample_dataset",
]
