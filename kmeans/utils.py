"""
Helpers around the k-means results: the cluster-count heuristic, quality
metrics backed by scikit-learn, and synthetic datasets for experiments.
"""

import math
from typing import Dict, List, Mapping, Optional, Tuple, Union

import numpy as np
from sklearn.datasets import make_blobs
from sklearn.metrics import silhouette_score

from vector import Vector
from vector.errors import InvalidArgumentError


def default_n_clusters(n_samples: int) -> int:
    """Number of initial centroids used for ``n_samples`` points: ``ceil(sqrt(n / 2))``."""
    if n_samples < 1:
        raise InvalidArgumentError(f"n_samples must be positive, got {n_samples}")
    return int(math.ceil(math.sqrt(n_samples / 2)))


def evaluate_clustering(clusters: Mapping[int, Mapping[int, Vector]]) -> Dict:
    """
    Summarize a clustering as returned by ``k_means_clusters``.

    Args:
        clusters: ``{cluster_id: {data_index: point}}``

    Returns:
        Dict with ``n_clusters``, ``n_samples``, ``cluster_sizes``, ``inertia``
        (squared distances to each cluster's mean) and ``silhouette``. The
        silhouette score is only defined for 2 <= n_clusters <= n_samples - 1
        and is None otherwise.
    """
    if not clusters:
        raise InvalidArgumentError("Can not evaluate an empty clustering")

    points = []
    labels = []
    inertia = 0.0
    for cid, bucket in clusters.items():
        members = list(bucket.values())
        center = Vector.average(members)
        inertia += sum(center.distance(p) ** 2 for p in members)
        points.extend(p.to_numpy() for p in members)
        labels.extend([cid] * len(members))

    n_samples = len(points)
    silhouette: Optional[float] = None
    if 2 <= len(clusters) <= n_samples - 1:
        silhouette = float(silhouette_score(np.stack(points), np.array(labels)))

    return {
        'n_clusters': len(clusters),
        'n_samples': n_samples,
        'cluster_sizes': {cid: len(bucket) for cid, bucket in clusters.items()},
        'inertia': float(inertia),
        'silhouette': silhouette,
    }


def create_sample_dataset(
    n_samples: int = 100,
    n_features: int = 2,
    centers: Union[int, np.ndarray] = 3,
    cluster_std: float = 1.0,
    random_state: Optional[int] = None,
) -> Tuple[List[Vector], List[int]]:
    """Gaussian blobs as Vectors, together with the blob each point came from."""
    X, y = make_blobs(
        n_samples=n_samples,
        n_features=n_features,
        centers=centers,
        cluster_std=cluster_std,
        random_state=random_state,
    )
    return [Vector(row) for row in X], [int(label) for label in y]
