"""
K-means clustering (Lloyd's algorithm) over :class:`~vector.Vector` data.

The number of clusters is not a parameter: it is derived from the size of the
input with the ``ceil(sqrt(n / 2))`` rule of thumb. Centroids that end up
with no points are dropped, so the result may hold fewer clusters.
"""

import logging
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
from sklearn.utils import check_random_state

from vector import Vector
from vector.errors import InconsistentDataError, InvalidArgumentError
from .utils import default_n_clusters

logger = logging.getLogger(__name__)

# Upper bound on passes when the caller gives no iteration limit
DEFAULT_SAFETY_CAP = 10000

NOT_CONSISTENT = "The given data points are not a collection of Vectors of equal dimension"
EMPTY_DATA = "Can not cluster an empty collection of data points"

RandomState = Union[None, int, np.random.RandomState]


def _check_positive_int(value, name: str) -> None:
    if (
        isinstance(value, (bool, np.bool_))
        or not isinstance(value, (int, np.integer))
        or value < 1
    ):
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")


class KMeans:
    """
    K-means clustering with a data-derived number of clusters.

    Each pass assigns every point to its closest centroid and then moves each
    centroid to the mean of its points. A point only changes centroid when
    another one is strictly closer, so exact ties never cause a reassignment.
    Centroid ids are integers handed out in creation order; an id is dropped
    for good once its cluster becomes empty.

    Example:

        .. code-block:: python

            from vector import Vector
            from kmeans import KMeans

            data = [Vector(0, 0), Vector(0, 1), Vector(10, 10), Vector(10, 11)]
            model = KMeans(random_state=42).fit(data)
            model.clusters_   # {centroid_id: {data_index: Vector}}
    """

    def __init__(
        self,
        max_iters: Optional[int] = None,
        random_state: RandomState = None,
        safety_cap: int = DEFAULT_SAFETY_CAP,
        verbose: bool = False
    ):
        """
        Initialize K-means clustering.

        Args:
            max_iters: Maximum number of assignment/update passes. If None the
                run only stops on convergence (or at ``safety_cap``).
            random_state: Seed, ``numpy.random.RandomState`` or None, used to
                pick the initial centroids.
            safety_cap: Hard limit on passes used only when ``max_iters`` is None.
            verbose: Whether to log progress at INFO instead of DEBUG
        """
        if max_iters is not None:
            _check_positive_int(max_iters, "max_iters")
        _check_positive_int(safety_cap, "safety_cap")
        self.max_iters = max_iters
        self.random_state = random_state
        self.safety_cap = safety_cap
        self.verbose = verbose

        # Results
        self.clusters_ = None
        self.cluster_centers_ = None
        self.labels_ = None
        self.init_indices_ = None
        self.inertia_ = None
        self.n_iter_ = None
        self.converged_ = None

    def _log(self, msg: str, *args) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, msg, *args)

    def _init_centroids(self, X: List[Vector], rng: np.random.RandomState) -> Dict[int, Vector]:
        """Sample k data points uniformly, with replacement, as the first centroids."""
        k = default_n_clusters(len(X))
        indices = rng.randint(0, len(X), size=k)
        self.init_indices_ = [int(i) for i in indices]
        return {cid: X[i].copy() for cid, i in enumerate(self.init_indices_)}

    @staticmethod
    def _closest(point: Vector, centroids: Dict[int, Vector], current: int) -> int:
        """Walk centroids in id order, moving only to strictly closer ones."""
        best = current
        best_distance = centroids[current].distance(point)
        for cid, centroid in centroids.items():
            distance = centroid.distance(point)
            if distance < best_distance:
                best = cid
                best_distance = distance
        return best

    def _assign_clusters(
        self, X: List[Vector], centroids: Dict[int, Vector], labels: List[Optional[int]]
    ) -> bool:
        """Update ``labels`` in place and report whether any point moved."""
        first_centroid = next(iter(centroids))
        has_change = False
        for i, point in enumerate(X):
            previous = labels[i] if labels[i] is not None else first_centroid
            labels[i] = self._closest(point, centroids, previous)
            if labels[i] != previous:
                has_change = True
        return has_change

    @staticmethod
    def _group(X: List[Vector], labels: List[int]) -> Dict[int, Dict[int, Vector]]:
        buckets: Dict[int, Dict[int, Vector]] = {}
        for i, cid in enumerate(labels):
            buckets.setdefault(cid, {})[i] = X[i]
        return buckets

    def _update_centroids(
        self, centroids: Dict[int, Vector], buckets: Dict[int, Dict[int, Vector]]
    ) -> Dict[int, Vector]:
        """Move every non-empty centroid to its bucket mean and drop the empty ones."""
        updated = {}
        for cid in centroids:
            if cid not in buckets:
                self._log("Dropping empty cluster %d", cid)
                continue
            updated[cid] = Vector.average(buckets[cid].values())
        return updated

    @staticmethod
    def _calculate_inertia(
        X: List[Vector], labels: List[int], centroids: Dict[int, Vector]
    ) -> float:
        """Within-cluster sum of squared distances."""
        return float(sum(centroids[cid].distance(X[i]) ** 2 for i, cid in enumerate(labels)))

    def fit(self, X: Iterable[Vector]) -> 'KMeans':
        """
        Fit K-means clustering to the data.

        Args:
            X: Non-empty collection of Vectors of equal dimension

        Returns:
            self

        Raises:
            InvalidArgumentError: If ``X`` is empty.
            InconsistentDataError: If ``X`` holds non-Vectors or mixed dimensions.
        """
        X = list(X)
        if not X:
            raise InvalidArgumentError(EMPTY_DATA)
        if not Vector.consistent(X):
            raise InconsistentDataError(NOT_CONSISTENT)

        rng = check_random_state(self.random_state)
        centroids = self._init_centroids(X, rng)
        self._log(
            "Fitting K-means with %d initial clusters on %d samples...", len(centroids), len(X)
        )

        labels: List[Optional[int]] = [None] * len(X)
        limit = self.max_iters if self.max_iters is not None else self.safety_cap
        converged = False
        n_iter = 0
        while n_iter < limit:
            n_iter += 1
            has_change = self._assign_clusters(X, centroids, labels)
            buckets = self._group(X, labels)
            centroids = self._update_centroids(centroids, buckets)
            logger.debug(
                "Iteration %d: changed=%s, clusters=%d", n_iter, has_change, len(centroids)
            )
            if not has_change:
                converged = True
                break

        if converged:
            self._log("Converged after %d iterations", n_iter)
        elif self.max_iters is None:
            logger.warning(
                "K-means stopped at the safety cap of %d iterations without converging",
                self.safety_cap,
            )

        self.clusters_ = buckets
        self.cluster_centers_ = centroids
        self.labels_ = labels
        self.inertia_ = self._calculate_inertia(X, labels, centroids)
        self.n_iter_ = n_iter
        self.converged_ = converged

        self._log("Final inertia: %.2f over %d clusters", self.inertia_, len(centroids))

        return self

    def predict(self, X: Iterable[Vector]) -> List[int]:
        """
        Predict cluster ids for new data.

        Args:
            X: Vectors of the same dimension as the fitted data

        Returns:
            The closest centroid id for each point; ties go to the lowest id
        """
        if self.cluster_centers_ is None:
            raise ValueError("Model must be fitted before prediction")

        first_centroid = next(iter(self.cluster_centers_))
        return [self._closest(p, self.cluster_centers_, first_centroid) for p in X]

    def fit_predict(self, X: Iterable[Vector]) -> List[int]:
        """
        Fit the model and return the cluster id of every data point.
        """
        return self.fit(X).labels_

    def get_cluster_info(self) -> dict:
        """Get information about the clustering results."""
        if self.cluster_centers_ is None:
            raise ValueError("Model must be fitted first")

        cluster_sizes = {cid: len(bucket) for cid, bucket in self.clusters_.items()}
        sizes = np.array(list(cluster_sizes.values()))

        return {
            'n_clusters': len(self.cluster_centers_),
            'inertia': self.inertia_,
            'n_iterations': self.n_iter_,
            'converged': self.converged_,
            'cluster_sizes': cluster_sizes,
            'avg_cluster_size': float(np.mean(sizes)),
            'std_cluster_size': float(np.std(sizes)),
            'min_cluster_size': int(np.min(sizes)),
            'max_cluster_size': int(np.max(sizes))
        }


def k_means_clusters(
    data: Iterable[Vector],
    max_iterations: Optional[int] = None,
    random_state: RandomState = None,
) -> Dict[int, Dict[int, Vector]]:
    """
    The k-means clustering algorithm, also known as Lloyd's algorithm.

    Args:
        data: Non-empty collection of Vectors of equal dimension
        max_iterations: Optional limit on assignment/update passes
        random_state: Seed or ``numpy.random.RandomState`` for the initial centroids

    Returns:
        The detected clusters: ``{cluster_id: {data_index: point}}``. Every
        input point appears in exactly one cluster, and no cluster is empty.
    """
    return KMeans(max_iters=max_iterations, random_state=random_state).fit(data).clusters_
