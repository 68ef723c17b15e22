import logging
import unittest
from unittest import mock

import numpy as np

from vector import Vector, InconsistentDataError, InvalidArgumentError, DimensionMismatchError
from kmeans import KMeans, k_means_clusters, default_n_clusters


# Two tight groups on the diagonal, far apart from each other.
GROUP_A = [Vector(0, 0), Vector(0.1, 0.1), Vector(0.2, 0.2), Vector(0.3, 0.3)]
GROUP_B = [Vector(10, 10), Vector(10.1, 10.1), Vector(10.2, 10.2), Vector(10.3, 10.3)]


def _two_groups():
    # Interleave the groups so that cluster membership can not follow input order.
    data = []
    for a, b in zip(GROUP_A, GROUP_B):
        data.extend([a, b])
    return data


def _partition(clusters):
    return sorted(sorted(bucket) for bucket in clusters.values())


class TestKMeansClusters(unittest.TestCase):
    def _assert_partition(self, clusters, n):
        seen = []
        for cid, bucket in clusters.items():
            self.assertGreater(len(bucket), 0)
            seen.extend(bucket)
        self.assertEqual(sorted(seen), list(range(n)))

    def test_two_separated_groups(self):
        data = _two_groups()
        expected = [[0, 2, 4, 6], [1, 3, 5, 7]]
        distinct_runs = 0
        for seed in range(40):
            model = KMeans(random_state=seed).fit(data)
            self._assert_partition(model.clusters_, len(data))
            self.assertTrue(model.converged_)
            if len(set(model.init_indices_)) == 2:
                distinct_runs += 1
                self.assertEqual(_partition(model.clusters_), expected)
            else:
                # Both centroids started on the same point: the second one
                # never wins a strict comparison and is dropped.
                self.assertEqual(_partition(model.clusters_), [list(range(8))])
        self.assertGreater(distinct_runs, 0)

    def test_cluster_members_are_input_points(self):
        data = _two_groups()
        clusters = k_means_clusters(data, random_state=3)
        for bucket in clusters.values():
            for i, point in bucket.items():
                self.assertIs(point, data[i])

    def test_partition_on_random_data(self):
        rng = np.random.RandomState(0)
        data = [Vector(row) for row in rng.rand(200, 3)]
        for seed in range(5):
            clusters = k_means_clusters(data, random_state=seed)
            self._assert_partition(clusters, len(data))
            self.assertLessEqual(len(clusters), default_n_clusters(len(data)))

    def test_duplicate_points_stay_distinct_members(self):
        data = [Vector(1, 1)] * 5 + [Vector(50, 50)] * 5
        clusters = k_means_clusters(data, random_state=0)
        self._assert_partition(clusters, len(data))

    def test_single_point(self):
        clusters = k_means_clusters([Vector(2, 3)])
        self.assertEqual(len(clusters), 1)
        bucket = next(iter(clusters.values()))
        self.assertEqual(list(bucket), [0])

    def test_max_iterations_one(self):
        rng = np.random.RandomState(1)
        data = [Vector(row) for row in rng.rand(300, 2)]
        model = KMeans(max_iters=1, random_state=1).fit(data)
        self.assertEqual(model.n_iter_, 1)
        self._assert_partition(model.clusters_, len(data))

    def test_max_iterations_is_upper_bound(self):
        rng = np.random.RandomState(2)
        data = [Vector(row) for row in rng.rand(300, 2)]
        for cap in (2, 5):
            model = KMeans(max_iters=cap, random_state=7).fit(data)
            self.assertLessEqual(model.n_iter_, cap)
            if not model.converged_:
                self.assertEqual(model.n_iter_, cap)

    def test_safety_cap_only_without_max_iterations(self):
        rng = np.random.RandomState(2)
        data = [Vector(row) for row in rng.rand(300, 2)]
        model = KMeans(random_state=7, safety_cap=1)
        with self.assertLogs("kmeans.kmeans", level=logging.WARNING):
            model.fit(data)
        self.assertEqual(model.n_iter_, 1)
        self.assertFalse(model.converged_)

    def test_inconsistent_data(self):
        data = [Vector(2), Vector(2), Vector(3)]
        with mock.patch.object(KMeans, "_init_centroids") as init:
            with self.assertRaises(InconsistentDataError):
                k_means_clusters(data)
            init.assert_not_called()
        with self.assertRaises(InconsistentDataError):
            k_means_clusters([Vector(2), (1, 2)])

    def test_empty_data(self):
        with self.assertRaises(InvalidArgumentError):
            k_means_clusters([])

    def test_invalid_max_iterations(self):
        for bad in (0, -1, 1.5, True):
            with self.assertRaises(InvalidArgumentError):
                k_means_clusters([Vector(2)], max_iterations=bad)

    def test_seeded_runs_are_reproducible(self):
        rng = np.random.RandomState(4)
        data = [Vector(row) for row in rng.rand(100, 4)]
        first = k_means_clusters(data, random_state=11)
        second = k_means_clusters(data, random_state=np.random.RandomState(11))
        self.assertEqual(_partition(first), _partition(second))

    def test_input_not_mutated(self):
        data = _two_groups()
        before = [p.coordinates for p in data]
        k_means_clusters(data, random_state=5)
        self.assertEqual([p.coordinates for p in data], before)


class TestKMeansEstimator(unittest.TestCase):
    def setUp(self):
        self.data = _two_groups()
        # Seed whose initial picks fall on distinct points.
        for seed in range(100):
            model = KMeans(random_state=seed).fit(self.data)
            if len(set(model.init_indices_)) == 2:
                self.model = model
                break

    def test_fitted_attributes(self):
        model = self.model
        self.assertEqual(len(model.labels_), len(self.data))
        self.assertEqual(set(model.labels_), set(model.cluster_centers_))
        self.assertEqual(set(model.clusters_), set(model.cluster_centers_))
        for i, cid in enumerate(model.labels_):
            self.assertIn(i, model.clusters_[cid])
        for cid, center in model.cluster_centers_.items():
            self.assertEqual(center, Vector.average(model.clusters_[cid].values()))
        self.assertAlmostEqual(model.inertia_, 0.2)

    def test_predict_matches_labels(self):
        self.assertEqual(self.model.predict(self.data), self.model.labels_)
        a, b = self.model.predict([Vector(0.5, 0.2), Vector(10.2, 10.9)])
        self.assertEqual(a, self.model.labels_[0])
        self.assertEqual(b, self.model.labels_[1])

    def test_predict_tie_goes_to_lowest_id(self):
        model = KMeans()
        model.cluster_centers_ = {3: Vector(0, 0), 5: Vector(2, 0)}
        self.assertEqual(model.predict([Vector(1, 0)]), [3])

    def test_assignment_tie_keeps_current_centroid(self):
        model = KMeans()
        centroids = {0: Vector(0, 0), 1: Vector(2, 0)}
        labels = [1]
        changed = model._assign_clusters([Vector(1, 0)], centroids, labels)
        self.assertEqual(labels, [1])
        self.assertFalse(changed)
        # Without a prior assignment the point defaults to the first centroid.
        labels = [None]
        changed = model._assign_clusters([Vector(1, 0)], centroids, labels)
        self.assertEqual(labels, [0])
        self.assertFalse(changed)

    def test_predict_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatchError):
            self.model.predict([Vector(1, 2, 3)])

    def test_fit_predict(self):
        labels = KMeans(random_state=0).fit_predict(self.data)
        self.assertEqual(len(labels), len(self.data))

    def test_cluster_info(self):
        info = self.model.get_cluster_info()
        self.assertEqual(info['n_clusters'], 2)
        self.assertTrue(info['converged'])
        self.assertEqual(sorted(info['cluster_sizes'].values()), [4, 4])
        self.assertEqual(info['min_cluster_size'], 4)
        self.assertEqual(info['max_cluster_size'], 4)
        self.assertEqual(info['avg_cluster_size'], 4.0)

    def test_unfitted(self):
        model = KMeans()
        with self.assertRaises(ValueError):
            model.predict(self.data)
        with self.assertRaises(ValueError):
            model.get_cluster_info()

    def test_verbose_logs_info(self):
        with self.assertLogs("kmeans.kmeans", level=logging.INFO) as logs:
            KMeans(random_state=0, verbose=True).fit(self.data)
        self.assertTrue(any("Final inertia" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
