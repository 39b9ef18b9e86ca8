"""K-means clustering of RGB samples with k-means++ seeding.

This module partitions the sampled pixel colors into at most ``k`` clusters.
It is a single pure implementation with no threading assumptions: it can run
on the calling thread or be shipped to a worker by ``chamelo.dispatch``.

Algorithm Overview:
    1. Seed with k-means++: pick the first centroid uniformly at random, then
       draw each further centroid with probability proportional to its squared
       distance from the nearest centroid chosen so far
    2. Lloyd iteration: assign every sample to its nearest centroid, recompute
       each centroid as the rounded channel-wise mean of its samples
    3. Stop once an assignment repeats the previous one, or after
       ``max_iterations`` rounds

Distances are Euclidean in RGB space with channels treated as real values.
Ties go to the lowest centroid index, means are rounded half-up, and a
centroid that loses all of its samples is reset to neutral gray (128, 128, 128)
with population 0.

Complexity:
    - Seeding: O(n x k)
    - Each Lloyd round: O(n x k)

References:
    Arthur, D. and Vassilvitskii, S. (2007). "k-means++: The advantages
    of careful seeding". Proceedings of SODA 2007, pp. 1027-1035.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import numpy as np

from .colors import RGB
from .errors import check_positive_int

__all__ = [
    "Clustering",
    "RandomSource",
    "EMPTY_CLUSTER_COLOR",
    "kmeans",
    "kmeans_plus_plus_seeds",
    "assign_to_clusters",
    "update_centroids",
]

logger = logging.getLogger(__name__)

EMPTY_CLUSTER_COLOR = RGB(128, 128, 128)


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1) from ``random()``.

    ``numpy.random.Generator`` and ``random.Random`` both qualify, and tests
    can pass a small object replaying a fixed sequence.
    """

    def random(self) -> float: ...


@dataclass(frozen=True)
class Clustering:
    """Final centroids and the number of samples assigned to each."""

    centroids: list[RGB] = field(default_factory=list)
    counts: list[int] = field(default_factory=list)
    iterations: int = 0


def _squared_distances(samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Squared Euclidean distances, shape (n_samples, n_centroids)."""
    diff = samples[:, np.newaxis, :] - centroids[np.newaxis, :, :]
    return np.sum(diff * diff, axis=2)


def kmeans_plus_plus_seeds(
    samples: Any, k: int, rng: RandomSource | None = None
) -> np.ndarray:
    """Choose ``min(k, n)`` initial centroids with k-means++.

    Args:
        samples: Array-like of shape (n, 3).
        k: Number of centroids requested.
        rng: Source of uniform draws; a fresh ``numpy.random.Generator`` when
            omitted.

    Returns:
        Float array of shape (min(k, n), 3) whose rows are copies of samples.

    Mathematical Properties:
        - Probability of selecting sample i: D(i)^2 / sum_j D(j)^2
        - When every sample coincides with a chosen centroid the draw
          degenerates to the first sample
    """
    samples = np.asarray(samples, dtype=float).reshape(-1, 3)
    n = len(samples)
    if n == 0 or k <= 0:
        return np.empty((0, 3), dtype=float)

    if rng is None:
        rng = np.random.default_rng()

    target = min(k, n)
    first = min(int(rng.random() * n), n - 1)
    selected = [first]
    min_distances = _squared_distances(samples, samples[first:first + 1])[:, 0]

    while len(selected) < target:
        cumulative = np.cumsum(min_distances)
        threshold = rng.random() * float(min_distances.sum())
        next_idx = int(np.searchsorted(cumulative, threshold, side="left"))

        # Rounding can push the threshold past the running total
        if next_idx >= n:
            next_idx = n - 1

        selected.append(next_idx)
        new_distances = _squared_distances(samples, samples[next_idx:next_idx + 1])
        min_distances = np.minimum(min_distances, new_distances[:, 0])

    return samples[selected].copy()


def assign_to_clusters(samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Index of the nearest centroid for every sample, lowest index on ties."""
    return np.argmin(_squared_distances(samples, centroids), axis=1)


def update_centroids(
    samples: np.ndarray, assignments: np.ndarray, k: int
) -> tuple[np.ndarray, np.ndarray]:
    """Recompute centroids as rounded means of their assigned samples.

    Returns:
        ``(centroids, counts)`` where centroids is an integer array of shape
        (k, 3) and counts holds the population of each cluster.
    """
    counts = np.bincount(assignments, minlength=k)
    sums = np.zeros((k, 3), dtype=float)
    np.add.at(sums, assignments, samples)

    centroids = np.tile(np.array(EMPTY_CLUSTER_COLOR, dtype=np.int64), (k, 1))
    populated = counts > 0
    means = sums[populated] / counts[populated][:, np.newaxis]
    centroids[populated] = np.clip(np.floor(means + 0.5), 0, 255).astype(np.int64)
    return centroids, counts


def kmeans(
    samples: Any,
    k: int,
    max_iterations: int = 100,
    rng: RandomSource | None = None,
) -> Clustering:
    """Cluster RGB samples into at most ``k`` colors.

    Args:
        samples: Array-like of shape (n, 3) with 8-bit channel values.
        k: Requested number of clusters, at least 1. Reduced to the sample
            count when fewer samples are available.
        max_iterations: Upper bound on Lloyd rounds, at least 1.
        rng: Source of uniform draws for seeding.

    Returns:
        Clustering: ``min(k, n)`` centroids with their populations; empty when
            there are no samples.

    Raises:
        ConfigurationError: If ``k`` or ``max_iterations`` is not a positive
            integer.

    Example:
        >>> import random
        >>> result = kmeans([(255, 0, 0)] * 4, k=3, rng=random.Random(7))
        >>> [(c, n) for c, n in zip(result.centroids, result.counts) if n]
        [(RGB(r=255, g=0, b=0), 4)]
    """
    check_positive_int("k", k)
    check_positive_int("max_iterations", max_iterations)

    samples = np.asarray(samples, dtype=float).reshape(-1, 3)
    n = len(samples)
    if n == 0:
        return Clustering()

    actual_k = min(k, n)
    centroids = kmeans_plus_plus_seeds(samples, actual_k, rng)
    counts = np.zeros(actual_k, dtype=np.int64)
    assignments: np.ndarray | None = None
    iterations = 0

    for iteration in range(max_iterations):
        new_assignments = assign_to_clusters(samples, centroids)
        if assignments is not None and np.array_equal(new_assignments, assignments):
            logger.debug("k-means converged after %d iterations", iteration)
            break

        assignments = new_assignments
        centroids, counts = update_centroids(samples, assignments, actual_k)
        iterations = iteration + 1

    return Clustering(
        centroids=[RGB(int(r), int(g), int(b)) for r, g, b in centroids],
        counts=[int(c) for c in counts],
        iterations=iterations,
    )
