"""
K-means clustering over RGB color points.

A small, dependency-light Lloyd iteration with explicit policies:
random initialisation with replacement from an injectable numpy Generator,
first-index tie breaking, empty clusters reset to black and a fixed
iteration cap.
"""

from typing import List, Optional, Sequence, Union

import numpy as np
from loguru import logger

from .conversion import color_distance

MAX_ITERATIONS = 100
CONVERGENCE_TOLERANCE = 1.0

PointsLike = Union[np.ndarray, Sequence[Sequence[float]]]


def assign_labels(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Index of the nearest centroid (Euclidean, RGB) for every point.

    Ties go to the lowest centroid index.
    """
    distances = np.linalg.norm(points[:, None, :] - centroids[None, :, :], axis=2)
    return np.argmin(distances, axis=1)


def kmeans_cluster(points: PointsLike,
                   k: int,
                   rng_seed: Optional[int] = None,
                   rng: Optional[np.random.Generator] = None,
                   max_iter: int = MAX_ITERATIONS,
                   tolerance: float = CONVERGENCE_TOLERANCE,
                   keep_empty: bool = False) -> List[np.ndarray]:
    """
    Cluster color points into k representative centroids.

    Args:
        points: (N, 3) RGB points
        k: Number of centroids
        rng_seed: Seed for the default Generator when rng is not given
        rng: Generator used to pick the initial centroids
        max_iter: Maximum number of assignment/update rounds
        tolerance: Stop once every centroid moves less than this distance
        keep_empty: Leave a centroid with no points where it was instead of
            resetting it to (0, 0, 0)

    Returns:
        List of k float64 RGB centroids, or [] for empty input
    """
    data = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    if data.shape[0] == 0 or k <= 0:
        logger.debug("kmeans_cluster: nothing to cluster")
        return []

    generator = rng if rng is not None else np.random.default_rng(rng_seed)
    initial = np.asarray(generator.integers(0, data.shape[0], size=k))
    centroids = data[initial].copy()

    iterations = 0
    converged = False
    while iterations < max_iter:
        labels = assign_labels(data, centroids)

        updated = np.zeros_like(centroids)
        for index in range(k):
            members = data[labels == index]
            if len(members) > 0:
                updated[index] = members.mean(axis=0)
            elif keep_empty:
                updated[index] = centroids[index]

        shifts = [color_distance(new, old) for new, old in zip(updated, centroids)]
        if all(shift < tolerance for shift in shifts):
            converged = True
            break

        centroids = updated
        iterations += 1

    logger.debug(
        f"kmeans_cluster: k={k}, points={data.shape[0]}, "
        f"iterations={iterations}, converged={converged}"
    )
    return [centroid for centroid in centroids]
