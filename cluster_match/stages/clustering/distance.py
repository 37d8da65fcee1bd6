"""
Distance matrices and the neighbor index used by DBSCAN.

The default index materializes the full symmetric n x n distance matrix.
That is O(n^2) in time and memory, which is fine for per-request candidate
sets. A spatial index (k-d tree, ball tree) can replace it by implementing
NeighborIndex; the expansion loop in dbscan.py only calls neighbors().
"""

from typing import Callable, Dict, List, Protocol, Union

import numpy as np

DistanceFunction = Callable[[np.ndarray, np.ndarray], float]


def euclidean_matrix(points: np.ndarray) -> np.ndarray:
    """|a - b| via |a|^2 + |b|^2 - 2 a.b; never builds an n x n x d array."""
    sq = (points ** 2).sum(axis=1)
    dots = points @ points.T
    dots = (dots + dots.T) / 2
    return np.sqrt(np.maximum(sq[:, None] + sq[None, :] - 2 * dots, 0.0))


def manhattan_matrix(points: np.ndarray) -> np.ndarray:
    """Sum of absolute differences, one row at a time."""
    distances = np.empty((len(points), len(points)))
    for i in range(len(points)):
        distances[i] = np.abs(points - points[i]).sum(axis=1)
    return distances


def cosine_matrix(points: np.ndarray) -> np.ndarray:
    """1 - cosine similarity, clipped; 1.0 against any zero-magnitude vector."""
    norms = np.linalg.norm(points, axis=1)
    norm_products = np.outer(norms, norms)
    dots = points @ points.T
    with np.errstate(divide="ignore", invalid="ignore"):
        sims = np.where(norm_products > 0, dots / norm_products, 0.0)
    return 1.0 - np.clip(sims, -1.0, 1.0)


# Keys must match DISTANCE_METRICS in models/config.py
DISTANCE_FUNCTIONS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "euclidean": euclidean_matrix,
    "cosine": cosine_matrix,
    "manhattan": manhattan_matrix,
}


def pairwise_distances(
    points: np.ndarray,
    metric: Union[str, DistanceFunction] = "euclidean",
) -> np.ndarray:
    """
    Symmetric distance matrix with a zero diagonal.

    Named metrics come from DISTANCE_FUNCTIONS; a callable is evaluated once
    per unordered pair.
    """
    n = len(points)
    if n == 0:
        return np.zeros((0, 0))

    if callable(metric):
        distances = np.zeros((n, n))
        for i in range(n):
            for j in range(i + 1, n):
                d = metric(points[i], points[j])
                distances[i, j] = d
                distances[j, i] = d
    elif metric in DISTANCE_FUNCTIONS:
        distances = DISTANCE_FUNCTIONS[metric](points)
    else:
        raise ValueError(f"Unknown distance function: {metric!r}")

    np.fill_diagonal(distances, 0.0)
    return distances


class NeighborIndex(Protocol):
    """Answers epsilon-neighborhood queries by point index."""

    def __len__(self) -> int:
        ...

    def neighbors(self, idx: int) -> List[int]:
        """Indices within epsilon of idx (inclusive), idx itself included, ascending."""
        ...


class DistanceMatrixIndex:
    """NeighborIndex backed by a precomputed pairwise distance matrix."""

    def __init__(
        self,
        points: np.ndarray,
        epsilon: float,
        metric: Union[str, DistanceFunction] = "euclidean",
    ):
        self.epsilon = epsilon
        self.distances = pairwise_distances(points, metric)

    def __len__(self) -> int:
        return len(self.distances)

    def neighbors(self, idx: int) -> List[int]:
        return np.flatnonzero(self.distances[idx] <= self.epsilon).tolist()
