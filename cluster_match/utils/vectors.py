"""
Vector helpers: L2 normalization, weighted combination, resizing, centroids.
"""

from typing import List, Sequence

import numpy as np

from ..errors import DimensionMismatch


def normalize_l2(vector: Sequence[float]) -> List[float]:
    """Scale to unit Euclidean norm. The zero vector is returned unchanged."""
    arr = np.asarray(vector, dtype=float)
    norm = np.linalg.norm(arr)
    if norm == 0:
        return arr.tolist()
    return (arr / norm).tolist()


def combine_vectors(
    vectors: Sequence[Sequence[float]],
    weights: Sequence[float],
) -> List[float]:
    """
    Weighted average of equal-length vectors.

    Weights are re-normalized to sum to 1, so only their ratios matter.
    A non-positive weight total yields the zero vector.
    """
    if len(vectors) == 0:
        return []
    if len(vectors) != len(weights):
        raise ValueError(f"Got {len(vectors)} vectors but {len(weights)} weights")
    dim = len(vectors[0])
    for v in vectors[1:]:
        if len(v) != dim:
            raise DimensionMismatch(dim, len(v))
    w = np.asarray(weights, dtype=float)
    total = w.sum()
    if total <= 0:
        return [0.0] * dim
    stacked = np.asarray(vectors, dtype=float)
    return ((w / total) @ stacked).tolist()


def resize_vector(vector: Sequence[float], dimension: int) -> List[float]:
    """Tile or truncate a vector to the given dimension. Empty input gives zeros."""
    if len(vector) == 0:
        return [0.0] * dimension
    arr = np.resize(np.asarray(vector, dtype=float), dimension)
    return arr.tolist()


def centroid(vectors: Sequence[Sequence[float]]) -> List[float]:
    """Coordinate-wise mean of the vectors, L2-normalized."""
    if len(vectors) == 0:
        return []
    mean = np.asarray(vectors, dtype=float).mean(axis=0)
    return normalize_l2(mean)
