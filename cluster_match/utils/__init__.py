"""Shared utilities for vector math and similarity."""

from .similarity import cosine_similarity, find_similar
from .vectors import centroid, combine_vectors, normalize_l2, resize_vector

__all__ = [
    "centroid",
    "combine_vectors",
    "cosine_similarity",
    "find_similar",
    "normalize_l2",
    "resize_vector",
]
