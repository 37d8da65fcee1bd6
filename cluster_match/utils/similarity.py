"""
Similarity utilities: cosine similarity and in-memory similar-item search.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import DimensionMismatch
from ..models.config import ClusterMatchConfig, resolve_config

logger = logging.getLogger(__name__)


def cosine_similarity(v1: Sequence[float], v2: Sequence[float]) -> float:
    """
    Compute cosine similarity between two vectors.

    Raises DimensionMismatch when lengths differ. Returns 0.0 when either
    vector has zero magnitude. Result is clipped into [-1, 1].
    """
    if len(v1) != len(v2):
        raise DimensionMismatch(len(v1), len(v2))
    a = np.asarray(v1, dtype=float)
    b = np.asarray(v2, dtype=float)
    norm_product = np.linalg.norm(a) * np.linalg.norm(b)
    if norm_product == 0:
        return 0.0
    return float(np.clip(np.dot(a, b) / norm_product, -1.0, 1.0))


def find_similar(
    reference: Sequence[float],
    candidates: Dict[str, Sequence[float]],
    limit: Optional[int] = None,
    min_similarity: Optional[float] = None,
    exclude_ids: Optional[Sequence[str]] = None,
    config: Optional[ClusterMatchConfig] = None,
) -> List[Tuple[str, float]]:
    """
    Return up to `limit` (id, similarity) pairs at or above min_similarity.

    Sorted by descending similarity; ties keep candidate order. Candidates
    whose dimension differs from the reference are skipped and logged.
    limit and min_similarity default to the config values.
    """
    config = resolve_config(config)
    limit = config.similar_default_limit if limit is None else limit
    min_similarity = config.similar_min_threshold if min_similarity is None else min_similarity
    excluded = set(exclude_ids or ())
    results: List[Tuple[str, float]] = []
    skipped = 0
    for cid, vector in candidates.items():
        if cid in excluded:
            continue
        try:
            sim = cosine_similarity(reference, vector)
        except DimensionMismatch:
            skipped += 1
            continue
        if sim >= min_similarity:
            results.append((cid, sim))

    if skipped:
        logger.warning(
            "[sim_fallback] SIMILAR_CANDIDATE_DIM_MISMATCH skipped=%s total_candidates=%s",
            skipped,
            len(candidates),
        )

    results.sort(key=lambda x: x[1], reverse=True)
    return results[:limit]
