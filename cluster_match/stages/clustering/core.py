"""
Density clustering orchestration: validate input, label with DBSCAN, build clusters.

Embeddings are clustered un-normalized; normalizing first would erase genuine
magnitude differences between otherwise similar items. Only the resulting
centroids are L2-normalized.
"""

import logging
import math
import time
from collections import Counter
from typing import Callable, Dict, List, Optional, Sequence, Union

import numpy as np

from ...errors import CardinalityMismatch, DimensionMismatch
from ...models.cluster import Cluster, ClusteringResult, ClusteringStats
from ...models.config import ClusterMatchConfig, resolve_config
from ...models.entity import Entity, ensure_entities
from ...utils.vectors import centroid as compute_centroid
from .dbscan import NOISE, run_dbscan
from .distance import DistanceMatrixIndex

logger = logging.getLogger(__name__)


def cluster_density(size: int, epsilon: float) -> float:
    """
    size / (pi * epsilon^2).

    Treats the neighborhood as a 2-D disc whatever the embedding dimension;
    an approximation kept for comparability across runs, not a true volume.
    """
    if size == 0:
        return 0.0
    return size / (math.pi * epsilon ** 2)


def cluster_coherence(member_vectors: np.ndarray, centroid: Sequence[float]) -> float:
    """1 - mean Euclidean distance of members to the (normalized) centroid, floored at 0."""
    if len(member_vectors) < 2:
        return 1.0
    distances = np.linalg.norm(member_vectors - np.asarray(centroid, dtype=float), axis=1)
    return max(0.0, 1.0 - float(distances.mean()))


def cluster_topics(members: Sequence[Entity], max_topics: int) -> List[str]:
    """
    Most frequent member tags, counted case-insensitively.

    The first spelling seen is kept; ties keep first-appearance order.
    """
    counts: Counter = Counter()
    spelling: Dict[str, str] = {}
    for entity in members:
        for tag in entity.tags:
            key = tag.strip().lower()
            if not key:
                continue
            spelling.setdefault(key, tag.strip())
            counts[key] += 1
    return [spelling[key] for key, _ in counts.most_common(max_topics)]


def clustering_quality(clusters: Sequence[Cluster], total_points: int) -> float:
    """(fraction of points clustered) * (mean cluster coherence)."""
    if not clusters or total_points == 0:
        return 0.0
    clustered = sum(c.size for c in clusters)
    avg_coherence = sum(c.coherence for c in clusters) / len(clusters)
    return (clustered / total_points) * avg_coherence


def _to_matrix(embeddings: Sequence[Sequence[float]]) -> np.ndarray:
    dim = len(embeddings[0])
    for vector in embeddings[1:]:
        if len(vector) != dim:
            raise DimensionMismatch(dim, len(vector))
    return np.asarray(embeddings, dtype=float)


def _build_result(
    points: np.ndarray,
    entities: List[Entity],
    labels: List[int],
    epsilon: float,
    max_topics: int,
) -> ClusteringResult:
    """Group points by label (discovery order) and build Cluster models."""
    label_to_indices: Dict[int, List[int]] = {}
    noise: List[str] = []
    for i, label in enumerate(labels):
        if label == NOISE:
            noise.append(entities[i].id)
            continue
        label_to_indices.setdefault(label, []).append(i)

    clusters: List[Cluster] = []
    assignments: Dict[str, int] = {}
    for label in sorted(label_to_indices):
        indices = label_to_indices[label]
        member_vectors = points[indices]
        members = [entities[i] for i in indices]
        center = compute_centroid(member_vectors)

        built = Cluster(
            id=f"dbscan-{label + 1}",
            centroid=center,
            members=[e.id for e in members],
            size=len(indices),
            density=cluster_density(len(indices), epsilon),
            coherence=cluster_coherence(member_vectors, center),
            topics=cluster_topics(members, max_topics),
        )
        for entity in members:
            assignments[entity.id] = len(clusters)
        clusters.append(built)

    return ClusteringResult(
        clusters=clusters,
        assignments=assignments,
        noise=noise,
        quality=clustering_quality(clusters, len(entities)),
    )


def cluster(
    embeddings: Sequence[Sequence[float]],
    entities: Sequence[Union[str, Dict, Entity]],
    epsilon: Optional[float] = None,
    min_points: Optional[int] = None,
    config: Optional[ClusterMatchConfig] = None,
    distance_function: Optional[Union[str, Callable]] = None,
) -> ClusteringResult:
    """
    Partition embeddings into density-connected clusters plus noise.

    entities[i] (an id, dict, or Entity) owns embeddings[i]. epsilon,
    min_points, and distance_function default to the config values.

    Raises:
        CardinalityMismatch: len(embeddings) != len(entities); nothing is computed.
        DimensionMismatch: embeddings of differing lengths.
    """
    if len(embeddings) != len(entities):
        raise CardinalityMismatch(len(embeddings), len(entities))
    if len(embeddings) == 0:
        return ClusteringResult()

    config = resolve_config(config)
    epsilon = config.epsilon if epsilon is None else epsilon
    min_points = config.min_points if min_points is None else min_points
    metric = distance_function or config.distance_function
    if epsilon <= 0:
        raise ValueError(f"epsilon must be > 0, got {epsilon}")
    if min_points < 1:
        raise ValueError(f"min_points must be >= 1, got {min_points}")

    entities_typed = ensure_entities(entities)
    start = time.perf_counter()

    points = _to_matrix(embeddings)
    logger.debug(
        "[dbscan] CLUSTERING_START points=%s dim=%s epsilon=%s min_points=%s metric=%s",
        len(points), points.shape[1], epsilon, min_points, metric,
    )
    index = DistanceMatrixIndex(points, epsilon, metric)
    labels = run_dbscan(index, min_points)
    result = _build_result(points, entities_typed, labels, epsilon, config.max_topics_per_cluster)

    result.stats = ClusteringStats(
        total_points=len(points),
        clustered_points=len(result.assignments),
        noise_points=len(result.noise),
        cluster_count=len(result.clusters),
        execution_time_ms=(time.perf_counter() - start) * 1000,
    )
    logger.info(
        "[dbscan] CLUSTERING_COMPLETE clusters=%s clustered=%s noise=%s quality=%.3f",
        result.stats.cluster_count,
        result.stats.clustered_points,
        result.stats.noise_points,
        result.quality,
    )
    return result
