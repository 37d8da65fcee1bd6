"""
Density clustering stage: DBSCAN over entity embeddings.

Public API: cluster.
- core: validation and result construction (centroid, density, coherence, topics).
- dbscan: worklist labelling over a NeighborIndex.
- distance: distance functions and the distance-matrix neighbor index.
"""

from .core import cluster, cluster_density
from .dbscan import NOISE, run_dbscan
from .distance import (
    DISTANCE_FUNCTIONS,
    DistanceMatrixIndex,
    NeighborIndex,
    pairwise_distances,
)

__all__ = [
    "DISTANCE_FUNCTIONS",
    "DistanceMatrixIndex",
    "NOISE",
    "NeighborIndex",
    "cluster",
    "cluster_density",
    "pairwise_distances",
    "run_dbscan",
]
