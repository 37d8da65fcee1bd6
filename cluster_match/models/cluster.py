"""
Cluster models: output of one density clustering run.

Clusters are created once per run and never mutated afterwards.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Cluster(BaseModel):
    """A density-connected group of entities."""

    model_config = ConfigDict(frozen=True)

    id: str                      # e.g. "dbscan-1", in discovery order
    centroid: List[float]        # mean of member embeddings, L2-normalized
    members: List[str]           # entity ids, input order
    size: int
    density: float               # size / (pi * epsilon^2)
    coherence: float = 1.0       # 1 - mean member distance to centroid, floored at 0
    topics: List[str] = []       # most frequent member tags


class ClusteringStats(BaseModel):
    """Statistics from a clustering run."""

    total_points: int = 0
    clustered_points: int = 0
    noise_points: int = 0
    cluster_count: int = 0
    execution_time_ms: float = 0.0

    @property
    def clustered_percentage(self) -> float:
        """Percentage of points that ended up in a cluster."""
        if self.total_points == 0:
            return 0.0
        return (self.clustered_points / self.total_points) * 100


class ClusteringResult(BaseModel):
    """
    Clusters plus the entity -> cluster index map.

    Noise entities are listed in `noise` and absent from `assignments`.
    """

    clusters: List[Cluster] = []
    assignments: Dict[str, int] = {}
    noise: List[str] = []
    quality: float = 0.0
    stats: ClusteringStats = Field(default_factory=ClusteringStats)

    def cluster_for(self, entity_id: str) -> Optional[Cluster]:
        """Cluster an entity was assigned to, or None for noise/unknown ids."""
        idx = self.assignments.get(entity_id)
        return self.clusters[idx] if idx is not None else None
