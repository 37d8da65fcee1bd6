"""
Scoring model: ClusterMatch and the strategy tag explaining each score.
"""

from enum import Enum

from pydantic import BaseModel, Field

from .cluster import Cluster


class MatchReason(str, Enum):
    """Which matching strategy produced a score."""

    EMBEDDING = "embedding"
    PROFILE = "profile"
    DEFAULT = "default"


class ClusterMatch(BaseModel):
    """A cluster with its relevance score for one user."""

    cluster: Cluster
    score: float = Field(ge=0.0, le=1.0)
    reason: MatchReason
