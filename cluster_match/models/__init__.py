"""Data models for the cluster matching pipeline."""

from .cluster import Cluster, ClusteringResult, ClusteringStats
from .config import DEFAULT_CONFIG, ClusterMatchConfig, load_config, resolve_config
from .entity import EngagementMetrics, Entity, ensure_entities
from .scoring import ClusterMatch, MatchReason
from .user import RecommendationContext, UserProfile

__all__ = [
    "DEFAULT_CONFIG",
    "Cluster",
    "ClusterMatch",
    "ClusterMatchConfig",
    "ClusteringResult",
    "ClusteringStats",
    "EngagementMetrics",
    "Entity",
    "MatchReason",
    "RecommendationContext",
    "UserProfile",
    "ensure_entities",
    "load_config",
    "resolve_config",
]
