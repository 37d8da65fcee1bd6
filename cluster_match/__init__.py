"""
Cluster Match — embedding, density clustering, and cluster matching

Single entry point for the package:
- models/: ClusterMatchConfig, Entity, Cluster, ClusteringResult, ClusterMatch
- embedding/: TextEmbedder strategy, HashTrigEmbedder, EmbeddingGenerator
- stages/: clustering (DBSCAN), matching, orchestrator
- utils/: vector math and cosine similarity
"""

from .computed_params import compute_parameters
from .embedding import (
    EMBEDDING_DIMENSIONS,
    STRATEGY_VERSION,
    EmbeddingGenerator,
    HashTrigEmbedder,
    TextEmbedder,
    generate_embedding,
)
from .errors import CardinalityMismatch, ClusterMatchError, DimensionMismatch
from .models import (
    DEFAULT_CONFIG,
    Cluster,
    ClusterMatch,
    ClusterMatchConfig,
    ClusteringResult,
    EngagementMetrics,
    Entity,
    MatchReason,
    RecommendationContext,
    UserProfile,
    load_config,
    resolve_config,
)
from .stages.clustering import cluster
from .stages.matching import find_relevant_clusters
from .stages.orchestrator import create_cluster_matches
from .utils import cosine_similarity, find_similar, normalize_l2

similarity = cosine_similarity

__all__ = [
    "CardinalityMismatch",
    "Cluster",
    "ClusterMatch",
    "ClusterMatchConfig",
    "ClusterMatchError",
    "ClusteringResult",
    "DEFAULT_CONFIG",
    "DimensionMismatch",
    "EMBEDDING_DIMENSIONS",
    "EmbeddingGenerator",
    "EngagementMetrics",
    "Entity",
    "HashTrigEmbedder",
    "MatchReason",
    "RecommendationContext",
    "STRATEGY_VERSION",
    "TextEmbedder",
    "UserProfile",
    "cluster",
    "compute_parameters",
    "cosine_similarity",
    "create_cluster_matches",
    "find_relevant_clusters",
    "find_similar",
    "generate_embedding",
    "load_config",
    "normalize_l2",
    "resolve_config",
    "similarity",
]
