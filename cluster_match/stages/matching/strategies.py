"""
Match strategies — how base scores are assigned to clusters.

Exactly one strategy runs per call, chosen once by select_strategy in fixed
priority order: EMBEDDING (user vector) > PROFILE (declared interests) > DEFAULT
(popularity). Every scorer returns one ClusterMatch per cluster with a score
in [0, 1].
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from ...errors import DimensionMismatch
from ...models.cluster import Cluster
from ...models.config import ClusterMatchConfig
from ...models.scoring import ClusterMatch, MatchReason
from ...models.user import UserProfile
from ...utils.similarity import cosine_similarity

logger = logging.getLogger(__name__)


class MatchStrategy(str, Enum):
    EMBEDDING = "embedding"
    PROFILE = "profile"
    DEFAULT = "default"


def select_strategy(
    user_embedding: Optional[Sequence[float]],
    user_profile: Optional[UserProfile],
) -> MatchStrategy:
    """Pick the strategy for this call. An empty embedding counts as absent."""
    if user_embedding is not None and len(user_embedding) > 0:
        return MatchStrategy.EMBEDDING
    if user_profile is not None:
        return MatchStrategy.PROFILE
    return MatchStrategy.DEFAULT


def interest_overlap(interests: Sequence[str], topics: Sequence[str]) -> float:
    """
    Case-insensitive overlap of interests with topics.

    |interests found in topics| / max(|interests|, |topics|); 0 if either is empty.
    """
    if not interests or not topics:
        return 0.0
    topic_set = {t.lower() for t in topics}
    matched = sum(1 for i in interests if i.lower() in topic_set)
    return matched / max(len(interests), len(topics))


def score_by_embedding(
    clusters: Sequence[Cluster],
    user_embedding: Sequence[float],
    config: ClusterMatchConfig,
) -> List[ClusterMatch]:
    """Cosine similarity of the user vector to each centroid, floored at 0."""
    matches = []
    mismatched = 0
    for cluster in clusters:
        try:
            sim = cosine_similarity(user_embedding, cluster.centroid)
        except DimensionMismatch:
            mismatched += 1
            sim = 0.0
        matches.append(
            ClusterMatch(cluster=cluster, score=max(0.0, sim), reason=MatchReason.EMBEDDING)
        )
    if mismatched:
        logger.warning(
            "[sim_fallback] CENTROID_DIM_MISMATCH mismatched=%s total_clusters=%s user_dim=%s",
            mismatched, len(clusters), len(user_embedding),
        )
    return matches


def score_by_profile(
    clusters: Sequence[Cluster],
    user_profile: UserProfile,
    config: ClusterMatchConfig,
) -> List[ClusterMatch]:
    """interest_weight * overlap + min(size / size_divisor, size_cap), capped at 1."""
    matches = []
    for cluster in clusters:
        score = config.profile_interest_weight * interest_overlap(
            user_profile.interests, cluster.topics
        )
        score += min(cluster.size / config.profile_size_divisor, config.profile_size_cap)
        matches.append(
            ClusterMatch(cluster=cluster, score=min(max(score, 0.0), 1.0), reason=MatchReason.PROFILE)
        )
    return matches


def score_by_popularity(
    clusters: Sequence[Cluster],
    config: ClusterMatchConfig,
) -> List[ClusterMatch]:
    """
    Cold start: rank by size (largest first, stable) with a decaying score.

    score = max(base - decay * rank, floor). The input sequence is not reordered.
    """
    ranked = sorted(clusters, key=lambda c: c.size, reverse=True)
    return [
        ClusterMatch(
            cluster=cluster,
            score=min(
                max(config.default_base_score - rank * config.default_rank_decay,
                    config.default_score_floor),
                1.0,
            ),
            reason=MatchReason.DEFAULT,
        )
        for rank, cluster in enumerate(ranked)
    ]


def score_clusters(
    strategy: MatchStrategy,
    clusters: Sequence[Cluster],
    user_embedding: Optional[Sequence[float]],
    user_profile: Optional[UserProfile],
    config: ClusterMatchConfig,
) -> List[ClusterMatch]:
    """Run the scorer for `strategy` with the inputs it needs."""
    if strategy is MatchStrategy.EMBEDDING:
        return score_by_embedding(clusters, user_embedding, config)
    if strategy is MatchStrategy.PROFILE:
        return score_by_profile(clusters, user_profile, config)
    return score_by_popularity(clusters, config)
