"""
Cluster matching: score clusters for one user, boost by context, filter, rank, cap.

Strategy selection, scoring, and boosting live in strategies and context_boost;
this module only sequences them.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from ...models.cluster import Cluster
from ...models.config import ClusterMatchConfig, resolve_config
from ...models.scoring import ClusterMatch
from ...models.user import RecommendationContext, UserProfile
from .context_boost import apply_contextual_boost
from .strategies import score_clusters, select_strategy

logger = logging.getLogger(__name__)


def _ensure_profile(
    profile: Optional[Union[Dict[str, Any], UserProfile]],
) -> Optional[UserProfile]:
    if profile is None or isinstance(profile, UserProfile):
        return profile
    try:
        return UserProfile.model_validate(profile)
    except ValidationError as e:
        logger.warning("[match_fallback] INVALID_USER_PROFILE treated_as=absent errors=%s", e.error_count())
        return None


def _ensure_context(
    context: Optional[Union[Dict[str, Any], RecommendationContext]],
) -> Optional[RecommendationContext]:
    if context is None or isinstance(context, RecommendationContext):
        return context
    try:
        return RecommendationContext.model_validate(context)
    except ValidationError as e:
        logger.warning("[match_fallback] INVALID_CONTEXT treated_as=absent errors=%s", e.error_count())
        return None


def find_relevant_clusters(
    clusters: Sequence[Cluster],
    user_embedding: Optional[Sequence[float]] = None,
    user_profile: Optional[Union[Dict[str, Any], UserProfile]] = None,
    context: Optional[Union[Dict[str, Any], RecommendationContext]] = None,
    min_match_threshold: Optional[float] = None,
    max_clusters: Optional[int] = None,
    config: Optional[ClusterMatchConfig] = None,
) -> List[ClusterMatch]:
    """
    Rank clusters by relevance to a user, most relevant first.

    Base scores come from exactly one strategy (embedding > profile > default).
    A context adds a capped boost to every score. Matches below
    min_match_threshold are dropped; the rest are sorted by descending score
    (ties keep discovery order) and truncated to max_clusters. Threshold and
    cap default to the config values.
    """
    if not clusters:
        return []

    config = resolve_config(config)
    threshold = config.min_match_threshold if min_match_threshold is None else min_match_threshold
    limit = config.max_clusters if max_clusters is None else max_clusters

    profile = _ensure_profile(user_profile)
    ctx = _ensure_context(context)

    # 1) Base scores from the selected strategy
    strategy = select_strategy(user_embedding, profile)
    matches = score_clusters(strategy, clusters, user_embedding, profile, config)

    # 2) Contextual boost
    matches = apply_contextual_boost(matches, ctx, config)

    # 3) Threshold, sort, cap
    kept = [m for m in matches if m.score >= threshold]
    kept.sort(key=lambda m: m.score, reverse=True)
    result = kept[: max(limit, 0)]

    logger.debug(
        "[cluster_match] MATCHES strategy=%s clusters=%s kept=%s returned=%s",
        strategy.value, len(clusters), len(kept), len(result),
    )
    return result
