"""
Contextual boost: additive score bump from time of day and day of week.

Applied after base scoring to every match alike; never filters.
"""

from typing import List, Optional

from ...models.config import ClusterMatchConfig
from ...models.scoring import ClusterMatch
from ...models.user import RecommendationContext

SATURDAY = 6
SUNDAY = 0


def time_factor(hour: int, config: ClusterMatchConfig) -> float:
    """Peak evening hours > daytime hours > everything else."""
    if config.peak_hour_start <= hour <= config.peak_hour_end:
        return config.time_factor_peak
    if config.daytime_hour_start <= hour < config.daytime_hour_end:
        return config.time_factor_daytime
    return config.time_factor_other


def day_factor(day: int, config: ClusterMatchConfig) -> float:
    """Weekend (Saturday/Sunday) > weekday."""
    if day in (SATURDAY, SUNDAY):
        return config.day_factor_weekend
    return config.day_factor_weekday


def context_boost(context: RecommendationContext, config: ClusterMatchConfig) -> float:
    """Total additive boost for a context. Missing signals add nothing."""
    boost = 0.0
    if context.time_of_day is not None:
        boost += time_factor(context.time_of_day, config) * config.context_boost_scale
    if context.day_of_week is not None:
        boost += day_factor(context.day_of_week, config) * config.context_boost_scale
    return boost


def apply_contextual_boost(
    matches: List[ClusterMatch],
    context: Optional[RecommendationContext],
    config: ClusterMatchConfig,
) -> List[ClusterMatch]:
    """Add the context boost to every match, capping each score at 1.0."""
    if context is None:
        return matches
    boost = context_boost(context, config)
    if boost == 0.0:
        return matches
    return [
        m.model_copy(update={"score": min(m.score + boost, 1.0)})
        for m in matches
    ]
