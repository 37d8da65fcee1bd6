"""
Cluster matching stage: score clusters for a user and rank them.

Public API: find_relevant_clusters.
- core: sequencing (strategy → boost → threshold/sort/cap).
- strategies: embedding, profile, and default (popularity) scorers.
- context_boost: time-of-day and day-of-week boost.
"""

from .context_boost import apply_contextual_boost, context_boost
from .core import find_relevant_clusters
from .strategies import MatchStrategy, interest_overlap, select_strategy

__all__ = [
    "MatchStrategy",
    "apply_contextual_boost",
    "context_boost",
    "find_relevant_clusters",
    "interest_overlap",
    "select_strategy",
]
