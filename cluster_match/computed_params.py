"""
Computed Parameters

Derives read-only parameters from base parameters (a config.json-style dict).
Useful for showing what a parameter set actually means before running it:
the effective embedding weights and the density denominator.
"""

import math
from typing import Any, Dict

from .models.config import ClusterMatchConfig


def compute_parameters(base_params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Compute derived parameters from base parameters.

    Args:
        base_params: Nested or flat parameters accepted by ClusterMatchConfig.from_dict

    Returns:
        Dictionary of computed parameter values
    """
    config = ClusterMatchConfig.from_dict(base_params)
    computed: Dict[str, Any] = {}

    # =========================================================================
    # Normalized embedding weights (with and without the engagement component)
    # =========================================================================
    total = config.weight_text + config.weight_tags + config.weight_engagement
    computed["normalized_weight_text"] = config.weight_text / total
    computed["normalized_weight_tags"] = config.weight_tags / total
    computed["normalized_weight_engagement"] = config.weight_engagement / total

    text_tags_total = config.weight_text + config.weight_tags
    if text_tags_total > 0:
        computed["text_only_weight_text"] = config.weight_text / text_tags_total
        computed["text_only_weight_tags"] = config.weight_tags / text_tags_total
    else:
        computed["text_only_weight_text"] = 0.0
        computed["text_only_weight_tags"] = 0.0

    # =========================================================================
    # Density denominator: pi * epsilon^2 (2-D disc approximation)
    # =========================================================================
    computed["density_area"] = math.pi * config.epsilon ** 2

    # =========================================================================
    # Context boost range
    # =========================================================================
    scale = config.context_boost_scale
    computed["max_context_boost"] = scale * (
        max(config.time_factor_peak, config.time_factor_daytime, config.time_factor_other)
        + max(config.day_factor_weekend, config.day_factor_weekday)
    )
    computed["min_context_boost"] = scale * (
        min(config.time_factor_peak, config.time_factor_daytime, config.time_factor_other)
        + min(config.day_factor_weekend, config.day_factor_weekday)
    )

    # Number of ranks before the default strategy hits its floor
    decay = config.default_rank_decay
    if decay > 0:
        computed["default_ranks_above_floor"] = max(
            0, math.ceil((config.default_base_score - config.default_score_floor) / decay)
        )
    else:
        computed["default_ranks_above_floor"] = None

    return computed
