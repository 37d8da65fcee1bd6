"""
Pipeline configuration — embedding, clustering, matching, and context boost parameters.

ClusterMatchConfig defaults are defined here. Callers may pass a dict
(e.g. loaded from a config.json); from_dict() merges it with these defaults.
"""

import json
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import BaseModel, field_validator, model_validator

DISTANCE_METRICS = ("euclidean", "cosine", "manhattan")


class ClusterMatchConfig(BaseModel):
    """Configuration for embedding generation, clustering, and cluster matching."""

    # -------------------------------------------------------------------------
    # Embedding Generator
    # -------------------------------------------------------------------------

    # Output dimension of every generated embedding.
    embedding_dimensions: int = 128

    # Relative weights of the sub-vectors. Re-normalized to sum to 1 over the
    # components actually present, so only their ratios matter.
    weight_text: float = 0.5
    weight_tags: float = 0.3
    weight_engagement: float = 0.2

    # Engagement counts are mapped to log10(1 + v) / engagement_scale_factor.
    engagement_scale_factor: float = 5.0

    # update_embedding: new = current_weight * current + (1 - current_weight) * fresh.
    update_current_weight: float = 0.7

    # -------------------------------------------------------------------------
    # Density Clustering (DBSCAN)
    # -------------------------------------------------------------------------

    # Neighborhood radius. Points within epsilon (inclusive) are neighbors.
    epsilon: float = 0.3
    # Min neighbors (self included) for a point to be a core point.
    min_points: int = 5
    # One of DISTANCE_METRICS. Computed on un-normalized embeddings.
    distance_function: str = "euclidean"
    # Max number of member tags kept as a cluster's topics.
    max_topics_per_cluster: int = 5

    # -------------------------------------------------------------------------
    # Cluster Matching
    # -------------------------------------------------------------------------

    # Matches scoring below this are dropped.
    min_match_threshold: float = 0.3
    # Max number of matches returned.
    max_clusters: int = 10

    # Profile strategy: interest_weight * overlap + min(size / size_divisor, size_cap)
    profile_interest_weight: float = 0.7
    profile_size_divisor: float = 1000.0
    profile_size_cap: float = 0.3

    # Default strategy: max(base - decay * rank, floor), ranked by cluster size.
    default_base_score: float = 0.5
    default_rank_decay: float = 0.05
    default_score_floor: float = 0.2

    # -------------------------------------------------------------------------
    # Contextual Boost
    # boost = context_boost_scale * (time_factor + day_factor), final score capped at 1.0
    # -------------------------------------------------------------------------

    context_boost_scale: float = 0.1
    # Hours [peak_hour_start, peak_hour_end] inclusive.
    peak_hour_start: int = 18
    peak_hour_end: int = 22
    # Hours [daytime_hour_start, daytime_hour_end) half-open.
    daytime_hour_start: int = 9
    daytime_hour_end: int = 18
    time_factor_peak: float = 1.0
    time_factor_daytime: float = 0.7
    time_factor_other: float = 0.4
    # Day 0 = Sunday, 6 = Saturday.
    day_factor_weekend: float = 1.0
    day_factor_weekday: float = 0.8

    # -------------------------------------------------------------------------
    # Similar-item search
    # -------------------------------------------------------------------------

    similar_default_limit: int = 10
    similar_min_threshold: float = 0.7

    @field_validator("embedding_dimensions", "min_points", "max_clusters", "similar_default_limit")
    @classmethod
    def positive_int(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be >= 1, got {v}")
        return v

    @field_validator("epsilon", "engagement_scale_factor", "profile_size_divisor")
    @classmethod
    def positive_float(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"must be > 0, got {v}")
        return v

    @field_validator("distance_function")
    @classmethod
    def known_distance(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in DISTANCE_METRICS:
            raise ValueError(f"distance_function must be one of {DISTANCE_METRICS}, got {v!r}")
        return v

    @model_validator(mode="after")
    def embedding_weights_valid(self):
        weights = (self.weight_text, self.weight_tags, self.weight_engagement)
        if any(w < 0 for w in weights):
            raise ValueError(f"Embedding weights must be non-negative, got {weights}")
        if sum(weights) <= 0:
            raise ValueError("At least one embedding weight must be positive")
        if not 0.0 <= self.update_current_weight <= 1.0:
            raise ValueError(
                f"update_current_weight must be in [0, 1], got {self.update_current_weight}"
            )
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "ClusterMatchConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        for section in ("clustering", "matching"):
            if section in config_dict:
                flat.update(config_dict[section])
        if "embedding" in config_dict:
            emb = dict(config_dict["embedding"])
            weights = emb.pop("weights", {})
            for name in ("text", "tags", "engagement"):
                if name in weights:
                    flat[f"weight_{name}"] = weights[name]
            if "dimensions" in emb:
                flat["embedding_dimensions"] = emb.pop("dimensions")
            flat.update(emb)
        if "profile" in config_dict:
            p = config_dict["profile"]
            if "interest_weight" in p:
                flat["profile_interest_weight"] = p["interest_weight"]
            if "size_divisor" in p:
                flat["profile_size_divisor"] = p["size_divisor"]
            if "size_cap" in p:
                flat["profile_size_cap"] = p["size_cap"]
        if "default_ranking" in config_dict:
            d = config_dict["default_ranking"]
            if "base_score" in d:
                flat["default_base_score"] = d["base_score"]
            if "rank_decay" in d:
                flat["default_rank_decay"] = d["rank_decay"]
            if "score_floor" in d:
                flat["default_score_floor"] = d["score_floor"]
        if "context_boost" in config_dict:
            cb = config_dict["context_boost"]
            if "scale" in cb:
                flat["context_boost_scale"] = cb["scale"]
            flat.update({k: v for k, v in cb.items() if k != "scale"})
        # Top-level flat keys win over sections
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = ClusterMatchConfig()


def resolve_config(config: Optional["ClusterMatchConfig"]) -> "ClusterMatchConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG


def load_config(path: Union[str, Path]) -> ClusterMatchConfig:
    """Load a config.json file and merge it with the defaults."""
    with open(path) as f:
        return ClusterMatchConfig.from_dict(json.load(f))
