"""
Embedding Generator

Turns an entity's text, tags, and (optionally) engagement counters into one
fixed-dimension, L2-normalized vector.

Usage:
    generator = EmbeddingGenerator()
    vector = generator.generate("sunset at the beach", ["travel", "summer"])

    # Swap in a real model without touching clustering or matching
    generator = EmbeddingGenerator(embedder=my_model)  # anything with embed(text)
"""

import logging
import math
from typing import Dict, List, Optional, Sequence

from ..models.config import ClusterMatchConfig, resolve_config
from ..models.entity import EngagementMetrics, Entity
from ..utils.vectors import combine_vectors, normalize_l2, resize_vector
from .embedding_strategy import HashTrigEmbedder, TextEmbedder, get_embed_text, get_tags_text

logger = logging.getLogger(__name__)


class EmbeddingGenerator:
    """
    Builds entity embeddings from weighted sub-vectors.

    Each sub-vector (text, tags, engagement) has the configured dimension.
    They are averaged with weights re-normalized over the components present,
    then L2-normalized. Empty input gives the zero vector.
    """

    def __init__(
        self,
        config: Optional[ClusterMatchConfig] = None,
        embedder: Optional[TextEmbedder] = None,
    ):
        self.config = resolve_config(config)
        self.dimensions = self.config.embedding_dimensions
        self.embedder = embedder or HashTrigEmbedder(self.dimensions)

    def _weights(self, weights: Optional[Dict[str, float]]) -> Dict[str, float]:
        resolved = {
            "text": self.config.weight_text,
            "tags": self.config.weight_tags,
            "engagement": self.config.weight_engagement,
        }
        if weights:
            resolved.update({k: float(v) for k, v in weights.items() if k in resolved})
        return resolved

    def _embed_or_zero(self, text: str) -> List[float]:
        if not text:
            return [0.0] * self.dimensions
        vector = list(self.embedder.embed(text))
        if len(vector) != self.dimensions:
            logger.warning(
                "[embedding] EMBEDDER_DIM_RESIZED expected=%s actual=%s",
                self.dimensions, len(vector),
            )
            vector = resize_vector(vector, self.dimensions)
        return vector

    def text_vector(self, text_content: str) -> List[float]:
        """Sub-vector for the main content; zero vector for blank text."""
        return self._embed_or_zero(get_embed_text(text_content))

    def tags_vector(self, tags: Sequence[str]) -> List[float]:
        """Sub-vector for all tags embedded together; zero vector for no tags."""
        return self._embed_or_zero(get_tags_text(tags))

    def engagement_vector(self, engagement: EngagementMetrics) -> List[float]:
        """Log-scaled engagement counters tiled to the embedding dimension."""
        scale = self.config.engagement_scale_factor
        scaled = [
            math.log10(1 + v) / scale if v > 0 else 0.0
            for v in engagement.as_list()
        ]
        return resize_vector(scaled, self.dimensions)

    def generate(
        self,
        text_content: str,
        tags: Sequence[str],
        weights: Optional[Dict[str, float]] = None,
        engagement: Optional[EngagementMetrics] = None,
    ) -> List[float]:
        """
        Generate an embedding from text, tags, and optional engagement.

        weights: optional {"text", "tags", "engagement"} overrides; only
        ratios matter. The engagement component is used only when
        `engagement` is given.
        """
        w = self._weights(weights)
        vectors = [self.text_vector(text_content), self.tags_vector(tags)]
        component_weights = [w["text"], w["tags"]]
        if engagement is not None:
            vectors.append(self.engagement_vector(engagement))
            component_weights.append(w["engagement"])

        combined = combine_vectors(vectors, component_weights)
        return normalize_l2(combined)

    def generate_for_entity(self, entity: Entity) -> List[float]:
        """Generate an embedding from an Entity's text, tags, and engagement."""
        return self.generate(entity.text_content, entity.tags, engagement=entity.engagement)

    def generate_for_entities(self, entities: Sequence[Entity]) -> Dict[str, List[float]]:
        """Embeddings keyed by entity id, in input order."""
        embeddings = {e.id: self.generate_for_entity(e) for e in entities}
        logger.debug("[embedding] GENERATED count=%s dim=%s", len(embeddings), self.dimensions)
        return embeddings

    def update_embedding(
        self,
        current: Sequence[float],
        text_content: str = "",
        tags: Optional[Sequence[str]] = None,
        engagement: Optional[EngagementMetrics] = None,
    ) -> List[float]:
        """
        Blend an existing embedding with one built from fresh data.

        current_weight * current + (1 - current_weight) * fresh, L2-normalized.
        """
        fresh = self.generate(text_content, tags or [], engagement=engagement)
        alpha = self.config.update_current_weight
        blended = combine_vectors([list(current), fresh], [alpha, 1.0 - alpha])
        return normalize_l2(blended)


def generate_embedding(
    text_content: str,
    tags: Sequence[str],
    weights: Optional[Dict[str, float]] = None,
    config: Optional[ClusterMatchConfig] = None,
) -> List[float]:
    """Module-level shortcut for EmbeddingGenerator(config).generate(...)."""
    return EmbeddingGenerator(config).generate(text_content, tags, weights)
