"""
Pipeline orchestrator — runs embedding generation, density clustering, then
cluster matching for one user over a fixed snapshot of entities.

The main entry point is create_cluster_matches, which returns the ranked
matches plus the clustering result they were drawn from.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..embedding.embedding_strategy import TextEmbedder
from ..embedding.generator import EmbeddingGenerator
from ..models.cluster import ClusteringResult
from ..models.config import ClusterMatchConfig, resolve_config
from ..models.entity import Entity, ensure_entities
from ..models.scoring import ClusterMatch
from ..models.user import RecommendationContext, UserProfile
from .clustering import cluster
from .matching import find_relevant_clusters

logger = logging.getLogger(__name__)


def _embedding_config(
    config: ClusterMatchConfig,
    embeddings: Optional[Dict[str, List[float]]],
) -> ClusterMatchConfig:
    """Config whose embedding_dimensions matches the supplied vectors, if any."""
    if not embeddings:
        return config
    dim = len(next(iter(embeddings.values())))
    if dim < 1 or dim == config.embedding_dimensions:
        return config
    logger.debug(
        "[embedding] GENERATED_DIM_FROM_SUPPLIED supplied_dim=%s config_dim=%s",
        dim, config.embedding_dimensions,
    )
    return config.model_copy(update={"embedding_dimensions": dim})


def _collect_embeddings(
    entities: List[Entity],
    embeddings: Optional[Dict[str, List[float]]],
    generator: EmbeddingGenerator,
) -> List[List[float]]:
    """Supplied embedding per entity id when present, generated otherwise."""
    supplied = embeddings or {}
    vectors = []
    generated = 0
    for entity in entities:
        vector = supplied.get(entity.id)
        if vector is None:
            vector = generator.generate_for_entity(entity)
            generated += 1
        vectors.append(list(vector))
    if supplied and generated:
        logger.info(
            "[embedding] EMBEDDINGS_GENERATED_FOR_MISSING generated=%s total=%s",
            generated, len(entities),
        )
    return vectors


def create_cluster_matches(
    entities: Sequence[Union[str, Dict[str, Any], Entity]],
    user_embedding: Optional[Sequence[float]] = None,
    user_profile: Optional[Union[Dict[str, Any], UserProfile]] = None,
    context: Optional[Union[Dict[str, Any], RecommendationContext]] = None,
    config: Optional[ClusterMatchConfig] = None,
    embeddings: Optional[Dict[str, List[float]]] = None,
    embedder: Optional[TextEmbedder] = None,
) -> Tuple[List[ClusterMatch], ClusteringResult]:
    """
    Embed → cluster → match.

    embeddings: optional precomputed vectors by entity id; entities without
    one are embedded from their text, tags, and engagement at the dimension
    of the supplied vectors.

    Returns:
        matches: ClusterMatch list, most relevant first
        clustering: the ClusteringResult the matches were scored against
    """
    config = resolve_config(config)
    entities_typed = ensure_entities(entities)

    generator = EmbeddingGenerator(_embedding_config(config, embeddings), embedder=embedder)
    vectors = _collect_embeddings(entities_typed, embeddings, generator)

    clustering = cluster(vectors, entities_typed, config=config)
    matches = find_relevant_clusters(
        clustering.clusters,
        user_embedding=user_embedding,
        user_profile=user_profile,
        context=context,
        config=config,
    )
    return matches, clustering
