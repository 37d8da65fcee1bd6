"""Embedding strategy and generator."""

from .embedding_strategy import (
    EMBEDDING_DIMENSIONS,
    EMBEDDING_MODEL,
    STRATEGY_VERSION,
    HashTrigEmbedder,
    TextEmbedder,
    get_embed_text,
    get_tags_text,
    string_hash,
)
from .generator import EmbeddingGenerator, generate_embedding

__all__ = [
    "EMBEDDING_DIMENSIONS",
    "EMBEDDING_MODEL",
    "STRATEGY_VERSION",
    "EmbeddingGenerator",
    "HashTrigEmbedder",
    "TextEmbedder",
    "generate_embedding",
    "get_embed_text",
    "get_tags_text",
    "string_hash",
]
