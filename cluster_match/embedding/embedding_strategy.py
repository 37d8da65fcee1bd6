"""
Embedding Strategy for the cluster matching pipeline

This module defines HOW text becomes a vector. Changes to this module change
every embedding it produces (bump STRATEGY_VERSION).

The default strategy is a deterministic hash-and-trig construction:
    seed = string_hash(text)            (32-bit rolling hash scaled to [0, 1])
    v[i] = sin(seed * (i + 1))          for i in range(dimensions)
    v    = v / |v|

No model is loaded. Anything with an `embed(text) -> List[float]` method can
replace it (see TextEmbedder) without touching clustering or matching.
"""

import math
from typing import List, Protocol, Sequence

from ..utils.vectors import normalize_l2

# Metadata for cache validation
# IMPORTANT: Bump this version when the embedding logic changes!
STRATEGY_VERSION = "1.0"

EMBEDDING_MODEL = "hash-trig"
EMBEDDING_DIMENSIONS = 128

_INT32_MAX = 2147483647


class TextEmbedder(Protocol):
    """Anything that maps a string to a fixed-length vector."""

    def embed(self, text: str) -> List[float]:
        ...


def string_hash(text: str) -> float:
    """
    Deterministic seed in [0, 1] for a string.

    h = h * 31 + unit over the UTF-16 code units of text, wrapped to a
    signed 32-bit integer, then abs(h) / (2**31 - 1). Characters outside the
    BMP contribute their two surrogate units. The empty string hashes to 0.
    """
    data = text.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h) / _INT32_MAX


class HashTrigEmbedder:
    """Reproducible pseudo-random embeddings without an external model."""

    def __init__(self, dimensions: int = EMBEDDING_DIMENSIONS):
        if dimensions < 1:
            raise ValueError(f"dimensions must be >= 1, got {dimensions}")
        self.dimensions = dimensions

    def embed(self, text: str) -> List[float]:
        seed = string_hash(text)
        vector = [math.sin(seed * (i + 1)) for i in range(self.dimensions)]
        return normalize_l2(vector)


def get_embed_text(text_content: str) -> str:
    """Text fed to the embedder for the main content; blank text becomes ''."""
    return (text_content or "").strip()


def get_tags_text(tags: Sequence[str]) -> str:
    """Tags are embedded together as one space-joined string."""
    return " ".join(t.strip() for t in tags if t and t.strip())
