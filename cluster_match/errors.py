"""
Exception types for the cluster matching pipeline.

Only malformed input raises. Degenerate input (empty lists, zero vectors,
no clusters) has a defined fallback value instead, and nothing here is
worth retrying: every operation is pure and deterministic.
"""


class ClusterMatchError(Exception):
    """Base exception for all cluster matching errors."""

    pass


class DimensionMismatch(ClusterMatchError, ValueError):
    """
    Two vectors that must share a dimension do not.

    Raised by similarity computation and by clustering when the embeddings
    of one run have different lengths.
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Vector dimensions differ: {expected} vs {actual}")


class CardinalityMismatch(ClusterMatchError, ValueError):
    """
    Embeddings and entities passed to clustering differ in count.

    Raised before any distance is computed.
    """

    def __init__(self, embeddings: int, entities: int):
        self.embeddings = embeddings
        self.entities = entities
        super().__init__(
            f"Number of embeddings ({embeddings}) does not match number of entities ({entities})"
        )
