"""Embedding provider protocol."""

from typing import Protocol, runtime_checkable

from ux_kb.errors import EmbeddingError


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Turns text into a fixed-length vector.

    Implementations raise ``EmbeddingError`` for any failure, including a
    vector of the wrong dimensionality. They never return a placeholder.
    """

    dimensions: int

    async def embed(self, text: str) -> list[float]:
        """Return the embedding vector for ``text``."""
        ...

    async def close(self) -> None:
        """Release any underlying resources."""
        ...


def check_dimensions(vector: object, expected: int) -> list[float]:
    """Validate a decoded embedding payload and return it as floats."""
    if not isinstance(vector, list) or not vector:
        raise EmbeddingError("embedding response did not contain a vector")
    if len(vector) != expected:
        raise EmbeddingError(f"expected {expected} dimensions, got {len(vector)}")
    try:
        floats = [float(v) for v in vector]
    except (TypeError, ValueError) as e:
        raise EmbeddingError(f"embedding contains non-numeric values: {e}") from e
    if not any(floats):
        raise EmbeddingError("embedding is an all-zero vector")
    return floats
