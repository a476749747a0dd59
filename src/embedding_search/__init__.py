"""In-memory vector similarity search."""

from .errors import (
    CollectionSortedError,
    DimensionMismatchError,
    EmbeddingSearchError,
    EmptyCollectionError,
    InvalidArgumentError,
)
from .vector import (
    Embedding,
    ScoredValue,
    TextEmbeddingGenerator,
    TopNCollection,
    VectorizedList,
)

__all__ = [
    "CollectionSortedError",
    "DimensionMismatchError",
    "Embedding",
    "EmbeddingSearchError",
    "EmptyCollectionError",
    "InvalidArgumentError",
    "ScoredValue",
    "TextEmbeddingGenerator",
    "TopNCollection",
    "VectorizedList",
]
