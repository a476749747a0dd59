"""Exception types raised by the search core."""


class EmbeddingSearchError(Exception):
    """Base class for all library errors."""

    pass


class InvalidArgumentError(EmbeddingSearchError, ValueError):
    """Raised when a caller passes an argument that violates a precondition."""

    pass


class EmptyCollectionError(EmbeddingSearchError, LookupError):
    """Raised when removing from or sorting an empty :class:`TopNCollection`."""

    pass


class DimensionMismatchError(EmbeddingSearchError, ValueError):
    """Raised when two vectors of different lengths are combined."""

    pass


class CollectionSortedError(EmbeddingSearchError, RuntimeError):
    """Raised when adding to a collection that is no longer heap ordered."""

    pass


__all__ = [
    "EmbeddingSearchError",
    "InvalidArgumentError",
    "EmptyCollectionError",
    "DimensionMismatchError",
    "CollectionSortedError",
]
