"""
Embedding value type
====================

An :class:`Embedding` owns a fixed-length float32 buffer plus one mutable
``is_normalized`` flag. The buffer is kept read-only; :meth:`Embedding.normalize`
is the only operation that writes to it, and once the flag is set the vector
has unit length.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from embedding_search.errors import InvalidArgumentError
from . import vector_math

logger = logging.getLogger(__name__)


class Embedding:
    __slots__ = ("_vector", "_normalized")

    def __init__(self, vector: Iterable[float] | np.ndarray) -> None:
        try:
            data = np.array(vector, dtype=np.float32)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"embedding must be numeric: {exc}") from exc
        if data.ndim != 1 or data.size == 0:
            raise InvalidArgumentError(
                f"embedding must be a non-empty 1-D sequence, got shape {data.shape}"
            )
        if not np.all(np.isfinite(data)):
            raise InvalidArgumentError("embedding components must be finite")
        data.flags.writeable = False
        self._vector = data
        self._normalized = False

    @classmethod
    def from_bytes(cls, blob: bytes) -> "Embedding":
        """Deserialize raw float32 bytes into an (unnormalized) embedding."""
        return cls(np.frombuffer(blob, dtype=np.float32))

    @property
    def is_normalized(self) -> bool:
        return self._normalized

    @property
    def dimension(self) -> int:
        return self._vector.shape[0]

    @property
    def vector(self) -> np.ndarray:
        """Read-only view of the components."""
        return self._vector

    def __len__(self) -> int:
        return self._vector.shape[0]

    def __getitem__(self, index):
        return self._vector[index]

    def __repr__(self) -> str:
        return f"Embedding(dimension={self.dimension}, normalized={self._normalized})"

    def to_list(self) -> list[float]:
        return self._vector.tolist()

    def to_bytes(self) -> bytes:
        return self._vector.tobytes()

    def copy(self) -> "Embedding":
        """Return an independent embedding with the same components and flag."""
        clone = Embedding(self._vector)
        clone._normalized = self._normalized
        return clone

    def euclidean_length(self) -> float:
        if self._normalized:
            return 1.0
        return vector_math.euclidean_length(self._vector)

    def dot_product(self, other: "Embedding") -> float:
        return vector_math.dot_product(self._vector, other._vector)

    def cosine_similarity(self, other: "Embedding") -> float:
        # Two unit vectors: cosine reduces to the dot product.
        if self._normalized and other._normalized:
            return vector_math.dot_product(self._vector, other._vector)
        return vector_math.cosine_similarity(self._vector, other._vector)

    def normalize(self) -> None:
        """
        Scale to unit length in place. Idempotent.

        A zero vector has no direction; it is left unchanged and stays
        unnormalized.
        """
        if self._normalized:
            return
        self._vector.flags.writeable = True
        try:
            length = vector_math.normalize(self._vector)
        finally:
            self._vector.flags.writeable = False
        if length == 0:
            logger.debug("Skipping normalization of zero vector (dimension=%d)", self.dimension)
            return
        self._normalized = True


__all__ = ["Embedding"]
