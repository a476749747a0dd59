"""
In-memory embedding store.

:class:`VectorizedList` keeps items and their embeddings in two parallel,
append-only lists. Every stored embedding is normalized on insertion so that
queries against normalized embeddings reduce to a dot product per row.

``add`` normalizes the caller's :class:`Embedding` object in place and keeps a
reference to it. Use :meth:`VectorizedList.add_copy` when the caller needs its
embedding left untouched.

The list is not thread-safe. Concurrent readers and writers need an external
reader/writer lock around the whole list.
"""

from __future__ import annotations

import logging
import math
from typing import Generic, Iterator, List, Optional, TypeVar

from embedding_search.errors import DimensionMismatchError, InvalidArgumentError
from .embedding import Embedding
from .top_n import ScoredValue, TopNCollection

logger = logging.getLogger(__name__)

T = TypeVar("T")


class VectorizedList(Generic[T]):
    def __init__(self) -> None:
        self._items: List[T] = []
        self._embeddings: List[Embedding] = []

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def dimension(self) -> Optional[int]:
        """Dimension fixed by the first insertion, ``None`` while empty."""
        if not self._embeddings:
            return None
        return self._embeddings[0].dimension

    def __len__(self) -> int:
        return len(self._items)

    def add(self, item: T, embedding: Embedding) -> None:
        """Normalize ``embedding`` in place and store it alongside ``item``."""
        self._check_insert(embedding)
        self._append(item, embedding)

    def add_copy(self, item: T, embedding: Embedding) -> None:
        """Like :meth:`add` but stores a normalized copy of ``embedding``."""
        self._check_insert(embedding)
        self._append(item, embedding.copy())

    def get(self, index: int) -> T:
        return self._items[index]

    def embedding(self, index: int) -> Embedding:
        return self._embeddings[index]

    def nearest(self, query: Embedding) -> Optional[T]:
        """Return the item most similar to ``query``, or ``None`` if empty."""
        match = self.nearest_match(query)
        if match is None:
            return None
        return match.value

    def nearest_match(self, query: Embedding) -> Optional[ScoredValue[T]]:
        """
        Linear scan for the best cosine score.

        Uses ``>=`` so that among equal best scores the most recently
        inserted item wins.
        """
        self._check_query(query)
        best_score = -math.inf
        best_index = -1
        for i, embedding in enumerate(self._embeddings):
            score = embedding.cosine_similarity(query)
            if score >= best_score:
                best_score = score
                best_index = i
        if best_index < 0:
            return None
        return ScoredValue(self._items[best_index], best_score)

    def similar(self, query: Embedding, min_score: float) -> Iterator[ScoredValue[T]]:
        """
        Lazily yield every stored item scoring at least ``min_score``.

        Results come in storage order. The contents are snapshotted when this
        method is called; each call returns a fresh single-pass iterator.
        """
        self._check_query(query)
        items = list(self._items)
        embeddings = list(self._embeddings)

        def _scan() -> Iterator[ScoredValue[T]]:
            for item, embedding in zip(items, embeddings):
                score = embedding.cosine_similarity(query)
                if score >= min_score:
                    yield ScoredValue(item, score)

        return _scan()

    def search(
        self,
        query: Embedding,
        matches: TopNCollection[T],
        min_score: float = -math.inf,
    ) -> TopNCollection[T]:
        """Feed every item scoring at least ``min_score`` into ``matches``."""
        self._check_query(query)
        for item, embedding in zip(self._items, self._embeddings):
            score = embedding.cosine_similarity(query)
            if score >= min_score:
                matches.add(item, score)
        return matches

    def search_top_n(
        self,
        query: Embedding,
        top_n_count: int,
        min_score: float = -math.inf,
    ) -> TopNCollection[T]:
        """
        Return the ``top_n_count`` best matches as a heap-ordered collection.

        Call :meth:`TopNCollection.sort_descending` on the result for ranked
        output.
        """
        matches: TopNCollection[T] = TopNCollection(top_n_count)
        return self.search(query, matches, min_score)

    def ranked(
        self,
        query: Embedding,
        top_n_count: int,
        min_score: float = -math.inf,
    ) -> List[ScoredValue[T]]:
        """Best matches, highest score first."""
        matches = self.search_top_n(query, top_n_count, min_score)
        if matches.count == 0:
            return []
        matches.sort_descending()
        return matches.to_list()

    def _append(self, item: T, embedding: Embedding) -> None:
        embedding.normalize()
        self._items.append(item)
        self._embeddings.append(embedding)

    def _check_insert(self, embedding: Embedding) -> None:
        if embedding is None:
            raise InvalidArgumentError("embedding is required")
        if not isinstance(embedding, Embedding):
            raise InvalidArgumentError(
                f"embedding must be an Embedding, got {type(embedding).__name__}"
            )
        dim = self.dimension
        if dim is not None and embedding.dimension != dim:
            logger.debug("Rejecting embedding of dimension %d (list dimension %d)", embedding.dimension, dim)
            raise DimensionMismatchError(
                f"embedding dimension {embedding.dimension} != list dimension {dim}"
            )

    def _check_query(self, query: Embedding) -> None:
        if query is None:
            raise InvalidArgumentError("query embedding is required")
        dim = self.dimension
        if dim is not None and query.dimension != dim:
            raise DimensionMismatchError(
                f"query dimension {query.dimension} != list dimension {dim}"
            )


__all__ = ["VectorizedList"]
