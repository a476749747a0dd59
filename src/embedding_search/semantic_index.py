"""
Text-level search facade.

Pairs a :class:`~embedding_search.vector.TextEmbeddingGenerator` with a
:class:`~embedding_search.vector.VectorizedList` so callers can index and query
plain strings. Only the generator is awaited; the scan itself is synchronous.
"""

from __future__ import annotations

import logging
from typing import Generic, Iterable, List, Optional, Tuple, TypeVar

import numpy as np

from embedding_search.config import search as search_config
from embedding_search.vector import (
    Embedding,
    ScoredValue,
    TextEmbeddingGenerator,
    VectorizedList,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SemanticIndex(Generic[T]):
    def __init__(
        self,
        generator: TextEmbeddingGenerator,
        top_n: int | None = None,
        min_score: float | None = None,
    ) -> None:
        self.generator = generator
        self.top_n = top_n if top_n is not None else search_config.DEFAULT_TOP_N
        self.min_score = min_score if min_score is not None else search_config.MIN_SCORE
        self.vectors: VectorizedList[T] = VectorizedList()

    def __len__(self) -> int:
        return len(self.vectors)

    async def add_text(self, item: T, text: str) -> Embedding:
        """Embed ``text`` and store it under ``item``. Returns the stored embedding."""
        embedding = await self.generator.create_embedding(text)
        self.vectors.add(item, embedding)
        return embedding

    async def add_texts(self, pairs: Iterable[Tuple[T, str]]) -> None:
        """Embed all texts in one generator call, then store them in order."""
        pairs = list(pairs)
        if not pairs:
            return
        embeddings = await self.generator.create_embeddings([text for _, text in pairs])
        # strict: a short batch must not leave a partially indexed list
        for (item, _), embedding in list(zip(pairs, embeddings, strict=True)):
            self.vectors.add(item, embedding)
        logger.info("Indexed %d texts (total=%d)", len(pairs), len(self.vectors))

    async def search_text(
        self,
        query: str,
        top_n: int | None = None,
        min_score: float | None = None,
    ) -> List[ScoredValue[T]]:
        """Return the best matches for ``query``, highest score first."""
        qvec = await self._embed_query(query)
        if qvec is None:
            return []

        results = self.vectors.ranked(
            qvec,
            top_n if top_n is not None else self.top_n,
            min_score if min_score is not None else self.min_score,
        )
        if not results:
            logger.info("Search returned no results (items=%d)", len(self.vectors))
        return results

    async def nearest_text(self, query: str) -> Optional[T]:
        qvec = await self._embed_query(query)
        if qvec is None:
            return None
        return self.vectors.nearest(qvec)

    async def _embed_query(self, query: str) -> Embedding | None:
        qvec = await self.generator.create_embedding(query)
        # A zero vector has no direction and would score 0.0 against everything.
        if not np.any(qvec.vector):
            logger.info("Empty/degenerate query embedding; skipping search")
            return None
        return qvec


__all__ = ["SemanticIndex"]
