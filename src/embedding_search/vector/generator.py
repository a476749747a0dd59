"""
Text embedding collaborator.

The search core never calls out to a model itself; callers that hold text plug
in a :class:`TextEmbeddingGenerator` implementation (see
``embedding_search.clients.oai`` for the OpenAI-backed one).
"""

from __future__ import annotations

from typing import List, Sequence

from .embedding import Embedding


class TextEmbeddingGenerator:
    """Base class for providers that turn text into :class:`Embedding` values."""

    async def create_embedding(self, text: str) -> Embedding:
        raise NotImplementedError

    async def create_embeddings(self, texts: Sequence[str]) -> List[Embedding]:
        """Embed ``texts`` in order. Providers with a batch API should override."""

        return [await self.create_embedding(text) for text in texts]


__all__ = ["TextEmbeddingGenerator"]
