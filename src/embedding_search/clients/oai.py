"""Embedding generator backed by the OpenAI embeddings API"""
from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np
from openai import AsyncOpenAI

from embedding_search.config import embeddings as emb_config
from embedding_search.errors import DimensionMismatchError
from embedding_search.vector import Embedding, TextEmbeddingGenerator

logger = logging.getLogger(__name__)


class OpenAIEmbeddingGenerator(TextEmbeddingGenerator):
    """
    Turn text into :class:`Embedding` values with ``AsyncOpenAI``.

    Model and expected dimension default to ``EMB_MODEL_ID`` / ``EMB_DIM``.
    Empty strings are not sent to the API; they map to a zero vector.
    """

    def __init__(
        self,
        client: AsyncOpenAI | None = None,
        model: str | None = None,
        dimension: int | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(api_key=emb_config.OPENAI_API_KEY)
        self.model = model or emb_config.EMB_MODEL_ID
        self.dimension = dimension or emb_config.EMB_DIM

    async def create_embedding(self, text: str) -> Embedding:
        if not text:
            return Embedding(np.zeros(self.dimension, dtype=np.float32))

        resp = await self._client.embeddings.create(model=self.model, input=text)
        return self._to_embedding(resp.data[0].embedding)

    async def create_embeddings(self, texts: Sequence[str]) -> List[Embedding]:
        """Embed ``texts`` with a single API request, preserving order."""
        results: List[Embedding | None] = [None] * len(texts)
        pending = []
        for i, text in enumerate(texts):
            if text:
                pending.append((i, text))
            else:
                results[i] = Embedding(np.zeros(self.dimension, dtype=np.float32))

        if pending:
            resp = await self._client.embeddings.create(
                model=self.model,
                input=[text for _, text in pending],
            )
            # The API tags each row with its input position.
            for row in sorted(resp.data, key=lambda d: d.index):
                results[pending[row.index][0]] = self._to_embedding(row.embedding)

        logger.debug("Embedded %d texts with %s", len(pending), self.model)
        return results  # type: ignore[return-value]

    def _to_embedding(self, raw: Sequence[float]) -> Embedding:
        vec = np.asarray(raw, dtype=np.float32)
        if vec.size != self.dimension:
            raise DimensionMismatchError(
                f"Unexpected embedding size {vec.size} != {self.dimension} for model {self.model}"
            )
        return Embedding(vec)


__all__ = ["OpenAIEmbeddingGenerator"]
