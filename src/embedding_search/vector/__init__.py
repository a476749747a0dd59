"""Vector search core.

Embedding values, the bounded top-N accumulator and the in-memory
:class:`VectorizedList` store that ties them together.
"""

from .embedding import Embedding
from .generator import TextEmbeddingGenerator
from .top_n import ScoredValue, TopNCollection
from .vectorized_list import VectorizedList

__all__ = [
    "Embedding",
    "ScoredValue",
    "TextEmbeddingGenerator",
    "TopNCollection",
    "VectorizedList",
]
