"""
Numeric kernels over 1-D float32 vectors.

Every function here is stateless. Binary operations validate that both
operands have the same length and raise
:class:`~embedding_search.errors.DimensionMismatchError` otherwise; nothing is
ever truncated to the shorter operand.
"""

from __future__ import annotations

import numpy as np

from embedding_search.errors import DimensionMismatchError


def check_dimensions(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatchError(f"Vector length {a.shape[0]} != {b.shape[0]}")


def euclidean_length(v: np.ndarray) -> float:
    return float(np.sqrt(np.dot(v, v)))


def dot_product(a: np.ndarray, b: np.ndarray) -> float:
    check_dimensions(a, b)
    return float(np.dot(a, b))


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """
    Return the cosine of the angle between ``a`` and ``b``.

    Zero-length operands have no direction, so the similarity is ``0.0``.
    """
    check_dimensions(a, b)
    length_a = euclidean_length(a)
    length_b = euclidean_length(b)
    if length_a == 0 or length_b == 0:
        return 0.0
    return float(np.dot(a, b)) / (length_a * length_b)


def normalize(v: np.ndarray) -> float:
    """
    Scale ``v`` in place to unit length.

    :returns: The length of ``v`` before scaling. A zero vector is left as is
        and ``0.0`` is returned.
    """
    length = euclidean_length(v)
    if length == 0:
        return 0.0
    v *= np.float32(1.0 / length)
    return length


__all__ = [
    "check_dimensions",
    "euclidean_length",
    "dot_product",
    "cosine_similarity",
    "normalize",
]
