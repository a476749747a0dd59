"""
Bounded top-N selection.

:class:`TopNCollection` keeps the ``max_count`` highest scoring
``(value, score)`` pairs seen across a stream of candidates. Storage is a
binary min-heap in a plain list, 1-indexed: slot 0 holds a permanent sentinel
scored ``-inf`` and the occupied slots are ``[1, count]``. The lowest retained
score always sits at slot 1, so deciding whether a new candidate gets in is a
single comparison and admitting it costs O(log max_count).

:meth:`TopNCollection.sort_descending` heap-sorts the storage in place. After
it runs the collection is a ranked sequence, not a heap, and :meth:`add` raises
:class:`~embedding_search.errors.CollectionSortedError` until
:meth:`restore_heap` or :meth:`clear` is called.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Iterator, List, Optional, TypeVar

from embedding_search.errors import (
    CollectionSortedError,
    EmptyCollectionError,
    InvalidArgumentError,
)

T = TypeVar("T")


@dataclass(slots=True)
class ScoredValue(Generic[T]):
    """A payload together with its similarity score."""

    value: Optional[T]
    score: float


class TopNCollection(Generic[T]):
    def __init__(self, max_count: int) -> None:
        if isinstance(max_count, bool) or not isinstance(max_count, int) or max_count <= 0:
            raise InvalidArgumentError(f"max_count must be a positive integer, got {max_count!r}")
        self._max_count = max_count
        self._count = 0
        self._sorted = False
        self._items: List[ScoredValue[T]] = [ScoredValue(None, -math.inf)]

    @property
    def max_count(self) -> int:
        return self._max_count

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_sorted(self) -> bool:
        return self._sorted

    @property
    def top(self) -> Optional[ScoredValue[T]]:
        """Lowest scoring retained pair while heap ordered, ``None`` when empty."""
        if self._count == 0:
            return None
        return self._items[1]

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[ScoredValue[T]]:
        for i in range(1, self._count + 1):
            yield self._items[i]

    def __repr__(self) -> str:
        return f"TopNCollection(count={self._count}, max_count={self._max_count}, sorted={self._sorted})"

    def get(self, index: int) -> ScoredValue[T]:
        """Return the pair at 0-based position ``index`` of the occupied slots."""
        if index < 0 or index >= self._count:
            raise IndexError(f"index {index} out of range for {self._count} items")
        return self._items[index + 1]

    def to_list(self) -> List[ScoredValue[T]]:
        return self._items[1 : self._count + 1]

    def add(self, value: T, score: float) -> None:
        """
        Offer a candidate.

        Once full, a candidate must beat the current minimum strictly; equal
        scores are rejected so earlier candidates win ties. NaN scores raise
        :class:`~embedding_search.errors.InvalidArgumentError`.

        Admitting a candidate at capacity reuses the evicted :class:`ScoredValue`
        object, so references previously taken from :attr:`top`, :meth:`get` or
        :meth:`to_list` may change in place.
        """
        if self._sorted:
            raise CollectionSortedError("collection is sorted; call restore_heap() before add()")
        if math.isnan(score):
            raise InvalidArgumentError("score must not be NaN")

        if self._count == self._max_count:
            if score <= self._items[1].score:
                return
            # Reuse the evicted slot object for the newcomer.
            scored = self.remove_top()
            scored.value = value
            scored.score = score
            self._count += 1
            self._items[self._count] = scored
        else:
            self._count += 1
            scored = ScoredValue(value, score)
            if self._count < len(self._items):
                self._items[self._count] = scored
            else:
                self._items.append(scored)
        self._up_heap(self._count)

    def remove_top(self) -> ScoredValue[T]:
        """Remove and return the lowest scoring pair. Requires heap order."""
        if self._sorted:
            raise CollectionSortedError("collection is sorted; call restore_heap() before remove_top()")
        if self._count == 0:
            raise EmptyCollectionError("Empty queue")
        item = self._items[1]
        self._items[1] = self._items[self._count]
        self._count -= 1
        self._down_heap(1)
        return item

    def sort_descending(self) -> None:
        """Heap-sort in place into descending score order."""
        if self._sorted:
            return
        if self._count == 0:
            raise EmptyCollectionError("Empty queue")
        count = self._count
        i = count
        while self._count > 0:
            # Each pass dequeues the current minimum and parks it at the back.
            self._items[i] = self.remove_top()
            i -= 1
        self._count = count
        self._sorted = True

    def restore_heap(self) -> None:
        """Re-establish heap order after :meth:`sort_descending`."""
        for i in range(self._count // 2, 0, -1):
            self._down_heap(i)
        self._sorted = False

    def clear(self) -> None:
        del self._items[1:]
        self._count = 0
        self._sorted = False

    def _up_heap(self, start_at: int) -> None:
        items = self._items
        i = start_at
        item = items[i]
        parent = i >> 1
        while parent > 0 and items[parent].score > item.score:
            items[i] = items[parent]
            i = parent
            parent = i >> 1
        items[i] = item

    def _down_heap(self, start_at: int) -> None:
        items = self._items
        i = start_at
        max_parent = self._count >> 1
        item = items[i]
        while i <= max_parent:
            child = i + i
            child_score = items[child].score
            if child < self._count and child_score > items[child + 1].score:
                child += 1
                child_score = items[child].score
            if item.score <= child_score:
                break
            items[i] = items[child]
            i = child
        items[i] = item


__all__ = ["ScoredValue", "TopNCollection"]
