import math
import random

import pytest

from embedding_search.errors import (
    CollectionSortedError,
    EmptyCollectionError,
    InvalidArgumentError,
)
from embedding_search.vector import ScoredValue, TopNCollection


def _assert_heap(col: TopNCollection):
    scores = [sv.score for sv in col]
    n = len(scores)
    for i in range(1, n + 1):
        for child in (2 * i, 2 * i + 1):
            if child <= n:
                assert scores[i - 1] <= scores[child - 1]


def _membership(col: TopNCollection):
    return {sv.value: sv.score for sv in col}


@pytest.mark.parametrize("bad", [0, -3, 1.5, True, None])
def test_capacity_must_be_positive_int(bad):
    with pytest.raises(InvalidArgumentError):
        TopNCollection(bad)


def test_empty_collection():
    col = TopNCollection(3)
    assert col.count == 0
    assert len(col) == 0
    assert col.top is None
    assert list(col) == []
    with pytest.raises(EmptyCollectionError):
        col.remove_top()
    with pytest.raises(EmptyCollectionError):
        col.sort_descending()
    with pytest.raises(IndexError):
        col.get(0)


def test_scenario_capacity_three():
    col = TopNCollection(3)
    for value, score in [("A", 0.1), ("B", 0.5), ("C", 0.3), ("D", 0.9), ("E", 0.2)]:
        col.add(value, score)
    assert col.count == 3
    assert _membership(col) == {"B": 0.5, "C": 0.3, "D": 0.9}
    assert col.top == ScoredValue("C", 0.3)

    col.sort_descending()
    assert [(sv.value, sv.score) for sv in col] == [("D", 0.9), ("B", 0.5), ("C", 0.3)]
    assert col.count == 3
    assert col.is_sorted


def test_heap_invariant_after_random_adds():
    rng = random.Random(1234)
    for capacity in (1, 2, 5, 16):
        col = TopNCollection(capacity)
        for i in range(200):
            col.add(i, rng.random())
            _assert_heap(col)
            assert col.count <= capacity


def test_bounded_retention_with_increasing_scores():
    col = TopNCollection(4)
    for i in range(10):
        col.add(f"v{i}", float(i))
    assert col.count == 4
    assert sorted(sv.score for sv in col) == [6.0, 7.0, 8.0, 9.0]


def test_capacity_one_keeps_global_max():
    col = TopNCollection(1)
    for value, score in [("a", 0.2), ("b", 0.7), ("c", 0.1), ("d", 0.6)]:
        col.add(value, score)
    assert col.count == 1
    assert col.top == ScoredValue("b", 0.7)


def test_equal_score_at_capacity_is_rejected():
    col = TopNCollection(2)
    col.add("first", 0.4)
    col.add("second", 0.8)
    col.add("tie", 0.4)
    assert _membership(col) == {"first": 0.4, "second": 0.8}


def test_identical_scores_keep_earliest():
    col = TopNCollection(3)
    for value in "abcdef":
        col.add(value, 0.5)
    assert set(_membership(col)) == {"a", "b", "c"}


def test_fewer_candidates_than_capacity():
    col = TopNCollection(10)
    col.add("x", 0.3)
    col.add("y", 0.9)
    col.add("z", 0.1)
    assert col.count == 3
    col.sort_descending()
    assert [sv.value for sv in col] == ["y", "x", "z"]
    assert col.get(0).score == 0.9
    with pytest.raises(IndexError):
        col.get(3)


def test_sort_descending_preserves_multiset():
    rng = random.Random(99)
    col = TopNCollection(25)
    for i in range(60):
        col.add(i, round(rng.uniform(-1, 1), 3))
    before = sorted((sv.value, sv.score) for sv in col)
    col.sort_descending()
    ranked = col.to_list()
    for i in range(len(ranked) - 1):
        assert ranked[i].score >= ranked[i + 1].score
    assert sorted((sv.value, sv.score) for sv in ranked) == before


def test_sort_descending_twice_is_noop():
    col = TopNCollection(3)
    for value, score in [("a", 0.1), ("b", 0.3), ("c", 0.2)]:
        col.add(value, score)
    col.sort_descending()
    first = [sv.value for sv in col]
    col.sort_descending()
    assert [sv.value for sv in col] == first


def test_add_after_sort_requires_restore():
    col = TopNCollection(3)
    for value, score in [("a", 0.1), ("b", 0.3), ("c", 0.2)]:
        col.add(value, score)
    col.sort_descending()
    with pytest.raises(CollectionSortedError):
        col.add("d", 0.5)

    col.restore_heap()
    assert not col.is_sorted
    _assert_heap(col)
    col.add("d", 0.5)
    assert _membership(col) == {"b": 0.3, "c": 0.2, "d": 0.5}
    _assert_heap(col)


def test_remove_top_returns_minimum():
    col = TopNCollection(5)
    for value, score in [("a", 0.5), ("b", -0.2), ("c", 0.9)]:
        col.add(value, score)
    assert col.remove_top() == ScoredValue("b", -0.2)
    assert col.count == 2
    assert col.remove_top().value == "a"
    assert col.remove_top().value == "c"
    with pytest.raises(EmptyCollectionError):
        col.remove_top()


def test_clear_resets_and_allows_reuse():
    col = TopNCollection(2)
    col.add("a", 0.1)
    col.add("b", 0.2)
    col.sort_descending()
    col.clear()
    assert col.count == 0
    assert col.max_count == 2
    assert not col.is_sorted
    col.add("c", 0.7)
    assert col.top == ScoredValue("c", 0.7)


def test_accepts_negative_infinity_scores():
    col = TopNCollection(2)
    col.add("a", -math.inf)
    col.add("b", 0.0)
    assert col.top.value == "a"


def test_remove_top_after_sort_requires_restore():
    col = TopNCollection(3)
    for value, score in [("A", 0.1), ("B", 0.5), ("C", 0.3), ("D", 0.9), ("E", 0.2)]:
        col.add(value, score)
    col.sort_descending()
    with pytest.raises(CollectionSortedError):
        col.remove_top()
    assert [sv.value for sv in col] == ["D", "B", "C"]

    col.restore_heap()
    assert col.remove_top() == ScoredValue("C", 0.3)


def test_nan_score_is_rejected():
    col = TopNCollection(3)
    for value, score in [("a", 0.5), ("b", 0.6), ("c", 0.7)]:
        col.add(value, score)
    with pytest.raises(InvalidArgumentError):
        col.add("n", math.nan)
    for value, score in [("d", 0.8), ("e", 0.9)]:
        col.add(value, score)
    assert _membership(col) == {"c": 0.7, "d": 0.8, "e": 0.9}
    _assert_heap(col)


def test_nan_score_rejected_below_capacity():
    col = TopNCollection(3)
    with pytest.raises(InvalidArgumentError):
        col.add("n", float("nan"))
    assert col.count == 0


def test_evicted_slot_object_is_reused():
    col = TopNCollection(1)
    col.add("a", 0.1)
    held = col.top
    col.add("b", 0.2)
    assert held is col.top
    assert held == ScoredValue("b", 0.2)
