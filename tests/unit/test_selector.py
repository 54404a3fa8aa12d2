from __future__ import annotations

import random
from collections import Counter

from omikuji.services.selector import NO_SELECTION, DrawSelector, initial_index, next_index


def test_next_index_never_returns_excluded():
    rng = random.Random(1234)
    results = [next_index(5, 2, rng) for _ in range(1000)]
    assert 2 not in results
    assert all(0 <= r < 5 for r in results)


def test_next_index_covers_remaining_values_evenly():
    rng = random.Random(42)
    counts = Counter(next_index(5, 2, rng) for _ in range(8000))
    assert set(counts) == {0, 1, 3, 4}
    for value in (0, 1, 3, 4):
        # 期待値 2000
        assert 1700 < counts[value] < 2300


def test_next_index_single_element_returns_zero():
    for _ in range(20):
        assert next_index(1, 0) == 0


def test_next_index_empty_returns_zero():
    assert next_index(0, NO_SELECTION) == 0


def test_next_index_out_of_range_exclude():
    rng = random.Random(3)
    results = {next_index(3, NO_SELECTION, rng) for _ in range(200)}
    assert results == {0, 1, 2}


def test_next_index_two_elements_alternates():
    rng = random.Random(9)
    assert next_index(2, 0, rng) == 1
    assert next_index(2, 1, rng) == 0


def test_initial_index_empty():
    assert initial_index(0) == NO_SELECTION


def test_initial_index_in_range():
    rng = random.Random(5)
    assert {initial_index(3, rng) for _ in range(200)} == {0, 1, 2}


def test_draw_selector_seed_is_reproducible():
    a = DrawSelector(seed=11)
    b = DrawSelector(seed=11)
    seq_a = [a.first(10)] + [a.next(10, i) for i in range(5)]
    seq_b = [b.first(10)] + [b.next(10, i) for i in range(5)]
    assert seq_a == seq_b
