from __future__ import annotations

from bingo_lines.core.sampling import (
    draw_card_numbers,
    selection_weights,
    weighted_choice,
)
from bingo_lines.rng import create_rng


class FixedRandom:
    engine = "fixed"

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value

    def shuffle(self, arr):
        pass


def test_weights_follow_target_offset_and_floor():
    numbers = [1, 2, 3, 4]
    counts = {1: 0, 2: 8, 3: 30, 4: 1}
    weights = selection_weights(numbers, counts, chosen={4}, target=8)
    assert weights == [18.0, 10.0, 0.1, 0.0]


def test_weighted_choice_scans_cumulative_weights():
    numbers = [10, 20, 30]
    weights = [1.0, 2.0, 1.0]
    assert weighted_choice(numbers, weights, FixedRandom(0.0)) == 10
    assert weighted_choice(numbers, weights, FixedRandom(0.25)) == 10
    assert weighted_choice(numbers, weights, FixedRandom(0.5)) == 20
    assert weighted_choice(numbers, weights, FixedRandom(0.99)) == 30


def test_weighted_choice_never_returns_zero_weight():
    numbers = [1, 2, 3]
    weights = [0.0, 5.0, 0.0]
    for v in (0.0, 0.5, 0.999999):
        assert weighted_choice(numbers, weights, FixedRandom(v)) == 2


def test_weighted_choice_degenerate_total_is_none():
    assert weighted_choice([1, 2], [0.0, 0.0], FixedRandom(0.5)) is None


def test_draw_is_distinct_and_sized():
    numbers = list(range(1, 21))
    counts = {x: 0 for x in numbers}
    rng = create_rng("py_random", 99)
    picked = draw_card_numbers(numbers, counts, target=8, rng=rng, size=16)
    assert picked is not None
    assert len(picked) == 16
    assert len(set(picked)) == 16


def test_draw_prefers_under_represented_numbers():
    numbers = list(range(1, 41))
    # 1..20 never placed, 21..40 far above target: weights 18 vs 0.1
    counts = {x: (0 if x <= 20 else 20) for x in numbers}
    heavy = 0
    for seed in range(20):
        rng = create_rng("py_random", seed)
        picked = draw_card_numbers(numbers, counts, target=8, rng=rng, size=16)
        assert picked is not None
        heavy += sum(1 for x in picked if x > 20)
    assert heavy / (20 * 16) < 0.1
