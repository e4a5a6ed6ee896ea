from __future__ import annotations

from hypothesis import given, strategies as st

from bingo_lines.layout import build_ideal_frequencies, population_variance, target_per_number


@given(
    lo=st.integers(min_value=-50, max_value=50),
    size=st.integers(min_value=16, max_value=90),
    cards=st.integers(min_value=0, max_value=200),
)
def test_ideal_frequencies_sum_and_bounds(lo, size, cards):
    hi = lo + size - 1
    freqs = build_ideal_frequencies(num_cards=cards, min_num=lo, max_num=hi)
    assert sorted(freqs) == list(range(lo, hi + 1))
    assert sum(freqs.values()) == 16 * cards
    values = list(freqs.values())
    assert max(values) - min(values) <= 1
    assert min(values) == target_per_number(num_cards=cards, min_num=lo, max_num=hi)


def test_target_rounds_down():
    assert target_per_number(num_cards=10, min_num=1, max_num=20) == 8
    assert target_per_number(num_cards=1, min_num=1, max_num=75) == 0
    assert target_per_number(num_cards=7, min_num=1, max_num=30) == 3


def test_population_variance():
    assert population_variance([]) == 0.0
    assert population_variance([4, 4, 4]) == 0.0
    assert population_variance([1, 3]) == 1.0
    assert population_variance([2, 4, 4, 4, 5, 5, 7, 9]) == 4.0
