from __future__ import annotations

from typing import Dict, Iterable

CELLS_PER_CARD = 16


def population_variance(counts: Iterable[int]) -> float:
    values = list(counts)
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum((c - mean) ** 2 for c in values) / len(values)


def range_size(min_num: int, max_num: int) -> int:
    return max_num - min_num + 1


def target_per_number(*, num_cards: int, min_num: int, max_num: int) -> int:
    """Ideal placements per number, rounded down: floor(16 * cards / range)."""
    size = range_size(min_num, max_num)
    if size <= 0:
        raise ValueError("max_num must be >= min_num")
    return (CELLS_PER_CARD * num_cards) // size


def build_ideal_frequencies(*, num_cards: int, min_num: int, max_num: int) -> Dict[int, int]:
    """Near-uniform per-number counts for the whole card set.

    Counts differ by at most 1; the first ``remainder`` numbers of the range
    get the extra placement.
    """
    size = range_size(min_num, max_num)
    total = CELLS_PER_CARD * num_cards
    base = total // size
    remainder = total % size
    return {
        x: base + (1 if idx < remainder else 0)
        for idx, x in enumerate(range(min_num, max_num + 1))
    }
