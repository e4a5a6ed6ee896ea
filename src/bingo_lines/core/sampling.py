"""Weighted draw of card numbers biased toward under-represented values."""

from __future__ import annotations

from typing import Collection, List, Mapping, Optional, Sequence

from ..rng import RandomSource

MIN_WEIGHT = 0.1
WEIGHT_OFFSET = 10.0


def selection_weights(
    numbers: Sequence[int],
    counts: Mapping[int, int],
    chosen: Collection[int],
    target: int,
) -> List[float]:
    """Weight per candidate: 0 if already on the card, else max(0.1, target - count + 10)."""
    weights: List[float] = []
    for x in numbers:
        if x in chosen:
            weights.append(0.0)
        else:
            weights.append(max(MIN_WEIGHT, (target - counts[x]) + WEIGHT_OFFSET))
    return weights


def weighted_choice(
    numbers: Sequence[int], weights: Sequence[float], rng: RandomSource
) -> Optional[int]:
    """Cumulative-weight scan against ``random() * total``.

    Returns None when the total weight is not positive.
    """
    total = sum(weights)
    if total <= 0.0:
        return None
    threshold = rng.random() * total
    last_positive: Optional[int] = None
    for x, w in zip(numbers, weights):
        if w <= 0.0:
            continue
        threshold -= w
        last_positive = x
        if threshold <= 0.0:
            return x
    # float rounding left a sliver of the threshold over
    return last_positive


def draw_card_numbers(
    numbers: Sequence[int],
    counts: Mapping[int, int],
    target: int,
    rng: RandomSource,
    size: int,
) -> Optional[List[int]]:
    """Draw ``size`` distinct numbers; None if the weighting degenerates."""
    selected: List[int] = []
    chosen: set[int] = set()
    while len(selected) < size:
        weights = selection_weights(numbers, counts, chosen, target)
        pick = weighted_choice(numbers, weights, rng)
        if pick is None:
            return None
        selected.append(pick)
        chosen.add(pick)
    return selected
