from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Sequence

from .layout import build_ideal_frequencies, population_variance
from .lines import CARD_SIZE, line_keys_of_card, matrix_hash

Matrix = Sequence[Sequence[int]]


@dataclass
class LineReport:
    lines_checked: int
    distinct_lines: int
    line_collisions: int
    skipped_cards: int = 0


def compute_frequencies(cards: Sequence[Matrix], min_num: int, max_num: int) -> Dict[int, int]:
    counts: Counter[int] = Counter()
    for card in cards:
        for row in card:
            counts.update(row)
    # every number in range present, 0 if unused
    return {x: counts.get(x, 0) for x in range(min_num, max_num + 1)}


def count_line_collisions(cards: Sequence[Matrix]) -> LineReport:
    """Count repeated line keys across the whole set.

    A card with duplicate values can repeat a key within itself; that also
    counts as a collision. Cards that are not 4x4 have no winning lines and
    are skipped; ``check_shape`` reports them.
    """
    seen: Counter[str] = Counter()
    skipped = 0
    for card in cards:
        if not is_card_shape(card):
            skipped += 1
            continue
        seen.update(line_keys_of_card(card))
    collisions = sum(c - 1 for c in seen.values() if c > 1)
    return LineReport(
        lines_checked=sum(seen.values()),
        distinct_lines=len(seen),
        line_collisions=collisions,
        skipped_cards=skipped,
    )


def check_no_duplicates_within_cards(cards: Sequence[Matrix]) -> bool:
    for card in cards:
        seen = set()
        for row in card:
            for x in row:
                if x in seen:
                    return False
                seen.add(x)
    return True


def check_values_in_range(cards: Sequence[Matrix], min_num: int, max_num: int) -> bool:
    return all(min_num <= x <= max_num for card in cards for row in card for x in row)


def is_card_shape(card: Matrix) -> bool:
    return len(card) == CARD_SIZE and all(len(row) == CARD_SIZE for row in card)


def check_shape(cards: Sequence[Matrix]) -> bool:
    return all(is_card_shape(card) for card in cards)


def check_no_identical_cards(cards: Sequence[Matrix]) -> bool:
    seen = set()
    for card in cards:
        h = matrix_hash(card)
        if h in seen:
            return False
        seen.add(h)
    return True


def chi2_wilson_hilferty_pvalue(stat: float, df: int) -> float:
    if df <= 0:
        return 1.0
    # Wilson-Hilferty: cube root of chi2/df is close to normal
    t = (stat / df) ** (1.0 / 3.0)
    mu = 1.0 - 2.0 / (9.0 * df)
    sigma = math.sqrt(2.0 / (9.0 * df))
    z = (t - mu) / sigma

    def phi(val: float) -> float:
        return 0.5 * (1.0 + math.erf(val / math.sqrt(2.0)))

    p_right = 1.0 - phi(z)
    return max(0.0, min(1.0, p_right))


def uniformity_tests(freqs: Dict[int, int], alpha: float = 0.05) -> Dict[str, object]:
    R = len(freqs)
    P = sum(freqs.values())
    if P == 0 or R == 0:
        return {"chi2": {"stat": 0.0, "df": 0, "p_value": 1.0}, "alpha": alpha}
    expected = P / R
    stat = sum((count - expected) ** 2 / expected for count in freqs.values())
    df = max(R - 1, 1)
    p = chi2_wilson_hilferty_pvalue(stat, df)
    return {
        "chi2": {"stat": round(stat, 6), "df": df, "p_value": round(p, 6)},
        "alpha": alpha,
        "engine": "wilson_hilferty",
    }


def verify(cards: Sequence[Matrix], *, min_num: int, max_num: int) -> Dict[str, object]:
    freqs = compute_frequencies(cards, min_num, max_num)
    ideal = build_ideal_frequencies(num_cards=len(cards), min_num=min_num, max_num=max_num)
    # ideal counts are a multiset; compare sorted so the choice of which
    # numbers get the extra placement does not matter
    deviation = sum(
        abs(a - b) for a, b in zip(sorted(freqs.values()), sorted(ideal.values()))
    )
    lines = count_line_collisions(cards)
    ok_shape = check_shape(cards)
    ok_no_dupes = check_no_duplicates_within_cards(cards)
    ok_in_range = check_values_in_range(cards, min_num, max_num)
    ok_no_identicals = check_no_identical_cards(cards)
    values = list(freqs.values())
    return {
        "num_cards": len(cards),
        "frequencies": freqs,
        "lines": {
            "lines_checked": lines.lines_checked,
            "distinct_lines": lines.distinct_lines,
            "line_collisions": lines.line_collisions,
            "skipped_cards": lines.skipped_cards,
            "line_representation": "sorted_csv",
        },
        "uniformity": {
            "total_placements": sum(values),
            "variance": round(population_variance(values), 6),
            "max_minus_min": (max(values) - min(values)) if values else 0,
            "deviation_from_ideal": deviation,
        },
        "tests": {"global": uniformity_tests(freqs)},
        "ok_shape": ok_shape,
        "ok_no_duplicates_within_cards": ok_no_dupes,
        "ok_values_in_range": ok_in_range,
        "ok_no_identical_cards": ok_no_identicals,
        "ok_unique_lines": lines.line_collisions == 0,
        "ok": ok_shape and ok_no_dupes and ok_in_range and ok_no_identicals and lines.line_collisions == 0,
    }
