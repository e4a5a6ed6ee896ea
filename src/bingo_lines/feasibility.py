from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from .layout import CELLS_PER_CARD, range_size
from .lines import CARD_SIZE, LINES_PER_CARD

MSG_MAX_BELOW_MIN = "Maximum number must be greater than or equal to minimum number."
MSG_RANGE_TOO_SMALL = "Number range must be at least 16 to fill a 4x4 card."
MSG_NEGATIVE_CARDS = "Number of cards must not be negative."


@dataclass
class Feasibility:
    feasible: bool
    reasons: List[str]


def check_request(*, num_cards: int, min_num: int, max_num: int) -> Feasibility:
    """Validate caller input. Reasons are in check order; the first one is reported."""
    reasons: List[str] = []
    if num_cards < 0:
        reasons.append(MSG_NEGATIVE_CARDS)
    if max_num < min_num:
        reasons.append(MSG_MAX_BELOW_MIN)
    elif range_size(min_num, max_num) < CELLS_PER_CARD:
        reasons.append(MSG_RANGE_TOO_SMALL)
    return Feasibility(feasible=not reasons, reasons=reasons)


def line_capacity(*, min_num: int, max_num: int) -> int:
    """Number of distinct 4-number lines the range can supply: C(range, 4)."""
    return math.comb(range_size(min_num, max_num), CARD_SIZE)


def check_line_capacity(*, num_cards: int, min_num: int, max_num: int) -> Feasibility:
    """Necessary (not sufficient) condition: every card consumes 10 fresh line keys."""
    needed = LINES_PER_CARD * num_cards
    capacity = line_capacity(min_num=min_num, max_num=max_num)
    if needed <= capacity:
        return Feasibility(feasible=True, reasons=[])
    return Feasibility(
        feasible=False,
        reasons=[f"line capacity exceeded: {needed} lines needed, C(range,4) = {capacity}"],
    )
