"""Caller-facing entry point: validate the request, then run the generator."""

from __future__ import annotations

import logging
from typing import Optional

from .core.generator import MAX_ATTEMPTS, generate_bingo_cards
from .feasibility import check_line_capacity, check_request
from .models import GenerationResult

logger = logging.getLogger(__name__)


def generate_cards(
    num_cards: int,
    min_num: int,
    max_num: int,
    *,
    seed: Optional[int] = None,
    rng_engine: str = "py_random",
) -> GenerationResult:
    """Generate ``num_cards`` line-unique 4x4 cards from ``[min_num, max_num]``.

    Invalid input never raises; it comes back as an unsuccessful result with
    empty cards and distribution.
    """
    check = check_request(num_cards=num_cards, min_num=min_num, max_num=max_num)
    if not check.feasible:
        logger.info("rejected request: %s", check.reasons[0])
        return GenerationResult.failure(check.reasons[0])

    capacity = check_line_capacity(num_cards=num_cards, min_num=min_num, max_num=max_num)
    if not capacity.feasible:
        # The search will exhaust its budget; let it report the failure.
        logger.warning("%s", capacity.reasons[0])

    return generate_bingo_cards(
        num_cards, min_num, max_num, MAX_ATTEMPTS, seed=seed, rng_engine=rng_engine
    )
