"""Balanced card generator: weighted sampling, line uniqueness, variance search."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from ..layout import CELLS_PER_CARD, population_variance, range_size, target_per_number
from ..lines import CARD_SIZE, line_keys_of_card
from ..models import Card, GenerationResult
from ..rng import RandomSource, create_rng, derive_attempt_seed, resolve_seed
from .sampling import draw_card_numbers

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 50
MAX_CARD_ATTEMPTS = 1000
VARIANCE_THRESHOLD = 2.0

MSG_SUCCESS = "Successfully generated {n} bingo cards with balanced distribution!"
MSG_FAILURE = "Failed to generate valid bingo cards. Try adjusting parameters."


@dataclass
class GenerationParams:
    """Parameters for card generation."""

    num_cards: int
    min_num: int
    max_num: int
    seed: Optional[int] = None
    rng_engine: str = "py_random"


@dataclass
class GenerationStats:
    """Counters collected over one search."""

    attempts_run: int = 0
    successful_attempts: int = 0
    card_tries: int = 0
    conflicts: int = 0
    best_variance: Optional[float] = None


@dataclass
class _AttemptState:
    """Scratch space owned by a single attempt."""

    counts: Dict[int, int]
    used_lines: Set[str]
    cards: List[Card]


class BalancedGenerator:
    """Searches for a line-unique card set with the flattest number distribution."""

    def __init__(
        self,
        max_attempts: int = MAX_ATTEMPTS,
        max_card_attempts: int = MAX_CARD_ATTEMPTS,
        variance_threshold: float = VARIANCE_THRESHOLD,
    ):
        self.max_attempts = max_attempts
        self.max_card_attempts = max_card_attempts
        self.variance_threshold = variance_threshold

    def generate(self, params: GenerationParams) -> GenerationResult:
        """Run up to ``max_attempts`` full attempts and keep the lowest-variance one."""

        if range_size(params.min_num, params.max_num) < CELLS_PER_CARD:
            raise ValueError("range must hold at least 16 numbers to fill a 4x4 card")

        numbers = list(range(params.min_num, params.max_num + 1))
        target = target_per_number(
            num_cards=params.num_cards, min_num=params.min_num, max_num=params.max_num
        )
        seed = resolve_seed(params.seed)
        stats = GenerationStats()

        best: Optional[_AttemptState] = None
        best_variance = float("inf")

        for attempt in range(self.max_attempts):
            rng = create_rng(params.rng_engine, derive_attempt_seed(seed, attempt, "balanced_generator"))
            stats.attempts_run += 1
            state = self._run_attempt(params.num_cards, numbers, target, rng, stats)
            if state is None:
                logger.debug("attempt %d ran out of card tries", attempt)
                continue

            stats.successful_attempts += 1
            variance = population_variance(state.counts[x] for x in numbers)
            logger.debug("attempt %d succeeded with variance %.4f", attempt, variance)
            if variance < best_variance:
                best_variance = variance
                best = state

            if variance < self.variance_threshold:
                break

        if best is None:
            logger.info(
                "no valid card set after %d attempts (%d card tries, %d line conflicts)",
                stats.attempts_run,
                stats.card_tries,
                stats.conflicts,
            )
            return GenerationResult.failure(MSG_FAILURE, attempts=stats.attempts_run, seed=seed)

        stats.best_variance = best_variance
        logger.info(
            "generated %d cards in %d attempts, variance %.4f",
            len(best.cards),
            stats.attempts_run,
            best_variance,
        )
        return GenerationResult(
            cards=tuple(best.cards),
            number_distribution=tuple((x, best.counts[x]) for x in numbers),
            success=True,
            message=MSG_SUCCESS.format(n=params.num_cards),
            variance=best_variance,
            attempts=stats.attempts_run,
            seed=seed,
        )

    def _run_attempt(
        self,
        num_cards: int,
        numbers: List[int],
        target: int,
        rng: RandomSource,
        stats: GenerationStats,
    ) -> Optional[_AttemptState]:
        state = _AttemptState(counts={x: 0 for x in numbers}, used_lines=set(), cards=[])

        for card_id in range(1, num_cards + 1):
            built = self._build_single_card(numbers, target, state, rng, stats)
            if built is None:
                return None
            grid, keys = built

            # Commit this card
            state.used_lines.update(keys)
            for row in grid:
                for x in row:
                    state.counts[x] += 1
            state.cards.append(Card(id=card_id, cells=grid))

        return state

    def _build_single_card(
        self,
        numbers: List[int],
        target: int,
        state: _AttemptState,
        rng: RandomSource,
        stats: GenerationStats,
    ) -> Optional[Tuple[Tuple[Tuple[int, ...], ...], List[str]]]:
        """Return a conflict-free grid and its line keys, or None when the budget runs out."""

        for _ in range(self.max_card_attempts):
            stats.card_tries += 1
            selected = draw_card_numbers(numbers, state.counts, target, rng, CELLS_PER_CARD)
            if selected is None:
                continue

            rng.shuffle(selected)
            grid = tuple(
                tuple(selected[r * CARD_SIZE : (r + 1) * CARD_SIZE]) for r in range(CARD_SIZE)
            )

            keys = line_keys_of_card(grid)
            if any(k in state.used_lines for k in keys):
                stats.conflicts += 1
                continue

            return grid, keys

        return None


def generate_bingo_cards(
    num_cards: int,
    min_num: int,
    max_num: int,
    max_attempts: int = MAX_ATTEMPTS,
    *,
    seed: Optional[int] = None,
    rng_engine: str = "py_random",
) -> GenerationResult:
    params = GenerationParams(
        num_cards=num_cards,
        min_num=min_num,
        max_num=max_num,
        seed=seed,
        rng_engine=rng_engine,
    )
    return BalancedGenerator(max_attempts=max_attempts).generate(params)
