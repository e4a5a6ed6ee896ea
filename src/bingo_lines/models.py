"""Value types returned by the generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

Grid = Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class Card:
    """One 4x4 card. ``id`` is 1-based within a generation run."""

    id: int
    cells: Grid

    def numbers(self) -> List[int]:
        return [x for row in self.cells for x in row]

    def to_dict(self) -> Dict[str, object]:
        return {"id": self.id, "cells": [list(row) for row in self.cells]}


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation request.

    ``number_distribution`` holds ``(number, count)`` pairs in ascending
    number order. On failure ``cards`` and ``number_distribution`` are empty
    and ``variance`` is ``None``.
    """

    cards: Tuple[Card, ...]
    number_distribution: Tuple[Tuple[int, int], ...]
    success: bool
    message: str
    variance: Optional[float] = None
    attempts: int = 0
    seed: Optional[int] = field(default=None, compare=False)

    @classmethod
    def failure(cls, message: str, *, attempts: int = 0, seed: Optional[int] = None) -> "GenerationResult":
        return cls(
            cards=(),
            number_distribution=(),
            success=False,
            message=message,
            attempts=attempts,
            seed=seed,
        )

    def distribution_map(self) -> Dict[int, int]:
        return dict(self.number_distribution)

    def to_dict(self) -> Dict[str, object]:
        return {
            "cards": [card.to_dict() for card in self.cards],
            "number_distribution": [[num, count] for num, count in self.number_distribution],
            "success": self.success,
            "message": self.message,
            "variance": self.variance,
            "attempts": self.attempts,
        }
