from __future__ import annotations

import hashlib
import json
from typing import Iterable, List, Sequence, Tuple

CARD_SIZE = 4
LINES_PER_CARD = 2 * CARD_SIZE + 2


def winning_lines(grid: Sequence[Sequence[int]]) -> List[Tuple[int, ...]]:
    """Return the 10 winning lines of a 4x4 grid, each sorted ascending.

    Order: 4 rows, 4 columns (top to bottom), main diagonal, anti-diagonal.
    """
    lines: List[Tuple[int, ...]] = [tuple(sorted(row)) for row in grid]
    for j in range(CARD_SIZE):
        lines.append(tuple(sorted(grid[i][j] for i in range(CARD_SIZE))))
    lines.append(tuple(sorted(grid[i][i] for i in range(CARD_SIZE))))
    lines.append(tuple(sorted(grid[i][CARD_SIZE - 1 - i] for i in range(CARD_SIZE))))
    return lines


def line_key(line: Iterable[int]) -> str:
    return ",".join(str(x) for x in sorted(line))


def line_keys_of_card(grid: Sequence[Sequence[int]]) -> List[str]:
    return [line_key(line) for line in winning_lines(grid)]


def matrix_hash(matrix: Sequence[Sequence[int]]) -> str:
    payload = json.dumps([list(row) for row in matrix], ensure_ascii=True, separators=(",", ":"))
    return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()


def cards_hash(matrices: Iterable[Sequence[Sequence[int]]]) -> str:
    hashes = [matrix_hash(m) for m in matrices]
    payload = json.dumps(hashes, ensure_ascii=True, separators=(",", ":"))
    return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()
