from __future__ import annotations

from hypothesis import given, strategies as st

from bingo_lines.lines import (
    cards_hash,
    line_key,
    line_keys_of_card,
    matrix_hash,
    winning_lines,
)

GRID = [
    [5, 1, 9, 13],
    [2, 7, 4, 16],
    [3, 11, 8, 10],
    [12, 6, 15, 14],
]


def test_winning_lines_order_and_sorting():
    lines = winning_lines(GRID)
    assert len(lines) == 10
    # rows
    assert lines[0] == (1, 5, 9, 13)
    assert lines[3] == (6, 12, 14, 15)
    # columns, top to bottom
    assert lines[4] == (2, 3, 5, 12)
    assert lines[7] == (10, 13, 14, 16)
    # main diagonal 5,7,8,14 and anti-diagonal 13,4,11,12
    assert lines[8] == (5, 7, 8, 14)
    assert lines[9] == (4, 11, 12, 13)


def test_line_keys_are_sorted_csv():
    keys = line_keys_of_card(GRID)
    assert keys[0] == "1,5,9,13"
    assert keys[9] == "4,11,12,13"


def test_numeric_not_lexicographic_ordering():
    assert line_key([10, 9, 100, 2]) == "2,9,10,100"


@given(st.permutations([3, 17, 42, 8]))
def test_line_key_invariant_under_permutation(perm):
    assert line_key(perm) == "3,8,17,42"


@given(st.lists(st.integers(min_value=0, max_value=500), min_size=16, max_size=16, unique=True))
def test_transposed_card_yields_same_key_set(values):
    grid = [values[i * 4 : (i + 1) * 4] for i in range(4)]
    transposed = [[grid[i][j] for i in range(4)] for j in range(4)]
    assert set(line_keys_of_card(grid)) == set(line_keys_of_card(transposed))


def test_hashes_stable_and_distinct():
    a = [[1, 2], [3, 4]]
    b = [[1, 3], [2, 4]]
    assert matrix_hash(a) == matrix_hash(tuple(tuple(r) for r in a))
    assert matrix_hash(a) != matrix_hash(b)
    assert cards_hash([a, b]).startswith("sha256:")
