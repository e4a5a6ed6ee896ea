from __future__ import annotations

from bingo_lines.core import generate_bingo_cards
from bingo_lines.verify import count_line_collisions, verify


def test_verify_reports_uniqueness_and_uniformity():
    result = generate_bingo_cards(15, 1, 30, seed=123)
    cards = [c.cells for c in result.cards]
    rep = verify(cards, min_num=1, max_num=30)
    assert rep["ok"] is True
    assert rep["ok_no_duplicates_within_cards"] is True
    assert rep["ok_values_in_range"] is True
    assert rep["ok_no_identical_cards"] is True
    assert rep["lines"]["lines_checked"] == 150
    assert rep["lines"]["distinct_lines"] == 150
    assert rep["lines"]["line_collisions"] == 0
    assert rep["uniformity"]["total_placements"] == 240
    assert rep["uniformity"]["variance"] == round(result.variance, 6)
    assert 0.0 <= rep["tests"]["global"]["chi2"]["p_value"] <= 1.0


def test_verify_flags_shared_line():
    a = [[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12], [13, 14, 15, 16]]
    # same first row values in another order, everything else fresh
    b = [[4, 3, 2, 1], [17, 18, 19, 20], [21, 22, 23, 24], [25, 26, 27, 28]]
    rep = verify([a, b], min_num=1, max_num=28)
    assert rep["lines"]["line_collisions"] == 1
    assert rep["ok_unique_lines"] is False
    assert rep["ok"] is False


def test_verify_flags_duplicates_and_range():
    bad = [[1, 1, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12], [13, 14, 15, 99]]
    rep = verify([bad], min_num=1, max_num=20)
    assert rep["ok_no_duplicates_within_cards"] is False
    assert rep["ok_values_in_range"] is False
    assert rep["ok"] is False


def test_collision_count_empty():
    report = count_line_collisions([])
    assert report.lines_checked == 0
    assert report.line_collisions == 0


def test_wrong_shape_cards_fail_without_crashing():
    small = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
    rep = verify([small], min_num=1, max_num=20)
    assert rep["ok_shape"] is False
    assert rep["ok"] is False
    assert rep["lines"]["skipped_cards"] == 1
    assert rep["lines"]["lines_checked"] == 0


def test_short_card_is_skipped_but_others_are_counted():
    good = generate_bingo_cards(1, 1, 20, seed=4).cards[0].cells
    two_rows = [list(good[0]), list(good[1])]
    lines = count_line_collisions([good, two_rows])
    assert lines.skipped_cards == 1
    assert lines.lines_checked == 10
    assert lines.line_collisions == 0
