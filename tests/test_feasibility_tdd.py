from __future__ import annotations

import math

from hypothesis import given, strategies as st

from bingo_lines.feasibility import (
    MSG_MAX_BELOW_MIN,
    MSG_RANGE_TOO_SMALL,
    check_line_capacity,
    check_request,
    line_capacity,
)


@given(
    lo=st.integers(min_value=-100, max_value=100),
    width=st.integers(min_value=-20, max_value=100),
    cards=st.integers(min_value=0, max_value=500),
)
def test_request_validation_property(lo, width, cards):
    hi = lo + width
    result = check_request(num_cards=cards, min_num=lo, max_num=hi)
    expected_ok = hi >= lo and (hi - lo + 1) >= 16
    assert result.feasible == expected_ok
    if hi < lo:
        assert result.reasons == [MSG_MAX_BELOW_MIN]
    elif not expected_ok:
        assert result.reasons == [MSG_RANGE_TOO_SMALL]


@given(
    size=st.integers(min_value=16, max_value=90),
    cards=st.integers(min_value=0, max_value=3000),
)
def test_line_capacity_property(size, cards):
    res = check_line_capacity(num_cards=cards, min_num=1, max_num=size)
    assert res.feasible == (10 * cards <= math.comb(size, 4))


def test_capacity_of_sixteen_numbers():
    assert line_capacity(min_num=1, max_num=16) == 1820
    assert check_line_capacity(num_cards=182, min_num=1, max_num=16).feasible
    res = check_line_capacity(num_cards=183, min_num=1, max_num=16)
    assert not res.feasible
    assert "1830" in res.reasons[0]
