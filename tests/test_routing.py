"""Tests for the ABA routing number checksum."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from nachafile import Writer, is_valid_routing_number


@pytest.mark.parametrize(
    "routing_number",
    ["021000021", "081000032", "011000015", "122000247"],
)
def test_known_valid(routing_number):
    assert is_valid_routing_number(routing_number)


@pytest.mark.parametrize(
    "routing_number",
    ["123456789", "021000022", "02100002", "0210000210", "02100002a", "", None, 21000021],
)
def test_known_invalid(routing_number):
    assert not is_valid_routing_number(routing_number)


def test_exposed_on_writer():
    assert Writer.is_valid_routing_number("021000021")


@given(st.text(alphabet="0123456789", min_size=8, max_size=8))
def test_exactly_one_check_digit_validates(prefix):
    valid = [d for d in "0123456789" if is_valid_routing_number(prefix + d)]
    assert len(valid) == 1


@given(st.text(alphabet="0123456789", min_size=9, max_size=9))
def test_matches_weighted_sum(routing_number):
    d = [int(c) for c in routing_number]
    total = 3 * (d[0] + d[3] + d[6]) + 7 * (d[1] + d[4] + d[7]) + (d[2] + d[5] + d[8])
    assert is_valid_routing_number(routing_number) == (total % 10 == 0)
