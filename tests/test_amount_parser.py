"""Tests for amount parser."""

import pytest
from decimal import Decimal

from valecashback.domain.errors import InvalidAmountError
from valecashback.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123.45", Decimal("123.45")),
        ("$123.45", Decimal("123.45")),
        ("R$ 49.90", Decimal("49.90")),
        ("1,234.56", Decimal("1234.56")),
        (" 7 ", Decimal("7.00")),
    ],
)
def test_parse_amount(text, expected):
    """Test supported amount formats."""
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "-10", "0", "1.234"])
def test_parse_amount_rejects(text):
    """Test empty, non-numeric, non-positive and sub-cent amounts."""
    with pytest.raises(InvalidAmountError):
        parse_amount(text)
