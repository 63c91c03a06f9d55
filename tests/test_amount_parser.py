"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from smsledger.utils.amount_parser import parse_amount, to_money


@pytest.mark.parametrize(
    "value, expected",
    [
        ("123.45", "123.45"),
        ("1,234.56", "1234.56"),
        ("MVR265", "265.00"),
        ("MVR 8,000.00", "8000.00"),
        ("38.08 MVR", "38.08"),
        ("-50.5", "-50.50"),
        ("(12.00)", "-12.00"),
        ("0.005", "0.01"),
    ],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == Decimal(expected)


@pytest.mark.parametrize("value", ["", "   ", "abc", "nan", "1.2.3"])
def test_parse_amount_invalid(value):
    with pytest.raises(ValueError):
        parse_amount(value)


def test_to_money():
    assert to_money(None) == Decimal("0.00")
    assert to_money(0.1) == Decimal("0.10")
    assert to_money("10") == Decimal("10.00")
    assert str(to_money(Decimal("2.345"))) == "2.35"
