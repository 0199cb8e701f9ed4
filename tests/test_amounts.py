import pytest

from paytrack.payment.amounts import format_currency, round2, safe_divide, sum_other_deductions
from paytrack.payment.types import OtherDeduction


@pytest.mark.parametrize("value,expected", [
    (0.125, 0.13),
    (0.625, 0.63),
    (10.125, 10.13),
    (1234.5, 1234.5),
    (-0.0, 0.0),
])
def test_round2_rounds_half_up(value, expected):
    assert round2(value) == expected


def test_round2_is_stable():
    for value in (1111.11, 0.07, 30000.0, 1234.56, 99.99):
        assert round2(round2(value)) == round2(value)


def test_safe_divide_guards_zero():
    assert safe_divide(10, 0) == 0.0
    assert safe_divide(10, 4) == 2.5


def test_other_deductions_mix_fixed_and_percentage():
    items = [
        OtherDeduction(description="Canteen", amount=300),
        OtherDeduction(description="Welfare", amount=2, is_percentage=True),
    ]
    assert sum_other_deductions(items, 50000) == 1300


def test_format_currency():
    assert format_currency(1234.5) == "₹1,234.50"
    assert format_currency(1000000, "USD", "en-US") == "$1,000,000.00"
    assert format_currency(-42.1) == "-₹42.10"
    assert format_currency(5, "AED", "en-AE") == "AED 5.00"


def test_format_currency_indian_grouping():
    assert format_currency(1234567.5) == "₹12,34,567.50"
    assert format_currency(12345678, "INR", "en_IN") == "₹1,23,45,678.00"
    assert format_currency(999.999) == "₹1,000.00"
    assert format_currency(100000, "INR", "hi-IN") == "₹1,00,000.00"


def test_format_currency_western_grouping():
    assert format_currency(1234567.5, "INR", "en-US") == "₹1,234,567.50"
    assert format_currency(12345678, "GBP", "en-GB") == "£12,345,678.00"
