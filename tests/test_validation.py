from decimal import Decimal

import pytest

from canteen.core.exceptions import ValidationError
from canteen.services.validation import parse_amount, require_text


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("125.00", Decimal("125.00")),
        ("125", Decimal("125.00")),
        ("12.5", Decimal("12.50")),
        (" 7 ", Decimal("7.00")),
        ("3,75", Decimal("3.75")),
        ("1.230", Decimal("1.23")),
        (4, Decimal("4.00")),
        (2.5, Decimal("2.50")),
        (Decimal("0.01"), Decimal("0.01")),
    ],
)
def test_parse_amount_accepts_positive_two_place_values(raw, expected) -> None:
    amount = parse_amount(raw)
    assert amount == expected
    assert amount.as_tuple().exponent == -2


@pytest.mark.parametrize(
    "raw", ["", "   ", "abc", "0", "0.00", "-1", "1.234", "NaN", "Infinity", "1e12", "1" * 27 + ".001", "1" * 40, None, True]
)
def test_parse_amount_rejects_invalid_values(raw) -> None:
    with pytest.raises(ValidationError):
        parse_amount(raw)


def test_require_text_names_the_field() -> None:
    with pytest.raises(ValidationError) as excinfo:
        require_text("  ", "company")
    assert excinfo.value.message == "company is required"
    assert excinfo.value.details == {"field": "company"}
    assert require_text(" Lunch ", "meal") == "Lunch"


def test_parse_amount_zero_only_when_allowed() -> None:
    assert parse_amount("0", allow_zero=True) == Decimal("0.00")
    assert parse_amount("-0", allow_zero=True).is_signed() is False
    with pytest.raises(ValidationError):
        parse_amount("-1", allow_zero=True)
    with pytest.raises(ValidationError):
        parse_amount("0")
