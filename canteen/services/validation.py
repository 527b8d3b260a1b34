"""Input validators shared by entry submission, audit appends and the CSV import."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from canteen.core.exceptions import ValidationError

AMOUNT_QUANTUM = Decimal("0.01")
# Numeric(10, 2) leaves eight digits before the decimal point.
MAX_AMOUNT = Decimal("99999999.99")


def require_text(value: Any, field: str) -> str:
    """Return the trimmed string value or raise if it is missing or blank."""
    if value is None:
        raise ValidationError(f"{field} is required", details={"field": field})
    text = str(value).strip()
    if not text:
        raise ValidationError(f"{field} is required", details={"field": field})
    return text


def parse_amount(value: Any, field: str = "amount", *, allow_zero: bool = False) -> Decimal:
    """Parse a positive amount with at most two fraction digits.

    Accepts strings, ints and Decimals; floats go through ``str`` so that
    ``12.5`` is read as written rather than as its binary expansion.
    ``allow_zero`` admits 0.00, which historical imports contain.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError("Amount is required", details={"field": field})
    raw = str(value).strip().replace(",", ".") if isinstance(value, str) else str(value)
    if not raw:
        raise ValidationError("Amount is required", details={"field": field})
    try:
        amount = Decimal(raw)
    except InvalidOperation as exc:
        raise ValidationError("Please enter a valid amount", details={"field": field}) from exc
    if not amount.is_finite():
        raise ValidationError("Please enter a valid amount", details={"field": field})
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError("Amount must be greater than zero", details={"field": field})
    # Bounded first: quantize raises InvalidOperation past the context precision.
    if amount > MAX_AMOUNT:
        raise ValidationError("Amount is too large", details={"field": field})
    if amount.as_tuple().exponent < -2 and amount != amount.quantize(AMOUNT_QUANTUM):
        raise ValidationError("Amount can have at most two decimal places", details={"field": field})
    return amount.copy_abs().quantize(AMOUNT_QUANTUM)
