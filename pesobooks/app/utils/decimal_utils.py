"""
Decimal precision utilities for PesoBooks.

Monetary values are carried as Decimal end to end and rounded to the cent
with ROUND_HALF_UP (half away from zero), matching how VAT amounts are
printed on receipts and vouchers.

Usage:
    from pesobooks.app.utils.decimal_utils import parse_amount, quantize_money

    amount = parse_amount("11200")       # Decimal("11200")
    quantize_money(Decimal("10.005"))    # Decimal("10.01")

Input coming from forms, CSV files or JSON can be int, float, Decimal or a
numeric string. It is converted here, once, at the boundary; the VAT
functions never coerce silently.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Optional

import structlog

from pesobooks.app.config import get_settings

logger = structlog.get_logger(__name__)

MONEY = Decimal("0.01")

# Significant digits kept beyond the integer part of an amount
PRECISION = 28

# Largest accepted amount is below 10**MAX_INTEGER_DIGITS
MAX_INTEGER_DIGITS = 1000


class VATInputError(ValueError):
    """Base class for invalid input passed to VAT computations."""

    def __init__(self, value: Any, message: str):
        self.value = value
        super().__init__(message)


class InvalidAmountError(VATInputError):
    """Raised when an amount is not a finite, non-negative number."""
    pass


class InvalidRateError(VATInputError):
    """Raised when a VAT rate is not a number in the open interval (0, 1)."""
    pass


def _to_decimal(value: Any) -> Optional[Decimal]:
    """
    Convert int, float, Decimal or numeric string to Decimal.

    Returns None when the value cannot be interpreted as a number.
    Booleans are rejected even though bool is an int subclass.
    Floats go through str() so that 0.1 becomes Decimal("0.1").
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return None
        try:
            return Decimal(text)
        except InvalidOperation:
            return None
    return None


def money_context(*values: Decimal):
    """
    Decimal context with enough precision to keep every cent of the values.

    The default 28 significant digits cannot hold amounts of about 1e26 and
    up down to the cent; precision grows with the largest operand.

    Usage:
        with money_context(gross):
            net = gross / (1 + rate)
    """
    magnitude = max((v.adjusted() for v in values if v.is_finite()), default=0)
    return localcontext(prec=PRECISION + max(0, magnitude))


def quantize_money(value: Decimal) -> Decimal:
    """
    Round a Decimal to two decimal places, half away from zero.

    Negative zero is normalized, so -0.001 rounds to 0.00 and not -0.00.

    Examples:
        >>> quantize_money(Decimal("10.005"))
        Decimal('10.01')
        >>> quantize_money(Decimal("1200.004"))
        Decimal('1200.00')
        >>> quantize_money(Decimal("-0.001"))
        Decimal('0.00')
    """
    with money_context(value):
        return value.quantize(MONEY, rounding=ROUND_HALF_UP) + 0


def parse_amount(value: Any, field_name: str = "amount") -> Decimal:
    """
    Parse a monetary amount for VAT arithmetic.

    Args:
        value: int, float, Decimal or numeric string (thousands separators allowed)
        field_name: Name used in the error message

    Returns:
        The amount as Decimal (not rounded)

    Raises:
        InvalidAmountError: If value is absent, not numeric, NaN, infinite,
            negative or 10**MAX_INTEGER_DIGITS and up

    Examples:
        >>> parse_amount("11,200.00")
        Decimal('11200.00')
        >>> parse_amount(-1)  # InvalidAmountError
    """
    amount = _to_decimal(value)
    if amount is None:
        raise InvalidAmountError(value, f"{field_name} must be a number or numeric string, got {value!r}")
    if not amount.is_finite():
        raise InvalidAmountError(value, f"{field_name} must be finite, got {value!r}")
    if amount < 0:
        raise InvalidAmountError(value, f"{field_name} cannot be negative, got {value!r}")
    if amount.adjusted() >= MAX_INTEGER_DIGITS:
        raise InvalidAmountError(value, f"{field_name} is too large, got {value!r}")
    return amount


def parse_vat_rate(value: Any = None) -> Decimal:
    """
    Parse a VAT rate expressed as a fraction (0.12 = 12%).

    Args:
        value: Rate as int, float, Decimal or numeric string.
            None selects settings.DEFAULT_VAT_RATE.

    Returns:
        The rate as Decimal

    Raises:
        InvalidRateError: If value is not numeric or not strictly between 0 and 1
    """
    if value is None:
        value = get_settings().DEFAULT_VAT_RATE

    rate = _to_decimal(value)
    if rate is None or not rate.is_finite():
        raise InvalidRateError(value, f"VAT rate must be a finite number, got {value!r}")
    if not (Decimal("0") < rate < Decimal("1")):
        raise InvalidRateError(value, f"VAT rate must be between 0 and 1 (exclusive), got {value!r}")
    return rate


def coerce_display_amount(value: Any) -> Decimal:
    """
    Lenient conversion used by display formatting.

    Absent, non-numeric, non-finite and out of range input is recovered as
    zero (logged at DEBUG), so that a blank cell in a report renders as 0.00
    instead of failing the whole page. Negative values are kept.
    """
    if value is None:
        return Decimal("0")

    amount = _to_decimal(value)
    if amount is None or not amount.is_finite():
        logger.debug("Non-numeric amount rendered as zero", value=repr(value))
        return Decimal("0")
    if amount.adjusted() >= MAX_INTEGER_DIGITS:
        logger.debug("Out of range amount rendered as zero", value=repr(value))
        return Decimal("0")
    return amount
