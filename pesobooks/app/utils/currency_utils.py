"""
Currency formatting utilities via Babel.

Renders amounts the way they appear on vouchers and in the VAT books:
exactly two fraction digits, locale grouping, and (for format_currency)
the currency symbol, e.g. "₱1,234.50".

Formatting never raises for monetary input: absent or non-numeric values
render as the zero amount ("₱0.00" / "0.00").
"""
from typing import Any, Optional

from babel.numbers import format_currency as babel_format_currency, format_decimal

from pesobooks.app.config import get_settings
from pesobooks.app.utils.decimal_utils import coerce_display_amount, money_context, quantize_money
from pesobooks.app.utils.translation_utils import get_babel_locale

PLAIN_NUMBER_PATTERN = "#,##0.00"


def format_currency(amount: Any, currency: Optional[str] = None, locale: Optional[str] = None) -> str:
    """
    Format an amount as a currency string with two decimals.

    Args:
        amount: int, float, Decimal or numeric string. None, non-numeric
            strings, NaN and infinities render as zero.
        currency: ISO 4217 code (default: settings.CURRENCY, i.e. PHP)
        locale: Babel locale (default: settings.LOCALE, i.e. en_PH)

    Returns:
        Formatted string

    Examples:
        >>> format_currency(1234.5)
        '₱1,234.50'
        >>> format_currency(None)
        '₱0.00'
        >>> format_currency("abc")
        '₱0.00'

    Note:
        Rounding to the cent is done here (ROUND_HALF_UP) before Babel sees
        the value, so 0.125 renders as 0.13 and not 0.12.
    """
    settings = get_settings()
    value = quantize_money(coerce_display_amount(amount))
    # Babel rounds in the current decimal context
    with money_context(value):
        return babel_format_currency(
            value,
            currency or settings.CURRENCY,
            locale=get_babel_locale(locale or settings.LOCALE),
            currency_digits=False,
            )


def format_plain_number(amount: Any, locale: Optional[str] = None) -> str:
    """
    Format an amount with grouping and two decimals, without currency symbol.

    Examples:
        >>> format_plain_number(1234.5)
        '1,234.50'
        >>> format_plain_number(None)
        '0.00'
    """
    settings = get_settings()
    value = quantize_money(coerce_display_amount(amount))
    with money_context(value):
        return format_decimal(
            value,
            format=PLAIN_NUMBER_PATTERN,
            locale=get_babel_locale(locale or settings.LOCALE),
            )
