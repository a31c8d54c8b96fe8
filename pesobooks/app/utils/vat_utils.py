"""
VAT arithmetic.

Converts between VAT-inclusive (gross) and VAT-exclusive (net) amounts.

Relationships (rate as a fraction, 0.12 = 12%):
- net = gross / (1 + rate)
- vat = gross - net
- gross = net + vat, vat = net * rate

Each output is rounded to the cent independently (ROUND_HALF_UP), so
net + vat may differ from the rounded gross by one cent, and
add_vat(calculate_vat(G).net).gross reconstructs G within one cent.

All functions are pure (no side effects) and reusable.
"""
from decimal import Decimal
from typing import Any

import structlog

from pesobooks.app.schemas.vat import VATNetBreakdown, VATGrossBreakdown
from pesobooks.app.utils.decimal_utils import money_context, parse_amount, parse_vat_rate, quantize_money

logger = structlog.get_logger(__name__)


def calculate_vat(gross_amount: Any, vat_rate: Any = None) -> VATNetBreakdown:
    """
    Split a VAT-inclusive amount into net amount and VAT.

    Args:
        gross_amount: Finite, non-negative amount (number or numeric string)
        vat_rate: Fraction in (0, 1); None uses settings.DEFAULT_VAT_RATE (0.12)

    Returns:
        VATNetBreakdown with net and vat rounded to 2 decimals

    Raises:
        InvalidAmountError: If gross_amount is not a finite, non-negative number
        InvalidRateError: If vat_rate is outside (0, 1)

    Examples:
        >>> calculate_vat(11200)
        VATNetBreakdown(net=Decimal('10000.00'), vat=Decimal('1200.00'))
        >>> calculate_vat("5640.00", "0.12")
        VATNetBreakdown(net=Decimal('5035.71'), vat=Decimal('604.29'))
    """
    gross = parse_amount(gross_amount, field_name="gross_amount")
    rate = parse_vat_rate(vat_rate)

    with money_context(gross):
        net = gross / (Decimal("1") + rate)
        vat = gross - net

    result = VATNetBreakdown(net=quantize_money(net), vat=quantize_money(vat))
    logger.debug("VAT extracted from gross", gross=str(gross), rate=str(rate), net=str(result.net), vat=str(result.vat))
    return result


def add_vat(net_amount: Any, vat_rate: Any = None) -> VATGrossBreakdown:
    """
    Add VAT to a VAT-exclusive amount.

    Args:
        net_amount: Finite, non-negative amount (number or numeric string)
        vat_rate: Fraction in (0, 1); None uses settings.DEFAULT_VAT_RATE (0.12)

    Returns:
        VATGrossBreakdown with gross and vat rounded to 2 decimals

    Raises:
        InvalidAmountError: If net_amount is not a finite, non-negative number
        InvalidRateError: If vat_rate is outside (0, 1)

    Examples:
        >>> add_vat(10000)
        VATGrossBreakdown(gross=Decimal('11200.00'), vat=Decimal('1200.00'))
    """
    net = parse_amount(net_amount, field_name="net_amount")
    rate = parse_vat_rate(vat_rate)

    with money_context(net):
        vat = net * rate
        gross = net + vat

    result = VATGrossBreakdown(gross=quantize_money(gross), vat=quantize_money(vat))
    logger.debug("VAT added to net", net=str(net), rate=str(rate), gross=str(result.gross), vat=str(result.vat))
    return result
