"""
Test amount/rate parsing and cent rounding in decimal_utils.
"""
from decimal import Decimal

import pytest

from pesobooks.app.utils.decimal_utils import (
    InvalidAmountError,
    InvalidRateError,
    VATInputError,
    coerce_display_amount,
    parse_amount,
    parse_vat_rate,
    quantize_money,
    )


# ============================================================================
# TESTS: quantize_money
# ============================================================================

@pytest.mark.parametrize("value, expected", [
    ("10.005", "10.01"),
    ("10.004", "10.00"),
    ("0.125", "0.13"),
    ("0.135", "0.14"),
    ("-0.125", "-0.13"),
    ("1200", "1200.00"),
    ])
def test_quantize_money_half_up(value, expected):
    """Half cents round away from zero (not banker's rounding)."""
    result = quantize_money(Decimal(value))
    assert result == Decimal(expected)
    assert str(result) == expected


@pytest.mark.parametrize("value", ["-0.001", "-0.004", "-0", "-0.00"])
def test_quantize_money_drops_sign_of_zero(value):
    assert str(quantize_money(Decimal(value))) == "0.00"


def test_quantize_money_past_default_precision():
    """The default 28-digit context would reject this quantize."""
    result = quantize_money(Decimal("1e30"))
    assert str(result) == "1" + "0" * 30 + ".00"


# ============================================================================
# TESTS: parse_amount
# ============================================================================

def test_parse_amount_int():
    assert parse_amount(11200) == Decimal("11200")


def test_parse_amount_float_uses_shortest_repr():
    """0.1 becomes Decimal('0.1'), not the binary expansion."""
    assert parse_amount(0.1) == Decimal("0.1")


def test_parse_amount_string_with_grouping_and_whitespace():
    assert parse_amount("  11,200.50 ") == Decimal("11200.50")


def test_parse_amount_decimal_passthrough():
    value = Decimal("5.55")
    assert parse_amount(value) is value


def test_parse_amount_error_mentions_field_name():
    with pytest.raises(InvalidAmountError, match="net_amount"):
        parse_amount("x", field_name="net_amount")


def test_parse_amount_rejects_too_large():
    assert parse_amount("9e998") == Decimal("9e998")
    with pytest.raises(InvalidAmountError, match="gross_amount is too large"):
        parse_amount("1e1000", field_name="gross_amount")


def test_parse_amount_rejects_bool():
    with pytest.raises(InvalidAmountError):
        parse_amount(False)


def test_error_hierarchy():
    assert issubclass(InvalidAmountError, VATInputError)
    assert issubclass(InvalidRateError, VATInputError)
    assert issubclass(VATInputError, ValueError)


# ============================================================================
# TESTS: parse_vat_rate
# ============================================================================

def test_parse_vat_rate_default():
    assert parse_vat_rate() == Decimal("0.12")
    assert parse_vat_rate(None) == Decimal("0.12")


def test_parse_vat_rate_default_from_environment(monkeypatch):
    """DEFAULT_VAT_RATE can be overridden through the environment."""
    from pesobooks.app.config import get_settings

    monkeypatch.setenv("DEFAULT_VAT_RATE", "0.05")
    get_settings.cache_clear()
    try:
        assert parse_vat_rate() == Decimal("0.05")
    finally:
        monkeypatch.delenv("DEFAULT_VAT_RATE")
        get_settings.cache_clear()


@pytest.mark.parametrize("rate", ["0.12", 0.12, Decimal("0.12")])
def test_parse_vat_rate_accepts_types(rate):
    assert parse_vat_rate(rate) == Decimal("0.12")


@pytest.mark.parametrize("rate", [0, "0", 1, "1.0", -0.5, "Infinity", "", True])
def test_parse_vat_rate_rejects(rate):
    with pytest.raises(InvalidRateError):
        parse_vat_rate(rate)


# ============================================================================
# TESTS: coerce_display_amount
# ============================================================================

@pytest.mark.parametrize("value", [None, "", "abc", float("nan"), float("inf"), object()])
def test_coerce_display_amount_recovers_as_zero(value):
    assert coerce_display_amount(value) == Decimal("0")


def test_coerce_display_amount_out_of_range_is_zero():
    assert coerce_display_amount("1e1000") == Decimal("0")
    assert coerce_display_amount("9e998") == Decimal("9e998")


def test_coerce_display_amount_keeps_negative():
    """Display formatting shows negative balances (e.g. excess input VAT)."""
    assert coerce_display_amount("-640.00") == Decimal("-640.00")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
