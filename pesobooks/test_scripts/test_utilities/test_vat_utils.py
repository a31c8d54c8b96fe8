"""
Test VAT arithmetic (calculate_vat / add_vat).
All test is independent of the others, so help use pytest features.
"""
from decimal import Decimal

import pytest

from pesobooks.app.schemas.vat import VATNetBreakdown, VATGrossBreakdown
from pesobooks.app.utils.decimal_utils import InvalidAmountError, InvalidRateError, quantize_money
from pesobooks.app.utils.vat_utils import calculate_vat, add_vat

CENT = Decimal("0.01")

SAMPLE_AMOUNTS = [
    "0", "0.01", "0.05", "1", "9.99", "100", "112", "999.99", "1234.56",
    "5640", "11200", "14100", "33333.33", "1000000", "987654.32",
    ]
SAMPLE_RATES = ["0.12", "0.05", "0.2", "0.075"]


# ============================================================================
# TESTS: calculate_vat
# ============================================================================

def test_calculate_vat_standard_rate():
    """11,200 gross at 12% splits into 10,000 net and 1,200 VAT."""
    result = calculate_vat(11200, 0.12)

    assert isinstance(result, VATNetBreakdown)
    assert result.net == Decimal("10000.00")
    assert result.vat == Decimal("1200.00")


def test_calculate_vat_default_rate_is_twelve_percent():
    """Omitting the rate uses 12%."""
    assert calculate_vat(11200) == calculate_vat(11200, "0.12")


def test_calculate_vat_rounds_each_part_to_cents():
    """5,640 / 1.12 = 5035.714..., VAT 604.285... (both rounded half-up)."""
    result = calculate_vat("5640.00")

    assert result.net == Decimal("5035.71")
    assert result.vat == Decimal("604.29")
    assert result.net.as_tuple().exponent == -2
    assert result.vat.as_tuple().exponent == -2


def test_calculate_vat_half_cent_rounds_up():
    """A net of exactly x.xx5 rounds away from zero."""
    # 0.14 / 1.12 = 0.125, VAT 0.015
    result = calculate_vat("0.14", "0.12")

    assert result.net == Decimal("0.13")
    assert result.vat == Decimal("0.02")


def test_calculate_vat_zero():
    result = calculate_vat(0)

    assert result.net == Decimal("0.00")
    assert result.vat == Decimal("0.00")


def test_calculate_vat_accepts_numeric_strings_and_floats():
    assert calculate_vat("11,200.00") == calculate_vat(Decimal("11200"))
    assert calculate_vat(11200.0) == calculate_vat(11200)


@pytest.mark.parametrize("gross", SAMPLE_AMOUNTS)
@pytest.mark.parametrize("rate", SAMPLE_RATES)
def test_calculate_vat_parts_sum_to_gross(gross, rate):
    """net + vat equals the rounded gross within one cent."""
    result = calculate_vat(gross, rate)

    assert abs((result.net + result.vat) - quantize_money(Decimal(gross))) <= CENT


# ============================================================================
# TESTS: add_vat
# ============================================================================

def test_add_vat_standard_rate():
    """10,000 net at 12% grosses up to 11,200 with 1,200 VAT."""
    result = add_vat(10000, 0.12)

    assert isinstance(result, VATGrossBreakdown)
    assert result.gross == Decimal("11200.00")
    assert result.vat == Decimal("1200.00")


def test_add_vat_rounds_each_part_to_cents():
    """1234.56 * 0.12 = 148.1472."""
    result = add_vat("1234.56")

    assert result.vat == Decimal("148.15")
    assert result.gross == Decimal("1382.71")


def test_add_vat_custom_rate():
    result = add_vat(200, "0.05")

    assert result.vat == Decimal("10.00")
    assert result.gross == Decimal("210.00")


@pytest.mark.parametrize("net", SAMPLE_AMOUNTS)
@pytest.mark.parametrize("rate", SAMPLE_RATES)
def test_add_vat_gross_minus_vat_is_net(net, rate):
    """gross - vat equals the net amount within one cent."""
    result = add_vat(net, rate)

    assert abs((result.gross - result.vat) - Decimal(net)) <= CENT


# ============================================================================
# TESTS: round trip
# ============================================================================

@pytest.mark.parametrize("gross", SAMPLE_AMOUNTS)
def test_round_trip_reconstructs_gross(gross):
    """add_vat(calculate_vat(G).net).gross is G within one cent."""
    net = calculate_vat(gross).net

    assert abs(add_vat(net).gross - Decimal(gross)) <= CENT


# ============================================================================
# TESTS: invalid input
# ============================================================================

@pytest.mark.parametrize("amount", [None, "", "abc", "12abc", True, [], object()])
def test_calculate_vat_rejects_non_numeric(amount):
    with pytest.raises(InvalidAmountError, match="must be a number"):
        calculate_vat(amount)


@pytest.mark.parametrize("amount", [float("nan"), float("inf"), float("-inf"), "NaN", "Infinity"])
def test_calculate_vat_rejects_non_finite(amount):
    with pytest.raises(InvalidAmountError, match="must be finite"):
        calculate_vat(amount)


@pytest.mark.parametrize("amount", [-1, "-0.01", Decimal("-100")])
def test_vat_functions_reject_negative(amount):
    with pytest.raises(InvalidAmountError, match="cannot be negative"):
        calculate_vat(amount)
    with pytest.raises(InvalidAmountError, match="cannot be negative"):
        add_vat(amount)


@pytest.mark.parametrize("rate", [0, 1, "1.12", -0.12, 12, "twelve", float("nan")])
def test_vat_functions_reject_rate_outside_unit_interval(rate):
    with pytest.raises(InvalidRateError):
        calculate_vat(100, rate)
    with pytest.raises(InvalidRateError):
        add_vat(100, rate)


def test_invalid_amount_is_value_error():
    """Typed errors stay catchable as ValueError."""
    with pytest.raises(ValueError):
        add_vat("not-a-number")


def test_error_keeps_offending_value():
    with pytest.raises(InvalidRateError) as exc_info:
        calculate_vat(100, "1.5")

    assert exc_info.value.value == "1.5"


# ============================================================================
# TESTS: very large amounts and signed zero
# ============================================================================

def test_calculate_vat_keeps_cents_beyond_default_precision():
    """Amounts past 28 significant digits still split down to the cent."""
    result = calculate_vat(Decimal("1e27"), "0.12")

    assert str(result.net) == "892857142857142857142857142.86"
    assert str(result.vat) == "107142857142857142857142857.14"
    assert result.net + result.vat == Decimal("1000000000000000000000000000.00")


def test_calculate_vat_float_exponent_amount():
    result = calculate_vat(1e27)
    assert result.net + result.vat == Decimal("1e27")


def test_add_vat_keeps_cents_beyond_default_precision():
    result = add_vat(Decimal("1e30"), "0.12")

    assert str(result.vat) == "120000000000000000000000000000.00"
    assert str(result.gross) == "1120000000000000000000000000000.00"


def test_vat_functions_reject_absurdly_large_amounts():
    with pytest.raises(InvalidAmountError, match="too large"):
        calculate_vat("1e1000")
    with pytest.raises(InvalidAmountError, match="too large"):
        add_vat(Decimal("1e5000"))


@pytest.mark.parametrize("amount", [-0.0, "-0", Decimal("-0.00")])
def test_negative_zero_gives_unsigned_zero(amount):
    """-0 is not negative; results never carry a minus sign."""
    split = calculate_vat(amount)
    added = add_vat(amount)

    assert (str(split.net), str(split.vat)) == ("0.00", "0.00")
    assert (str(added.gross), str(added.vat)) == ("0.00", "0.00")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
