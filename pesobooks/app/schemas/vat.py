"""
VAT Schemas.

Pydantic models for VAT computations and the VAT books (Sales Book for
output VAT, Purchase Book for input VAT).

**Domain Coverage**:
- Breakdowns: results of splitting a gross amount or grossing up a net amount
- Book entries: vatable cash receipts (sales) and cash disbursements (purchases)
- Totals: monthly totals with quarter-end roll-ups, period summary

**Design Notes**:
- All money fields are Decimal, serialized as strings in JSON for precision
- Breakdowns and totals are frozen: they are computed values, never edited
"""
# Postpones evaluation of type hints to improve imports and performance. Also avoid circular import issues.
from __future__ import annotations

from datetime import date as date_type
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from pesobooks.app.utils.datetime_utils import parse_ISO_date
from pesobooks.app.utils.decimal_utils import parse_amount


# ============================================================================
# BREAKDOWN MODELS
# ============================================================================

class VATNetBreakdown(BaseModel):
    """
    Result of splitting a VAT-inclusive (gross) amount.

    Both fields are rounded to the cent independently.
    """
    model_config = ConfigDict(frozen=True)

    net: Decimal = Field(..., description="Amount excluding VAT")
    vat: Decimal = Field(..., description="VAT contained in the gross amount")


class VATGrossBreakdown(BaseModel):
    """
    Result of adding VAT to a VAT-exclusive (net) amount.

    Both fields are rounded to the cent independently.
    """
    model_config = ConfigDict(frozen=True)

    gross: Decimal = Field(..., description="Amount including VAT")
    vat: Decimal = Field(..., description="VAT added to the net amount")


# ============================================================================
# BOOK ENTRY MODELS
# ============================================================================

class VATClassification(str, Enum):
    """Tax treatment of a sale or purchase."""
    VATABLE = "VATABLE"
    ZERO_RATED = "ZERO_RATED"
    EXEMPT = "EXEMPT"


class VATBookEntry(BaseModel):
    """
    One line of a VAT book.

    For the Sales Book this is a cash receipt (reference = CRN, counterparty
    = payor); for the Purchase Book a cash disbursement (reference = CDN,
    counterparty = payee/supplier).
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        )

    reference: str = Field(..., min_length=1, description="Voucher number (CRN / CDN)")
    voucher_date: date_type = Field(..., description="Voucher date")
    counterparty: str = Field("", description="Payor or payee name")
    particulars: str = Field("", description="Description of the transaction")
    invoice_number: Optional[str] = Field(None, description="Sales or supplier invoice number")
    cash_amount: Decimal = Field(..., description="Gross amount received or paid")
    net_amount: Decimal = Field(..., description="Amount excluding VAT")
    vat_amount: Decimal = Field(Decimal("0"), description="Output or input VAT")
    classification: VATClassification = Field(VATClassification.VATABLE, description="Tax treatment")

    @field_validator('voucher_date', mode='before')
    @classmethod
    def validate_voucher_date(cls, v):
        return parse_ISO_date(v)

    @field_validator('cash_amount', 'net_amount', 'vat_amount', mode='before')
    @classmethod
    def validate_amounts(cls, v, info):
        """Money fields accept numbers or numeric strings, never negatives."""
        return parse_amount(v, field_name=info.field_name)

    @model_validator(mode='after')
    def validate_vat_treatment(self) -> 'VATBookEntry':
        """Only vatable lines carry VAT."""
        if self.classification != VATClassification.VATABLE and self.vat_amount != 0:
            raise ValueError(
                f"{self.classification.value} entry '{self.reference}' cannot carry VAT "
                f"(vat_amount={self.vat_amount})"
                )
        return self

    @property
    def month(self) -> int:
        return self.voucher_date.month


# ============================================================================
# TOTALS MODELS
# ============================================================================

class VATMonthlyTotal(BaseModel):
    """
    Output/input VAT for one calendar month.

    Quarter-end months (March, June, September, December) also carry the
    totals of the whole quarter; the quarterly fields are None otherwise.
    """
    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, le=12)
    month_name: str
    output_vat: Decimal
    input_vat: Decimal
    net_vat: Decimal
    is_quarter_end: bool
    quarterly_output: Optional[Decimal] = None
    quarterly_input: Optional[Decimal] = None
    quarterly_net: Optional[Decimal] = None


class VATSummary(BaseModel):
    """VAT position for a period, as reported on the quarterly VAT return."""
    model_config = ConfigDict(frozen=True)

    start_date: date_type
    end_date: date_type
    vatable_sales: Decimal
    zero_rated_sales: Decimal
    exempt_sales: Decimal
    total_sales: Decimal
    output_vat: Decimal
    vatable_purchases: Decimal
    input_vat: Decimal
    net_vat_payable: Decimal = Field(..., description="Output VAT minus input VAT (negative = excess input VAT)")
