"""
Pydantic schemas for PesoBooks.

**Organization by Domain**:
- vat.py: VAT breakdowns, VAT book entries, monthly totals and summaries

**Design Notes**:
- All models use Pydantic v2
- Money fields are Decimal
"""
from pesobooks.app.schemas.vat import (
    VATNetBreakdown,
    VATGrossBreakdown,
    VATClassification,
    VATBookEntry,
    VATMonthlyTotal,
    VATSummary,
    )

__all__ = [
    "VATNetBreakdown",
    "VATGrossBreakdown",
    "VATClassification",
    "VATBookEntry",
    "VATMonthlyTotal",
    "VATSummary",
    ]
