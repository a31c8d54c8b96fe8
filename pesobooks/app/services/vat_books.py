"""
VAT Books service for PesoBooks.

Keeps the two VAT registers required for BIR compliance and computes the
figures shown on the VAT Books page and the quarterly VAT return:
- Sales Book: vatable cash receipts (output VAT)
- Purchase Book: cash disbursements with input VAT
- Monthly totals with quarter-end roll-ups
- Period summary: vatable / zero-rated / exempt sales, net VAT payable

Design Notes:
- Pure computation over entries supplied by the caller (no storage)
- Sums are exact Decimal additions of already-rounded entry amounts
- Net VAT payable may be negative (excess input VAT carried over)
"""
from __future__ import annotations

import calendar
from datetime import date as date_type
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple, Any

import structlog

from pesobooks.app.schemas.vat import (
    VATBookEntry,
    VATClassification,
    VATMonthlyTotal,
    VATSummary,
    )
from pesobooks.app.utils.datetime_utils import parse_ISO_date
from pesobooks.app.utils.vat_utils import calculate_vat

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")
QUARTER_END_MONTHS = (3, 6, 9, 12)


class VATBookError(Exception):
    """Raised when a VAT book query is invalid."""
    pass


def quarter_range(year: int, quarter: int) -> Tuple[date_type, date_type]:
    """
    First and last day of a calendar quarter.

    Example:
        >>> quarter_range(2024, 1)
        (datetime.date(2024, 1, 1), datetime.date(2024, 3, 31))
    """
    if quarter not in (1, 2, 3, 4):
        raise VATBookError(f"Quarter must be 1-4, got {quarter}")
    first_month = (quarter - 1) * 3 + 1
    last_month = first_month + 2
    last_day = calendar.monthrange(year, last_month)[1]
    return date_type(year, first_month, 1), date_type(year, last_month, last_day)


def make_book_entry(
    reference: str,
    voucher_date: Any,
    cash_amount: Any,
    counterparty: str = "",
    particulars: str = "",
    invoice_number: Optional[str] = None,
    classification: VATClassification = VATClassification.VATABLE,
    vat_rate: Any = None,
    ) -> VATBookEntry:
    """
    Build a book entry from the gross cash amount, as the voucher forms do.

    Vatable entries get net and VAT from calculate_vat(); zero-rated and
    exempt entries carry the whole cash amount as net with zero VAT.
    """
    if classification == VATClassification.VATABLE:
        breakdown = calculate_vat(cash_amount, vat_rate)
        net_amount, vat_amount = breakdown.net, breakdown.vat
    else:
        net_amount, vat_amount = cash_amount, ZERO

    return VATBookEntry(
        reference=reference,
        voucher_date=voucher_date,
        counterparty=counterparty,
        particulars=particulars,
        invoice_number=invoice_number,
        cash_amount=cash_amount,
        net_amount=net_amount,
        vat_amount=vat_amount,
        classification=classification,
        )


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


class VATBooks:
    """
    Sales and Purchase books for one company.

    Args:
        sales: Cash receipts (any classification; only VATABLE carry output VAT)
        purchases: Cash disbursements with input VAT
    """

    def __init__(self, sales: Optional[Iterable[VATBookEntry]] = None, purchases: Optional[Iterable[VATBookEntry]] = None):
        self.sales: List[VATBookEntry] = sorted(sales or [], key=lambda e: (e.voucher_date, e.reference))
        self.purchases: List[VATBookEntry] = sorted(purchases or [], key=lambda e: (e.voucher_date, e.reference))

    # =========================================================================
    # REGISTERS
    # =========================================================================

    def sales_book(self, year: Optional[int] = None) -> List[VATBookEntry]:
        """Vatable sales (output VAT register), optionally for one year."""
        return [
            e for e in self.sales
            if e.classification == VATClassification.VATABLE and (year is None or e.voucher_date.year == year)
            ]

    def purchase_book(self, year: Optional[int] = None) -> List[VATBookEntry]:
        """Purchases with input VAT (input VAT register), optionally for one year."""
        return [
            e for e in self.purchases
            if e.classification == VATClassification.VATABLE and (year is None or e.voucher_date.year == year)
            ]

    # =========================================================================
    # TOTALS
    # =========================================================================

    def totals(self, year: Optional[int] = None) -> Tuple[Decimal, Decimal, Decimal]:
        """
        Total output VAT, total input VAT and net VAT payable.

        Returns:
            (output_vat, input_vat, net_vat_payable)
        """
        output_vat = _sum(e.vat_amount for e in self.sales_book(year))
        input_vat = _sum(e.vat_amount for e in self.purchase_book(year))
        return output_vat, input_vat, output_vat - input_vat

    def monthly_totals(self, year: int) -> List[VATMonthlyTotal]:
        """
        Output/input/net VAT for each month of a year, January first.

        March, June, September and December also carry the totals of their
        quarter. Entries from other years are ignored.

        Raises:
            VATBookError: If year is not a valid calendar year
        """
        if not isinstance(year, int) or isinstance(year, bool) or not (1 <= year <= 9999):
            raise VATBookError(f"Invalid year: {year!r}")

        sales = self.sales_book(year)
        purchases = self.purchase_book(year)

        output_by_month = {m: ZERO for m in range(1, 13)}
        input_by_month = {m: ZERO for m in range(1, 13)}
        for entry in sales:
            output_by_month[entry.month] += entry.vat_amount
        for entry in purchases:
            input_by_month[entry.month] += entry.vat_amount

        totals = []
        for month in range(1, 13):
            output_vat = output_by_month[month]
            input_vat = input_by_month[month]
            row = {
                "month": month,
                "month_name": calendar.month_name[month],
                "output_vat": output_vat,
                "input_vat": input_vat,
                "net_vat": output_vat - input_vat,
                "is_quarter_end": month in QUARTER_END_MONTHS,
                }
            if month in QUARTER_END_MONTHS:
                quarter_months = (month - 2, month - 1, month)
                quarterly_output = _sum(output_by_month[m] for m in quarter_months)
                quarterly_input = _sum(input_by_month[m] for m in quarter_months)
                row.update(
                    quarterly_output=quarterly_output,
                    quarterly_input=quarterly_input,
                    quarterly_net=quarterly_output - quarterly_input,
                    )
            totals.append(VATMonthlyTotal(**row))

        logger.debug("Computed monthly VAT totals", year=year, sales=len(sales), purchases=len(purchases))
        return totals

    def summary(self, start_date: Any, end_date: Any) -> VATSummary:
        """
        VAT position for a period (both ends inclusive).

        - vatable_sales: net amount of VATABLE receipts
        - zero_rated_sales: net amount of ZERO_RATED receipts
        - exempt_sales: cash amount of EXEMPT receipts
        - output_vat / input_vat: VAT of VATABLE receipts / purchases
        - vatable_purchases: net amount of VATABLE purchases

        Raises:
            VATBookError: If start_date is after end_date
        """
        start = parse_ISO_date(start_date)
        end = parse_ISO_date(end_date)
        if start > end:
            raise VATBookError(f"start_date {start} is after end_date {end}")

        def in_period(entry: VATBookEntry) -> bool:
            return start <= entry.voucher_date <= end

        vatable_sales = zero_rated_sales = exempt_sales = output_vat = ZERO
        for receipt in filter(in_period, self.sales):
            if receipt.classification == VATClassification.VATABLE:
                vatable_sales += receipt.net_amount
                output_vat += receipt.vat_amount
            elif receipt.classification == VATClassification.ZERO_RATED:
                zero_rated_sales += receipt.net_amount
            else:
                exempt_sales += receipt.cash_amount

        vatable_purchases = input_vat = ZERO
        for disbursement in filter(in_period, self.purchases):
            if disbursement.classification == VATClassification.VATABLE:
                vatable_purchases += disbursement.net_amount
                input_vat += disbursement.vat_amount

        return VATSummary(
            start_date=start,
            end_date=end,
            vatable_sales=vatable_sales,
            zero_rated_sales=zero_rated_sales,
            exempt_sales=exempt_sales,
            total_sales=vatable_sales + zero_rated_sales + exempt_sales,
            output_vat=output_vat,
            vatable_purchases=vatable_purchases,
            input_vat=input_vat,
            net_vat_payable=output_vat - input_vat,
            )

    def quarterly_summary(self, year: int, quarter: int) -> VATSummary:
        """Summary for a calendar quarter (quarterly VAT return period)."""
        start, end = quarter_range(year, quarter)
        return self.summary(start, end)
