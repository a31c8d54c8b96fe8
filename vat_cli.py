#!/usr/bin/env python3
"""
VAT Console Tool

Command-line tool for quick VAT computations and for previewing the VAT
books with sample vouchers, without the web UI.

Usage:
    pipenv run python vat_cli.py split <gross> [--rate 0.12]
    pipenv run python vat_cli.py add <net> [--rate 0.12]
    pipenv run python vat_cli.py sample-books [--year 2024]
"""
import sys
import argparse
from pathlib import Path

# Add project root to path (file is in root)
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from pesobooks.app.logging_config import configure_logging
from pesobooks.app.schemas.vat import VATBookEntry
from pesobooks.app.services.vat_books import VATBooks, make_book_entry
from pesobooks.app.utils.currency_utils import format_currency
from pesobooks.app.utils.datetime_utils import format_display_date
from pesobooks.app.utils.decimal_utils import VATInputError
from pesobooks.app.utils.vat_utils import calculate_vat, add_vat


def cmd_split(gross: str, rate: str = None) -> bool:
    """Split a VAT-inclusive amount into net and VAT."""
    try:
        result = calculate_vat(gross, rate)
    except VATInputError as e:
        print(f"❌ {e}")
        return False

    print(f"Gross: {format_currency(gross)}")
    print(f"Net:   {format_currency(result.net)}")
    print(f"VAT:   {format_currency(result.vat)}")
    return True


def cmd_add(net: str, rate: str = None) -> bool:
    """Add VAT to a VAT-exclusive amount."""
    try:
        result = add_vat(net, rate)
    except VATInputError as e:
        print(f"❌ {e}")
        return False

    print(f"Net:   {format_currency(net)}")
    print(f"VAT:   {format_currency(result.vat)}")
    print(f"Gross: {format_currency(result.gross)}")
    return True


def build_sample_books(year: int) -> VATBooks:
    """Sample vatable receipts and disbursements (12% VAT)."""
    sales = [
        make_book_entry(f"CR-{year}-001", f"{year}-01-15", "11200.00", "ABC Corporation", "Sale of goods", "INV-001"),
        make_book_entry(f"CR-{year}-002", f"{year}-02-20", "5640.00", "XYZ Company", "Service revenue", "INV-002"),
        ]
    purchases = [
        make_book_entry(f"CD-{year}-001", f"{year}-01-10", "5640.00", "Office Supplies Inc.", "Purchase of office supplies", "SUP-INV-001"),
        make_book_entry(f"CD-{year}-002", f"{year}-03-05", "14100.00", "Tech Solutions Ltd.", "IT equipment purchase", "SUP-INV-002"),
        ]
    return VATBooks(sales=sales, purchases=purchases)


def _print_book(title: str, entries: list[VATBookEntry]):
    print(f"\n{title}")
    print(f"{'Ref':<14} {'Date':<14} {'Counterparty':<24} {'Net':>14} {'VAT':>12} {'Gross':>14}")
    print("-" * 97)
    for e in entries:
        print(
            f"{e.reference:<14} {format_display_date(e.voucher_date):<14} {e.counterparty:<24} "
            f"{format_currency(e.net_amount):>14} {format_currency(e.vat_amount):>12} {format_currency(e.cash_amount):>14}"
            )
    if not entries:
        print("No entries found")


def cmd_sample_books(year: int) -> bool:
    """Print the sample VAT books, monthly totals and annual summary."""
    books = build_sample_books(year)

    _print_book("VAT Sales Book (Output VAT)", books.sales_book(year))
    _print_book("VAT Purchase Book (Input VAT)", books.purchase_book(year))

    print(f"\nMonthly VAT Summary {year}")
    print(f"{'Month':<12} {'Output VAT':>14} {'Input VAT':>14} {'Net VAT':>14}")
    print("-" * 57)
    for t in books.monthly_totals(year):
        print(f"{t.month_name:<12} {format_currency(t.output_vat):>14} {format_currency(t.input_vat):>14} {format_currency(t.net_vat):>14}")
        if t.is_quarter_end:
            print(f"{'  Q' + str(t.month // 3) + ' total':<12} {format_currency(t.quarterly_output):>14} "
                  f"{format_currency(t.quarterly_input):>14} {format_currency(t.quarterly_net):>14}")

    summary = books.summary(f"{year}-01-01", f"{year}-12-31")
    print(f"\nTotal Output VAT:  {format_currency(summary.output_vat)}")
    print(f"Total Input VAT:   {format_currency(summary.input_vat)}")
    print(f"Net VAT Payable:   {format_currency(summary.net_vat_payable)}")
    return True


def main():
    parser = argparse.ArgumentParser(
        description="PesoBooks VAT Console Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python vat_cli.py split 11200
  python vat_cli.py add 10000 --rate 0.12
  python vat_cli.py sample-books --year 2024
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # split
    split_parser = subparsers.add_parser("split", help="Split a gross amount into net and VAT")
    split_parser.add_argument("gross", help="VAT-inclusive amount")
    split_parser.add_argument("--rate", default=None, help="VAT rate as a fraction (default: 0.12)")

    # add
    add_parser = subparsers.add_parser("add", help="Add VAT to a net amount")
    add_parser.add_argument("net", help="VAT-exclusive amount")
    add_parser.add_argument("--rate", default=None, help="VAT rate as a fraction (default: 0.12)")

    # sample-books
    books_parser = subparsers.add_parser("sample-books", help="Print VAT books built from sample vouchers")
    books_parser.add_argument("--year", type=int, default=2024, help="Voucher year (default: 2024)")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    configure_logging()

    if args.command == "split":
        ok = cmd_split(args.gross, args.rate)
    elif args.command == "add":
        ok = cmd_add(args.net, args.rate)
    else:
        ok = cmd_sample_books(args.year)

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
