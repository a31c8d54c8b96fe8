"""
Services package.
Business logic built on the VAT utilities.

- VATBooks: Sales/Purchase books, monthly totals, period summaries
"""
from pesobooks.app.services.vat_books import (
    VATBooks,
    VATBookError,
    make_book_entry,
    quarter_range,
    )

__all__ = [
    "VATBooks",
    "VATBookError",
    "make_book_entry",
    "quarter_range",
    ]
