"""
Utility functions for PesoBooks.

This package contains:
- vat_utils: VAT arithmetic (gross/net/VAT conversions)
- decimal_utils: Amount and rate parsing, rounding to the cent
- currency_utils: Peso and plain-number formatting
- datetime_utils: Date parsing and display/input formatting
"""
