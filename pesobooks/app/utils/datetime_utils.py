"""
Date and time utilities for PesoBooks.

Provides ISO date parsing and the date
formatters used on vouchers, books and date input fields.
"""
from datetime import datetime, timezone, date
from typing import Optional, Union

from babel.dates import format_date

from pesobooks.app.config import get_settings
from pesobooks.app.utils.translation_utils import get_babel_locale

DateLike = Union[str, date, datetime, None]


class InvalidDateError(ValueError):
    """Raised when a value cannot be interpreted as a calendar date."""
    pass


def parse_ISO_date(v) -> date:
    """
    Convert an ISO string, date or datetime to a date.

    Strings may be a plain date ("2024-01-15") or a full ISO datetime
    ("2024-01-15T08:30:00+08:00"). Aware datetimes are converted to UTC
    before the date is taken; naive datetimes keep their own date.

    Raises:
        InvalidDateError: If the string is not ISO formatted or the type is unsupported
    """
    # datetime is a subclass of date: check it first
    if isinstance(v, datetime):
        if v.tzinfo is not None:
            v = v.astimezone(timezone.utc)
        return v.date()
    if isinstance(v, date):
        return v
    if isinstance(v, str):
        text = v.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return parse_ISO_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError as e:
            raise InvalidDateError(f"Input must be an ISO date string (YYYY-MM-DD). Error: {e}")
    raise InvalidDateError(f"Input must be a str, date or datetime, got {type(v)}")


def _is_blank(value: DateLike) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def format_display_date(value: DateLike, locale: Optional[str] = None, pattern: Optional[str] = None) -> str:
    """
    Render a date for display, e.g. "Jan 15, 2024".

    Args:
        value: ISO string, date or datetime. None or "" renders as "".
        locale: Babel locale (default: settings.LOCALE)
        pattern: CLDR date pattern (default: settings.DISPLAY_DATE_FORMAT)

    Raises:
        InvalidDateError: If value is a non-empty string that is not an ISO date

    Examples:
        >>> format_display_date("2024-01-15")
        'Jan 15, 2024'
        >>> format_display_date(None)
        ''
    """
    if _is_blank(value):
        return ""
    settings = get_settings()
    return format_date(
        parse_ISO_date(value),
        format=pattern or settings.DISPLAY_DATE_FORMAT,
        locale=get_babel_locale(locale or settings.LOCALE),
        )


def format_input_date(value: DateLike) -> str:
    """
    Render a date as YYYY-MM-DD, the value format of an HTML date input.

    Examples:
        >>> format_input_date("2024-01-15")
        '2024-01-15'
        >>> format_input_date("2024-01-15T01:00:00+08:00")
        '2024-01-14'
        >>> format_input_date(None)
        ''
    """
    if _is_blank(value):
        return ""
    return parse_ISO_date(value).isoformat()
