"""
Localization utilities.

Resolves locale identifiers to Babel Locale objects. Locale is always an
explicit argument in PesoBooks (defaulting to settings.LOCALE); the process
locale is never consulted, so output is the same on every machine.
"""

import structlog
from babel import Locale, UnknownLocaleError

logger = structlog.get_logger(__name__)

FALLBACK_LOCALE = "en_PH"


def get_babel_locale(identifier: str) -> Locale:
    """
    Get Babel Locale object for a locale identifier.
    Falls back to en_PH if the identifier is not supported.

    Args:
        identifier: Locale like 'en_PH', 'en-PH', 'fil_PH' or a bare language code

    Returns:
        Babel Locale object

    Examples:
        >>> get_babel_locale('en-PH').territory
        'PH'
        >>> get_babel_locale('xx_invalid').territory  # Falls back to en_PH
        'PH'
    """
    try:
        return Locale.parse(identifier.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError, AttributeError) as e:
        logger.warning(
            "Locale not supported, falling back",
            locale=identifier,
            fallback=FALLBACK_LOCALE,
            error=str(e)
            )
        return Locale.parse(FALLBACK_LOCALE)
