"""
Application configuration module.
Loads environment variables and provides application-wide settings.
"""
import os
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import ConfigDict
from pydantic_settings import BaseSettings

# Get project root (two levels up from this file)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Global flag to indicate test mode (set via set_test_mode() or PESOBOOKS_TEST_MODE env var)
_test_mode = os.environ.get("PESOBOOKS_TEST_MODE", "").lower() in ("1", "true", "yes")


def set_test_mode(enabled: bool = True):
    """
    Enable/disable test mode globally.
    When enabled, file logging is turned off and the cached settings are dropped.

    Args:
        enabled: True to enable test mode, False to disable
    """
    global _test_mode
    _test_mode = enabled
    os.environ["PESOBOOKS_TEST_MODE"] = "1" if enabled else "0"
    get_settings.cache_clear()


def is_test_mode() -> bool:
    """Check if test mode is enabled."""
    return _test_mode


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env file.
    (Note: Environment variables take precedence over .env file)
    """
    PROJECT_NAME: str = "PesoBooks"
    VERSION: str = "0.1.0"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True

    # VAT (Philippines: 12% standard rate)
    DEFAULT_VAT_RATE: Decimal = Decimal("0.12")

    # Display
    CURRENCY: str = "PHP"  # ISO 4217 currency code
    LOCALE: str = "en_PH"  # Babel locale identifier
    DISPLAY_DATE_FORMAT: str = "MMM dd, yyyy"  # CLDR pattern, e.g. "Jan 15, 2024"

    model_config = ConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        case_sensitive=True,
        env_file_encoding='utf-8',
        extra='ignore',
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get settings instance.

    In test mode, file logging is always disabled.

    Returns:
        Settings: Application settings
    """
    settings = Settings()

    if is_test_mode():
        settings.LOG_TO_FILE = False

    return settings
