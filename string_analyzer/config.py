import os
import logging
from dotenv import load_dotenv

from string_analyzer.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Load environment variables only for local development
if os.path.exists('.env'):
    load_dotenv()
    logger.info("Loading from .env file (local development)")

PALINDROME_MODES = ("exact", "alphanumeric")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def get_database_url() -> str:
    """Return the record store URL, normalised for SQLAlchemy."""
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise ConfigurationError("DATABASE_URL is missing from the environment")

    # Hosting providers hand out plain mysql:// URLs
    if database_url.startswith("mysql://"):
        database_url = database_url.replace("mysql://", "mysql+pymysql://", 1)
    return database_url


def get_palindrome_mode() -> str:
    mode = os.getenv("PALINDROME_MODE", "exact").strip().lower()
    if mode not in PALINDROME_MODES:
        raise ConfigurationError(
            f"PALINDROME_MODE must be one of {', '.join(PALINDROME_MODES)}, got '{mode}'"
        )
    return mode


def get_port() -> int:
    return int(os.getenv("PORT", 8000))


def get_log_level() -> str:
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(
            f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got '{level}'"
        )
    return level
