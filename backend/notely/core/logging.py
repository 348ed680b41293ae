"""
Process-wide logging setup.

Development runs are verbose; everywhere else only warnings and errors are
emitted unless LOG_LEVEL or DEBUG says otherwise.
"""
import logging

from notely.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def resolve_log_level(settings: Settings) -> int:
    """Pick the root log level from settings.

    Precedence: explicit LOG_LEVEL, then DEBUG flag, then ENVIRONMENT.
    """
    if settings.LOG_LEVEL:
        level_name = settings.LOG_LEVEL.upper()
        if level_name in VALID_LEVELS:
            return getattr(logging, level_name)
        logging.getLogger(__name__).warning(
            f"Invalid LOG_LEVEL value: {settings.LOG_LEVEL}. Falling back to environment default."
        )

    if settings.DEBUG or settings.is_development:
        return logging.DEBUG
    return logging.WARNING


def configure_logging(settings: Settings) -> int:
    """Configure the root logger and return the level that was applied."""
    level = resolve_log_level(settings)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

    # Third-party HTTP clients are chatty at DEBUG
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(max(level, logging.INFO))

    return level
