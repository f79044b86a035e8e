"""Process-wide logging setup."""

import logging

from src.core.config import settings

_LOGGING_CONFIGURED = False


def configure_logging() -> None:
    """Configure root logging from `LOG_LEVEL`; later calls are no-ops."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGING_CONFIGURED = True
