"""Process-wide logging setup."""

import logging

from commanders_vault.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """
    Configure the root logger from settings.

    Debug mode forces DEBUG regardless of `log_level`. Noisy HTTP client
    loggers stay at WARNING unless debugging.
    """
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

    if not settings.debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
