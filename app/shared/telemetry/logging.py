"""Logging configuration for the application."""

import logging
import sys

from app.core.config import Settings, get_settings
from app.shared.context import RequestIdLogFilter

# Loggers from libraries that are noisy at DEBUG and never carry portal context.
_QUIET_LOGGERS = ("httpx", "httpcore", "botocore", "urllib3")


def setup_logging(settings: Settings | None = None) -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout, each line tagged with the current request id.
    Third-party HTTP/storage clients stay at WARNING so request URLs with
    signed query strings do not reach the logs.
    """
    s = settings or get_settings()
    log_level = logging.DEBUG if s.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdLogFilter())
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
        handlers=[handler],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
