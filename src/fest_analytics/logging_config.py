"""Logging setup shared by the API server and report jobs"""

import logging
import sys

from fest_analytics.config import config

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"

# Third-party loggers that flood INFO output during large exports
NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")


class BelowWarningFilter(logging.Filter):
    """Pass DEBUG and INFO records only; WARNING and above go to stderr"""

    def filter(self, record):
        return record.levelno < logging.WARNING


def _stream_handler(stream, level: int, below_warning: bool = False):
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    if below_warning:
        handler.addFilter(BelowWarningFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(level_name: str | None = None):
    """
    Route DEBUG/INFO to stdout and WARNING/ERROR to stderr.

    Args:
        level_name: Overrides the configured LOG_LEVEL when given
    """
    level_name = level_name or config.get("log_level", "INFO")
    level = getattr(logging, level_name.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_stream_handler(sys.stdout, logging.DEBUG, True))
    root_logger.addHandler(_stream_handler(sys.stderr, logging.WARNING))

    if level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass __name__)."""
    return logging.getLogger(name)
