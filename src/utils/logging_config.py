"""Structured logger setup shared across handlers and services."""

import logging

from pythonjsonlogger import jsonlogger

from config.settings import log_level_from_environment

_LOG_FORMAT = "%(levelname)s %(name)s %(message)s %(asctime)s"


def _resolve_level() -> int:
    """Map the configured log level name to a logging level, falling back to INFO."""
    level = getattr(logging, log_level_from_environment().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Configure a JSON logger once per name and reuse it.

    Context such as correlation ids travels through ``extra=`` so every field
    lands as its own JSON key in CloudWatch.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        jsonlogger.JsonFormatter(_LOG_FORMAT, rename_fields={"levelname": "level"})
    )
    logger.addHandler(handler)
    logger.setLevel(_resolve_level())
    logger.propagate = False
    return logger
