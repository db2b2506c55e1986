"""Logging setup shared by the HTTP app and the scripts."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stdout handler to the ``passkeep`` logger."""
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    app_logger = logging.getLogger("passkeep")
    app_logger.setLevel(log_level)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    app_logger.addHandler(handler)
