"""Logging configuration."""

import logging
import os

from textual.logging import TextualHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """
    Route log records to the Textual devtools console.

    The root logger gets a single TextualHandler; nothing is written to the
    terminal. The level defaults to MUNKAIDO_LOG_LEVEL or WARNING.
    """
    level_name = (level or os.environ.get("MUNKAIDO_LOG_LEVEL", "WARNING")).upper()
    handler = TextualHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level_name, logging.WARNING))
