"""Logging setup, done once at startup by `init_db()`. Library modules only ever call logging.getLogger(__name__)."""

import logging
import sys
from typing import Optional

from src.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a single stderr handler to the root logger. Safe to call more than once."""
    resolved_level = (level or get_settings().log_level).upper()
    root = logging.getLogger()
    root.setLevel(resolved_level)

    if not any(getattr(handler, "_chess_handler", False) for handler in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._chess_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
