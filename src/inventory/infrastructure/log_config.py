"""Centralized logging configuration.

Usage:
    from inventory.infrastructure.log_config import setup_logging
    setup_logging("INFO")   # Call once at startup
"""

from __future__ import annotations

import logging
import sys


def setup_logging(level: str = "WARNING") -> None:
    """Set the root level and make sure log records reach stderr."""
    root = logging.getLogger()
    root.setLevel(_parse_level(level))

    # Test runners and embedding applications may already own a handler.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(levelname)-8s %(name)s — %(message)s")
        )
        root.addHandler(handler)

    logging.getLogger(__name__).debug("Logging configured — root=%s", level)


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
