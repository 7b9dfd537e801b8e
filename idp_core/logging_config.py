"""
Console logging for the mock providers. Plain text to stderr; level from LOG_LEVEL.
"""
import logging
import os
import sys

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def configure_logging(level: str | None = None) -> None:
    """Install a single stderr handler on the root logger. Safe to call more than once."""
    global _handler
    level_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(_FORMAT))
    if _handler not in root.handlers:
        root.addHandler(_handler)
