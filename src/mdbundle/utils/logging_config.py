"""Logging setup shared by the command line and library entry points."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord has; anything else came in through ``extra=``.
_RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        extras = {key: value for key, value in record.__dict__.items() if key not in _RESERVED}
        if extras:
            text += " " + " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return text


def configure_logging(level: int = logging.WARNING, stream: TextIO | None = None) -> None:
    """Send mdbundle logs to ``stream`` (stderr by default) at ``level``."""
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ExtraFormatter(_FORMAT))
    root = logging.getLogger("mdbundle")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
