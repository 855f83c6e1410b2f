"""Logging setup for buildsvc processes.

Library modules only create module loggers. The process entry point calls
configure_logging() once to send records to stderr in logfmt, one line per
record, with a UTC timestamp and the calling file and line.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import TextIO

_HANDLER_NAME = "buildsvc"


def _logfmt_value(value: object) -> str:
    """Quote a logfmt value when it contains spaces, quotes or '='."""
    text = str(value)
    if text and not any(c in text for c in ' "=\n\t'):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class LogfmtFormatter(logging.Formatter):
    """Format records as logfmt key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        pairs: list[tuple[str, object]] = [
            ("ts", ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")),
            ("caller", f"{record.filename}:{record.lineno}"),
            ("level", record.levelname.lower()),
            ("logger", record.name),
            ("msg", record.getMessage()),
        ]
        if record.exc_info:
            pairs.append(("err", self.formatException(record.exc_info)))
        return " ".join(f"{key}={_logfmt_value(value)}" for key, value in pairs)


def configure_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Handler:
    """Install the logfmt handler on the root logger.

    Calling this again replaces the previously installed handler rather
    than adding a second one.

    Args:
        level: Logging level name.
        stream: Output stream (stderr if not set).

    Returns:
        The installed handler.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(level.upper())
    return handler


__all__ = ["LogfmtFormatter", "configure_logging"]
