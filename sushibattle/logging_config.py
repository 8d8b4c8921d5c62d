"""Logging setup for the command-line and web entry points."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union

_JSON_FORMAT = '{"time":"%(asctime)s","level":"%(levelname)s","name":"%(name)s","message":"%(message)s"}'
_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_MARKER = "_sushibattle_handler"


def setup_logging(
    level: Union[str, int] = "INFO",
    format_json: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """Install a single stream handler on the root logger.

    Args:
        level: Level name (``"debug"``, ``"INFO"``...) or numeric level. Unknown
            names fall back to INFO.
        format_json: Emit one JSON object per line instead of plain text.
        stream: Destination, stderr by default.

    Returns:
        The installed handler. Calling again replaces it.
    """
    if isinstance(level, str):
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        log_level = level

    handler = logging.StreamHandler(stream or sys.stderr)
    if format_json:
        handler.setFormatter(logging.Formatter(_JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    setattr(handler, _MARKER, True)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, _MARKER, False):
            root.removeHandler(existing)
    root.setLevel(log_level)
    root.addHandler(handler)
    return handler


__all__ = ["setup_logging"]
