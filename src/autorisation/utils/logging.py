"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide helper to obtain loggers below the ``autorisation`` namespace.
    - Allow an optional verbose/debug mode driven by the CLI.

Notes/Edge cases:
    - :func:`configure_logging` is idempotent: calling it again only adjusts
      the level, it never stacks handlers.
    - The handler looks up ``sys.stderr`` on every record so that redirected
      or captured streams are honoured.
    - Library modules only log; user facing messages are echoed by the CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

ROOT_LOGGER = "autorisation"
_FORMAT = "%(levelname)s %(name)s: %(message)s"


class _StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Stream handler bound to whatever ``sys.stderr`` currently is."""

    @property
    def stream(self) -> TextIO:  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value: TextIO) -> None:
        """Drop the value assigned by ``StreamHandler.__init__``.

        Records always go to the live ``sys.stderr``, so a stream captured at
        construction time is never kept.
        """


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` placed under the package namespace."""

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger and set its level."""

    logger = logging.getLogger(ROOT_LOGGER)
    if not any(isinstance(h, _StderrHandler) for h in logger.handlers):
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


__all__ = ["ROOT_LOGGER", "get_logger", "configure_logging"]
