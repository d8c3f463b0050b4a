"""Centralized logging configuration for the ``spendlog`` package.

- ``configure_logging(...)``: attach a single ``RichHandler`` to the package
  root logger. Called once by the CLI at startup.
- ``get_logger(name)``: acquire a logger, making sure the package root logger
  has at least a ``NullHandler`` when nothing has been configured.

Library modules never attach their own handlers.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

_PKG_LOGGER_NAME = "spendlog"
_ENV_LEVEL = "SPENDLOG_LOG_LEVEL"
_configured = False


def parse_level(level: int | str | None) -> int:
    """Resolve a level name, number, or None (env var, then WARNING)."""
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        return logging.WARNING
    env_val = os.getenv(_ENV_LEVEL)
    if env_val:
        return parse_level(env_val)
    return logging.WARNING


def configure_logging(level: int | str | None = None) -> None:
    """Configure the package root logger exactly once.

    Args:
        level: Level as int or name (e.g. "INFO"). When None, the
            SPENDLOG_LOG_LEVEL environment variable is used, else WARNING.
    """
    global _configured
    if _configured:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    resolved = parse_level(level)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setLevel(resolved)

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, silent until configure_logging() runs."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
