# topmark:header:start
#
#   project      : LeafPress
#   file         : logging.py
#   file_relpath : src/leafpress/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Logging setup for LeafPress.

Modules log through `get_logger(__name__)`. On top of the standard levels,
LeafPress has a TRACE level below DEBUG for per-stage, per-document lines
(``-vvv`` or ``LEAFPRESS_LOG_LEVEL=TRACE``).

Log records go to stderr, colored by level with ``yachalk``, so that command
output on stdout (``leafpress timeline``) stays machine-readable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Any, Final, cast

from yachalk import chalk

from leafpress.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Callable

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

logging.addLevelName(TRACE_LEVEL, "TRACE")

# Warnings (invalid dates, skipped files) stay visible in non-verbose runs.
DEFAULT_LOG_LEVEL: Final[int] = logging.WARNING

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
VERBOSE_LOG_FORMAT: Final[str] = "[%(levelname)s] %(name)s:%(lineno)d: %(message)s"

_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Highest threshold first; a record takes the first style at or below its level.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class LeafpressLogger(logging.Logger):
    """Logger with a `trace` method for the TRACE level."""

    def trace(self, msg: object, *args: object, **kwargs: Any) -> None:
        """Log ``msg % args`` at TRACE level (same keywords as `logging.Logger.debug`)."""
        if self.isEnabledFor(TRACE_LEVEL):
            # Report the caller's location, not this method's.
            kwargs.setdefault("stacklevel", 2)
            self._log(TRACE_LEVEL, msg, args, **kwargs)


logging.setLoggerClass(LeafpressLogger)


class LevelColorFormatter(logging.Formatter):
    """Color each formatted record by its level."""

    def format(self, record: logging.LogRecord) -> str:
        message: str = super().format(record)
        for threshold, style in _LEVEL_STYLES:
            if record.levelno >= threshold:
                return style(message)
        return message


class _LeafpressHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Marker class so `setup_logging` only ever replaces its own handler."""


def parse_log_level(text: str) -> int | None:
    """Return the level for a name (``"debug"``, ``"TRACE"``) or number (``"10"``).

    Returns:
        int | None: The level, or None when ``text`` is not a known level.
    """
    value: str = text.strip().upper()
    if value.isdigit():
        return int(value)
    return _LEVEL_NAMES.get(value)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``LEAFPRESS_LOG_LEVEL``, or None when unset or unknown."""
    raw: str | None = os.environ.get(LOG_LEVEL_ENV_VAR)
    return parse_log_level(raw) if raw else None


def setup_logging(level: int | None = None) -> None:
    """Send log records at ``level`` and above to stderr.

    Calling it again (each CLI invocation does) swaps the previous LeafPress
    handler for a new one; handlers installed by others are left alone.

    Args:
        level (int | None): Threshold; None consults ``LEAFPRESS_LOG_LEVEL`` and
            falls back to WARNING.
    """
    if level is None:
        level = resolve_env_log_level() or DEFAULT_LOG_LEVEL

    root: logging.Logger = logging.getLogger()
    root.setLevel(level)
    for handler in [h for h in root.handlers if isinstance(h, _LeafpressHandler)]:
        root.removeHandler(handler)

    handler = _LeafpressHandler(sys.stderr)
    handler.setFormatter(
        LevelColorFormatter(LOG_FORMAT if level >= logging.INFO else VERBOSE_LOG_FORMAT)
    )
    root.addHandler(handler)


def get_logger(name: str) -> LeafpressLogger:
    """Return the `LeafpressLogger` called ``name`` (usually ``__name__``)."""
    return cast("LeafpressLogger", logging.getLogger(name))
