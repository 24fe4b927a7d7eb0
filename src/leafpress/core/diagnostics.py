# topmark:header:start
#
#   project      : LeafPress
#   file         : diagnostics.py
#   file_relpath : src/leafpress/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics support.

Diagnostics are the user-facing record of recoverable problems found while
building (invalid dates, failed stages, bad config values). They are attached to
the document (or config) they concern so the CLI can summarize them after a run.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from leafpress.config.logging import get_logger

if TYPE_CHECKING:
    from leafpress.config.logging import LeafpressLogger

logger: LeafpressLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics collected during processing.

    Levels map to terminal colors and are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Returns:
            Callable[[str], str]: The `yachalk` color function associated with this severity level.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level and message."""

    level: DiagnosticLevel
    message: str


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_info + self.n_warning + self.n_error


def compute_diagnostic_stats(diags: Sequence[Diagnostic]) -> DiagnosticStats:
    """Return per-level counts for a sequence of diagnostics."""
    n_info: int = sum(1 for d in diags if d.level == DiagnosticLevel.INFO)
    n_warn: int = sum(1 for d in diags if d.level == DiagnosticLevel.WARNING)
    n_err: int = sum(1 for d in diags if d.level == DiagnosticLevel.ERROR)
    return DiagnosticStats(n_info=n_info, n_warning=n_warn, n_error=n_err)


@dataclass
class DiagnosticLog:
    """Mutable collection of diagnostics for one document or config source.

    Provides convenience helpers for adding diagnostics at a given level and a
    `stats` helper for reporting.
    """

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.level.value, diagnostic.message)

    def add_info(self, message: str) -> None:
        """Add an ``info`` diagnostic to the log.

        Args:
            message: The diagnostic message.
        """
        self._add(Diagnostic(DiagnosticLevel.INFO, message))

    def add_warning(self, message: str) -> None:
        """Add a ``warning`` diagnostic to the log.

        Args:
            message: The diagnostic message.
        """
        self._add(Diagnostic(DiagnosticLevel.WARNING, message))

    def add_error(self, message: str) -> None:
        """Add an ``error`` diagnostic to the log.

        Args:
            message: The diagnostic message.
        """
        self._add(Diagnostic(DiagnosticLevel.ERROR, message))

    def extend(self, other: Iterable[Diagnostic]) -> None:
        """Append all diagnostics from ``other``."""
        self.items.extend(other)

    @property
    def stats(self) -> DiagnosticStats:
        """Per-level counts of the collected diagnostics."""
        return compute_diagnostic_stats(self.items)
