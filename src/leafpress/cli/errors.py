# topmark:header:start
#
#   project      : LeafPress
#   file         : errors.py
#   file_relpath : src/leafpress/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the LeafPress CLI.

Usage:
    Raise these exceptions in CLI commands to signal fatal errors with
    standardized messages and sysexits-style exit codes.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from leafpress.core.exit_codes import ExitCode


class LeafpressError(click.ClickException):
    """Base class for all LeafPress CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class LeafpressUsageError(LeafpressError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class LeafpressConfigError(LeafpressError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class LeafpressFileNotFoundError(LeafpressError):
    """Error when the content directory or a config file does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class LeafpressIOError(LeafpressError):
    """Error for I/O errors writing the output."""

    exit_code = ExitCode.IO_ERROR
