# topmark:header:start
#
#   project      : LeafPress
#   file         : options.py
#   file_relpath : src/leafpress/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, config, build
overrides) and their resolution logic, so commands and groups can stay thin.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from leafpress.cli.errors import LeafpressUsageError
from leafpress.config.logging import TRACE_LEVEL
from leafpress.config.types import DateSource

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the logging level from the ``-v`` / ``-q`` counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        The logging level as an integer.

    Raises:
        LeafpressUsageError: If both verbose and quiet flags are used.

    Behavior:
        Three or more -v flags set TRACE, two set DEBUG, one sets INFO.
        One or more -q flags set ERROR. Default is WARNING.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise LeafpressUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return TRACE_LEVEL
    if verbose_count == 2:  # -vv
        return logging.DEBUG
    if verbose_count == 1:  # -v
        return logging.INFO
    if quiet_count >= 1:  # -q
        return logging.ERROR
    return logging.WARNING


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity (-v info, -vv debug, -vvv trace).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report errors.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(*, cli_mode: ColorMode | None, stdout_isatty: bool | None = None) -> bool:
    """Determine whether color output should be enabled.

    Behavior:
        Honors --color and --no-color CLI flags, then the FORCE_COLOR and
        NO_COLOR environment variables; otherwise colors when stdout is a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        stdout_isatty = sys.stdout.isatty()
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` and ``--no-color`` options."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--no-config`` and ``--config`` options."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore leafpress.toml / pyproject.toml in the working directory.",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(file_okay=True, dir_okay=False),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def common_build_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the options that override ``[build]``, ``[dates]`` and ``[timeline]`` settings."""
    f = click.option(
        "--working-dir",
        "-C",
        "working_dir",
        type=click.Path(exists=True, file_okay=False, dir_okay=True),
        default=None,
        help="Run as if started in this directory.",
    )(f)
    f = click.option(
        "--content-dir",
        "content_dir",
        type=click.Path(file_okay=False, dir_okay=True),
        default=None,
        help="Directory holding the Markdown sources.",
    )(f)
    f = click.option(
        "--output-dir",
        "-o",
        "output_dir",
        type=click.Path(file_okay=False, dir_okay=True),
        default=None,
        help="Directory receiving the rendered pages.",
    )(f)
    f = click.option(
        "--jobs",
        "-j",
        "jobs",
        type=click.IntRange(min=1),
        default=None,
        help="Number of documents transformed concurrently.",
    )(f)
    f = click.option(
        "--date-source",
        "priority",
        multiple=True,
        type=click.Choice([s.value for s in DateSource]),
        help="Date source, in priority order (repeatable).",
    )(f)
    f = click.option(
        "--limit",
        "limit",
        type=click.IntRange(min=1),
        default=None,
        help="Maximum number of timeline events per page.",
    )(f)
    return f
