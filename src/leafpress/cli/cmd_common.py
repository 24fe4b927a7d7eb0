# topmark:header:start
#
#   project      : LeafPress
#   file         : cmd_common.py
#   file_relpath : src/leafpress/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by multiple CLI commands:
configuration resolution, fatal-error mapping and diagnostics output.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from leafpress.cli.errors import LeafpressConfigError, LeafpressFileNotFoundError
from leafpress.config.keys import Cli
from leafpress.config.logging import get_logger
from leafpress.config.model import MutableConfig
from leafpress.config.types import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from leafpress.cli.console import ClickConsole
    from leafpress.config.logging import LeafpressLogger
    from leafpress.config.model import Config
    from leafpress.core.diagnostics import Diagnostic

logger: LeafpressLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ClickConsole:
    """Return the console stored on the Click context by the group callback."""
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context, config: Config | None = None) -> int:
    """Return the effective program-output verbosity (a logging level).

    Resolution order:
        1. ``Config.verbosity_level`` if set (not None)
        2. ``ctx.obj["verbosity_level"]`` if present
        3. WARNING
    """
    cfg_level = config.verbosity_level if config is not None else None
    if cfg_level is not None:
        return int(cfg_level)
    return int(ctx.obj.get("verbosity_level", 30))


def build_config(
    ctx: click.Context,
    *,
    no_config: bool,
    config_paths: Iterable[str],
    **overrides: Any,
) -> Config:
    """Resolve the layered configuration for a command and freeze it.

    Args:
        ctx (click.Context): Current Click context (verbosity lives in ``ctx.obj``).
        no_config (bool): Skip config files found in the working directory.
        config_paths (Iterable[str]): Explicit ``--config`` files, applied last.
        **overrides (Any): CLI overrides keyed like `leafpress.config.keys.Cli`.

    Returns:
        Config: The frozen configuration.

    Raises:
        LeafpressFileNotFoundError: If an explicit config file is missing.
        LeafpressConfigError: If the merged configuration is invalid.
    """
    working_dir: Path = Path(overrides.get(Cli.WORKING_DIR) or Path.cwd()).resolve()
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            working_dir=working_dir,
            extra_config_files=[Path(p) for p in config_paths],
            use_discovery=not no_config,
        )
    except FileNotFoundError as e:
        raise LeafpressFileNotFoundError(str(e)) from e

    args: dict[str, Any] = dict(overrides)
    args[Cli.WORKING_DIR] = working_dir
    args[Cli.VERBOSITY] = ctx.obj.get("verbosity_level")
    draft.apply_cli_args(args)
    try:
        config: Config = draft.freeze()
    except ConfigError as e:
        raise LeafpressConfigError(str(e)) from e
    logger.debug("Effective config: %s", config)
    return config


@contextmanager
def fatal_errors() -> Iterator[None]:
    """Map corpus-wide fatal errors onto CLI errors with sysexits codes."""
    try:
        yield
    except (FileNotFoundError, NotADirectoryError) as e:
        raise LeafpressFileNotFoundError(str(e)) from e
    except ConfigError as e:
        raise LeafpressConfigError(str(e)) from e


def render_diagnostics(
    console: ClickConsole,
    items: Sequence[tuple[str, Diagnostic]],
) -> None:
    """Print ``(source, diagnostic)`` pairs to stderr, one per line, colored by level."""
    for source, diag in items:
        label: str = f"[{diag.level.value}]"
        if console.enable_color:
            label = diag.level.color(label)
        click.echo(
            f"{source}: {label} {diag.message}", file=console.err, color=console.enable_color
        )
