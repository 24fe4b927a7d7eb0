# topmark:header:start
#
#   project      : LeafPress
#   file         : main.py
#   file_relpath : src/leafpress/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LeafPress command line entry point.

Key ideas:
- Group-level options (verbosity, color) are initialized once and placed into
  ``ctx.obj``.
- Subcommands share config resolution and error mapping through
  `leafpress.cli.cmd_common`.
"""

from __future__ import annotations

import click

from leafpress.cli.commands.build import build_command
from leafpress.cli.commands.timeline import timeline_command
from leafpress.cli.commands.version import version_command
from leafpress.cli.console import ClickConsole
from leafpress.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from leafpress.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging and color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    level_cli: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = level_cli

    # LEAFPRESS_LOG_LEVEL overrides the CLI level for internal logging only
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env if level_env is not None else level_cli
    setup_logging(level=ctx.obj["log_level"])

    effective_color_mode: ColorMode = (
        ColorMode.NEVER if no_color else ColorMode(color_mode or ColorMode.AUTO)
    )
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="LeafPress: build a static site and timeline from Markdown notes.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the LeafPress CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'leafpress build' to render the site.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(build_command)

cli.add_command(timeline_command)

if __name__ == "__main__":
    cli()
