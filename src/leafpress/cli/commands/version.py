# topmark:header:start
#
#   project      : LeafPress
#   file         : version.py
#   file_relpath : src/leafpress/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LeafPress `version` command.

Prints the current LeafPress version as installed in the active Python environment.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from leafpress.cli.cmd_common import get_console, get_effective_verbosity
from leafpress.constants import LEAFPRESS_VERSION

if TYPE_CHECKING:
    from leafpress.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of LeafPress.",
)
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Show the current version of LeafPress."""
    console: ClickConsole = get_console(ctx)
    if get_effective_verbosity(ctx) <= logging.INFO:
        console.print(console.styled("LeafPress version:", bold=True, underline=True))
        console.print(f"    {console.styled(LEAFPRESS_VERSION, bold=True)}")
    else:
        console.print(console.styled(LEAFPRESS_VERSION, bold=True))
