# topmark:header:start
#
#   project      : LeafPress
#   file         : build.py
#   file_relpath : src/leafpress/cli/commands/build.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LeafPress `build` command.

Loads the content directory, runs the transform stages and the emitters, and
writes the rendered pages to the output directory. Recoverable problems
(invalid dates, failed stages) are summarized after the run; the exit code is
non-zero only for fatal errors.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

import click

from leafpress.cli.cmd_common import (
    build_config,
    fatal_errors,
    get_console,
    get_effective_verbosity,
    render_diagnostics,
)
from leafpress.cli.errors import LeafpressIOError
from leafpress.cli.options import common_build_options, common_config_options
from leafpress.content.loader import iter_markdown_files
from leafpress.pipeline.engine import build

if TYPE_CHECKING:
    from leafpress.cli.console import ClickConsole
    from leafpress.config.model import Config
    from leafpress.content.document import Document
    from leafpress.pipeline.engine import BuildResult


@click.command(
    name="build",
    help="Render the Markdown notes of the content directory into HTML pages.",
)
@common_config_options
@common_build_options
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Run the pipeline without writing any file.",
)
@click.pass_context
def build_command(
    ctx: click.Context,
    *,
    no_config: bool,
    config_paths: tuple[str, ...],
    dry_run: bool,
    **overrides: Any,
) -> None:
    """Build the site.

    Args:
        ctx (click.Context): Click context.
        no_config (bool): Ignore config files in the working directory.
        config_paths (tuple[str, ...]): Extra config files.
        dry_run (bool): Do not write output files.
        **overrides (Any): Build overrides (see `common_build_options`).
    """
    console: ClickConsole = get_console(ctx)
    config: Config = build_config(
        ctx, no_config=no_config, config_paths=config_paths, **overrides
    )
    vlevel: int = get_effective_verbosity(ctx, config)

    with fatal_errors():
        if vlevel == logging.WARNING:
            n_files: int = len(iter_markdown_files(config.content_path))
            lock = threading.Lock()
            with click.progressbar(length=n_files, label="Building", file=console.err) as bar:

                def _advance(_doc: Document) -> None:
                    with lock:
                        bar.update(1)

                result: BuildResult = build(config, write=not dry_run, on_document=_advance)
        else:
            result = build(config, write=not dry_run)

    render_diagnostics(
        console,
        [(str(doc.file_path), diag) for doc, diag in result.diagnostics],
    )

    if result.error_code is not None:
        raise LeafpressIOError(f"Some pages could not be written to {config.output_path}")

    if vlevel < logging.ERROR:
        action: str = "Rendered" if dry_run else "Built"
        console.print(
            f"{action} {len(result.artifacts)} page(s) from {len(result.documents)} document(s)"
            + ("" if dry_run else f" into {config.output_path}")
        )
