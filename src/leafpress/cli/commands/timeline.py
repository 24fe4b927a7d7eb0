# topmark:header:start
#
#   project      : LeafPress
#   file         : timeline.py
#   file_relpath : src/leafpress/cli/commands/timeline.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LeafPress `timeline` command.

Runs the transform stages and prints the timeline (or, with ``--recent``, the
recently created notes) to the console instead of rendering pages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from leafpress.cli.cmd_common import build_config, fatal_errors, get_console, render_diagnostics
from leafpress.cli.options import common_build_options, common_config_options
from leafpress.constants import COMPACT_DATE_FORMAT
from leafpress.pipeline.engine import transform_corpus
from leafpress.timeline.events import EventKind, build_timeline

if TYPE_CHECKING:
    from leafpress.cli.console import ClickConsole
    from leafpress.config.model import Config
    from leafpress.pipeline.context import PipelineContext
    from leafpress.timeline.events import TimelineEvent

_KIND_COLORS: dict[EventKind, str] = {
    EventKind.CREATED: "green",
    EventKind.MODIFIED: "blue",
    EventKind.COMBINED: "cyan",
}


@click.command(
    name="timeline",
    help="Print the timeline of note activity.",
)
@common_config_options
@common_build_options
@click.option(
    "--recent",
    is_flag=True,
    default=False,
    help="Only list created notes (the 'Recent Notes' view).",
)
@click.pass_context
def timeline_command(
    ctx: click.Context,
    *,
    no_config: bool,
    config_paths: tuple[str, ...],
    recent: bool,
    **overrides: Any,
) -> None:
    """Print timeline events, newest first."""
    console: ClickConsole = get_console(ctx)
    config: Config = build_config(
        ctx, no_config=no_config, config_paths=config_paths, **overrides
    )

    with fatal_errors():
        pctx: PipelineContext = transform_corpus(config)

    render_diagnostics(
        console,
        [(str(doc.file_path), diag) for doc in pctx.documents for diag in doc.metadata.diagnostics],
    )

    events: list[TimelineEvent] = build_timeline(
        pctx.documents,
        created_only=recent,
        disallowed_slugs=config.disallowed_slugs,
        disallowed_tags=config.disallowed_tags,
        limit=config.timeline_limit,
    )
    if not events:
        console.print("No events found")
        return

    width: int = max(len(e.kind.label) for e in events)
    for event in events:
        when: str = event.timestamp.astimezone().strftime(COMPACT_DATE_FORMAT)
        kind: str = console.styled(event.kind.label.ljust(width), fg=_KIND_COLORS[event.kind])
        console.print(f"{when}  {kind}  {console.styled(event.title, bold=True)} ({event.slug})")
