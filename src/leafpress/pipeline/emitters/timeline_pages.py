# topmark:header:start
#
#   project      : LeafPress
#   file         : timeline_pages.py
#   file_relpath : src/leafpress/pipeline/emitters/timeline_pages.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Emit the timeline and recent-notes pages.

Two synthetic pages share one filtered document set:

- ``timeline/index`` ("Timeline"): created and modified events, compacted.
- ``recent/index`` ("Recent Notes"): created events only.

Both are truncated to the configured limit and rendered with the
`Timeline` component as page body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from leafpress.components.builtins import Timeline
from leafpress.config.logging import get_logger
from leafpress.constants import HTML_EXTENSION
from leafpress.layout.model import LayoutSpec
from leafpress.pipeline.emitters.base import BaseEmitter, OutputArtifact
from leafpress.pipeline.emitters.helpers import synthetic_document
from leafpress.timeline.events import build_timeline, filter_documents

if TYPE_CHECKING:
    from leafpress.components.render import StaticResources
    from leafpress.config.logging import LeafpressLogger
    from leafpress.content.document import CorpusEntry, Document
    from leafpress.pipeline.context import PipelineContext
    from leafpress.timeline.events import TimelineEvent

logger: LeafpressLogger = get_logger(__name__)

TIMELINE_SLUG: Final[str] = "timeline/index"
TIMELINE_TITLE: Final[str] = "Timeline"
RECENT_SLUG: Final[str] = "recent/index"
RECENT_TITLE: Final[str] = "Recent Notes"


@dataclass
class TimelinePages(BaseEmitter):
    """Timeline and recent-notes pages.

    Attributes:
        limit (int | None): Events per page; None uses ``[timeline] limit``.
        disallowed_slugs (frozenset[str] | None): None uses ``[timeline] disallowed_slugs``.
        disallowed_tags (frozenset[str] | None): None uses ``[timeline] disallowed_tags``.
    """

    name: str = "TimelinePages"
    limit: int | None = None
    disallowed_slugs: frozenset[str] | None = None
    disallowed_tags: frozenset[str] | None = None
    body: Timeline = field(default_factory=Timeline)

    def __post_init__(self) -> None:
        self.page_layout = self.page_layout.merged_with(LayoutSpec(body=(self.body,)))

    def emit(
        self,
        ctx: PipelineContext,
        corpus: list[CorpusEntry],
        resources: StaticResources,
    ) -> list[OutputArtifact]:
        cfg = ctx.config
        limit: int = self.limit if self.limit is not None else cfg.timeline_limit
        documents: list[Document] = filter_documents(
            (entry["data"] for _key, entry in corpus),
            disallowed_slugs=(
                self.disallowed_slugs if self.disallowed_slugs is not None else cfg.disallowed_slugs
            ),
            disallowed_tags=(
                self.disallowed_tags if self.disallowed_tags is not None else cfg.disallowed_tags
            ),
        )

        timeline: list[TimelineEvent] = build_timeline(documents, limit=limit)
        recent: list[TimelineEvent] = build_timeline(documents, created_only=True, limit=limit)
        logger.info(
            "%s: %d timeline event(s), %d recent event(s)", self.name, len(timeline), len(recent)
        )

        return [
            self._page(ctx, corpus, resources, TIMELINE_SLUG, TIMELINE_TITLE, timeline),
            self._page(ctx, corpus, resources, RECENT_SLUG, RECENT_TITLE, recent),
        ]

    def _page(
        self,
        ctx: PipelineContext,
        corpus: list[CorpusEntry],
        resources: StaticResources,
        slug: str,
        title: str,
        events: list[TimelineEvent],
    ) -> OutputArtifact:
        page: Document = synthetic_document(slug, title)
        html: str = self.render(ctx, page, resources, events=events, corpus=corpus)
        return OutputArtifact(slug=slug, extension=HTML_EXTENSION, content=html)
