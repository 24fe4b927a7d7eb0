# topmark:header:start
#
#   project      : LeafPress
#   file         : base.py
#   file_relpath : src/leafpress/pipeline/emitters/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base types for emitters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from leafpress.components.render import render_page
from leafpress.components.types import RenderProps
from leafpress.layout.model import LayoutSpec, compose

if TYPE_CHECKING:
    from collections.abc import Sequence

    from markdown_it.tree import SyntaxTreeNode

    from leafpress.components.render import StaticResources
    from leafpress.components.types import Component
    from leafpress.content.document import CorpusEntry, Document
    from leafpress.layout.model import ResolvedLayout
    from leafpress.pipeline.context import PipelineContext
    from leafpress.timeline.events import TimelineEvent


@dataclass(frozen=True)
class OutputArtifact:
    """One rendered output file, addressed by slug and extension."""

    slug: str
    extension: str
    content: str

    @property
    def relative_path(self) -> str:
        """Path of the artifact relative to the output directory."""
        return f"{self.slug}{self.extension}"


@dataclass
class BaseEmitter:
    """Reusable foundation for page emitters.

    The page layout is resolved once from the three layers. Subclasses implement
    ``emit()`` and call `render` for each page.

    Attributes:
        name (str): Emitter name for logs.
        shared (LayoutSpec): Layout layer shared by every page.
        page_layout (LayoutSpec): Layout layer for this page type.
        overrides (LayoutSpec | None): Optional replacements for named slots.
    """

    name: str
    shared: LayoutSpec = field(default_factory=LayoutSpec)
    page_layout: LayoutSpec = field(default_factory=LayoutSpec)
    overrides: LayoutSpec | None = None

    @property
    def layout(self) -> ResolvedLayout:
        """The resolved layout for this emitter's pages."""
        return compose(self.shared, self.page_layout, self.overrides)

    def get_components(self) -> list[Component]:
        return self.layout.components()

    def render(
        self,
        ctx: PipelineContext,
        document: Document,
        resources: StaticResources,
        *,
        tree: SyntaxTreeNode | None = None,
        events: Sequence[TimelineEvent] = (),
        corpus: Sequence[CorpusEntry] = (),
    ) -> str:
        """Render ``document`` through this emitter's layout."""
        props = RenderProps(
            ctx=ctx,
            document=document,
            tree=tree if tree is not None else document.tree,
            resources=resources,
            events=tuple(events),
            all_documents=tuple(entry["data"] for _key, entry in corpus),
        )
        return render_page(self.layout, props)

    def emit(
        self,
        ctx: PipelineContext,
        corpus: list[CorpusEntry],
        resources: StaticResources,
    ) -> list[OutputArtifact]:
        raise NotImplementedError
