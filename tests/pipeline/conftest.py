# topmark:header:start
#
#   project      : LeafPress
#   file         : conftest.py
#   file_relpath : tests/pipeline/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared helpers for pipeline tests: recording and failing stages and emitters."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from leafpress.pipeline.emitters.base import OutputArtifact
from leafpress.pipeline.transformers.base import BaseTransformer

if TYPE_CHECKING:
    from markdown_it.tree import SyntaxTreeNode

    from leafpress.components.render import StaticResources
    from leafpress.components.types import Component
    from leafpress.content.document import CorpusEntry, Document
    from leafpress.pipeline.context import PipelineContext


@dataclass
class RecordingStage(BaseTransformer):
    """Stage that records the slugs it saw (thread-safe)."""

    name: str = "Recording"
    seen: list[str] = field(default_factory=lambda: [])
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def transform(self, tree: SyntaxTreeNode, doc: Document, ctx: PipelineContext) -> None:
        with self._lock:
            self.seen.append(doc.slug)


@dataclass
class FailingStage(BaseTransformer):
    """Stage that raises (for every document, or only for the slugs in ``only``)."""

    name: str = "Failing"
    only: frozenset[str] | None = None

    def may_proceed(self, doc: Document, ctx: PipelineContext) -> bool:
        return self.only is None or doc.slug in self.only

    def transform(self, tree: SyntaxTreeNode, doc: Document, ctx: PipelineContext) -> None:
        raise RuntimeError(f"boom on {doc.slug}")


@dataclass
class TitleStage(BaseTransformer):
    """Stage that sets the title from the slug."""

    name: str = "Title"

    def transform(self, tree: SyntaxTreeNode, doc: Document, ctx: PipelineContext) -> None:
        doc.title = doc.slug.upper()


@dataclass
class ListingEmitter:
    """Emitter producing one text artifact listing the corpus."""

    name: str = "Listing"

    def get_components(self) -> list[Component]:
        return []

    def emit(
        self,
        ctx: PipelineContext,
        corpus: list[CorpusEntry],
        resources: StaticResources,
    ) -> list[OutputArtifact]:
        text: str = "\n".join(entry["data"].display_title for _key, entry in corpus)
        return [OutputArtifact(slug="listing", extension=".txt", content=text)]


@dataclass
class BrokenEmitter:
    """Emitter that always raises."""

    name: str = "Broken"

    def get_components(self) -> list[Component]:
        return []

    def emit(
        self,
        ctx: PipelineContext,
        corpus: list[CorpusEntry],
        resources: StaticResources,
    ) -> list[OutputArtifact]:
        raise RuntimeError("emitter exploded")
