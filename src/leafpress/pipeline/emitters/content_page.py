# topmark:header:start
#
#   project      : LeafPress
#   file         : content_page.py
#   file_relpath : src/leafpress/pipeline/emitters/content_page.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Emit one HTML page per document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from leafpress.config.logging import get_logger
from leafpress.constants import HTML_EXTENSION
from leafpress.pipeline.emitters.base import BaseEmitter, OutputArtifact

if TYPE_CHECKING:
    from leafpress.components.render import StaticResources
    from leafpress.config.logging import LeafpressLogger
    from leafpress.content.document import CorpusEntry
    from leafpress.pipeline.context import PipelineContext

logger: LeafpressLogger = get_logger(__name__)


@dataclass
class ContentPage(BaseEmitter):
    """Render every document of the corpus with the content-page layout."""

    name: str = "ContentPage"

    def emit(
        self,
        ctx: PipelineContext,
        corpus: list[CorpusEntry],
        resources: StaticResources,
    ) -> list[OutputArtifact]:
        """Render one page per document.

        A document whose page fails to render is logged with its file path and
        recorded as an error diagnostic; the other pages are still emitted.
        """
        artifacts: list[OutputArtifact] = []
        for _key, entry in corpus:
            doc = entry["data"]
            try:
                html: str = self.render(ctx, doc, resources, corpus=corpus)
            except Exception as e:
                logger.exception("%s failed on %s: %s", self.name, doc.file_path, e)
                doc.metadata.diagnostics.add_error(f"{self.name} failed: {e}")
                continue
            artifacts.append(OutputArtifact(slug=doc.slug, extension=HTML_EXTENSION, content=html))
        logger.info("%s: %d page(s)", self.name, len(artifacts))
        return artifacts
