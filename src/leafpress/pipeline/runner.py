# topmark:header:start
#
#   project      : LeafPress
#   file         : runner.py
#   file_relpath : src/leafpress/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run the ordered transform stages for a single document."""

from __future__ import annotations

from typing import TYPE_CHECKING

from leafpress.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from leafpress.config.logging import LeafpressLogger
    from leafpress.content.document import Document
    from leafpress.pipeline.context import PipelineContext
    from leafpress.pipeline.contracts import Transformer

logger: LeafpressLogger = get_logger(__name__)


def run(
    stages: Sequence[Transformer],
    doc: Document,
    ctx: PipelineContext,
) -> Document:
    """Execute the stages sequentially on ``doc``.

    A stage that raises does not stop the document: the failure is logged with
    the stage name and file path, recorded as an error diagnostic, and the next
    stage runs on the document as the failed stage left it.

    Args:
        stages (Sequence[Transformer]): Ordered transform stages.
        doc (Document): Document to transform in place.
        ctx (PipelineContext): Read-only run context.

    Returns:
        Document: The same document, for chaining.
    """
    for stage in stages:
        doc.metadata.stages_run.append(stage.name)
        logger.trace("[%s] %s", stage.name, doc.file_path)
        try:
            stage(doc.tree, doc, ctx)
        except Exception as e:
            logger.exception("Stage %s failed on %s: %s", stage.name, doc.file_path, e)
            doc.metadata.diagnostics.add_error(f"{stage.name} failed: {e}")
    return doc
