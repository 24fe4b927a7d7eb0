# topmark:header:start
#
#   project      : LeafPress
#   file         : base.py
#   file_relpath : src/leafpress/pipeline/transformers/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base class for class-based transform stages.

The runner invokes stages as *callables*. `BaseTransformer` implements the
common lifecycle:

    stage(tree, doc, ctx)  # internally: may_proceed → transform?
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from leafpress.config.logging import get_logger

if TYPE_CHECKING:
    from markdown_it.tree import SyntaxTreeNode

    from leafpress.config.logging import LeafpressLogger
    from leafpress.content.document import Document
    from leafpress.pipeline.context import PipelineContext

logger: LeafpressLogger = get_logger(__name__)


@dataclass
class BaseTransformer:
    """Reusable foundation for transform stages.

    Subclass this and override ``transform()`` (and optionally
    ``may_proceed()``). Do not override ``__call__``.

    Attributes:
        name (str): Stable stage identifier for logs and diagnostics.
    """

    name: str

    def __call__(self, tree: SyntaxTreeNode, doc: Document, ctx: PipelineContext) -> None:
        """Invoke the stage lifecycle: gate → transform (if allowed).

        Args:
            tree (SyntaxTreeNode): The document's current tree.
            doc (Document): The document being transformed.
            ctx (PipelineContext): Read-only run context.
        """
        if self.may_proceed(doc, ctx):
            self.transform(tree, doc, ctx)
        else:
            logger.trace("%s: skipped for %s", self.name, doc.file_path)

    def may_proceed(self, doc: Document, ctx: PipelineContext) -> bool:
        """Return whether the stage should run for ``doc`` (default: always)."""
        return True

    def transform(self, tree: SyntaxTreeNode, doc: Document, ctx: PipelineContext) -> None:
        """Perform the stage's work, mutating ``doc`` in place."""
        pass
