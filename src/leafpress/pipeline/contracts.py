# topmark:header:start
#
#   project      : LeafPress
#   file         : contracts.py
#   file_relpath : src/leafpress/pipeline/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contracts for pipeline stages and emitters (engine-facing).

Transformers are instantiated, *callable* objects applied to one document at a
time: ``stage(tree, doc, ctx)``. Emitters run once per build, after every
document went through every transformer.

Attributes:
----------
name : str
    Stable name used in logs, diagnostics and ``DocumentMetadata.stages_run``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from markdown_it.tree import SyntaxTreeNode

    from leafpress.components.render import StaticResources
    from leafpress.components.types import Component
    from leafpress.content.document import CorpusEntry, Document
    from leafpress.pipeline.context import PipelineContext
    from leafpress.pipeline.emitters.base import OutputArtifact


class Transformer(Protocol):
    """Protocol for a single transform stage.

    Implementations typically subclass
    [`BaseTransformer`][leafpress.pipeline.transformers.base.BaseTransformer].
    """

    name: str

    def __call__(self, tree: SyntaxTreeNode, doc: Document, ctx: PipelineContext) -> None:
        """Enrich ``doc`` in place (its tree, typed fields or metadata).

        Args:
            tree (SyntaxTreeNode): The document's current tree (``doc.tree``).
            doc (Document): The document being transformed.
            ctx (PipelineContext): Read-only run context.
        """
        ...


class Emitter(Protocol):
    """Protocol for an emitter producing output artifacts from the whole corpus."""

    name: str

    def get_components(self) -> list[Component]:
        """Return every component this emitter may render (for resource collection)."""
        ...

    def emit(
        self,
        ctx: PipelineContext,
        corpus: list[CorpusEntry],
        resources: StaticResources,
    ) -> list[OutputArtifact]:
        """Produce the artifacts for this emitter.

        Args:
            ctx (PipelineContext): Read-only run context.
            corpus (list[CorpusEntry]): The transformed corpus, in load order.
            resources (StaticResources): CSS/JS aggregated from all components.

        Returns:
            list[OutputArtifact]: One artifact per logical page.
        """
        ...
