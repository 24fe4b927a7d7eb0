# topmark:header:start
#
#   project      : LeafPress
#   file         : engine.py
#   file_relpath : src/leafpress/pipeline/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Execution helpers for running a build (engine layer).

This module runs the transform phase over the whole corpus, then the emit
phase, and optionally writes the artifacts. It exists so both the CLI and API
callers share one code path.

Design goals:
  - No CLI dependencies: do not import Click or anything under
    ``leafpress.cli.*`` from here. Presentation is the CLI layer's job.
  - Structured results: `build` returns a `BuildResult` with the documents,
    the artifacts and the first error code encountered while writing.
  - Logging only: recoverable failures (a stage, an emitter, one artifact)
    are logged and the run continues.

Phases are separated by a barrier: every document completes every stage
before the first emitter runs.

Typical usage:

    result = build(config)
    if result.error_code is not None:
        ...
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from leafpress.components.render import StaticResources, collect_resources as _collect
from leafpress.config.logging import get_logger
from leafpress.content.loader import load_corpus
from leafpress.core.diagnostics import Diagnostic, DiagnosticLevel
from leafpress.core.exit_codes import ExitCode
from leafpress.pipeline import runner
from leafpress.pipeline.context import PipelineContext
from leafpress.pipeline.emitters.helpers import write_artifact
from leafpress.pipeline.pipelines import DEFAULT_TRANSFORMERS, default_emitters

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from leafpress.components.types import Component
    from leafpress.config.logging import LeafpressLogger
    from leafpress.config.model import Config
    from leafpress.content.document import CorpusEntry, Document
    from leafpress.pipeline.contracts import Emitter, Transformer
    from leafpress.pipeline.emitters.base import OutputArtifact

logger: LeafpressLogger = get_logger(__name__)


def run_transforms(
    stages: Sequence[Transformer],
    ctx: PipelineContext,
    *,
    max_workers: int = 1,
    on_document: Callable[[Document], None] | None = None,
) -> list[Document]:
    """Run ``stages`` over every document of ``ctx``'s corpus.

    Documents are independent; with ``max_workers > 1`` they are processed by a
    thread pool. Stages within one document always run in order.

    Args:
        stages (Sequence[Transformer]): Ordered transform stages.
        ctx (PipelineContext): Run context holding the corpus.
        max_workers (int): Number of documents processed concurrently.
        on_document (Callable[[Document], None] | None): Called once per finished document.

    Returns:
        list[Document]: The transformed documents, in corpus order.
    """
    documents: list[Document] = ctx.documents
    logger.info(
        "Transforming %d document(s) with %d stage(s), %d worker(s)",
        len(documents),
        len(stages),
        max_workers,
    )

    def _one(doc: Document) -> Document:
        runner.run(stages, doc, ctx)
        if on_document is not None:
            on_document(doc)
        return doc

    if max_workers <= 1:
        return [_one(doc) for doc in documents]
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="leafpress") as pool:
        return list(pool.map(_one, documents))


def collect_resources(emitters: Sequence[Emitter]) -> StaticResources:
    """Gather CSS/JS from every component any emitter declares."""
    components: list[Component] = [c for emitter in emitters for c in emitter.get_components()]
    resources: StaticResources = _collect(components)
    logger.debug(
        "Collected %d CSS and %d JS fragment(s) from %d component(s)",
        len(resources.css),
        len(resources.js),
        len(components),
    )
    return resources


def run_emitters(
    emitters: Sequence[Emitter],
    ctx: PipelineContext,
    resources: StaticResources,
) -> list[OutputArtifact]:
    """Call each emitter once and concatenate their artifacts.

    An emitter that raises is logged with its name; the remaining emitters
    still run.
    """
    corpus: list[CorpusEntry] = list(ctx.entries)
    artifacts: list[OutputArtifact] = []
    for emitter in emitters:
        logger.debug("Running emitter %s", emitter.name)
        try:
            artifacts.extend(emitter.emit(ctx, corpus, resources))
        except Exception as e:
            logger.exception("Emitter %s failed: %s", emitter.name, e)
    return artifacts


def transform_corpus(
    config: Config,
    *,
    transformers: Sequence[Transformer] | None = None,
    on_document: Callable[[Document], None] | None = None,
) -> PipelineContext:
    """Load the corpus and run the transform phase.

    Args:
        config (Config): Frozen configuration for the run.
        transformers (Sequence[Transformer] | None): Stages; defaults to `DEFAULT_TRANSFORMERS`.
        on_document (Callable[[Document], None] | None): Progress callback per document.

    Returns:
        PipelineContext: The run context; its documents are fully transformed.

    Raises:
        FileNotFoundError: If the content directory does not exist.
        NotADirectoryError: If the content path is not a directory.
    """
    stages: Sequence[Transformer] = (
        transformers if transformers is not None else DEFAULT_TRANSFORMERS
    )
    corpus: list[CorpusEntry] = load_corpus(config.content_path, cwd=config.working_dir)
    ctx: PipelineContext = PipelineContext.create(config, corpus)
    run_transforms(stages, ctx, max_workers=config.jobs, on_document=on_document)
    return ctx


@dataclass
class BuildResult:
    """Outcome of `build`.

    Attributes:
        documents (list[Document]): Transformed documents.
        artifacts (list[OutputArtifact]): Emitted artifacts.
        written (list[Path]): Files written (empty when not writing).
        error_code (ExitCode | None): First error encountered while writing, if any.
    """

    documents: list[Document] = field(default_factory=lambda: [])
    artifacts: list[OutputArtifact] = field(default_factory=lambda: [])
    written: list[Path] = field(default_factory=lambda: [])
    error_code: ExitCode | None = None

    @property
    def diagnostics(self) -> list[tuple[Document, Diagnostic]]:
        """Every document diagnostic, paired with its document."""
        return [(d, diag) for d in self.documents for diag in d.metadata.diagnostics]

    @property
    def n_errors(self) -> int:
        """Number of error-level document diagnostics."""
        return sum(1 for _d, diag in self.diagnostics if diag.level == DiagnosticLevel.ERROR)


def build(
    config: Config,
    *,
    transformers: Sequence[Transformer] | None = None,
    emitters: Sequence[Emitter] | None = None,
    write: bool = True,
    on_document: Callable[[Document], None] | None = None,
) -> BuildResult:
    """Load, transform, emit and (optionally) write the site.

    Args:
        config (Config): Frozen configuration for the run.
        transformers (Sequence[Transformer] | None): Stages; defaults to `DEFAULT_TRANSFORMERS`.
        emitters (Sequence[Emitter] | None): Emitters; defaults to `default_emitters`.
        write (bool): Write artifacts under ``config.output_path``.
        on_document (Callable[[Document], None] | None): Progress callback per document.

    Returns:
        BuildResult: Documents, artifacts and written paths.

    Raises:
        FileNotFoundError: If the content directory does not exist.
        NotADirectoryError: If the content path is not a directory.
    """
    emitter_list: Sequence[Emitter] = (
        emitters if emitters is not None else default_emitters(config)
    )

    ctx: PipelineContext = transform_corpus(
        config, transformers=transformers, on_document=on_document
    )
    documents: list[Document] = ctx.documents
    resources: StaticResources = collect_resources(emitter_list)
    artifacts: list[OutputArtifact] = run_emitters(emitter_list, ctx, resources)
    result = BuildResult(documents=documents, artifacts=artifacts)

    if write:
        output_dir: Path = config.output_path
        for artifact in artifacts:
            try:
                result.written.append(write_artifact(output_dir, artifact))
            except OSError as e:
                logger.error("Cannot write %s: %s", artifact.relative_path, e)
                result.error_code = result.error_code or ExitCode.IO_ERROR
        logger.info("Wrote %d file(s) to %s", len(result.written), output_dir)

    return result
