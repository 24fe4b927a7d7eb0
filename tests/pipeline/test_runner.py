# topmark:header:start
#
#   project      : LeafPress
#   file         : test_runner.py
#   file_relpath : tests/pipeline/test_runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the per-document stage runner and the transform phase."""

from __future__ import annotations

from typing import TYPE_CHECKING

from leafpress.core.diagnostics import DiagnosticLevel
from leafpress.pipeline import runner
from leafpress.pipeline.engine import run_transforms
from tests.conftest import make_config, make_context, make_document, parametrize
from tests.pipeline.conftest import FailingStage, RecordingStage, TitleStage

if TYPE_CHECKING:
    from pathlib import Path


def test_stages_run_in_order(tmp_path: Path) -> None:
    doc = make_document("a")
    ctx = make_context(make_config(tmp_path), [doc])

    runner.run([TitleStage(), RecordingStage()], doc, ctx)

    assert doc.title == "A"
    assert doc.metadata.stages_run == ["Title", "Recording"]


def test_failing_stage_is_recorded_and_later_stages_run(tmp_path: Path) -> None:
    """A raising stage leaves an error diagnostic; the document keeps moving."""
    doc = make_document("a")
    ctx = make_context(make_config(tmp_path), [doc])
    recorder = RecordingStage()

    runner.run([FailingStage(), TitleStage(), recorder], doc, ctx)

    assert recorder.seen == ["a"]
    assert doc.title == "A"
    errors = [d for d in doc.metadata.diagnostics if d.level == DiagnosticLevel.ERROR]
    assert len(errors) == 1
    assert errors[0].message.startswith("Failing failed:")
    assert "boom on a" in errors[0].message


@parametrize("workers", [1, 4])
def test_run_transforms_visits_every_document(tmp_path: Path, workers: int) -> None:
    docs = [make_document(f"n{i}") for i in range(20)]
    ctx = make_context(make_config(tmp_path), docs)
    recorder = RecordingStage()
    finished: list[str] = []

    result = run_transforms(
        [TitleStage(), recorder],
        ctx,
        max_workers=workers,
        on_document=lambda d: finished.append(d.slug),
    )

    assert [d.slug for d in result] == [d.slug for d in docs]
    assert sorted(recorder.seen) == sorted(d.slug for d in docs)
    assert sorted(finished) == sorted(d.slug for d in docs)
    assert all(d.title == d.slug.upper() for d in result)


def test_one_failing_document_does_not_affect_others(tmp_path: Path) -> None:
    """Failures are per document: other documents finish all stages."""
    docs = [make_document("ok"), make_document("bad")]
    ctx = make_context(make_config(tmp_path), docs)

    run_transforms([FailingStage(only=frozenset({"bad"})), TitleStage()], ctx, max_workers=2)

    assert [d.title for d in docs] == ["OK", "BAD"]
    assert len(docs[0].metadata.diagnostics) == 0
    assert len(docs[1].metadata.diagnostics) == 1
