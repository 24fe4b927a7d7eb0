# topmark:header:start
#
#   project      : LeafPress
#   file         : test_engine.py
#   file_relpath : tests/pipeline/test_engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Integration tests for the build engine (`leafpress.pipeline.engine`)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from leafpress.components.render import StaticResources
from leafpress.core.exit_codes import ExitCode
from leafpress.pipeline.engine import (
    build,
    collect_resources,
    run_emitters,
    transform_corpus,
)
from leafpress.pipeline.pipelines import DEFAULT_TRANSFORMERS, default_emitters
from tests.conftest import make_config, mark_integration, write_note
from tests.pipeline.conftest import BrokenEmitter, ListingEmitter, TitleStage

if TYPE_CHECKING:
    from pathlib import Path

    from leafpress.config import Config

NOTE_A = """---
title: Alpha
tags: [garden, ideas]
created: 2024-05-01 09:00
modified: 2024-05-03 10:00
---
# Alpha

Some text.
"""

NOTE_B = """---
aliases: [Beta note]
created: 2024-06-01 09:00
modified: 2024-06-01 10:00
---
Body of b.
"""


def _config(root: Path, **sections: dict[str, object]) -> Config:
    return make_config(root, dates={"priority": ["frontmatter", "filesystem"]}, **sections)


@pytest.fixture
def site(tmp_path: Path) -> Path:
    write_note(tmp_path, "content/notes/alpha.md", NOTE_A)
    write_note(tmp_path, "content/b.md", NOTE_B)
    return tmp_path


def test_transform_corpus_runs_default_stages(site: Path) -> None:
    ctx = transform_corpus(_config(site))

    alpha = ctx.corpus["notes/alpha"]
    beta = ctx.corpus["b"]
    assert alpha.title == "Alpha"
    assert alpha.tags == ("garden", "ideas")
    assert beta.display_title == "Beta note"
    assert alpha.dates is not None and alpha.dates.is_complete
    assert alpha.metadata.stages_run == [s.name for s in DEFAULT_TRANSFORMERS]
    assert alpha.metadata.date_sources["created"] == "frontmatter"


def test_transform_corpus_missing_content_dir(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        transform_corpus(_config(tmp_path))


def test_build_with_custom_stages_and_emitters(site: Path) -> None:
    """Emitters see every transformed document; a failing emitter does not stop the others."""
    result = build(
        _config(site),
        transformers=[TitleStage()],
        emitters=[BrokenEmitter(), ListingEmitter()],
    )

    assert result.error_code is None
    assert [a.relative_path for a in result.artifacts] == ["listing.txt"]
    listing: Path = site / "public" / "listing.txt"
    assert listing.read_text(encoding="utf-8").splitlines() == ["B", "NOTES/ALPHA"]
    assert result.written == [listing]


def test_build_dry_run_writes_nothing(site: Path) -> None:
    result = build(_config(site), emitters=[ListingEmitter()], write=False)
    assert len(result.artifacts) == 1
    assert result.written == []
    assert not (site / "public").exists()


@mark_integration
def test_build_default_site(site: Path) -> None:
    """The default emitters write one page per note plus the two timeline pages."""
    config = _config(site, site={"title": "Garden"}, timeline={"disallowed_tags": ["ideas"]})

    result = build(config)

    written = sorted(p.relative_to(site / "public").as_posix() for p in result.written)
    assert written == [
        "b.html",
        "notes/alpha.html",
        "recent/index.html",
        "timeline/index.html",
    ]
    timeline: str = (site / "public" / "timeline/index.html").read_text(encoding="utf-8")
    assert '<a href="/b" class="timeline-title">Beta note</a>' in timeline
    assert "Created and modified" in timeline
    assert "/notes/alpha" not in timeline
    page: str = (site / "public" / "notes/alpha.html").read_text(encoding="utf-8")
    assert "<title>Alpha | Garden</title>" in page
    assert "<p>Some text.</p>" in page


def test_build_reports_write_failures(site: Path) -> None:
    """A path that cannot be written yields IO_ERROR without aborting the run."""
    (site / "public").write_text("not a directory", encoding="utf-8")

    result = build(_config(site), emitters=[ListingEmitter()])

    assert result.error_code == ExitCode.IO_ERROR
    assert result.written == []


def test_collect_resources_spans_emitters(site: Path) -> None:
    resources = collect_resources(default_emitters(_config(site)))
    assert any(".timeline" in css for css in resources.css)
    assert any(".page-title" in css for css in resources.css)
    assert len(resources.css) == len(set(resources.css))


def test_run_emitters_logs_failure_and_continues(
    site: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """An emitter that raises is logged by name; emitters after it still run."""
    ctx = transform_corpus(_config(site), transformers=[TitleStage()])

    with caplog.at_level(logging.ERROR):
        artifacts = run_emitters(
            [ListingEmitter(name="First"), BrokenEmitter(), ListingEmitter(name="Last")],
            ctx,
            StaticResources(),
        )

    assert [a.slug for a in artifacts] == ["listing", "listing"]
    assert "Emitter Broken failed: emitter exploded" in caplog.text


def test_bad_author_value_keeps_every_page(tmp_path: Path) -> None:
    """A non-string ``authors`` value renders without authors and drops no page."""
    write_note(tmp_path, "content/good.md", "---\ntitle: Good\n---\nFine.\n")
    write_note(
        tmp_path,
        "content/book.md",
        "---\ntitle: Book\nmedia: Dune\nmedia-type: novel\nauthors: 1965\n---\nNotes.\n",
    )

    result = build(_config(tmp_path), write=False)

    assert sorted(a.slug for a in result.artifacts) == [
        "book",
        "good",
        "recent/index",
        "timeline/index",
    ]
    book: str = next(a.content for a in result.artifacts if a.slug == "book")
    assert "Title: Dune (novel)" in book
    assert "Author" not in book
    assert result.n_errors == 0
