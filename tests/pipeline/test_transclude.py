# topmark:header:start
#
#   project      : LeafPress
#   file         : test_transclude.py
#   file_relpath : tests/pipeline/test_transclude.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for transclusion of blocks from unpublished notes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from leafpress.content.markdown import render_tree
from leafpress.pipeline.transformers.transclude import (
    Embed,
    TranscludeUnpublished,
    find_block,
    source_title,
)
from tests.conftest import make_config, make_context, make_document, parametrize, write_note

if TYPE_CHECKING:
    from pathlib import Path

    from leafpress.content.document import Document

SOURCE = """---
title: Source Note
publish: false
---
Intro line.

An important thought. ^idea

Another line.
"""


def _embedding(root: Path, body: str, slug: str = "notes/host") -> Document:
    path: Path = write_note(root, f"content/{slug}.md", body)
    return make_document(slug, body, file_path=path)


def _run(root: Path, doc: Document, **sections: dict[str, object]) -> str:
    ctx = make_context(make_config(root, **sections), [doc])
    TranscludeUnpublished()(doc.tree, doc, ctx)
    return render_tree(doc.tree)


@parametrize(
    ("text", "expected"),
    [
        ("![[note#^abc]]", Embed("note", "abc", None)),
        ("![[my note#^abc|Quote]]", Embed("my note", "abc", "Quote")),
        ("  ![[n#^b]]  ", Embed("n", "b", None)),
        ("see ![[n#^b]]", None),
        ("![[n]]", None),
        ("[[n#^b]]", None),
    ],
)
def test_embed_parse(text: str, expected: Embed | None) -> None:
    assert Embed.parse(text) == expected


def test_find_block_strips_marker() -> None:
    assert find_block(SOURCE, "idea") == "An important thought."
    assert find_block(SOURCE, "missing") is None


def test_source_title_fallbacks() -> None:
    assert source_title({"title": "T", "alias": ["A"]}, "f") == "T"
    assert source_title({"alias": ["A"], "aliases": ["B"]}, "f") == "A"
    assert source_title({"aliases": ["B"], "id": "X"}, "f") == "B"
    assert source_title({"alias": "not a list", "id": "X"}, "f") == "X"
    assert source_title({}, "f") == "f"


def test_unpublished_block_is_inlined(tmp_path: Path) -> None:
    write_note(tmp_path, "content/notes/source.md", SOURCE)
    doc = _embedding(tmp_path, "Before.\n\n![[source#^idea|Nice quote]]\n\nAfter.\n")

    html = _run(tmp_path, doc)

    assert "<blockquote>" in html
    assert "<p>An important thought.</p>" in html
    assert "— Nice quote from Source Note" in html
    assert "![[" not in html
    assert html.index("Before.") < html.index("<blockquote>") < html.index("After.")
    assert doc.metadata.transclusions == ("source#^idea",)


def test_alias_defaults_to_title(tmp_path: Path) -> None:
    write_note(tmp_path, "content/notes/source.md", SOURCE)
    doc = _embedding(tmp_path, "![[source#^idea]]\n")
    assert "— Source Note from Source Note" in _run(tmp_path, doc)


def test_published_note_is_left_alone(tmp_path: Path) -> None:
    published: str = SOURCE.replace("publish: false", "publish: true")
    write_note(tmp_path, "content/notes/source.md", published)
    doc = _embedding(tmp_path, "![[source#^idea]]\n")

    html = _run(tmp_path, doc)

    assert "<blockquote>" not in html
    assert "![[source#^idea]]" in html
    assert doc.metadata.transclusions == ()


def test_note_without_front_matter_is_left_alone(tmp_path: Path) -> None:
    write_note(tmp_path, "content/notes/plain.md", "Thought. ^idea\n")
    doc = _embedding(tmp_path, "![[plain#^idea]]\n")
    assert "<blockquote>" not in _run(tmp_path, doc)


@parametrize("embed", ["![[missing#^idea]]", "![[source#^nope]]"])
def test_unresolvable_embed_is_left_alone(tmp_path: Path, embed: str) -> None:
    write_note(tmp_path, "content/notes/source.md", SOURCE)
    doc = _embedding(tmp_path, f"{embed}\n")
    assert "<blockquote>" not in _run(tmp_path, doc)


def test_embed_in_running_text_splits_the_paragraph(tmp_path: Path) -> None:
    """Text around the embed stays, as paragraphs before and after the quote."""
    write_note(tmp_path, "content/notes/source.md", SOURCE)
    doc = _embedding(tmp_path, "Text *before* ![[source#^idea]] # not a heading\n")

    html = _run(tmp_path, doc)

    assert html.startswith("<p>Text <em>before</em></p>\n<blockquote>")
    assert "<p>An important thought.</p>" in html
    assert html.endswith("</blockquote>\n<p># not a heading</p>\n")
    assert doc.metadata.transclusions == ("source#^idea",)


def test_several_embeds_in_one_paragraph(tmp_path: Path) -> None:
    """Resolvable embeds are quoted in order; an unresolvable one stays as text."""
    write_note(tmp_path, "content/notes/source.md", SOURCE)
    doc = _embedding(
        tmp_path, "![[source#^idea|One]] and ![[missing#^x]] then ![[source#^idea|Two]]\n"
    )

    html = _run(tmp_path, doc)

    assert html.count("<blockquote>") == 2
    assert html.index("— One from") < html.index("![[missing#^x]]") < html.index("— Two from")
    assert "<p>and ![[missing#^x]] then</p>" in html
    assert doc.metadata.transclusions == ("source#^idea", "source#^idea")


def test_common_directories_are_searched(tmp_path: Path) -> None:
    write_note(tmp_path, "content/shared/source.md", SOURCE)
    doc = _embedding(tmp_path, "![[source#^idea]]\n")

    html = _run(tmp_path, doc, transclude={"common_directories": ["shared"]})

    assert "An important thought." in html


def test_embed_inside_blockquote(tmp_path: Path) -> None:
    """Nested paragraphs are transcluded in place."""
    write_note(tmp_path, "content/notes/source.md", SOURCE)
    doc = _embedding(tmp_path, "> ![[source#^idea]]\n")

    html = _run(tmp_path, doc)

    assert html.count("<blockquote>") == 2
    assert "An important thought." in html
