# topmark:header:start
#
#   project      : LeafPress
#   file         : test_frontmatter.py
#   file_relpath : tests/pipeline/test_frontmatter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the front-matter normalization stage."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from leafpress.pipeline.transformers.frontmatter import (
    FrontMatterTransformer,
    normalize_aliases,
    normalize_tags,
)
from tests.conftest import make_config, make_context, make_document, parametrize

if TYPE_CHECKING:
    from pathlib import Path


@parametrize(
    ("value", "tags"),
    [
        (None, []),
        ("a, b c", ["a", "b", "c"]),
        ("#a #b", ["a", "b"]),
        (["x", "#y", "", None], ["x", "y"]),
        (["dup", "dup"], ["dup", "dup"]),
        (2024, ["2024"]),
    ],
)
def test_normalize_tags(value: Any, tags: list[str]) -> None:
    assert normalize_tags(value) == tags


@parametrize(
    ("frontmatter", "aliases"),
    [
        ({}, []),
        ({"aliases": ["A", " B "]}, ["A", "B"]),
        ({"alias": "Solo"}, ["Solo"]),
        ({"aliases": [], "alias": ["Fallback"]}, ["Fallback"]),
    ],
)
def test_normalize_aliases(frontmatter: dict[str, Any], aliases: list[str]) -> None:
    assert normalize_aliases(frontmatter) == aliases


def test_stage_sets_typed_fields(tmp_path: Path) -> None:
    doc = make_document(
        "a", frontmatter={"title": "  Hello  ", "tags": ["x", "y", "x"], "aliases": ["Hi"]}
    )
    ctx = make_context(make_config(tmp_path), [doc])

    FrontMatterTransformer()(doc.tree, doc, ctx)

    assert doc.title == "Hello"
    assert doc.tags == ("x", "y")
    assert doc.aliases == ("Hi",)


def test_stage_ignores_blank_title(tmp_path: Path) -> None:
    doc = make_document("a", frontmatter={"title": "   ", "tag": "solo"})
    ctx = make_context(make_config(tmp_path), [doc])

    FrontMatterTransformer()(doc.tree, doc, ctx)

    assert doc.title is None
    assert doc.tags == ("solo",)
    assert doc.display_title == "a"
