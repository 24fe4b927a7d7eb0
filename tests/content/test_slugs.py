# topmark:header:start
#
#   project      : LeafPress
#   file         : test_slugs.py
#   file_relpath : tests/content/test_slugs.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for path-derived slugs."""

from __future__ import annotations

from pathlib import PurePosixPath, PureWindowsPath

from leafpress.content.slugs import folder_of, slugify_path
from tests.conftest import parametrize


@parametrize(
    ("path", "slug"),
    [
        ("index.md", "index"),
        ("notes/My Note.md", "notes/My-Note"),
        ("a/b/c.md", "a/b/c"),
        ("Q&A.md", "Q-and-A"),
        ("100% done?.md", "100-percent-done"),
        ("topic #1.md", "topic-1"),
        ("./x.md", "x"),
        ("data.json", "data.json"),
    ],
)
def test_slugify_path(path: str, slug: str) -> None:
    assert slugify_path(path) == slug


def test_slugify_accepts_pure_paths() -> None:
    assert slugify_path(PurePosixPath("a/b.md")) == "a/b"
    assert slugify_path(PureWindowsPath("a\\b.md")) == "a/b"


@parametrize(("slug", "folder"), [("a/b/c", "a/b"), ("c", ""), ("a/c", "a")])
def test_folder_of(slug: str, folder: str) -> None:
    assert folder_of(slug) == folder
