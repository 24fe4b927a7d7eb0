# topmark:header:start
#
#   project      : LeafPress
#   file         : slugs.py
#   file_relpath : src/leafpress/content/slugs.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Slug helpers.

A slug is the POSIX-style path of a document relative to the content directory,
without its ``.md`` suffix, with URL-hostile characters replaced
(``notes/My Note.md`` → ``notes/My-Note``).
"""

from __future__ import annotations

import re
from pathlib import PurePath, PurePosixPath
from typing import Final

from leafpress.constants import MARKDOWN_SUFFIX

_REPLACEMENTS: Final[tuple[tuple[str, str], ...]] = (
    ("&", "-and-"),
    ("%", "-percent"),
    ("?", ""),
    ("#", ""),
)
_WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")


def _slugify_segment(segment: str) -> str:
    for old, new in _REPLACEMENTS:
        segment = segment.replace(old, new)
    return _WHITESPACE_RE.sub("-", segment.strip())


def slugify_path(relative_path: PurePath | str) -> str:
    """Return the slug for a path relative to the content directory.

    Args:
        relative_path (PurePath | str): Path such as ``"notes/My Note.md"``.

    Returns:
        str: The slug, e.g. ``"notes/My-Note"``.
    """
    path = PurePosixPath(PurePath(relative_path).as_posix())
    if path.suffix.lower() == MARKDOWN_SUFFIX:
        path = path.with_suffix("")
    return "/".join(_slugify_segment(part) for part in path.parts if part not in ("", "."))


def folder_of(slug: str) -> str:
    """Return the slug with its final path segment removed (``""`` at the root)."""
    head, _sep, _tail = slug.rpartition("/")
    return head
