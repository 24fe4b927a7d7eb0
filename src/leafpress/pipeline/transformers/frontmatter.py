# topmark:header:start
#
#   project      : LeafPress
#   file         : frontmatter.py
#   file_relpath : src/leafpress/pipeline/transformers/frontmatter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Front-matter stage: lift ``title``, ``tags`` and ``aliases`` into typed fields."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from leafpress.config.logging import get_logger
from leafpress.pipeline.transformers.base import BaseTransformer

if TYPE_CHECKING:
    from markdown_it.tree import SyntaxTreeNode

    from leafpress.config.logging import LeafpressLogger
    from leafpress.content.document import Document
    from leafpress.pipeline.context import PipelineContext

logger: LeafpressLogger = get_logger(__name__)

_TAG_SPLIT_RE: Final[re.Pattern[str]] = re.compile(r"[,\s]+")


def _as_strings(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    return [str(value)]


def normalize_tags(value: Any) -> list[str]:
    """Return tags from a front-matter value.

    Accepts a list or a comma/space separated string. Leading ``#`` characters
    are stripped and empty entries dropped; duplicates are kept (the document
    de-duplicates on assignment).
    """
    if isinstance(value, str):
        raw: list[str] = _TAG_SPLIT_RE.split(value)
    else:
        raw = _as_strings(value)
    return [t.strip().lstrip("#").strip() for t in raw if t.strip().lstrip("#").strip()]


def normalize_aliases(frontmatter: dict[str, Any]) -> list[str]:
    """Return aliases from ``aliases`` (preferred) or ``alias``."""
    for key in ("aliases", "alias"):
        values = [v.strip() for v in _as_strings(frontmatter.get(key)) if v.strip()]
        if values:
            return values
    return []


@dataclass
class FrontMatterTransformer(BaseTransformer):
    """Normalize title, tags and aliases from ``doc.frontmatter``."""

    name: str = "FrontMatter"

    def transform(self, tree: SyntaxTreeNode, doc: Document, ctx: PipelineContext) -> None:
        fm: dict[str, Any] = doc.frontmatter

        title: Any = fm.get("title")
        if title is not None and str(title).strip():
            doc.title = str(title).strip()

        doc.set_tags(normalize_tags(fm.get("tags", fm.get("tag"))))
        doc.aliases = tuple(normalize_aliases(fm))
        logger.trace(
            "%s: title=%r tags=%r aliases=%r", doc.slug, doc.title, doc.tags, doc.aliases
        )
