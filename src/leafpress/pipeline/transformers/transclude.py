# topmark:header:start
#
#   project      : LeafPress
#   file         : transclude.py
#   file_relpath : src/leafpress/pipeline/transformers/transclude.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Transclusion of blocks from unpublished notes.

An embed ``![[name#^block|alias]]`` is replaced by a blockquote holding the
referenced block followed by the line ``— {alias} from {title}``. Only notes
that are *not* published are inlined; published notes are linked to instead,
so their embeds are left as written.

Lookup:
    ``{name}.md`` is searched in the embedding document's directory, then in
    each ``[transclude] common_directories`` entry (relative to the content
    directory). The block is the first line containing ``^block``, with the
    marker removed.

An embed inside running text splits its paragraph: the text before it, the
blockquote, then the text after it. Embeds in headings or table cells are
not transcluded.

A missing file, missing front matter, a published note or a missing block
leaves the embed untouched (traced at TRACE level).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from leafpress.config.logging import get_logger
from leafpress.constants import MARKDOWN_SUFFIX
from leafpress.content.loader import parse_frontmatter
from leafpress.content.markdown import (
    blockquote_node,
    paragraph_node,
    parse_markdown,
    replace_child,
    walk,
)
from leafpress.pipeline.transformers.base import BaseTransformer

if TYPE_CHECKING:
    from markdown_it.tree import SyntaxTreeNode

    from leafpress.config.logging import LeafpressLogger
    from leafpress.content.document import Document
    from leafpress.pipeline.context import PipelineContext

logger: LeafpressLogger = get_logger(__name__)

EMBED_RE: Final[re.Pattern[str]] = re.compile(
    r"!\[\[([^\]#|]+)#\^([^\]|]+)(?:\|([^\]]+))?\]\]"
)

_FRONTMATTER_RE: Final[re.Pattern[str]] = re.compile(r"^---\r?\n[\s\S]*?\r?\n---")


@dataclass(frozen=True)
class Embed:
    """A parsed ``![[name#^block|alias]]`` reference."""

    name: str
    block: str
    alias: str | None

    @classmethod
    def from_match(cls, m: re.Match[str]) -> Embed:
        """Build the embed from an `EMBED_RE` match."""
        alias: str | None = m.group(3).strip() if m.group(3) else None
        return cls(name=m.group(1).strip(), block=m.group(2).strip(), alias=alias or None)

    @classmethod
    def parse(cls, text: str) -> Embed | None:
        """Return the embed if ``text`` consists of exactly one embed, else None."""
        m: re.Match[str] | None = EMBED_RE.fullmatch(text.strip())
        return cls.from_match(m) if m is not None else None

    @property
    def reference(self) -> str:
        """``name#^block`` form, as recorded in the document metadata."""
        return f"{self.name}#^{self.block}"


def find_block(text: str, block: str) -> str | None:
    """Return the first line containing ``^block``, marker removed and stripped."""
    marker: str = f"^{block}"
    for line in text.splitlines():
        if marker in line:
            return line.replace(marker, "", 1).strip()
    return None


def source_title(frontmatter: dict[str, Any], fallback: str) -> str:
    """Return the display title of a transcluded note.

    Falls back through ``title``, ``alias[0]``, ``aliases[0]``, ``id`` and ``fallback``.
    """
    title: Any = frontmatter.get("title")
    if title:
        return str(title)
    for key in ("alias", "aliases"):
        value: Any = frontmatter.get(key)
        if isinstance(value, list) and value:
            return str(value[0])
    note_id: Any = frontmatter.get("id")
    if note_id:
        return str(note_id)
    return fallback


@dataclass
class TranscludeUnpublished(BaseTransformer):
    """Inline blocks of unpublished notes referenced by embeds in paragraphs.

    Attributes:
        common_directories (tuple[str, ...] | None): Extra lookup directories relative
            to the content directory; None uses ``[transclude] common_directories``.
    """

    name: str = "TranscludeUnpublished"
    common_directories: tuple[str, ...] | None = None

    def transform(self, tree: SyntaxTreeNode, doc: Document, ctx: PipelineContext) -> None:
        paragraphs: list[tuple[SyntaxTreeNode, str]] = []
        for node in walk(tree):
            if node.type != "paragraph" or len(node.children) != 1:
                continue
            inline: SyntaxTreeNode = node.children[0]
            if inline.type == "inline" and EMBED_RE.search(inline.content):
                paragraphs.append((node, inline.content))

        resolved: list[str] = []
        for paragraph, text in paragraphs:
            if paragraph.parent is None:
                continue
            pieces: list[SyntaxTreeNode] = []
            cursor: int = 0
            for match in EMBED_RE.finditer(text):
                embed: Embed = Embed.from_match(match)
                quote: SyntaxTreeNode | None = self._quote_for(embed, doc, ctx)
                if quote is None:
                    continue
                before: str = text[cursor : match.start()]
                if before.strip():
                    pieces.append(paragraph_node(before))
                pieces.append(quote)
                cursor = match.end()
                resolved.append(embed.reference)
            if not pieces:
                continue
            if text[cursor:].strip():
                pieces.append(paragraph_node(text[cursor:]))
            replace_child(paragraph.parent, paragraph, *pieces)

        if resolved:
            doc.metadata.transclusions = (*doc.metadata.transclusions, *resolved)
            logger.debug("%s: transcluded %s", doc.slug, ", ".join(resolved))

    def search_directories(self, doc: Document, ctx: PipelineContext) -> list[Path]:
        """Return the directories searched for embedded notes, in order."""
        content_root: Path = ctx.config.content_path
        source: Path = ctx.absolute_path(doc)
        common: tuple[str, ...] = (
            self.common_directories
            if self.common_directories is not None
            else ctx.config.common_directories
        )
        return [source.parent, *(content_root / d for d in common)]

    def _quote_for(
        self, embed: Embed, doc: Document, ctx: PipelineContext
    ) -> SyntaxTreeNode | None:
        found: Path | None = None
        for directory in self.search_directories(doc, ctx):
            candidate: Path = directory / f"{embed.name}{MARKDOWN_SUFFIX}"
            if candidate.is_file():
                found = candidate
                break
            logger.trace("[%s][%s] not found in %s", self.name, doc.slug, directory)
        if found is None:
            logger.trace("[%s][%s] %s: file not found", self.name, doc.slug, embed.reference)
            return None

        text: str = found.read_text(encoding="utf-8")
        if _FRONTMATTER_RE.match(text) is None:
            logger.trace("[%s][%s] %s: no front matter", self.name, doc.slug, found)
            return None
        frontmatter, _body = parse_frontmatter(text, source=found)
        if frontmatter.get("publish"):
            logger.trace("[%s][%s] %s: published, skipping", self.name, doc.slug, found)
            return None

        block: str | None = find_block(text, embed.block)
        if not block:
            logger.trace("[%s][%s] %s: block not found", self.name, doc.slug, embed.reference)
            return None

        parsed: SyntaxTreeNode = parse_markdown(block)
        if not parsed.children:
            return None
        first: SyntaxTreeNode = parsed.children[0]
        first.parent = None

        title: str = source_title(frontmatter, fallback=embed.name)
        alias: str = embed.alias or title
        return blockquote_node(first, f"— {alias} from {title}")
