# topmark:header:start
#
#   project      : LeafPress
#   file         : document.py
#   file_relpath : src/leafpress/content/document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Document data model.

A `Document` is created once per source file by the corpus loader, mutated in
place by each transform stage, and treated as read-only once the transform
phase completes. Per-stage results live in the typed `DocumentMetadata`
rather than in a free-form bag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final

from leafpress.content.slugs import folder_of
from leafpress.core.diagnostics import DiagnosticLog

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from pathlib import Path

    from markdown_it.tree import SyntaxTreeNode

METADATA_SCHEMA_VERSION: Final[int] = 1


@dataclass
class DocumentDates:
    """Resolved timestamps of a document (timezone-aware, or None until resolved)."""

    created: datetime | None = None
    modified: datetime | None = None
    published: datetime | None = None

    @property
    def is_complete(self) -> bool:
        """True when all three timestamps are set."""
        return None not in (self.created, self.modified, self.published)


@dataclass
class DocumentMetadata:
    """Typed per-stage metadata attached to a document.

    Attributes:
        schema_version (int): Version of this structure.
        date_sources (dict[str, str]): Date field name → source that supplied it
            (``"frontmatter"``, ``"git"``, ``"filesystem"`` or ``"now"``).
        transclusions (tuple[str, ...]): Resolved ``file#^block`` references.
        stages_run (list[str]): Names of the stages attempted, in order.
        diagnostics (DiagnosticLog): Recoverable problems found while transforming.
    """

    schema_version: int = METADATA_SCHEMA_VERSION
    date_sources: dict[str, str] = field(default_factory=lambda: {})
    transclusions: tuple[str, ...] = ()
    stages_run: list[str] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)


@dataclass(eq=False)
class Document:
    """One source document moving through the pipeline.

    Attributes:
        slug (str): Unique, path-derived identifier (``"notes/my-note"``).
        file_path (Path): Source path, relative to the working directory when possible.
        tree (SyntaxTreeNode): Parsed Markdown tree; stages may rewrite it.
        raw_text (str): Body text without front matter.
        frontmatter (dict[str, Any]): Parsed front matter (empty when absent).
        title (str | None): Explicit title, set by the front-matter stage.
        tags (tuple[str, ...]): Ordered, de-duplicated tags.
        aliases (tuple[str, ...]): Declared aliases, in declaration order.
        dates (DocumentDates | None): Resolved dates, set by the dates stage.
        metadata (DocumentMetadata): Typed per-stage metadata.
    """

    slug: str
    file_path: Path
    tree: SyntaxTreeNode
    raw_text: str = ""
    frontmatter: dict[str, Any] = field(default_factory=lambda: {})
    title: str | None = None
    tags: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()
    dates: DocumentDates | None = None
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)

    @property
    def folder(self) -> str:
        """Slug with its final segment removed."""
        return folder_of(self.slug)

    @property
    def display_title(self) -> str:
        """Explicit title, else the first alias, else the slug."""
        return self.title or (self.aliases[0] if self.aliases else self.slug)

    def set_tags(self, tags: Sequence[str]) -> None:
        """Store ``tags`` de-duplicated, keeping first occurrence order."""
        self.tags = tuple(dict.fromkeys(t for t in tags if t))

    def __repr__(self) -> str:
        return f"Document(slug={self.slug!r}, file_path={str(self.file_path)!r})"


# An ordered corpus entry as consumed by the pipeline: (key, {"data": Document}).
CorpusEntry = tuple[str, dict[str, Document]]
