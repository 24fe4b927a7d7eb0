# topmark:header:start
#
#   project      : LeafPress
#   file         : context.py
#   file_relpath : src/leafpress/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run-wide, read-only context shared by every stage and emitter.

One `PipelineContext` is created per run and discarded at the end. It holds the
frozen `Config`, the corpus snapshot (slug → `Document`) and the lazily opened
git repositories. Stages mutate documents, never the context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from leafpress.vcs.git import RepositoryHandles

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from leafpress.config.model import Config
    from leafpress.content.document import CorpusEntry, Document
    from leafpress.vcs.git import GitRepository


@dataclass(frozen=True)
class PipelineContext:
    """Read-only state for one pipeline run.

    Attributes:
        config (Config): Frozen runtime configuration.
        corpus (Mapping[str, Document]): Read-only mapping slug → document.
        entries (tuple[CorpusEntry, ...]): The ordered corpus as loaded.
        repositories (RepositoryHandles): Git repositories, opened on first use.
    """

    config: Config
    corpus: Mapping[str, Document]
    entries: tuple[CorpusEntry, ...] = ()
    repositories: RepositoryHandles = field(default_factory=RepositoryHandles)

    @classmethod
    def create(cls, config: Config, entries: Iterable[CorpusEntry]) -> PipelineContext:
        """Build the context for a run from the loaded corpus."""
        ordered: tuple[CorpusEntry, ...] = tuple(entries)
        by_slug: dict[str, Document] = {entry["data"].slug: entry["data"] for _key, entry in ordered}
        return cls(config=config, corpus=MappingProxyType(by_slug), entries=ordered)

    @property
    def documents(self) -> list[Document]:
        """Documents in corpus order."""
        return [entry["data"] for _key, entry in self.entries]

    def absolute_path(self, doc: Document) -> Path:
        """Return the absolute path of ``doc``'s source file."""
        if doc.file_path.is_absolute():
            return doc.file_path
        return self.config.working_dir / doc.file_path

    def repository_for(self, doc: Document) -> GitRepository | None:
        """Return the repository that tracks ``doc``.

        Files under the content repository sub-tree resolve against that
        sub-tree's own repository; everything else against the working
        directory's repository.
        """
        path: Path = self.absolute_path(doc).resolve()
        content_root: Path = self.config.content_repository_path.resolve()
        if path.is_relative_to(content_root) and content_root.is_dir():
            return self.repositories.get(content_root)
        return self.repositories.get(Path(self.config.working_dir))
