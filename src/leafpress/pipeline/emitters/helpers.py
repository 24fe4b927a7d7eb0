# topmark:header:start
#
#   project      : LeafPress
#   file         : helpers.py
#   file_relpath : src/leafpress/pipeline/emitters/helpers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by emitters: synthetic page documents and the artifact writer."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from leafpress.config.logging import get_logger
from leafpress.content.document import Document
from leafpress.content.markdown import empty_tree

if TYPE_CHECKING:
    from leafpress.config.logging import LeafpressLogger
    from leafpress.pipeline.emitters.base import OutputArtifact

logger: LeafpressLogger = get_logger(__name__)


def synthetic_document(slug: str, title: str) -> Document:
    """Return a page document that has no source file (e.g. ``timeline/index``)."""
    return Document(
        slug=slug,
        file_path=Path(slug),
        tree=empty_tree(),
        frontmatter={"title": title},
        title=title,
    )


def write_artifact(output_dir: Path, artifact: OutputArtifact) -> Path:
    """Write ``artifact`` to ``output_dir / f"{slug}{extension}"``.

    Parent directories are created as needed.

    Returns:
        Path: The written file.

    Raises:
        OSError: If the file cannot be written.
    """
    target: Path = output_dir / artifact.relative_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(artifact.content, encoding="utf-8")
    logger.debug("Wrote %s", target)
    return target
