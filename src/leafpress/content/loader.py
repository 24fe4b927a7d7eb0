# topmark:header:start
#
#   project      : LeafPress
#   file         : loader.py
#   file_relpath : src/leafpress/content/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Corpus loader.

Walks the content directory, reads each Markdown file, splits off its YAML
front matter with ``python-frontmatter`` and parses the body with markdown-it.
The result is the ordered corpus the pipeline consumes:
``[(key, {"data": Document}), ...]``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml

from leafpress.config.logging import get_logger
from leafpress.constants import MARKDOWN_SUFFIX
from leafpress.content.document import Document
from leafpress.content.markdown import parse_markdown
from leafpress.content.slugs import slugify_path

if TYPE_CHECKING:
    from leafpress.config.logging import LeafpressLogger
    from leafpress.content.document import CorpusEntry

logger: LeafpressLogger = get_logger(__name__)


def parse_frontmatter(text: str, *, source: Path | str) -> tuple[dict[str, Any], str]:
    """Split ``text`` into front matter and body.

    Malformed front matter is logged as a warning; the whole text is then
    treated as the body and the front matter is empty.

    Args:
        text (str): Full file contents.
        source (Path | str): File the text came from (for messages only).

    Returns:
        tuple[dict[str, Any], str]: ``(metadata, body)``.
    """
    try:
        post = frontmatter.loads(text)
    except (yaml.YAMLError, ValueError) as exc:
        logger.warning("Failed to parse front matter of %s: %s", source, exc)
        return {}, text

    metadata: Any = post.metadata
    if not isinstance(metadata, dict):
        logger.warning("Front matter of %s is not a mapping: %s", source, type(metadata).__name__)
        return {}, post.content
    return dict(metadata), post.content


def iter_markdown_files(content_dir: Path) -> list[Path]:
    """Return the Markdown files under ``content_dir``, sorted, hidden paths skipped.

    Raises:
        FileNotFoundError: If ``content_dir`` does not exist.
        NotADirectoryError: If ``content_dir`` is not a directory.
    """
    if not content_dir.exists():
        raise FileNotFoundError(f"Content directory not found: {content_dir}")
    if not content_dir.is_dir():
        raise NotADirectoryError(f"Content path is not a directory: {content_dir}")

    files: list[Path] = []
    for path in content_dir.rglob(f"*{MARKDOWN_SUFFIX}"):
        rel: Path = path.relative_to(content_dir)
        if any(part.startswith(".") for part in rel.parts):
            continue
        if path.is_file():
            files.append(path)
    return sorted(files, key=lambda p: p.relative_to(content_dir).as_posix())


def load_document(path: Path, *, content_dir: Path, cwd: Path) -> Document:
    """Read and parse one Markdown file into a `Document`.

    Args:
        path (Path): Absolute path of the source file.
        content_dir (Path): Content root the slug is derived against.
        cwd (Path): Working directory ``file_path`` is made relative to.

    Returns:
        Document: The freshly loaded document (no stage has run yet).
    """
    text: str = path.read_text(encoding="utf-8")
    metadata, body = parse_frontmatter(text, source=path)
    try:
        file_path: Path = path.relative_to(cwd)
    except ValueError:
        file_path = path
    doc = Document(
        slug=slugify_path(path.relative_to(content_dir)),
        file_path=file_path,
        tree=parse_markdown(body),
        raw_text=body,
        frontmatter=metadata,
    )
    logger.trace("Loaded %s as %r", file_path, doc.slug)
    return doc


def load_corpus(content_dir: Path, *, cwd: Path | None = None) -> list[CorpusEntry]:
    """Load every Markdown document under ``content_dir``.

    Args:
        content_dir (Path): Directory holding the sources.
        cwd (Path | None): Working directory (defaults to the process cwd).

    Returns:
        list[CorpusEntry]: ``(key, {"data": Document})`` pairs ordered by path. The key is
            the document's path relative to the working directory.

    Raises:
        FileNotFoundError: If ``content_dir`` does not exist.
        NotADirectoryError: If ``content_dir`` is not a directory.
    """
    base: Path = (cwd or Path.cwd()).resolve()
    root: Path = (content_dir if content_dir.is_absolute() else base / content_dir).resolve()

    corpus: list[CorpusEntry] = []
    seen: dict[str, Path] = {}
    for path in iter_markdown_files(root):
        try:
            doc: Document = load_document(path, content_dir=root, cwd=base)
        except UnicodeDecodeError as e:
            logger.error("Skipping %s: not valid UTF-8 (%s)", path, e)
            continue
        except OSError as e:
            logger.error("Skipping %s: cannot read file (%s)", path, e)
            continue
        if doc.slug in seen:
            logger.warning(
                "Skipping %s: slug %r already used by %s", doc.file_path, doc.slug, seen[doc.slug]
            )
            continue
        seen[doc.slug] = doc.file_path
        corpus.append((doc.file_path.as_posix(), {"data": doc}))

    logger.info("Loaded %d document(s) from %s", len(corpus), root)
    return corpus
