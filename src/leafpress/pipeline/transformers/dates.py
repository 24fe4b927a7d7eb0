# topmark:header:start
#
#   project      : LeafPress
#   file         : dates.py
#   file_relpath : src/leafpress/pipeline/transformers/dates.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Date resolver: reconcile created/modified/published from several sources.

Sources are consulted in the configured order (``[dates] priority``). For each
field the first non-empty, valid value wins; later sources only fill fields
that are still empty. Fields no source could supply fall back to the current
time, captured once per document, so the result is always fully populated.

Sources:
    - ``frontmatter``: ``created`` (alias ``date``), ``modified`` (aliases
      ``lastmod``, ``updated``) and ``published``, as written.
    - ``git``: first commit touching the file → created, last → modified.
    - ``filesystem``: birth time (or ctime) → created, mtime → modified.

Values are coerced with `coerce_date`. An unparsable value, or one that
lands exactly on the Unix epoch, is reported as a warning (logged and recorded
on the document) and ignored.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Any, Final

from dateutil import parser as date_parser

from leafpress.config.logging import get_logger
from leafpress.config.types import DateSource
from leafpress.constants import COMPACT_DATE_FORMAT
from leafpress.content.document import DocumentDates
from leafpress.pipeline.transformers.base import BaseTransformer
from leafpress.vcs.git import GitError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from markdown_it.tree import SyntaxTreeNode

    from leafpress.config.logging import LeafpressLogger
    from leafpress.content.document import Document
    from leafpress.pipeline.context import PipelineContext
    from leafpress.vcs.git import CommitRange, GitRepository

logger: LeafpressLogger = get_logger(__name__)

DATE_FIELDS: Final[tuple[str, ...]] = ("created", "modified", "published")

# Front-matter keys consulted per field, in order.
FRONTMATTER_KEYS: Final[dict[str, tuple[str, ...]]] = {
    "created": ("created", "date"),
    "modified": ("modified", "lastmod", "updated"),
    "published": ("published",),
}

NOW_SOURCE: Final[str] = "now"

_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)


class InvalidDateError(ValueError):
    """A raw date value could not be turned into a usable timestamp."""


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def coerce_date(value: Any) -> datetime | None:
    """Coerce a raw date value into a timezone-aware `datetime`.

    Accepted forms:
        - `datetime` (naive values are taken as local time),
        - `date` (local midnight),
        - `int` / `float` (seconds since the Unix epoch),
        - `str`: compact ``YYYY-MM-DD HH:mm`` (local time) first, then anything
          ``dateutil`` understands.

    Args:
        value (Any): The raw value.

    Returns:
        datetime | None: The aware datetime, or None for an empty value.

    Raises:
        InvalidDateError: If the value cannot be parsed or lands on the Unix epoch.
    """
    if _is_empty(value):
        return None

    result: datetime
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif isinstance(value, bool):
        raise InvalidDateError(f"not a date: {value!r}")
    elif isinstance(value, (int, float)):
        try:
            result = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidDateError(f"timestamp out of range: {value!r}") from exc
    elif isinstance(value, str):
        result = _parse_date_string(value.strip())
    else:
        raise InvalidDateError(f"unsupported date value: {value!r}")

    if result.tzinfo is None:
        result = result.astimezone()
    if result == _EPOCH:
        raise InvalidDateError(f"date resolves to the Unix epoch: {value!r}")
    return result


def _parse_date_string(text: str) -> datetime:
    try:
        return datetime.strptime(text, COMPACT_DATE_FORMAT)
    except ValueError:
        pass
    try:
        return date_parser.parse(text)
    except (date_parser.ParserError, ValueError, OverflowError) as exc:
        raise InvalidDateError(f"cannot parse date: {text!r}") from exc


# ------------------------------- Sources -------------------------------


def frontmatter_candidates(doc: Document) -> dict[str, list[Any]]:
    """Return the raw front-matter values for each date field, in lookup order."""
    return {
        fld: [doc.frontmatter[k] for k in keys if not _is_empty(doc.frontmatter.get(k))]
        for fld, keys in FRONTMATTER_KEYS.items()
    }


def filesystem_candidates(path: Path) -> dict[str, list[Any]]:
    """Return created/modified candidates from ``stat``.

    Raises:
        OSError: If the file cannot be stat'ed.
    """
    st: os.stat_result = os.stat(path)
    birth: float = getattr(st, "st_birthtime", st.st_ctime)
    return {
        "created": [datetime.fromtimestamp(birth, tz=timezone.utc)],
        "modified": [datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)],
        "published": [],
    }


def git_candidates(doc: Document, ctx: PipelineContext) -> dict[str, list[Any]]:
    """Return created/modified candidates from the repository tracking ``doc``.

    An unavailable repository or an untracked file yields no candidates.
    """
    repo: GitRepository | None = ctx.repository_for(doc)
    if repo is None:
        return {}
    try:
        commits: CommitRange | None = repo.commit_range(ctx.absolute_path(doc))
    except GitError as e:
        logger.debug("git history unavailable for %s: %s", doc.file_path, e)
        return {}
    if commits is None:
        logger.trace("%s is not tracked by %r", doc.file_path, repo)
        return {}
    return {"created": [commits.first], "modified": [commits.last], "published": []}


def _candidates(
    source: DateSource, doc: Document, ctx: PipelineContext
) -> dict[str, list[Any]]:
    if source is DateSource.FRONTMATTER:
        return frontmatter_candidates(doc)
    if source is DateSource.GIT:
        return git_candidates(doc, ctx)
    try:
        return filesystem_candidates(ctx.absolute_path(doc))
    except OSError as e:
        logger.warning("Cannot stat %s: %s", doc.file_path, e)
        return {}


# ------------------------------- Resolver -------------------------------


def resolve_dates(
    doc: Document,
    sources: Sequence[DateSource],
    ctx: PipelineContext,
    *,
    now: datetime | None = None,
) -> DocumentDates:
    """Resolve the three dates of ``doc`` from ``sources``, in order.

    The name of the source that supplied each field is recorded in
    ``doc.metadata.date_sources``; invalid raw values are recorded as warning
    diagnostics on the document.

    Args:
        doc (Document): The document (front matter already loaded).
        sources (Sequence[DateSource]): Sources in priority order.
        ctx (PipelineContext): Run context (working directory, repositories).
        now (datetime | None): Fallback instant; defaults to the current time.

    Returns:
        DocumentDates: Fully populated dates.
    """
    resolved: dict[str, datetime] = {}
    supplied: dict[str, str] = {}

    for source in sources:
        if len(resolved) == len(DATE_FIELDS):
            break
        candidates: dict[str, list[Any]] = _candidates(source, doc, ctx)
        for fld in DATE_FIELDS:
            if fld in resolved:
                continue
            for raw in candidates.get(fld, ()):
                try:
                    value: datetime | None = coerce_date(raw)
                except InvalidDateError as e:
                    logger.warning(
                        "Invalid %s date %r in %s (%s); ignoring it",
                        fld,
                        raw,
                        doc.file_path,
                        e,
                    )
                    doc.metadata.diagnostics.add_warning(
                        f"Invalid {fld} date {raw!r} from {source.value}"
                    )
                    continue
                if value is not None:
                    resolved[fld] = value
                    supplied[fld] = source.value
                    break

    fallback: datetime = now or datetime.now().astimezone()
    for fld in DATE_FIELDS:
        if fld not in resolved:
            resolved[fld] = fallback
            supplied[fld] = NOW_SOURCE

    doc.metadata.date_sources = supplied
    logger.trace("%s dates from %s", doc.slug, supplied)
    return DocumentDates(
        created=resolved["created"],
        modified=resolved["modified"],
        published=resolved["published"],
    )


@dataclass
class CreatedModifiedDate(BaseTransformer):
    """Resolve and store ``doc.dates``.

    Attributes:
        priority (tuple[DateSource, ...] | None): Source order; None uses
            ``[dates] priority`` from the configuration.
    """

    name: str = "CreatedModifiedDate"
    priority: tuple[DateSource, ...] | None = None

    def transform(self, tree: SyntaxTreeNode, doc: Document, ctx: PipelineContext) -> None:
        sources: Sequence[DateSource] = (
            self.priority if self.priority is not None else ctx.config.date_priority
        )
        doc.dates = resolve_dates(doc, sources, ctx)
