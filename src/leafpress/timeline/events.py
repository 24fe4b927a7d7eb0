# topmark:header:start
#
#   project      : LeafPress
#   file         : events.py
#   file_relpath : src/leafpress/timeline/events.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Timeline events: derivation, filtering, sorting and compaction.

Events are derived from resolved document dates on every run and never
persisted. `build_timeline` composes the steps the timeline pages use:

    filter_documents → derive_events → (created_only) → sort_events
        → compact_events (optional) → truncate

Compaction only merges *adjacent* events. Three events of the same note within
the window give one ``COMBINED`` event plus one single event, never one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from leafpress.config.logging import get_logger
from leafpress.constants import COMPACTION_WINDOW_SECONDS, DEFAULT_TIMELINE_LIMIT

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime

    from leafpress.config.logging import LeafpressLogger
    from leafpress.content.document import Document

logger: LeafpressLogger = get_logger(__name__)


class EventKind(Enum):
    """Kind of timeline event."""

    CREATED = "created"
    MODIFIED = "modified"
    COMBINED = "combined"

    @property
    def label(self) -> str:
        """Human-readable label shown on timeline pages."""
        return {
            EventKind.CREATED: "Created",
            EventKind.MODIFIED: "Last modified",
            EventKind.COMBINED: "Created and modified",
        }[self]


@dataclass(frozen=True)
class TimelineEvent:
    """One dated event of a document.

    Attributes:
        kind (EventKind): What happened.
        timestamp (datetime): When it happened (timezone-aware).
        slug (str): Slug of the document the event belongs to.
        title (str): Display title of that document.
        tags (tuple[str, ...]): The document's tags.
        folder (str): The document's slug without its last segment.
    """

    kind: EventKind
    timestamp: datetime
    slug: str
    title: str
    tags: tuple[str, ...] = ()
    folder: str = ""


def derive_events(doc: Document) -> list[TimelineEvent]:
    """Return the events of one document: created first, then modified.

    Documents without resolved dates have no events; ``published`` never
    produces one.
    """
    if doc.dates is None:
        return []
    title: str = doc.display_title
    folder: str = doc.folder
    events: list[TimelineEvent] = []
    for kind, timestamp in (
        (EventKind.CREATED, doc.dates.created),
        (EventKind.MODIFIED, doc.dates.modified),
    ):
        if timestamp is not None:
            events.append(
                TimelineEvent(
                    kind=kind,
                    timestamp=timestamp,
                    slug=doc.slug,
                    title=title,
                    tags=doc.tags,
                    folder=folder,
                )
            )
    return events


def filter_documents(
    documents: Iterable[Document],
    *,
    disallowed_slugs: Iterable[str] = (),
    disallowed_tags: Iterable[str] = (),
) -> list[Document]:
    """Drop documents whose slug is disallowed or that carry a disallowed tag."""
    slugs: frozenset[str] = frozenset(disallowed_slugs)
    tags: frozenset[str] = frozenset(disallowed_tags)
    return [d for d in documents if d.slug not in slugs and not tags.intersection(d.tags)]


def sort_events(events: Iterable[TimelineEvent]) -> list[TimelineEvent]:
    """Sort newest first; events with equal timestamps keep their input order."""
    return sorted(events, key=lambda e: e.timestamp, reverse=True)


def compact_events(
    events: Sequence[TimelineEvent],
    *,
    window_seconds: float = COMPACTION_WINDOW_SECONDS,
) -> list[TimelineEvent]:
    """Merge adjacent same-slug events closer than ``window_seconds``.

    One left-to-right pass: when event ``i`` and ``i + 1`` share a slug and are
    strictly less than the window apart, they become one ``COMBINED`` event
    carrying the later timestamp and the pass skips both. Otherwise event ``i``
    is kept as-is.

    Args:
        events (Sequence[TimelineEvent]): Events, usually already sorted.
        window_seconds (float): Merge window (12 hours by default).

    Returns:
        list[TimelineEvent]: The compacted events.
    """
    compacted: list[TimelineEvent] = []
    i = 0
    while i < len(events):
        current: TimelineEvent = events[i]
        if i + 1 < len(events):
            nxt: TimelineEvent = events[i + 1]
            delta: float = abs((current.timestamp - nxt.timestamp).total_seconds())
            if current.slug == nxt.slug and delta < window_seconds:
                compacted.append(
                    TimelineEvent(
                        kind=EventKind.COMBINED,
                        timestamp=max(current.timestamp, nxt.timestamp),
                        slug=current.slug,
                        title=current.title,
                        tags=current.tags,
                        folder=current.folder,
                    )
                )
                i += 2
                continue
        compacted.append(current)
        i += 1
    return compacted


def build_timeline(
    documents: Iterable[Document],
    *,
    created_only: bool = False,
    disallowed_slugs: Iterable[str] = frozenset(),
    disallowed_tags: Iterable[str] = frozenset(),
    limit: int = DEFAULT_TIMELINE_LIMIT,
    compact: bool | None = None,
) -> list[TimelineEvent]:
    """Return the timeline for ``documents``.

    Args:
        documents (Iterable[Document]): Transformed documents.
        created_only (bool): Keep only ``CREATED`` events (the "recent notes" view).
        disallowed_slugs (Iterable[str]): Slugs to exclude.
        disallowed_tags (Iterable[str]): Documents carrying any of these tags are excluded.
        limit (int): Maximum number of events returned.
        compact (bool | None): Merge near-duplicate events; defaults to ``not created_only``.

    Returns:
        list[TimelineEvent]: At most ``limit`` events, newest first.

    Raises:
        ValueError: If ``limit`` is not a positive integer.
    """
    if limit <= 0:
        raise ValueError(f"limit must be a positive integer (got {limit})")

    kept: list[Document] = filter_documents(
        documents, disallowed_slugs=disallowed_slugs, disallowed_tags=disallowed_tags
    )
    events: list[TimelineEvent] = [e for d in kept for e in derive_events(d)]
    if created_only:
        events = [e for e in events if e.kind is EventKind.CREATED]
    events = sort_events(events)
    if compact is None:
        compact = not created_only
    if compact:
        events = compact_events(events)
    logger.debug(
        "Timeline: %d document(s), %d event(s), limit %d", len(kept), len(events), limit
    )
    return events[:limit]
