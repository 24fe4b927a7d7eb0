# topmark:header:start
#
#   project      : LeafPress
#   file         : pipelines.py
#   file_relpath : src/leafpress/pipeline/pipelines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Explicit, ordered registries of transform stages and emitters.

Overview
--------
- ``DEFAULT_TRANSFORMERS``: FrontMatter → CreatedModifiedDate → TranscludeUnpublished
- ``default_emitters(config)``: ContentPage, TimelinePages

Mermaid (orientation)
---------------------
```mermaid
flowchart LR
  L[loader] --> F[FrontMatter] --> D[CreatedModifiedDate] --> T[TranscludeUnpublished]
  T -->|barrier| C[ContentPage]
  T -->|barrier| P[TimelinePages]
```

Notes:
* Order matters: dates read front matter, and the timeline title needs the
  front-matter stage's title and aliases.
* Stages are instantiated objects (not functions); registries are immutable
  (``Final[tuple[Transformer, ...]]``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from leafpress.layout.defaults import content_page_layout, shared_page_components
from leafpress.pipeline.emitters.content_page import ContentPage
from leafpress.pipeline.emitters.timeline_pages import TimelinePages
from leafpress.pipeline.transformers.dates import CreatedModifiedDate
from leafpress.pipeline.transformers.frontmatter import FrontMatterTransformer
from leafpress.pipeline.transformers.transclude import TranscludeUnpublished

if TYPE_CHECKING:
    from leafpress.config.model import Config
    from leafpress.pipeline.contracts import Emitter, Transformer

DEFAULT_TRANSFORMERS: Final[tuple[Transformer, ...]] = (
    FrontMatterTransformer(),  # title, tags, aliases
    CreatedModifiedDate(),  # created / modified / published
    TranscludeUnpublished(),  # inline blocks of unpublished notes
)


def default_emitters(config: Config) -> list[Emitter]:
    """Return the default emitters, configured from ``config``."""
    shared = shared_page_components(dict(config.footer_links))
    return [
        ContentPage(shared=shared, page_layout=content_page_layout()),
        TimelinePages(
            shared=shared,
            page_layout=content_page_layout(),
            limit=config.timeline_limit,
            disallowed_slugs=config.disallowed_slugs,
            disallowed_tags=config.disallowed_tags,
        ),
    ]
