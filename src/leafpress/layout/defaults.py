# topmark:header:start
#
#   project      : LeafPress
#   file         : defaults.py
#   file_relpath : src/leafpress/layout/defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default layouts.

``shared_page_components`` applies to every page. ``content_page_layout``
describes single-note pages; timeline pages reuse it with the `Timeline`
component as body.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from leafpress.components.builtins import (
    ArticleTitle,
    Content,
    ContentMeta,
    Footer,
    Head,
    MediaMeta,
    PageTitle,
    TagList,
)
from leafpress.layout.model import LayoutSpec

if TYPE_CHECKING:
    from collections.abc import Mapping


def shared_page_components(footer_links: Mapping[str, str] | None = None) -> LayoutSpec:
    """Return the layout layer shared by every page.

    Args:
        footer_links (Mapping[str, str] | None): Footer links; None uses the
            ``[site] footer_links`` configuration at render time.
    """
    return LayoutSpec(
        head=(Head(),),
        header=(),
        after_body=(),
        footer=(Footer(links=dict(footer_links) if footer_links is not None else None),),
    )


def content_page_layout() -> LayoutSpec:
    """Return the layout layer for single-note pages."""
    return LayoutSpec(
        before_body=(ArticleTitle(), ContentMeta(), MediaMeta(), TagList()),
        left=(PageTitle(),),
        right=(),
        body=(Content(),),
    )
