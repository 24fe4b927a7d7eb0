# topmark:header:start
#
#   project      : LeafPress
#   file         : builtins.py
#   file_relpath : src/leafpress/components/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in components.

Small, self-contained components enough to render notes and timeline pages.
Each one reads `RenderProps` and returns a `ViewNode` (or None).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from leafpress.components.render import render_html
from leafpress.components.types import BaseComponent, RawHtml, h
from leafpress.content.markdown import render_tree

if TYPE_CHECKING:
    from datetime import datetime

    from markdown_it.tree import SyntaxTreeNode

    from leafpress.components.types import RenderProps, ViewNode
    from leafpress.timeline.events import TimelineEvent


def format_date(value: datetime) -> str:
    """Format a timestamp for display (local time): ``January 5, 2025, 03:04 PM``."""
    local: datetime = value.astimezone()
    return f"{local:%B} {local.day}, {local.year}, {local:%I:%M %p}"


def _page_title(props: RenderProps) -> str:
    return props.document.display_title


@dataclass(eq=False)
class Head(BaseComponent):
    """``<head>`` contents: charset, title, and the aggregated CSS/JS."""

    name: str = "Head"

    def render(self, props: RenderProps) -> ViewNode | None:
        site_title: str = props.ctx.config.site_title
        title: str = _page_title(props)
        full_title: str = f"{title} | {site_title}" if site_title else title
        children: list[ViewNode] = [
            h("meta", {"charset": "utf-8"}),
            h("meta", {"name": "viewport", "content": "width=device-width, initial-scale=1.0"}),
            h("title", None, full_title),
        ]
        if props.resources.css:
            children.append(h("style", None, RawHtml("\n".join(props.resources.css))))
        children.extend(h("script", None, RawHtml(js)) for js in props.resources.js)
        return h("", None, *children)


@dataclass(eq=False)
class PageTitle(BaseComponent):
    """Site title linking to the home page."""

    name: str = "PageTitle"
    css: str | None = ".page-title { font-size: 1.75rem; margin: 0; }"

    def render(self, props: RenderProps) -> ViewNode | None:
        return h(
            "h2",
            {"class": "page-title"},
            h("a", {"href": "/"}, props.ctx.config.site_title),
        )


@dataclass(eq=False)
class ArticleTitle(BaseComponent):
    """The page's ``<h1>``."""

    name: str = "ArticleTitle"
    css: str | None = ".article-title { margin: 2rem 0 0 0; }"

    def render(self, props: RenderProps) -> ViewNode | None:
        title: str = _page_title(props)
        return h("h1", {"class": "article-title"}, title) if title else None


@dataclass(eq=False)
class ContentMeta(BaseComponent):
    """Creation date and note status (in progress / incomplete).

    Renders nothing for pages without body text.
    """

    name: str = "ContentMeta"
    css: str | None = (
        ".content-meta { margin-top: 0; color: gray; }\n"
        ".content-meta .in-progress, .content-meta .incomplete { font-style: italic; }"
    )
    show_in_progress: bool = True
    show_incomplete: bool = True

    def render(self, props: RenderProps) -> ViewNode | None:
        doc = props.document
        if not doc.raw_text.strip():
            return None
        segments: list[ViewNode] = []
        if doc.dates is not None and doc.dates.created is not None:
            created: datetime = doc.dates.created
            segments.append(h("time", {"datetime": created.isoformat()}, format_date(created)))
        if self.show_in_progress and doc.frontmatter.get("in-progress"):
            segments.append(h("span", {"class": "in-progress"}, "In progress"))
        if self.show_incomplete and "incomplete" in doc.frontmatter:
            if doc.frontmatter["incomplete"]:
                segments.append(h("span", {"class": "incomplete"}, "incomplete note"))
            else:
                segments.append(h("span", {"class": "complete"}, "completed note"))
        return h("p", {"class": _classes(props.display_class, "content-meta")}, *segments)


@dataclass(eq=False)
class MediaMeta(BaseComponent):
    """Title, type and authors of the medium a note is about (``media`` front matter)."""

    name: str = "MediaMeta"
    css: str | None = ".media-meta { margin-top: 0; }"

    def render(self, props: RenderProps) -> ViewNode | None:
        fm: dict[str, Any] = props.document.frontmatter
        if not props.document.raw_text.strip() or not fm.get("media"):
            return None
        children: list[ViewNode] = [
            h("span", {"class": "title"}, f"Title: {fm['media']} ({fm.get('media-type', '')})")
        ]
        authors: Any = fm.get("authors")
        if isinstance(authors, str):
            authors = [authors]
        # Scalars other than strings (``authors: 1965``) are ignored.
        if isinstance(authors, (list, tuple)) and authors:
            label: str = "Authors" if len(authors) > 1 else "Author"
            children.append(h("br"))
            children.append(
                h("span", {"class": "authors"}, f"{label}: {' & '.join(str(a) for a in authors)}")
            )
        return h("p", {"class": _classes(props.display_class, "media-meta")}, *children)


@dataclass(eq=False)
class TagList(BaseComponent):
    """Links to the document's tags."""

    name: str = "TagList"
    css: str | None = ".tags { list-style: none; display: flex; gap: 0.4rem; padding-left: 0; }"

    def render(self, props: RenderProps) -> ViewNode | None:
        tags: tuple[str, ...] = props.document.tags
        if not tags:
            return None
        return h(
            "ul",
            {"class": _classes(props.display_class, "tags")},
            *(
                h("li", None, h("a", {"href": f"/tags/{tag}", "class": "internal tag-link"}, tag))
                for tag in tags
            ),
        )


@dataclass(eq=False)
class Content(BaseComponent):
    """The rendered Markdown body.

    A leading ``<h1>`` repeating the page title is dropped.
    """

    name: str = "Content"

    def render(self, props: RenderProps) -> ViewNode | None:
        children: list[SyntaxTreeNode] = list(props.tree.children)
        title: str | None = props.document.title
        if children and title and _is_title_heading(children[0], title):
            children = children[1:]
        classes: list[str] = ["popover-hint"]
        cssclasses: Any = props.document.frontmatter.get("cssclasses")
        if isinstance(cssclasses, list):
            classes.extend(str(c) for c in cssclasses)
        html: str = "".join(render_tree(child) for child in children)
        return h("article", {"class": " ".join(classes)}, RawHtml(html))


def _is_title_heading(node: SyntaxTreeNode, title: str) -> bool:
    if node.type != "heading" or node.tag != "h1" or not node.children:
        return False
    return node.children[0].content.strip().lower() == title.strip().lower()


@dataclass(eq=False)
class Timeline(BaseComponent):
    """List of timeline events, newest first."""

    name: str = "Timeline"
    css: str | None = (
        ".timeline { max-width: 100%; margin: 2rem 0; }\n"
        ".timeline-event { display: flex; gap: 1rem; padding: 1rem; margin-bottom: 1.5rem; }\n"
        ".timeline-date { min-width: 150px; }\n"
        ".timeline-content { flex: 1; }\n"
        ".timeline-title { font-weight: 600; text-decoration: none; display: block; }\n"
        ".timeline-type { font-size: 0.9em; }"
    )

    def render(self, props: RenderProps) -> ViewNode | None:
        if not props.events:
            items: list[ViewNode] = [h("div", {"class": "timeline-event"}, "No events found")]
        else:
            items = [_timeline_item(event) for event in props.events]
        return h("div", {"class": "timeline"}, h("div", {"class": "timeline-container"}, *items))


def _timeline_item(event: TimelineEvent) -> ViewNode:
    return h(
        "div",
        {"class": "timeline-event", "data-kind": event.kind.value},
        h("div", {"class": "timeline-date"}, format_date(event.timestamp)),
        h(
            "div",
            {"class": "timeline-content"},
            h("a", {"href": "/" + event.slug, "class": "timeline-title"}, event.title),
            h("div", {"class": "timeline-type"}, event.kind.label),
        ),
    )


@dataclass(eq=False)
class Footer(BaseComponent):
    """Site footer with configured links.

    Attributes:
        links (dict[str, str] | None): ``label → url``; None uses ``[site] footer_links``.
    """

    name: str = "Footer"
    css: str | None = "footer ul { list-style: none; display: flex; gap: 1rem; padding-left: 0; }"
    links: dict[str, str] | None = field(default=None)

    def render(self, props: RenderProps) -> ViewNode | None:
        links: dict[str, str] = (
            self.links if self.links is not None else dict(props.ctx.config.footer_links)
        )
        return h(
            "footer",
            None,
            h("p", None, "Created with LeafPress"),
            h("ul", None, *(h("li", None, h("a", {"href": url}, label)) for label, url in links.items())),
        )


def _classes(*names: str | None) -> str:
    return " ".join(n for n in names if n)


def render_component(component: BaseComponent, props: RenderProps) -> str:
    """Render one component straight to HTML (empty string when it renders nothing)."""
    return render_html(component(props))
