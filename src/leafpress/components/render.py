# topmark:header:start
#
#   project      : LeafPress
#   file         : render.py
#   file_relpath : src/leafpress/components/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Page rendering: resource aggregation, view-tree serialization and page assembly.

Every page, real or synthetic, goes through `render_page`, which lays the
resolved layout's slots out in a fixed page skeleton.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import TYPE_CHECKING, Final

from leafpress.components.types import RawHtml, ViewNode, h
from leafpress.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from leafpress.components.types import Child, Component, RenderProps
    from leafpress.config.logging import LeafpressLogger
    from leafpress.layout.model import ResolvedLayout

logger: LeafpressLogger = get_logger(__name__)

VOID_ELEMENTS: Final[frozenset[str]] = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "wbr"}
)


@dataclass
class StaticResources:
    """Ordered, de-duplicated CSS and JS fragments for every page."""

    css: list[str] = field(default_factory=lambda: [])
    js: list[str] = field(default_factory=lambda: [])

    def add(self, component: Component) -> None:
        """Add ``component``'s fragments unless already present."""
        css: str | None = getattr(component, "css", None)
        js: str | None = getattr(component, "js", None)
        if css and css not in self.css:
            self.css.append(css)
        if js and js not in self.js:
            self.js.append(js)


def collect_resources(components: Iterable[Component]) -> StaticResources:
    """Aggregate the CSS/JS fragments of ``components``, in order."""
    resources = StaticResources()
    for component in components:
        resources.add(component)
    return resources


def _render_attrs(attrs: dict[str, str | bool | None]) -> str:
    parts: list[str] = []
    for key, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {key}")
        else:
            parts.append(f' {key}="{escape(value, quote=True)}"')
    return "".join(parts)


def render_html(node: Child | None) -> str:
    """Serialize a view tree to HTML.

    Text children are escaped unless they are `RawHtml`; an element with an
    empty tag renders only its children.
    """
    if node is None:
        return ""
    if isinstance(node, RawHtml):
        return str(node)
    if isinstance(node, str):
        return escape(node, quote=False)
    inner: str = "".join(render_html(child) for child in node.children)
    if not node.tag:
        return inner
    if node.tag in VOID_ELEMENTS:
        return f"<{node.tag}{_render_attrs(node.attrs)}>"
    return f"<{node.tag}{_render_attrs(node.attrs)}>{inner}</{node.tag}>"


def render_components(components: Sequence[Component], props: RenderProps) -> list[ViewNode]:
    """Render each component, skipping those that render nothing."""
    rendered: list[ViewNode] = []
    for component in components:
        node: ViewNode | None = component(props)
        if node is not None:
            rendered.append(node)
    return rendered


def render_page(layout: ResolvedLayout, props: RenderProps) -> str:
    """Render a full HTML page for ``props`` using ``layout``.

    Args:
        layout (ResolvedLayout): Resolved slots for this page.
        props (RenderProps): Page data shared by every component.

    Returns:
        str: The complete HTML document.
    """
    logger.trace("Rendering page %s", props.slug)
    head = h("head", None, *render_components(layout.head, props))
    body = h(
        "body",
        {"data-slug": props.slug},
        h(
            "div",
            {"id": "leafpress-root", "class": "page"},
            h(
                "div",
                {"id": "leafpress-body"},
                h("div", {"class": "left sidebar"}, *render_components(layout.left, props)),
                h(
                    "div",
                    {"class": "center"},
                    h(
                        "div",
                        {"class": "page-header"},
                        h("header", None, *render_components(layout.header, props)),
                        h(
                            "div",
                            {"class": "popover-hint"},
                            *render_components(layout.before_body, props),
                        ),
                    ),
                    *render_components(layout.body, props),
                    h("hr"),
                    h("div", {"class": "page-footer"}, *render_components(layout.after_body, props)),
                ),
                h("div", {"class": "right sidebar"}, *render_components(layout.right, props)),
            ),
            *render_components(layout.footer, props),
        ),
    )
    html = h("html", {"lang": "en"}, head, body)
    return "<!DOCTYPE html>\n" + render_html(html)
