# topmark:header:start
#
#   project      : LeafPress
#   file         : types.py
#   file_relpath : src/leafpress/components/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Component contract and view-tree types.

A component is a callable object with a ``name`` and optional ``css``/``js``
fragments. Called with `RenderProps`, it returns a `ViewNode` tree (or None to
render nothing). The layout composer only relies on this contract; it never
looks inside a component.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, Union

if TYPE_CHECKING:
    from markdown_it.tree import SyntaxTreeNode

    from leafpress.components.render import StaticResources
    from leafpress.content.document import Document
    from leafpress.pipeline.context import PipelineContext
    from leafpress.timeline.events import TimelineEvent


class RawHtml(str):
    """Pre-rendered HTML inserted into a view tree without escaping."""

    __slots__ = ()


AttrValue = Union[str, bool, None]
Child = Union["ViewNode", str]


@dataclass
class ViewNode:
    """An HTML element in a view tree.

    Attributes:
        tag (str): Element name. An empty tag renders only its children.
        attrs (dict[str, AttrValue]): Attributes; ``True`` renders a bare attribute,
            ``False``/``None`` omit it.
        children (list[Child]): Child nodes or text (escaped unless `RawHtml`).
    """

    tag: str
    attrs: dict[str, AttrValue] = field(default_factory=lambda: {})
    children: list[Child] = field(default_factory=lambda: [])


def h(tag: str, attrs: dict[str, AttrValue] | None = None, *children: Child | None) -> ViewNode:
    """Build a `ViewNode`, dropping ``None`` children."""
    return ViewNode(tag=tag, attrs=dict(attrs or {}), children=[c for c in children if c is not None])


@dataclass(frozen=True)
class RenderProps:
    """Everything a component may read while rendering one page.

    Attributes:
        ctx (PipelineContext): Run context (configuration, corpus).
        document (Document): The page's document (real or synthetic).
        tree (SyntaxTreeNode): The page's Markdown tree.
        resources (StaticResources): CSS/JS collected from all components.
        events (tuple[TimelineEvent, ...]): Timeline events (timeline pages only).
        all_documents (tuple[Document, ...]): Every document of the corpus.
        display_class (str | None): Optional CSS class hint from the layout.
    """

    ctx: PipelineContext
    document: Document
    tree: SyntaxTreeNode
    resources: StaticResources
    events: tuple[TimelineEvent, ...] = ()
    all_documents: tuple[Document, ...] = ()
    display_class: str | None = None

    @property
    def slug(self) -> str:
        """Slug of the page being rendered."""
        return self.document.slug


class Component(Protocol):
    """Protocol for a rendering component."""

    name: str
    css: str | None
    js: str | None

    def __call__(self, props: RenderProps) -> ViewNode | None:
        """Render the component for ``props`` (None renders nothing)."""
        ...


@dataclass(eq=False)
class BaseComponent:
    """Reusable foundation for components.

    Subclass and override ``render()``. Instances compare by identity, which is
    what layout de-duplication relies on.

    Attributes:
        name (str): Component name (for logs).
        css (str | None): CSS fragment contributed to every page.
        js (str | None): JavaScript fragment contributed to every page.
    """

    name: str
    css: str | None = None
    js: str | None = None

    def __call__(self, props: RenderProps) -> ViewNode | None:
        return self.render(props)

    def render(self, props: RenderProps) -> ViewNode | None:
        """Return this component's view tree for ``props``."""
        return None
