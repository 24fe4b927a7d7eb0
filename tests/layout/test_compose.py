# topmark:header:start
#
#   project      : LeafPress
#   file         : test_compose.py
#   file_relpath : tests/layout/test_compose.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for layout layering (`leafpress.layout.model`)."""

from __future__ import annotations

import pytest

from leafpress.components.types import BaseComponent
from leafpress.layout.defaults import content_page_layout, shared_page_components
from leafpress.layout.model import LayoutSpec, ResolvedLayout, compose


def _c(name: str) -> BaseComponent:
    return BaseComponent(name=name)


def test_page_layer_replaces_only_defined_slots() -> None:
    """Slots the page layer leaves undefined are inherited from the shared layer."""
    head, footer, body = _c("head"), _c("footer"), _c("body")
    shared = LayoutSpec(head=(head,), footer=(footer,), body=(_c("shared-body"),))
    page = LayoutSpec(body=(body,))

    layout: ResolvedLayout = compose(shared, page)

    assert layout.head == (head,)
    assert layout.footer == (footer,)
    assert layout.body == (body,)
    assert layout.left == ()


def test_empty_list_is_a_definition() -> None:
    """An explicitly empty slot replaces the lower layer's components."""
    shared = LayoutSpec(header=(_c("banner"),))
    layout = compose(shared, LayoutSpec(header=()))
    assert layout.header == ()


def test_overrides_win_over_page_layer() -> None:
    replacement = _c("replacement")
    layout = compose(
        LayoutSpec(),
        LayoutSpec(left=(_c("toc"),), right=(_c("graph"),)),
        LayoutSpec(left=(replacement,)),
    )
    assert layout.left == (replacement,)
    assert [c.name for c in layout.right] == ["graph"]


def test_slot_order_is_preserved() -> None:
    a, b, c = _c("a"), _c("b"), _c("c")
    layout = compose(LayoutSpec(before_body=(a, b, c)), LayoutSpec())
    assert layout.before_body == (a, b, c)


def test_components_flattening_order_and_identity_dedupe() -> None:
    """Flattened components follow the slot order; one instance in two slots appears once."""
    shared = _c("shared")
    head, header, before, body, after, left, right, footer = (
        _c(n) for n in ("head", "header", "before", "body", "after", "left", "right", "footer")
    )
    layout = ResolvedLayout(
        head=(head,),
        header=(header, shared),
        before_body=(before,),
        body=(body,),
        after_body=(after,),
        left=(left, shared),
        right=(right,),
        footer=(footer,),
    )

    names = [c.name for c in layout.components()]

    assert names == [
        "head", "header", "shared", "before", "body", "after", "left", "right", "footer"
    ]


def test_equal_but_distinct_components_are_both_kept() -> None:
    """De-duplication is by identity, not by value."""
    layout = ResolvedLayout(left=(_c("x"),), right=(_c("x"),))
    assert len(layout.components()) == 2


def test_from_mapping_accepts_single_component() -> None:
    title = _c("title")
    spec = LayoutSpec.from_mapping({"head": title, "left": [title], "right": None})
    assert spec.head == (title,)
    assert spec.left == (title,)
    assert spec.right is None
    assert set(spec.defined_slots()) == {"head", "left"}


def test_from_mapping_rejects_unknown_slot() -> None:
    with pytest.raises(ValueError, match="sidebar"):
        LayoutSpec.from_mapping({"sidebar": [_c("x")]})


def test_default_layouts_compose() -> None:
    """The default shared and content layers fill head, body, sidebars and footer."""
    layout = compose(shared_page_components(), content_page_layout())

    assert [c.name for c in layout.head] == ["Head"]
    assert [c.name for c in layout.before_body] == [
        "ArticleTitle", "ContentMeta", "MediaMeta", "TagList"
    ]
    assert [c.name for c in layout.left] == ["PageTitle"]
    assert [c.name for c in layout.body] == ["Content"]
    assert [c.name for c in layout.footer] == ["Footer"]
    assert layout.header == () and layout.right == () and layout.after_body == ()
