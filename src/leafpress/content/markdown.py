# topmark:header:start
#
#   project      : LeafPress
#   file         : markdown.py
#   file_relpath : src/leafpress/content/markdown.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Markdown parsing and rendering on top of ``markdown-it-py``.

Documents carry a `SyntaxTreeNode` (the nested view of markdown-it's token
stream). Stages rewrite the tree; emitters turn it back into HTML with
`render_tree`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from markdown_it import MarkdownIt
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode

if TYPE_CHECKING:
    from collections.abc import Iterator

# Shared parser; `parse` builds a fresh state per call.
_md = MarkdownIt("commonmark", {"html": True})


def parse_markdown(text: str) -> SyntaxTreeNode:
    """Parse Markdown text into a rooted syntax tree."""
    return SyntaxTreeNode(_md.parse(text))


def render_tree(tree: SyntaxTreeNode) -> str:
    """Render a syntax tree (root or any sub-node) to HTML."""
    tokens: list[Token] = tree.to_tokens()
    return _md.renderer.render(tokens, _md.options, {})


def empty_tree() -> SyntaxTreeNode:
    """Return a root node with no children (synthetic pages)."""
    return SyntaxTreeNode([])


def walk(tree: SyntaxTreeNode) -> Iterator[SyntaxTreeNode]:
    """Yield ``tree`` and all of its descendants, depth first."""
    yield tree
    for child in tree.children:
        yield from walk(child)


def replace_child(parent: SyntaxTreeNode, old: SyntaxTreeNode, *new: SyntaxTreeNode) -> None:
    """Replace ``old`` by the ``new`` nodes among ``parent``'s children, fixing parent links."""
    children: list[SyntaxTreeNode] = list(parent.children)
    at: int = children.index(old)
    children[at : at + 1] = new
    for node in new:
        node.parent = parent
    old.parent = None
    parent.children = children


def paragraph_node(text: str) -> SyntaxTreeNode:
    """Build a detached paragraph node from inline Markdown ``text``.

    Only inline syntax is parsed, so a fragment such as ``# x`` stays text.
    """
    tokens: list[Token] = [
        Token("paragraph_open", "p", 1, block=True),
        *_md.parseInline(text.strip()),
        Token("paragraph_close", "p", -1, block=True),
    ]
    node: SyntaxTreeNode = SyntaxTreeNode(tokens).children[0]
    node.parent = None
    return node


def blockquote_node(block: SyntaxTreeNode, attribution: str) -> SyntaxTreeNode:
    """Build a ``blockquote`` node holding ``block`` and a plain-text attribution paragraph.

    Args:
        block (SyntaxTreeNode): Block-level node quoted first.
        attribution (str): Text of the trailing paragraph (not parsed as Markdown).

    Returns:
        SyntaxTreeNode: The detached blockquote node.
    """
    text = Token("text", "", 0, content=attribution)
    tokens: list[Token] = [
        Token("blockquote_open", "blockquote", 1, markup=">", block=True),
        Token("paragraph_open", "p", 1, block=True),
        Token("inline", "", 0, content=attribution, children=[text], block=True),
        Token("paragraph_close", "p", -1, block=True),
        Token("blockquote_close", "blockquote", -1, markup=">", block=True),
    ]
    quote: SyntaxTreeNode = SyntaxTreeNode(tokens).children[0]
    quote.parent = None
    block.parent = quote
    quote.children = [block, *quote.children]
    return quote
