# topmark:header:start
#
#   project      : LeafPress
#   file         : model.py
#   file_relpath : src/leafpress/layout/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Declarative page layouts and their composition.

A page layout maps named slots to ordered lists of components. Layouts are
layered: shared (every page) < page type < per-page overrides. A layer that
defines a slot replaces that slot's list; slots it leaves undefined (``None``)
are inherited. Composition never reorders a slot's list.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from leafpress.components.types import Component

SLOT_NAMES: Final[tuple[str, ...]] = (
    "head",
    "header",
    "before_body",
    "left",
    "right",
    "after_body",
    "footer",
    "body",
)

# Flattening order used by `ResolvedLayout.components`.
COMPONENT_ORDER: Final[tuple[str, ...]] = (
    "head",
    "header",
    "before_body",
    "body",
    "after_body",
    "left",
    "right",
    "footer",
)


@dataclass(frozen=True)
class LayoutSpec:
    """A (possibly partial) layout layer; ``None`` means "not defined here"."""

    head: tuple[Component, ...] | None = None
    header: tuple[Component, ...] | None = None
    before_body: tuple[Component, ...] | None = None
    left: tuple[Component, ...] | None = None
    right: tuple[Component, ...] | None = None
    after_body: tuple[Component, ...] | None = None
    footer: tuple[Component, ...] | None = None
    body: tuple[Component, ...] | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[Component] | Component | None]) -> LayoutSpec:
        """Build a layer from ``{slot_name: components}``.

        A single component is accepted in place of a one-element list.

        Raises:
            ValueError: If ``mapping`` names an unknown slot.
        """
        unknown: list[str] = sorted(set(mapping) - set(SLOT_NAMES))
        if unknown:
            raise ValueError(
                f"Unknown layout slot(s): {', '.join(unknown)} (expected: {', '.join(SLOT_NAMES)})"
            )
        values: dict[str, Any] = {}
        for slot, value in mapping.items():
            if value is None:
                values[slot] = None
            elif callable(value) and hasattr(value, "name"):
                values[slot] = (value,)
            else:
                values[slot] = tuple(value)  # type: ignore[arg-type]
        return cls(**values)

    def defined_slots(self) -> dict[str, tuple[Component, ...]]:
        """Return the slots this layer defines."""
        return {
            f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None
        }

    def merged_with(self, other: LayoutSpec | None) -> LayoutSpec:
        """Return this layer with every slot ``other`` defines replaced by ``other``'s."""
        if other is None:
            return self
        return replace(self, **other.defined_slots())


@dataclass(frozen=True)
class ResolvedLayout:
    """A fully defined layout: every slot is a (possibly empty) tuple."""

    head: tuple[Component, ...] = ()
    header: tuple[Component, ...] = ()
    before_body: tuple[Component, ...] = ()
    left: tuple[Component, ...] = ()
    right: tuple[Component, ...] = ()
    after_body: tuple[Component, ...] = ()
    footer: tuple[Component, ...] = ()
    body: tuple[Component, ...] = ()

    def components(self) -> list[Component]:
        """Return every component once, in slot order.

        Order: head, header, before_body, body, after_body, left, right, footer.
        Duplicates are detected by identity; the first occurrence is kept.
        """
        seen: set[int] = set()
        result: list[Component] = []
        for slot in COMPONENT_ORDER:
            for component in getattr(self, slot):
                if id(component) not in seen:
                    seen.add(id(component))
                    result.append(component)
        return result


def compose(
    shared: LayoutSpec,
    page_layout: LayoutSpec,
    overrides: LayoutSpec | None = None,
) -> ResolvedLayout:
    """Merge layout layers into a resolved layout.

    Args:
        shared (LayoutSpec): Components common to every page.
        page_layout (LayoutSpec): Components of one page type.
        overrides (LayoutSpec | None): Per-page replacements.

    Returns:
        ResolvedLayout: Every slot defined; slots no layer set are empty.
    """
    merged: LayoutSpec = shared.merged_with(page_layout).merged_with(overrides)
    return ResolvedLayout(**{slot: getattr(merged, slot) or () for slot in SLOT_NAMES})
