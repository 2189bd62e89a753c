"""Outline tree emitted from a concept tree.

The outline is format-agnostic: an ordered tree of labeled items that an
output generator (OPML today) serializes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cmap2opml.core.tree import ConceptNode

CONCEPT_ITEM_TYPE = "concept"


@dataclass
class OutlineItem:
    """A single outline entry.

    Attributes:
        text: Display text.
        type: Item type tag, "concept" for emitted concepts.
        children: Nested items, in order.
    """

    text: str
    type: str = CONCEPT_ITEM_TYPE
    children: list[OutlineItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "type": self.type,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass
class OutlineTree:
    """An outline with a single top-level item.

    Attributes:
        root: The top-level item.
        label: Optional display label (used for titles and file names).
        concept_id: Id of the concept the outline is rooted at.
    """

    root: OutlineItem
    label: str | None = None
    concept_id: str | None = None

    @property
    def items(self) -> list[OutlineItem]:
        """Top-level items (always exactly one)."""
        return [self.root]


def emit(root_node: ConceptNode, label: str | None = None) -> OutlineTree:
    """Map a concept tree onto an outline tree.

    Only labels and child order are carried over; levels and parent ids are
    construction aids and are dropped.

    Args:
        root_node: Root of the concept tree.
        label: Optional display label for the outline.

    Returns:
        OutlineTree whose root item mirrors ``root_node``.
    """
    root_item = OutlineItem(text=root_node.label)
    stack: list[tuple[ConceptNode, OutlineItem]] = [(root_node, root_item)]
    while stack:
        node, item = stack.pop()
        for child in node.children:
            child_item = OutlineItem(text=child.label)
            item.children.append(child_item)
            stack.append((child, child_item))
    return OutlineTree(root=root_item, label=label, concept_id=root_node.id)
