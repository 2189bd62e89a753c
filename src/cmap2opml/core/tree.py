"""Concept tree data structures.

A ConceptNode tree is the built artifact of one tree-build run. Nodes are
owned by their parent in that one tree; the parent is recorded by id only,
so a tree never holds a cyclic object reference.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterator


@dataclass
class ConceptNode:
    """A concept placed in an outline tree.

    The same concept id may appear at several positions in one tree when the
    source map reaches it through more than one path; each position is its
    own node instance.

    Attributes:
        id: Concept id.
        label: Concept display label.
        children: Child nodes in discovery order.
        level: Depth from the root (root = 0).
        parent_id: Id of the parent concept, None for the root.
    """

    id: str
    label: str
    children: list[ConceptNode] = field(default_factory=list)
    level: int = 0
    parent_id: str | None = field(default=None, repr=False)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add_child(self, child: ConceptNode) -> ConceptNode:
        """Attach ``child`` below this node, setting its parent and level."""
        child.parent_id = self.id
        child.level = self.level + 1
        self.children.append(child)
        return child

    def walk(self, order: str = "pre") -> Iterator[ConceptNode]:
        """Iterate over this node and descendants.

        Args:
            order: Traversal order:
                - "pre": Parent first (depth-first, pre-order)
                - "post": Children first (depth-first, post-order)
                - "level": Breadth-first (level order)

        Yields:
            ConceptNode instances in the specified order.
        """
        if order == "pre":
            yield from self._walk_preorder()
        elif order == "post":
            yield from self._walk_postorder()
        elif order == "level":
            yield from self._walk_level()
        else:
            raise ValueError(f"Unknown traversal order: {order}")

    def _walk_preorder(self) -> Iterator[ConceptNode]:
        yield self
        for child in self.children:
            yield from child._walk_preorder()

    def _walk_postorder(self) -> Iterator[ConceptNode]:
        for child in self.children:
            yield from child._walk_postorder()
        yield self

    def _walk_level(self) -> Iterator[ConceptNode]:
        queue: deque[ConceptNode] = deque([self])
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node.children)

    def find(self, predicate: Callable[[ConceptNode], bool]) -> Iterator[ConceptNode]:
        """Find all nodes in this subtree matching predicate."""
        for node in self.walk():
            if predicate(node):
                yield node

    def find_by_id(self, concept_id: str) -> list[ConceptNode]:
        """Return every position at which ``concept_id`` occurs, pre-order."""
        return list(self.find(lambda n: n.id == concept_id))

    def count(self) -> int:
        """Number of nodes in this subtree, including this one."""
        return sum(1 for _ in self.walk())

    def depth(self) -> int:
        """Height of this subtree in levels below this node."""
        return max((n.level for n in self.walk()), default=self.level) - self.level
