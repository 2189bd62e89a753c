"""Tree builder for turning a concept map into a concept tree.

Concept-to-concept relationships are always two hops in a concept map:
Concept --connection--> LinkingPhrase --connection--> Concept. The builder
collapses each such path into a direct parent-child edge and lays the
result out as a tree below a chosen root.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator
from typing import TYPE_CHECKING

from cmap2opml.core.tree import ConceptNode

if TYPE_CHECKING:
    from cmap2opml.core.index import MapIndex
    from cmap2opml.core.models import Concept

logger = logging.getLogger(__name__)


class ConceptTreeBuilder:
    """Builds ConceptNode trees from a MapIndex.

    The attachment pass is flat: every concept contributes one hop of
    children (its two-hop targets), and the pass iterates over all concepts
    exactly once. Trees are then laid out from the requested root, so a
    cycle in the map shows up as a concept repeated under several parents
    rather than as unbounded recursion.

    Example:
        builder = ConceptTreeBuilder(MapIndex.from_map(cmap))
        root = builder.build("concept-1")
    """

    def __init__(self, index: MapIndex) -> None:
        """Initialize the builder.

        Args:
            index: Read-only lookups for the map. Never mutated here.
        """
        self.index = index
        self._child_ids: dict[str, tuple[str, ...]] | None = None

    @property
    def child_ids(self) -> dict[str, tuple[str, ...]]:
        """Concept id to the concept ids attached under it, in discovery order."""
        if self._child_ids is None:
            self._child_ids = self._attach_pass()
        return self._child_ids

    def _attach_pass(self) -> dict[str, tuple[str, ...]]:
        """Collapse concept -> phrase -> concept paths into direct edges."""
        index = self.index
        attached: dict[str, tuple[str, ...]] = {}

        for concept_id in index.concepts_by_id:
            targets: list[str] = []
            for conn in index.outgoing_from(concept_id):
                if not index.is_phrase(conn.to_id):
                    if not index.is_concept(conn.to_id):
                        logger.debug(
                            "Skipping connection %s -> %s: unknown target",
                            conn.from_id,
                            conn.to_id,
                        )
                    continue
                for leg in index.outgoing_from(conn.to_id):
                    if index.is_concept(leg.to_id):
                        targets.append(leg.to_id)
                    else:
                        logger.debug(
                            "Skipping connection %s -> %s: target is not a concept",
                            leg.from_id,
                            leg.to_id,
                        )
            attached[concept_id] = tuple(targets)

        return attached

    def _new_node(self, concept_id: str) -> ConceptNode:
        concept = self.index.concepts_by_id[concept_id]
        return ConceptNode(id=concept.id, label=concept.label)

    def build(self, root_id: str) -> ConceptNode | None:
        """Build the tree rooted at ``root_id``.

        Every call allocates one fresh node per concept. Each concept is
        expanded at most once: its first placement uses that node and
        carries its subtree, while later placements (cross-links, and
        back-links that close a cycle) are independent leaf copies. Tree
        size is therefore bounded by concepts plus attached edges.

        Args:
            root_id: Concept id to root the tree at.

        Returns:
            The root ConceptNode, or None if ``root_id`` is not a concept.
        """
        if not self.index.is_concept(root_id):
            return None

        child_ids = self.child_ids
        nodes = {concept_id: self._new_node(concept_id) for concept_id in self.index.concepts_by_id}
        placed = {root_id}
        root = nodes[root_id]

        # Breadth-first: a concept is expanded at its shallowest placement
        queue = deque([root])
        while queue:
            node = queue.popleft()
            for target_id in child_ids.get(node.id, ()):
                if target_id in placed:
                    node.add_child(self._new_node(target_id))
                    continue
                placed.add(target_id)
                child = nodes[target_id]
                node.add_child(child)
                queue.append(child)

        return root

    def build_all(self) -> Iterator[tuple[Concept, ConceptNode]]:
        """Build one tree per concept, in input order.

        Yields:
            (concept, root node) pairs. Isolated concepts yield single-node trees.
        """
        for concept_id, concept in self.index.concepts_by_id.items():
            root = self.build(concept_id)
            if root is None:
                logger.warning("Skipping concept '%s': not found in index", concept_id)
                continue
            yield concept, root


def build_tree(index: MapIndex, root_id: str) -> ConceptNode | None:
    """Convenience function to build a single tree.

    Args:
        index: Map lookups.
        root_id: Concept id to root the tree at.

    Returns:
        Root ConceptNode, or None if ``root_id`` is unknown.
    """
    return ConceptTreeBuilder(index).build(root_id)


def build_all_trees(index: MapIndex) -> Iterator[tuple[Concept, ConceptNode]]:
    """Convenience function to build a tree for every concept."""
    return ConceptTreeBuilder(index).build_all()
