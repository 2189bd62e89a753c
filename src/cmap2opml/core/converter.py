"""Conversion runs: concept map in, outline tree(s) out.

Two modes share one read-only index:
- single root: pick a root (or honor an override) and build one outline
- all concepts: build one outline per concept, skipping root selection
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cmap2opml.core.index import MapIndex
from cmap2opml.core.outline import OutlineTree, emit
from cmap2opml.core.roots import DEFAULT_PREFERRED_NAMES, select_root
from cmap2opml.core.tree_builder import ConceptTreeBuilder

if TYPE_CHECKING:
    from cmap2opml.core.models import ConceptMap

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of a conversion run.

    Attributes:
        outlines: One outline per requested root, in order.
        root_id: Selected root in single-root mode, None in all-concepts mode.
        requested_root: Root override as given by the caller.
        skipped: Concept ids that could not be built (all-concepts mode).
    """

    outlines: list[OutlineTree] = field(default_factory=list)
    root_id: str | None = None
    requested_root: str | None = None
    skipped: list[str] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        """True when a requested root was unknown and auto-detection ran."""
        return self.requested_root is not None and self.root_id != self.requested_root


def convert_map(
    cmap: ConceptMap,
    root_id: str | None = None,
    all_concepts: bool = False,
    preferred_names: Iterable[str] = DEFAULT_PREFERRED_NAMES,
) -> ConversionResult:
    """Convert a parsed concept map into outline trees.

    Args:
        cmap: The parsed concept map.
        root_id: Optional root override (single-root mode only).
        all_concepts: Build one outline per concept instead of one overall.
        preferred_names: Label substrings that mark a likely root.

    Returns:
        ConversionResult with the emitted outlines.

    Raises:
        ValueError: If the map has no concepts.
        LookupError: If the selected root cannot be built in single-root mode.
    """
    if cmap.is_empty():
        raise ValueError("Concept map contains no concepts")

    index = MapIndex.from_map(cmap)
    builder = ConceptTreeBuilder(index)
    result = ConversionResult(requested_root=root_id)

    if all_concepts:
        built_ids = set()
        for concept, node in builder.build_all():
            built_ids.add(concept.id)
            result.outlines.append(emit(node, label=concept.label))
        result.skipped = [cid for cid in index.concepts_by_id if cid not in built_ids]
        logger.info(
            "Built %d outline(s) from %d concept(s)",
            len(result.outlines),
            len(cmap.concepts),
        )
        return result

    selected = select_root(cmap.concepts, cmap.connections, root_id, preferred_names)
    root = builder.build(selected)
    if root is None:
        raise LookupError(f"Root concept '{selected}' not found")

    result.root_id = selected
    result.outlines.append(emit(root, label=root.label))
    logger.info("Built outline rooted at '%s' (%d node(s))", root.label, root.count())
    return result
