"""
cmap2opml.core - Record models, indices, root selection and tree building
"""

from cmap2opml.core.converter import ConversionResult, convert_map
from cmap2opml.core.index import MapIndex, build_index
from cmap2opml.core.models import (
    Concept,
    ConceptMap,
    Connection,
    LinkingPhrase,
    MapMetadata,
)
from cmap2opml.core.outline import OutlineItem, OutlineTree, emit
from cmap2opml.core.roots import find_root_candidates, select_root
from cmap2opml.core.tree import ConceptNode
from cmap2opml.core.tree_builder import ConceptTreeBuilder, build_all_trees, build_tree

__all__ = [
    "Concept",
    "ConceptMap",
    "ConceptNode",
    "ConceptTreeBuilder",
    "Connection",
    "ConversionResult",
    "LinkingPhrase",
    "MapIndex",
    "MapMetadata",
    "OutlineItem",
    "OutlineTree",
    "build_all_trees",
    "build_index",
    "build_tree",
    "convert_map",
    "emit",
    "find_root_candidates",
    "select_root",
]
