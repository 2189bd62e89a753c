"""
cmap2opml - Concept map to outline conversion

cmap2opml reads CmapTools concept maps (CXL), reduces their
concept -> linking phrase -> concept graph to parent-child trees,
and writes the result as OPML outlines.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cmap2opml")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from cmap2opml.core.converter import ConversionResult, convert_map
from cmap2opml.core.index import MapIndex, build_index
from cmap2opml.core.models import Concept, ConceptMap, Connection, LinkingPhrase, MapMetadata
from cmap2opml.core.outline import OutlineItem, OutlineTree, emit
from cmap2opml.core.roots import find_root_candidates, select_root
from cmap2opml.core.tree import ConceptNode
from cmap2opml.core.tree_builder import build_tree

__all__ = [
    "__version__",
    "Concept",
    "ConceptMap",
    "ConceptNode",
    "Connection",
    "ConversionResult",
    "LinkingPhrase",
    "MapIndex",
    "MapMetadata",
    "OutlineItem",
    "OutlineTree",
    "build_index",
    "build_tree",
    "convert_map",
    "emit",
    "find_root_candidates",
    "select_root",
]
