"""
cmap2opml.generators - Output adapters for outline trees
"""

from cmap2opml.generators.opml import generate_opml, write_opml

__all__ = ["generate_opml", "write_opml"]
