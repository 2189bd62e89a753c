"""
cmap2opml.parsers - Input adapters for concept map documents
"""

from cmap2opml.parsers.cxl import CXLParser, create_parser, load_cxl, parse_cxl

__all__ = ["CXLParser", "create_parser", "load_cxl", "parse_cxl"]
