"""
cmap2opml.commands - CLI command implementations
"""

__all__ = [
    "convert",
    "init",
    "roots",
]
