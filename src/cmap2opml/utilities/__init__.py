"""Utility modules for cmap2opml."""
