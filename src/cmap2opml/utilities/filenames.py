"""
cmap2opml.utilities.filenames - Output file naming.

Concept labels are free text; these helpers turn them into file names that
are valid on common filesystems and unique within one output directory.
"""

import re
from pathlib import Path
from typing import Optional, Set

DEFAULT_MAX_LENGTH = 100

# Characters rejected by Windows, plus ASCII control characters
_ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_WHITESPACE = re.compile(r"\s+")
_RESERVED_NAMES = {
    "CON", "PRN", "AUX", "NUL",
    *(f"COM{i}" for i in range(1, 10)),
    *(f"LPT{i}" for i in range(1, 10)),
}


def safe_filename(label: str, fallback: str = "concept", max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Convert a label into a file name stem.

    Args:
        label: Free-text label (e.g., a concept label)
        fallback: Stem to use when nothing usable is left
        max_length: Maximum stem length

    Returns:
        A non-empty stem without a file extension
    """
    name = _WHITESPACE.sub(" ", label or "")
    name = _ILLEGAL_CHARS.sub("", name).strip(" .")
    if max_length > 0:
        name = name[:max_length].rstrip(" .")

    if not name or name.upper() in _RESERVED_NAMES:
        name = _ILLEGAL_CHARS.sub("", fallback).strip(" .") or "concept"
    return name


def unique_path(
    directory: Path,
    stem: str,
    extension: str = ".opml",
    used: Optional[Set[str]] = None,
) -> Path:
    """
    Return ``directory/stem+extension``, adding ``_2``, ``_3``... on collision.

    Collisions are checked case-insensitively against ``used`` (names handed
    out earlier in the same run), which is updated in place.

    Args:
        directory: Output directory
        stem: File name stem from safe_filename()
        extension: File extension including the dot
        used: Names already taken in this run

    Returns:
        Path to a file name not yet in ``used``
    """
    if used is None:
        used = set()

    candidate = f"{stem}{extension}"
    counter = 2
    while candidate.lower() in used:
        candidate = f"{stem}_{counter}{extension}"
        counter += 1

    used.add(candidate.lower())
    return directory / candidate
