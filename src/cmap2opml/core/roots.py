"""Root concept selection.

A concept map has no declared root, so one is picked heuristically:
a user override wins, then concepts that are never the target of a
connection, with a preference for conventional names like "main".
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmap2opml.core.models import Concept, Connection

logger = logging.getLogger(__name__)

DEFAULT_PREFERRED_NAMES: tuple[str, ...] = ("root", "main", "center")


def find_root_candidates(
    concepts: Sequence[Concept],
    connections: Iterable[Connection],
) -> list[Concept]:
    """Return concepts that are never the target of any connection.

    Args:
        concepts: Concepts in input order.
        connections: All connections of the map.

    Returns:
        Candidate concepts, in input order.
    """
    target_ids = {conn.to_id for conn in connections}
    return [c for c in concepts if c.id not in target_ids]


def _matches_preferred(label: str, preferred_names: Iterable[str]) -> bool:
    lowered = label.lower()
    return any(name.lower() in lowered for name in preferred_names)


def select_root(
    concepts: Sequence[Concept],
    connections: Iterable[Connection],
    requested_id: str | None = None,
    preferred_names: Iterable[str] = DEFAULT_PREFERRED_NAMES,
) -> str:
    """Choose the root concept id for a single-root conversion.

    Priority:
    1. ``requested_id`` when it names a known concept.
    2. The only root candidate, if there is exactly one.
    3. The first candidate whose label contains a preferred name
       (case-insensitive), else the first candidate.
    4. The first concept, when every concept is some connection's target.

    Args:
        concepts: Concepts in input order.
        connections: All connections of the map.
        requested_id: Optional user override.
        preferred_names: Label substrings that mark a likely root.

    Returns:
        The selected concept id.

    Raises:
        ValueError: If ``concepts`` is empty.
    """
    if not concepts:
        raise ValueError("Cannot select a root: concept map contains no concepts")

    if requested_id is not None:
        if any(c.id == requested_id for c in concepts):
            return requested_id
        logger.warning(
            "Requested root '%s' not found; falling back to automatic detection",
            requested_id,
        )

    candidates = find_root_candidates(concepts, connections)

    if len(candidates) == 1:
        return candidates[0].id

    if candidates:
        preferred_names = tuple(preferred_names)
        for candidate in candidates:
            if _matches_preferred(candidate.label, preferred_names):
                logger.debug("Root '%s' chosen by label match", candidate.id)
                return candidate.id
        logger.debug(
            "%d root candidates, using first: '%s'", len(candidates), candidates[0].id
        )
        return candidates[0].id

    # Every concept is a target somewhere (fully cyclic map)
    logger.debug("No root candidates; using first concept '%s'", concepts[0].id)
    return concepts[0].id
