"""Lookup indices over concept map records.

Indices are built once per conversion run and are read-only afterwards, so a
single MapIndex can be shared by every tree build of that run.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmap2opml.core.models import Concept, ConceptMap, Connection, LinkingPhrase


@dataclass(frozen=True)
class MapIndex:
    """Read-only lookup structures for one concept map.

    Attributes:
        concepts_by_id: Concept id to Concept, in input order.
        phrases_by_id: Linking phrase id to LinkingPhrase.
        outgoing: Source id to the connections leaving it, in input order.
    """

    concepts_by_id: Mapping[str, Concept]
    phrases_by_id: Mapping[str, LinkingPhrase]
    outgoing: Mapping[str, tuple[Connection, ...]]

    @classmethod
    def from_map(cls, cmap: ConceptMap) -> MapIndex:
        """Build the index for a parsed concept map."""
        return build_index(cmap.concepts, cmap.linking_phrases, cmap.connections)

    def is_concept(self, node_id: str) -> bool:
        return node_id in self.concepts_by_id

    def is_phrase(self, node_id: str) -> bool:
        return node_id in self.phrases_by_id

    def outgoing_from(self, source_id: str) -> tuple[Connection, ...]:
        """Return the connections leaving ``source_id`` (empty if none)."""
        return self.outgoing.get(source_id, ())


def build_index(
    concepts: Iterable[Concept],
    linking_phrases: Iterable[LinkingPhrase],
    connections: Iterable[Connection],
) -> MapIndex:
    """Build concept, linking phrase and outgoing-connection lookups.

    No validation is done here. Duplicate ids overwrite earlier entries
    (last one wins); connections with unknown endpoints are still indexed
    and left for the tree builder to skip.

    Args:
        concepts: Concepts in input order.
        linking_phrases: Linking phrases in input order.
        connections: Connections in input order.

    Returns:
        A MapIndex whose mappings cannot be mutated.
    """
    concepts_by_id: dict[str, Concept] = {}
    for concept in concepts:
        concepts_by_id[concept.id] = concept

    phrases_by_id: dict[str, LinkingPhrase] = {}
    for phrase in linking_phrases:
        phrases_by_id[phrase.id] = phrase

    outgoing: dict[str, list[Connection]] = {}
    for conn in connections:
        outgoing.setdefault(conn.from_id, []).append(conn)

    return MapIndex(
        concepts_by_id=MappingProxyType(concepts_by_id),
        phrases_by_id=MappingProxyType(phrases_by_id),
        outgoing=MappingProxyType({k: tuple(v) for k, v in outgoing.items()}),
    )
