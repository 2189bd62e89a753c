"""
cmap2opml.core.models - Record models for concept maps.

Provides dataclasses for the records a concept map is made of: concepts,
linking phrases, the connections between them, and document metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Concept:
    """
    A labeled node in the concept map.

    Attributes:
        id: Unique concept identifier
        label: Display text (not guaranteed unique)
    """

    id: str
    label: str = ""


@dataclass(frozen=True)
class LinkingPhrase:
    """
    An edge-label node joining two concepts.

    The label is kept for completeness but never used for tree structure.

    Attributes:
        id: Unique identifier (disjoint from concept ids)
        label: Phrase text (e.g., "requires")
    """

    id: str
    label: str = ""


@dataclass(frozen=True)
class Connection:
    """
    A directed edge between a concept and a linking phrase (either way).

    Attributes:
        from_id: Source concept or linking phrase id
        to_id: Target concept or linking phrase id
        id: Optional connection id, for diagnostics
    """

    from_id: str
    to_id: str
    id: str | None = None


@dataclass(frozen=True)
class MapMetadata:
    """
    Free-form document metadata carried through to the outline.

    Attributes:
        title: Map title, if the source declares one
        created: Creation timestamp
        modified: Last modification timestamp
    """

    title: str | None = None
    created: datetime | None = None
    modified: datetime | None = None


@dataclass
class ConceptMap:
    """
    A parsed concept map: ordered record lists plus metadata.

    Attributes:
        concepts: Concepts in document order
        linking_phrases: Linking phrases in document order
        connections: Connections in document order
        metadata: Title and timestamps
    """

    concepts: list[Concept] = field(default_factory=list)
    linking_phrases: list[LinkingPhrase] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)
    metadata: MapMetadata = field(default_factory=MapMetadata)

    def is_empty(self) -> bool:
        """Return True when the map has no concepts."""
        return not self.concepts
