"""CXL parser for CmapTools concept maps.

This parser reads the CmapTools XML format (CXL) into a ConceptMap.
Tags are matched on their local names so documents with or without the
CmapTools namespace are both accepted.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path

from cmap2opml.core.models import (
    Concept,
    ConceptMap,
    Connection,
    LinkingPhrase,
    MapMetadata,
)

logger = logging.getLogger(__name__)

CXL_NAMESPACE = "http://cmap.ihmc.us/xml/cmap/"


def _local_name(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix from a tag."""
    return tag.rsplit("}", 1)[-1]


def _normalize_label(text: str | None) -> str:
    # CmapTools stores manual line breaks inside labels
    return " ".join((text or "").split())


def _parse_datetime(text: str | None) -> datetime | None:
    if not text:
        return None
    value = text.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug("Ignoring unparseable date: %r", text)
        return None


class CXLParser:
    """Parser for CmapTools CXL documents.

    Records are returned in document order. Elements without an ``id``
    and connections without both endpoints are dropped; everything else
    (including connections to unknown ids) is kept for the engine to judge.
    """

    def parse(self, content: str | bytes, source_path: str = "<string>") -> ConceptMap:
        """Parse CXL content into a ConceptMap.

        Args:
            content: XML document content.
            source_path: Path used in error messages.

        Returns:
            The parsed ConceptMap.

        Raises:
            ValueError: If the content is not well-formed XML.
        """
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ValueError(f"Invalid CXL document {source_path}: {e}") from e

        if _local_name(root.tag) != "cmap":
            logger.warning(
                "%s: root element is <%s>, expected <cmap>", source_path, _local_name(root.tag)
            )

        cmap = ConceptMap(metadata=self._parse_metadata(root))

        for element in root.iter():
            name = _local_name(element.tag)
            if name == "concept":
                concept_id = element.get("id")
                if concept_id:
                    cmap.concepts.append(
                        Concept(id=concept_id, label=_normalize_label(element.get("label")))
                    )
            elif name == "linking-phrase":
                phrase_id = element.get("id")
                if phrase_id:
                    cmap.linking_phrases.append(
                        LinkingPhrase(id=phrase_id, label=_normalize_label(element.get("label")))
                    )
            elif name == "connection":
                from_id = element.get("from-id")
                to_id = element.get("to-id")
                if from_id and to_id:
                    cmap.connections.append(
                        Connection(from_id=from_id, to_id=to_id, id=element.get("id"))
                    )
                else:
                    logger.debug(
                        "%s: skipping connection %s without both endpoints",
                        source_path,
                        element.get("id"),
                    )

        logger.debug(
            "%s: %d concept(s), %d linking phrase(s), %d connection(s)",
            source_path,
            len(cmap.concepts),
            len(cmap.linking_phrases),
            len(cmap.connections),
        )
        return cmap

    def _parse_metadata(self, root: ET.Element) -> MapMetadata:
        """Read title and timestamps from the ``res-meta`` block."""
        title = None
        created = None
        modified = None

        for element in root.iter():
            if _local_name(element.tag) == "res-meta":
                for child in element:
                    name = _local_name(child.tag)
                    if name == "title" and title is None:
                        title = _normalize_label(child.text) or None
                    elif name == "created" and created is None:
                        created = _parse_datetime(child.text)
                    elif name == "modified" and modified is None:
                        modified = _parse_datetime(child.text)
                break

        return MapMetadata(title=title, created=created, modified=modified)

    def can_parse(self, file_path: Path) -> bool:
        """Check if this parser can handle the given file.

        Args:
            file_path: Path to the file.

        Returns:
            True for ``.cxl`` files.
        """
        return file_path.suffix.lower() == ".cxl"


def create_parser() -> CXLParser:
    """Factory function to create a CXLParser."""
    return CXLParser()


def parse_cxl(content: str | bytes) -> ConceptMap:
    """Convenience function to parse CXL text held in memory."""
    return create_parser().parse(content)


def load_cxl(path: Path) -> ConceptMap:
    """Read and parse a CXL file.

    Args:
        path: Path to the ``.cxl`` file.

    Returns:
        The parsed ConceptMap.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not well-formed XML.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")
    return create_parser().parse(path.read_bytes(), str(path))
