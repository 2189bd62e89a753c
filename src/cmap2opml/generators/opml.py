"""
cmap2opml.generators.opml - OPML generation.

Provides functions to serialize an OutlineTree as an OPML 2.0 document.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path

from cmap2opml.core.models import MapMetadata
from cmap2opml.core.outline import OutlineItem, OutlineTree

OPML_VERSION = "2.0"
DEFAULT_TITLE = "Concept Map"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def resolve_title(
    outline: OutlineTree,
    metadata: MapMetadata,
    title: str | None = None,
    default_title: str = DEFAULT_TITLE,
) -> str:
    """Pick the document title.

    Precedence: explicit title, map title, outline label, default.
    """
    return title or metadata.title or outline.label or default_title


def _rfc822(value: datetime | None, fallback: datetime) -> str:
    return format_datetime(value or fallback)


def _outline_element(parent: ET.Element, item: OutlineItem) -> None:
    """Append ``item`` and its descendants as nested <outline> elements."""
    stack: list[tuple[ET.Element, OutlineItem]] = [(parent, item)]
    while stack:
        container, current = stack.pop()
        element = ET.SubElement(container, "outline", {"text": current.text, "type": current.type})
        # Reversed so that pops come back in document order
        for child in reversed(current.children):
            stack.append((element, child))


def build_opml_element(
    outline: OutlineTree,
    metadata: MapMetadata | None = None,
    title: str | None = None,
    default_title: str = DEFAULT_TITLE,
) -> ET.Element:
    """Build the <opml> element tree for an outline.

    Args:
        outline: The outline to serialize.
        metadata: Map metadata (title and timestamps).
        title: Explicit title, overriding the map's.
        default_title: Title used when nothing else provides one.

    Returns:
        The root <opml> element.
    """
    metadata = metadata or MapMetadata()
    now = datetime.now(timezone.utc)

    opml = ET.Element("opml", {"version": OPML_VERSION})
    head = ET.SubElement(opml, "head")
    ET.SubElement(head, "title").text = resolve_title(outline, metadata, title, default_title)
    ET.SubElement(head, "dateCreated").text = _rfc822(metadata.created, now)
    ET.SubElement(head, "dateModified").text = _rfc822(metadata.modified, now)

    body = ET.SubElement(opml, "body")
    _outline_element(body, outline.root)
    return opml


def generate_opml(
    outline: OutlineTree,
    metadata: MapMetadata | None = None,
    title: str | None = None,
    indent: bool = True,
    default_title: str = DEFAULT_TITLE,
) -> str:
    """Generate an OPML document from an outline.

    Args:
        outline: The outline to serialize.
        metadata: Map metadata (title and timestamps).
        title: Explicit title, overriding the map's.
        indent: Pretty-print the document.
        default_title: Title used when nothing else provides one.

    Returns:
        OPML document text, including the XML declaration.
    """
    opml = build_opml_element(outline, metadata, title, default_title)
    if indent:
        ET.indent(opml, space="  ")
    return XML_DECLARATION + ET.tostring(opml, encoding="unicode") + "\n"


def write_opml(
    outline: OutlineTree,
    path: Path,
    metadata: MapMetadata | None = None,
    title: str | None = None,
    indent: bool = True,
    default_title: str = DEFAULT_TITLE,
) -> Path:
    """Write an outline to ``path`` as OPML, creating parent directories.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        generate_opml(outline, metadata, title, indent, default_title),
        encoding="utf-8",
    )
    return path
