"""Shared pytest fixtures for cmap2opml tests."""

import pytest

SAMPLE_CXL = """<?xml version="1.0" encoding="UTF-8"?>
<cmap xmlns="http://cmap.ihmc.us/xml/cmap/"
      xmlns:dc="http://purl.org/dc/elements/1.1/"
      xmlns:dcterms="http://purl.org/dc/terms/">
    <res-meta>
        <dc:title>Plant Needs</dc:title>
        <dcterms:created>2014-02-03T10:15:00-05:00</dcterms:created>
        <dcterms:modified>2014-02-04T08:00:00-05:00</dcterms:modified>
    </res-meta>
    <map width="800" height="600">
        <concept-list>
            <concept id="c-plants" label="Plants"/>
            <concept id="c-water" label="Water"/>
            <concept id="c-light" label="Sun&#xa;light"/>
            <concept id="c-rain" label="Rain"/>
        </concept-list>
        <linking-phrase-list>
            <linking-phrase id="lp-requires" label="requires"/>
            <linking-phrase id="lp-needs" label="needs"/>
            <linking-phrase id="lp-comes" label="comes from"/>
        </linking-phrase-list>
        <connection-list>
            <connection id="k1" from-id="c-plants" to-id="lp-requires"/>
            <connection id="k2" from-id="lp-requires" to-id="c-water"/>
            <connection id="k3" from-id="c-plants" to-id="lp-needs"/>
            <connection id="k4" from-id="lp-needs" to-id="c-light"/>
            <connection id="k5" from-id="c-water" to-id="lp-comes"/>
            <connection id="k6" from-id="lp-comes" to-id="c-rain"/>
        </connection-list>
        <concept-appearance-list>
            <concept-appearance id="c-plants" x="100" y="50"/>
        </concept-appearance-list>
    </map>
</cmap>
"""


@pytest.fixture
def make_map():
    """Factory building a ConceptMap from compact literals.

    Usage:
        make_map({"A": "Plants"}, {"P": "requires"}, [("A", "P")])
    """
    from cmap2opml.core.models import Concept, ConceptMap, Connection, LinkingPhrase

    def _make(concepts, phrases=None, connections=None):
        return ConceptMap(
            concepts=[Concept(id=cid, label=label) for cid, label in concepts.items()],
            linking_phrases=[
                LinkingPhrase(id=pid, label=label) for pid, label in (phrases or {}).items()
            ],
            connections=[Connection(from_id=f, to_id=t) for f, t in (connections or [])],
        )

    return _make


@pytest.fixture
def plants_map(make_map):
    """Plants --requires--> Water."""
    return make_map(
        {"A": "Plants", "B": "Water"},
        {"P": "requires"},
        [("A", "P"), ("P", "B")],
    )


@pytest.fixture
def chain_map(make_map):
    """A --P--> B --Q--> C."""
    return make_map(
        {"A": "Alpha", "B": "Beta", "C": "Gamma"},
        {"P": "leads to", "Q": "leads to"},
        [("A", "P"), ("P", "B"), ("B", "Q"), ("Q", "C")],
    )


@pytest.fixture
def cycle_map(make_map):
    """A --P--> B --Q--> A, so every concept is a target."""
    return make_map(
        {"A": "Alpha", "B": "Beta"},
        {"P": "causes", "Q": "causes"},
        [("A", "P"), ("P", "B"), ("B", "Q"), ("Q", "A")],
    )


@pytest.fixture
def sample_cxl():
    """CXL document text with metadata, three phrases and four concepts."""
    return SAMPLE_CXL


@pytest.fixture
def cxl_file(tmp_path):
    """SAMPLE_CXL written to ``plants.cxl`` in a temporary directory."""
    path = tmp_path / "plants.cxl"
    path.write_text(SAMPLE_CXL, encoding="utf-8")
    return path
