"""Tests for core/tree_builder.py - Concept tree construction."""

import pytest


def _shape(node):
    """Nested (label, [children...]) tuples for structural comparison."""
    return (node.label, [_shape(child) for child in node.children])


class TestConceptTreeBuilder:
    """Tests for ConceptTreeBuilder class."""

    @pytest.fixture
    def index_for(self):
        from cmap2opml.core.index import MapIndex

        return MapIndex.from_map

    def test_plants_scenario(self, plants_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        root = build_tree(index_for(plants_map), "A")

        assert root.label == "Plants"
        assert [c.label for c in root.children] == ["Water"]
        assert root.children[0].children == []

    def test_chain_levels(self, chain_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        root = build_tree(index_for(chain_map), "A")

        assert root.level == 0
        assert len(root.children) == 1
        beta = root.children[0]
        assert (beta.id, beta.level) == ("B", 1)
        assert len(beta.children) == 1
        gamma = beta.children[0]
        assert (gamma.id, gamma.level) == ("C", 2)
        assert gamma.children == []

    def test_parent_ids(self, chain_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        root = build_tree(index_for(chain_map), "A")

        assert root.parent_id is None
        assert root.children[0].parent_id == "A"
        assert root.children[0].children[0].parent_id == "B"

    def test_fan_out_in_connection_order(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        cmap = make_map(
            {"A": "Hub", "B": "Second", "C": "First"},
            {"P1": "x", "P2": "y"},
            [("A", "P2"), ("P2", "C"), ("A", "P1"), ("P1", "B")],
        )
        root = build_tree(index_for(cmap), "A")

        assert [c.label for c in root.children] == ["First", "Second"]

    def test_phrase_with_several_targets(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        cmap = make_map(
            {"A": "Plants", "B": "Water", "C": "Light"},
            {"P": "need"},
            [("A", "P"), ("P", "B"), ("P", "C")],
        )
        root = build_tree(index_for(cmap), "A")

        assert [c.label for c in root.children] == ["Water", "Light"]

    def test_builds_are_independent(self, chain_map, index_for):
        from cmap2opml.core.tree_builder import ConceptTreeBuilder

        builder = ConceptTreeBuilder(index_for(chain_map))
        first = builder.build("A")
        second = builder.build("A")

        assert _shape(first) == _shape(second)
        assert first is not second
        assert first.children[0] is not second.children[0]

    def test_unknown_root_returns_none(self, plants_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        assert build_tree(index_for(plants_map), "missing") is None
        assert build_tree(index_for(plants_map), "P") is None

    def test_isolated_concept_is_leaf(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        cmap = make_map({"A": "Alone"})
        root = build_tree(index_for(cmap), "A")

        assert root.label == "Alone"
        assert root.is_leaf

    def test_dangling_target_is_ignored(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        cmap = make_map(
            {"A": "Plants", "B": "Water"},
            {"P": "requires"},
            [("A", "ghost"), ("A", "P"), ("P", "nowhere"), ("P", "B")],
        )
        root = build_tree(index_for(cmap), "A")

        assert [c.id for c in root.children] == ["B"]

    def test_direct_concept_connection_is_not_a_child(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        cmap = make_map({"A": "a", "B": "b"}, {}, [("A", "B")])
        root = build_tree(index_for(cmap), "A")

        assert root.children == []

    def test_phrase_to_phrase_is_not_followed(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        cmap = make_map(
            {"A": "a", "B": "b"},
            {"P": "p", "Q": "q"},
            [("A", "P"), ("P", "Q"), ("Q", "B")],
        )
        root = build_tree(index_for(cmap), "A")

        assert root.children == []

    def test_cycle_terminates(self, cycle_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        root = build_tree(index_for(cycle_map), "A")

        # A -> B -> A, where the repeated A is a leaf
        assert _shape(root) == ("Alpha", [("Beta", [("Alpha", [])])])

    def test_self_loop_terminates(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        cmap = make_map({"A": "Self"}, {"P": "is"}, [("A", "P"), ("P", "A")])
        root = build_tree(index_for(cmap), "A")

        assert _shape(root) == ("Self", [("Self", [])])

    def test_shared_concept_is_duplicated(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        cmap = make_map(
            {"A": "Top", "B": "Left", "C": "Right", "D": "Shared"},
            {"P": "p", "Q": "q", "R": "r"},
            [("A", "P"), ("P", "B"), ("P", "C"), ("B", "Q"), ("Q", "D"), ("C", "R"), ("R", "D")],
        )
        root = build_tree(index_for(cmap), "A")

        occurrences = root.find_by_id("D")
        assert len(occurrences) == 2
        assert occurrences[0] is not occurrences[1]
        assert {n.parent_id for n in occurrences} == {"B", "C"}
        assert all(n.level == 2 for n in occurrences)

    def test_shared_concept_subtree_expanded_once(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        cmap = make_map(
            {"A": "Top", "B": "Left", "C": "Right", "D": "Shared", "E": "Below"},
            {"P": "p", "Q": "q", "R": "r", "S": "s"},
            [
                ("A", "P"), ("P", "B"), ("P", "C"),
                ("B", "Q"), ("Q", "D"), ("C", "R"), ("R", "D"),
                ("D", "S"), ("S", "E"),
            ],
        )
        root = build_tree(index_for(cmap), "A")

        assert _shape(root) == (
            "Top",
            [("Left", [("Shared", [("Below", [])])]), ("Right", [("Shared", [])])],
        )

    def test_complete_map_stays_linear(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        size = 10
        concepts = {f"c{i}": f"Concept {i}" for i in range(size)}
        phrases = {f"p{i}": "relates to" for i in range(size)}
        connections = []
        for i in range(size):
            connections.append((f"c{i}", f"p{i}"))
            connections.extend((f"p{i}", f"c{j}") for j in range(size) if j != i)
        root = build_tree(index_for(make_map(concepts, phrases, connections)), "c0")

        assert root.count() <= len(concepts) + len(connections)
        assert [c.id for c in root.children] == [f"c{j}" for j in range(1, size)]
        assert sum(1 for n in root.walk() if n.children) == size

    def test_layered_dag_stays_linear(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        layers = 18
        concepts = {"top": "Top"}
        phrases = {}
        connections = []
        previous = ["top"]
        for layer in range(layers):
            current = [f"l{layer}a", f"l{layer}b"]
            for cid in current:
                concepts[cid] = cid
            for source in previous:
                phrase = f"p-{source}"
                phrases[phrase] = "leads to"
                connections.append((source, phrase))
                connections.extend((phrase, target) for target in current)
            previous = current
        root = build_tree(index_for(make_map(concepts, phrases, connections)), "top")

        assert root.count() <= len(concepts) + len(connections)
        assert root.depth() == layers
        assert len(root.find_by_id(f"l{layers - 1}a")) == 2

    def test_every_level_is_parent_plus_one(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        cmap = make_map(
            {"A": "a", "B": "b", "C": "c", "D": "d"},
            {"P": "p", "Q": "q"},
            [("A", "P"), ("P", "B"), ("P", "C"), ("C", "Q"), ("Q", "D"), ("Q", "A")],
        )
        root = build_tree(index_for(cmap), "A")

        for node in root.walk():
            for child in node.children:
                assert child.level == node.level + 1

    def test_long_chain_does_not_recurse(self, make_map, index_for):
        from cmap2opml.core.tree_builder import build_tree

        size = 3000
        concepts = {f"c{i}": f"Concept {i}" for i in range(size)}
        phrases = {f"p{i}": "next" for i in range(size - 1)}
        connections = []
        for i in range(size - 1):
            connections.append((f"c{i}", f"p{i}"))
            connections.append((f"p{i}", f"c{i + 1}"))
        root = build_tree(index_for(make_map(concepts, phrases, connections)), "c0")

        node = root
        while node.children:
            node = node.children[0]
        assert node.id == f"c{size - 1}"
        assert node.level == size - 1

    def test_index_is_not_mutated(self, chain_map, index_for):
        from cmap2opml.core.tree_builder import ConceptTreeBuilder

        index = index_for(chain_map)
        before = (dict(index.concepts_by_id), dict(index.outgoing))
        ConceptTreeBuilder(index).build("A")
        assert (dict(index.concepts_by_id), dict(index.outgoing)) == before


class TestBuildAllTrees:
    """Tests for build_all_trees()."""

    def test_one_tree_per_concept(self, make_map):
        from cmap2opml.core.index import MapIndex
        from cmap2opml.core.tree_builder import build_all_trees

        cmap = make_map(
            {"A": "Plants", "B": "Water", "Z": "Isolated"},
            {"P": "requires"},
            [("A", "P"), ("P", "B")],
        )
        trees = list(build_all_trees(MapIndex.from_map(cmap)))

        assert [concept.id for concept, _ in trees] == ["A", "B", "Z"]
        assert [root.id for _, root in trees] == ["A", "B", "Z"]
        assert [len(root.children) for _, root in trees] == [1, 0, 0]

    def test_roots_are_level_zero(self, chain_map):
        from cmap2opml.core.index import MapIndex
        from cmap2opml.core.tree_builder import build_all_trees

        for _, root in build_all_trees(MapIndex.from_map(chain_map)):
            assert root.level == 0
            assert root.parent_id is None
