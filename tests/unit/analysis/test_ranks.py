"""
Unit tests for rank classification.

Ensures that:
1. Ranks are shortest hop distances from the root.
2. Cycles, including cycles through the root, terminate.
3. Unknown roots and unreachable nodes fall back cleanly.
"""

import random

import pytest

from witu.analysis.ranks import classify_graph, classify_ranks, needs_classification
from witu.config import DEFAULT_RANK
from witu.core.graph import Graph
from witu.core.types import Edge, Node


def nodes_for(*ids):
    return [Node(id=nid, name=nid) for nid in ids]


def edges_for(*pairs):
    return [Edge(source_id=s, target_id=t) for s, t in pairs]


class TestClassifyRanks:
    def test_shortest_path_wins(self):
        nodes = nodes_for("root", "a", "b", "c")
        edges = edges_for(("root", "a"), ("a", "b"), ("b", "c"), ("root", "c"))

        assert classify_ranks(nodes, edges, "root") == {"root": 0, "a": 1, "b": 2, "c": 1}

    def test_cycle_through_root_terminates(self):
        nodes = nodes_for("root", "a", "b")
        edges = edges_for(("root", "a"), ("a", "b"), ("b", "root"))

        assert classify_ranks(nodes, edges, "root") == {"root": 0, "a": 1, "b": 2}

    def test_unknown_root_returns_empty(self):
        nodes = nodes_for("a", "b")
        assert classify_ranks(nodes, edges_for(("a", "b")), "missing") == {}
        assert classify_ranks(nodes, [], None) == {}

    def test_unreachable_nodes_get_default(self):
        nodes = nodes_for("root", "a", "island")
        ranks = classify_ranks(nodes, edges_for(("root", "a")), "root")
        assert ranks["island"] == DEFAULT_RANK

    def test_dangling_edges_ignored(self):
        nodes = nodes_for("root", "a")
        edges = edges_for(("root", "zzz"), ("zzz", "a"))
        assert classify_ranks(nodes, edges, "root") == {"root": 0, "a": DEFAULT_RANK}

    def test_edge_order_does_not_matter(self):
        nodes = nodes_for("root", *"abcdefg")
        edges = edges_for(
            ("root", "a"), ("root", "b"), ("a", "c"), ("b", "c"), ("c", "d"),
            ("d", "e"), ("a", "e"), ("e", "f"), ("f", "c"), ("g", "root"),
        )
        expected = classify_ranks(nodes, edges, "root")

        rng = random.Random(7)
        for _ in range(10):
            shuffled = list(edges)
            rng.shuffle(shuffled)
            assert classify_ranks(nodes, shuffled, "root") == expected

    def test_empty_input(self):
        assert classify_ranks([], [], "root") == {}


class TestClassifyGraph:
    @pytest.fixture
    def unranked(self):
        return Graph(
            nodes=[
                Node(id="root", name="Root"),
                Node(id="a", name="A"),
                Node(id="b", name="B", rank=4),
                Node(id="c", name="C"),
            ],
            edges=edges_for(("root", "a"), ("a", "b"), ("b", "a"), ("a", "c")),
        )

    def test_fills_missing_ranks_only(self, unranked):
        ranked = classify_graph(unranked)
        ranks = {n.id: n.rank for n in ranked.nodes}

        assert ranks == {"root": 0, "a": 1, "b": 4, "c": 2}
        assert not needs_classification(ranked)
        assert ranked.stats.max_rank_reached == 4

    def test_flags_root_and_cycles(self, unranked):
        ranked = classify_graph(unranked)

        assert ranked.get_node("root").is_root
        assert {n.id for n in ranked.nodes if n.is_cycle_node} == {"a", "b"}

    def test_cycle_detection_optional(self, unranked):
        ranked = classify_graph(unranked, detect_cycles=False)
        assert not any(n.is_cycle_node for n in ranked.nodes)

    def test_input_untouched(self, unranked):
        classify_graph(unranked)
        assert unranked.get_node("a").rank is None
        assert needs_classification(unranked)

    def test_empty_graph(self):
        graph = Graph()
        assert classify_graph(graph) is graph
