"""
Tests for Prim's algorithm over VertexHeap.
"""

import itertools
import math
import random

import networkx as nx
import pytest

import prim_implementation
from graph_model import Graph, VertexState
from prim_implementation import (
    MSTCancelled,
    PrimAlgorithm,
    build_graph,
    compute_mst,
    random_graph_edges,
)
from vertex_heap import VertexHeap


EXAMPLE_EDGES = [
    ("A", "B", 1),
    ("B", "C", 2),
    ("C", "D", 1),
    ("A", "D", 5),
    ("B", "D", 4),
]


def test_example_graph_total():
    assert compute_mst(build_graph(EXAMPLE_EDGES)) == 4


@pytest.mark.parametrize("order", list(itertools.permutations("ABCD")))
def test_example_graph_any_seed(order):
    g = Graph()
    # creation order decides which vertex the heap pops first
    for vertex_id in order:
        g.get_or_create_vertex(vertex_id)
    for u, v, w in EXAMPLE_EDGES:
        g.connect(u, v, w)

    prim = PrimAlgorithm(g)
    assert prim.run() == 4
    assert g.vertex(prim.settled_order[0]).id == order[0]


def test_single_edge():
    g = Graph()
    g.connect(1, 2, 6.5)
    assert compute_mst(g) == 6.5


def test_single_vertex_and_empty_graph():
    g = Graph()
    assert compute_mst(g) == 0

    g.get_or_create_vertex("only")
    assert compute_mst(g) == 0


def test_parallel_edges_use_cheapest():
    parallel = Graph()
    parallel.connect("A", "B", 3)
    parallel.connect("A", "B", 7)

    single = Graph()
    single.connect("A", "B", 3)

    assert compute_mst(parallel) == compute_mst(single) == 3

    reversed_order = Graph()
    reversed_order.connect("B", "A", 7)
    reversed_order.connect("A", "B", 3)
    assert compute_mst(reversed_order) == 3


def test_self_loop_is_ignored():
    g = Graph()
    g.connect(0, 0, 1)
    g.connect(0, 1, 5)
    assert compute_mst(g) == 5


def test_tie_break_independence():
    edges = [(0, 1, 2), (1, 2, 2), (2, 3, 2), (3, 0, 2), (0, 2, 2), (1, 3, 2)]
    totals = set()
    rng = random.Random(7)
    for _ in range(20):
        shuffled = edges[:]
        rng.shuffle(shuffled)
        totals.add(compute_mst(build_graph(shuffled)))
    assert totals == {6}


def test_rerun_on_isomorphic_graphs():
    _, edges = random_graph_edges(num_nodes=12, edge_probability=0.5, seed=3)
    relabelled = [(f"v{u}", f"v{v}", w) for u, v, w in reversed(edges)]

    assert compute_mst(build_graph(edges)) == compute_mst(build_graph(relabelled))


def test_rerun_on_same_graph():
    g = build_graph(EXAMPLE_EDGES)
    prim = PrimAlgorithm(g)
    assert prim.run() == 4
    assert prim.run() == 4


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_matches_networkx(seed):
    num_nodes, edges = random_graph_edges(num_nodes=15, edge_probability=0.35, seed=seed)
    G = nx.Graph()
    G.add_weighted_edges_from(edges)
    expected = sum(d["weight"] for _, _, d in nx.minimum_spanning_tree(G).edges(data=True))

    prim = PrimAlgorithm(build_graph(edges))
    assert prim.run() == expected
    assert len(prim.tree_edges) == num_nodes - 1
    assert sum(w for _, _, w in prim.tree_edges) == expected


def test_tree_edges_for_example():
    prim = PrimAlgorithm(build_graph(EXAMPLE_EDGES))
    prim.run()

    undirected = {(frozenset((u, v)), w) for u, v, w in prim.tree_edges}
    assert undirected == {
        (frozenset("AB"), 1),
        (frozenset("BC"), 2),
        (frozenset("CD"), 1),
    }


def test_all_vertices_settled_after_run():
    g = build_graph(EXAMPLE_EDGES)
    compute_mst(g)
    for v in g.all_vertices():
        assert v.state is VertexState.SETTLED
        assert v.heap_index == -1


def test_disconnected_graph_adds_inf():
    g = Graph()
    g.connect(0, 1, 1)
    g.connect(2, 3, 1)

    prim = PrimAlgorithm(g)
    total = prim.run()

    assert math.isinf(total)
    assert len(prim.tree_edges) == 2


class RecordingHeap(VertexHeap):
    """VertexHeap that checks invariants and cost history on every call"""

    history = None

    def initialize(self, vertices):
        super().initialize(vertices)
        RecordingHeap.history = {v.handle: [v.frontier_cost] for v in self.heap}
        self.frozen = {}
        self.check_invariants()

    def pop(self):
        vertex = super().pop()
        self.frozen[vertex.handle] = vertex.frontier_cost
        self.check_invariants()
        return vertex

    def decrease_key(self, vertex, new_cost):
        super().decrease_key(vertex, new_cost)
        RecordingHeap.history[vertex.handle].append(vertex.frontier_cost)
        for handle, cost in self.frozen.items():
            assert RecordingHeap.history[handle][-1] == cost
        self.check_invariants()


def test_frontier_costs_only_decrease(monkeypatch):
    monkeypatch.setattr(prim_implementation, "VertexHeap", RecordingHeap)
    _, edges = random_graph_edges(num_nodes=20, edge_probability=0.3, seed=11)

    g = build_graph(edges)
    compute_mst(g)

    for costs in RecordingHeap.history.values():
        assert all(b < a for a, b in zip(costs, costs[1:]))
    for v in g.all_vertices():
        assert v.frontier_cost == RecordingHeap.history[v.handle][-1]


def test_should_stop_cancels_between_pops():
    g = build_graph(EXAMPLE_EDGES)
    calls = []

    def should_stop():
        calls.append(1)
        return len(calls) > 1

    prim = PrimAlgorithm(g)
    with pytest.raises(MSTCancelled) as excinfo:
        prim.run(should_stop=should_stop)

    # seed plus one more vertex were settled before the stop request
    assert excinfo.value.settled == 2
    assert excinfo.value.partial_cost == 1


def test_check_heap_runs_after_every_pop(monkeypatch):
    calls = []
    original = VertexHeap.check_invariants

    def counting_check(self):
        calls.append(len(self))
        original(self)

    monkeypatch.setattr(VertexHeap, "check_invariants", counting_check)

    g = build_graph(EXAMPLE_EDGES)
    assert PrimAlgorithm(g).run(check_heap=True) == 4
    assert calls == [3, 2, 1, 0]

    calls.clear()
    PrimAlgorithm(g).run()
    assert calls == []


def test_check_heap_surfaces_corruption(monkeypatch):
    real_pop = VertexHeap.pop

    def pop_with_stale_index(self):
        vertex = real_pop(self)
        if len(self) > 1:
            self.heap[-1].heap_index = 0
        return vertex

    monkeypatch.setattr(VertexHeap, "pop", pop_with_stale_index)

    with pytest.raises(AssertionError):
        PrimAlgorithm(build_graph(EXAMPLE_EDGES)).run(check_heap=True)
