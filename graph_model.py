"""
Graph model for Prim's MST
Vertices live in an arena indexed by integer handles; every undirected
connection is stored as a pair of directed arcs
"""

import math
from enum import Enum

import networkx as nx


NOT_IN_HEAP = -1


class VertexState(Enum):
    IDLE = "IDLE"
    FRONTIER = "FRONTIER"
    SETTLED = "SETTLED"


class Edge:
    """Directed arc between two vertex handles"""

    __slots__ = ("from_handle", "to_handle", "cost", "primary")

    def __init__(self, from_handle, to_handle, cost, primary=True):
        self.from_handle = from_handle
        self.to_handle = to_handle
        self.cost = cost
        self.primary = primary  # False for the reverse arc of a pair

    def __repr__(self):
        return f"Edge({self.from_handle} -> {self.to_handle}, cost={self.cost})"


class Vertex:
    def __init__(self, vertex_id, handle):
        self.id = vertex_id
        self.handle = handle
        self.edges_out = []
        self.edges_in = []

        # Prim bookkeeping, owned by VertexHeap
        self.frontier_cost = math.inf
        self.heap_index = NOT_IN_HEAP
        self.state = VertexState.IDLE

    def __repr__(self):
        return (
            f"Vertex(id={self.id!r}, frontier_cost={self.frontier_cost}, "
            f"heap_index={self.heap_index}, state={self.state.value})"
        )


class Graph:
    """Undirected weighted graph built from discrete edge declarations"""

    def __init__(self):
        self.vertices = []  # handle -> Vertex
        self._handles = {}  # vertex id -> handle
        self.header = None  # header line of the file the graph was read from

    def __len__(self):
        return len(self.vertices)

    def __contains__(self, vertex_id):
        return vertex_id in self._handles

    def get_or_create_vertex(self, vertex_id):
        """Return the vertex registered under vertex_id, creating it if needed"""
        handle = self._handles.get(vertex_id)
        if handle is not None:
            return self.vertices[handle]

        vertex = Vertex(vertex_id, len(self.vertices))
        self.vertices.append(vertex)
        self._handles[vertex_id] = vertex.handle
        return vertex

    def vertex(self, handle):
        return self.vertices[handle]

    def connect(self, from_id, to_id, cost):
        """
        Add an undirected edge as two paired arcs.
        Repeated calls add parallel edges; nothing is de-duplicated.
        """
        if not cost >= 0:
            raise ValueError(f"Edge cost must be non-negative, got {cost!r}")

        head = self.get_or_create_vertex(from_id)
        tail = self.get_or_create_vertex(to_id)

        one_dir = Edge(head.handle, tail.handle, cost)
        other_dir = Edge(tail.handle, head.handle, cost, primary=False)

        head.edges_out.append(one_dir)
        tail.edges_in.append(one_dir)
        tail.edges_out.append(other_dir)
        head.edges_in.append(other_dir)

    def all_vertices(self):
        return list(self.vertices)

    def reset_frontier(self):
        """Return every vertex to its pre-computation state"""
        for vertex in self.vertices:
            vertex.frontier_cost = math.inf
            vertex.heap_index = NOT_IN_HEAP
            vertex.state = VertexState.IDLE

    def incident_edges(self, vertex):
        """All arcs touching vertex, in either direction"""
        yield from vertex.edges_out
        yield from vertex.edges_in

    def neighbors(self, vertex):
        """Yield (far vertex, cost) for every arc touching vertex"""
        for edge in self.incident_edges(vertex):
            if edge.from_handle == vertex.handle:
                yield self.vertices[edge.to_handle], edge.cost
            else:
                yield self.vertices[edge.from_handle], edge.cost

    def edges(self):
        """Yield (from_id, to_id, cost) once per undirected edge, parallels included"""
        for vertex in self.vertices:
            for edge in vertex.edges_out:
                if edge.primary:
                    yield vertex.id, self.vertices[edge.to_handle].id, edge.cost

    def number_of_edges(self):
        return sum(len(vertex.edges_out) for vertex in self.vertices) // 2

    def to_networkx(self):
        """Collapse to a networkx Graph, keeping the cheapest of parallel edges"""
        G = nx.Graph()
        for vertex in self.vertices:
            G.add_node(vertex.id)
        for u, v, w in self.edges():
            if u == v:
                continue
            if not G.has_edge(u, v) or w < G[u][v]["weight"]:
                G.add_edge(u, v, weight=w)
        return G
