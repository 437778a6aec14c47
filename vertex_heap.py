"""
Indexed binary min-heap over graph vertices
Vertices are ordered by frontier_cost and each one's heap_index is kept in
step with its slot, so a decreased key can be re-sifted in place
"""

from graph_model import NOT_IN_HEAP, VertexState


class VertexHeap:
    """Returns the frontier vertex with the lowest frontier_cost"""

    def __init__(self, vertices=()):
        self.heap = []
        self.initialize(vertices)

    def __len__(self):
        return len(self.heap)

    def __contains__(self, vertex):
        index = vertex.heap_index
        return 0 <= index < len(self.heap) and self.heap[index] is vertex

    def is_empty(self):
        return not self.heap

    def initialize(self, vertices):
        """Load every vertex and heapify bottom-up in O(n)"""
        self.heap = list(vertices)
        for i, vertex in enumerate(self.heap):
            vertex.heap_index = i
            vertex.state = VertexState.FRONTIER

        for i in range(len(self.heap) // 2 - 1, -1, -1):
            self._sift_down(i)

    def peek(self):
        if not self.heap:
            raise IndexError("peek from an empty VertexHeap")
        return self.heap[0]

    def pop(self):
        """Remove and return the vertex with the lowest frontier_cost"""
        if not self.heap:
            raise IndexError("pop from an empty VertexHeap")

        vertex = self.heap[0]
        last = self.heap.pop()
        if self.heap:
            self.heap[0] = last
            last.heap_index = 0
            self._sift_down(0)

        vertex.heap_index = NOT_IN_HEAP
        vertex.state = VertexState.SETTLED
        return vertex

    def decrease_key(self, vertex, new_cost):
        """
        Lower vertex.frontier_cost to new_cost and sift it up.
        Settled vertices are frozen, so the call is a no-op for them.
        """
        if vertex.heap_index == NOT_IN_HEAP:
            return
        if not new_cost < vertex.frontier_cost:
            raise ValueError(
                f"decrease_key on {vertex.id!r}: new cost {new_cost!r} is not "
                f"below current cost {vertex.frontier_cost!r}"
            )

        vertex.frontier_cost = new_cost
        self._sift_up(vertex.heap_index)

    def check_invariants(self):
        """Raise AssertionError on the first broken heap order or stale index"""
        size = len(self.heap)
        for i, vertex in enumerate(self.heap):
            if vertex.heap_index != i:
                raise AssertionError(
                    f"vertex {vertex.id!r} records heap_index {vertex.heap_index} "
                    f"but sits at {i}"
                )
            for child in (2 * i + 1, 2 * i + 2):
                if child < size and self.heap[child].frontier_cost < vertex.frontier_cost:
                    raise AssertionError(
                        f"heap order broken between slot {i} and child {child}"
                    )

    def _swap(self, i, j):
        self.heap[i], self.heap[j] = self.heap[j], self.heap[i]
        self.heap[i].heap_index = i
        self.heap[j].heap_index = j

    def _sift_up(self, index):
        while index > 0:
            parent = (index - 1) // 2
            if self.heap[index].frontier_cost < self.heap[parent].frontier_cost:
                self._swap(index, parent)
                index = parent
            else:
                break

    def _sift_down(self, index):
        size = len(self.heap)
        while True:
            left = 2 * index + 1
            right = left + 1
            smallest = index
            if left < size and self.heap[left].frontier_cost < self.heap[smallest].frontier_cost:
                smallest = left
            if right < size and self.heap[right].frontier_cost < self.heap[smallest].frontier_cost:
                smallest = right
            if smallest == index:
                break
            self._swap(index, smallest)
            index = smallest
