"""
Prim's Algorithm for MST over an indexed min-heap
Grows the tree one vertex at a time, always settling the frontier vertex
with the cheapest edge into the tree
"""

import os
import sys
import math
import time
import json
import networkx as nx
import matplotlib.pyplot as plt

from create_graph_files import create_random_graph
from graph_model import Graph
from graph_io import GraphFileError, read_edge_list, read_graph_metadata
from vertex_heap import VertexHeap


class MSTCancelled(Exception):
    """Raised when should_stop() asks the algorithm to abort between pops"""

    def __init__(self, settled, partial_cost):
        self.settled = settled
        self.partial_cost = partial_cost
        super().__init__(
            f"MST computation cancelled after settling {settled} vertices"
        )


class PrimAlgorithm:
    def __init__(self, graph):
        """
        Initialize Prim's algorithm
        graph: a graph_model.Graph, read-only for the whole run
        """
        self.graph = graph
        self.heap = None
        self.total_cost = None

        # handle -> (parent handle, cost) of the arc that last lowered the cost
        self.parent = {}
        self.settled_order = []

    def run(self, should_stop=None, check_heap=False):
        """
        Run Prim's algorithm and return the total MST cost
        check_heap: verify heap order and indexes after every settled vertex
        """
        self.graph.reset_frontier()
        self.heap = VertexHeap(self.graph.all_vertices())
        self.parent = {}
        self.settled_order = []

        total_cost = 0.0
        if self.heap.is_empty():
            self.total_cost = total_cost
            return total_cost

        # The seed's infinite cost is not an edge; leave it out of the sum
        seed = self.heap.pop()
        self.settled_order.append(seed.handle)
        self.update_frontier(seed)
        if check_heap:
            self.heap.check_invariants()

        while not self.heap.is_empty():
            if should_stop is not None and should_stop():
                raise MSTCancelled(len(self.settled_order), total_cost)

            vertex = self.heap.pop()
            self.settled_order.append(vertex.handle)
            total_cost += vertex.frontier_cost
            self.update_frontier(vertex)
            if check_heap:
                self.heap.check_invariants()

        self.total_cost = total_cost
        return total_cost

    def update_frontier(self, vertex):
        """Lower the frontier cost of every neighbor reachable more cheaply via vertex"""
        for far, cost in self.graph.neighbors(vertex):
            if far in self.heap and cost < far.frontier_cost:
                self.heap.decrease_key(far, cost)
                self.parent[far.handle] = (vertex.handle, cost)

    @property
    def tree_edges(self):
        """MST edges as (from_id, to_id, cost), in the order they were added"""
        edges = []
        for handle in self.settled_order:
            if handle in self.parent:
                parent_handle, cost = self.parent[handle]
                edges.append(
                    (self.graph.vertex(parent_handle).id, self.graph.vertex(handle).id, cost)
                )
        return edges

    def print_debug_info(self):
        """Print the vertex table and tree edges"""
        print("\nVertex States:")
        print(f"{'Vertex':<8} {'State':<10} {'Cost':<10} {'HeapIdx':<8} {'Parent':<8}")
        print("-" * 50)

        for vertex in sorted(self.graph.all_vertices(), key=lambda v: str(v.id)):
            parent = self.parent.get(vertex.handle)
            parent_str = str(self.graph.vertex(parent[0]).id) if parent else "-"
            print(
                f"{str(vertex.id):<8} {vertex.state.value:<10} "
                f"{vertex.frontier_cost:<10g} {vertex.heap_index:<8} {parent_str:<8}"
            )

        print("\nTree Edges:")
        for u, v, w in self.tree_edges:
            print(f"  ({u}, {v}): {w:g}")

        expected = len(self.graph) - 1
        if len(self.graph) and len(self.tree_edges) != expected:
            print(
                f"⚠ {len(self.tree_edges)}/{expected} tree edges - graph is not connected"
            )

    def visualize(self, save_path="prim_mst.png"):
        """Visualize the graph and MST"""
        G = self.graph.to_networkx()
        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))

        # Layout
        pos = nx.spring_layout(G, seed=42)

        # Original graph
        ax1.set_title("Original Graph", fontsize=14, fontweight="bold")
        nx.draw(
            G,
            pos,
            ax=ax1,
            with_labels=True,
            node_color="lightblue",
            node_size=700,
            font_size=12,
            font_weight="bold",
        )
        edge_labels = nx.get_edge_attributes(G, "weight")
        nx.draw_networkx_edge_labels(G, pos, edge_labels, ax=ax1)

        # MST
        ax2.set_title("MST (Prim's Algorithm)", fontsize=14, fontweight="bold")
        mst_graph = nx.Graph()
        mst_graph.add_nodes_from(G.nodes())
        for u, v, w in self.tree_edges:
            mst_graph.add_edge(u, v, weight=w)

        nx.draw(
            mst_graph,
            pos,
            ax=ax2,
            with_labels=True,
            node_color="lightgreen",
            node_size=700,
            font_size=12,
            font_weight="bold",
            edge_color="red",
            width=3,
        )

        if self.tree_edges:
            edge_labels = nx.get_edge_attributes(mst_graph, "weight")
            nx.draw_networkx_edge_labels(mst_graph, pos, edge_labels, ax=ax2)

        plt.tight_layout()
        plt.savefig(save_path, dpi=300, bbox_inches="tight")
        print(f"Visualization saved to {save_path}")
        plt.close(fig)

        return mst_graph


def compute_mst(graph):
    """Total cost of a minimum spanning tree of a connected graph"""
    return PrimAlgorithm(graph).run()


def format_cost(cost):
    """Integral totals print without a fractional part"""
    if isinstance(cost, float) and cost.is_integer():
        return str(int(cost))
    return f"{cost:g}"


def mst_weights_match(total_cost, nx_weight):
    """Compare totals summed in different orders"""
    return math.isclose(total_cost, nx_weight, rel_tol=1e-9, abs_tol=1e-9)


def networkx_mst_weight(graph):
    G = graph.to_networkx()
    mst = nx.minimum_spanning_tree(G, weight="weight")
    return sum(data["weight"] for _, _, data in mst.edges(data=True))


def random_graph_edges(num_nodes=8, edge_probability=0.4, seed=42):
    """(u, v, weight) triples of a random connected graph"""
    G = create_random_graph(num_nodes, edge_probability, seed)
    return num_nodes, list(G.edges(data="weight"))


def build_graph(edges):
    graph = Graph()
    for u, v, w in edges:
        graph.connect(u, v, w)
    return graph


def run_experiment(num_nodes, edges, experiment_num, debug=False, output_dir=None):
    """Run Prim's algorithm on a single graph configuration"""
    print(f"\n{'=' * 70}")
    print(f"Experiment {experiment_num}: {num_nodes} nodes, {len(edges)} edges")
    print("=" * 70)

    graph = build_graph(edges)
    prim = PrimAlgorithm(graph)

    start_time = time.time()
    total_weight = prim.run(check_heap=debug)
    elapsed = time.time() - start_time

    if debug or len(prim.tree_edges) != num_nodes - 1:
        print(f"\n--- Debug Info for Experiment {experiment_num} ---")
        prim.print_debug_info()

    # Verify with NetworkX
    nx_weight = networkx_mst_weight(graph)
    is_correct = mst_weights_match(total_weight, nx_weight)

    print(f"\nMST Weight: {format_cost(total_weight)}")
    print(f"MST Edges Found: {len(prim.tree_edges)}/{num_nodes - 1} expected")
    print(f"NetworkX MST Weight: {nx_weight}")
    print(f"Completed in {elapsed * 1000:.2f} ms")
    print(f"Status: {'✓ CORRECT' if is_correct else '✗ INCORRECT'}")

    if output_dir is not None:
        os.makedirs(output_dir, exist_ok=True)
        filename = os.path.join(output_dir, f"prim_mst_exp{experiment_num}.png")
        prim.visualize(filename)

    return {
        "experiment": experiment_num,
        "num_nodes": num_nodes,
        "num_edges": len(edges),
        "mst_edges": [list(edge) for edge in prim.tree_edges],
        "mst_weight": total_weight,
        "networkx_weight": nx_weight,
        "is_correct": is_correct,
        "edges_found": len(prim.tree_edges),
        "edges_expected": num_nodes - 1,
    }


# Graph configurations for the batch of random experiments
EXPERIMENT_CONFIGS = [
    {"num_nodes": 5, "edge_probability": 0.5, "seed": 42},
    {"num_nodes": 6, "edge_probability": 0.4, "seed": 100},
    {"num_nodes": 7, "edge_probability": 0.6, "seed": 200},
    {"num_nodes": 6, "edge_probability": 0.7, "seed": 300},
    {"num_nodes": 10, "edge_probability": 0.8, "seed": 400},
    {"num_nodes": 20, "edge_probability": 0.3, "seed": 500},
]


def run_experiments(configs=EXPERIMENT_CONFIGS, results_file="prim_experiments.json",
                    output_dir=None, debug=False):
    """Loop through multiple random graph configurations"""
    print("=" * 70)
    print(" " * 15 + "Prim's Algorithm - Multiple Experiments")
    print("=" * 70)

    all_results = []
    for i, config in enumerate(configs, 1):
        num_nodes, edges = random_graph_edges(
            num_nodes=config["num_nodes"],
            edge_probability=config["edge_probability"],
            seed=config["seed"],
        )
        all_results.append(
            run_experiment(num_nodes, edges, i, debug=debug, output_dir=output_dir)
        )

    # Summary
    print("\n" + "=" * 70)
    print(" " * 25 + "SUMMARY")
    print("=" * 70)
    print(
        f"{'Exp':<5} {'Nodes':<7} {'Edges':<7} {'MST Wt':<9} {'Found':<10} {'Status':<10}"
    )
    print("-" * 70)

    for result in all_results:
        status = "✓ PASS" if result["is_correct"] else "✗ FAIL"
        found_str = f"{result['edges_found']}/{result['edges_expected']}"
        print(
            f"{result['experiment']:<5} {result['num_nodes']:<7} {result['num_edges']:<7} "
            f"{format_cost(result['mst_weight']):<9} {found_str:<10} {status:<10}"
        )

    if results_file:
        with open(results_file, "w") as f:
            json.dump(all_results, f, indent=2)
        print("\n" + "=" * 70)
        print(f"All results saved to: {results_file}")
        print("=" * 70)

    return all_results


def load_graph(path, file_format=None, header=True):
    """Read a graph file, picking the format from the extension when not given"""
    if file_format is None:
        file_format = "json" if path.endswith(".json") else "edges"
    if file_format == "json":
        return read_graph_metadata(path)
    return read_edge_list(path, header=header)


def run_on_file(args):
    graph = load_graph(args.graph_file, args.format, header=not args.no_header)

    print("=" * 70)
    print("Prim's Algorithm - Minimum Spanning Tree")
    print("=" * 70)
    print(f"Graph file: {args.graph_file}")
    if graph.header is not None:
        print(f"Header: {graph.header}")
    print(f"Number of vertices: {len(graph)}")
    print(f"Number of edges: {graph.number_of_edges()}")

    prim = PrimAlgorithm(graph)
    total_cost = prim.run(check_heap=args.debug)

    if args.debug:
        print("\nHeap invariants held after every pop")
        prim.print_debug_info()

    print(f"\nTotal MST cost: {format_cost(total_cost)}")

    is_correct = True
    if args.verify:
        G = graph.to_networkx()
        connected = len(G) > 0 and nx.is_connected(G)
        nx_weight = networkx_mst_weight(graph)
        print(f"\nOriginal graph connected: {connected}")
        print(f"NetworkX MST weight: {nx_weight}")
        if not connected:
            print("⚠ Graph is disconnected - the Prim total includes inf per extra component")
        is_correct = connected and mst_weights_match(total_cost, nx_weight)
        print(f"Status: {'✓ CORRECT' if is_correct else '✗ INCORRECT'}")

    if args.visualize:
        prim.visualize(args.visualize)

    print("=" * 70)
    return 0 if is_correct else 2


def parse_args(argv=None):
    import argparse

    parser = argparse.ArgumentParser(
        description="Compute the total cost of a minimum spanning tree with Prim's algorithm"
    )
    parser.add_argument(
        "graph_file",
        nargs="?",
        help="Edge list or graph_metadata.json file (default: run random experiments)",
    )
    parser.add_argument(
        "--format",
        choices=["edges", "json"],
        default=None,
        help="Input format (default: json for *.json, edges otherwise)",
    )
    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Edge list has no leading header line",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Cross-check the total against NetworkX",
    )
    parser.add_argument(
        "--visualize",
        type=str,
        default=None,
        help="Save an original/MST figure to this path",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Print vertex states and tree edges"
    )
    parser.add_argument(
        "--results-file",
        type=str,
        default="prim_experiments.json",
        help="Experiment results file (default: prim_experiments.json)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for experiment visualizations (default: none)",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main function - one graph file, or a batch of random experiments"""
    args = parse_args(argv)

    if args.graph_file is None:
        run_experiments(
            results_file=args.results_file,
            output_dir=args.output_dir,
            debug=args.debug,
        )
        return 0

    try:
        return run_on_file(args)
    except (GraphFileError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
