"""
Cross-check Prim's MST against NetworkX on a graph_metadata.json file
"""

import sys

import networkx as nx

from graph_io import read_graph_metadata
from prim_implementation import PrimAlgorithm, format_cost, mst_weights_match


def check_mst(metadata_path):
    graph = read_graph_metadata(metadata_path)
    G = graph.to_networkx()

    mst = nx.minimum_spanning_tree(G)
    print("Expected MST edges:")
    for u, v in sorted(mst.edges()):
        print(f'  ({u},{v}): {G[u][v]["weight"]}')
    nx_weight = sum(d["weight"] for _, _, d in mst.edges(data=True))
    print(f"\nTotal weight: {nx_weight}")
    print(f"Number of edges: {mst.number_of_edges()}")

    prim = PrimAlgorithm(graph)
    total_cost = prim.run()
    print("\nPrim MST edges:")
    for u, v, w in sorted(prim.tree_edges):
        print(f"  ({u},{v}): {w}")
    print(f"\nPrim total weight: {format_cost(total_cost)}")

    # Check connectivity
    connected = len(G) > 0 and nx.is_connected(G)
    print(f"\nOriginal graph connected: {connected}")
    print(f"MST connected: {len(mst) > 0 and nx.is_connected(mst)}")

    return connected and mst_weights_match(total_cost, nx_weight)


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else "graph_data/graph_metadata.json"
    sys.exit(0 if check_mst(path) else 1)
