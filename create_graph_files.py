"""
Create graph files for Prim's MST
Writes the edge list read by prim_implementation.py plus a JSON metadata file
"""

import networkx as nx
import random
import json
import os
import matplotlib.pyplot as plt

from graph_io import write_edge_list


def create_random_graph(num_nodes=6, edge_probability=0.5, seed=42):
    """Create a random connected graph with random weights"""
    random.seed(seed)

    # Generate random graph using Erdos-Renyi model
    G = nx.erdos_renyi_graph(num_nodes, edge_probability, seed=seed)

    # Ensure the graph is connected
    attempts = 0
    while not nx.is_connected(G) and attempts < 100:
        G = nx.erdos_renyi_graph(
            num_nodes, edge_probability, seed=random.randint(0, 10000)
        )
        attempts += 1

    if not nx.is_connected(G):
        # Force connectivity by chaining the components together
        components = list(nx.connected_components(G))
        for i in range(len(components) - 1):
            node1 = min(components[i])
            node2 = min(components[i + 1])
            G.add_edge(node1, node2)

    # Assign random weights to edges
    for u, v in G.edges():
        G[u][v]["weight"] = random.randint(1, 10)

    return G


def create_graph_files(graph, output_dir="graph_data"):
    """
    Write graph.txt (edge list with header line) and graph_metadata.json
    """
    os.makedirs(output_dir, exist_ok=True)

    num_nodes = graph.number_of_nodes()
    edges = [(u, v, graph[u][v]["weight"]) for u, v in graph.edges()]

    print(f"Creating graph files for {num_nodes} nodes...")
    print(f"Output directory: {output_dir}")

    edge_file = write_edge_list(os.path.join(output_dir, "graph.txt"), num_nodes, edges)
    print(f"  Created {edge_file}: {len(edges)} edges")

    metadata = {
        "num_nodes": num_nodes,
        "num_edges": graph.number_of_edges(),
        "edges": edges,
    }

    metadata_file = os.path.join(output_dir, "graph_metadata.json")
    with open(metadata_file, "w") as f:
        json.dump(metadata, f, indent=2)

    print(f"  Created {metadata_file}: Graph metadata")

    return output_dir


def visualize_graph(graph, output_dir):
    """Visualize the graph and save to file"""
    plt.figure(figsize=(10, 8))
    pos = nx.spring_layout(graph, seed=42)

    # Draw graph
    nx.draw(
        graph,
        pos,
        with_labels=True,
        node_color="lightblue",
        node_size=700,
        font_size=12,
        font_weight="bold",
        edge_color="gray",
        width=2,
    )

    # Draw edge labels
    edge_labels = nx.get_edge_attributes(graph, "weight")
    nx.draw_networkx_edge_labels(graph, pos, edge_labels, font_size=10)

    plt.title("Input Graph for Prim's Algorithm", fontsize=14, fontweight="bold")

    output_file = os.path.join(output_dir, "input_graph.png")
    plt.savefig(output_file, dpi=300, bbox_inches="tight")
    print(f"\n  Visualization saved to {output_file}")
    plt.close()


def print_graph_summary(graph):
    """Print summary of the graph"""
    print("\n" + "=" * 70)
    print("Graph Summary")
    print("=" * 70)
    print(f"Number of nodes: {graph.number_of_nodes()}")
    print(f"Number of edges: {graph.number_of_edges()}")
    print(f"Is connected: {nx.is_connected(graph)}")

    print("\nEdge list (with weights):")
    for u, v, data in sorted(graph.edges(data=True)):
        print(f"  ({u}, {v}): weight = {data['weight']}")

    mst = nx.minimum_spanning_tree(graph, weight="weight")
    mst_weight = sum(data["weight"] for _, _, data in mst.edges(data=True))
    print(f"\nExpected MST weight (NetworkX): {mst_weight}")
    print("=" * 70)


def main(argv=None):
    """Main function to create graph files"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Generate graph files for Prim's MST"
    )
    parser.add_argument(
        "--nodes", type=int, default=6, help="Number of nodes (default: 6)"
    )
    parser.add_argument(
        "--edge-prob", type=float, default=0.5, help="Edge probability (default: 0.5)"
    )
    parser.add_argument(
        "--seed", type=int, default=42, help="Random seed (default: 42)"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="graph_data",
        help="Output directory (default: graph_data)",
    )
    parser.add_argument(
        "--no-plot", action="store_true", help="Skip writing input_graph.png"
    )

    args = parser.parse_args(argv)

    print("=" * 70)
    print("Graph File Generator for Prim's MST")
    print("=" * 70)

    print(f"\nGenerating random graph...")
    print(f"  Nodes: {args.nodes}")
    print(f"  Edge probability: {args.edge_prob}")
    print(f"  Random seed: {args.seed}")

    graph = create_random_graph(args.nodes, args.edge_prob, args.seed)

    print_graph_summary(graph)

    print("\n" + "=" * 70)
    create_graph_files(graph, args.output_dir)
    if not args.no_plot:
        visualize_graph(graph, args.output_dir)

    print("\n" + "=" * 70)
    print("Graph files created successfully!")
    print("=" * 70)
    print(f"\nTo compute the MST:")
    print(f"  python prim_implementation.py {os.path.join(args.output_dir, 'graph.txt')} --verify")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    main()
