"""
Reading and writing graph files
Edge list: a header line (node and edge counts) followed by one
"from_id to_id cost" triple per line
Metadata: graph_metadata.json as written by create_graph_files.py
"""

import json

from graph_model import Graph


class GraphFileError(ValueError):
    def __init__(self, message, filename=None, line_number=None):
        self.filename = filename
        self.line_number = line_number
        location = filename or "<input>"
        if line_number is not None:
            location = f"{location}:{line_number}"
        super().__init__(f"{location}: {message}")


def parse_edge_line(line, filename=None, line_number=None):
    """Parse one "from_id to_id cost" line into (int, int, float)"""
    fields = line.split()
    if len(fields) != 3:
        raise GraphFileError(
            f"expected 3 fields, got {len(fields)}", filename, line_number
        )

    try:
        u = int(fields[0])
        v = int(fields[1])
    except ValueError:
        raise GraphFileError(
            f"vertex ids must be integers: {line.strip()!r}", filename, line_number
        ) from None

    try:
        w = float(fields[2])
    except ValueError:
        raise GraphFileError(
            f"couldn't convert cost {fields[2]!r}", filename, line_number
        ) from None

    if not w >= 0:
        raise GraphFileError(f"negative edge cost {w}", filename, line_number)

    return u, v, w


def read_edge_list(source, header=True):
    """
    Build a Graph from an edge list file path or an iterable of lines.
    The first line is skipped when header is set.
    """
    if isinstance(source, str):
        with open(source, "r") as f:
            return _read_edge_lines(f, header, source)
    return _read_edge_lines(source, header, None)


def _read_edge_lines(lines, header, filename):
    graph = Graph()
    for line_number, line in enumerate(lines, 1):
        if header and line_number == 1:
            graph.header = line.strip()
            continue
        if not line.strip():
            continue
        u, v, w = parse_edge_line(line, filename, line_number)
        graph.connect(u, v, w)
    return graph


def read_graph_metadata(path):
    """Build a Graph from a graph_metadata.json file"""
    with open(path, "r") as f:
        try:
            metadata = json.load(f)
        except json.JSONDecodeError as e:
            raise GraphFileError(f"invalid JSON: {e.msg}", path, e.lineno) from None

    if not isinstance(metadata, dict):
        raise GraphFileError("top-level value must be an object", path)
    if not isinstance(metadata.get("edges"), list):
        raise GraphFileError("missing 'edges' list", path)

    num_nodes = metadata.get("num_nodes", 0)
    if not _is_int(num_nodes) or num_nodes < 0:
        raise GraphFileError(
            f"'num_nodes' must be a non-negative integer, got {num_nodes!r}", path
        )

    graph = Graph()
    # Isolated nodes still belong to the graph
    for node_id in range(num_nodes):
        graph.get_or_create_vertex(node_id)

    for i, edge in enumerate(metadata["edges"]):
        if not isinstance(edge, list) or len(edge) != 3:
            raise GraphFileError(f"edge #{i} is not a [u, v, weight] triple", path)
        u, v, w = edge
        if not (_is_int(u) and _is_int(v)):
            raise GraphFileError(f"edge #{i} has non-integer vertex ids", path)
        if isinstance(w, bool) or not isinstance(w, (int, float)):
            raise GraphFileError(f"edge #{i} has non-numeric cost {w!r}", path)
        if not w >= 0:
            raise GraphFileError(f"edge #{i} has negative cost {w}", path)
        graph.connect(u, v, w)
    return graph


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def write_edge_list(path, num_nodes, edges):
    """Write edges in the edge list format, header line first"""
    edges = list(edges)
    with open(path, "w") as f:
        f.write(f"{num_nodes} {len(edges)}\n")
        for u, v, w in edges:
            f.write(f"{u} {v} {w}\n")
    return path
