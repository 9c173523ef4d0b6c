import os
import re
from typing import Dict, List

from algorithms.graph import EmptyGraph, Graph, MalformedInput

# fields may be split by tabs, spaces or commas (trailing commas included)
_FIELD_SEP = re.compile(r"[\s,]+")


def parse_adjacency_list(text: str, source: str = "<string>") -> Graph:
    """
    Parses one record per line: vertex id first, then its neighbours, with a
    neighbour repeated once per parallel edge.

    Blank lines and lines starting with '#' are skipped. The returned graph is
    not validated; dangling references are reported when estimation starts.

    Raises:
        EmptyGraph: no vertex records at all.
        MalformedInput: a non-integer field or a vertex with two records.
    """
    adjacency: Dict[int, List[int]] = {}

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        fields = [f for f in _FIELD_SEP.split(line) if f]
        try:
            vertex, *neighbors = (int(f) for f in fields)
        except ValueError:
            raise MalformedInput(
                f"{source}:{lineno}: expected integer vertex ids, got {line!r}") from None

        if vertex in adjacency:
            raise MalformedInput(f"{source}:{lineno}: vertex {vertex} already has a record")
        adjacency[vertex] = neighbors

    if not adjacency:
        raise EmptyGraph(f"{source}: no vertex records found")

    return Graph(adjacency)


def load_adjacency_list(path: str) -> Graph:
    with open(path, "r", encoding="utf-8") as f:
        return parse_adjacency_list(f.read(), source=os.path.basename(path))


def write_adjacency_list(graph: Graph, path: str) -> None:
    """Writes `graph` in the tab separated format load_adjacency_list reads."""
    with open(path, "w", encoding="utf-8") as f:
        for v in graph.vertices():
            f.write("\t".join(str(x) for x in [v, *graph.neighbors(v)]) + "\n")
