import numpy as np
from typing import NamedTuple, Optional, Tuple

from algorithms.graph import Graph, InsufficientVertices, MalformedInput


class Edge(NamedTuple):
    """An edge picked for contraction; `b` gets absorbed into `a`."""
    a: int
    b: int


def sample_edge(graph: Graph, rng: np.random.Generator) -> Optional[Edge]:
    """
    Picks a uniformly random vertex, then a uniformly random entry of its
    neighbour list. Parallel edges are repeated entries, so a pair joined by
    k edges is k times as likely as a pair joined by one.

    If the chosen vertex has no neighbours left (disconnected input), the pick
    is redone among vertices that still have some. Returns None when no edge
    remains anywhere.
    """
    vertices = graph.vertices()
    if len(vertices) < 2:
        raise InsufficientVertices(
            f"need at least 2 vertices to sample an edge, graph has {len(vertices)}")

    a = vertices[rng.integers(len(vertices))]
    neighbors = graph.neighbors(a)

    if not neighbors:
        candidates = [v for v in vertices if graph.neighbors(v)]
        if not candidates:
            return None
        a = candidates[rng.integers(len(candidates))]
        neighbors = graph.neighbors(a)

    # full index range [0, len - 1]: the last entry must be reachable too
    b = neighbors[rng.integers(len(neighbors))]
    return Edge(a, b)


def merge(graph: Graph, edge: Edge) -> None:
    """
    Absorbs edge.b into edge.a in place.

    a keeps the union of both neighbour lists minus every a/b entry (the
    contracted edge, all its parallel copies, and any would-be self-loop).
    Every vertex that pointed at b is rewritten to point at a, once per
    parallel edge, and b is removed.
    """
    a, b = edge
    if a == b:
        raise MalformedInput(f"cannot contract vertex {a} into itself")

    nbrs_a = graph.neighbors(a)
    nbrs_b = graph.neighbors(b)

    graph.set_neighbors(a, [w for w in nbrs_a + nbrs_b if w != a and w != b])

    for w in set(nbrs_b):
        if w == a:
            continue
        graph.set_neighbors(w, [a if x == b else x for x in graph.neighbors(w)])

    graph.remove_vertex(b)


def contract_to_cut(graph: Graph, rng: np.random.Generator) -> Tuple[int, int]:
    """
    Runs one contraction trial on `graph`, mutating it down to two vertices.

    Returns:
        (cut, merges): number of edges between the two surviving supernodes,
                       and how many merges it took to get there.
    """
    if graph.vertex_count() < 2:
        raise InsufficientVertices(
            f"a cut needs at least 2 vertices, graph has {graph.vertex_count()}")

    merges = 0
    while graph.vertex_count() > 2:
        edge = sample_edge(graph, rng)
        if edge is None:
            # no edges left: any split of the remaining vertices is a 0-cut
            vertices = graph.vertices()
            edge = Edge(vertices[0], vertices[1])
        merge(graph, edge)
        merges += 1

    return len(graph.neighbors(min(graph.vertices()))), merges
