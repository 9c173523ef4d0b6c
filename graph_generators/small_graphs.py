from algorithms.graph import Graph


def cycle_graph(n: int) -> Graph:
    """Cycle 1-2-...-n-1. Min cut 2 for n >= 3."""
    if n < 3:
        raise ValueError("a cycle needs n >= 3")
    return Graph.from_edges((i, i % n + 1) for i in range(1, n + 1))


def bowtie_graph() -> Graph:
    """Triangles {1,2,3} and {3,4,5} sharing vertex 3. Min cut 2."""
    return Graph.from_edges([(1, 2), (2, 3), (1, 3), (3, 4), (4, 5), (3, 5)])


def parallel_pair(k: int) -> Graph:
    """Two vertices joined by k parallel edges. Min cut k."""
    return Graph.from_edges([(1, 2)] * k, vertices=(1, 2))


def barbell_graph(clique: int) -> Graph:
    """Two cliques of `clique` vertices joined by a single bridge edge. Min cut 1."""
    if clique < 3:
        raise ValueError("each clique needs at least 3 vertices")
    left = range(1, clique + 1)
    right = range(clique + 1, 2 * clique + 1)
    edges = [(u, v) for side in (left, right) for u in side for v in side if u < v]
    edges.append((clique, clique + 1))
    return Graph.from_edges(edges)
