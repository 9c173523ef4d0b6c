import numpy as np

from algorithms.graph import Graph


def generate_er(n: int, p: float, rng: np.random.Generator = None) -> Graph:
    """
    Generates an Erdős-Rényi (G(n, p)) random graph.

    Returns:
        Graph: vertices 1..n, simple edges (no parallel edges).
    """
    if rng is None:
        rng = np.random.default_rng()

    matrix = np.zeros((n, n), dtype=int)

    # indices for the upper triangle (k=1 excludes the diagonal)
    rows, cols = np.triu_indices(n, k=1)

    edges = rng.random(rows.size) < p
    matrix[rows[edges], cols[edges]] = 1

    # mirror the matrix to make it symmetric (undirected)
    matrix[cols[edges], rows[edges]] = 1

    return Graph.from_adjacency_matrix(matrix)
