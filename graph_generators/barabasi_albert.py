import numpy as np

from algorithms.graph import Graph


def generate_ba(n: int, m: int, rng: np.random.Generator = None) -> Graph:
    """
    Generates a Barabási-Albert (BA) random graph using preferential attachment.

    Args:
        n (int): Total number of nodes.
        m (int): Number of edges to attach from a new node to existing nodes.
                 (m <= m0, where m0 is the initial number of nodes)
        rng (np.random.Generator): Source of randomness. A fresh one if None.

    Returns:
        Graph: vertices 1..n. Connected whenever m >= 1 and n >= 2.
    """
    m0 = max(m, 2)  # seed clique; a single seed node would leave node 2 with no targets
    if m < 1:
        raise ValueError("m must be >= 1")
    if n < m0:
        raise ValueError("n must be >= max(m, 2)")
    if rng is None:
        rng = np.random.default_rng()

    matrix = np.zeros((n, n), dtype=int)

    rows, cols = np.triu_indices(m0, k=1)
    matrix[rows, cols] = 1
    matrix[cols, rows] = 1

    degrees = np.sum(matrix, axis=1)

    for i in range(m0, n):
        current_degrees = degrees[:i]
        probabilities = current_degrees / np.sum(current_degrees)
        targets = rng.choice(i, size=m, replace=False, p=probabilities)

        matrix[i, targets] = 1
        matrix[targets, i] = 1

        degrees[i] = m
        degrees[targets] += 1

    return Graph.from_adjacency_matrix(matrix)
