import numpy as np
import networkx as nx
from typing import Dict, Iterable, List, Tuple


class GraphError(Exception):
    """Base class for every error raised while building or contracting a graph."""


class UnknownVertex(GraphError, KeyError):
    def __init__(self, vertex, referenced_by=None):
        self.vertex = vertex
        self.referenced_by = referenced_by
        if referenced_by is None:
            msg = f"vertex {vertex} has no adjacency entry"
        else:
            msg = f"vertex {vertex} (listed by {referenced_by}) has no adjacency entry"
        super().__init__(msg)

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class InsufficientVertices(GraphError):
    pass


class EmptyGraph(GraphError):
    pass


class MalformedInput(GraphError, ValueError):
    pass


class Graph:
    """
    Undirected multigraph stored as vertex id -> list of neighbour ids.

    A neighbour is listed once per parallel edge, so a pair joined by k edges
    shows up k times in each endpoint's list. Every list is owned by this
    instance; `copy()` never shares lists between graphs.
    """
    __slots__ = ['_adj']

    def __init__(self, adjacency: Dict[int, Iterable[int]] = None):
        self._adj: Dict[int, List[int]] = {}
        if adjacency is not None:
            for v, nbrs in adjacency.items():
                self._adj[int(v)] = [int(u) for u in nbrs]

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[int, int]], vertices: Iterable[int] = ()) -> "Graph":
        """
        Builds a graph from (u, v) pairs. Repeated pairs become parallel edges.
        """
        g = cls()
        for v in vertices:
            g._adj.setdefault(int(v), [])
        for u, v in edges:
            u, v = int(u), int(v)
            if u == v:
                raise MalformedInput(f"self-loop on vertex {u}")
            g._adj.setdefault(u, []).append(v)
            g._adj.setdefault(v, []).append(u)
        return g

    @classmethod
    def from_adjacency_matrix(cls, graph_matrix: np.ndarray) -> "Graph":
        """
        graph_matrix is an (n x n) symmetric matrix; entry (i, j) is the number
        of parallel edges between i and j. Vertices are numbered 1..n.
        """
        matrix = np.asarray(graph_matrix)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise MalformedInput(f"expected a square matrix, got shape {matrix.shape}")
        if not np.array_equal(matrix, matrix.T):
            raise MalformedInput("adjacency matrix is not symmetric")
        if np.any(np.diag(matrix) != 0):
            raise MalformedInput("adjacency matrix has self-loops")

        counts = np.rint(matrix).astype(int)
        if np.any(counts < 0) or not np.allclose(counts, matrix):
            raise MalformedInput("adjacency matrix entries must be non-negative integers")

        n = counts.shape[0]
        g = cls()
        for i in range(n):
            cols = np.nonzero(counts[i])[0]
            g._adj[i + 1] = np.repeat(cols + 1, counts[i, cols]).tolist()
        return g

    @classmethod
    def from_networkx(cls, G: nx.Graph) -> "Graph":
        """
        Nodes are relabelled to 1..n in sorted order when they are not already ints.
        MultiGraph parallel edges are kept; edge weights are ignored.
        """
        nodes = list(G.nodes())
        if all(isinstance(v, (int, np.integer)) for v in nodes):
            label = {v: int(v) for v in nodes}
        else:
            label = {v: i for i, v in enumerate(sorted(nodes, key=str), start=1)}
        return cls.from_edges(((label[u], label[v]) for u, v in G.edges()),
                              vertices=(label[v] for v in nodes))

    def to_networkx(self) -> nx.MultiGraph:
        G = nx.MultiGraph()
        G.add_nodes_from(self._adj)
        for v, nbrs in self._adj.items():
            for u in nbrs:
                # each undirected edge is listed from both ends; add it once
                if v < u:
                    G.add_edge(v, u)
        return G

    def vertex_count(self) -> int:
        return len(self._adj)

    def vertices(self) -> List[int]:
        return list(self._adj)

    def neighbors(self, v: int) -> List[int]:
        try:
            return self._adj[v]
        except KeyError:
            raise UnknownVertex(v) from None

    def set_neighbors(self, v: int, neighbors: Iterable[int]) -> None:
        self._adj[v] = list(neighbors)

    def remove_vertex(self, v: int) -> None:
        try:
            del self._adj[v]
        except KeyError:
            raise UnknownVertex(v) from None

    def __contains__(self, v) -> bool:
        return v in self._adj

    def __len__(self) -> int:
        return len(self._adj)

    def __eq__(self, other):
        if not isinstance(other, Graph):
            return NotImplemented
        return self._adj == other._adj

    def __repr__(self):
        return f"Graph(vertices={self.vertex_count()}, edges={self.edge_count()})"

    def copy(self) -> "Graph":
        clone = Graph()
        clone._adj = {v: list(nbrs) for v, nbrs in self._adj.items()}
        return clone

    def adjacency(self) -> Dict[int, List[int]]:
        """Returns a detached dict copy of the adjacency lists."""
        return {v: list(nbrs) for v, nbrs in self._adj.items()}

    def adjacency_size(self) -> int:
        return sum(len(nbrs) for nbrs in self._adj.values())

    def edge_count(self) -> int:
        return self.adjacency_size() // 2

    def validate(self) -> None:
        """
        Rejects a graph that cannot be contracted.

        Raises:
            EmptyGraph: no vertices at all.
            UnknownVertex: a neighbour id with no adjacency entry of its own.
            MalformedInput: self-loops, or u lists v a different number of
                            times than v lists u.
        """
        if not self._adj:
            raise EmptyGraph("graph has no vertices")

        counts: Dict[Tuple[int, int], int] = {}
        for v, nbrs in self._adj.items():
            for u in nbrs:
                if u not in self._adj:
                    raise UnknownVertex(u, referenced_by=v)
                if u == v:
                    raise MalformedInput(f"self-loop on vertex {v}")
                counts[(v, u)] = counts.get((v, u), 0) + 1

        for (v, u), k in counts.items():
            back = counts.get((u, v), 0)
            if back != k:
                raise MalformedInput(
                    f"vertex {v} lists {u} {k} time(s) but {u} lists {v} {back} time(s)")
