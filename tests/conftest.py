import numpy as np
import pytest

from algorithms.graph import Graph
from graph_generators.small_graphs import bowtie_graph, cycle_graph, parallel_pair


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def cycle4():
    """1-2-3-4-1, min cut 2"""
    return cycle_graph(4)


@pytest.fixture
def bowtie():
    """Two triangles sharing vertex 3, min cut 2"""
    return bowtie_graph()


@pytest.fixture
def pair5():
    """Two vertices, five parallel edges"""
    return parallel_pair(5)


@pytest.fixture
def multi_triangle():
    """Triangle with a doubled 1-2 edge"""
    return Graph({1: [2, 2, 3], 2: [1, 1, 3], 3: [1, 2]})
