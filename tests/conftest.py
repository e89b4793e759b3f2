import numpy as np
import pytest

from graphcipher.key_schedule import Graph

from .helpers import SAMPLE_EDGES


@pytest.fixture
def sample_graph():
    return Graph.from_edges(5, SAMPLE_EDGES)


@pytest.fixture
def wrong_graph():
    # (1, 3) replaced by (1, 4)
    return Graph.from_edges(5, SAMPLE_EDGES[:-1] + [(1, 4)])


@pytest.fixture
def rng():
    return np.random.default_rng(20240601)
