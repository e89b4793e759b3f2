import numpy as np

from graphcipher.key_schedule import Graph
from graphcipher.ring import Polynomial

SAMPLE_EDGES = [(1, 2), (3, 2), (2, 4), (3, 5), (1, 3)]
SAMPLE_PLAINTEXT = "crack me plz"
SAMPLE_CIPHERTEXT = "1b61ae1be0d50120c404409f04218e1191dd"


def random_poly(rng, length, modulus=512):
    return Polynomial(rng.integers(0, modulus, size=length), modulus)


def odd_leading(rng, length, modulus=512):
    coeffs = rng.integers(0, modulus, size=length)
    coeffs[-1] |= 1
    return Polynomial(coeffs, modulus)


def random_graph(rng, n=8, num_edges=4):
    graph = Graph(n)
    for u, v in rng.integers(1, n + 1, size=(num_edges, 2)):
        graph.add_edge(int(u), int(v))
    return graph
