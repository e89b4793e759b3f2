"""
Graph-based Key Schedule

This module derives the cipher's key material from a labeled graph:

- the key polynomial, the product over all edges (u, v) in insertion
  order of the quadratic factor [1, 2u+1, 2v+1] in the extended ring
- the keystream, the triples (1, u, v) of the edges sorted by (u, v)
  with the final value dropped, used cyclically as an XOR mask

It also holds the odd affine map pair used for substitution.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..errors import EmptyGraph, InvalidEdge, OddnessViolation
from ..params import DEFAULT_PARAMS, CipherParams
from ..ring.polynomial import Polynomial

logger = logging.getLogger(__name__)


def odd(x: int, modulus: int = DEFAULT_PARAMS.extended_modulus) -> int:
    """
    Odd affine map x -> 2x + 1 (mod modulus).

    The image is always odd, which makes it a unit of the extended ring.
    """
    return (2 * x + 1) % modulus


def inv_odd(x: int) -> int:
    """
    Inverse of the odd affine map.

    Raises:
        OddnessViolation: If x is even (not in the image of odd())
    """
    if x % 2 != 1:
        raise OddnessViolation(x)
    return (x - 1) // 2


class Graph:
    """
    Directed graph on nodes 1..n with an insertion-ordered edge list.

    Duplicate edges and self-loops are allowed.
    """

    def __init__(self, n: int):
        if n < 0:
            raise ValueError(f"Node count cannot be negative, got {n}")
        self.n = n
        self._edges: List[Tuple[int, int]] = []

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Tuple[int, int]]) -> 'Graph':
        graph = cls(n)
        for u, v in edges:
            graph.add_edge(u, v)
        return graph

    def add_edge(self, u: int, v: int) -> None:
        """
        Append the edge (u, v).

        Raises:
            InvalidEdge: If u or v is not an integer in [1, n]
        """
        for endpoint in (u, v):
            if not isinstance(endpoint, numbers.Integral):
                raise InvalidEdge(f"Edge ({u}, {v}) has non-integer endpoint {endpoint!r}")
            if not 1 <= endpoint <= self.n:
                raise InvalidEdge(f"Edge ({u}, {v}) has endpoint {endpoint} outside [1, {self.n}]")
        self._edges.append((int(u), int(v)))

    @property
    def edges(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self.n == other.n and self._edges == other._edges

    def __repr__(self) -> str:
        return f"Graph(n={self.n}, edges={self._edges})"

    def to_dict(self) -> Dict[str, Any]:
        return {'n': self.n, 'edges': [list(edge) for edge in self._edges]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Graph':
        return cls.from_edges(data['n'], (tuple(edge) for edge in data['edges']))


def derive_key(graph: Graph, params: Optional[CipherParams] = None) -> Polynomial:
    """
    Derive the key polynomial of a graph.

    Args:
        graph: The graph to derive the key from
        params: Cipher parameters (default: DEFAULT_PARAMS)

    Returns:
        A polynomial of degree 2 * len(graph.edges) over the extended
        modulus whose leading coefficient is odd
    """
    params = params or DEFAULT_PARAMS
    modulus = params.extended_modulus

    key = Polynomial([1], modulus)
    for u, v in graph.edges:
        key = key * Polynomial([1, odd(u, modulus), odd(v, modulus)], modulus)

    logger.debug("Derived key polynomial of degree %d from %d edges", key.degree, len(graph))
    return key


def derive_keystream(graph: Graph, params: Optional[CipherParams] = None) -> np.ndarray:
    """
    Derive the keystream of a graph.

    The edges are sorted by (u, v) first, so the keystream does not
    depend on insertion order.

    Args:
        graph: The graph to derive the keystream from
        params: Cipher parameters (default: DEFAULT_PARAMS)

    Returns:
        An int64 array of length 3 * len(graph.edges) - 1

    Raises:
        EmptyGraph: If the graph has no edges
    """
    if len(graph) == 0:
        raise EmptyGraph("Cannot derive a keystream from a graph without edges")

    params = params or DEFAULT_PARAMS
    base = params.base_modulus

    stream = []
    for u, v in sorted(graph.edges):
        stream.extend((1 % base, u % base, v % base))

    # Odd length keeps the mask aligned across the rounds
    stream.pop()
    keystream = np.array(stream, dtype=np.int64)
    keystream.flags.writeable = False
    return keystream


@dataclass(frozen=True, eq=False)
class KeySchedule:
    """Key polynomial and keystream derived for one cipher call."""
    key: Polynomial
    keystream: np.ndarray


def derive_schedule(graph: Graph, params: Optional[CipherParams] = None) -> KeySchedule:
    """Derive both the key polynomial and the keystream of a graph."""
    return KeySchedule(
        key=derive_key(graph, params),
        keystream=derive_keystream(graph, params),
    )
