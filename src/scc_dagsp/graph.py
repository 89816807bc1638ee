from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral
from typing import Dict, Iterable, Iterator, KeysView, List, Tuple
import operator

import numpy as np
from scipy import sparse

from .errors import InvalidArgumentError, InvalidVertexError


@dataclass(frozen=True)
class Edge:
    """Directed weighted edge ``source -> target``.

    Equality and hashing only look at ``(target, weight)``: within one
    vertex's outgoing set, two edges to the same target coexist when their
    weights differ, and an exact duplicate is dropped.
    """

    source: int = field(compare=False)
    target: int
    weight: int

    def __str__(self) -> str:
        return f"->{self.target}(w={self.weight})"


def _as_weight(weight: object) -> int:
    if isinstance(weight, bool) or not isinstance(weight, Integral):
        raise InvalidArgumentError(f"Edge weight must be an integer, got {weight!r}")
    weight = int(weight)
    if weight < 0:
        raise InvalidArgumentError(f"Edge weight must be non-negative, got {weight}")
    return weight


class Graph:
    """Directed weighted graph over vertices ``0..n-1`` stored as adjacency sets.

    Each vertex owns an insertion-ordered set of outgoing edges (a dict keyed
    by ``Edge``), so iteration over ``neighbors(v)`` follows insertion order.
    The store is append-only: there is no edge removal.
    """

    def __init__(self, n: int) -> None:
        if isinstance(n, bool) or not isinstance(n, Integral) or n < 0:
            raise InvalidArgumentError(f"Vertex count must be a non-negative integer, got {n!r}")
        self._n = int(n)
        self._num_edges = 0
        self._adj: List[Dict[Edge, None]] = [{} for _ in range(self._n)]

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Tuple[int, int, int]]) -> "Graph":
        g = cls(n)
        for u, v, w in edges:
            g.add_edge(u, v, w)
        return g

    @property
    def n(self) -> int:
        return self._n

    @property
    def num_edges(self) -> int:
        return self._num_edges

    def __len__(self) -> int:
        return self._n

    def _check_vertex(self, v: object) -> int:
        try:
            idx = operator.index(v)
        except TypeError:
            raise InvalidVertexError(v, self._n) from None
        if idx < 0 or idx >= self._n:
            raise InvalidVertexError(v, self._n)
        return idx

    def add_edge(self, u: int, v: int, weight: int = 1) -> bool:
        """Add ``u -> v``; returns False when an equal edge is already stored."""
        u = self._check_vertex(u)
        v = self._check_vertex(v)
        edge = Edge(u, v, _as_weight(weight))
        out = self._adj[u]
        if edge in out:
            return False
        out[edge] = None
        self._num_edges += 1
        return True

    def neighbors(self, v: int) -> KeysView[Edge]:
        """Read-only, set-like view of the outgoing edges of ``v``."""
        return self._adj[self._check_vertex(v)].keys()

    def out_degree(self, v: int) -> int:
        return len(self._adj[self._check_vertex(v)])

    def in_degrees(self) -> np.ndarray:
        indeg = np.zeros(self._n, dtype=np.int64)
        for out in self._adj:
            for e in out:
                indeg[e.target] += 1
        return indeg

    def edges(self) -> Iterator[Edge]:
        for out in self._adj:
            yield from out

    def transpose(self) -> "Graph":
        """New graph with every edge reversed, weights preserved."""
        t = Graph(self._n)
        for e in self.edges():
            t.add_edge(e.target, e.source, e.weight)
        return t

    def adjacency_matrix(self) -> sparse.csr_matrix:
        """CSR export; parallel edges to one target keep their minimum weight."""
        best: Dict[Tuple[int, int], int] = {}
        for e in self.edges():
            key = (e.source, e.target)
            if key not in best or e.weight < best[key]:
                best[key] = e.weight
        if not best:
            return sparse.csr_matrix((self._n, self._n), dtype=np.int64)
        rows = np.fromiter((k[0] for k in best), dtype=np.int64, count=len(best))
        cols = np.fromiter((k[1] for k in best), dtype=np.int64, count=len(best))
        data = np.fromiter(best.values(), dtype=np.int64, count=len(best))
        return sparse.csr_matrix((data, (rows, cols)), shape=(self._n, self._n), dtype=np.int64)

    def __repr__(self) -> str:
        return f"Graph(n={self._n}, num_edges={self._num_edges})"

    def __str__(self) -> str:
        lines = ["Graph adjacency list:"]
        for u, out in enumerate(self._adj):
            lines.append(f"{u}: " + " ".join(str(e) for e in out))
        return "\n".join(lines)
