from __future__ import annotations

from collections import deque
from typing import List, Optional
import logging

import numpy as np

from .errors import InvalidArgumentError
from .graph import Graph
from .metrics import Metrics

LOGGER = logging.getLogger(__name__)


def topological_sort(graph: Optional[Graph], metrics: Optional[Metrics] = None) -> List[int]:
    """Topological order via Kahn's algorithm.

    Parameters
    ----------
    graph:
        Directed graph; ``None`` raises ``InvalidArgumentError``.
    metrics:
        Receives ``"pushes"`` and ``"pops"`` for every queue operation.

    Returns
    -------
    order:
        list of all vertices such that u precedes v for every edge u->v.
        Zero in-degree vertices are seeded in increasing index order; vertices
        freed later are enqueued in edge insertion order of their predecessor.
        An empty list on a graph with n > 0 means a cycle was found: this is
        reported as a result, not raised.
    """
    if graph is None:
        raise InvalidArgumentError("Graph cannot be None")

    metrics = metrics if metrics is not None else Metrics("topo")
    metrics.start()

    n = graph.n
    indeg = graph.in_degrees()

    queue = deque()
    for v in np.flatnonzero(indeg == 0):
        queue.append(int(v))
        metrics.increment("pushes")

    order: List[int] = []
    while queue:
        u = queue.popleft()
        metrics.increment("pops")
        order.append(u)
        for e in graph.neighbors(u):
            v = e.target
            indeg[v] -= 1
            if indeg[v] == 0:
                queue.append(v)
                metrics.increment("pushes")

    metrics.stop()

    if len(order) != n:
        LOGGER.warning(
            "Cycle detected: %d of %d vertices never reached in-degree 0; no topological order",
            n - len(order), n,
        )
        return []

    LOGGER.debug("topological_sort n=%d ops=%d elapsed_ms=%.3f", n, metrics.counter, metrics.elapsed_ms)
    return order


def is_topological_order(graph: Graph, order: List[int]) -> bool:
    """True when ``order`` is a permutation of the vertices consistent with every edge."""
    n = graph.n
    if len(order) != n:
        return False
    position = np.full(n, -1, dtype=np.int64)
    for i, v in enumerate(order):
        v = int(v)
        if v < 0 or v >= n or position[v] != -1:
            return False
        position[v] = i
    return all(position[e.source] < position[e.target] for e in graph.edges())
