from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
import logging
import operator

import numpy as np

from .errors import InvalidVertexError
from .graph import Graph
from .metrics import Metrics

LOGGER = logging.getLogger(__name__)

UNREACHED_SHORTEST = int(np.iinfo(np.int64).max)
UNREACHED_LONGEST = int(np.iinfo(np.int64).min)


def check_vertex(dag: Graph, v: int) -> int:
    """Vertex index of ``v`` in ``dag``; rejects non-integers and out-of-range values."""
    try:
        idx = operator.index(v)
    except TypeError:
        raise InvalidVertexError(v, dag.n) from None
    if not 0 <= idx < dag.n:
        raise InvalidVertexError(v, dag.n)
    return idx


def _checked_sum(du: int, w: int) -> int:
    # Python ints do not wrap; refuse anything that would collide with a sentinel
    cand = du + w
    if cand >= UNREACHED_SHORTEST or cand <= UNREACHED_LONGEST:
        raise OverflowError(f"Path length {du} + {w} exceeds the int64 distance range")
    return cand


def _relax_in_order(
    dag: Graph,
    source: int,
    topo_order: Sequence[int],
    *,
    longest: bool,
    metrics: Optional[Metrics],
) -> np.ndarray:
    metrics = metrics if metrics is not None else Metrics("dag_paths")
    metrics.start()

    n = dag.n
    unreached = UNREACHED_LONGEST if longest else UNREACHED_SHORTEST
    dist = np.full(n, unreached, dtype=np.int64)
    if n == 0:
        metrics.stop()
        return dist

    source = check_vertex(dag, source)
    dist[source] = 0

    for u in topo_order:
        du = int(dist[u])
        if du == unreached:
            continue
        for e in dag.neighbors(u):
            cand = _checked_sum(du, e.weight)
            dv = int(dist[e.target])
            if (cand > dv) if longest else (cand < dv):
                dist[e.target] = cand
                metrics.increment("relaxations")

    metrics.stop()
    LOGGER.debug(
        "%s_paths source=%d n=%d relaxations=%d elapsed_ms=%.3f",
        "longest" if longest else "shortest", source, n, metrics.counter, metrics.elapsed_ms,
    )
    return dist


def shortest_paths(
    dag: Graph,
    source: int,
    topo_order: Sequence[int],
    metrics: Optional[Metrics] = None,
) -> np.ndarray:
    """Single-source shortest distances on a DAG in one topological pass.

    Parameters
    ----------
    dag:
        Acyclic graph; not re-verified.
    source:
        Start vertex in [0, n).
    topo_order:
        Valid topological order of ``dag``; trusted as given.
    metrics:
        Receives one ``"relaxations"`` per improving edge.

    Returns
    -------
    dist: np.ndarray
        int64 array of length n; ``UNREACHED_SHORTEST`` marks unreached vertices.
        Vertices unreached when their turn comes are skipped entirely.
    """
    return _relax_in_order(dag, source, topo_order, longest=False, metrics=metrics)


def longest_paths(
    dag: Graph,
    source: int,
    topo_order: Sequence[int],
    metrics: Optional[Metrics] = None,
) -> np.ndarray:
    """Longest distances; mirror of ``shortest_paths`` with ``UNREACHED_LONGEST``."""
    return _relax_in_order(dag, source, topo_order, longest=True, metrics=metrics)


def reached_mask(dist: np.ndarray) -> np.ndarray:
    return (dist != UNREACHED_SHORTEST) & (dist != UNREACHED_LONGEST)


def reconstruct_path(
    dag: Graph,
    source: int,
    target: int,
    topo_order: Sequence[int],
    longest: bool = False,
    metrics: Optional[Metrics] = None,
) -> List[int]:
    """One optimal path from ``source`` to ``target``, or [] if unreachable.

    Distances are recomputed, then a second topological pass records
    ``parent[v] = u`` for every tight edge (dist[v] == dist[u] + w) out of a
    reached u. Later tight edges overwrite earlier ones, so among several
    optimal predecessors the one processed last in ``topo_order`` wins.
    """
    if dag.n == 0:
        return []
    source = check_vertex(dag, source)
    target = check_vertex(dag, target)

    dist = _relax_in_order(dag, source, topo_order, longest=longest, metrics=metrics)
    unreached = UNREACHED_LONGEST if longest else UNREACHED_SHORTEST

    parent = np.full(dag.n, -1, dtype=np.int64)
    for u in topo_order:
        du = int(dist[u])
        if du == unreached:
            continue
        for e in dag.neighbors(u):
            if int(dist[e.target]) == du + e.weight:
                parent[e.target] = u

    path = [target]
    while parent[path[-1]] != -1:
        path.append(int(parent[path[-1]]))
    if path[-1] != source:
        return []
    path.reverse()
    return path


def critical_path_length(
    dag: Graph,
    source: int,
    topo_order: Sequence[int],
    metrics: Optional[Metrics] = None,
) -> int:
    """Largest finite longest-path distance from ``source``; 0 if nothing is reached."""
    if dag.n == 0:
        return 0
    dist = longest_paths(dag, source, topo_order, metrics=metrics)
    finite = dist[reached_mask(dist)]
    return int(finite.max()) if finite.size else 0


def critical_path(
    dag: Graph,
    source: int,
    topo_order: Sequence[int],
    metrics: Optional[Metrics] = None,
) -> Tuple[int, List[int]]:
    """Critical path length and one path realizing it.

    The end vertex is the reached vertex with the largest longest-distance,
    ties broken by earliest position in ``topo_order``.
    """
    if dag.n == 0:
        return 0, []
    dist = longest_paths(dag, source, topo_order, metrics=metrics)
    end = farthest_vertex(dist, topo_order)
    if end is None:
        return 0, []
    return int(dist[end]), reconstruct_path(dag, source, end, topo_order, longest=True)


def farthest_vertex(longest: np.ndarray, topo_order: Sequence[int]) -> Optional[int]:
    best: Optional[int] = None
    for v in topo_order:
        d = int(longest[v])
        if d == UNREACHED_LONGEST:
            continue
        if best is None or d > int(longest[best]):
            best = int(v)
    return best
