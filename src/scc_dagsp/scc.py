from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple
import logging

import numpy as np

from .graph import Edge, Graph
from .metrics import Metrics

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SCCResult:
    """Partition of a graph into strongly connected components.

    Attributes
    ----------
    components:
        components[c] is the list of original vertices in component c.
    component_of:
        np.ndarray of length n mapping vertex -> component index in [0, count-1].
    condensation:
        Graph whose vertex c stands for component c; one unit-weight edge per
        ordered pair of distinct components joined by at least one original edge.
    """

    components: List[List[int]]
    component_of: np.ndarray
    condensation: Graph

    @property
    def count(self) -> int:
        return len(self.components)

    def size_of(self, c: int) -> int:
        return len(self.components[c])

    def component_sizes(self) -> np.ndarray:
        return np.array([len(comp) for comp in self.components], dtype=np.int64)

    def expand_order(self, component_order: Sequence[int]) -> List[int]:
        """Original vertices listed component by component in ``component_order``."""
        out: List[int] = []
        for c in component_order:
            out.extend(self.components[int(c)])
        return out


def build_condensation(graph: Graph, component_of: np.ndarray, count: int) -> Graph:
    """Collapse each component to one vertex; inter-component weights are not kept."""
    dag = Graph(count)
    seen: Set[Tuple[int, int]] = set()
    for u in range(graph.n):
        cu = int(component_of[u])
        for e in graph.neighbors(u):
            cv = int(component_of[e.target])
            if cu != cv and (cu, cv) not in seen:
                seen.add((cu, cv))
                dag.add_edge(cu, cv, 1)
    return dag


def tarjan_scc(graph: Graph, metrics: Optional[Metrics] = None) -> SCCResult:
    """Strongly connected components via Tarjan (single pass, iterative).

    Roots are tried in index order 0..n-1. ``disc`` holds discovery times
    starting at 1, so 0 means undiscovered. The explicit work stack carries
    ``(vertex, next edge position)`` in place of the call stack.

    Components are numbered in the order their roots finish, which is a
    reverse topological order of the condensation. Members of a component
    are listed in pop order, root last.

    Counts ``"dfs_visits"`` per discovered vertex and ``"dfs_edges"`` per
    examined edge.
    """
    metrics = metrics if metrics is not None else Metrics("scc")
    metrics.start()

    n = graph.n
    out_edges: List[Tuple[Edge, ...]] = [tuple(graph.neighbors(u)) for u in range(n)]

    disc = np.zeros(n, dtype=np.int64)
    low = np.zeros(n, dtype=np.int64)
    on_stack = np.zeros(n, dtype=bool)
    comp_id = np.full(n, -1, dtype=np.int64)
    stack: List[int] = []
    comps: List[List[int]] = []
    clock = 0

    for start in range(n):
        if disc[start]:
            continue

        clock += 1
        disc[start] = low[start] = clock
        stack.append(start)
        on_stack[start] = True
        metrics.increment("dfs_visits")
        work = [(start, 0)]

        while work:
            u, idx = work[-1]
            nbrs = out_edges[u]
            if idx < len(nbrs):
                work[-1] = (u, idx + 1)
                v = nbrs[idx].target
                metrics.increment("dfs_edges")
                if disc[v] == 0:
                    clock += 1
                    disc[v] = low[v] = clock
                    stack.append(v)
                    on_stack[v] = True
                    metrics.increment("dfs_visits")
                    work.append((v, 0))
                elif on_stack[v]:
                    low[u] = min(low[u], disc[v])
                continue

            # u is finished: close its component if it is a root, then
            # propagate its low-link to the DFS parent
            work.pop()
            if low[u] == disc[u]:
                cid = len(comps)
                comp: List[int] = []
                while True:
                    w = stack.pop()
                    on_stack[w] = False
                    comp_id[w] = cid
                    comp.append(w)
                    if w == u:
                        break
                comps.append(comp)
            if work:
                parent = work[-1][0]
                low[parent] = min(low[parent], low[u])

    condensation = build_condensation(graph, comp_id, len(comps))
    metrics.stop()

    LOGGER.debug(
        "tarjan_scc n=%d edges=%d components=%d dag_edges=%d ops=%d elapsed_ms=%.3f",
        n, graph.num_edges, len(comps), condensation.num_edges, metrics.counter, metrics.elapsed_ms,
    )
    return SCCResult(components=comps, component_of=comp_id, condensation=condensation)


def _finish_order(graph: Graph) -> List[int]:
    """Vertices in DFS post-order, roots tried in index order."""
    n = graph.n
    seen = np.zeros(n, dtype=bool)
    post: List[int] = []
    for root in range(n):
        if seen[root]:
            continue
        seen[root] = True
        work = [(root, iter(graph.neighbors(root)))]
        while work:
            u, it = work[-1]
            nxt = next((e.target for e in it if not seen[e.target]), None)
            if nxt is None:
                work.pop()
                post.append(u)
            else:
                seen[nxt] = True
                work.append((nxt, iter(graph.neighbors(nxt))))
    return post


def scc_kosaraju(graph: Graph) -> SCCResult:
    """Strongly connected components via Kosaraju (iterative).

    Independent of ``tarjan_scc``; useful as a cross-check. Vertices are
    claimed in reverse post-order by searches over ``graph.transpose()``, so
    components come out in topological order of the condensation.
    """
    rev = graph.transpose()
    comp_id = np.full(graph.n, -1, dtype=np.int64)
    comps: List[List[int]] = []

    for leader in reversed(_finish_order(graph)):
        if comp_id[leader] != -1:
            continue
        cid = len(comps)
        members = [leader]
        comp_id[leader] = cid
        frontier = [leader]
        while frontier:
            for e in rev.neighbors(frontier.pop()):
                if comp_id[e.target] == -1:
                    comp_id[e.target] = cid
                    members.append(e.target)
                    frontier.append(e.target)
        comps.append(members)

    condensation = build_condensation(graph, comp_id, len(comps))
    return SCCResult(components=comps, component_of=comp_id, condensation=condensation)
