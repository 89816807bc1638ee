"""SCC condensation and DAG path analysis of directed weighted graphs.

This package provides:
- an adjacency-set graph store over vertices 0..n-1,
- strongly connected components (iterative Tarjan) and the condensation DAG,
- topological ordering via Kahn's algorithm with cycle detection,
- single-source shortest/longest distances and path reconstruction on the DAG.
"""

from .errors import CycleDetectedError, GraphError, InvalidArgumentError, InvalidVertexError
from .graph import Edge, Graph
from .metrics import Metrics
from .scc import SCCResult, build_condensation, scc_kosaraju, tarjan_scc
from .topo import is_topological_order, topological_sort
from .dag_paths import (
    UNREACHED_LONGEST,
    UNREACHED_SHORTEST,
    critical_path,
    critical_path_length,
    longest_paths,
    reconstruct_path,
    shortest_paths,
)
from .pipeline import PipelineResult, run_pipeline

__all__ = [
    "CycleDetectedError",
    "GraphError",
    "InvalidArgumentError",
    "InvalidVertexError",
    "Edge",
    "Graph",
    "Metrics",
    "SCCResult",
    "build_condensation",
    "scc_kosaraju",
    "tarjan_scc",
    "is_topological_order",
    "topological_sort",
    "UNREACHED_LONGEST",
    "UNREACHED_SHORTEST",
    "critical_path",
    "critical_path_length",
    "longest_paths",
    "reconstruct_path",
    "shortest_paths",
    "PipelineResult",
    "run_pipeline",
]
