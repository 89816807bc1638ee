"""Exception types raised by the graph store and the analysis stages."""

from __future__ import annotations


class GraphError(ValueError):
    """Base class for all errors raised by ``scc_dagsp``."""


class InvalidVertexError(GraphError, IndexError):
    """A vertex index outside ``[0, n)`` was passed to a graph operation."""

    def __init__(self, vertex: object, n: int) -> None:
        super().__init__(f"Invalid vertex index {vertex!r} (graph has {n} vertices)")
        self.vertex = vertex
        self.n = n


class InvalidArgumentError(GraphError):
    """Malformed or missing required input."""


class CycleDetectedError(GraphError):
    """A graph expected to be acyclic (a condensation) produced no topological order."""
