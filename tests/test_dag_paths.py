import numpy as np
import pytest

from scc_dagsp.dag_paths import (
    UNREACHED_LONGEST,
    UNREACHED_SHORTEST,
    critical_path,
    critical_path_length,
    longest_paths,
    reconstruct_path,
    shortest_paths,
)
from scc_dagsp.errors import InvalidVertexError
from scc_dagsp.graph import Graph
from scc_dagsp.metrics import Metrics
from scc_dagsp.topo import topological_sort

ORDER5 = [0, 1, 2, 3, 4]


def test_shortest_paths(sample_dag):
    dist = shortest_paths(sample_dag, 0, ORDER5)
    assert dist.dtype == np.int64
    assert dist.tolist() == [0, 2, 3, 9, 6]


def test_longest_paths(sample_dag):
    assert longest_paths(sample_dag, 0, ORDER5).tolist() == [0, 2, 4, 9, 7]


def test_no_further_relaxation_possible(sample_dag):
    short = shortest_paths(sample_dag, 0, ORDER5)
    long_ = longest_paths(sample_dag, 0, ORDER5)
    for e in sample_dag.edges():
        assert short[e.target] <= short[e.source] + e.weight
        assert long_[e.target] >= long_[e.source] + e.weight


def test_reconstruct_shortest_path():
    g = Graph.from_edges(4, [(0, 1, 1), (1, 2, 2), (0, 3, 4)])
    assert reconstruct_path(g, 0, 2, [0, 1, 2, 3]) == [0, 1, 2]


def test_reconstruct_longest_path(sample_dag):
    assert reconstruct_path(sample_dag, 0, 4, ORDER5, longest=True) == [0, 2, 4]
    assert reconstruct_path(sample_dag, 0, 4, ORDER5) == [0, 1, 2, 4]
    assert reconstruct_path(sample_dag, 0, 2, ORDER5, longest=False) == [0, 1, 2]


@pytest.mark.parametrize("longest", [False, True])
def test_path_weight_matches_distance(sample_dag, longest):
    dist = (longest_paths if longest else shortest_paths)(sample_dag, 0, ORDER5)
    for target in range(5):
        path = reconstruct_path(sample_dag, 0, target, ORDER5, longest=longest)
        total = 0
        for u, v in zip(path, path[1:]):
            weights = [e.weight for e in sample_dag.neighbors(u) if e.target == v]
            assert weights
            total += (max if longest else min)(weights)
        assert total == dist[target]


def test_unreachable_vertices():
    g = Graph.from_edges(4, [(1, 2, 3), (0, 3, 1)])
    order = [1, 0, 2, 3]
    short = shortest_paths(g, 0, order)
    long_ = longest_paths(g, 0, order)
    assert short[2] == UNREACHED_SHORTEST
    assert long_[2] == UNREACHED_LONGEST
    assert short[1] == UNREACHED_SHORTEST
    assert reconstruct_path(g, 0, 2, order) == []
    assert reconstruct_path(g, 0, 2, order, longest=True) == []
    assert reconstruct_path(g, 0, 3, order) == [0, 3]


def test_source_to_itself():
    g = Graph.from_edges(3, [(0, 1, 1)])
    assert reconstruct_path(g, 1, 1, [0, 1, 2]) == [1]


def test_unreached_vertex_does_not_relax():
    g = Graph.from_edges(3, [(1, 2, 1), (0, 2, 10)])
    m = Metrics()
    dist = shortest_paths(g, 0, [0, 1, 2], metrics=m)
    assert dist.tolist() == [0, UNREACHED_SHORTEST, 10]
    assert m.counts["relaxations"] == 1


def test_last_tight_predecessor_wins():
    # two equal-length routes into 3: via 1 and via 2
    g = Graph.from_edges(4, [(0, 1, 1), (0, 2, 1), (1, 3, 1), (2, 3, 1)])
    assert reconstruct_path(g, 0, 3, [0, 1, 2, 3]) == [0, 2, 3]
    assert reconstruct_path(g, 0, 3, [0, 2, 1, 3]) == [0, 1, 3]


def test_parallel_edges_pick_best_weight():
    g = Graph.from_edges(2, [(0, 1, 5), (0, 1, 2)])
    assert shortest_paths(g, 0, [0, 1]).tolist() == [0, 2]
    assert longest_paths(g, 0, [0, 1]).tolist() == [0, 5]


def test_single_vertex():
    g = Graph(1)
    assert shortest_paths(g, 0, [0]).tolist() == [0]
    assert longest_paths(g, 0, [0]).tolist() == [0]
    assert critical_path_length(g, 0, [0]) == 0


def test_empty_graph():
    g = Graph(0)
    assert shortest_paths(g, 0, []).shape == (0,)
    assert longest_paths(g, 0, []).shape == (0,)
    assert reconstruct_path(g, 0, 0, []) == []
    assert critical_path_length(g, 0, []) == 0


def test_invalid_source_and_target(sample_dag):
    with pytest.raises(InvalidVertexError):
        shortest_paths(sample_dag, 7, ORDER5)
    with pytest.raises(InvalidVertexError):
        reconstruct_path(sample_dag, 0, -1, ORDER5)


@pytest.mark.parametrize("vertex", [2.7, "1", None])
def test_non_integer_vertices_rejected(sample_dag, vertex):
    with pytest.raises(InvalidVertexError):
        shortest_paths(sample_dag, vertex, ORDER5)
    with pytest.raises(InvalidVertexError):
        reconstruct_path(sample_dag, 0, vertex, ORDER5)


def test_numpy_integer_vertices_accepted(sample_dag):
    assert reconstruct_path(sample_dag, np.int64(0), np.int32(4), ORDER5) == [0, 1, 2, 4]


def test_critical_path(sample_dag):
    assert critical_path_length(sample_dag, 0, ORDER5) == 9
    length, path = critical_path(sample_dag, 0, ORDER5)
    assert length == 9
    assert path == [0, 1, 3]


def test_critical_path_length_from_sink_is_zero(sample_dag):
    assert critical_path_length(sample_dag, 4, ORDER5) == 0


def test_overflow_is_reported_not_wrapped():
    big = int(np.iinfo(np.int64).max) // 2 + 1
    g = Graph.from_edges(3, [(0, 1, big), (1, 2, big)])
    with pytest.raises(OverflowError):
        longest_paths(g, 0, [0, 1, 2])


def test_solver_with_computed_order():
    g = Graph.from_edges(6, [(5, 0, 2), (5, 2, 1), (2, 0, 3), (0, 1, 4), (2, 1, 9), (1, 3, 1)])
    order = topological_sort(g)
    assert shortest_paths(g, 5, order).tolist() == [2, 6, 1, 7, UNREACHED_SHORTEST, 0]
    assert longest_paths(g, 5, order).tolist() == [4, 10, 1, 11, UNREACHED_LONGEST, 0]
    assert reconstruct_path(g, 5, 3, order, longest=True) == [5, 2, 1, 3]
