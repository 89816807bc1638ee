import pytest

from scc_dagsp.errors import InvalidArgumentError
from scc_dagsp.graph import Graph
from scc_dagsp.metrics import Metrics
from scc_dagsp.topo import is_topological_order, topological_sort


def test_simple_dag():
    g = Graph.from_edges(4, [(0, 1, 1), (0, 2, 1), (1, 3, 1), (2, 3, 1)])
    order = topological_sort(g)
    assert len(order) == 4
    assert is_topological_order(g, order)
    assert order.index(0) < order.index(3)


def test_cycle_returns_empty(caplog):
    g = Graph.from_edges(3, [(0, 1, 1), (1, 2, 1), (2, 0, 1)])
    with caplog.at_level("WARNING"):
        assert topological_sort(g) == []
    assert "Cycle detected" in caplog.text


def test_self_loop_is_a_cycle():
    g = Graph.from_edges(2, [(0, 1, 1), (1, 1, 1)])
    assert topological_sort(g) == []


def test_disconnected_dag():
    g = Graph.from_edges(3, [(0, 1, 1)])
    order = topological_sort(g)
    assert sorted(order) == [0, 1, 2]
    assert order.index(0) < order.index(1)


def test_empty_graph():
    assert topological_sort(Graph(0)) == []


def test_single_vertex():
    assert topological_sort(Graph(1)) == [0]


def test_none_graph_rejected():
    with pytest.raises(InvalidArgumentError):
        topological_sort(None)


def test_seeds_in_index_order_and_successors_in_insertion_order():
    g = Graph(5)
    g.add_edge(1, 4, 1)
    g.add_edge(1, 2, 1)
    g.add_edge(0, 3, 1)
    assert topological_sort(g) == [0, 1, 3, 4, 2]


def test_metrics_count_pushes_and_pops():
    g = Graph.from_edges(3, [(0, 1, 1), (1, 2, 1)])
    m = Metrics()
    topological_sort(g, metrics=m)
    assert m.counts["pushes"] == 3
    assert m.counts["pops"] == 3


def test_is_topological_order_rejects_bad_orders():
    g = Graph.from_edges(3, [(0, 1, 1), (1, 2, 1)])
    assert is_topological_order(g, [0, 1, 2])
    assert not is_topological_order(g, [1, 0, 2])
    assert not is_topological_order(g, [0, 1])
    assert not is_topological_order(g, [0, 0, 2])
