import pytest

from feap_ecs.analysis import (
    Ambiguity,
    CheckGraphResults,
    Dag,
    Dependency,
    DependencyKind,
    GraphInfo,
    check_graph,
    index,
    row_col,
)
from feap_ecs.graph import DiGraph


def _graph(edges):
    g = DiGraph()
    for a, b in edges:
        g.add_edge(a, b)
    return g


@pytest.mark.parametrize("row,col,cols", [(0, 0, 1), (1, 2, 3), (4, 0, 5), (7, 6, 7)])
def test_index_row_col_round_trip(row, col, cols):
    assert row_col(index(row, col, cols), cols) == (row, col)


def test_index_rejects_column_out_of_range():
    with pytest.raises(ValueError):
        index(0, 3, 3)


def test_empty_graph_gives_empty_results():
    result = check_graph(DiGraph(), [])
    assert result.connected == set()
    assert result.disconnected == []
    assert result.transitive_edges == []
    assert result.transitive_reduction.node_count() == 0


def test_single_node():
    g = DiGraph()
    g.add_node("a")
    result = check_graph(g, ["a"])
    assert result.transitive_reduction.nodes() == ["a"]
    assert result.transitive_closure.nodes() == ["a"]
    assert result.connected == set()
    assert result.disconnected == []


def test_redundant_edge_is_removed():
    g = _graph([("a", "b"), ("b", "c"), ("a", "c")])
    result = check_graph(g, ["a", "b", "c"])
    assert result.transitive_edges == [("a", "c")]
    assert set(result.transitive_reduction.all_edges()) == {("a", "b"), ("b", "c")}
    assert set(result.transitive_closure.all_edges()) == {
        ("a", "b"),
        ("b", "c"),
        ("a", "c"),
    }
    assert result.connected == {("a", "b"), ("a", "c"), ("b", "c")}
    assert result.disconnected == []


def test_chain_closure_adds_transitive_edge():
    g = _graph([("a", "b"), ("b", "c")])
    result = check_graph(g, ["a", "b", "c"])
    assert result.transitive_edges == []
    assert ("a", "c") in set(result.transitive_closure.all_edges())
    assert index(0, 2, 3) in result.reachable
    assert index(1, 0, 3) not in result.reachable


def test_diamond_has_one_disconnected_pair():
    g = _graph([("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")])
    result = check_graph(g, ["a", "b", "c", "d"])
    assert result.disconnected == [("b", "c")]
    assert result.connected == {
        ("a", "b"),
        ("a", "c"),
        ("a", "d"),
        ("b", "d"),
        ("c", "d"),
    }
    assert result.transitive_edges == []


def test_pairs_partition_all_ordered_pairs():
    g = _graph([(1, 2), (3, 4), (2, 4)])
    order = [1, 3, 2, 4]
    result = check_graph(g, order)
    n = len(order)
    assert len(result.connected) + len(result.disconnected) == n * (n - 1) // 2
    assert result.connected.isdisjoint(result.disconnected)


def test_defaults():
    info = GraphInfo()
    assert info.hierarchy == []
    assert info.dependencies == []
    assert info.ambiguous_with is Ambiguity.CHECK
    dag = Dag()
    assert dag.topsort == []
    assert dag.graph.node_count() == 0
    assert CheckGraphResults().reachable == set()


def test_dependency_holds_options():
    dep = Dependency(DependencyKind.AFTER, "set")
    assert dep.options == {}
    assert dep.kind > DependencyKind.BEFORE