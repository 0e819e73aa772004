"""Schedule graph metadata and analysis of directed acyclic graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Hashable, Sequence

from feap_ecs.graph import DiGraph, Direction


class DependencyKind(IntEnum):
    """What kind of edge a dependency adds to the dependency graph."""

    BEFORE = 0
    AFTER = 1


class Ambiguity(Enum):
    """How ambiguity detection treats a single system."""

    CHECK = "check"


class ReportCycles(Enum):
    """Which kind of cycle is being reported."""

    HIERARCHY = "hierarchy"
    DEPENDENCY = "dependency"


@dataclass
class Dependency:
    """An edge to be added to the dependency graph."""

    kind: DependencyKind
    set: Any
    options: dict[Any, Any] = field(default_factory=dict)


@dataclass
class GraphInfo:
    """How a node fits in the schedule graph."""

    hierarchy: list[Any] = field(default_factory=list)
    dependencies: list[Dependency] = field(default_factory=list)
    ambiguous_with: Ambiguity = Ambiguity.CHECK


@dataclass
class Dag:
    """A directed acyclic graph with a cached topological ordering."""

    graph: DiGraph = field(default_factory=DiGraph)
    topsort: list[Hashable] = field(default_factory=list)


@dataclass
class CheckGraphResults:
    """The results of analysing a DAG with :func:`check_graph`."""

    reachable: set[int] = field(default_factory=set)
    connected: set[tuple[Hashable, Hashable]] = field(default_factory=set)
    disconnected: list[tuple[Hashable, Hashable]] = field(default_factory=list)
    transitive_edges: list[tuple[Hashable, Hashable]] = field(default_factory=list)
    transitive_reduction: DiGraph = field(default_factory=DiGraph)
    transitive_closure: DiGraph = field(default_factory=DiGraph)


def index(row: int, col: int, num_cols: int) -> int:
    """Convert a row-major pair of indices into a flat index."""
    if col >= num_cols:
        raise ValueError(f"column {col} out of range for {num_cols} columns")
    return row * num_cols + col


def row_col(index: int, num_cols: int) -> tuple[int, int]:
    """Convert a flat index into a row-major pair of indices."""
    return divmod(index, num_cols)


def check_graph(graph: DiGraph, topological_order: Sequence[Hashable]) -> CheckGraphResults:
    """Analyse a DAG given one of its topological orderings.

    Computes the transitive reduction (with the removed edges), the
    transitive closure, the reachability matrix as a set of flat indices,
    and the pairs of nodes that are and are not joined by a path.
    """
    if graph.node_count() == 0:
        return CheckGraphResults()

    n = graph.node_count()
    flat = index

    positions: dict[Hashable, int] = {}
    topsorted = DiGraph()
    for i, node in enumerate(topological_order):
        positions[node] = i
        topsorted.add_node(node)
        for pred in graph.neighbors_directed(node, Direction.INCOMING):
            topsorted.add_edge(pred, node)

    results = CheckGraphResults()
    reduction = results.transitive_reduction
    closure = results.transitive_closure
    for node in topsorted.nodes():
        reduction.add_node(node)
        closure.add_node(node)

    for a in reversed(topsorted.nodes()):
        index_a = positions[a]
        visited: set[int] = set()
        for b in topsorted.neighbors_directed(a, Direction.OUTGOING):
            index_b = positions[b]
            if index_b in visited:
                results.transitive_edges.append((a, b))
                continue
            reduction.add_edge(a, b)
            closure.add_edge(a, b)
            results.reachable.add(flat(index_a, index_b, n))
            for c in list(closure.neighbors_directed(b, Direction.OUTGOING)):
                index_c = positions[c]
                if index_c not in visited:
                    visited.add(index_c)
                    closure.add_edge(a, c)
                    results.reachable.add(flat(index_a, index_c, n))

    # The reachability matrix is upper triangular because the nodes were topsorted.
    for i in range(n - 1):
        for k in range(flat(i, i + 1, n), flat(i, n - 1, n) + 1):
            a, b = row_col(k, n)
            pair = (topological_order[a], topological_order[b])
            if k in results.reachable:
                results.connected.add(pair)
            else:
                results.disconnected.append(pair)

    return results