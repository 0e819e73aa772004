"""Graphs keyed by hashable, ordered node ids, with O(1) edge lookup."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Hashable, Iterator

from feap_ecs.scc import tarjan_scc


class Direction(IntEnum):
    """Edge direction relative to a node."""

    OUTGOING = 0
    INCOMING = 1

    def opposite(self) -> Direction:
        return Direction.INCOMING if self is Direction.OUTGOING else Direction.OUTGOING


class Graph:
    """A graph stored as an ordered adjacency list plus an edge set.

    Nodes keep their insertion order, except that removing a node moves the
    last node into its place. In an undirected graph an edge between ``a``
    and ``b`` is the same edge as one between ``b`` and ``a``.
    """

    def __init__(self, directed: bool) -> None:
        self.directed = bool(directed)
        self._adjacency: dict[Hashable, list[tuple[Hashable, Direction]]] = {}
        self._order: list[Hashable] = []
        self._positions: dict[Hashable, int] = {}
        self._edges: set[tuple[Hashable, Hashable]] = set()

    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def _edge_key(self, a: Hashable, b: Hashable) -> tuple[Hashable, Hashable]:
        if self.directed or a <= b:
            return (a, b)
        return (b, a)

    def _entry(self, n: Hashable) -> list[tuple[Hashable, Direction]]:
        links = self._adjacency.get(n)
        if links is None:
            links = self._adjacency[n] = []
            self._positions[n] = len(self._order)
            self._order.append(n)
        return links

    def _empty_like(self) -> Graph:
        result = object.__new__(type(self))
        Graph.__init__(result, self.directed)
        return result

    def nodes(self) -> list[Hashable]:
        """Return the nodes in their stored order."""
        return list(self._order)

    def node_count(self) -> int:
        return len(self._order)

    def neighbors(self, a: Hashable) -> Iterator[Hashable]:
        """Yield every node reached by an edge starting from ``a``."""
        for node, direction in self._adjacency.get(a, ()):
            if not self.directed or direction is Direction.OUTGOING:
                yield node

    def neighbors_directed(self, a: Hashable, direction: Direction) -> Iterator[Hashable]:
        """Yield the neighbours of ``a`` joined by an edge in ``direction``."""
        for node, d in self._adjacency.get(a, ()):
            if not self.directed or d is direction or node == a:
                yield node

    def all_edges(self) -> Iterator[tuple[Hashable, Hashable]]:
        """Yield every edge, in arbitrary order."""
        return iter(self._edges)

    def to_index(self, node: Hashable) -> int:
        """Return the position of ``node``; raise KeyError if it is absent."""
        return self._positions[node]

    def convert(self, func: Callable[[Hashable], Hashable]) -> Graph:
        """Return a graph of the same kind with every node mapped by ``func``.

        Any exception raised by ``func`` propagates.
        """
        mapped = {node: func(node) for node in self._order}
        result = self._empty_like()
        for node in self._order:
            links = result._entry(mapped[node])
            links.extend((mapped[other], d) for other, d in self._adjacency[node])
        result._edges = {(mapped[a], mapped[b]) for a, b in self._edges}
        return result

    def add_node(self, n: Hashable) -> None:
        self._entry(n)

    def remove_node(self, n: Hashable) -> None:
        """Remove ``n`` and every edge touching it; do nothing if absent."""
        links = self._adjacency.pop(n, None)
        if links is None:
            return
        position = self._positions.pop(n)
        last = self._order.pop()
        if position < len(self._order):
            self._order[position] = last
            self._positions[last] = position

        for other, direction in links:
            if direction is Direction.OUTGOING:
                edge = self._edge_key(n, other)
            else:
                edge = self._edge_key(other, n)
            back = self._adjacency.get(other)
            if back is not None:
                target = (n, direction.opposite())
                back[:] = [link for link in back if link != target]
            self._edges.discard(edge)

    def add_edge(self, a: Hashable, b: Hashable) -> None:
        """Add an edge from ``a`` to ``b``, adding either node if needed."""
        key = self._edge_key(a, b)
        if key in self._edges:
            return
        self._edges.add(key)
        self._entry(a).append((b, Direction.OUTGOING))
        if a != b:
            # Self loops carry no incoming entry.
            self._entry(b).append((a, Direction.INCOMING))


class DiGraph(Graph):
    """A graph whose edges are directed."""

    def __init__(self) -> None:
        super().__init__(True)

    def iter_sccs(self) -> Iterator[list[Hashable]]:
        """Yield the strongly connected components in reverse topological order."""
        return tarjan_scc(self)


class UnGraph(Graph):
    """A graph whose edges are undirected."""

    def __init__(self) -> None:
        super().__init__(False)