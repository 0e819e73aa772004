"""Strongly connected components of a directed graph.

Uses Pierce's space-efficient variant of Tarjan's algorithm, written
iteratively so that deep graphs do not exhaust the call stack.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Hashable, Iterator

if TYPE_CHECKING:
    from feap_ecs.graph import Graph


class _TarjanScc:
    """Iteration state for one run of the algorithm."""

    def __init__(self, graph: Graph) -> None:
        self._graph = graph
        self._index = 1
        # Component ids count down from a value above every visitation index.
        self._component_count = sys.maxsize
        self._root: dict[Hashable, int | None] = {}
        self._neighbors: dict[Hashable, list[Hashable]] = {}
        self._cursor: dict[Hashable, int] = {}
        for node in graph.nodes():
            self._root[node] = None
            self._neighbors[node] = list(graph.neighbors(node))
            self._cursor[node] = 0
        self._stack: list[Hashable] = []
        self._visitation: list[tuple[Hashable, bool]] = []

    def __iter__(self) -> Iterator[list[Hashable]]:
        for node in self._graph.nodes():
            if self._root[node] is None:
                self._visitation.append((node, True))
            while self._visitation:
                v, v_is_local_root = self._visitation.pop()
                found = self._visit_once(v, v_is_local_root)
                if found is None:
                    continue
                start, index_adjustment = found
                yield list(self._stack[start:])
                del self._stack[start:]
                self._index -= index_adjustment
                self._component_count -= 1

    def _visit_once(
        self, v: Hashable, v_is_local_root: bool
    ) -> tuple[int, int] | None:
        root = self._root
        if root[v] is None:
            root[v] = self._index
            self._index += 1

        neighbors = self._neighbors[v]
        while self._cursor[v] < len(neighbors):
            w = neighbors[self._cursor[v]]
            if root[w] is None:
                # Visit the neighbour first, then come back to v and look at w again.
                self._visitation.append((v, v_is_local_root))
                self._visitation.append((w, True))
                return None
            if root[w] < root[v]:
                root[v] = root[w]
                v_is_local_root = False
            self._cursor[v] += 1

        if not v_is_local_root:
            # The stack is filled while backtracking.
            self._stack.append(v)
            return None

        index_adjustment = 1
        component = self._component_count
        start = 0
        for position in range(len(self._stack) - 1, -1, -1):
            w = self._stack[position]
            if root[v] > root[w]:
                start = position + 1
                break
            root[w] = component
            index_adjustment += 1
        root[v] = component
        self._stack.append(v)
        return start, index_adjustment


def tarjan_scc(graph: Graph) -> Iterator[list[Hashable]]:
    """Yield the strongly connected components of ``graph``.

    The order of nodes inside a component is arbitrary; the components
    themselves come in postorder, i.e. reverse topological order.
    """
    return iter(_TarjanScc(graph))