# feap_ecs

Building blocks for the scheduler of an entity component system. The package
is a library; it has no command-line entry point.

## Modules

- `feap_ecs.graph` — `Graph`, `DiGraph` and `UnGraph`: graphs keyed by
  hashable, ordered node ids, with constant-time edge lookup. Nodes keep their
  insertion order; `remove_node` moves the last node into the removed node's
  place. `neighbors`, `neighbors_directed` (with `Direction.OUTGOING` /
  `Direction.INCOMING`), `all_edges`, `to_index` and `convert` (map every
  node through a function) are provided. `DiGraph.iter_sccs()` yields
  strongly connected components.
- `feap_ecs.scc` — `tarjan_scc(graph)`: strongly connected components of a
  directed graph, yielded in reverse topological order. The traversal is
  iterative, so deep graphs do not hit the recursion limit.
- `feap_ecs.analysis` — `check_graph(graph, topological_order)` analyses a
  DAG and returns a `CheckGraphResults` holding the transitive reduction and
  the edges it removed, the transitive closure, the reachability matrix (as a
  set of flat indices, see `index` and `row_col`), and the pairs of nodes that
  are and are not joined by a path. The module also holds the schedule
  metadata types `GraphInfo`, `Dependency`, `DependencyKind`, `Ambiguity`,
  `Dag` and `ReportCycles`.
- `feap_ecs.sparse_set` — `SparseArray` (a growable array of optional values
  indexed by non-negative integers) and `SparseSet` (dense value storage
  addressed through a sparse index, with `get`, `values`, `items` and
  `get_or_insert_with`).
- `feap_ecs.layout` — `Layout` (size and power-of-two alignment),
  `padding_needed_for`, `repeat_layout` and `array_layout` (returning `None`
  when the size overflows a 64-bit word), and `BlobArray`, a fixed-capacity
  item store with an optional drop callback called by `replace`.
- `feap_ecs.node` — `SystemKey`, `SystemSetKey` and `NodeId` (systems order
  before sets), plus the `Systems` and `SystemSets` containers. Both queue new
  entries and call `initialize(world)` on each stored system or condition
  object when their own `initialize(world)` is called, storing the result as
  its `access`.

## Example

```python
from feap_ecs.graph import DiGraph
from feap_ecs.analysis import check_graph

g = DiGraph()
g.add_edge("a", "b")
g.add_edge("b", "c")
g.add_edge("a", "c")

result = check_graph(g, ["a", "b", "c"])
print(result.transitive_edges)   # [('a', 'c')]
print(sorted(g.iter_sccs()))     # [['a'], ['b'], ['c']]
```

## What this package does not do

It does not run anything. There is no schedule, no executor, no system or
system-set types, and no world: `Systems` and `SystemSets` accept any objects
that have an `initialize(world)` method and only store them. Cycle detection
and ordering of a schedule are left to the caller, who can build them from
`DiGraph.iter_sccs()` and `check_graph`.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```