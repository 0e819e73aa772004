from dataclasses import dataclass

import pytest

from feap_ecs.graph import DiGraph
from feap_ecs.node import (
    ConditionWithAccess,
    NodeId,
    SystemKey,
    SystemNode,
    SystemSetKey,
    SystemSets,
    Systems,
    SystemWithAccess,
)


class _Recorder:
    def __init__(self, tag):
        self.tag = tag
        self.worlds = []

    def initialize(self, world):
        self.worlds.append(world)
        return ("access", self.tag)


@dataclass(frozen=True)
class _Set:
    name: str


def test_node_id_kinds():
    sys_id = NodeId(SystemKey(3))
    set_id = NodeId(SystemSetKey(3))
    assert sys_id.is_system()
    assert not set_id.is_system()
    assert sys_id.as_system() == SystemKey(3)
    assert sys_id.as_set() is None
    assert set_id.as_set() == SystemSetKey(3)
    assert set_id.as_system() is None


def test_node_id_rejects_other_keys():
    with pytest.raises(TypeError):
        NodeId(3)


def test_node_id_ordering_puts_systems_first():
    ids = [NodeId(SystemSetKey(1)), NodeId(SystemKey(5)), NodeId(SystemKey(2))]
    assert sorted(ids) == [
        NodeId(SystemKey(2)),
        NodeId(SystemKey(5)),
        NodeId(SystemSetKey(1)),
    ]
    assert NodeId(SystemKey(1)) != NodeId(SystemSetKey(1))


def test_node_id_works_in_graph():
    g = DiGraph()
    a, b = NodeId(SystemKey(1)), NodeId(SystemSetKey(1))
    g.add_edge(a, b)
    assert list(g.neighbors(a)) == [b]
    assert list(g.neighbors(b)) == []


def test_node_id_repr():
    assert repr(NodeId(SystemKey(1))) == "System(1v1)"
    assert repr(NodeId(SystemSetKey(2))) == "Set(2v1)"


def test_with_access_starts_empty():
    assert SystemWithAccess("s").access is None
    assert ConditionWithAccess("c").access is None


def test_systems_insert_and_lookup():
    systems = Systems()
    system = _Recorder("sys")
    cond = _Recorder("cond")
    key = systems.insert(system, [cond])
    other = systems.insert(_Recorder("other"), [])
    assert key != other
    assert len(systems) == 2
    node = systems.node(key)
    assert isinstance(node, SystemNode)
    assert node.inner.system is system
    conditions = systems.get_conditions(key)
    assert [c.condition for c in conditions] == [cond]
    assert systems.get_conditions(other) == []
    assert not systems.is_initialized()


def test_systems_initialize():
    systems = Systems()
    system, cond = _Recorder("sys"), _Recorder("cond")
    key = systems.insert(system, [cond])
    world = object()
    systems.initialize(world)
    assert systems.is_initialized()
    assert systems.node(key).inner.access == ("access", "sys")
    assert systems.get_conditions(key)[0].access == ("access", "cond")
    assert system.worlds == [world]
    systems.initialize(world)
    assert system.worlds == [world]


def test_systems_initialize_skips_taken_out_node():
    systems = Systems()
    system, cond = _Recorder("sys"), _Recorder("cond")
    key = systems.insert(system, [cond])
    systems.node(key).inner = None
    systems.initialize("world")
    assert system.worlds == []
    assert cond.worlds == []
    assert systems.is_initialized()


def test_systems_missing_key():
    systems = Systems()
    assert systems.node(SystemKey(99)) is None
    assert systems.get_conditions(SystemKey(99)) is None


def test_system_sets_dedupe():
    sets = SystemSets()
    a = sets.get_key_or_insert(_Set("a"))
    assert sets.get_key_or_insert(_Set("a")) == a
    b = sets.insert(_Set("b"), [])
    assert a != b
    assert len(sets) == 2
    assert sets.get(a) == _Set("a")
    assert sets[b] == _Set("b")
    assert not sets.has_conditions(a)
    assert sets.is_initialized()


def test_system_sets_missing_key():
    sets = SystemSets()
    assert sets.get(SystemSetKey(7)) is None
    with pytest.raises(KeyError, match="does not exist in the schedule"):
        sets[SystemSetKey(7)]


def test_system_sets_conditions_initialized_incrementally():
    sets = SystemSets()
    first = _Recorder("first")
    key = sets.insert(_Set("a"), [first])
    assert sets.has_conditions(key)
    assert not sets.is_initialized()
    sets.initialize("w1")
    assert sets.is_initialized()
    assert first.worlds == ["w1"]

    second = _Recorder("second")
    assert sets.insert(_Set("a"), [second]) == key
    assert not sets.is_initialized()
    sets.initialize("w2")
    assert first.worlds == ["w1"]
    assert second.worlds == ["w2"]
    assert len(sets) == 1