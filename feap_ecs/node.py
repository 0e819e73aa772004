"""Node identifiers and the containers of systems and system sets in a schedule."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any, Iterable, Optional, Union


@dataclass(frozen=True, order=True)
class SystemKey:
    """A unique identifier for a system in a schedule graph."""

    index: int
    version: int = 1

    def __repr__(self) -> str:
        return f"{self.index}v{self.version}"


@dataclass(frozen=True, order=True)
class SystemSetKey:
    """A unique identifier for a system set in a schedule graph."""

    index: int
    version: int = 1

    def __repr__(self) -> str:
        return f"{self.index}v{self.version}"


@total_ordering
@dataclass(frozen=True)
class NodeId:
    """Identifies either a system or a system set.

    Systems order before sets; nodes of the same kind order by key.
    """

    key: Union[SystemKey, SystemSetKey]

    def __post_init__(self) -> None:
        if not isinstance(self.key, (SystemKey, SystemSetKey)):
            raise TypeError(
                f"node key must be a SystemKey or SystemSetKey, got {type(self.key).__name__}"
            )

    def is_system(self) -> bool:
        """Return True if the node is a system."""
        return isinstance(self.key, SystemKey)

    def as_system(self) -> Optional[SystemKey]:
        """Return the system key, or None if the node is a set."""
        return self.key if isinstance(self.key, SystemKey) else None

    def as_set(self) -> Optional[SystemSetKey]:
        """Return the system set key, or None if the node is a system."""
        return self.key if isinstance(self.key, SystemSetKey) else None

    def _sort_key(self) -> tuple[int, int, int]:
        return (0 if self.is_system() else 1, self.key.index, self.key.version)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NodeId):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __repr__(self) -> str:
        kind = "System" if self.is_system() else "Set"
        return f"{kind}({self.key!r})"


@dataclass
class SystemWithAccess:
    """A system stored with the access returned by its initialisation.

    ``access`` is None until the system has been initialised.
    """

    system: Any
    access: Any = None


@dataclass
class ConditionWithAccess:
    """A run condition stored with the access returned by its initialisation.

    ``access`` is None until the condition has been initialised.
    """

    condition: Any
    access: Any = None


@dataclass
class SystemNode:
    """A slot in the schedule graph holding a system, possibly taken out."""

    inner: Optional[SystemWithAccess] = None


class Systems:
    """The systems of a schedule, with their run conditions."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._nodes: dict[SystemKey, SystemNode] = {}
        self._conditions: dict[SystemKey, list[ConditionWithAccess]] = {}
        self._uninit: list[SystemKey] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def insert(self, system: Any, conditions: Iterable[Any]) -> SystemKey:
        """Add a system and its conditions, queued for initialisation."""
        key = SystemKey(next(self._counter))
        self._nodes[key] = SystemNode(SystemWithAccess(system))
        self._conditions[key] = [ConditionWithAccess(c) for c in conditions]
        self._uninit.append(key)
        return key

    def initialize(self, world: Any) -> None:
        """Initialise every system and condition not yet initialised."""
        pending, self._uninit = self._uninit, []
        for key in pending:
            node = self._nodes.get(key)
            entry = node.inner if node is not None else None
            if entry is None:
                continue
            entry.access = entry.system.initialize(world)
            for condition in self._conditions.get(key, ()):
                condition.access = condition.condition.initialize(world)

    def is_initialized(self) -> bool:
        """Return True if nothing is waiting to be initialised."""
        return not self._uninit

    def node(self, key: SystemKey) -> Optional[SystemNode]:
        """Return the node for ``key``, or None."""
        return self._nodes.get(key)

    def get_conditions(self, key: SystemKey) -> Optional[list[ConditionWithAccess]]:
        """Return the conditions of the system with ``key``, or None."""
        return self._conditions.get(key)


@dataclass
class _UninitializedSet:
    key: SystemSetKey
    conditions: range = field(default_factory=lambda: range(0))


class SystemSets:
    """The system sets of a schedule, with their run conditions."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._sets: dict[SystemSetKey, Any] = {}
        self._conditions: dict[SystemSetKey, list[ConditionWithAccess]] = {}
        self._ids: dict[Any, SystemSetKey] = {}
        self._uninit: list[_UninitializedSet] = []

    def __len__(self) -> int:
        return len(self._sets)

    def insert(self, set: Any, new_conditions: Iterable[Any]) -> SystemSetKey:
        """Add conditions to ``set``, adding the set if it is new.

        The newly added conditions are queued for initialisation.
        """
        key = self.get_key_or_insert(set)
        added = [ConditionWithAccess(c) for c in new_conditions]
        if added:
            current = self._conditions[key]
            start = len(current)
            self._uninit.append(_UninitializedSet(key, range(start, start + len(added))))
            current.extend(added)
        return key

    def get(self, key: SystemSetKey) -> Any:
        """Return the set with ``key``, or None."""
        return self._sets.get(key)

    def get_key_or_insert(self, set: Any) -> SystemSetKey:
        """Return the key of ``set``, adding the set if it is new."""
        key = self._ids.get(set)
        if key is None:
            key = SystemSetKey(next(self._counter))
            self._ids[set] = key
            self._sets[key] = set
            self._conditions[key] = []
        return key

    def has_conditions(self, key: SystemSetKey) -> bool:
        """Return True if the set with ``key`` has any conditions."""
        return bool(self._conditions.get(key))

    def initialize(self, world: Any) -> None:
        """Initialise the conditions added since the last initialisation."""
        pending, self._uninit = self._uninit, []
        for uninit in pending:
            conditions = self._conditions.get(uninit.key, [])
            for position in uninit.conditions:
                entry = conditions[position]
                entry.access = entry.condition.initialize(world)

    def is_initialized(self) -> bool:
        """Return True if no set conditions wait for initialisation."""
        return not self._uninit

    def __getitem__(self, key: SystemSetKey) -> Any:
        try:
            return self._sets[key]
        except KeyError:
            raise KeyError(
                f"System set with key {key!r} does not exist in the schedule"
            ) from None