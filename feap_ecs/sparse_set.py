"""Sparse arrays and sparse sets keyed by small non-negative integers."""

from __future__ import annotations

import operator
from typing import Any, Callable, Generic, Iterator, TypeVar

V = TypeVar("V")


def _sparse_index(index: Any) -> int:
    value = operator.index(index)
    if value < 0:
        raise ValueError(f"sparse index must not be negative, got {value}")
    return value


class SparseArray(Generic[V]):
    """A growable array of optional values indexed by integers."""

    def __init__(self) -> None:
        self._values: list[V | None] = []

    def get(self, index: Any) -> V | None:
        """Return the value at ``index``, or None if there is none."""
        i = _sparse_index(index)
        if i < len(self._values):
            return self._values[i]
        return None

    def insert(self, index: Any, value: V) -> None:
        """Store ``value`` at ``index``, growing the array if needed."""
        i = _sparse_index(index)
        if i >= len(self._values):
            self._values.extend([None] * (i + 1 - len(self._values)))
        self._values[i] = value


class SparseSet(Generic[V]):
    """Dense value storage addressed through a sparse index."""

    def __init__(self) -> None:
        self._dense: list[V] = []
        self._indices: list[Any] = []
        self._sparse: SparseArray[int] = SparseArray()

    def __len__(self) -> int:
        return len(self._dense)

    def __contains__(self, index: Any) -> bool:
        return self._sparse.get(index) is not None

    def get(self, index: Any) -> V | None:
        """Return the value for ``index``, or None if absent."""
        dense_index = self._sparse.get(index)
        if dense_index is None:
            return None
        return self._dense[dense_index]

    def values(self) -> Iterator[V]:
        """Iterate over the stored values in dense order."""
        return iter(self._dense)

    def items(self) -> Iterator[tuple[Any, V]]:
        """Iterate over ``(index, value)`` pairs in dense order."""
        return zip(self._indices, self._dense)

    def get_or_insert_with(self, index: Any, func: Callable[[], V]) -> V:
        """Return the value for ``index``, inserting ``func()`` if absent."""
        dense_index = self._sparse.get(index)
        if dense_index is not None:
            return self._dense[dense_index]
        value = func()
        self._sparse.insert(index, len(self._dense))
        self._indices.append(index)
        self._dense.append(value)
        return value