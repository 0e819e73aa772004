"""Memory layouts and a type-erased fixed-capacity item array."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

USIZE_MAX = (1 << 64) - 1


@dataclass(frozen=True)
class Layout:
    """Size and alignment of an item."""

    size: int
    align: int

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError("layout size must not be negative")
        if self.align <= 0 or self.align & (self.align - 1):
            raise ValueError("layout alignment must be a power of two")


def padding_needed_for(layout: Layout, align: int) -> int:
    """Return the padding that rounds ``layout.size`` up to ``align``.

    Arithmetic wraps at the machine word size, so an overflowing round-up
    yields padding that brings the size to zero.
    """
    size = layout.size
    rounded = ((size + align - 1) & USIZE_MAX) & (~(align - 1) & USIZE_MAX)
    return (rounded - size) & USIZE_MAX


def repeat_layout(layout: Layout, n: int) -> Optional[tuple[Layout, int]]:
    """Return the layout of ``n`` padded items and the stride between them.

    Returns None if the total size overflows the machine word.
    """
    padded_size = layout.size + padding_needed_for(layout, layout.align)
    alloc_size = padded_size * n
    if alloc_size > USIZE_MAX:
        return None
    return Layout(alloc_size, layout.align), padded_size


def array_layout(layout: Layout, n: int) -> Optional[Layout]:
    """Return the layout of an array of ``n`` items, or None on overflow."""
    repeated = repeat_layout(layout, n)
    if repeated is None:
        return None
    result, offset = repeated
    if offset != layout.size:
        raise ValueError("layout size must be a multiple of its alignment")
    return result


class BlobArray:
    """Fixed-capacity storage for items sharing one layout.

    The owner tracks which slots are initialised; ``drop``, if given, is
    called with a value whenever it is discarded by :meth:`replace`.
    """

    def __init__(
        self,
        layout: Layout,
        drop: Optional[Callable[[Any], None]],
        capacity: int,
    ) -> None:
        self.layout = layout
        self.drop = drop
        self.capacity = 0
        self._slots: dict[int, Any] = {}
        if capacity:
            self.alloc(capacity)

    def is_zst(self) -> bool:
        """Return True if the items have zero size."""
        return self.layout.size == 0

    def alloc(self, capacity: int) -> None:
        """Reserve ``capacity`` slots in an array that has none yet."""
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if self.capacity != 0:
            raise RuntimeError("array is already allocated")
        if not self.is_zst() and array_layout(self.layout, capacity) is None:
            raise OverflowError("array layout should be valid")
        self.capacity = capacity

    def _check(self, index: int) -> None:
        if not 0 <= index < self.capacity:
            raise IndexError(f"index {index} out of range for capacity {self.capacity}")

    def initialize(self, index: int, value: Any) -> None:
        """Store ``value`` in the slot at ``index`` without dropping anything."""
        self._check(index)
        self._slots[index] = value

    def replace(self, index: int, value: Any) -> None:
        """Store ``value`` at ``index``, dropping the value held there.

        If dropping the old value raises, the new value is dropped too and
        the exception propagates.
        """
        self._check(index)
        drop = self.drop
        if drop is not None and index in self._slots:
            old = self._slots.pop(index)
            try:
                drop(old)
            except BaseException:
                drop(value)
                raise
        self._slots[index] = value

    def get(self, index: int) -> Any:
        """Return the value at ``index``."""
        self._check(index)
        try:
            return self._slots[index]
        except KeyError:
            raise IndexError(f"slot {index} is not initialized") from None