"""Selection cursor over a list that may change size under it."""

from typing import Optional, Sized


class Cursor:
    """Row index kept in ``[0, len(items)]``.

    ``len(items)`` itself means "past the end": nothing selected. The cursor
    only holds a reference for ``len()``; owners call :meth:`clamp` after
    every structural change to the list.
    """

    def __init__(self, items: Sized, index: int = 0):
        self._items = items
        self._index = 0
        self.set(index)

    @property
    def index(self) -> int:
        return self._index

    @property
    def selected(self) -> Optional[int]:
        return self._index if self._index < len(self._items) else None

    def set(self, index: int) -> int:
        self._index = max(0, min(index, len(self._items)))
        return self._index

    def clamp(self) -> int:
        return self.set(self._index)

    def move_relative(self, delta: int) -> int:
        return self.set(self._index + delta)

    def move_to_start(self) -> int:
        return self.set(0)

    def move_to_end(self) -> int:
        return self.set(max(len(self._items) - 1, 0))

    def set_priority(self, slot: int) -> int:
        return self.set(slot)


__all__ = ["Cursor"]
