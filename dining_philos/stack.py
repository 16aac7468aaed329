"""A double-ended stack of philosopher indices."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator


class IndexStack:
    """Indices held in order from left (top) to right (bottom)."""

    def __init__(self, items: Iterable[int] = ()) -> None:
        self._items: deque[int] = deque(items)

    def add_left(self, idx: int) -> None:
        """Push *idx* on the left end."""
        self._items.appendleft(idx)

    def add_right(self, idx: int) -> None:
        """Push *idx* on the right end."""
        self._items.append(idx)

    def pop_left(self) -> int | None:
        """Remove and return the leftmost index, or None when empty."""
        return self._items.popleft() if self._items else None

    def pop_right(self) -> int | None:
        """Remove and return the rightmost index, or None when empty."""
        return self._items.pop() if self._items else None

    def swap(self) -> None:
        """Exchange the two leftmost indices; do nothing with fewer than two."""
        if len(self._items) < 2:
            return
        first = self._items.popleft()
        second = self._items.popleft()
        self._items.appendleft(first)
        self._items.appendleft(second)

    def clear(self) -> None:
        """Remove every index."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"IndexStack({list(self._items)!r})"