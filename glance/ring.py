"""Fixed-size window over the most recent lines of a stream."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True)
class RingEntry:
    """A buffered line: its number, its text and whether a filter matched it."""

    num: int
    text: str
    matched: bool


class RingBuffer:
    """Keeps the last ``capacity`` lines, handing back the ones pushed out."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._items: deque[RingEntry] = deque()

    def __len__(self) -> int:
        return len(self._items)

    def push(self, num: int, text: str, matched: bool) -> RingEntry | None:
        """Add a line; return the entry it evicted, or None if none was.

        A buffer of capacity zero holds nothing, so the new entry itself
        is handed straight back.
        """
        entry = RingEntry(num, text, matched)
        if self.capacity == 0:
            return entry
        evicted = self._items.popleft() if len(self._items) == self.capacity else None
        self._items.append(entry)
        return evicted

    def entries(self) -> list[RingEntry]:
        """Return the buffered entries, oldest first."""
        return list(self._items)