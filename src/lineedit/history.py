"""Bounded history of submitted lines with up/down navigation."""

from __future__ import annotations

from typing import Iterator

DEFAULT_CAPACITY = 100


class History:
    """Most-recent-first list of submitted lines.

    ``cursor`` is ``-1`` while the user edits live input, otherwise it is
    the index of the entry currently loaded into the line buffer.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"history capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: list[str] = []
        self._cursor: int = -1

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def browsing(self) -> bool:
        return self._cursor >= 0

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> str:
        return self._entries[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def push(self, line: str) -> None:
        """Store *line* as the most recent entry, evicting the oldest."""
        self._entries.insert(0, line)
        if len(self._entries) > self._capacity:
            self._entries.pop()
        self._cursor = -1

    def reset(self) -> None:
        """Leave history browsing mode."""
        self._cursor = -1

    def older(self) -> str | None:
        """Step to the next older entry and return it.

        Returns ``None`` (and leaves the cursor alone) when already at the
        oldest entry.
        """
        if self._cursor + 1 >= len(self._entries):
            return None
        self._cursor += 1
        return self._entries[self._cursor]

    def newer(self) -> str | None:
        """Step to the next newer entry and return it.

        Stepping past the most recent entry returns ``""``, meaning the
        live buffer should be emptied. Returns ``None`` when not browsing.
        """
        if self._cursor < 0:
            return None
        self._cursor -= 1
        if self._cursor < 0:
            return ""
        return self._entries[self._cursor]
