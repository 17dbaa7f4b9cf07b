"""Snapshot directory enumerator returned by FileManager.enumerator_at_path."""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class EnumeratorState(str, Enum):
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


class DirectoryEnumerator:
    """Pull-based cursor over a listing captured at creation time.

    Entries added to the directory after creation are never observed. Once
    the last entry has been handed out the enumerator is exhausted and every
    further call to next_object() returns None.

    Attributes:
        state: ACTIVE while entries remain, EXHAUSTED afterwards
    """

    __slots__ = ("_entries", "_cursor", "_state")

    def __init__(self, entries: Iterable[str]) -> None:
        self._entries: tuple[str, ...] = tuple(entries)
        self._cursor = 0
        self._state = EnumeratorState.ACTIVE

    @property
    def state(self) -> EnumeratorState:
        return self._state

    def next_object(self) -> str | None:
        """Return the next relative path, or None once exhausted."""
        if self._cursor >= len(self._entries):
            self._state = EnumeratorState.EXHAUSTED
            return None

        entry = self._entries[self._cursor]
        self._cursor += 1
        if self._cursor == len(self._entries):
            self._state = EnumeratorState.EXHAUSTED
        return entry

    def __repr__(self) -> str:
        return (
            f"DirectoryEnumerator(state={self._state.value}, "
            f"remaining={len(self._entries) - self._cursor})"
        )
