"""Guest-boundary collaborators: out-pointers and the autorelease pool.

OutPointer stands in for a guest memory address that a call may write a
result into. The NULL pointer is a valid argument and turns every write into
a no-op. AutoreleasePool takes ownership of proxy objects handed back to the
guest so the facade never manages their lifetime.
"""

from __future__ import annotations

from typing import Any, TypeVar

T = TypeVar("T")


class OutPointer:
    """Writable guest cell, or the NULL sentinel when is_null is set."""

    __slots__ = ("_is_null", "value")

    def __init__(self, value: Any = None, *, is_null: bool = False) -> None:
        self._is_null = is_null
        self.value = value

    @classmethod
    def null(cls) -> OutPointer:
        return NULL

    @property
    def is_null(self) -> bool:
        return self._is_null

    def write(self, value: Any) -> None:
        """Store value unless this is the NULL pointer."""
        if not self._is_null:
            self.value = value

    def __repr__(self) -> str:
        if self._is_null:
            return "OutPointer(NULL)"
        return f"OutPointer({self.value!r})"


NULL = OutPointer(is_null=True)


class AutoreleasePool:
    """Owner of proxy objects returned across the guest boundary.

    Objects stay alive until the runtime drains the pool. Draining releases
    every reference at once; individual objects are never released early.
    """

    def __init__(self) -> None:
        self._objects: list[Any] = []

    def autorelease(self, obj: T) -> T:
        self._objects.append(obj)
        return obj

    def drain(self) -> int:
        """Release every pending object and return how many were released."""
        count = len(self._objects)
        self._objects.clear()
        return count

    def __contains__(self, obj: object) -> bool:
        return any(item is obj for item in self._objects)

    def __len__(self) -> int:
        return len(self._objects)
