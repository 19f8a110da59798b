from __future__ import annotations

from threading import RLock
from typing import Iterable

from .errors import IdConflictError
from .models import TodoItem


# PUBLIC_INTERFACE
class IdentifierSequence:
    """
    Monotonic counter handing out ids for new todo items.

    Callers either use ``take()`` (read and advance in one step) or read
    ``current`` and then call ``advance()`` exactly once. Issued ids are never
    reused, even after the item carrying them has been removed.
    """

    def __init__(self, start: int = 1) -> None:
        self._lock = RLock()
        self._next = start

    @classmethod
    def after(cls, todos: Iterable[TodoItem]) -> "IdentifierSequence":
        """Build a sequence starting one past the highest id in ``todos``."""
        return cls(max((t.id for t in todos), default=0) + 1)

    @property
    def current(self) -> int:
        """The id the next created item should receive."""
        with self._lock:
            return self._next

    def advance(self) -> int:
        """Move past the current value and return the new current value."""
        with self._lock:
            self._next += 1
            return self._next

    def take(self) -> int:
        """Return the current value and advance, atomically."""
        with self._lock:
            i = self._next
            self._next += 1
            return i

    def claim(self, value: int) -> int:
        """
        Accept an id chosen by the caller and move the sequence past it.

        Raises:
            IdConflictError: if ``value`` is below ``current``, i.e. it has
                already been issued or skipped.
        """
        with self._lock:
            if value < self._next:
                raise IdConflictError(value)
            self._next = value + 1
            return value

    def __repr__(self) -> str:
        return f"IdentifierSequence(current={self._next})"
