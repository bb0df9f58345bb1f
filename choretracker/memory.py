"""Chore storage kept in process memory."""

from __future__ import annotations

import threading
from dataclasses import replace

from choretracker.domain import Chore
from choretracker.ports import StorageError

__all__ = ["InMemoryStorage"]


class InMemoryStorage:
    """Thread-safe storage that holds chores in a dictionary keyed by id.

    Chores are copied on the way in and on the way out, so callers never
    share state with the storage.
    """

    def __init__(self) -> None:
        self._chores: dict[int, Chore] = {}
        self._lock = threading.Lock()

    def create(self, chore: Chore) -> None:
        """Store a new chore; raise :class:`StorageError` if its id is taken."""
        with self._lock:
            if chore.id in self._chores:
                raise StorageError(f"chore {chore.id} already created")
            self._chores[chore.id] = replace(chore)

    def update(self, chore: Chore) -> None:
        """Replace a stored chore; raise :class:`StorageError` if it is absent."""
        with self._lock:
            if chore.id not in self._chores:
                raise StorageError(f"chore {chore.id} does not exist")
            self._chores[chore.id] = replace(chore)

    def read(self, chore_id: int) -> Chore:
        """Return the chore with ``chore_id``; raise if it is absent."""
        with self._lock:
            try:
                return replace(self._chores[chore_id])
            except KeyError:
                raise StorageError(f"chore {chore_id} does not exist") from None

    def delete(self, chore_id: int) -> None:
        """Remove the chore with ``chore_id``; raise if it is absent."""
        with self._lock:
            if chore_id not in self._chores:
                raise StorageError(f"chore {chore_id} does not exist")
            del self._chores[chore_id]

    def get_all(self) -> list[Chore]:
        """Return copies of every stored chore."""
        with self._lock:
            return [replace(chore) for chore in self._chores.values()]