"""Chore storage persisted in a JSON file."""

from __future__ import annotations

import json
import re
import threading
from os import PathLike
from pathlib import Path
from typing import Any

from choretracker.domain import Chore
from choretracker.ports import StorageError

__all__ = ["JsonStore"]

_INT_KEY = re.compile(r"-?\d+", re.ASCII)


def _decode(text: str) -> dict[int, Chore]:
    """Turn the file content into chores keyed by id; raise ``ValueError``."""
    data = json.loads(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("JsonStore data must be an object")
    store = data.get("store")
    if store is None:
        return {}
    if not isinstance(store, dict):
        raise ValueError("'store' must be an object")
    chores: dict[int, Chore] = {}
    for key, value in store.items():
        if not _INT_KEY.fullmatch(key):
            raise ValueError(f"invalid chore key: {key!r}")
        if value is None:
            value = {}
        if not isinstance(value, dict):
            raise ValueError(f"chore {key} must be an object")
        chores[int(key)] = Chore.from_dict(value)
    return chores


def _encode(chores: dict[int, Chore], indent: int | None) -> str:
    store: dict[str, Any] = {
        str(chore_id): chores[chore_id].to_dict()
        for chore_id in sorted(chores, key=str)
    }
    separators = None if indent else (",", ":")
    return json.dumps(
        {"store": store}, indent=indent, separators=separators, ensure_ascii=False
    )


class JsonStore:
    """Thread-safe chore storage backed by a JSON file.

    The file is created, holding an empty store, when it does not exist.
    Every operation reloads the file first, and every change is written
    back at once.
    """

    def __init__(self, path: str | PathLike[str]) -> None:
        self._path = Path(path)
        self._chores: dict[int, Chore] = {}
        self._lock = threading.Lock()
        if self._path.exists():
            try:
                text = self._path.read_text(encoding="utf-8")
            except OSError as exc:
                raise StorageError(f"failed to read JsonStore file: {exc}") from exc
            try:
                self._chores = _decode(text)
            except ValueError as exc:
                raise StorageError(
                    f"failed to unmarshal JsonStore data: {exc}"
                ) from exc
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            pass
        try:
            with open(self._path, "w", encoding="utf-8") as handle:
                handle.write(_encode(self._chores, indent=None))
        except OSError as exc:
            raise StorageError(f"failed to create JsonStore file: {exc}") from exc

    @property
    def path(self) -> Path:
        """Location of the backing JSON file."""
        return self._path

    def _load(self) -> None:
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(
                f"failed to load JsonStore: failed to read JsonStore file: {exc}"
            ) from exc
        try:
            self._chores = _decode(text)
        except ValueError as exc:
            raise StorageError(
                f"failed to load JsonStore: failed to unmarshal JsonStore: {exc}"
            ) from exc

    def _save(self) -> None:
        try:
            self._path.write_text(_encode(self._chores, indent=2), encoding="utf-8")
        except OSError as exc:
            raise StorageError(
                f"failed to save JsonStore: failed to save JsonStore file: {exc}"
            ) from exc

    def create(self, chore: Chore) -> None:
        """Store a new chore; raise :class:`StorageError` if its id is taken."""
        with self._lock:
            self._load()
            if chore.id in self._chores:
                raise StorageError(f"chore {chore.id} already created")
            self._chores[chore.id] = chore
            self._save()

    def update(self, chore: Chore) -> None:
        """Replace a stored chore; raise :class:`StorageError` if it is absent."""
        with self._lock:
            self._load()
            if chore.id not in self._chores:
                raise StorageError(f"chore {chore.id} does not exist")
            self._chores[chore.id] = chore
            self._save()

    def read(self, chore_id: int) -> Chore:
        """Return the chore with ``chore_id``; raise if it is absent."""
        with self._lock:
            self._load()
            try:
                return self._chores[chore_id]
            except KeyError:
                raise StorageError(f"chore {chore_id} does not exist") from None

    def delete(self, chore_id: int) -> None:
        """Remove the chore with ``chore_id``; raise if it is absent."""
        with self._lock:
            self._load()
            if chore_id not in self._chores:
                raise StorageError(f"chore {chore_id} does not exist")
            del self._chores[chore_id]
            self._save()

    def get_all(self) -> list[Chore]:
        """Return every stored chore ordered by id."""
        with self._lock:
            self._load()
            return sorted(self._chores.values(), key=lambda chore: chore.id)