"""Interfaces the chore service depends on."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from choretracker.domain import Chore

__all__ = ["StorageError", "Logger", "Storage", "Validator"]


class StorageError(Exception):
    """Raised when a storage cannot carry out an operation."""


@runtime_checkable
class Logger(Protocol):
    """Leveled logger; ``logging.Logger`` satisfies it."""

    def error(self, msg: str, *args: Any) -> None: ...

    def warning(self, msg: str, *args: Any) -> None: ...

    def info(self, msg: str, *args: Any) -> None: ...

    def debug(self, msg: str, *args: Any) -> None: ...


@runtime_checkable
class Storage(Protocol):
    """Persistence of chores keyed by their id.

    Every method raises :class:`StorageError` when it fails.
    """

    def create(self, chore: Chore) -> None: ...

    def read(self, chore_id: int) -> Chore: ...

    def update(self, chore: Chore) -> None: ...

    def delete(self, chore_id: int) -> None: ...

    def get_all(self) -> list[Chore]: ...


@runtime_checkable
class Validator(Protocol):
    """Checks a chore before it is stored; raises ``ValueError`` if invalid."""

    def validate(self, chore: Chore) -> None: ...