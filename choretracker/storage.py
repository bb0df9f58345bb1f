"""Selection of the storage that keeps chores."""

from __future__ import annotations

from enum import Enum

from choretracker.config import Config
from choretracker.jsonstore import JsonStore
from choretracker.memory import InMemoryStorage
from choretracker.ports import Storage

__all__ = ["StorageType", "new_storage"]


class StorageType(str, Enum):
    """Kinds of chore storage."""

    IN_MEMORY = "ims"
    JSON = "js"


def new_storage(storage_type: StorageType | str, config: Config | None) -> Storage:
    """Create a storage of the given type.

    A JSON storage uses ``config.storage_path``. Raises ``ValueError`` for an
    unknown type and :class:`~choretracker.ports.StorageError` when the JSON
    file cannot be opened.
    """
    try:
        kind = StorageType(storage_type)
    except ValueError:
        raise ValueError(f"unknown storage type: {storage_type}") from None
    if kind is StorageType.IN_MEMORY:
        return InMemoryStorage()
    if config is None:
        raise ValueError("a configuration is required for JSON storage")
    return JsonStore(config.storage_path)