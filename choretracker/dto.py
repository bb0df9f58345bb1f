"""Requests that callers hand to the chore service."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "ChoreIdentity",
    "ChoreContent",
    "CreateRequest",
    "ReadRequest",
    "UpdateRequest",
    "DeleteRequest",
    "unmarshal_create_request",
    "unmarshal_read_request",
    "unmarshal_update_request",
    "unmarshal_delete_request",
]

_CONTENT_FIELDS = ("title", "description", "author", "schedule", "comment")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass
class ChoreIdentity:
    """Identifies a chore; ``None`` means no id was given."""

    id: int | None = None


@dataclass
class ChoreContent:
    """Chore fields to set; ``None`` means the field is left as it is."""

    title: str | None = None
    description: str | None = None
    author: str | None = None
    schedule: str | None = None
    comment: str | None = None


@dataclass
class CreateRequest:
    """Request to create a chore."""

    content: ChoreContent = field(default_factory=ChoreContent)


@dataclass
class ReadRequest:
    """Request to read one chore."""

    id: int | None = None


@dataclass
class UpdateRequest:
    """Request to change the fields of one chore."""

    id: int | None = None
    content: ChoreContent = field(default_factory=ChoreContent)


@dataclass
class DeleteRequest:
    """Request to delete one chore."""

    id: int | None = None


def _decode(data: bytes | str) -> dict[str, Any]:
    try:
        decoded = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid request JSON: {exc}") from exc
    if decoded is None:
        return {}
    if not isinstance(decoded, dict):
        raise ValueError("request JSON must be an object")
    return decoded


def _pick(obj: dict[str, Any], names: tuple[str, ...]) -> dict[str, Any]:
    """Match keys to field names, exactly or ignoring case; later keys win."""
    found: dict[str, Any] = {}
    for key, value in obj.items():
        name = key if key in names else key.lower()
        if name in names:
            found[name] = value
    return found


def _string(value: Any, name: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"request field '{name}' must be a string")


def _int64(value: Any, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"request field '{name}' must be an integer")
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"request field '{name}' is out of range")
    return value


def _content(obj: dict[str, Any]) -> ChoreContent:
    found = _pick(obj, _CONTENT_FIELDS)
    return ChoreContent(
        **{name: _string(found.get(name), name) for name in _CONTENT_FIELDS}
    )


def _identity(obj: dict[str, Any]) -> int | None:
    return _int64(_pick(obj, ("id",)).get("id"), "id")


def unmarshal_create_request(data: bytes | str) -> CreateRequest:
    """Decode a create request from JSON."""
    return CreateRequest(content=_content(_decode(data)))


def unmarshal_read_request(data: bytes | str) -> ReadRequest:
    """Decode a read request from JSON."""
    return ReadRequest(id=_identity(_decode(data)))


def unmarshal_update_request(data: bytes | str) -> UpdateRequest:
    """Decode an update request from JSON."""
    obj = _decode(data)
    return UpdateRequest(id=_identity(obj), content=_content(obj))


def unmarshal_delete_request(data: bytes | str) -> DeleteRequest:
    """Decode a delete request from JSON."""
    return DeleteRequest(id=_identity(_decode(data)))