"""Turning command-line flags into chore requests."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from choretracker.dto import (
    ChoreContent,
    ChoreIdentity,
    CreateRequest,
    DeleteRequest,
    ReadRequest,
    UpdateRequest,
)
from choretracker.flags import (
    CHORE_AUTHOR,
    CHORE_COMMENT,
    CHORE_DESCRIPTION,
    CHORE_ID,
    CHORE_SCHEDULE,
    CHORE_TITLE,
    Flag,
)

__all__ = [
    "parse_create_request",
    "parse_read_request",
    "parse_update_request",
    "parse_delete_request",
    "parse_content",
    "parse_id",
    "string_or_none",
    "int_or_none",
]

_CONTENT_FIELDS = {
    CHORE_TITLE: "title",
    CHORE_DESCRIPTION: "description",
    CHORE_AUTHOR: "author",
    CHORE_SCHEDULE: "schedule",
    CHORE_COMMENT: "comment",
}


def string_or_none(value: Any) -> str | None:
    """Return ``value`` if it is a non-empty string, else ``None``."""
    return value if isinstance(value, str) and value else None


def int_or_none(value: Any) -> int | None:
    """Return ``value`` if it is a non-zero integer, else ``None``."""
    if isinstance(value, int) and not isinstance(value, bool) and value != 0:
        return value
    return None


def parse_content(flags: Iterable[Flag]) -> ChoreContent:
    """Collect chore content from the flags; later flags win."""
    fields: dict[str, str | None] = {}
    for flag in flags:
        for name in flag.names():
            if name in _CONTENT_FIELDS:
                fields[_CONTENT_FIELDS[name]] = string_or_none(flag.get())
    return ChoreContent(**fields)


def parse_id(flags: Iterable[Flag]) -> ChoreIdentity:
    """Collect the chore id from the flags; later flags win."""
    identity = ChoreIdentity()
    for flag in flags:
        if CHORE_ID in flag.names():
            identity.id = int_or_none(flag.get())
    return identity


def parse_create_request(flags: Iterable[Flag]) -> CreateRequest:
    """Build a create request from the flags."""
    return CreateRequest(content=parse_content(flags))


def parse_read_request(flags: Iterable[Flag]) -> ReadRequest:
    """Build a read request from the flags."""
    return ReadRequest(id=parse_id(flags).id)


def parse_update_request(flags: Iterable[Flag]) -> UpdateRequest:
    """Build an update request from the flags."""
    flags = list(flags)
    return UpdateRequest(id=parse_id(flags).id, content=parse_content(flags))


def parse_delete_request(flags: Iterable[Flag]) -> DeleteRequest:
    """Build a delete request from the flags."""
    return DeleteRequest(id=parse_id(flags).id)