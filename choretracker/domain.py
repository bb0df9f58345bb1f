"""The chore, the central record of the tracker."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

__all__ = ["Chore"]

_ZERO_TIME = "0001-01-01T00:00:00Z"
_ZERO_DISPLAY = "0001-01-01 00:00:00"
_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"
_LONG_FRACTION = re.compile(r"(\.\d{6})\d+")


def _format_time(value: datetime | None) -> str:
    if value is None:
        return _ZERO_TIME
    if value.tzinfo is None:
        value = value.astimezone()
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def _parse_time(text: Any) -> datetime | None:
    if text is None or text == "" or text == _ZERO_TIME:
        return None
    if not isinstance(text, str):
        raise ValueError(f"invalid time value: {text!r}")
    normal = _LONG_FRACTION.sub(r"\1", text)
    if normal.endswith(("Z", "z")):
        normal = normal[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(normal)
    except ValueError as exc:
        raise ValueError(f"invalid time value: {text!r}") from exc


def _display(value: datetime | None) -> str:
    return _ZERO_DISPLAY if value is None else value.strftime(_DISPLAY_FORMAT)


@dataclass
class Chore:
    """A recurring chore with its cron schedule.

    ``None`` in a time field stands for a time that was never set.
    """

    id: int = 0
    title: str = ""
    description: str = ""
    author: str = ""
    opened: datetime | None = None
    next_notification: datetime | None = None
    schedule: str = ""
    comment: str = ""

    def key(self) -> str:
        """Short label naming the chore and its id."""
        return f"{self.title} (id={self.id})"

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the chore."""
        data: dict[str, Any] = {"id": self.id, "title": self.title}
        if self.description:
            data["description"] = self.description
        data["author"] = self.author
        data["opened"] = _format_time(self.opened)
        data["next notification"] = _format_time(self.next_notification)
        data["schedule"] = self.schedule
        if self.comment:
            data["comment"] = self.comment
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Chore:
        """Build a chore from its JSON form; absent keys take empty values."""
        try:
            chore_id = int(data.get("id", 0))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid chore id: {data.get('id')!r}") from exc
        return cls(
            id=chore_id,
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            author=str(data.get("author", "")),
            opened=_parse_time(data.get("opened")),
            next_notification=_parse_time(data.get("next notification")),
            schedule=str(data.get("schedule", "")),
            comment=str(data.get("comment", "")),
        )

    def __str__(self) -> str:
        lines = [
            f"chore: {self.title}\n",
            f"ID: {self.id}\n",
            f"started: {_display(self.opened)}\n",
        ]
        if self.description:
            lines.append(f"description: {self.description}\n")
        lines.append(f"shedule: {self.schedule}\n")
        lines.append(f"next trigger time: {_display(self.next_notification)}\n")
        if self.comment:
            lines.append(f"comment: \n{self.comment}")
        return "".join(lines)