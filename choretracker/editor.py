"""Interactive editing of chore content on the terminal."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from choretracker.cronexpr import parse
from choretracker.dto import ChoreContent, CreateRequest, UpdateRequest

__all__ = [
    "Ask",
    "validate_schedule",
    "validate_name",
    "edit_content",
    "edit_create_request",
    "edit_update_request",
]

Ask = Callable[[str, str], str]
"""Prompt with a label and the current value; return the answer."""


def validate_schedule(text: str) -> None:
    """Raise ``ValueError`` unless ``text`` is a valid cron expression."""
    parse(text)


def validate_name(text: str) -> None:
    """Raise ``ValueError`` if ``text`` is empty."""
    if text == "":
        raise ValueError("this fileld must not be empty")


_FIELDS: tuple[tuple[str, str, Callable[[str], None] | None], ...] = (
    ("title", "chore title:", validate_name),
    ("description", "description", None),
    (
        "schedule",
        "cron shedule (crontab expression: mm hh dom mon dow)",
        validate_schedule,
    ),
    ("comment", "comments", None),
)


def _console_ask(label: str, current: str) -> str:
    shown = f"{label} [{current}]: " if current else f"{label}: "
    answer = input(shown)
    return answer if answer else current


def _ask_field(
    ask: Ask, label: str, current: str, check: Callable[[str], None] | None
) -> str:
    prompt = label
    while True:
        answer = ask(prompt, current)
        if check is None:
            return answer
        try:
            check(answer)
        except ValueError as exc:
            prompt = f"{label} ({exc})"
            current = answer
        else:
            return answer


def edit_content(content: ChoreContent, ask: Ask | None = None) -> ChoreContent:
    """Ask for title, description, schedule and comment; return the result.

    Invalid answers are asked for again. Raises ``RuntimeError`` when the
    user aborts.
    """
    ask = ask or _console_ask
    values: dict[str, str] = {}
    try:
        for attr, label, check in _FIELDS:
            values[attr] = _ask_field(ask, label, getattr(content, attr) or "", check)
    except (EOFError, KeyboardInterrupt) as exc:
        raise RuntimeError(f"failed to run chore editor form: {exc!r}") from exc
    return replace(content, **values)


def edit_create_request(
    request: CreateRequest, ask: Ask | None = None
) -> CreateRequest:
    """Return a create request whose content the user has edited."""
    try:
        content = edit_content(request.content, ask)
    except RuntimeError as exc:
        raise RuntimeError(f"failed to edit creation request: {exc}") from exc
    return CreateRequest(content=content)


def edit_update_request(
    request: UpdateRequest, ask: Ask | None = None
) -> UpdateRequest:
    """Return an update request whose content the user has edited."""
    try:
        content = edit_content(request.content, ask)
    except RuntimeError as exc:
        raise RuntimeError(f"failed to edit update request: {exc}") from exc
    return UpdateRequest(id=request.id, content=content)