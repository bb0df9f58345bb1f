"""The ``choretracker`` command: adding, showing, updating and deleting chores."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from dataclasses import replace

from choretracker.appcontext import AppContext, init_cli
from choretracker.config import (
    ADD_COMMAND,
    APP_NAME,
    DELETE_COMMAND,
    GET_COMMAND,
    UPDATE_COMMAND,
)
from choretracker.domain import Chore
from choretracker.dto import ChoreContent
from choretracker.editor import Ask, edit_content, edit_create_request
from choretracker.flags import (
    AUTHOR,
    COMMENT,
    DESCRIPTION,
    ID,
    SCHEDULE,
    TITLE,
    TUI,
    Flag,
)
from choretracker.jsonstore import JsonStore
from choretracker.parser import parse_create_request
from choretracker.ports import StorageError
from choretracker.services import ServiceError, TaskService, update_notification_time
from choretracker.storage import StorageType, new_storage

__all__ = ["CliError", "build_parser", "run", "main"]

_CONTENT_FLAGS = (TITLE, DESCRIPTION, AUTHOR, SCHEDULE, COMMENT)


class CliError(Exception):
    """Raised when a command fails."""


def _add_content_options(parser: argparse.ArgumentParser) -> None:
    for flag in _CONTENT_FLAGS:
        parser.add_argument(
            f"--{flag.name}",
            *(f"-{alias}" for alias in flag.aliases),
            dest=flag.name,
            default=flag.value,
            help=flag.usage,
        )


def _add_id_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        f"--{ID.name}",
        *(f"-{alias}" for alias in ID.aliases),
        dest=ID.name,
        type=int,
        default=ID.value,
        help=ID.usage,
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser of the command and its subcommands."""
    parser = argparse.ArgumentParser(prog=APP_NAME)
    parser.add_argument(f"--{TUI.name}", dest=TUI.name, action="store_true", help=TUI.usage)
    commands = parser.add_subparsers(dest="command")

    add = commands.add_parser(
        ADD_COMMAND,
        help="add new chore",
        usage=f"{APP_NAME} [global options] add [options]",
    )
    _add_content_options(add)

    get = commands.add_parser(
        GET_COMMAND,
        help="get chore data",
        usage=f"{APP_NAME} [global options] get [options]",
    )
    _add_id_option(get)

    update = commands.add_parser(
        UPDATE_COMMAND,
        help="update chore data",
        usage=f"{APP_NAME} [global options] update [options]",
    )
    _add_id_option(update)
    _add_content_options(update)

    delete = commands.add_parser(
        DELETE_COMMAND,
        help="delete chore",
        usage=f"{APP_NAME} [global options] delete [options]",
    )
    _add_id_option(delete)
    return parser


def _flags(args: argparse.Namespace) -> list[Flag]:
    return [
        replace(flag, value=getattr(args, flag.name))
        for flag in (ID, *_CONTENT_FLAGS)
        if hasattr(args, flag.name)
    ]


def _console_ask(label: str, current: str) -> str:
    return input(f"{label}: ")


def _open_store(actx: AppContext) -> JsonStore:
    try:
        return JsonStore(actx.config.storage_path)
    except StorageError as exc:
        raise CliError("failed to open persistent storage") from exc


def _select_chore(store: JsonStore, ask: Ask | None) -> Chore:
    try:
        chores = store.get_all()
    except StorageError as exc:
        raise CliError(f"failed to get chore list from storage: {exc}") from exc
    if not chores:
        raise CliError("chore search failed: no chores in storage")
    labels = [f"{ch.title} (id: {ch.id}) {ch.description}" for ch in chores]
    for label in labels:
        print(label)
    try:
        answer = (ask or _console_ask)("select chore", "").strip()
    except (EOFError, KeyboardInterrupt) as exc:
        raise CliError(f"chore search failed: {exc!r}") from exc
    for chore in chores:
        if answer == str(chore.id):
            return chore
    needle = answer.lower()
    found = [ch for ch, label in zip(chores, labels) if needle and needle in label.lower()]
    if len(found) != 1:
        reason = "no chore matches" if not found else "several chores match"
        raise CliError(f"chore search failed: {reason} '{answer}'")
    return found[0]


def _read_chore(store: JsonStore, chore_id: int) -> Chore:
    if chore_id == 0:
        raise CliError("chore id is not set\nuse 'id' option to set chore id")
    try:
        return store.read(chore_id)
    except StorageError as exc:
        raise CliError(f"failed to read chore: {exc}") from exc


def _get_chore(args: argparse.Namespace, store: JsonStore, ask: Ask | None) -> Chore:
    try:
        if args.cli:
            return _read_chore(store, args.id)
        return _select_chore(store, ask)
    except CliError as exc:
        raise CliError(f"failed to get chore data: {exc}") from exc


def _start(actx: AppContext, args: argparse.Namespace, ask: Ask | None) -> None:
    print("start Start action")


def _add(actx: AppContext, args: argparse.Namespace, ask: Ask | None) -> None:
    logger = actx.logger
    try:
        store = new_storage(StorageType.JSON, actx.config)
    except (StorageError, ValueError) as exc:
        logger.error("failed to setup storage")
        raise CliError(f"failed to setup storage: {exc}") from exc
    service = TaskService(store, actx.validator, logger)

    request = parse_create_request(_flags(args))
    if not args.cli:
        try:
            request = edit_create_request(request, ask)
        except RuntimeError as exc:
            logger.error("failed to edit request")
            raise CliError(f"failed to edit request: {exc}") from exc

    try:
        chore = service.create_task(request)
    except ServiceError as exc:
        logger.error("task failed: %s", exc)
        raise CliError(str(exc)) from exc
    if not args.cli:
        print(chore, file=sys.stderr)


def _get(actx: AppContext, args: argparse.Namespace, ask: Ask | None) -> None:
    store = _open_store(actx)
    print(_get_chore(args, store, ask))


def _inject_from_flags(args: argparse.Namespace, chore: Chore) -> None:
    for attr in ("title", "description", "schedule", "comment", "author"):
        value = getattr(args, attr)
        if value:
            setattr(chore, attr, value)


def _edit_chore(chore: Chore, ask: Ask | None) -> None:
    content = ChoreContent(
        title=chore.title,
        description=chore.description,
        schedule=chore.schedule,
        comment=chore.comment,
    )
    edited = edit_content(content, ask)
    chore.title = edited.title or ""
    chore.description = edited.description or ""
    chore.schedule = edited.schedule or ""
    chore.comment = edited.comment or ""


def _update(actx: AppContext, args: argparse.Namespace, ask: Ask | None) -> None:
    store = _open_store(actx)
    chore = _get_chore(args, store, ask)

    _inject_from_flags(args, chore)
    if not args.cli:
        try:
            _edit_chore(chore, ask)
        except RuntimeError as exc:
            raise CliError(
                f"failed to update chore data: failed to edit chore: {exc}"
            ) from exc

    try:
        actx.validator.validate(chore)
        update_notification_time(chore)
    except (ValueError, ServiceError) as exc:
        raise CliError(f"failed to validate updated chore: {exc}") from exc
    try:
        store.update(chore)
    except StorageError as exc:
        raise CliError(f"failed to update chore: {exc}") from exc


def _delete(actx: AppContext, args: argparse.Namespace, ask: Ask | None) -> None:
    store = _open_store(actx)
    chore = _get_chore(args, store, ask)
    try:
        store.delete(chore.id)
    except StorageError as exc:
        raise CliError(f"failed to delete chore: {exc}") from exc


_Action = Callable[[AppContext, argparse.Namespace, "Ask | None"], None]

_ACTIONS: dict[str | None, _Action] = {
    None: _start,
    ADD_COMMAND: _add,
    GET_COMMAND: _get,
    UPDATE_COMMAND: _update,
    DELETE_COMMAND: _delete,
}


def run(
    actx: AppContext, argv: Sequence[str] | None = None, ask: Ask | None = None
) -> int:
    """Parse ``argv`` (without the program name) and carry out the command.

    ``ask`` answers interactive prompts; it defaults to the console. Raises
    :class:`CliError` when the command fails.
    """
    args = build_parser().parse_args(list(argv) if argv is not None else sys.argv[1:])
    _ACTIONS[args.command](actx, args, ask)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``choretracker`` command; returns the exit status."""
    try:
        actx = init_cli(APP_NAME)
    except (OSError, ValueError) as exc:
        print(f"initiation: {exc}", file=sys.stderr)
        return 1
    try:
        return run(actx, argv)
    except CliError as exc:
        print(f"{APP_NAME} run error: {exc}", file=sys.stderr)
        return 1
    except SystemExit as exc:
        if exc.code is None:
            return 0
        return exc.code if isinstance(exc.code, int) else 1
    finally:
        actx.close()


if __name__ == "__main__":
    sys.exit(main())