"""The chore service: creating, reading, updating and deleting chores."""

from __future__ import annotations

import getpass
import os
from collections.abc import Callable
from datetime import datetime

from choretracker.cronexpr import CronSyntaxError, parse
from choretracker.domain import Chore
from choretracker.dto import (
    ChoreContent,
    CreateRequest,
    DeleteRequest,
    ReadRequest,
    UpdateRequest,
)
from choretracker.helpers import set_updated_content
from choretracker.ports import Logger, Storage, StorageError, Validator

__all__ = [
    "ServiceError",
    "TaskService",
    "new_chore",
    "update_chore",
    "update_notification_time",
]


class ServiceError(Exception):
    """Raised when the chore service cannot carry out a request."""


def _now() -> datetime:
    return datetime.now().astimezone()


def new_chore(request: CreateRequest, now: datetime | None = None) -> Chore:
    """Build a chore from a create request, opened at ``now``.

    The id is the Unix time of ``now``. Without an author the name of the
    current user is taken.
    """
    opened = now if now is not None else _now()
    chore = Chore(id=int(opened.timestamp()), opened=opened)
    update_chore(chore, request.content)
    if not chore.author:
        try:
            user = getpass.getuser()
        except (OSError, KeyError, ImportError) as exc:
            raise ServiceError(f"failed to get current username: {exc}") from exc
        chore.author = os.path.basename(user)
    return chore


def update_chore(chore: Chore, content: ChoreContent) -> None:
    """Apply the fields given in ``content`` to ``chore`` in place."""
    chore.title = set_updated_content(chore.title, content.title)
    chore.description = set_updated_content(chore.description, content.description)
    chore.author = set_updated_content(chore.author, content.author)
    chore.schedule = set_updated_content(chore.schedule, content.schedule)
    chore.comment = set_updated_content(chore.comment, content.comment)


def update_notification_time(chore: Chore, now: datetime | None = None) -> None:
    """Set the next notification of ``chore`` from its schedule."""
    try:
        expression = parse(chore.schedule)
    except CronSyntaxError as exc:
        raise ServiceError(f"failed to parse chore shedule: {exc}") from exc
    chore.next_notification = expression.next(now if now is not None else _now())


class TaskService:
    """Carries out chore requests against a storage."""

    def __init__(
        self,
        storage: Storage,
        validator: Validator,
        logger: Logger,
        clock: Callable[[], datetime] = _now,
    ) -> None:
        self.storage = storage
        self.validator = validator
        self.logger = logger
        self.clock = clock

    def _fail(self, msg: str, err: object = None) -> ServiceError:
        self.logger.error(msg)
        return ServiceError(msg if err is None else f"{msg}: {err}")

    def handle_request(
        self, request: CreateRequest | ReadRequest | UpdateRequest | DeleteRequest
    ) -> Chore | None:
        """Dispatch a request; only a read request returns a chore."""
        match request:
            case CreateRequest():
                self.create_task(request)
                return None
            case ReadRequest():
                return self.read_task(request)
            case UpdateRequest():
                self.update_task(request)
                return None
            case DeleteRequest():
                self.delete_task(request)
                return None
        raise self._fail("request is of unknown type")

    def _checked(self, chore: Chore, what: str, now: datetime) -> None:
        try:
            self.validator.validate(chore)
        except ValueError as exc:
            raise self._fail(f"failed to validate {what}", exc) from exc
        try:
            update_notification_time(chore, now)
        except ServiceError as exc:
            raise self._fail("failed to update notification time", exc) from exc

    def create_task(self, request: CreateRequest) -> Chore:
        """Create and store a new chore; return it."""
        now = self.clock()
        try:
            chore = new_chore(request, now)
        except ServiceError as exc:
            raise self._fail("failed to create new chore", exc) from exc
        self._checked(chore, "chore", now)
        try:
            self.storage.create(chore)
        except StorageError as exc:
            raise self._fail("failed to create chore in storage", exc) from exc
        self.logger.info("new chore created: %s", chore.key())
        return chore

    def _load(self, chore_id: int | None) -> Chore:
        if chore_id is None or chore_id == 0:
            raise self._fail("chore id not provided")
        try:
            return self.storage.read(chore_id)
        except StorageError as exc:
            raise self._fail("failed to read chore from storage", exc) from exc

    def read_task(self, request: ReadRequest) -> Chore:
        """Return the chore the request names."""
        return self._load(request.id)

    def update_task(self, request: UpdateRequest) -> Chore:
        """Apply the request's content to a stored chore; return the result."""
        chore = self._load(request.id)
        update_chore(chore, request.content)
        self._checked(chore, "updated chore", self.clock())
        try:
            self.storage.update(chore)
        except StorageError as exc:
            raise self._fail("failed to update chore in storage", exc) from exc
        self.logger.info("chore %s updated", chore.key())
        return chore

    def delete_task(self, request: DeleteRequest) -> None:
        """Remove the chore the request names."""
        chore = self._load(request.id)
        key = chore.key()
        try:
            self.storage.delete(chore.id)
        except StorageError as exc:
            raise self._fail("failed to delete chore", exc) from exc
        self.logger.info("chore %s deleted", key)