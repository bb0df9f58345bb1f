import logging
from datetime import datetime, timezone

import pytest

from choretracker.cronexpr import must_parse
from choretracker.domain import Chore
from choretracker.dto import (
    ChoreContent,
    CreateRequest,
    DeleteRequest,
    ReadRequest,
    UpdateRequest,
)
from choretracker.memory import InMemoryStorage
from choretracker.services import (
    ServiceError,
    TaskService,
    new_chore,
    update_chore,
    update_notification_time,
)
from choretracker.validator import DefaultValidator

NOW = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
SCHEDULE = "0 9 * * *"


@pytest.fixture
def service():
    return TaskService(
        InMemoryStorage(),
        DefaultValidator(),
        logging.getLogger("test.services"),
        clock=lambda: NOW,
    )


def _create(service, **fields):
    values = {"title": "Dishes", "author": "bob", "schedule": SCHEDULE}
    values.update(fields)
    return service.create_task(CreateRequest(ChoreContent(**values)))


def test_create_stores_chore(service):
    chore = _create(service)
    assert chore.id == int(NOW.timestamp())
    assert chore.opened == NOW
    assert chore.next_notification == must_parse(SCHEDULE).next(NOW)
    assert service.storage.get_all() == [chore]


def test_create_without_title_fails(service, caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(ServiceError, match="^failed to validate chore"):
            _create(service, title=None)
    assert service.storage.get_all() == []
    assert "failed to validate chore" in caplog.text


def test_create_with_bad_schedule_fails(service):
    with pytest.raises(ServiceError, match="schedule is invalid"):
        _create(service, schedule="not a schedule")


def test_duplicate_create_fails(service):
    _create(service)
    with pytest.raises(ServiceError, match="^failed to create chore in storage"):
        _create(service)


@pytest.mark.parametrize("chore_id", [None, 0])
def test_read_without_id(service, chore_id):
    with pytest.raises(ServiceError, match="chore id not provided"):
        service.read_task(ReadRequest(chore_id))


def test_read_missing(service):
    with pytest.raises(ServiceError, match="^failed to read chore from storage"):
        service.read_task(ReadRequest(42))


def test_read_returns_created(service):
    chore = _create(service)
    assert service.read_task(ReadRequest(chore.id)) == chore


def test_update_changes_fields(service):
    chore = _create(service, description="hot water")
    service.update_task(
        UpdateRequest(
            chore.id,
            ChoreContent(title="Laundry", description="null", schedule="30 7 * * *"),
        )
    )
    stored = service.read_task(ReadRequest(chore.id))
    assert stored.title == "Laundry"
    assert stored.description == ""
    assert stored.author == "bob"
    assert stored.next_notification == must_parse("30 7 * * *").next(NOW)


def test_update_invalid_keeps_stored(service):
    chore = _create(service)
    with pytest.raises(ServiceError, match="^failed to validate updated chore"):
        service.update_task(UpdateRequest(chore.id, ChoreContent(schedule="bad")))
    assert service.read_task(ReadRequest(chore.id)).schedule == SCHEDULE


def test_delete_removes(service):
    chore = _create(service)
    service.delete_task(DeleteRequest(chore.id))
    assert service.storage.get_all() == []
    with pytest.raises(ServiceError):
        service.delete_task(DeleteRequest(chore.id))


def test_handle_request_dispatch(service):
    assert service.handle_request(
        CreateRequest(ChoreContent(title="A", author="bob", schedule=SCHEDULE))
    ) is None
    [chore] = service.storage.get_all()
    assert service.handle_request(ReadRequest(chore.id)) == chore
    assert service.handle_request(DeleteRequest(chore.id)) is None
    assert service.storage.get_all() == []


def test_handle_unknown_request(service):
    with pytest.raises(ServiceError, match="request is of unknown type"):
        service.handle_request("nonsense")


def test_new_chore_takes_current_user(monkeypatch):
    monkeypatch.setattr("getpass.getuser", lambda: "alice")
    chore = new_chore(CreateRequest(ChoreContent(title="A")), NOW)
    assert chore.author == "alice"
    assert chore.title == "A"


def test_update_chore_keeps_unset_fields():
    chore = Chore(id=1, title="A", comment="keep")
    update_chore(chore, ChoreContent(title="", comment=None, author="bob"))
    assert (chore.title, chore.comment, chore.author) == ("A", "keep", "bob")


def test_update_notification_time_bad_schedule():
    with pytest.raises(ServiceError, match="failed to parse chore shedule"):
        update_notification_time(Chore(schedule="x"), NOW)