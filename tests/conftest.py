from datetime import date, datetime, time

import pytest

from unievents.event import EventDraft
from unievents.storage import EventDatabase
from unievents.store import EventStore

# every scheduled date used by the tests lies after this moment
FIXED_NOW = datetime(2025, 1, 1, 9, 0)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def events_path(tmp_path):
    return tmp_path / "data" / "events.dat"


@pytest.fixture
def database(events_path):
    return EventDatabase(events_path)


@pytest.fixture
def store(database):
    return EventStore(database, clock=fixed_clock)


@pytest.fixture
def make_draft():
    """Factory for event drafts with sensible defaults."""

    def factory(**overrides) -> EventDraft:
        fields = {
            "name": "Athletics",
            "date": date(2025, 5, 1),
            "time": time(10, 0),
            "venue": "Library",
            "organizer": "Sam",
            "category": None,
            "event_id": None,
        }
        fields.update(overrides)
        return EventDraft(**fields)

    return factory
