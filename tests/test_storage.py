"""Tests for the event file."""

import collections
import pickle
from datetime import date, time

import pytest

from unievents.errors import BootstrapError, ErrorCode, PersistenceError
from unievents.event import Event
from unievents.participant import Participant, ParticipantType
from unievents.storage import EventDatabase
from unievents.store import EventStore


def sample_events():
    return [
        Event(
            event_id="EVT-0001",
            name="Athletics",
            date=date(2025, 5, 1),
            time=time(10, 0),
            venue="Library",
            organizer="Sam",
            category="Sports",
            participants=[
                Participant("PAR-00001", "Jane Doe", ParticipantType.STUDENT),
                Participant("PAR-00002", "John Roe", ParticipantType.STAFF),
            ],
        ),
        # no time set and nobody registered
        Event(
            event_id="EVT-0002",
            name="Campus Art & Creative Expo",
            date=date(2025, 6, 3),
            time=None,
            venue="Gallery",
            organizer="Ruben",
            category="Exhibition",
        ),
    ]


class TestBootstrap:
    def test_fresh_store_loads_empty(self, tmp_path):
        path = tmp_path / "data" / "events.dat"
        database = EventDatabase(path)
        assert path.exists()
        assert database.load() == []

    def test_existing_file_is_not_overwritten(self, events_path):
        EventDatabase(events_path).save(sample_events())
        assert EventDatabase(events_path).load() == sample_events()

    def test_unusable_location_raises_bootstrap_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(BootstrapError) as exc_info:
            EventDatabase(blocker / "events.dat")
        assert exc_info.value.code is ErrorCode.BOOTSTRAP_FAILED


class TestRoundTrip:
    def test_save_then_load_returns_equal_events(self, database):
        events = sample_events()
        database.save(events)
        loaded = database.load()
        assert loaded == events
        assert loaded[1].time is None
        assert loaded[1].participants == []
        assert loaded[0].participants[1].participant_type is ParticipantType.STAFF

    def test_save_replaces_previous_contents(self, database):
        database.save(sample_events())
        database.save(sample_events()[:1])
        assert [e.event_id for e in database.load()] == ["EVT-0001"]

    def test_no_temporary_files_left_behind(self, database, events_path):
        database.save(sample_events())
        assert [p.name for p in events_path.parent.iterdir()] == ["events.dat"]


class TestUnreadableFiles:
    """An unreadable file loads as an empty list instead of failing."""

    def test_empty_file(self, database, events_path):
        events_path.write_bytes(b"")
        assert database.load() == []

    def test_garbage_bytes(self, database, events_path):
        events_path.write_bytes(b"\x00not a pickle at all")
        assert database.load() == []

    def test_unexpected_class_is_refused(self, database, events_path):
        events_path.write_bytes(pickle.dumps(collections.OrderedDict(a=1)))
        assert database.load() == []

    def test_list_of_other_values(self, database, events_path):
        events_path.write_bytes(pickle.dumps(["EVT-0001"]))
        assert database.load() == []

    def test_missing_file(self, database, events_path):
        events_path.unlink()
        assert database.load() == []

    def test_truncated_file(self, database, events_path):
        database.save(sample_events())
        data = events_path.read_bytes()
        events_path.write_bytes(data[: len(data) // 2])
        assert database.load() == []

    def test_oversized_length_field(self, database, events_path):
        # a corrupted length prefix on a bytes record overflows the unpickler
        events_path.write_bytes(b"\x80\x04\x8e" + (2**64 - 1).to_bytes(8, "little"))
        assert database.load() == []

    def test_out_of_memory_while_reading(self, database, events_path, monkeypatch):
        def exhausted(_self):
            raise MemoryError()

        database.save(sample_events())
        monkeypatch.setattr("unievents.storage.EventUnpickler.load", exhausted)
        assert database.load() == []

    def test_event_with_wrong_field_types(self, database, events_path):
        events = sample_events()
        events[1].date = "2025-06-03"
        database.save(events)
        assert database.load() == []
        # the store starts empty instead of failing to sort the bad record
        assert EventStore(database).events == []

    def test_participant_with_wrong_type(self, database):
        events = sample_events()
        events[0].participants.append(Participant("PAR-00003", "Ann Poe", "STUDENT"))
        database.save(events)
        assert database.load() == []


def test_save_failure_raises_persistence_error(database, events_path, monkeypatch):
    # simulate a failing disk by making the atomic replace fail
    def failing_replace(*_args):
        raise OSError("disk full")

    database.save(sample_events())
    monkeypatch.setattr("unievents.storage.os.replace", failing_replace)
    with pytest.raises(PersistenceError) as exc_info:
        database.save([])
    assert exc_info.value.code is ErrorCode.PERSISTENCE_FAILED
    monkeypatch.undo()
    # previous contents survive and the temporary file is cleaned up
    assert database.load() == sample_events()
    assert [p.name for p in events_path.parent.iterdir()] == ["events.dat"]
