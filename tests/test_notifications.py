"""Tests for the upcoming event notifier."""

import threading
from datetime import date, datetime, time

import pytest

from unievents.notifications import UpcomingEventNotifier


class Clock:
    """Clock the tests can move forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return Clock(datetime(2025, 5, 1, 9, 0))


@pytest.fixture
def scheduled_store(store, make_draft):
    store.add_event(make_draft(name="Athletics", time=time(9, 5)))
    store.add_event(make_draft(name="Annual Job & Career Fair", time=time(9, 30)))
    store.add_event(make_draft(name="Inter-Faculty Cultural Night", time=None))
    return store


def test_notifies_events_inside_the_window(scheduled_store, clock):
    seen = []
    notifier = UpcomingEventNotifier(scheduled_store, seen.append, clock=clock)
    notified = notifier.check()
    assert [e.name for e in notified] == ["Athletics"]
    assert [e.name for e in seen] == ["Athletics"]


def test_each_event_is_notified_once(scheduled_store, clock):
    seen = []
    notifier = UpcomingEventNotifier(scheduled_store, seen.append, clock=clock)
    notifier.check()
    clock.now = datetime(2025, 5, 1, 9, 1)
    assert notifier.check() == []
    clock.now = datetime(2025, 5, 1, 9, 25)
    assert [e.name for e in notifier.check()] == ["Annual Job & Career Fair"]
    assert len(seen) == 2


def test_window_includes_its_upper_bound(scheduled_store, clock):
    # 09:30 is exactly ten minutes after 09:20
    clock.now = datetime(2025, 5, 1, 9, 20)
    notifier = UpcomingEventNotifier(scheduled_store, lambda e: None, clock=clock)
    assert [e.name for e in notifier.check()] == ["Annual Job & Career Fair"]


def test_custom_window(scheduled_store, clock):
    notifier = UpcomingEventNotifier(
        scheduled_store, lambda e: None, minutes_before=30, clock=clock
    )
    assert [e.name for e in notifier.check()] == ["Athletics", "Annual Job & Career Fair"]


def test_started_events_are_skipped(scheduled_store, clock):
    clock.now = datetime(2025, 5, 1, 9, 5)
    notifier = UpcomingEventNotifier(scheduled_store, lambda e: None, clock=clock)
    assert notifier.check() == []


def test_disabled_notifier_does_nothing(scheduled_store, clock):
    notifier = UpcomingEventNotifier(scheduled_store, pytest.fail, clock=clock)
    notifier.enabled = False
    assert notifier.check() == []


def test_failing_callback_is_retried(scheduled_store, clock):
    calls = []

    def notify(event):
        calls.append(event.event_id)
        if len(calls) == 1:
            raise RuntimeError("display unavailable")

    notifier = UpcomingEventNotifier(scheduled_store, notify, clock=clock)
    assert notifier.check() == []
    assert [e.name for e in notifier.check()] == ["Athletics"]
    assert len(calls) == 2


def test_background_thread_notifies_and_stops(scheduled_store, clock):
    notified = threading.Event()
    seen = []

    def notify(event):
        seen.append(event)
        notified.set()

    notifier = UpcomingEventNotifier(
        scheduled_store,
        notify,
        interval_seconds=0.01,
        initial_delay_seconds=0,
        clock=clock,
    )
    notifier.start()
    try:
        assert notified.wait(5)
    finally:
        notifier.stop()
    assert not notifier.is_running
    assert [e.name for e in seen] == ["Athletics"]


def test_edits_do_not_renotify(scheduled_store, clock, make_draft):
    notifier = UpcomingEventNotifier(scheduled_store, lambda e: None, clock=clock)
    notifier.check()
    scheduled_store.update_event(
        "EVT-0001", make_draft(name="Athletics", time=time(9, 6), date=date(2025, 5, 1))
    )
    assert notifier.check() == []
