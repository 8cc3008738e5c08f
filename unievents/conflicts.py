"""Lookups and collision checks over the in-memory event list."""

from collections import defaultdict
from datetime import date, time
from typing import Iterable

from unievents.event import Event


def _same_text(a: str | None, b: str | None) -> bool:
    return (a or "").casefold() == (b or "").casefold()


def find_by_id(events: Iterable[Event], event_id: str) -> Event | None:
    """Returns the event with this id (case-insensitive), if any."""
    return next((e for e in events if _same_text(e.event_id, event_id)), None)


def find_by_name(events: Iterable[Event], name: str) -> Event | None:
    """Returns the event with this name (case-insensitive), if any."""
    return next((e for e in events if _same_text(e.name, name)), None)


def has_scheduling_clash(
    events: Iterable[Event],
    exclude_id: str | None,
    event_date: date,
    event_time: time | None,
    venue: str,
) -> bool:
    """
    Checks whether another event occupies the same date, time, and venue.

    Dates must be equal and venues equal ignoring case. Times must be equal,
    where two events without a time count as equal but an event with a time
    never matches one without.

    Args:
        events (Iterable[Event]): Events to scan.
        exclude_id (str | None): Id of the event being edited, so it does not clash with itself.
        event_date (date): Candidate date.
        event_time (time | None): Candidate time.
        venue (str): Candidate venue.

    Returns:
        bool: True if any other event clashes.
    """
    for e in events:
        if exclude_id is not None and _same_text(e.event_id, exclude_id):
            continue
        if e.date == event_date and e.time == event_time and _same_text(e.venue, venue):
            return True
    return False


def next_free_name(events: Iterable[Event], base: str) -> str:
    """
    Appends " (N)" to a name, with N starting at 2 and counting up until unused.
    """
    events = list(events)
    suffix = 2
    while find_by_name(events, f"{base} ({suffix})") is not None:
        suffix += 1
    return f"{base} ({suffix})"


def venue_clashes(events: Iterable[Event]) -> list[list[Event]]:
    """
    Groups events booked at the same venue on the same date, ignoring time.

    Used by the statistics report to flag busy venues; only groups with more
    than one event are returned, in first-seen order.
    """
    groups: dict[tuple, list[Event]] = defaultdict(list)
    for e in events:
        groups[(e.date, e.venue.casefold())].append(e)
    return [group for group in groups.values() if len(group) > 1]
