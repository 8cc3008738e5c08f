"""Identifier allocation for events and participants.

Identifiers are human readable (``EVT-0001``, ``PAR-00001``). The next
number is always recomputed from the identifiers currently in the store,
so there is no counter that can drift from the stored data.
"""

import re
from typing import Iterable

EVENT_PREFIX = "EVT-"
PARTICIPANT_PREFIX = "PAR-"
EVENT_ID_PATTERN = re.compile(r"^EVT-\d{4}$")

_TRAILING_DIGITS = re.compile(r"(\d+)$")


def trailing_number(value: str | None) -> int:
    """
    Extracts the trailing run of digits from an identifier.

    Args:
        value (str | None): Identifier such as "EVT-0042".

    Returns:
        int: The trailing number, or 0 when there is none.
    """
    if not value:
        return 0
    match = _TRAILING_DIGITS.search(value)
    if not match:
        return 0
    return int(match.group(1))


def next_number(identifiers: Iterable[str]) -> int:
    """
    Returns one more than the highest trailing number, or 1 if there are no identifiers.
    """
    return max((trailing_number(i) for i in identifiers), default=0) + 1


def next_event_number(event_ids: Iterable[str]) -> int:
    return next_number(event_ids)


def next_participant_number(participant_ids: Iterable[str]) -> int:
    return next_number(participant_ids)


def format_event_id(number: int) -> str:
    return f"{EVENT_PREFIX}{max(1, number):04d}"


def format_participant_id(number: int) -> str:
    return f"{PARTICIPANT_PREFIX}{max(1, number):05d}"


def is_valid_event_id(value: str | None) -> bool:
    """Checks that an identifier is EVT- followed by exactly 4 digits."""
    return bool(value) and EVENT_ID_PATTERN.match(value) is not None


def highest_participant_number(events: Iterable) -> int:
    """
    Finds the highest participant number used across every event.

    Args:
        events (Iterable[Event]): Events to scan.

    Returns:
        int: Highest trailing participant number, 0 when nobody is registered.
    """
    return max(
        (trailing_number(p.participant_id) for e in events for p in e.participants),
        default=0,
    )
