import re
from datetime import date, datetime, time

# TODO: move these catalogs into the YAML config once venues are managed by admins
EVENT_NAMES = [
    "AI & Machine Learning Seminar",
    "University Football League Finals",
    "Modern Web Development Workshop",
    "Inter-Faculty Cultural Night",
    "Athletics",
    "Campus Art & Creative Expo",
    "New Student Orientation Week",
    "Annual Job & Career Fair",
]
VENUES = ["Gallery", "Library", "Innovation Hub", "Bintumani Conference Center"]
ORGANIZERS = ["Sam", "Ruben", "Mtheus", "Bruno"]
CATEGORIES = [
    "Seminar",
    "Sports",
    "Workshop",
    "Cultural Show",
    "Exhibition",
    "Orientation",
    "Career Fair",
]
NAME_CATEGORY_MAP = {
    "AI & Machine Learning Seminar": "Seminar",
    "University Football League Finals": "Sports",
    "Modern Web Development Workshop": "Workshop",
    "Inter-Faculty Cultural Night": "Cultural Show",
    "Athletics": "Sports",
    "Campus Art & Creative Expo": "Exhibition",
    "New Student Orientation Week": "Orientation",
    "Annual Job & Career Fair": "Career Fair",
}

_RENAME_SUFFIX = re.compile(r"^(?P<base>.*) \(\d+\)$")


def category_for_name(name: str, mapping: dict[str, str] | None = None) -> str | None:
    """
    Looks up the category for an event name.

    Names match ignoring case. Auto-renamed events ("Athletics (2)") resolve
    through their base name.

    Args:
        name (str): Event name.
        mapping (dict | None): Name to category mapping. Defaults to NAME_CATEGORY_MAP.

    Returns:
        str | None: The mapped category, or None when the name is unknown.
    """
    mapping = NAME_CATEGORY_MAP if mapping is None else mapping
    folded = {key.casefold(): value for key, value in mapping.items()}
    name = (name or "").strip()
    match = _RENAME_SUFFIX.match(name)
    if name.casefold() not in folded and match:
        name = match.group("base")
    return folded.get(name.casefold())


def format_date_time(event_date: date, event_time: time | None) -> str:
    """Render a date and optional time the way the event tables show them."""
    if event_time is None:
        return event_date.isoformat()
    return f"{event_date.isoformat()} {event_time.strftime('%H:%M')}"


def parse_date(value: str) -> date:
    """
    Parses a YYYY-MM-DD string.

    Raises:
        ValueError: If the value is not a valid ISO date.
    """
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date {value!r}; expected YYYY-MM-DD") from None


def parse_time(value: str | None) -> time | None:
    """
    Parses an HH:MM string. A blank value means the event has no time set.

    Raises:
        ValueError: If the value is not a valid clock time.
    """
    if value is None or not str(value).strip():
        return None
    try:
        return datetime.strptime(str(value).strip(), "%H:%M").time()
    except ValueError:
        raise ValueError(f"Invalid time {value!r}; expected HH:MM") from None


def sort_events_by_date(events: list) -> list:
    """
    Sorts events by date in place, keeping the current order for equal dates.

    Args:
        events (list[Event]): Events to sort.

    Returns:
        list[Event]: The same list, sorted.
    """
    events.sort(key=lambda e: e.date)
    return events
