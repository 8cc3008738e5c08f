from dataclasses import dataclass, field
from datetime import date, datetime, time

from unievents import utils
from unievents.participant import Participant


@dataclass
class Event:
    """
    Represents a scheduled university event and the participants registered for it.

    Attributes:
        event_id (str): Identifier such as EVT-0001.
        name (str): Event name, unique among events (case-insensitive).
        date (date): Calendar date of the event.
        time (time | None): Start time with minute precision, if set.
        venue (str): Venue name.
        organizer (str): Organizer name.
        category (str): Event category.
        participants (list[Participant]): Registered participants, in registration order.
    """

    event_id: str
    name: str
    date: date
    time: time | None
    venue: str
    organizer: str
    category: str
    participants: list[Participant] = field(default_factory=list)

    def __repr__(self):
        return f"{self.event_id} {self.name}"

    @property
    def participant_count(self) -> int:
        return len(self.participants)

    @property
    def starts_at(self) -> datetime | None:
        """Combined start date and time, or None when no time is set."""
        if self.date is None or self.time is None:
            return None
        return datetime.combine(self.date, self.time)

    @property
    def date_time_label(self) -> str:
        return utils.format_date_time(self.date, self.time)

    def has_participant(self, full_name: str) -> bool:
        """Checks whether a participant with this name (case-insensitive) is registered."""
        wanted = full_name.strip().casefold()
        return any(p.full_name.casefold() == wanted for p in self.participants)

    def add_participant(self, participant: Participant) -> None:
        self.participants.append(participant)


@dataclass
class EventDraft:
    """
    User-entered event fields for the add and update workflows.

    The event id is optional when adding, in which case the next free id is allocated.
    The category is optional, in which case it is derived from the name.
    """

    name: str
    date: date
    time: time | None
    venue: str
    organizer: str
    category: str | None = None
    event_id: str | None = None

    def __post_init__(self):
        self.name = (self.name or "").strip()
        self.venue = (self.venue or "").strip()
        self.organizer = (self.organizer or "").strip()
        self.category = (self.category or "").strip() or None
        self.event_id = (self.event_id or "").strip() or None
        if self.time is not None:
            self.time = self.time.replace(second=0, microsecond=0)
