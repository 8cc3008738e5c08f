"""In-memory event store and the add/update/delete/register workflows.

Every mutation is applied to the in-memory list first and then the whole list
is handed to the database. Mutations return a result instead of prompting, so
the caller decides how to ask the user about id or name collisions.
"""

import copy
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from unievents import conflicts, ids, utils
from unievents.errors import ErrorCode
from unievents.event import Event, EventDraft
from unievents.participant import Participant, ParticipantType
from unievents.storage import EventDatabase

logger = logging.getLogger(__name__)

ID_CONFLICT = "id"
NAME_CONFLICT = "name"


@dataclass
class FieldChange:
    """One field changed by an update."""

    field: str
    old: object
    new: object

    def __str__(self):
        return f"{self.field}: {self.old} -> {self.new}"


@dataclass
class Ok:
    """The mutation was applied and saved."""

    event: Event | None = None
    participant: Participant | None = None
    changes: list[FieldChange] = field(default_factory=list)
    changed: bool = True


@dataclass
class Conflict:
    """
    The mutation collides with an existing event's id or name.

    Attributes:
        kind (str): ID_CONFLICT or NAME_CONFLICT.
        existing (Event): The event already holding the id or name.
        candidates (list[str]): Replacement values the caller may accept.
    """

    kind: str
    existing: Event
    candidates: list[str]


@dataclass
class Rejected:
    """The mutation failed validation; nothing was changed."""

    code: ErrorCode
    reason: str


Result = Ok | Conflict | Rejected


class EventStore:
    """
    Authoritative in-memory list of events for the session.

    Attributes:
        database (EventDatabase): Persistence for the full list.
        lock (threading.RLock): Guards the event list for background readers.
        participant_high_water (int): Highest participant number seen this session.
    """

    def __init__(
        self,
        database: EventDatabase,
        clock: Callable[[], datetime] = datetime.now,
        name_categories: dict[str, str] | None = None,
    ):
        self.database = database
        self.clock = clock
        self.name_categories = name_categories
        self.lock = threading.RLock()
        self._events: list[Event] = utils.sort_events_by_date(database.load())
        self.participant_high_water = ids.highest_participant_number(self._events)

    def __repr__(self):
        return f"EventStore({len(self._events)} events)"

    # reads ------------------------------------------------------------------------------------

    @property
    def events(self) -> list[Event]:
        """Events sorted by date. The list is a copy; the events are not."""
        with self.lock:
            return list(self._events)

    def snapshot(self) -> list[Event]:
        """Deep copy of the events, safe to read from another thread."""
        with self.lock:
            return copy.deepcopy(self._events)

    @property
    def total_participants(self) -> int:
        with self.lock:
            return sum(e.participant_count for e in self._events)

    def get(self, event_id: str) -> Event | None:
        with self.lock:
            return conflicts.find_by_id(self._events, event_id)

    def next_event_id(self) -> str:
        with self.lock:
            return ids.format_event_id(
                ids.next_event_number(e.event_id for e in self._events)
            )

    def next_participant_id(self, event_id: str) -> str | None:
        """Preview of the id the next registration for this event will receive."""
        with self.lock:
            event = conflicts.find_by_id(self._events, event_id)
            if event is None:
                return None
            return ids.format_participant_id(
                ids.next_participant_number(p.participant_id for p in event.participants)
            )

    # validation -------------------------------------------------------------------------------

    def _validate(
        self, draft: EventDraft, event_id: str, exclude_id: str | None, allow_past: bool
    ) -> Rejected | None:
        for label, value in (
            ("Event name", draft.name),
            ("Venue", draft.venue),
            ("Organizer", draft.organizer),
            ("Category", draft.category),
        ):
            if not value:
                return Rejected(ErrorCode.MISSING_FIELD, f"{label} is required.")
        if draft.date is None:
            return Rejected(ErrorCode.MISSING_FIELD, "Event date is required.")
        if not ids.is_valid_event_id(event_id):
            return Rejected(
                ErrorCode.INVALID_EVENT_ID,
                "Event ID must follow pattern EVT-0001 (e.g. EVT-0001).",
            )

        if not allow_past:
            now = self.clock()
            today = now.date()
            if draft.date < today or (
                draft.date == today
                and draft.time is not None
                and draft.time < now.time()
            ):
                return Rejected(
                    ErrorCode.PAST_DATE, "Event date/time cannot be in the past."
                )

        if conflicts.has_scheduling_clash(
            self._events, exclude_id, draft.date, draft.time, draft.venue
        ):
            return Rejected(
                ErrorCode.SCHEDULING_CLASH,
                "Another event is already scheduled at this venue at the same date/time.",
            )
        return None

    def _resolve_category(self, draft: EventDraft) -> None:
        if not draft.category:
            draft.category = utils.category_for_name(draft.name, self.name_categories)

    # mutations --------------------------------------------------------------------------------

    def add_event(
        self, draft: EventDraft, resolve_id: bool = False, resolve_name: bool = False
    ) -> Result:
        """
        Adds a new event.

        Args:
            draft (EventDraft): Entered fields. A missing event id is allocated.
            resolve_id (bool): On an id collision, allocate the next free id instead of returning a Conflict.
            resolve_name (bool): On a name collision, append " (N)" instead of returning a Conflict.

        Returns:
            Ok | Conflict | Rejected: Outcome of the add.

        Raises:
            PersistenceError: If the save fails. The add is rolled back first.
        """
        with self.lock:
            self._resolve_category(draft)
            event_id = draft.event_id or self.next_event_id()

            rejected = self._validate(draft, event_id, exclude_id=None, allow_past=False)
            if rejected:
                return rejected

            existing = conflicts.find_by_id(self._events, event_id)
            if existing is not None:
                free_id = self.next_event_id()
                if not resolve_id:
                    return Conflict(ID_CONFLICT, existing, [free_id])
                event_id = free_id

            name = draft.name
            existing = conflicts.find_by_name(self._events, name)
            if existing is not None:
                free_name = conflicts.next_free_name(self._events, name)
                if not resolve_name:
                    return Conflict(NAME_CONFLICT, existing, [free_name])
                name = free_name

            event = Event(
                event_id=event_id,
                name=name,
                date=draft.date,
                time=draft.time,
                venue=draft.venue,
                organizer=draft.organizer,
                category=draft.category,
            )
            self._commit(lambda: self._events.append(event))
            logger.info("Added event %s", event)
            return Ok(event=event)

    def update_event(
        self,
        event_id: str,
        draft: EventDraft,
        resolve_id: bool = False,
        resolve_name: bool = False,
    ) -> Result:
        """
        Replaces the mutable fields of an existing event.

        Past dates are allowed when editing. The event does not clash with itself.

        Args:
            event_id (str): Id of the event to update.
            draft (EventDraft): New field values. A missing event id keeps the current id.
            resolve_id (bool): On an id collision, allocate the next free id.
            resolve_name (bool): On a name collision, append " (N)".

        Returns:
            Ok | Conflict | Rejected: Outcome of the update. Ok.changed is False when nothing differs.

        Raises:
            PersistenceError: If the save fails. The update is rolled back first.
        """
        with self.lock:
            original = conflicts.find_by_id(self._events, event_id)
            if original is None:
                return Rejected(ErrorCode.EVENT_NOT_FOUND, f"Event {event_id} not found.")

            self._resolve_category(draft)
            new_id = draft.event_id or original.event_id

            rejected = self._validate(
                draft, new_id, exclude_id=original.event_id, allow_past=True
            )
            if rejected:
                return rejected

            if new_id.casefold() != original.event_id.casefold():
                existing = conflicts.find_by_id(self._events, new_id)
                if existing is not None and existing is not original:
                    free_id = self.next_event_id()
                    if not resolve_id:
                        return Conflict(ID_CONFLICT, existing, [free_id])
                    new_id = free_id

            new_name = draft.name
            if new_name.casefold() != original.name.casefold():
                existing = conflicts.find_by_name(self._events, new_name)
                if existing is not None and existing is not original:
                    free_name = conflicts.next_free_name(self._events, new_name)
                    if not resolve_name:
                        return Conflict(NAME_CONFLICT, existing, [free_name])
                    new_name = free_name

            values = {
                "event_id": new_id,
                "name": new_name,
                "date": draft.date,
                "time": draft.time,
                "venue": draft.venue,
                "organizer": draft.organizer,
                "category": draft.category,
            }
            changes = describe_changes(original, values)
            if not changes:
                return Ok(event=original, changed=False)

            def apply():
                for name, value in values.items():
                    setattr(original, name, value)

            self._commit(apply)
            logger.info("Updated event %s (%d changes)", original, len(changes))
            return Ok(event=original, changes=changes)

    def preview_changes(self, event_id: str, draft: EventDraft) -> list[FieldChange]:
        """
        Lists the changes an update would apply, before collisions are resolved.

        Used to ask for confirmation ahead of calling update_event.
        """
        with self.lock:
            original = conflicts.find_by_id(self._events, event_id)
            if original is None:
                return []
            self._resolve_category(draft)
            return describe_changes(
                original,
                {
                    "event_id": draft.event_id or original.event_id,
                    "name": draft.name,
                    "date": draft.date,
                    "time": draft.time,
                    "venue": draft.venue,
                    "organizer": draft.organizer,
                    "category": draft.category,
                },
            )

    def delete_event(self, event_id: str) -> Result:
        """
        Deletes an event and every participant registered for it.

        Raises:
            PersistenceError: If the save fails. The delete is rolled back first.
        """
        with self.lock:
            event = conflicts.find_by_id(self._events, event_id)
            if event is None:
                return Rejected(ErrorCode.EVENT_NOT_FOUND, f"Event {event_id} not found.")
            self._commit(lambda: self._events.remove(event))
            logger.info("Deleted event %s", event)
            return Ok(event=event)

    def register_participant(
        self,
        event_id: str,
        full_name: str,
        participant_type: ParticipantType | str = ParticipantType.STUDENT,
    ) -> Result:
        """
        Registers a participant for an event.

        Participant ids are numbered per event, starting from the highest id
        already registered for that event.

        Returns:
            Ok | Rejected: Ok carries the new participant.

        Raises:
            PersistenceError: If the save fails. The registration is rolled back first.
        """
        full_name = (full_name or "").strip()
        with self.lock:
            event = conflicts.find_by_id(self._events, event_id)
            if event is None:
                return Rejected(ErrorCode.EVENT_NOT_FOUND, f"Event {event_id} not found.")
            if not full_name:
                return Rejected(ErrorCode.MISSING_FIELD, "Participant name is required.")
            try:
                participant_type = ParticipantType.parse(participant_type)
            except ValueError as exc:
                return Rejected(ErrorCode.INVALID_PARTICIPANT_TYPE, str(exc))
            if event.has_participant(full_name):
                return Rejected(
                    ErrorCode.DUPLICATE_PARTICIPANT,
                    "This participant is already registered for this event.",
                )

            number = ids.next_participant_number(
                p.participant_id for p in event.participants
            )
            participant = Participant(
                participant_id=ids.format_participant_id(number),
                full_name=full_name,
                participant_type=participant_type,
            )
            self._commit(lambda: event.add_participant(participant))
            self.participant_high_water = max(self.participant_high_water, number)
            logger.info("Registered %s for %s", participant, event)
            return Ok(event=event, participant=participant)

    def _commit(self, mutate: Callable[[], None]) -> None:
        """Applies a mutation, saves, and restores the previous state if the save fails."""
        backup = copy.deepcopy(self._events)
        mutate()
        utils.sort_events_by_date(self._events)
        try:
            self.database.save(self._events)
        except Exception:
            # restore in place so references to the list stay valid
            self._events[:] = backup
            logger.error("Save failed; in-memory changes rolled back")
            raise


def describe_changes(original: Event, values: dict) -> list[FieldChange]:
    """
    Lists the fields an update would change, for confirmation prompts.

    Args:
        original (Event): The event as stored.
        values (dict): Field name to new value.

    Returns:
        list[FieldChange]: Changed fields, in form order.
    """
    changes = []
    for name, new in values.items():
        old = getattr(original, name)
        if old != new:
            changes.append(FieldChange(name, old, new))
    return changes
