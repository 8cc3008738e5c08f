"""File persistence for the event list.

The whole list is written on every save and read back whole on load.
"""

import logging
import os
import pickle
import tempfile
import threading
from datetime import date, datetime, time
from pathlib import Path

from unievents.errors import BootstrapError, PersistenceError
from unievents.event import Event
from unievents.participant import Participant, ParticipantType

logger = logging.getLogger(__name__)


class EventDatabase:
    """
    Loads and saves the full event list to a single pickle file.

    The containing directory and an empty event file are created on construction,
    so `load` never has to special-case a first run. Loads and saves are serialized
    through one lock.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = threading.RLock()
        self._ensure_storage_present()

    def __repr__(self):
        return f"EventDatabase({self.path})"

    def _ensure_storage_present(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self.save([])
        except (OSError, PersistenceError) as exc:
            raise BootstrapError(
                f"Unable to bootstrap local storage at {self.path}: {exc}"
            ) from exc

    def load(self) -> list[Event]:
        """
        Reads every stored event.

        Returns:
            list[Event]: Stored events, or an empty list if the file is missing,
            empty, unreadable, or does not hold a list of well-formed events.
        """
        with self._lock:
            try:
                with open(self.path, "rb") as file:
                    data = EventUnpickler(file).load()
            except FileNotFoundError:
                logger.warning("Event file %s is missing; starting empty", self.path)
                return []
            except Exception as exc:
                logger.warning(
                    "Event file %s is unreadable (%s); starting empty", self.path, exc
                )
                return []

        if not isinstance(data, list) or not all(_is_well_formed(e) for e in data):
            logger.warning(
                "Event file %s does not contain a list of events; starting empty",
                self.path,
            )
            return []
        return list(data)

    def save(self, events: list[Event]) -> None:
        """
        Overwrites the event file with the full event list.

        The list is written to a temporary sibling file which then replaces the
        event file, so a failed write leaves the previous contents intact.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        with self._lock:
            temp_name = None
            try:
                with tempfile.NamedTemporaryFile(
                    "wb", dir=self.path.parent, prefix=f".{self.path.name}.", delete=False
                ) as file:
                    temp_name = file.name
                    pickle.dump(list(events), file)
                    file.flush()
                    os.fsync(file.fileno())
                os.replace(temp_name, self.path)
                temp_name = None
            except (OSError, pickle.PicklingError) as exc:
                raise PersistenceError(f"Unable to save events: {exc}") from exc
            finally:
                if temp_name is not None:
                    Path(temp_name).unlink(missing_ok=True)
        logger.debug("Saved %d events to %s", len(events), self.path)


class EventUnpickler(pickle.Unpickler):
    """
    Unpickler restricted to the event record classes.

    Anything else in the file is treated as corruption.
    """

    ALLOWED_CLASSES = {
        ("unievents.event", "Event"),
        ("unievents.participant", "Participant"),
        ("unievents.participant", "ParticipantType"),
        ("datetime", "date"),
        ("datetime", "time"),
        ("builtins", "list"),
    }

    def find_class(self, module: str, name: str):
        """Resolve only the allowed record classes.

        Args:
            module: Module name recorded in the pickle.
            name: Class name recorded in the pickle.

        Returns:
            type: Resolved class object.
        """
        if (module, name) not in self.ALLOWED_CLASSES:
            raise pickle.UnpicklingError(f"Unexpected class {module}.{name} in event file")
        return super().find_class(module, name)


def _is_well_formed(event) -> bool:
    """Check that a loaded record carries the field types the store sorts and compares on."""
    if not isinstance(event, Event):
        return False
    text_fields = (event.event_id, event.name, event.venue, event.organizer, event.category)
    if not all(isinstance(value, str) for value in text_fields):
        return False
    if not isinstance(event.date, date) or isinstance(event.date, datetime):
        return False
    if event.time is not None and not isinstance(event.time, time):
        return False
    if not isinstance(event.participants, list):
        return False
    return all(
        isinstance(p, Participant)
        and isinstance(p.participant_id, str)
        and isinstance(p.full_name, str)
        and isinstance(p.participant_type, ParticipantType)
        for p in event.participants
    )
