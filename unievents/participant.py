from dataclasses import dataclass
from enum import Enum


class ParticipantType(Enum):
    """Kind of person registered for an event."""

    STUDENT = "STUDENT"
    STAFF = "STAFF"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | ParticipantType") -> "ParticipantType":
        """Accepts an enum member or its case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(
                f"Unknown participant type {value!r}; expected one of "
                f"{', '.join(t.value for t in cls)}"
            ) from None


@dataclass(frozen=True)
class Participant:
    """
    Represents a single person registered for an event.

    Participants are owned by their event and are never updated in place.

    Attributes:
        participant_id (str): Identifier such as PAR-00001, unique within the event.
        full_name (str): Name as entered at registration.
        participant_type (ParticipantType): STUDENT or STAFF.
    """

    participant_id: str
    full_name: str
    participant_type: ParticipantType = ParticipantType.STUDENT

    def __repr__(self):
        return f"{self.participant_id} {self.full_name} ({self.participant_type})"
