"""Error codes and exceptions for event management."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Error codes shared by rejected results and raised errors."""

    MISSING_FIELD = "MISSING_FIELD"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    PAST_DATE = "PAST_DATE"
    SCHEDULING_CLASH = "SCHEDULING_CLASH"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    DUPLICATE_PARTICIPANT = "DUPLICATE_PARTICIPANT"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    BOOTSTRAP_FAILED = "BOOTSTRAP_FAILED"
    INVALID_PARTICIPANT_TYPE = "INVALID_PARTICIPANT_TYPE"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return self.message


class PersistenceError(DomainError):
    """Raised when the event file cannot be written."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.PERSISTENCE_FAILED, message=message)


class BootstrapError(DomainError):
    """Raised when the storage location cannot be created."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.BOOTSTRAP_FAILED, message=message)


class AuthenticationError(DomainError):
    """Raised when the coordinator credentials do not match."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.AUTHENTICATION_FAILED,
            message="Invalid credentials.",
        )
