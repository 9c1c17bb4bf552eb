"""Domain error codes for the calendars module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    # Validation
    EMPTY_NAME = "EMPTY_NAME"
    EMPTY_TITLE = "EMPTY_TITLE"
    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    INVALID_COLOR = "INVALID_COLOR"
    INVALID_FREQUENCY = "INVALID_FREQUENCY"
    INVALID_INTERVAL = "INVALID_INTERVAL"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"

    # Mapping
    INVALID_ID = "INVALID_ID"
    INVALID_DATE = "INVALID_DATE"
    INVALID_DATA = "INVALID_DATA"
    MAPPED_DOMAIN_ERROR = "MAPPED_DOMAIN_ERROR"

    # Store
    NOT_FOUND = "NOT_FOUND"
    DATABASE_ERROR = "DATABASE_ERROR"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"

    # Application
    CALENDAR_NOT_FOUND = "CALENDAR_NOT_FOUND"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    RECURRING_EVENT_NOT_FOUND = "RECURRING_EVENT_NOT_FOUND"
    CALENDAR_ARCHIVED = "CALENDAR_ARCHIVED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EmptyNameError(DomainError):
    """Raised when a calendar name is empty."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_NAME,
            message="Name cannot be empty",
        )


class EmptyTitleError(DomainError):
    """Raised when an event title is empty."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_TITLE,
            message="Title cannot be empty",
        )


class InvalidTimeRangeError(DomainError):
    """Raised when a time range does not start strictly before it ends."""

    def __init__(self, message: str = "Start time must be before end time") -> None:
        super().__init__(
            code=ErrorCode.INVALID_TIME_RANGE,
            message=message,
        )


class InvalidColorError(DomainError):
    """Raised when a color does not fit the palette index width."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_COLOR,
            message="Invalid color value",
        )


class InvalidFrequencyError(DomainError):
    """Raised when a frequency token is not one of the known names."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_FREQUENCY,
            message="Invalid frequency",
        )


class InvalidIntervalError(DomainError):
    """Raised when a recurrence interval is not a positive integer."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_INTERVAL,
            message="Invalid interval: must be greater than 0",
        )


class InvalidIdentifierError(DomainError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_IDENTIFIER,
            message="Invalid identifier format",
        )


class CalendarNotFoundError(DomainError):
    """Raised when a calendar is not found."""

    def __init__(self, calendar_id: str) -> None:
        super().__init__(
            code=ErrorCode.CALENDAR_NOT_FOUND,
            message="Calendar not found",
        )
        object.__setattr__(self, "calendar_id", calendar_id)


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        object.__setattr__(self, "event_id", event_id)


class RecurringEventNotFoundError(DomainError):
    """Raised when a recurring event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.RECURRING_EVENT_NOT_FOUND,
            message="Recurring event not found",
        )
        object.__setattr__(self, "event_id", event_id)


class CalendarArchivedError(DomainError):
    """Raised when adding events to an archived calendar."""

    def __init__(self, calendar_id: str) -> None:
        super().__init__(
            code=ErrorCode.CALENDAR_ARCHIVED,
            message="Cannot modify archived calendar",
        )
        object.__setattr__(self, "calendar_id", calendar_id)
