"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Self
from uuid import UUID, uuid4

from calendars.domain.errors import (
    InvalidColorError,
    InvalidFrequencyError,
    InvalidIdentifierError,
    InvalidTimeRangeError,
)

MAX_COLOR = 255


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidIdentifierError() from exc


@dataclass(frozen=True, order=True)
class CalendarId:
    """Unique identifier for a Calendar."""

    value: UUID

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=_parse_uuid(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class EventId:
    """Unique identifier for an Event or a RecurringEvent."""

    value: UUID

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=_parse_uuid(value))

    def __str__(self) -> str:
        return str(self.value)


def to_utc(value: datetime) -> datetime:
    """Normalize an aware datetime to UTC; naive datetimes are rejected."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidTimeRangeError("Datetimes must be timezone-aware")
    return value.astimezone(UTC)


@dataclass(frozen=True)
class TimeRange:
    """Half-open interval [starts_at, ends_at) between two UTC instants."""

    starts_at: datetime
    ends_at: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "starts_at", to_utc(self.starts_at))
        object.__setattr__(self, "ends_at", to_utc(self.ends_at))
        if self.starts_at >= self.ends_at:
            raise InvalidTimeRangeError()

    @property
    def duration(self) -> timedelta:
        return self.ends_at - self.starts_at

    def overlaps(self, other: "TimeRange") -> bool:
        """Touching ranges do not overlap."""
        return self.starts_at < other.ends_at and other.starts_at < self.ends_at


class Frequency(Enum):
    """How often a recurring event repeats."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"

    @classmethod
    def parse(cls, value: str) -> "Frequency":
        try:
            return cls(value.upper())
        except (AttributeError, ValueError) as exc:
            raise InvalidFrequencyError() from exc

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EventColor:
    """Palette index stored as a single unsigned byte."""

    value: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidColorError()
        if not 0 <= self.value <= MAX_COLOR:
            raise InvalidColorError()

    def __int__(self) -> int:
        return self.value
