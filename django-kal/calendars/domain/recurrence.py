"""Recurring events: a repeat rule plus per-occurrence overrides.

A series stores its base range, a rule describing how it repeats and a map of
exceptions keyed by the original start instant of the occurrence they
override. Occurrences are never expanded here; callers ask for the effective
state of one occurrence at a time through :meth:`RecurringEvent.resolve`.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Self

from calendars.domain.clock import SYSTEM_CLOCK, Clock
from calendars.domain.errors import InvalidIntervalError
from calendars.domain.value_objects import (
    CalendarId,
    EventColor,
    EventId,
    Frequency,
    TimeRange,
    to_utc,
)


@dataclass(frozen=True)
class RecurrenceRule:
    """Frequency, step and optional end bound of a series."""

    frequency: Frequency
    interval: int = 1
    until: datetime | None = None

    def __post_init__(self) -> None:
        if isinstance(self.interval, bool) or not isinstance(self.interval, int):
            raise InvalidIntervalError()
        if self.interval <= 0:
            raise InvalidIntervalError()
        if self.until is not None:
            object.__setattr__(self, "until", to_utc(self.until))


@dataclass(frozen=True)
class Cancelled:
    """The occurrence is suppressed."""


@dataclass(frozen=True)
class Rescheduled:
    """The occurrence moves to a replacement range."""

    new_time_range: TimeRange


ExceptionModification = Cancelled | Rescheduled


@dataclass(frozen=True)
class RecurrenceException:
    """Override for the occurrence that originally starts at ``original_starts_at``."""

    original_starts_at: datetime
    modification: ExceptionModification

    def __post_init__(self) -> None:
        object.__setattr__(self, "original_starts_at", to_utc(self.original_starts_at))

    @classmethod
    def cancelled(cls, original_starts_at: datetime) -> Self:
        return cls(original_starts_at=original_starts_at, modification=Cancelled())

    @classmethod
    def rescheduled(cls, original_starts_at: datetime, new_time_range: TimeRange) -> Self:
        return cls(
            original_starts_at=original_starts_at,
            modification=Rescheduled(new_time_range=new_time_range),
        )

    @property
    def is_cancelled(self) -> bool:
        return isinstance(self.modification, Cancelled)

    @property
    def new_time_range(self) -> TimeRange | None:
        if isinstance(self.modification, Rescheduled):
            return self.modification.new_time_range
        return None


class OccurrenceStatus(Enum):
    SCHEDULED = "SCHEDULED"
    CANCELLED = "CANCELLED"
    RESCHEDULED = "RESCHEDULED"


@dataclass(frozen=True)
class ResolvedOccurrence:
    """Effective state of one occurrence; ``time_range`` is None when cancelled."""

    original_starts_at: datetime
    status: OccurrenceStatus
    time_range: TimeRange | None

    @property
    def is_cancelled(self) -> bool:
        return self.status is OccurrenceStatus.CANCELLED


@dataclass
class RecurringEvent:
    """Domain representation of a recurring series."""

    id: EventId
    calendar_id: CalendarId
    title: str
    description: str | None
    time_range: TimeRange
    rule: RecurrenceRule
    exceptions: dict[datetime, RecurrenceException]
    color: EventColor
    is_all_day: bool
    is_cancelled: bool
    created_at: datetime
    updated_at: datetime
    clock: Clock = field(default=SYSTEM_CLOCK, compare=False, repr=False)

    @classmethod
    def create(
        cls,
        calendar_id: CalendarId,
        title: str,
        description: str | None,
        time_range: TimeRange,
        rule: RecurrenceRule,
        color: EventColor = EventColor(),
        is_all_day: bool = False,
        clock: Clock = SYSTEM_CLOCK,
    ) -> Self:
        now = clock.now()
        return cls(
            id=EventId.new(),
            calendar_id=calendar_id,
            title=title,
            description=description,
            time_range=time_range,
            rule=rule,
            exceptions={},
            color=color,
            is_all_day=is_all_day,
            is_cancelled=False,
            created_at=now,
            updated_at=now,
            clock=clock,
        )

    def add_exception(self, exception: RecurrenceException) -> None:
        """Insert the override, replacing any previous one for the same occurrence."""
        self.exceptions[exception.original_starts_at] = exception
        self.touch()

    def remove_exception(self, original_starts_at: datetime) -> None:
        self.exceptions.pop(to_utc(original_starts_at), None)
        self.touch()

    def restore_occurrence(self, original_starts_at: datetime) -> None:
        self.remove_exception(original_starts_at)

    def cancel_occurrence(self, original_starts_at: datetime) -> None:
        self.add_exception(RecurrenceException.cancelled(original_starts_at))

    def reschedule_occurrence(
        self, original_starts_at: datetime, new_time_range: TimeRange
    ) -> None:
        # The replacement is not checked against sibling occurrences.
        self.add_exception(
            RecurrenceException.rescheduled(original_starts_at, new_time_range)
        )

    def cancel(self) -> None:
        self.is_cancelled = True
        self.touch()

    def restore(self) -> None:
        self.is_cancelled = False
        self.touch()

    def exception_for(self, original_starts_at: datetime) -> RecurrenceException | None:
        return self.exceptions.get(to_utc(original_starts_at))

    def resolve(self, original_starts_at: datetime) -> ResolvedOccurrence:
        """Return the effective state of the occurrence originally at ``original_starts_at``.

        Series cancellation wins over any exception, and an exception wins over
        the base pattern.
        """
        original_starts_at = to_utc(original_starts_at)
        exception = self.exceptions.get(original_starts_at)

        match (self.is_cancelled, exception):
            case (True, _) | (False, RecurrenceException(modification=Cancelled())):
                return ResolvedOccurrence(
                    original_starts_at, OccurrenceStatus.CANCELLED, None
                )
            case (False, RecurrenceException(modification=Rescheduled(new_time_range=new_range))):
                return ResolvedOccurrence(
                    original_starts_at, OccurrenceStatus.RESCHEDULED, new_range
                )
            case _:
                return ResolvedOccurrence(
                    original_starts_at,
                    OccurrenceStatus.SCHEDULED,
                    TimeRange(
                        original_starts_at,
                        original_starts_at + self.time_range.duration,
                    ),
                )

    def touch(self) -> None:
        self.updated_at = self.clock.now()
