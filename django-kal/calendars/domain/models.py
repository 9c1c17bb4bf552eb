"""Domain models representing persisted state.

These are pure domain objects; Django ORM rows live in calendars/models.py
(persistence layer). Every mutator re-stamps ``updated_at`` from the
entity's clock.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Self

from calendars.domain.clock import SYSTEM_CLOCK, Clock
from calendars.domain.errors import EmptyNameError, EmptyTitleError
from calendars.domain.value_objects import CalendarId, EventColor, EventId, TimeRange


def _require_name(name: str) -> None:
    if not name:
        raise EmptyNameError()


def _require_title(title: str) -> None:
    if not title:
        raise EmptyTitleError()


@dataclass
class Calendar:
    """Domain representation of a Calendar."""

    id: CalendarId
    name: str
    description: str | None
    is_archived: bool
    created_at: datetime
    updated_at: datetime
    clock: Clock = field(default=SYSTEM_CLOCK, compare=False, repr=False)

    def __post_init__(self) -> None:
        _require_name(self.name)

    @classmethod
    def create(
        cls,
        name: str,
        description: str | None = None,
        clock: Clock = SYSTEM_CLOCK,
    ) -> Self:
        now = clock.now()
        return cls(
            id=CalendarId.new(),
            name=name,
            description=description,
            is_archived=False,
            created_at=now,
            updated_at=now,
            clock=clock,
        )

    def rename(self, name: str) -> None:
        _require_name(name)
        self.name = name
        self.touch()

    def update_description(self, description: str | None) -> None:
        self.description = description
        self.touch()

    def archive(self) -> None:
        self.is_archived = True
        self.touch()

    def unarchive(self) -> None:
        self.is_archived = False
        self.touch()

    def touch(self) -> None:
        self.updated_at = self.clock.now()


@dataclass
class Event:
    """Domain representation of a single scheduled Event."""

    id: EventId
    calendar_id: CalendarId
    title: str
    description: str | None
    time_range: TimeRange
    color: EventColor
    is_all_day: bool
    is_cancelled: bool
    created_at: datetime
    updated_at: datetime
    clock: Clock = field(default=SYSTEM_CLOCK, compare=False, repr=False)

    def __post_init__(self) -> None:
        _require_title(self.title)

    @classmethod
    def create(
        cls,
        calendar_id: CalendarId,
        title: str,
        description: str | None,
        time_range: TimeRange,
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
            color=color,
            is_all_day=is_all_day,
            is_cancelled=False,
            created_at=now,
            updated_at=now,
            clock=clock,
        )

    def cancel(self) -> None:
        self.is_cancelled = True
        self.touch()

    def restore(self) -> None:
        self.is_cancelled = False
        self.touch()

    def update_title(self, title: str) -> None:
        _require_title(title)
        self.title = title
        self.touch()

    def update_description(self, description: str | None) -> None:
        self.description = description
        self.touch()

    def update_time_range(self, time_range: TimeRange) -> None:
        self.time_range = time_range
        self.touch()

    def update_color(self, color: EventColor) -> None:
        self.color = color
        self.touch()

    def overlaps_with(self, other: "Event") -> bool:
        """True when both events are live, share a calendar and their ranges overlap."""
        return (
            not self.is_cancelled
            and not other.is_cancelled
            and self.calendar_id == other.calendar_id
            and self.time_range.overlaps(other.time_range)
        )

    def touch(self) -> None:
        self.updated_at = self.clock.now()
