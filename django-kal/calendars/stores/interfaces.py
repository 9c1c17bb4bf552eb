"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. ``save`` is an
idempotent upsert keyed by id: ``id``, ``calendar_id`` and ``created_at``
are fixed by the first insert, every other column is overwritten.

There is no version check: two load-mutate-save sequences on the same id can
interleave and the later ``save`` silently wins.
"""

from abc import ABC, abstractmethod

from calendars.domain import (
    Calendar,
    CalendarId,
    Event,
    EventId,
    RecurringEvent,
    TimeRange,
)


class CalendarStore(ABC):
    """Interface for calendar persistence operations."""

    @abstractmethod
    def save(self, calendar: Calendar) -> None:
        """Insert the calendar or overwrite its mutable fields."""
        ...

    @abstractmethod
    def find_by_id(self, calendar_id: CalendarId) -> Calendar | None:
        """Return a calendar by ID, or None if not found."""
        ...

    @abstractmethod
    def find_all_active(self) -> list[Calendar]:
        """Return non-archived calendars ordered by name ascending."""
        ...

    @abstractmethod
    def delete(self, calendar_id: CalendarId) -> None:
        """Delete a calendar.

        Raises:
            NotFoundError: If no calendar has this ID.
        """
        ...


class EventStore(ABC):
    """Interface for single event persistence operations."""

    @abstractmethod
    def save(self, event: Event) -> None:
        """Insert the event or overwrite its mutable fields."""
        ...

    @abstractmethod
    def find_by_id(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def find_by_calendar(self, calendar_id: CalendarId) -> list[Event]:
        """Return all events of a calendar ordered by starts_at ascending."""
        ...

    @abstractmethod
    def find_in_range(self, calendar_id: CalendarId, time_range: TimeRange) -> list[Event]:
        """Return non-cancelled events overlapping the half-open window, by starts_at."""
        ...

    @abstractmethod
    def delete(self, event_id: EventId) -> None:
        """Delete an event.

        Raises:
            NotFoundError: If no event has this ID.
        """
        ...


class RecurringEventStore(ABC):
    """Interface for recurring event persistence operations.

    Unlike the other stores, ``find_by_id`` raises instead of returning None.
    """

    @abstractmethod
    def save(self, event: RecurringEvent) -> None:
        """Upsert the series and replace its whole exception set, atomically."""
        ...

    @abstractmethod
    def find_by_id(self, event_id: EventId) -> RecurringEvent:
        """Return a recurring event with its exceptions.

        Raises:
            NotFoundError: If no recurring event has this ID.
        """
        ...

    @abstractmethod
    def find_by_calendar(self, calendar_id: CalendarId) -> list[RecurringEvent]:
        """Return all series of a calendar ordered by starts_at ascending."""
        ...

    @abstractmethod
    def delete(self, event_id: EventId) -> None:
        """Delete a series together with its exceptions.

        Raises:
            NotFoundError: If no recurring event has this ID.
        """
        ...
