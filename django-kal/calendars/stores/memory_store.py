"""Dict-backed stores.

They keep rows, not entities, so every read and write goes through the same
mappers as the Django stores. Used by the test suite and for running the
services without a database.
"""

from dataclasses import replace

from calendars.domain import (
    Calendar,
    CalendarId,
    Event,
    EventId,
    RecurringEvent,
    TimeRange,
)
from calendars.domain.clock import SYSTEM_CLOCK, Clock
from calendars.stores.errors import NotFoundError
from calendars.stores.interfaces import CalendarStore, EventStore, RecurringEventStore
from calendars.stores.mappers import (
    CalendarMapper,
    EventMapper,
    RecurrenceMapper,
    parse_timestamp,
)
from calendars.stores.rows import (
    CalendarRow,
    EventRow,
    RecurrenceExceptionRow,
    RecurrenceRow,
)


class InMemoryCalendarStore(CalendarStore):
    def __init__(self, clock: Clock = SYSTEM_CLOCK) -> None:
        self._clock = clock
        self.rows: dict[str, CalendarRow] = {}

    def save(self, calendar: Calendar) -> None:
        row = CalendarMapper.to_row(calendar)
        existing = self.rows.get(row.id)
        if existing is not None:
            row = replace(row, created_at=existing.created_at)
        self.rows[row.id] = row

    def find_by_id(self, calendar_id: CalendarId) -> Calendar | None:
        row = self.rows.get(str(calendar_id))
        if row is None:
            return None
        return CalendarMapper.to_domain(row, clock=self._clock)

    def find_all_active(self) -> list[Calendar]:
        rows = sorted(
            (row for row in self.rows.values() if row.is_archived == 0),
            key=lambda row: row.name,
        )
        return [CalendarMapper.to_domain(row, clock=self._clock) for row in rows]

    def delete(self, calendar_id: CalendarId) -> None:
        if self.rows.pop(str(calendar_id), None) is None:
            raise NotFoundError(str(calendar_id))


class InMemoryEventStore(EventStore):
    def __init__(self, clock: Clock = SYSTEM_CLOCK) -> None:
        self._clock = clock
        self.rows: dict[str, EventRow] = {}

    def save(self, event: Event) -> None:
        row = EventMapper.to_row(event)
        existing = self.rows.get(row.id)
        if existing is not None:
            row = replace(
                row, calendar_id=existing.calendar_id, created_at=existing.created_at
            )
        self.rows[row.id] = row

    def find_by_id(self, event_id: EventId) -> Event | None:
        row = self.rows.get(str(event_id))
        if row is None:
            return None
        return EventMapper.to_domain(row, clock=self._clock)

    def find_by_calendar(self, calendar_id: CalendarId) -> list[Event]:
        rows = [row for row in self.rows.values() if row.calendar_id == str(calendar_id)]
        return self._to_domain_sorted(rows)

    def find_in_range(self, calendar_id: CalendarId, time_range: TimeRange) -> list[Event]:
        rows = [
            row
            for row in self.rows.values()
            if row.calendar_id == str(calendar_id) and row.is_cancelled == 0
        ]
        events = self._to_domain_sorted(rows)
        return [event for event in events if event.time_range.overlaps(time_range)]

    def delete(self, event_id: EventId) -> None:
        if self.rows.pop(str(event_id), None) is None:
            raise NotFoundError(str(event_id))

    def _to_domain_sorted(self, rows: list[EventRow]) -> list[Event]:
        rows = sorted(rows, key=lambda row: parse_timestamp(row.starts_at))
        return [EventMapper.to_domain(row, clock=self._clock) for row in rows]


class InMemoryRecurringEventStore(RecurringEventStore):
    def __init__(self, clock: Clock = SYSTEM_CLOCK) -> None:
        self._clock = clock
        self.rows: dict[str, tuple[RecurrenceRow, list[RecurrenceExceptionRow]]] = {}

    def save(self, event: RecurringEvent) -> None:
        row, exception_rows = RecurrenceMapper.to_rows(event)
        existing = self.rows.get(row.id)
        if existing is not None:
            existing_row, _ = existing
            row = replace(
                row,
                calendar_id=existing_row.calendar_id,
                created_at=existing_row.created_at,
            )
        # Series row and exception set are swapped in together.
        self.rows[row.id] = (row, exception_rows)

    def find_by_id(self, event_id: EventId) -> RecurringEvent:
        entry = self.rows.get(str(event_id))
        if entry is None:
            raise NotFoundError(str(event_id))
        row, exception_rows = entry
        return RecurrenceMapper.to_domain(row, exception_rows, clock=self._clock)

    def find_by_calendar(self, calendar_id: CalendarId) -> list[RecurringEvent]:
        entries = sorted(
            (
                entry
                for entry in self.rows.values()
                if entry[0].calendar_id == str(calendar_id)
            ),
            key=lambda entry: parse_timestamp(entry[0].starts_at),
        )
        return [
            RecurrenceMapper.to_domain(row, exception_rows, clock=self._clock)
            for row, exception_rows in entries
        ]

    def delete(self, event_id: EventId) -> None:
        if self.rows.pop(str(event_id), None) is None:
            raise NotFoundError(str(event_id))
