"""Event service - orchestration for single events."""

import logging

from calendars.domain import CalendarId, Event, EventColor, EventId, TimeRange
from calendars.domain.clock import SYSTEM_CLOCK, Clock
from calendars.domain.errors import (
    CalendarArchivedError,
    CalendarNotFoundError,
    EventNotFoundError,
)
from calendars.stores.errors import NotFoundError
from calendars.stores.interfaces import CalendarStore, EventStore

logger = logging.getLogger(__name__)


def require_writable_calendar(store: CalendarStore, calendar_id: str) -> CalendarId:
    """Return the parsed id of an existing, non-archived calendar.

    Raises:
        InvalidIdentifierError: If the calendar_id is not a valid UUID.
        CalendarNotFoundError: If the calendar does not exist.
        CalendarArchivedError: If the calendar is archived.
    """
    parsed = CalendarId.from_string(calendar_id)
    calendar = store.find_by_id(parsed)
    if calendar is None:
        raise CalendarNotFoundError(calendar_id)
    if calendar.is_archived:
        raise CalendarArchivedError(calendar_id)
    return parsed


class EventService:
    """Service for single event operations."""

    def __init__(
        self,
        store: EventStore,
        calendar_store: CalendarStore,
        clock: Clock = SYSTEM_CLOCK,
    ) -> None:
        self._store = store
        self._calendar_store = calendar_store
        self._clock = clock

    def create_event(
        self,
        calendar_id: str,
        title: str,
        time_range: TimeRange,
        description: str | None = None,
        color: EventColor = EventColor(),
        is_all_day: bool = False,
    ) -> Event:
        """Create and persist an event in an existing, non-archived calendar.

        Raises:
            InvalidIdentifierError: If the calendar_id is not a valid UUID.
            CalendarNotFoundError: If the calendar does not exist.
            CalendarArchivedError: If the calendar is archived.
            EmptyTitleError: If the title is empty.
        """
        parsed = require_writable_calendar(self._calendar_store, calendar_id)
        event = Event.create(
            parsed,
            title,
            description,
            time_range,
            color=color,
            is_all_day=is_all_day,
            clock=self._clock,
        )
        self._store.save(event)
        logger.info("Created event %s in calendar %s", event.id, parsed)
        return event

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidIdentifierError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.find_by_id(EventId.from_string(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def list_events(self, calendar_id: str) -> list[Event]:
        return self._store.find_by_calendar(CalendarId.from_string(calendar_id))

    def list_events_in_range(self, calendar_id: str, time_range: TimeRange) -> list[Event]:
        return self._store.find_in_range(CalendarId.from_string(calendar_id), time_range)

    def find_conflicts(self, event_id: str) -> list[Event]:
        """Return the other events of the same calendar that overlap this one."""
        event = self.get_event(event_id)
        candidates = self._store.find_in_range(event.calendar_id, event.time_range)
        return [
            other
            for other in candidates
            if other.id != event.id and event.overlaps_with(other)
        ]

    def update_event_title(self, event_id: str, title: str) -> Event:
        event = self.get_event(event_id)
        event.update_title(title)
        self._store.save(event)
        return event

    def update_event_description(self, event_id: str, description: str | None) -> Event:
        event = self.get_event(event_id)
        event.update_description(description)
        self._store.save(event)
        return event

    def update_event_time_range(self, event_id: str, time_range: TimeRange) -> Event:
        event = self.get_event(event_id)
        event.update_time_range(time_range)
        self._store.save(event)
        logger.info("Moved event %s", event.id)
        return event

    def update_event_color(self, event_id: str, color: EventColor) -> Event:
        event = self.get_event(event_id)
        event.update_color(color)
        self._store.save(event)
        return event

    def cancel_event(self, event_id: str) -> Event:
        event = self.get_event(event_id)
        event.cancel()
        self._store.save(event)
        logger.info("Cancelled event %s", event.id)
        return event

    def restore_event(self, event_id: str) -> Event:
        event = self.get_event(event_id)
        event.restore()
        self._store.save(event)
        logger.info("Restored event %s", event.id)
        return event

    def delete_event(self, event_id: str) -> None:
        try:
            self._store.delete(EventId.from_string(event_id))
        except NotFoundError as exc:
            raise EventNotFoundError(event_id) from exc
        logger.info("Deleted event %s", event_id)
