"""Recurring event service - orchestration for series and their occurrences.

The recurring store raises ``NotFoundError`` from ``find_by_id`` instead of
returning None; it is mapped to ``RecurringEventNotFoundError`` here.
"""

import logging
from datetime import datetime

from calendars.domain import (
    CalendarId,
    EventColor,
    EventId,
    RecurrenceRule,
    RecurringEvent,
    ResolvedOccurrence,
    TimeRange,
)
from calendars.domain.clock import SYSTEM_CLOCK, Clock
from calendars.domain.errors import RecurringEventNotFoundError
from calendars.services.event_service import require_writable_calendar
from calendars.stores.errors import NotFoundError
from calendars.stores.interfaces import CalendarStore, RecurringEventStore

logger = logging.getLogger(__name__)


class RecurringEventService:
    """Service for recurring event operations."""

    def __init__(
        self,
        store: RecurringEventStore,
        calendar_store: CalendarStore,
        clock: Clock = SYSTEM_CLOCK,
    ) -> None:
        self._store = store
        self._calendar_store = calendar_store
        self._clock = clock

    def create_recurring_event(
        self,
        calendar_id: str,
        title: str,
        time_range: TimeRange,
        rule: RecurrenceRule,
        description: str | None = None,
        color: EventColor = EventColor(),
        is_all_day: bool = False,
    ) -> RecurringEvent:
        """Create and persist a series in an existing, non-archived calendar.

        Raises:
            InvalidIdentifierError: If the calendar_id is not a valid UUID.
            CalendarNotFoundError: If the calendar does not exist.
            CalendarArchivedError: If the calendar is archived.
        """
        parsed = require_writable_calendar(self._calendar_store, calendar_id)
        event = RecurringEvent.create(
            parsed,
            title,
            description,
            time_range,
            rule,
            color=color,
            is_all_day=is_all_day,
            clock=self._clock,
        )
        self._store.save(event)
        logger.info("Created recurring event %s (%s)", event.id, rule.frequency)
        return event

    def get_recurring_event(self, event_id: str) -> RecurringEvent:
        """Return a series with its exceptions.

        Raises:
            InvalidIdentifierError: If the event_id is not a valid UUID.
            RecurringEventNotFoundError: If the series does not exist.
        """
        try:
            return self._store.find_by_id(EventId.from_string(event_id))
        except NotFoundError as exc:
            raise RecurringEventNotFoundError(event_id) from exc

    def list_recurring_events(self, calendar_id: str) -> list[RecurringEvent]:
        return self._store.find_by_calendar(CalendarId.from_string(calendar_id))

    def cancel_recurring_event(self, event_id: str) -> RecurringEvent:
        event = self.get_recurring_event(event_id)
        event.cancel()
        self._store.save(event)
        logger.info("Cancelled recurring event %s", event.id)
        return event

    def restore_recurring_event(self, event_id: str) -> RecurringEvent:
        event = self.get_recurring_event(event_id)
        event.restore()
        self._store.save(event)
        logger.info("Restored recurring event %s", event.id)
        return event

    def cancel_occurrence(self, event_id: str, original_starts_at: datetime) -> RecurringEvent:
        event = self.get_recurring_event(event_id)
        event.cancel_occurrence(original_starts_at)
        self._store.save(event)
        logger.info("Cancelled occurrence %s of %s", original_starts_at, event.id)
        return event

    def reschedule_occurrence(
        self, event_id: str, original_starts_at: datetime, new_time_range: TimeRange
    ) -> RecurringEvent:
        event = self.get_recurring_event(event_id)
        event.reschedule_occurrence(original_starts_at, new_time_range)
        self._store.save(event)
        logger.info("Rescheduled occurrence %s of %s", original_starts_at, event.id)
        return event

    def restore_occurrence(self, event_id: str, original_starts_at: datetime) -> RecurringEvent:
        event = self.get_recurring_event(event_id)
        event.restore_occurrence(original_starts_at)
        self._store.save(event)
        logger.info("Restored occurrence %s of %s", original_starts_at, event.id)
        return event

    def resolve_occurrence(
        self, event_id: str, original_starts_at: datetime
    ) -> ResolvedOccurrence:
        return self.get_recurring_event(event_id).resolve(original_starts_at)

    def delete_recurring_event(self, event_id: str) -> None:
        try:
            self._store.delete(EventId.from_string(event_id))
        except NotFoundError as exc:
            raise RecurringEventNotFoundError(event_id) from exc
        logger.info("Deleted recurring event %s", event_id)
