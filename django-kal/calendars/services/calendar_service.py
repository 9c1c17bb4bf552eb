"""Calendar service.

Services:
- Depend only on interfaces (stores)
- Parse raw identifiers and let domain invariants reject bad input
- Perform orchestration (load, mutate, save) and error mapping
- Return domain models or raise domain errors
"""

import logging

from calendars.domain import Calendar, CalendarId
from calendars.domain.clock import SYSTEM_CLOCK, Clock
from calendars.domain.errors import CalendarNotFoundError
from calendars.stores.errors import NotFoundError
from calendars.stores.interfaces import CalendarStore

logger = logging.getLogger(__name__)


class CalendarService:
    """Service for calendar operations."""

    def __init__(self, store: CalendarStore, clock: Clock = SYSTEM_CLOCK) -> None:
        self._store = store
        self._clock = clock

    def create_calendar(self, name: str, description: str | None = None) -> Calendar:
        """Create and persist a calendar.

        Raises:
            EmptyNameError: If the name is empty.
        """
        calendar = Calendar.create(name, description, clock=self._clock)
        self._store.save(calendar)
        logger.info("Created calendar %s", calendar.id)
        return calendar

    def get_calendar(self, calendar_id: str) -> Calendar:
        """Return a calendar by ID.

        Raises:
            InvalidIdentifierError: If the calendar_id is not a valid UUID.
            CalendarNotFoundError: If the calendar does not exist.
        """
        calendar = self._store.find_by_id(CalendarId.from_string(calendar_id))
        if calendar is None:
            raise CalendarNotFoundError(calendar_id)
        return calendar

    def list_active_calendars(self) -> list[Calendar]:
        return self._store.find_all_active()

    def rename_calendar(self, calendar_id: str, name: str) -> Calendar:
        calendar = self.get_calendar(calendar_id)
        calendar.rename(name)
        self._store.save(calendar)
        logger.info("Renamed calendar %s", calendar.id)
        return calendar

    def update_calendar_description(
        self, calendar_id: str, description: str | None
    ) -> Calendar:
        calendar = self.get_calendar(calendar_id)
        calendar.update_description(description)
        self._store.save(calendar)
        return calendar

    def archive_calendar(self, calendar_id: str) -> Calendar:
        calendar = self.get_calendar(calendar_id)
        calendar.archive()
        self._store.save(calendar)
        logger.info("Archived calendar %s", calendar.id)
        return calendar

    def unarchive_calendar(self, calendar_id: str) -> Calendar:
        calendar = self.get_calendar(calendar_id)
        calendar.unarchive()
        self._store.save(calendar)
        logger.info("Unarchived calendar %s", calendar.id)
        return calendar

    def delete_calendar(self, calendar_id: str) -> None:
        """Delete a calendar.

        Raises:
            InvalidIdentifierError: If the calendar_id is not a valid UUID.
            CalendarNotFoundError: If the calendar does not exist.
        """
        try:
            self._store.delete(CalendarId.from_string(calendar_id))
        except NotFoundError as exc:
            raise CalendarNotFoundError(calendar_id) from exc
        logger.info("Deleted calendar %s", calendar_id)
