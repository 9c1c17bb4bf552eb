"""Unit tests for the application services.

Services run against the dict-backed stores here.
Run with: pytest tests/test_services.py -v
"""

import logging
from datetime import UTC, datetime, timedelta

import pytest

from calendars.domain import EventColor, Frequency, OccurrenceStatus, RecurrenceRule, TimeRange
from calendars.domain.errors import (
    CalendarArchivedError,
    CalendarNotFoundError,
    EmptyNameError,
    EmptyTitleError,
    ErrorCode,
    EventNotFoundError,
    InvalidIdentifierError,
    RecurringEventNotFoundError,
)
from calendars.services import CalendarService, EventService, RecurringEventService
from calendars.stores.memory_store import (
    InMemoryCalendarStore,
    InMemoryEventStore,
    InMemoryRecurringEventStore,
)

UNKNOWN_ID = "9b2f6a4e-3c1d-4e8f-a7b6-5d4c3b2a1f0e"


def _range(start_hour: int, end_hour: int, day: int = 1) -> TimeRange:
    return TimeRange(
        datetime(2024, 1, day, start_hour, tzinfo=UTC),
        datetime(2024, 1, day, end_hour, tzinfo=UTC),
    )


@pytest.fixture
def calendar_store(clock) -> InMemoryCalendarStore:
    return InMemoryCalendarStore(clock)


@pytest.fixture
def calendar_service(calendar_store, clock) -> CalendarService:
    return CalendarService(calendar_store, clock)


@pytest.fixture
def event_service(calendar_store, clock) -> EventService:
    return EventService(InMemoryEventStore(clock), calendar_store, clock)


@pytest.fixture
def recurring_service(calendar_store, clock) -> RecurringEventService:
    return RecurringEventService(InMemoryRecurringEventStore(clock), calendar_store, clock)


@pytest.fixture
def calendar_id(calendar_service) -> str:
    return str(calendar_service.create_calendar("Work").id)


class TestCalendarService:
    """Tests for CalendarService."""

    def test_create_and_get(self, calendar_service, clock):
        """A created calendar can be fetched by its string id."""
        created = calendar_service.create_calendar("Work", "Day job")
        fetched = calendar_service.get_calendar(str(created.id))
        assert fetched == created
        assert fetched.created_at == clock.now()

    def test_create_rejects_empty_name(self, calendar_service):
        """Nothing is stored when the name is empty."""
        with pytest.raises(EmptyNameError):
            calendar_service.create_calendar("")
        assert calendar_service.list_active_calendars() == []

    def test_get_unknown(self, calendar_service):
        """An unknown id raises CalendarNotFoundError carrying the id."""
        with pytest.raises(CalendarNotFoundError) as excinfo:
            calendar_service.get_calendar(UNKNOWN_ID)
        assert excinfo.value.calendar_id == UNKNOWN_ID
        assert excinfo.value.code is ErrorCode.CALENDAR_NOT_FOUND

    def test_get_malformed_id(self, calendar_service):
        """A malformed id raises InvalidIdentifierError."""
        with pytest.raises(InvalidIdentifierError):
            calendar_service.get_calendar("work")

    def test_rename_persists(self, calendar_service, calendar_id, clock):
        """rename_calendar is visible on the next read."""
        clock.advance(timedelta(minutes=1))
        calendar_service.rename_calendar(calendar_id, "Office")
        fetched = calendar_service.get_calendar(calendar_id)
        assert fetched.name == "Office"
        assert fetched.updated_at == clock.now()

    def test_update_description(self, calendar_service, calendar_id):
        """update_calendar_description is visible on the next read."""
        calendar_service.update_calendar_description(calendar_id, "Meetings")
        assert calendar_service.get_calendar(calendar_id).description == "Meetings"

    def test_archive_hides_from_active_list(self, calendar_service, calendar_id):
        """Archived calendars drop out of the active list until unarchived."""
        calendar_service.archive_calendar(calendar_id)
        assert calendar_service.list_active_calendars() == []
        calendar_service.unarchive_calendar(calendar_id)
        assert [str(c.id) for c in calendar_service.list_active_calendars()] == [calendar_id]

    def test_delete(self, calendar_service, calendar_id):
        """A deleted calendar is gone and deleting twice fails."""
        calendar_service.delete_calendar(calendar_id)
        with pytest.raises(CalendarNotFoundError):
            calendar_service.get_calendar(calendar_id)
        with pytest.raises(CalendarNotFoundError):
            calendar_service.delete_calendar(calendar_id)

    def test_logs_creation(self, calendar_service, caplog):
        """Creating a calendar is logged at INFO."""
        with caplog.at_level(logging.INFO, logger="calendars"):
            created = calendar_service.create_calendar("Work")
        assert f"Created calendar {created.id}" in caplog.text


class TestEventService:
    """Tests for EventService."""

    def test_create_and_get(self, event_service, calendar_id):
        """A created event can be fetched by its string id."""
        created = event_service.create_event(
            calendar_id, "Standup", _range(9, 10), color=EventColor(3)
        )
        fetched = event_service.get_event(str(created.id))
        assert fetched == created
        assert str(fetched.calendar_id) == calendar_id

    def test_create_in_unknown_calendar(self, event_service):
        """Events need an existing calendar."""
        with pytest.raises(CalendarNotFoundError):
            event_service.create_event(UNKNOWN_ID, "Standup", _range(9, 10))

    def test_create_in_archived_calendar(self, event_service, calendar_service, calendar_id):
        """Archived calendars accept no new events."""
        calendar_service.archive_calendar(calendar_id)
        with pytest.raises(CalendarArchivedError) as excinfo:
            event_service.create_event(calendar_id, "Standup", _range(9, 10))
        assert excinfo.value.calendar_id == calendar_id

    def test_create_rejects_empty_title(self, event_service, calendar_id):
        """An empty title raises EmptyTitleError and stores nothing."""
        with pytest.raises(EmptyTitleError):
            event_service.create_event(calendar_id, "", _range(9, 10))
        assert event_service.list_events(calendar_id) == []

    def test_get_unknown(self, event_service):
        """An unknown id raises EventNotFoundError."""
        with pytest.raises(EventNotFoundError):
            event_service.get_event(UNKNOWN_ID)

    def test_updates_persist(self, event_service, calendar_id, clock):
        """Each update is visible on the next read."""
        event_id = str(event_service.create_event(calendar_id, "Standup", _range(9, 10)).id)
        clock.advance(timedelta(minutes=1))

        event_service.update_event_title(event_id, "Daily")
        event_service.update_event_description(event_id, "Round the table")
        event_service.update_event_time_range(event_id, _range(10, 11))
        event_service.update_event_color(event_id, EventColor(9))

        fetched = event_service.get_event(event_id)
        assert fetched.title == "Daily"
        assert fetched.description == "Round the table"
        assert fetched.time_range == _range(10, 11)
        assert fetched.color == EventColor(9)
        assert fetched.updated_at == clock.now()

    def test_update_title_rejects_empty(self, event_service, calendar_id):
        """An empty title is rejected and the stored title kept."""
        event_id = str(event_service.create_event(calendar_id, "Standup", _range(9, 10)).id)
        with pytest.raises(EmptyTitleError):
            event_service.update_event_title(event_id, "")
        assert event_service.get_event(event_id).title == "Standup"

    def test_cancel_hides_from_range_queries(self, event_service, calendar_id):
        """Cancelled events leave range queries until restored."""
        event_id = str(event_service.create_event(calendar_id, "Standup", _range(9, 10)).id)
        window = _range(0, 23)

        event_service.cancel_event(event_id)
        assert event_service.list_events_in_range(calendar_id, window) == []
        assert len(event_service.list_events(calendar_id)) == 1

        event_service.restore_event(event_id)
        assert len(event_service.list_events_in_range(calendar_id, window)) == 1

    def test_find_conflicts(self, event_service, calendar_id):
        """Overlapping live events of the same calendar are conflicts."""
        standup = event_service.create_event(calendar_id, "Standup", _range(9, 11))
        review = event_service.create_event(calendar_id, "Review", _range(10, 12))
        event_service.create_event(calendar_id, "Lunch", _range(12, 13))

        conflicts = event_service.find_conflicts(str(standup.id))
        assert [event.id for event in conflicts] == [review.id]

        event_service.cancel_event(str(review.id))
        assert event_service.find_conflicts(str(standup.id)) == []

    def test_delete(self, event_service, calendar_id):
        """A deleted event is gone and deleting twice fails."""
        event_id = str(event_service.create_event(calendar_id, "Standup", _range(9, 10)).id)
        event_service.delete_event(event_id)
        with pytest.raises(EventNotFoundError):
            event_service.get_event(event_id)
        with pytest.raises(EventNotFoundError):
            event_service.delete_event(event_id)


class TestRecurringEventService:
    """Tests for RecurringEventService."""

    JAN_8 = datetime(2024, 1, 8, 9, tzinfo=UTC)

    @pytest.fixture
    def series_id(self, recurring_service, calendar_id) -> str:
        series = recurring_service.create_recurring_event(
            calendar_id, "Planning", _range(9, 10), RecurrenceRule(Frequency.WEEKLY)
        )
        return str(series.id)

    def test_create_and_get(self, recurring_service, series_id):
        """A created series can be fetched with an empty exception map."""
        series = recurring_service.get_recurring_event(series_id)
        assert series.title == "Planning"
        assert series.exceptions == {}

    def test_create_in_archived_calendar(
        self, recurring_service, calendar_service, calendar_id
    ):
        """Archived calendars accept no new series."""
        calendar_service.archive_calendar(calendar_id)
        with pytest.raises(CalendarArchivedError):
            recurring_service.create_recurring_event(
                calendar_id, "Planning", _range(9, 10), RecurrenceRule(Frequency.DAILY)
            )

    def test_get_unknown(self, recurring_service):
        """An unknown id raises RecurringEventNotFoundError."""
        with pytest.raises(RecurringEventNotFoundError) as excinfo:
            recurring_service.get_recurring_event(UNKNOWN_ID)
        assert excinfo.value.event_id == UNKNOWN_ID

    def test_occurrence_lifecycle(self, recurring_service, series_id):
        """Cancel, reschedule and restore one occurrence through the store."""
        recurring_service.cancel_occurrence(series_id, self.JAN_8)
        assert recurring_service.resolve_occurrence(series_id, self.JAN_8).is_cancelled

        moved = _range(14, 15, day=8)
        recurring_service.reschedule_occurrence(series_id, self.JAN_8, moved)
        resolved = recurring_service.resolve_occurrence(series_id, self.JAN_8)
        assert resolved.status is OccurrenceStatus.RESCHEDULED
        assert resolved.time_range == moved

        recurring_service.restore_occurrence(series_id, self.JAN_8)
        resolved = recurring_service.resolve_occurrence(series_id, self.JAN_8)
        assert resolved.status is OccurrenceStatus.SCHEDULED
        assert resolved.time_range == _range(9, 10, day=8)

    def test_cancel_series(self, recurring_service, series_id):
        """A cancelled series cancels every occurrence until restored."""
        recurring_service.cancel_recurring_event(series_id)
        assert recurring_service.resolve_occurrence(series_id, self.JAN_8).is_cancelled
        recurring_service.restore_recurring_event(series_id)
        assert not recurring_service.resolve_occurrence(series_id, self.JAN_8).is_cancelled

    def test_list_recurring_events(self, recurring_service, calendar_id, series_id):
        """Series are listed per calendar."""
        listed = recurring_service.list_recurring_events(calendar_id)
        assert [str(series.id) for series in listed] == [series_id]

    def test_delete(self, recurring_service, series_id):
        """A deleted series is gone and deleting twice fails."""
        recurring_service.delete_recurring_event(series_id)
        with pytest.raises(RecurringEventNotFoundError):
            recurring_service.get_recurring_event(series_id)
        with pytest.raises(RecurringEventNotFoundError):
            recurring_service.delete_recurring_event(series_id)
