"""Pytest configuration and shared fixtures."""

from dataclasses import dataclass
from datetime import UTC, datetime

import pytest

from calendars.domain import Calendar, FixedClock
from calendars.stores.django_store import (
    DjangoCalendarStore,
    DjangoEventStore,
    DjangoRecurringEventStore,
)
from calendars.stores.interfaces import CalendarStore, EventStore, RecurringEventStore
from calendars.stores.memory_store import (
    InMemoryCalendarStore,
    InMemoryEventStore,
    InMemoryRecurringEventStore,
)


@dataclass
class Stores:
    calendars: CalendarStore
    events: EventStore
    recurring: RecurringEventStore


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 1, 1, 8, 0, tzinfo=UTC))


@pytest.fixture(params=["memory", pytest.param("django", marks=pytest.mark.django_db)])
def stores(request, clock: FixedClock) -> Stores:
    """Every store contract test runs against both backends."""
    if request.param == "django":
        return Stores(
            calendars=DjangoCalendarStore(clock),
            events=DjangoEventStore(clock),
            recurring=DjangoRecurringEventStore(clock),
        )
    return Stores(
        calendars=InMemoryCalendarStore(clock),
        events=InMemoryEventStore(clock),
        recurring=InMemoryRecurringEventStore(clock),
    )


@pytest.fixture
def work_calendar(clock: FixedClock) -> Calendar:
    return Calendar.create("Work", "Day job", clock=clock)
