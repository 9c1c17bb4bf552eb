from calendars.domain.clock import Clock, FixedClock, SystemClock
from calendars.domain.models import Calendar, Event
from calendars.domain.recurrence import (
    Cancelled,
    OccurrenceStatus,
    RecurrenceException,
    RecurrenceRule,
    RecurringEvent,
    Rescheduled,
    ResolvedOccurrence,
)
from calendars.domain.value_objects import CalendarId, EventColor, EventId, Frequency, TimeRange

__all__ = [
    "Calendar",
    "Event",
    "RecurringEvent",
    "RecurrenceRule",
    "RecurrenceException",
    "Cancelled",
    "Rescheduled",
    "ResolvedOccurrence",
    "OccurrenceStatus",
    "CalendarId",
    "EventId",
    "TimeRange",
    "Frequency",
    "EventColor",
    "Clock",
    "SystemClock",
    "FixedClock",
]
