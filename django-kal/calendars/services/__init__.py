from calendars.services.calendar_service import CalendarService
from calendars.services.event_service import EventService
from calendars.services.recurring_event_service import RecurringEventService

__all__ = [
    "CalendarService",
    "EventService",
    "RecurringEventService",
]
