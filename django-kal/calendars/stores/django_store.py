"""Django ORM implementation of the stores.

Rows move between the ORM and the mappers as plain dicts built from the row
dataclasses, so the ORM never sees a domain object.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict, fields

from django.db import DatabaseError as OrmDatabaseError
from django.db import IntegrityError, transaction
from django.db.models import Model

from calendars import models
from calendars.domain import (
    Calendar,
    CalendarId,
    Event,
    EventId,
    RecurringEvent,
    TimeRange,
)
from calendars.domain.clock import SYSTEM_CLOCK, Clock
from calendars.stores.errors import ConstraintViolationError, DatabaseError, NotFoundError
from calendars.stores.interfaces import CalendarStore, EventStore, RecurringEventStore
from calendars.stores.mappers import (
    CalendarMapper,
    EventMapper,
    RecurrenceMapper,
    format_datetime,
)
from calendars.stores.rows import (
    CalendarRow,
    EventRow,
    RecurrenceExceptionRow,
    RecurrenceRow,
)

logger = logging.getLogger(__name__)

# Columns never rewritten by an upsert.
IMMUTABLE_COLUMNS = frozenset({"id", "calendar_id", "created_at"})

CALENDAR_COLUMNS = [f.name for f in fields(CalendarRow)]
EVENT_COLUMNS = [f.name for f in fields(EventRow)]
RECURRENCE_COLUMNS = [f.name for f in fields(RecurrenceRow)]
EXCEPTION_COLUMNS = [f.name for f in fields(RecurrenceExceptionRow)]


@contextmanager
def translate_errors() -> Iterator[None]:
    """Re-raise Django database failures as store errors."""
    try:
        yield
    except IntegrityError as exc:
        logger.warning("Constraint violation: %s", exc)
        raise ConstraintViolationError(str(exc)) from exc
    except OrmDatabaseError as exc:
        logger.error("Database error: %s", exc)
        raise DatabaseError(str(exc)) from exc


def _upsert(model: type[Model], values: dict) -> None:
    defaults = {
        column: value for column, value in values.items() if column not in IMMUTABLE_COLUMNS
    }
    _, created = model.objects.update_or_create(
        id=values["id"], defaults=defaults, create_defaults=values
    )
    logger.debug("%s %s %s", "Inserted" if created else "Updated", model.__name__, values["id"])


def _delete(model: type[Model], record_id: str) -> None:
    deleted, _ = model.objects.filter(id=record_id).delete()
    if deleted == 0:
        raise NotFoundError(record_id)


class DjangoCalendarStore(CalendarStore):
    """Calendar store backed by the ``calendars`` table."""

    def __init__(self, clock: Clock = SYSTEM_CLOCK) -> None:
        self._clock = clock

    def save(self, calendar: Calendar) -> None:
        with translate_errors():
            _upsert(models.Calendar, asdict(CalendarMapper.to_row(calendar)))

    def find_by_id(self, calendar_id: CalendarId) -> Calendar | None:
        with translate_errors():
            values = (
                models.Calendar.objects.filter(id=str(calendar_id))
                .values(*CALENDAR_COLUMNS)
                .first()
            )
        if values is None:
            return None
        return CalendarMapper.to_domain(CalendarRow(**values), clock=self._clock)

    def find_all_active(self) -> list[Calendar]:
        with translate_errors():
            rows = list(
                models.Calendar.objects.filter(is_archived=0)
                .order_by("name")
                .values(*CALENDAR_COLUMNS)
            )
        return [CalendarMapper.to_domain(CalendarRow(**values), clock=self._clock) for values in rows]

    def delete(self, calendar_id: CalendarId) -> None:
        with translate_errors():
            _delete(models.Calendar, str(calendar_id))


class DjangoEventStore(EventStore):
    """Event store backed by the ``events`` table."""

    def __init__(self, clock: Clock = SYSTEM_CLOCK) -> None:
        self._clock = clock

    def save(self, event: Event) -> None:
        with translate_errors():
            _upsert(models.Event, asdict(EventMapper.to_row(event)))

    def find_by_id(self, event_id: EventId) -> Event | None:
        with translate_errors():
            values = (
                models.Event.objects.filter(id=str(event_id)).values(*EVENT_COLUMNS).first()
            )
        if values is None:
            return None
        return EventMapper.to_domain(EventRow(**values), clock=self._clock)

    def find_by_calendar(self, calendar_id: CalendarId) -> list[Event]:
        with translate_errors():
            rows = list(
                models.Event.objects.filter(calendar_id=str(calendar_id))
                .order_by("starts_at")
                .values(*EVENT_COLUMNS)
            )
        return [EventMapper.to_domain(EventRow(**values), clock=self._clock) for values in rows]

    def find_in_range(self, calendar_id: CalendarId, time_range: TimeRange) -> list[Event]:
        with translate_errors():
            rows = list(
                models.Event.objects.filter(
                    calendar_id=str(calendar_id),
                    is_cancelled=0,
                    starts_at__lt=format_datetime(time_range.ends_at),
                    ends_at__gt=format_datetime(time_range.starts_at),
                )
                .order_by("starts_at")
                .values(*EVENT_COLUMNS)
            )
        return [EventMapper.to_domain(EventRow(**values), clock=self._clock) for values in rows]

    def delete(self, event_id: EventId) -> None:
        with translate_errors():
            _delete(models.Event, str(event_id))


class DjangoRecurringEventStore(RecurringEventStore):
    """Recurring event store backed by ``recurrences`` and ``recurrence_exceptions``."""

    def __init__(self, clock: Clock = SYSTEM_CLOCK) -> None:
        self._clock = clock

    def save(self, event: RecurringEvent) -> None:
        row, exception_rows = RecurrenceMapper.to_rows(event)
        with translate_errors(), transaction.atomic():
            _upsert(models.RecurringEvent, asdict(row))
            models.RecurrenceException.objects.filter(recurrence_id=row.id).delete()
            models.RecurrenceException.objects.bulk_create(
                [models.RecurrenceException(**asdict(ex_row)) for ex_row in exception_rows]
            )

    def find_by_id(self, event_id: EventId) -> RecurringEvent:
        with translate_errors():
            values = (
                models.RecurringEvent.objects.filter(id=str(event_id))
                .values(*RECURRENCE_COLUMNS)
                .first()
            )
            if values is None:
                raise NotFoundError(str(event_id))
            exception_rows = self._exception_rows([values["id"]])
        return self._to_domain(values, exception_rows.get(values["id"], []))

    def find_by_calendar(self, calendar_id: CalendarId) -> list[RecurringEvent]:
        with translate_errors():
            rows = list(
                models.RecurringEvent.objects.filter(calendar_id=str(calendar_id))
                .order_by("starts_at")
                .values(*RECURRENCE_COLUMNS)
            )
            exception_rows = self._exception_rows([values["id"] for values in rows])
        return [
            self._to_domain(values, exception_rows.get(values["id"], [])) for values in rows
        ]

    def delete(self, event_id: EventId) -> None:
        with translate_errors(), transaction.atomic():
            _delete(models.RecurringEvent, str(event_id))

    def _exception_rows(
        self, recurrence_ids: list[str]
    ) -> dict[str, list[RecurrenceExceptionRow]]:
        grouped: dict[str, list[RecurrenceExceptionRow]] = {}
        if not recurrence_ids:
            return grouped
        queryset = (
            models.RecurrenceException.objects.filter(recurrence_id__in=recurrence_ids)
            .order_by("recurrence_id", "original_starts_at")
            .values(*EXCEPTION_COLUMNS)
        )
        for values in queryset:
            grouped.setdefault(values["recurrence_id"], []).append(
                RecurrenceExceptionRow(**values)
            )
        return grouped

    def _to_domain(
        self, values: dict, exception_rows: list[RecurrenceExceptionRow]
    ) -> RecurringEvent:
        return RecurrenceMapper.to_domain(
            RecurrenceRow(**values), exception_rows, clock=self._clock
        )
