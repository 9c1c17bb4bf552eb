"""Conversion between domain entities and flat rows.

This is the only place storage formats leak into the domain:

- instants are written as ISO 8601 text normalized to ``+00:00``
  (microseconds only when non-zero) and read back with Django's
  ``parse_datetime``; only the full ``YYYY-MM-DDThh:mm:ss[.ffffff]+hh:mm`` shape
  is accepted, since the ORM store compares and orders the text as strings
- flags are the integers 0 and 1, anything else on read is rejected
- ``Frequency`` is its upper-case name, ``EventColor`` its raw integer

Reads fail closed with a ``MapperError``; a domain invariant broken by a
stored row surfaces as ``MappedDomainError`` chained to the domain error.
"""

import re
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from django.utils.dateparse import parse_datetime

from calendars.domain.clock import SYSTEM_CLOCK, Clock
from calendars.domain.errors import DomainError, InvalidIdentifierError
from calendars.domain.models import Calendar, Event
from calendars.domain.recurrence import (
    Cancelled,
    RecurrenceException,
    RecurrenceRule,
    RecurringEvent,
    Rescheduled,
)
from calendars.domain.value_objects import (
    CalendarId,
    EventColor,
    EventId,
    Frequency,
    TimeRange,
)
from calendars.stores.errors import (
    InvalidDataError,
    InvalidDateError,
    InvalidIdError,
    MappedDomainError,
    MapperError,
)
from calendars.stores.rows import (
    CalendarRow,
    EventRow,
    RecurrenceExceptionRow,
    RecurrenceRow,
)


# Zero-padded fields, a "T" separator and a colon in the offset.
TIMESTAMP_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{1,6})?(?:Z|[+-]\d{2}:\d{2})"
)


def format_datetime(value: datetime) -> str:
    return value.astimezone(UTC).isoformat()


def parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str):
        raise InvalidDateError(repr(value))
    if TIMESTAMP_RE.fullmatch(value) is None:
        raise InvalidDateError(value)
    try:
        parsed = parse_datetime(value)
    except ValueError as exc:
        raise InvalidDateError(value) from exc
    if parsed is None or parsed.tzinfo is None:
        raise InvalidDateError(value)
    return parsed.astimezone(UTC)


def encode_flag(value: bool) -> int:
    return 1 if value else 0


def decode_flag(value: int, column: str) -> bool:
    if isinstance(value, int) and value in (0, 1):
        return value == 1
    raise InvalidDataError(f"{column} must be 0 or 1, got {value!r}")


def _parse_calendar_id(value: str) -> CalendarId:
    try:
        return CalendarId.from_string(value)
    except InvalidIdentifierError as exc:
        raise InvalidIdError(value) from exc


def _parse_event_id(value: str) -> EventId:
    try:
        return EventId.from_string(value)
    except InvalidIdentifierError as exc:
        raise InvalidIdError(value) from exc


@contextmanager
def _domain_errors() -> Iterator[None]:
    try:
        yield
    except MapperError:
        raise
    except DomainError as exc:
        raise MappedDomainError(exc) from exc


class CalendarMapper:
    """Maps Calendar entities to and from calendars rows."""

    @staticmethod
    def to_row(calendar: Calendar) -> CalendarRow:
        return CalendarRow(
            id=str(calendar.id),
            name=calendar.name,
            description=calendar.description,
            is_archived=encode_flag(calendar.is_archived),
            created_at=format_datetime(calendar.created_at),
            updated_at=format_datetime(calendar.updated_at),
        )

    @staticmethod
    def to_domain(row: CalendarRow, clock: Clock = SYSTEM_CLOCK) -> Calendar:
        calendar_id = _parse_calendar_id(row.id)
        is_archived = decode_flag(row.is_archived, "is_archived")
        created_at = parse_timestamp(row.created_at)
        updated_at = parse_timestamp(row.updated_at)

        with _domain_errors():
            return Calendar(
                id=calendar_id,
                name=row.name,
                description=row.description,
                is_archived=is_archived,
                created_at=created_at,
                updated_at=updated_at,
                clock=clock,
            )


class EventMapper:
    """Maps Event entities to and from events rows."""

    @staticmethod
    def to_row(event: Event) -> EventRow:
        return EventRow(
            id=str(event.id),
            calendar_id=str(event.calendar_id),
            title=event.title,
            description=event.description,
            starts_at=format_datetime(event.time_range.starts_at),
            ends_at=format_datetime(event.time_range.ends_at),
            color=event.color.value,
            is_all_day=encode_flag(event.is_all_day),
            is_cancelled=encode_flag(event.is_cancelled),
            created_at=format_datetime(event.created_at),
            updated_at=format_datetime(event.updated_at),
        )

    @staticmethod
    def to_domain(row: EventRow, clock: Clock = SYSTEM_CLOCK) -> Event:
        event_id = _parse_event_id(row.id)
        calendar_id = _parse_calendar_id(row.calendar_id)
        starts_at = parse_timestamp(row.starts_at)
        ends_at = parse_timestamp(row.ends_at)
        created_at = parse_timestamp(row.created_at)
        updated_at = parse_timestamp(row.updated_at)
        is_all_day = decode_flag(row.is_all_day, "is_all_day")
        is_cancelled = decode_flag(row.is_cancelled, "is_cancelled")

        with _domain_errors():
            return Event(
                id=event_id,
                calendar_id=calendar_id,
                title=row.title,
                description=row.description,
                time_range=TimeRange(starts_at, ends_at),
                color=EventColor(row.color),
                is_all_day=is_all_day,
                is_cancelled=is_cancelled,
                created_at=created_at,
                updated_at=updated_at,
                clock=clock,
            )


class RecurrenceMapper:
    """Maps RecurringEvent entities to a recurrences row plus its exception rows."""

    @staticmethod
    def to_row(event: RecurringEvent) -> RecurrenceRow:
        until = event.rule.until
        return RecurrenceRow(
            id=str(event.id),
            calendar_id=str(event.calendar_id),
            title=event.title,
            description=event.description,
            starts_at=format_datetime(event.time_range.starts_at),
            ends_at=format_datetime(event.time_range.ends_at),
            frequency=str(event.rule.frequency),
            interval=event.rule.interval,
            until=format_datetime(until) if until is not None else None,
            color=event.color.value,
            is_all_day=encode_flag(event.is_all_day),
            is_cancelled=encode_flag(event.is_cancelled),
            created_at=format_datetime(event.created_at),
            updated_at=format_datetime(event.updated_at),
        )

    @staticmethod
    def exception_to_row(
        exception: RecurrenceException, recurrence_id: EventId
    ) -> RecurrenceExceptionRow:
        match exception.modification:
            case Cancelled():
                new_starts_at, new_ends_at, is_cancelled = None, None, 1
            case Rescheduled(new_time_range=new_range):
                new_starts_at = format_datetime(new_range.starts_at)
                new_ends_at = format_datetime(new_range.ends_at)
                is_cancelled = 0

        return RecurrenceExceptionRow(
            recurrence_id=str(recurrence_id),
            original_starts_at=format_datetime(exception.original_starts_at),
            new_starts_at=new_starts_at,
            new_ends_at=new_ends_at,
            is_cancelled=is_cancelled,
        )

    @classmethod
    def to_rows(
        cls, event: RecurringEvent
    ) -> tuple[RecurrenceRow, list[RecurrenceExceptionRow]]:
        """Series row plus the full exception set, ordered by original start."""
        exception_rows = [
            cls.exception_to_row(event.exceptions[key], event.id)
            for key in sorted(event.exceptions)
        ]
        return cls.to_row(event), exception_rows

    @staticmethod
    def exception_to_domain(row: RecurrenceExceptionRow) -> RecurrenceException:
        original_starts_at = parse_timestamp(row.original_starts_at)

        if decode_flag(row.is_cancelled, "is_cancelled"):
            return RecurrenceException.cancelled(original_starts_at)

        if row.new_starts_at is None or row.new_ends_at is None:
            raise InvalidDataError(
                "Exception must be cancelled or carry both new_starts_at and new_ends_at"
            )

        new_starts_at = parse_timestamp(row.new_starts_at)
        new_ends_at = parse_timestamp(row.new_ends_at)
        with _domain_errors():
            new_range = TimeRange(new_starts_at, new_ends_at)
        return RecurrenceException.rescheduled(original_starts_at, new_range)

    @classmethod
    def to_domain(
        cls,
        row: RecurrenceRow,
        exception_rows: Iterable[RecurrenceExceptionRow],
        clock: Clock = SYSTEM_CLOCK,
    ) -> RecurringEvent:
        event_id = _parse_event_id(row.id)
        calendar_id = _parse_calendar_id(row.calendar_id)
        starts_at = parse_timestamp(row.starts_at)
        ends_at = parse_timestamp(row.ends_at)
        until = parse_timestamp(row.until) if row.until is not None else None
        created_at = parse_timestamp(row.created_at)
        updated_at = parse_timestamp(row.updated_at)
        is_all_day = decode_flag(row.is_all_day, "is_all_day")
        is_cancelled = decode_flag(row.is_cancelled, "is_cancelled")

        exceptions: dict[datetime, RecurrenceException] = {}
        for exception_row in exception_rows:
            if exception_row.recurrence_id != row.id:
                raise InvalidDataError(
                    f"Exception belongs to {exception_row.recurrence_id!r}, not {row.id!r}"
                )
            exception = cls.exception_to_domain(exception_row)
            if exception.original_starts_at in exceptions:
                raise InvalidDataError(
                    f"Duplicate exception for {exception_row.original_starts_at!r}"
                )
            exceptions[exception.original_starts_at] = exception

        with _domain_errors():
            rule = RecurrenceRule(
                frequency=Frequency.parse(row.frequency),
                interval=row.interval,
                until=until,
            )
            return RecurringEvent(
                id=event_id,
                calendar_id=calendar_id,
                title=row.title,
                description=row.description,
                time_range=TimeRange(starts_at, ends_at),
                rule=rule,
                exceptions=exceptions,
                color=EventColor(row.color),
                is_all_day=is_all_day,
                is_cancelled=is_cancelled,
                created_at=created_at,
                updated_at=updated_at,
                clock=clock,
            )
