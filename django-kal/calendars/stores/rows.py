"""Flat row shapes exchanged between the mappers and the stores.

Column names and types match the tables in calendars/models.py: ids and
timestamps are text, flags are 0/1 integers.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CalendarRow:
    id: str
    name: str
    description: str | None
    is_archived: int
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class EventRow:
    id: str
    calendar_id: str
    title: str
    description: str | None
    starts_at: str
    ends_at: str
    color: int
    is_all_day: int
    is_cancelled: int
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class RecurrenceRow:
    id: str
    calendar_id: str
    title: str
    description: str | None
    starts_at: str
    ends_at: str
    frequency: str
    interval: int
    until: str | None
    color: int
    is_all_day: int
    is_cancelled: int
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class RecurrenceExceptionRow:
    recurrence_id: str
    original_starts_at: str
    new_starts_at: str | None
    new_ends_at: str | None
    is_cancelled: int
