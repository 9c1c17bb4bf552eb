"""Django ORM models (persistence layer).

These models mirror the row shapes in calendars/stores/rows.py column for
column. Domain logic lives in calendars/domain/.

Timestamps are stored as UTC ISO 8601 text, so ordering and range filters on
them compare lexicographically.
"""

from django.db import models


class Calendar(models.Model):
    """Persistence model for calendars."""

    id = models.CharField(primary_key=True, max_length=36)
    name = models.TextField()
    description = models.TextField(blank=True, null=True)
    is_archived = models.SmallIntegerField(default=0)
    created_at = models.CharField(max_length=40)
    updated_at = models.CharField(max_length=40)

    class Meta:
        db_table = "calendars"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_archived", "name"], name="calendars_active_name_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Event(models.Model):
    """Persistence model for single events."""

    id = models.CharField(primary_key=True, max_length=36)
    calendar_id = models.CharField(max_length=36)
    title = models.TextField()
    description = models.TextField(blank=True, null=True)
    starts_at = models.CharField(max_length=40)
    ends_at = models.CharField(max_length=40)
    color = models.IntegerField(default=0)
    is_all_day = models.SmallIntegerField(default=0)
    is_cancelled = models.SmallIntegerField(default=0)
    created_at = models.CharField(max_length=40)
    updated_at = models.CharField(max_length=40)

    class Meta:
        db_table = "events"
        ordering = ["starts_at"]
        indexes = [
            models.Index(fields=["calendar_id", "starts_at"], name="events_calendar_start_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} - {self.starts_at}"


class RecurringEvent(models.Model):
    """Persistence model for recurring event series."""

    id = models.CharField(primary_key=True, max_length=36)
    calendar_id = models.CharField(max_length=36)
    title = models.TextField()
    description = models.TextField(blank=True, null=True)
    starts_at = models.CharField(max_length=40)
    ends_at = models.CharField(max_length=40)
    frequency = models.CharField(max_length=16)
    interval = models.IntegerField(default=1)
    until = models.CharField(max_length=40, blank=True, null=True)
    color = models.IntegerField(default=0)
    is_all_day = models.SmallIntegerField(default=0)
    is_cancelled = models.SmallIntegerField(default=0)
    created_at = models.CharField(max_length=40)
    updated_at = models.CharField(max_length=40)

    class Meta:
        db_table = "recurrences"
        ordering = ["starts_at"]
        indexes = [
            models.Index(
                fields=["calendar_id", "starts_at"], name="recurrences_calendar_start_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.frequency})"


class RecurrenceException(models.Model):
    """Persistence model for per-occurrence overrides of a series."""

    recurrence = models.ForeignKey(
        RecurringEvent,
        on_delete=models.CASCADE,
        related_name="exceptions",
        db_column="recurrence_id",
    )
    original_starts_at = models.CharField(max_length=40)
    new_starts_at = models.CharField(max_length=40, blank=True, null=True)
    new_ends_at = models.CharField(max_length=40, blank=True, null=True)
    is_cancelled = models.SmallIntegerField(default=0)

    class Meta:
        db_table = "recurrence_exceptions"
        ordering = ["original_starts_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["recurrence", "original_starts_at"],
                name="unique_exception_per_occurrence",
            ),
        ]

    def __str__(self) -> str:
        status = "cancelled" if self.is_cancelled else "rescheduled"
        return f"{self.recurrence_id} @ {self.original_starts_at} ({status})"
