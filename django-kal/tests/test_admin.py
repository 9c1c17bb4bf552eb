"""Tests for the admin registrations.

Run with: pytest tests/test_admin.py -v
"""

import pytest
from django.contrib import admin

from calendars.admin import RecurrenceExceptionInline, RecurringEventAdmin
from calendars.models import Calendar, Event, RecurrenceException, RecurringEvent


class TestAdminRegistration:
    """Tests for the calendars admin site."""

    @pytest.mark.parametrize("model", [Calendar, Event, RecurringEvent])
    def test_models_are_registered(self, model):
        """Each top-level table has an admin page."""
        assert admin.site.is_registered(model)

    def test_exceptions_are_edited_inline(self):
        """Recurrence exceptions are edited on their series' page only."""
        assert not admin.site.is_registered(RecurrenceException)
        assert RecurrenceExceptionInline in RecurringEventAdmin.inlines
