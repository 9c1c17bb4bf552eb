from django.contrib import admin

from calendars.models import Calendar, Event, RecurrenceException, RecurringEvent


class RecurrenceExceptionInline(admin.TabularInline):
    model = RecurrenceException
    extra = 0


@admin.register(Calendar)
class CalendarAdmin(admin.ModelAdmin):
    list_display = ["name", "is_archived", "updated_at"]
    list_filter = ["is_archived"]
    search_fields = ["name", "description"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "calendar_id", "starts_at", "ends_at", "is_cancelled"]
    list_filter = ["is_cancelled", "is_all_day"]
    search_fields = ["title"]


@admin.register(RecurringEvent)
class RecurringEventAdmin(admin.ModelAdmin):
    list_display = ["title", "calendar_id", "frequency", "interval", "starts_at", "is_cancelled"]
    list_filter = ["frequency", "is_cancelled"]
    search_fields = ["title"]
    inlines = [RecurrenceExceptionInline]
