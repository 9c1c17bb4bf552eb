import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Calendar",
            fields=[
                ("id", models.CharField(max_length=36, primary_key=True, serialize=False)),
                ("name", models.TextField()),
                ("description", models.TextField(blank=True, null=True)),
                ("is_archived", models.SmallIntegerField(default=0)),
                ("created_at", models.CharField(max_length=40)),
                ("updated_at", models.CharField(max_length=40)),
            ],
            options={
                "db_table": "calendars",
                "ordering": ["name"],
                "indexes": [
                    models.Index(
                        fields=["is_archived", "name"], name="calendars_active_name_idx"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.CharField(max_length=36, primary_key=True, serialize=False)),
                ("calendar_id", models.CharField(max_length=36)),
                ("title", models.TextField()),
                ("description", models.TextField(blank=True, null=True)),
                ("starts_at", models.CharField(max_length=40)),
                ("ends_at", models.CharField(max_length=40)),
                ("color", models.IntegerField(default=0)),
                ("is_all_day", models.SmallIntegerField(default=0)),
                ("is_cancelled", models.SmallIntegerField(default=0)),
                ("created_at", models.CharField(max_length=40)),
                ("updated_at", models.CharField(max_length=40)),
            ],
            options={
                "db_table": "events",
                "ordering": ["starts_at"],
                "indexes": [
                    models.Index(
                        fields=["calendar_id", "starts_at"], name="events_calendar_start_idx"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="RecurringEvent",
            fields=[
                ("id", models.CharField(max_length=36, primary_key=True, serialize=False)),
                ("calendar_id", models.CharField(max_length=36)),
                ("title", models.TextField()),
                ("description", models.TextField(blank=True, null=True)),
                ("starts_at", models.CharField(max_length=40)),
                ("ends_at", models.CharField(max_length=40)),
                ("frequency", models.CharField(max_length=16)),
                ("interval", models.IntegerField(default=1)),
                ("until", models.CharField(blank=True, max_length=40, null=True)),
                ("color", models.IntegerField(default=0)),
                ("is_all_day", models.SmallIntegerField(default=0)),
                ("is_cancelled", models.SmallIntegerField(default=0)),
                ("created_at", models.CharField(max_length=40)),
                ("updated_at", models.CharField(max_length=40)),
            ],
            options={
                "db_table": "recurrences",
                "ordering": ["starts_at"],
                "indexes": [
                    models.Index(
                        fields=["calendar_id", "starts_at"],
                        name="recurrences_calendar_start_idx",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="RecurrenceException",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("original_starts_at", models.CharField(max_length=40)),
                ("new_starts_at", models.CharField(blank=True, max_length=40, null=True)),
                ("new_ends_at", models.CharField(blank=True, max_length=40, null=True)),
                ("is_cancelled", models.SmallIntegerField(default=0)),
                (
                    "recurrence",
                    models.ForeignKey(
                        db_column="recurrence_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="exceptions",
                        to="calendars.recurringevent",
                    ),
                ),
            ],
            options={
                "db_table": "recurrence_exceptions",
                "ordering": ["original_starts_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("recurrence", "original_starts_at"),
                        name="unique_exception_per_occurrence",
                    )
                ],
            },
        ),
    ]
