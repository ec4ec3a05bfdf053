"""Management command to import conferences from a TOML file."""

import datetime
from typing import Any
from zoneinfo import ZoneInfo

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError, CommandParser
from django.db import transaction
from django.utils import timezone

from django_symposium.conference.models import Conference
from django_symposium.config_loader import DATE_FIELDS, load_conference_list

# Date-only values for these fields cover the whole last day.
_END_FIELDS: frozenset[str] = frozenset({"ends_at", "cfp_ends_at"})


def _to_aware(field_name: str, value: datetime.date, tz: datetime.tzinfo) -> datetime.datetime:
    """Convert a TOML date or datetime to an aware datetime.

    Args:
        field_name: The conference field the value belongs to.
        value: A ``date``, naive ``datetime``, or aware ``datetime``.
        tz: Time zone for dates and naive datetimes.

    Returns:
        An aware datetime.  Dates become the start of the day, or the last
        second of the day for end fields.
    """
    if isinstance(value, datetime.datetime):
        if timezone.is_aware(value):
            return value
        return value.replace(tzinfo=tz)
    if field_name in _END_FIELDS:
        return datetime.datetime.combine(value, datetime.time.max.replace(microsecond=0), tzinfo=tz)
    return datetime.datetime.combine(value, datetime.time.min, tzinfo=tz)


def _conference_fields(conf: dict[str, Any]) -> dict[str, Any]:
    """Map a validated TOML entry to ``Conference`` field values."""
    tz = ZoneInfo(conf["timezone"]) if "timezone" in conf else timezone.get_default_timezone()
    fields: dict[str, Any] = {key: value for key, value in conf.items() if key not in DATE_FIELDS}
    fields.pop("timezone", None)
    fields["title"] = fields["title"].strip()
    for key in DATE_FIELDS:
        if key in conf:
            fields[key] = _to_aware(key, conf[key], tz)
    return fields


class Command(BaseCommand):
    """Create (or update) conferences listed in a TOML file.

    Conferences are matched to existing rows by title.

    Usage::

        manage.py load_conferences --config conferences.toml
        manage.py load_conferences --config conferences.toml --author alice --approve
        manage.py load_conferences --config conferences.toml --update
        manage.py load_conferences --config conferences.toml --dry-run
    """

    help = "Create or update conferences from a TOML file."

    def add_arguments(self, parser: CommandParser) -> None:
        """Define the command-line arguments accepted by this command.

        Args:
            parser: The argument parser to configure.
        """
        parser.add_argument(
            "--config",
            required=True,
            help="Path to the conference import TOML file.",
        )
        parser.add_argument(
            "--author",
            default="",
            help="Username recorded as the author of created conferences.",
        )
        parser.add_argument(
            "--approve",
            action="store_true",
            default=False,
            help="Mark imported conferences as approved so they appear in the default listing.",
        )
        parser.add_argument(
            "--update",
            action="store_true",
            default=False,
            help="Update conferences whose title already exists instead of skipping them.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            default=False,
            help="Validate the file and print what would be imported without saving.",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the import.

        Args:
            *args: Positional arguments (unused).
            **options: Parsed command-line options.
        """
        try:
            entries = load_conference_list(options["config"])
        except (FileNotFoundError, TypeError, ValueError) as exc:
            raise CommandError(str(exc)) from exc

        author = self._resolve_author(options["author"])
        approve: bool = options["approve"]
        update: bool = options["update"]

        if options["dry_run"]:
            for conf in entries:
                self.stdout.write(f"  Would import: {conf['title'].strip()}")
            self.stdout.write(self.style.NOTICE(f"Dry run: {len(entries)} conference(s) validated."))
            return

        created = updated = skipped = 0
        with transaction.atomic():
            for conf in entries:
                fields = _conference_fields(conf)
                if approve:
                    fields["is_approved"] = True

                existing = Conference.objects.filter(title=fields["title"]).first()
                if existing is None:
                    Conference.objects.create(author=author, **fields)
                    self.stdout.write(self.style.SUCCESS(f"  Created conference: {fields['title']}"))
                    created += 1
                elif update:
                    for attr, value in fields.items():
                        setattr(existing, attr, value)
                    existing.save()
                    self.stdout.write(self.style.SUCCESS(f"  Updated conference: {existing.title}"))
                    updated += 1
                else:
                    self.stdout.write(self.style.WARNING(f"  Skipped existing conference: {existing.title}"))
                    skipped += 1

        self.stdout.write(f"Created {created}, updated {updated}, skipped {skipped}.")

    def _resolve_author(self, username: str) -> object | None:
        """Return the user named *username*, or ``None`` when no author was given.

        Raises:
            CommandError: If no user has that username.
        """
        if not username:
            return None
        user_model = get_user_model()
        try:
            return user_model.objects.get(**{user_model.USERNAME_FIELD: username})
        except user_model.DoesNotExist as exc:
            raise CommandError(f"No user with username '{username}'.") from exc
