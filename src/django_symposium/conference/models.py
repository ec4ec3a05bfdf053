"""Conference and ConferenceMark models for django-symposium."""

import datetime
from urllib.parse import urlsplit

from django.conf import settings
from django.db import models
from django.urls import reverse
from django.utils import timezone

from django_symposium.conference.listing import format_event_dates, is_accepting_proposals

LINKABLE_SCHEMES = frozenset({"", "http", "https"})


def has_linkable_scheme(url: str) -> bool:
    """Return whether *url* is safe to render as a link (http, https, or no scheme)."""
    try:
        scheme = urlsplit(url).scheme
    except ValueError:
        return False
    return scheme in LINKABLE_SCHEMES


class ConferenceQuerySet(models.QuerySet):
    """Query primitives for conference listings.

    Every method returns a new queryset so the filters chain freely, e.g.
    ``Conference.objects.approved().undismissed_by(user)``.
    """

    def approved(self) -> "ConferenceQuerySet":
        """Return conferences an administrator has approved for public listing."""
        return self.filter(is_approved=True)

    def not_shared(self) -> "ConferenceQuerySet":
        """Return conferences that have not been shared yet."""
        return self.filter(is_shared=False)

    def authored_by(self, user: object) -> "ConferenceQuerySet":
        """Return conferences created by *user*."""
        return self.filter(author=user)

    def favorited_by(self, user: object) -> "ConferenceQuerySet":
        """Return conferences *user* has marked as a favorite."""
        return self.filter(pk__in=_marked_conference_ids(user, ConferenceMark.Kind.FAVORITE))

    def dismissed_by(self, user: object) -> "ConferenceQuerySet":
        """Return conferences *user* has dismissed."""
        return self.filter(pk__in=_marked_conference_ids(user, ConferenceMark.Kind.DISMISSED))

    def undismissed_by(self, user: object) -> "ConferenceQuerySet":
        """Return conferences *user* has not dismissed."""
        return self.exclude(pk__in=_marked_conference_ids(user, ConferenceMark.Kind.DISMISSED))

    def open_cfp(self, now: datetime.datetime | None = None) -> "ConferenceQuerySet":
        """Return conferences whose call for papers window contains *now* (inclusive)."""
        now = now or timezone.now()
        return self.filter(cfp_starts_at__lte=now, cfp_ends_at__gte=now)

    def unclosed_cfp(self, now: datetime.datetime | None = None) -> "ConferenceQuerySet":
        """Return conferences whose call for papers has not closed yet."""
        now = now or timezone.now()
        return self.filter(cfp_ends_at__gte=now)


def _marked_conference_ids(user: object, kind: str) -> models.QuerySet:
    return ConferenceMark.objects.filter(user=user, kind=kind).values("conference_id")


class Conference(models.Model):
    """A conference with optional event dates and call for papers window.

    Approval and sharing are independent flags: ``is_approved`` controls
    whether the conference shows up in public listings, ``is_shared``
    records whether it has been announced. All date fields are optional and
    independently nullable.
    """

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    url = models.CharField(max_length=255, blank=True, default="")
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    starts_at = models.DateTimeField(null=True, blank=True)
    ends_at = models.DateTimeField(null=True, blank=True)
    cfp_starts_at = models.DateTimeField(null=True, blank=True)
    cfp_ends_at = models.DateTimeField(null=True, blank=True)

    is_approved = models.BooleanField(default=False)
    is_shared = models.BooleanField(default=False)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="authored_conferences",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ConferenceQuerySet.as_manager()

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return self.title

    def get_absolute_url(self) -> str:
        return reverse("conference:conference-detail", kwargs={"pk": self.pk})

    def is_currently_accepting_proposals(self, now: datetime.datetime | None = None) -> bool:
        """Return whether the call for papers is open at *now* (defaults to the current time)."""
        return is_accepting_proposals(self, now or timezone.now())

    @property
    def event_dates_display(self) -> str | None:
        """Human-readable event date or date range, e.g. ``"Jan 1 2020 - Jan 3 2020"``."""
        return format_event_dates(self.starts_at, self.ends_at)

    @property
    def link_url(self) -> str | None:
        """The stored URL when it is safe to link to, otherwise ``None``."""
        if self.url and has_linkable_scheme(self.url):
            return self.url
        return None

    def is_authored_by(self, user: object) -> bool:
        return bool(getattr(user, "is_authenticated", False) and self.author_id == user.pk)

    def mark_for(self, user: object) -> str | None:
        """Return the ``ConferenceMark.Kind`` *user* has set on this conference, if any."""
        if not getattr(user, "is_authenticated", False):
            return None
        return self.marks.filter(user=user).values_list("kind", flat=True).first()


class ConferenceMark(models.Model):
    """A user's favorite or dismissed mark on a conference.

    At most one mark exists per user and conference, so a conference can never
    be both favorited and dismissed by the same user. No row means the user
    has not marked the conference at all.
    """

    class Kind(models.TextChoices):
        """What the user did with the conference."""

        FAVORITE = "favorite", "Favorite"
        DISMISSED = "dismissed", "Dismissed"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="conference_marks",
    )
    conference = models.ForeignKey(
        Conference,
        on_delete=models.CASCADE,
        related_name="marks",
    )
    kind = models.CharField(max_length=20, choices=Kind.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "conference"],
                name="unique_conference_mark_per_user",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user} {self.kind} {self.conference}"
