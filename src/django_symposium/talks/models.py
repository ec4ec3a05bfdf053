"""Talk, TalkRevision, and Submission models for django-symposium."""

from django.conf import settings
from django.db import models


class Talk(models.Model):
    """A talk owned by a speaker.

    A talk's content lives in its revisions so that earlier versions stay
    attached to the conferences they were submitted to.  The most recently
    created revision is the current one.
    """

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="talks",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        revision = self.current()
        return revision.title if revision else f"Talk #{self.pk}"

    def current(self) -> "TalkRevision | None":
        """Return the latest revision, or ``None`` if the talk has none yet."""
        return self.revisions.order_by("-created_at", "-id").first()


class TalkRevision(models.Model):
    """One version of a talk's title, format, and abstract."""

    class TalkType(models.TextChoices):
        """Talk formats."""

        REGULAR = "regular", "Regular"
        LIGHTNING = "lightning", "Lightning"
        KEYNOTE = "keynote", "Keynote"
        WORKSHOP = "workshop", "Workshop"

    class Level(models.TextChoices):
        """Audience experience level."""

        BEGINNER = "beginner", "Beginner"
        INTERMEDIATE = "intermediate", "Intermediate"
        ADVANCED = "advanced", "Advanced"

    talk = models.ForeignKey(
        Talk,
        on_delete=models.CASCADE,
        related_name="revisions",
    )
    title = models.CharField(max_length=255)
    type = models.CharField(max_length=20, choices=TalkType.choices, default=TalkType.REGULAR)
    level = models.CharField(max_length=20, choices=Level.choices, default=Level.BEGINNER)
    length = models.PositiveIntegerField(null=True, blank=True, help_text="Length in minutes.")
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return self.title


class Submission(models.Model):
    """A talk revision submitted to a conference's call for papers."""

    class Status(models.TextChoices):
        """Review state of a submission."""

        SUBMITTED = "submitted", "Submitted"
        ACCEPTED = "accepted", "Accepted"
        REJECTED = "rejected", "Rejected"

    conference = models.ForeignKey(
        "symposium_conference.Conference",
        on_delete=models.CASCADE,
        related_name="submissions",
    )
    talk_revision = models.ForeignKey(
        TalkRevision,
        on_delete=models.CASCADE,
        related_name="submissions",
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.SUBMITTED)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.talk_revision} - {self.conference}"
