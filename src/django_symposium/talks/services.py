"""Submitting talks to conferences."""

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from django_symposium.conference.models import Conference
from django_symposium.talks.models import Submission, Talk

logger = logging.getLogger(__name__)


def create_submission(conference_id: int, talk_id: int) -> Submission:
    """Submit the current revision of a talk to a conference.

    The conference row is locked while checking for an earlier submission of
    the same talk, so a talk is submitted to a conference at most once; a
    repeated call returns the existing submission.

    Args:
        conference_id: Primary key of the conference.
        talk_id: Primary key of the talk.

    Returns:
        The new (or existing) ``Submission``.

    Raises:
        Conference.DoesNotExist: If no conference has *conference_id*.
        Talk.DoesNotExist: If no talk has *talk_id*.
        ValidationError: If the talk has no revision to submit.
    """
    with transaction.atomic():
        conference = Conference.objects.select_for_update().get(pk=conference_id)
        talk = Talk.objects.get(pk=talk_id)

        revision = talk.current()
        if revision is None:
            raise ValidationError(f"Talk {talk.pk} has no revision to submit.")

        existing = Submission.objects.filter(conference=conference, talk_revision__talk=talk).first()
        if existing is not None:
            logger.info("Talk %s was already submitted to conference %s", talk.pk, conference.pk)
            return existing

        submission = Submission.objects.create(
            conference=conference,
            talk_revision=revision,
            status=Submission.Status.SUBMITTED,
        )

    logger.info(
        "Submitted revision %s of talk %s to conference %s",
        revision.pk,
        talk.pk,
        conference.pk,
    )
    return submission
