"""Tests for the talk submission view."""

from datetime import timedelta

import pytest
from django.contrib.auth.models import User
from django.contrib.messages import get_messages
from django.test import Client
from django.utils import timezone

from django_symposium.conference.models import Conference
from django_symposium.talks.models import Submission, Talk, TalkRevision


@pytest.fixture
def user() -> User:
    return User.objects.create_user(username="speaker", password="testpass123")


@pytest.fixture
def conference() -> Conference:
    now = timezone.now()
    return Conference.objects.create(
        title="Laracon",
        is_approved=True,
        cfp_starts_at=now - timedelta(days=1),
        cfp_ends_at=now + timedelta(days=1),
    )


@pytest.fixture
def talk(user: User) -> Talk:
    talk = Talk.objects.create(author=user)
    TalkRevision.objects.create(talk=talk, title="Pipelines in practice")
    return talk


def _messages(response) -> list[str]:
    return [str(message) for message in get_messages(response.wsgi_request)]


@pytest.mark.django_db
def test_user_can_submit_a_talk(client: Client, user: User, conference: Conference, talk: Talk):
    client.force_login(user)

    response = client.post(f"/conferences/{conference.pk}/submit/", {"talk": talk.pk})

    assert response.status_code == 302
    assert response.url == f"/conferences/{conference.pk}/"
    assert Submission.objects.filter(conference=conference, talk_revision__talk=talk).count() == 1
    assert _messages(response) == ["Submitted Pipelines in practice to Laracon."]


@pytest.mark.django_db
def test_detail_page_lists_the_viewers_talks(client: Client, user: User, conference: Conference, talk: Talk):
    client.force_login(user)

    response = client.get(f"/conferences/{conference.pk}/")

    assert list(response.context["talks"]) == [talk]


@pytest.mark.django_db
def test_guests_cannot_submit_talks(client: Client, conference: Conference, talk: Talk):
    response = client.post(f"/conferences/{conference.pk}/submit/", {"talk": talk.pk})

    assert response.status_code == 302
    assert response.url.startswith("/login/")
    assert not Submission.objects.exists()


@pytest.mark.django_db
def test_cannot_submit_someone_elses_talk(client: Client, conference: Conference, talk: Talk):
    other = User.objects.create_user(username="other", password="testpass123")
    client.force_login(other)

    response = client.post(f"/conferences/{conference.pk}/submit/", {"talk": talk.pk})

    assert response.status_code == 404
    assert not Submission.objects.exists()


@pytest.mark.django_db
def test_submit_to_missing_conference_is_404(client: Client, user: User, talk: Talk):
    client.force_login(user)
    assert client.post("/conferences/999/submit/", {"talk": talk.pk}).status_code == 404


@pytest.mark.django_db
def test_submit_without_choosing_a_talk(client: Client, user: User, conference: Conference):
    client.force_login(user)

    response = client.post(f"/conferences/{conference.pk}/submit/", {"talk": ""})

    assert response.status_code == 302
    assert _messages(response) == ["Choose a talk to submit."]
    assert not Submission.objects.exists()


@pytest.mark.django_db
def test_submit_talk_without_revision_shows_error(client: Client, user: User, conference: Conference):
    empty = Talk.objects.create(author=user)
    client.force_login(user)

    response = client.post(f"/conferences/{conference.pk}/submit/", {"talk": empty.pk})

    assert response.status_code == 302
    assert _messages(response) == [f"Talk {empty.pk} has no revision to submit."]


@pytest.mark.django_db
def test_submit_is_post_only(client: Client, user: User, conference: Conference):
    client.force_login(user)
    assert client.get(f"/conferences/{conference.pk}/submit/").status_code == 405


@pytest.mark.django_db
def test_cannot_submit_after_the_cfp_closed(client: Client, user: User, conference: Conference, talk: Talk):
    now = timezone.now()
    conference.cfp_starts_at = now - timedelta(days=10)
    conference.cfp_ends_at = now - timedelta(days=1)
    conference.save()
    client.force_login(user)

    response = client.post(f"/conferences/{conference.pk}/submit/", {"talk": talk.pk})

    assert response.status_code == 302
    assert response.url == f"/conferences/{conference.pk}/"
    assert _messages(response) == ["This conference is not accepting proposals right now."]
    assert not Submission.objects.exists()


@pytest.mark.django_db
def test_cannot_submit_before_the_cfp_is_announced(client: Client, user: User, talk: Talk):
    unannounced = Conference.objects.create(title="Someday", is_approved=True)
    client.force_login(user)

    response = client.post(f"/conferences/{unannounced.pk}/submit/", {"talk": talk.pk})

    assert _messages(response) == ["This conference is not accepting proposals right now."]
    assert not Submission.objects.exists()
