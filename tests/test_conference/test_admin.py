"""Tests for the conference admin actions."""

import pytest
from django.contrib.admin.sites import site
from django.contrib.auth.models import User
from django.test import Client

from django_symposium.conference.admin import ConferenceAdmin, ConferenceMarkInline
from django_symposium.conference.models import Conference, ConferenceMark


@pytest.fixture
def admin_user() -> User:
    return User.objects.create_superuser(username="admin", email="admin@example.com", password="testpass123")


@pytest.fixture
def admin_client(admin_user: User) -> Client:
    client = Client()
    client.force_login(admin_user)
    return client


def _run_action(client: Client, action: str, conferences: list[Conference]):
    return client.post(
        "/admin/symposium_conference/conference/",
        {"action": action, "_selected_action": [c.pk for c in conferences]},
        follow=True,
    )


@pytest.mark.django_db
def test_conference_admin_is_registered():
    assert isinstance(site._registry[Conference], ConferenceAdmin)
    assert ConferenceMark in site._registry


@pytest.mark.django_db
def test_approve_conferences_action(admin_client: Client):
    pending = Conference.objects.create(title="Pending")
    other = Conference.objects.create(title="Also pending")
    untouched = Conference.objects.create(title="Untouched")

    response = _run_action(admin_client, "approve_conferences", [pending, other])

    assert response.status_code == 200
    assert "Approved 2 conference(s)." in response.content.decode()
    assert set(Conference.objects.approved()) == {pending, other}
    untouched.refresh_from_db()
    assert untouched.is_approved is False


@pytest.mark.django_db
def test_mark_conferences_shared_action(admin_client: Client):
    conference = Conference.objects.create(title="Announced", is_approved=True)

    response = _run_action(admin_client, "mark_conferences_shared", [conference])

    assert "Marked 1 conference(s) as shared." in response.content.decode()
    assert not Conference.objects.not_shared().exists()


@pytest.mark.django_db
def test_conference_change_page_renders_marks(admin_client: Client, admin_user: User):
    conference = Conference.objects.create(title="PyCon")
    ConferenceMark.objects.create(user=admin_user, conference=conference, kind=ConferenceMark.Kind.FAVORITE)

    response = admin_client.get(f"/admin/symposium_conference/conference/{conference.pk}/change/")

    assert response.status_code == 200


def test_mark_inline_is_read_only():
    inline = ConferenceMarkInline(Conference, site)
    assert inline.has_add_permission(request=None) is False
    assert inline.can_delete is False
