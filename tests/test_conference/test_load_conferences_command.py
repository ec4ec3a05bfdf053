import datetime
from io import StringIO

import pytest
from django.contrib.auth.models import User
from django.core.management import call_command
from django.core.management.base import CommandError

from django_symposium.conference.models import Conference

CONFERENCES_TOML = """[[conferences]]
title = "PyCon US"
url = "https://us.pycon.org"
starts_at = 2027-05-14
ends_at = 2027-05-22
cfp_starts_at = 2026-11-01T00:00:00Z
cfp_ends_at = 2026-12-19
timezone = "America/Los_Angeles"

[[conferences]]
title = "DjangoCon"
description = "The Django conference"
latitude = 37.7991531
longitude = -122.4505013
"""


def _write_config(path, contents):
    path.write_text(contents)
    return str(path)


def _run(**options) -> str:
    out = StringIO()
    call_command("load_conferences", stdout=out, **options)
    return out.getvalue()


def test_load_wraps_loader_errors_as_command_error(tmp_path):
    config_path = _write_config(tmp_path / "bad.toml", 'conferences = ["PyCon"]\n')

    with pytest.raises(CommandError, match=r"conferences\[0\] must be a mapping"):
        call_command("load_conferences", config=config_path)


def test_load_missing_file_is_command_error(tmp_path):
    with pytest.raises(CommandError, match="not found"):
        call_command("load_conferences", config=str(tmp_path / "missing.toml"))


@pytest.mark.django_db
def test_load_creates_conferences_with_aware_dates(tmp_path):
    config_path = _write_config(tmp_path / "conferences.toml", CONFERENCES_TOML)

    output = _run(config=config_path)

    assert "Created conference: PyCon US" in output
    assert "Created 2, updated 0, skipped 0." in output

    pycon = Conference.objects.get(title="PyCon US")
    la = datetime.timezone(datetime.timedelta(hours=-7))
    assert pycon.starts_at == datetime.datetime(2027, 5, 14, 0, 0, tzinfo=la)
    assert pycon.ends_at == datetime.datetime(2027, 5, 22, 23, 59, 59, tzinfo=la)
    assert pycon.cfp_starts_at == datetime.datetime(2026, 11, 1, tzinfo=datetime.UTC)
    assert pycon.is_approved is False
    assert pycon.author is None

    djangocon = Conference.objects.get(title="DjangoCon")
    assert djangocon.description == "The Django conference"
    assert djangocon.latitude == pytest.approx(37.7991531)
    assert djangocon.starts_at is None


@pytest.mark.django_db
def test_load_with_author_and_approve(tmp_path):
    author = User.objects.create_user(username="alice", password="testpass123")
    config_path = _write_config(tmp_path / "conferences.toml", CONFERENCES_TOML)

    _run(config=config_path, author="alice", approve=True)

    assert Conference.objects.approved().count() == 2
    assert set(Conference.objects.values_list("author", flat=True)) == {author.pk}


@pytest.mark.django_db
def test_load_unknown_author_is_command_error(tmp_path):
    config_path = _write_config(tmp_path / "conferences.toml", CONFERENCES_TOML)

    with pytest.raises(CommandError, match="No user with username 'nobody'"):
        call_command("load_conferences", config=config_path, author="nobody")

    assert not Conference.objects.exists()


@pytest.mark.django_db
def test_load_skips_existing_titles_without_update(tmp_path):
    existing = Conference.objects.create(title="PyCon US", description="Keep me")
    config_path = _write_config(tmp_path / "conferences.toml", CONFERENCES_TOML)

    output = _run(config=config_path)

    assert "Skipped existing conference: PyCon US" in output
    assert "Created 1, updated 0, skipped 1." in output
    existing.refresh_from_db()
    assert existing.description == "Keep me"
    assert existing.starts_at is None


@pytest.mark.django_db
def test_load_updates_existing_titles_with_update(tmp_path):
    existing = Conference.objects.create(title="DjangoCon", description="Old")
    config_path = _write_config(tmp_path / "conferences.toml", CONFERENCES_TOML)

    output = _run(config=config_path, update=True)

    assert "Updated conference: DjangoCon" in output
    assert "Created 1, updated 1, skipped 0." in output
    existing.refresh_from_db()
    assert existing.description == "The Django conference"
    assert Conference.objects.count() == 2


@pytest.mark.django_db
def test_load_dry_run_saves_nothing(tmp_path):
    config_path = _write_config(tmp_path / "conferences.toml", CONFERENCES_TOML)

    output = _run(config=config_path, dry_run=True)

    assert "Would import: PyCon US" in output
    assert "Would import: DjangoCon" in output
    assert "Dry run: 2 conference(s) validated." in output
    assert not Conference.objects.exists()
