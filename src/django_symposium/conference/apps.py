"""Django app configuration for the conference app."""

from django.apps import AppConfig


class DjangoSymposiumConferenceConfig(AppConfig):
    """Configuration for the conference app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_symposium.conference"
    label = "symposium_conference"
    verbose_name = "Conferences"
