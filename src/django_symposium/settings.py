"""Typed configuration for django-symposium.

Reads a single ``DJANGO_SYMPOSIUM`` dict from Django settings and exposes it as
composed, frozen dataclasses with sensible defaults.

Usage::

    from django_symposium.settings import get_config

    config = get_config()
    config.date_format
    config.listing.default_sort
"""

import functools
from collections.abc import Mapping
from dataclasses import dataclass, field

from django.conf import settings
from django.test.signals import setting_changed

FILTER_APPROVED = "approved"
FILTER_ALL = "all"
FILTER_DISMISSED = "dismissed"
FILTER_FAVORITES = "favorites"
FILTER_OPEN_CFP = "open_cfp"
FILTER_UNCLOSED_CFP = "unclosed_cfp"
FILTER_CHOICES = (
    FILTER_APPROVED,
    FILTER_ALL,
    FILTER_DISMISSED,
    FILTER_FAVORITES,
    FILTER_OPEN_CFP,
    FILTER_UNCLOSED_CFP,
)

SORT_CFP_CLOSING_NEXT = "cfp_closing_next"
SORT_CFP_OPENING_NEXT = "cfp_opening_next"
SORT_DATE = "date"
SORT_ALPHA = "alpha"
SORT_CHOICES = (SORT_CFP_CLOSING_NEXT, SORT_CFP_OPENING_NEXT, SORT_DATE, SORT_ALPHA)


@dataclass(frozen=True, slots=True)
class ListingConfig:
    """Conference list defaults used when the query string does not say otherwise."""

    default_filter: str = FILTER_APPROVED
    default_sort: str = SORT_CFP_CLOSING_NEXT
    paginate_by: int | None = None


@dataclass(frozen=True, slots=True)
class SymposiumConfig:
    """Top-level django-symposium configuration."""

    listing: ListingConfig = field(default_factory=ListingConfig)
    date_format: str = "M j Y"


@functools.lru_cache(maxsize=1)
def get_config() -> SymposiumConfig:
    """Build and return the symposium configuration.

    Reads ``settings.DJANGO_SYMPOSIUM`` (a plain dict) and returns a frozen
    :class:`SymposiumConfig`.  The result is cached; the cache is cleared
    automatically when Django's ``setting_changed`` signal fires (e.g. inside
    ``override_settings``).
    """
    raw = getattr(settings, "DJANGO_SYMPOSIUM", {})
    if not isinstance(raw, Mapping):
        msg = "DJANGO_SYMPOSIUM must be a mapping (dict-like object)"
        raise TypeError(msg)
    raw_data = dict(raw)

    listing_data = raw_data.pop("listing", {})
    if not isinstance(listing_data, Mapping):
        msg = "DJANGO_SYMPOSIUM['listing'] must be a mapping (dict-like object)"
        raise TypeError(msg)

    config = SymposiumConfig(
        listing=ListingConfig(**dict(listing_data)),
        **raw_data,
    )
    _validate_symposium_config(config)
    return config


def _validate_symposium_config(config: SymposiumConfig) -> None:
    """Validate configuration values with clear error messages."""
    if not isinstance(config.date_format, str) or not config.date_format.strip():
        msg = "DJANGO_SYMPOSIUM['date_format'] must be a non-empty string"
        raise ValueError(msg)
    if config.listing.default_filter not in FILTER_CHOICES:
        msg = f"DJANGO_SYMPOSIUM['listing']['default_filter'] must be one of: {', '.join(FILTER_CHOICES)}"
        raise ValueError(msg)
    if config.listing.default_sort not in SORT_CHOICES:
        msg = f"DJANGO_SYMPOSIUM['listing']['default_sort'] must be one of: {', '.join(SORT_CHOICES)}"
        raise ValueError(msg)
    paginate_by = config.listing.paginate_by
    if paginate_by is not None and (
        isinstance(paginate_by, bool) or not isinstance(paginate_by, int) or paginate_by <= 0
    ):
        msg = "DJANGO_SYMPOSIUM['listing']['paginate_by'] must be a positive integer or None"
        raise ValueError(msg)


def _clear_config_cache(*, setting: str, **kwargs: object) -> None:  # noqa: ARG001
    """Clear the cached config when Django settings change during tests."""
    if setting == "DJANGO_SYMPOSIUM":
        get_config.cache_clear()


setting_changed.connect(_clear_config_cache, dispatch_uid="django_symposium.settings.clear_config_cache")
