"""Conference listing rules: call for papers windows, filters, sorts, and date display.

The CFP check, the sorts, and the date formatting are pure functions of their
arguments.  ``filter_conferences`` narrows a ``ConferenceQuerySet`` and leaves
evaluation to the caller.
"""

import datetime
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from django.db.models import Q
from django.utils import dateformat, timezone
from django.utils.dateparse import parse_date, parse_datetime

from django_symposium.settings import (
    FILTER_ALL,
    FILTER_DISMISSED,
    FILTER_FAVORITES,
    FILTER_OPEN_CFP,
    FILTER_UNCLOSED_CFP,
    SORT_ALPHA,
    SORT_CFP_CLOSING_NEXT,
    SORT_CFP_OPENING_NEXT,
    SORT_DATE,
    get_config,
)

if TYPE_CHECKING:
    from django_symposium.conference.models import Conference, ConferenceQuerySet


def is_accepting_proposals(conference: "Conference", now: datetime.datetime) -> bool:
    """Return whether *now* falls inside the conference's call for papers window.

    Both bounds are inclusive.  A conference that has not announced both the
    opening and the closing of its CFP is never accepting proposals.

    Args:
        conference: Any object with ``cfp_starts_at`` and ``cfp_ends_at``.
        now: The moment to evaluate.

    Returns:
        ``True`` if ``cfp_starts_at <= now <= cfp_ends_at``.
    """
    if conference.cfp_starts_at is None or conference.cfp_ends_at is None:
        return False
    return conference.cfp_starts_at <= now <= conference.cfp_ends_at


def _calendar_date(value: Any) -> datetime.date | None:
    """Reduce a datetime, date, or ISO string to the calendar date it falls on locally."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        parsed = parse_datetime(value) or parse_date(value)
        if parsed is None:
            msg = f"Invalid date value: {value!r}"
            raise ValueError(msg)
        value = parsed
    if isinstance(value, datetime.datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def format_event_dates(starts_at: Any, ends_at: Any) -> str | None:
    """Format an event's dates for display.

    Time of day is ignored, so a single-day event with distinct start and end
    times collapses to one date.

    Args:
        starts_at: The event start, or ``None``.
        ends_at: The event end, or ``None``.

    Returns:
        ``"Jan 1 2020"`` for a start date alone or a single-day event,
        ``"Jan 1 2020 - Jan 3 2020"`` for a multi-day event, and ``None`` when
        there is no start date.
    """
    start = _calendar_date(starts_at)
    if start is None:
        return None

    date_format = get_config().date_format
    formatted_start = dateformat.format(start, date_format)

    end = _calendar_date(ends_at)
    if end is None or end == start:
        return formatted_start
    return f"{formatted_start} - {dateformat.format(end, date_format)}"


def filter_conferences(
    queryset: "ConferenceQuerySet",
    mode: str | None,
    viewer: object = None,
    *,
    now: datetime.datetime | None = None,
) -> "ConferenceQuerySet":
    """Narrow *queryset* to the conferences *viewer* should see under *mode*.

    Guests only ever see approved conferences, and get empty ``dismissed`` and
    ``favorites`` lists.  Conferences a signed-in viewer dismissed are hidden
    from every mode except ``dismissed``.  Unknown modes fall back to
    ``approved``.

    Args:
        queryset: The conferences to filter.
        mode: One of ``django_symposium.settings.FILTER_CHOICES``.
        viewer: The requesting user; ``None`` or an anonymous user for guests.
        now: Reference time for the CFP filters.

    Returns:
        The filtered queryset.
    """
    authenticated = getattr(viewer, "is_authenticated", False)

    if mode == FILTER_DISMISSED:
        return queryset.dismissed_by(viewer) if authenticated else queryset.none()
    if mode == FILTER_FAVORITES:
        return queryset.favorited_by(viewer) if authenticated else queryset.none()

    if authenticated:
        queryset = queryset.undismissed_by(viewer)

    if mode == FILTER_ALL:
        if authenticated:
            return queryset.filter(Q(is_approved=True) | Q(author=viewer))
        return queryset.approved()

    queryset = queryset.approved()
    if mode == FILTER_OPEN_CFP:
        return queryset.open_cfp(now)
    if mode == FILTER_UNCLOSED_CFP:
        return queryset.unclosed_cfp(now)
    return queryset


def _nulls_last(attr: str) -> Callable[["Conference"], tuple[bool, Any]]:
    def key(conference: "Conference") -> tuple[bool, Any]:
        value = getattr(conference, attr)
        return (value is None, value)

    return key


_SORT_KEYS: dict[str, Callable[["Conference"], Any]] = {
    SORT_CFP_CLOSING_NEXT: _nulls_last("cfp_ends_at"),
    SORT_CFP_OPENING_NEXT: _nulls_last("cfp_starts_at"),
    SORT_DATE: _nulls_last("starts_at"),
    SORT_ALPHA: lambda conference: conference.title.casefold(),
}


def sort_conferences(conferences: Iterable["Conference"], criterion: str | None) -> list["Conference"]:
    """Order *conferences* by *criterion*.

    Date criteria sort ascending with missing dates after every present one.
    The sort is stable, so ties keep their incoming order.  Unknown criteria
    fall back to ``cfp_closing_next``.
    """
    key = _SORT_KEYS.get(criterion or "", _SORT_KEYS[SORT_CFP_CLOSING_NEXT])
    return sorted(conferences, key=key)
