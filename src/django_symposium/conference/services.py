"""Favorite and dismiss marks on conferences.

A user holds at most one mark per conference.  Favoriting a dismissed
conference, or dismissing a favorited one, is refused: the user has to clear
the existing mark first.
"""

import logging

from django.db import transaction

from django_symposium.conference.models import Conference, ConferenceMark

logger = logging.getLogger(__name__)


def _set_mark(user: object, conference: Conference, kind: str) -> bool:
    """Give *conference* the *kind* mark for *user* unless another mark is already set.

    Returns:
        ``True`` if the conference carries the requested mark afterwards.
    """
    with transaction.atomic():
        mark, created = ConferenceMark.objects.select_for_update().get_or_create(
            user=user,
            conference=conference,
            defaults={"kind": kind},
        )
        if created:
            logger.info("User %s marked conference %s as %s", user.pk, conference.pk, kind)
            return True
        if mark.kind == kind:
            return True
        logger.warning(
            "Refusing to mark conference %s as %s for user %s: already marked %s",
            conference.pk,
            kind,
            user.pk,
            mark.kind,
        )
        return False


def _clear_mark(user: object, conference: Conference, kind: str) -> bool:
    """Remove the *kind* mark, returning whether one existed."""
    with transaction.atomic():
        deleted, _ = ConferenceMark.objects.filter(user=user, conference=conference, kind=kind).delete()
    if deleted:
        logger.info("User %s cleared %s mark on conference %s", user.pk, kind, conference.pk)
    return bool(deleted)


def dismiss(user: object, conference: Conference) -> bool:
    """Hide *conference* from *user*'s listings. Favorited conferences cannot be dismissed."""
    return _set_mark(user, conference, ConferenceMark.Kind.DISMISSED)


def undismiss(user: object, conference: Conference) -> bool:
    return _clear_mark(user, conference, ConferenceMark.Kind.DISMISSED)


def favorite(user: object, conference: Conference) -> bool:
    """Add *conference* to *user*'s favorites. Dismissed conferences cannot be favorited."""
    return _set_mark(user, conference, ConferenceMark.Kind.FAVORITE)


def unfavorite(user: object, conference: Conference) -> bool:
    return _clear_mark(user, conference, ConferenceMark.Kind.FAVORITE)
