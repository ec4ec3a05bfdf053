"""Views for the conference app.

Provides the filtered and sorted conference list, detail, create and edit
forms, and the favorite/dismiss actions.  Creating, editing, and marking
conferences require a signed-in user; only the author may edit.
"""

import logging
from collections.abc import Callable

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied
from django.db.models import QuerySet
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect
from django.urls import reverse
from django.utils import timezone
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View
from django.views.generic import CreateView, DetailView, ListView, UpdateView

from django_symposium.conference import services
from django_symposium.conference.forms import ConferenceForm
from django_symposium.conference.listing import filter_conferences, sort_conferences
from django_symposium.conference.models import Conference
from django_symposium.settings import FILTER_CHOICES, SORT_CHOICES, get_config

logger = logging.getLogger(__name__)


class ConferenceListView(ListView):
    """List conferences for the current viewer.

    The ``?filter=`` query parameter picks the filter mode and ``?sort=`` the
    ordering; unknown values fall back to the configured defaults.  A POST
    to the list URL creates a conference.
    """

    template_name = "django_symposium/conference/conference_list.html"
    context_object_name = "conferences"

    @property
    def current_filter(self) -> str:
        value = self.request.GET.get("filter", "")
        return value if value in FILTER_CHOICES else get_config().listing.default_filter

    @property
    def current_sort(self) -> str:
        value = self.request.GET.get("sort", "")
        return value if value in SORT_CHOICES else get_config().listing.default_sort

    def get_paginate_by(self, queryset: object) -> int | None:  # noqa: ARG002
        return get_config().listing.paginate_by

    def get_queryset(self) -> list[Conference]:
        """Return the viewer's conferences, filtered and sorted in that order.

        Returns:
            A list of Conference instances.
        """
        queryset = filter_conferences(
            Conference.objects.select_related("author"),
            self.current_filter,
            self.request.user,
            now=timezone.now(),
        )
        return sort_conferences(queryset, self.current_sort)

    def get_context_data(self, **kwargs: object) -> dict[str, object]:
        """Add the active filter and sort, and their choices, to context."""
        context = super().get_context_data(**kwargs)
        context["current_filter"] = self.current_filter
        context["current_sort"] = self.current_sort
        context["filter_choices"] = FILTER_CHOICES
        context["sort_choices"] = SORT_CHOICES
        return context

    def post(self, request: HttpRequest, *args: str, **kwargs: str) -> HttpResponse:
        return ConferenceCreateView.as_view()(request, *args, **kwargs)


class ConferenceDetailView(DetailView):
    """Detail view for a single conference.

    Signed-in users may open any conference; guests only approved ones.
    """

    model = Conference
    template_name = "django_symposium/conference/conference_detail.html"
    context_object_name = "conference"

    def get_queryset(self) -> QuerySet[Conference]:
        if not self.request.user.is_authenticated:
            return Conference.objects.approved()
        return Conference.objects.all()

    def get_context_data(self, **kwargs: object) -> dict[str, object]:
        """Add the viewer's mark, edit permission, and CFP status to context."""
        context = super().get_context_data(**kwargs)
        conference: Conference = self.object
        user = self.request.user
        context["user_mark"] = conference.mark_for(user)
        context["can_edit"] = conference.is_authored_by(user) or user.is_superuser
        context["is_accepting_proposals"] = conference.is_currently_accepting_proposals()
        if user.is_authenticated:
            context["talks"] = user.talks.prefetch_related("revisions")
        return context


class ConferenceCreateView(LoginRequiredMixin, CreateView):
    """Create a conference owned by the signed-in user."""

    form_class = ConferenceForm
    template_name = "django_symposium/conference/conference_form.html"

    def form_valid(self, form: ConferenceForm) -> HttpResponse:
        """Record the author, save, and add a success message."""
        form.instance.author = self.request.user
        response = super().form_valid(form)
        logger.info("User %s created conference %s", self.request.user.pk, self.object.pk)
        messages.success(self.request, "Conference created successfully.")
        return response


class ConferenceUpdateView(LoginRequiredMixin, UpdateView):
    """Edit a conference.  Only its author (or a superuser) may do so."""

    form_class = ConferenceForm
    template_name = "django_symposium/conference/conference_form.html"
    context_object_name = "conference"

    def get_object(self, queryset: QuerySet[Conference] | None = None) -> Conference:  # noqa: ARG002
        """Look up the conference and check the viewer may edit it.

        Raises:
            Http404: If no conference matches the URL.
            PermissionDenied: If the viewer is not the author.
        """
        conference = get_object_or_404(Conference, pk=self.kwargs["pk"])
        if not (conference.is_authored_by(self.request.user) or self.request.user.is_superuser):
            raise PermissionDenied
        return conference

    def form_valid(self, form: ConferenceForm) -> HttpResponse:
        messages.success(self.request, "Conference updated successfully.")
        return super().form_valid(form)


class ConferenceMarkView(LoginRequiredMixin, View):
    """Base view for the favorite/dismiss actions.

    Accepts GET and POST so the actions work from plain links.  Redirects to
    a safe ``next`` URL when one is given, otherwise to the conference list.
    """

    action: Callable[[object, Conference], bool]
    success_message = ""
    refused_message = ""

    def handle(self, request: HttpRequest, **kwargs: str) -> HttpResponse:
        conference = get_object_or_404(Conference, pk=kwargs["pk"])
        if self.action(request.user, conference):
            if self.success_message:
                messages.success(request, self.success_message)
        elif self.refused_message:
            messages.info(request, self.refused_message)
        return redirect(self.get_redirect_url())

    def get(self, request: HttpRequest, **kwargs: str) -> HttpResponse:
        return self.handle(request, **kwargs)

    def post(self, request: HttpRequest, **kwargs: str) -> HttpResponse:
        return self.handle(request, **kwargs)

    def get_redirect_url(self) -> str:
        next_url = self.request.POST.get("next") or self.request.GET.get("next", "")
        if next_url and url_has_allowed_host_and_scheme(
            next_url,
            allowed_hosts={self.request.get_host()},
            require_https=self.request.is_secure(),
        ):
            return next_url
        return reverse("conference:conference-list")


class ConferenceDismissView(ConferenceMarkView):
    action = staticmethod(services.dismiss)
    success_message = "Conference dismissed."
    refused_message = "Favorited conferences cannot be dismissed."


class ConferenceUndismissView(ConferenceMarkView):
    action = staticmethod(services.undismiss)
    success_message = "Conference restored to your listings."


class ConferenceFavoriteView(ConferenceMarkView):
    action = staticmethod(services.favorite)
    success_message = "Conference added to your favorites."
    refused_message = "Dismissed conferences cannot be favorited."


class ConferenceUnfavoriteView(ConferenceMarkView):
    action = staticmethod(services.unfavorite)
    success_message = "Conference removed from your favorites."
