"""Views for the talks app."""

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect
from django.views import View

from django_symposium.conference.models import Conference
from django_symposium.talks.models import Talk
from django_symposium.talks.services import create_submission


class TalkSubmitView(LoginRequiredMixin, View):
    """POST-only view submitting one of the viewer's talks to a conference with an open CFP."""

    def post(self, request: HttpRequest, **kwargs: str) -> HttpResponse:
        """Submit the talk named by the ``talk`` form field.

        Returns:
            A redirect to the conference detail page.  Nothing is submitted
            when the call for papers is not open.

        Raises:
            Http404: If the conference does not exist, or the talk does not
                exist or belongs to someone else.
        """
        conference = get_object_or_404(Conference, pk=kwargs["pk"])
        if not conference.is_currently_accepting_proposals():
            messages.error(request, "This conference is not accepting proposals right now.")
            return redirect(conference)
        talk_id = request.POST.get("talk", "")
        if not talk_id.isdigit():
            messages.error(request, "Choose a talk to submit.")
            return redirect(conference)
        talk = get_object_or_404(Talk, pk=int(talk_id), author=request.user)

        try:
            create_submission(conference.pk, talk.pk)
        except ValidationError as exc:
            messages.error(request, " ".join(exc.messages))
        else:
            messages.success(request, f"Submitted {talk} to {conference.title}.")
        return redirect(conference)
