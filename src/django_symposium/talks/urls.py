"""URL configuration for the talks app.

Routes are conference-scoped; mount them next to the conference URLs::

    urlpatterns = [
        path("conferences/", include("django_symposium.conference.urls")),
        path("conferences/", include("django_symposium.talks.urls")),
    ]
"""

from django.urls import path

from django_symposium.talks.views import TalkSubmitView

app_name = "talks"

urlpatterns = [
    path("<int:pk>/submit/", TalkSubmitView.as_view(), name="talk-submit"),
]
