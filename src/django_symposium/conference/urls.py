"""URL configuration for the conference app.

Mount these under a prefix in the host project::

    urlpatterns = [
        path("conferences/", include("django_symposium.conference.urls")),
    ]
"""

from django.urls import path

from django_symposium.conference.views import (
    ConferenceCreateView,
    ConferenceDetailView,
    ConferenceDismissView,
    ConferenceFavoriteView,
    ConferenceListView,
    ConferenceUndismissView,
    ConferenceUnfavoriteView,
    ConferenceUpdateView,
)

app_name = "conference"

urlpatterns = [
    path("", ConferenceListView.as_view(), name="conference-list"),
    path("create/", ConferenceCreateView.as_view(), name="conference-create"),
    path("<int:pk>/", ConferenceDetailView.as_view(), name="conference-detail"),
    path("<int:pk>/edit/", ConferenceUpdateView.as_view(), name="conference-edit"),
    path("<int:pk>/dismiss/", ConferenceDismissView.as_view(), name="conference-dismiss"),
    path("<int:pk>/undismiss/", ConferenceUndismissView.as_view(), name="conference-undismiss"),
    path("<int:pk>/favorite/", ConferenceFavoriteView.as_view(), name="conference-favorite"),
    path("<int:pk>/unfavorite/", ConferenceUnfavoriteView.as_view(), name="conference-unfavorite"),
]
