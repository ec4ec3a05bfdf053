"""Django admin configuration for the talks app."""

from django.contrib import admin

from django_symposium.talks.models import Submission, Talk, TalkRevision


class TalkRevisionInline(admin.StackedInline):
    """Inline editor for talk revisions, newest first."""

    model = TalkRevision
    extra = 0
    fields = ("title", "type", "level", "length", "description")


@admin.register(Talk)
class TalkAdmin(admin.ModelAdmin):
    """Admin interface for talks and their revisions."""

    list_display = ("__str__", "author", "created_at")
    search_fields = ("revisions__title", "author__username")
    raw_id_fields = ("author",)
    inlines = (TalkRevisionInline,)


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    """Admin interface for reviewing submissions."""

    list_display = ("talk_revision", "conference", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("talk_revision__title", "conference__title")
    raw_id_fields = ("conference", "talk_revision")
