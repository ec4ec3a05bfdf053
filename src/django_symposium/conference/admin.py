"""Django admin configuration for the conference app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from django_symposium.conference.models import Conference, ConferenceMark


class ConferenceMarkInline(admin.TabularInline):
    """Read-only list of the users who favorited or dismissed a conference."""

    model = ConferenceMark
    extra = 0
    fields = ("user", "kind", "created_at")
    readonly_fields = ("user", "kind", "created_at")
    can_delete = False

    def has_add_permission(self, request: HttpRequest, obj: Conference | None = None) -> bool:  # noqa: ARG002
        return False


@admin.register(Conference)
class ConferenceAdmin(admin.ModelAdmin):
    """Admin interface for reviewing and approving conferences.

    Conferences submitted through the public form start unapproved; the
    ``approve_conferences`` action publishes them to the default listing.
    """

    list_display = ("title", "starts_at", "cfp_ends_at", "is_approved", "is_shared", "author")
    list_filter = ("is_approved", "is_shared")
    search_fields = ("title", "description", "url")
    readonly_fields = ("created_at", "updated_at")
    raw_id_fields = ("author",)
    inlines = (ConferenceMarkInline,)
    actions = ("approve_conferences", "mark_conferences_shared")

    fieldsets = (
        (
            None,
            {
                "fields": ("title", "description", "url", "author"),
            },
        ),
        (
            "Dates",
            {
                "fields": ("starts_at", "ends_at", "cfp_starts_at", "cfp_ends_at"),
            },
        ),
        (
            "Location",
            {
                "fields": ("latitude", "longitude"),
                "classes": ("collapse",),
            },
        ),
        (
            "Status",
            {
                "fields": ("is_approved", "is_shared", "created_at", "updated_at"),
            },
        ),
    )

    @admin.action(description="Approve selected conferences")
    def approve_conferences(self, request: HttpRequest, queryset: QuerySet[Conference]) -> None:
        updated = queryset.update(is_approved=True)
        self.message_user(request, f"Approved {updated} conference(s).")

    @admin.action(description="Mark selected conferences as shared")
    def mark_conferences_shared(self, request: HttpRequest, queryset: QuerySet[Conference]) -> None:
        updated = queryset.update(is_shared=True)
        self.message_user(request, f"Marked {updated} conference(s) as shared.")


@admin.register(ConferenceMark)
class ConferenceMarkAdmin(admin.ModelAdmin):
    """Admin interface for favorite and dismissed marks."""

    list_display = ("conference", "user", "kind", "created_at")
    list_filter = ("kind",)
    search_fields = ("conference__title", "user__username")
    raw_id_fields = ("conference", "user")
