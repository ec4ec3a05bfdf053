"""Model forms for creating and editing conferences."""

from django import forms

from django_symposium.conference.models import Conference, has_linkable_scheme

_DATETIME_WIDGET_ATTRS = {"type": "datetime-local"}
_DATETIME_INPUT_FORMAT = "%Y-%m-%dT%H:%M"


class ConferenceForm(forms.ModelForm):
    """Form for the public create and edit conference pages.

    Approval and sharing flags are excluded: only administrators set them.
    The URL is a plain text field so values are stored exactly as entered.
    """

    class Meta:
        model = Conference
        fields = [
            "title",
            "description",
            "url",
            "latitude",
            "longitude",
            "starts_at",
            "ends_at",
            "cfp_starts_at",
            "cfp_ends_at",
        ]
        widgets = {
            "description": forms.Textarea(attrs={"rows": 6}),
            "starts_at": forms.DateTimeInput(attrs=_DATETIME_WIDGET_ATTRS, format=_DATETIME_INPUT_FORMAT),
            "ends_at": forms.DateTimeInput(attrs=_DATETIME_WIDGET_ATTRS, format=_DATETIME_INPUT_FORMAT),
            "cfp_starts_at": forms.DateTimeInput(attrs=_DATETIME_WIDGET_ATTRS, format=_DATETIME_INPUT_FORMAT),
            "cfp_ends_at": forms.DateTimeInput(attrs=_DATETIME_WIDGET_ATTRS, format=_DATETIME_INPUT_FORMAT),
        }
        labels = {
            "url": "URL",
            "cfp_starts_at": "CFP opens",
            "cfp_ends_at": "CFP closes",
        }

    def clean_url(self) -> str:
        """Accept scheme-less values and http(s) URLs only."""
        url = self.cleaned_data.get("url", "")
        if not has_linkable_scheme(url):
            raise forms.ValidationError("Enter a web address starting with http:// or https://, or no scheme.")
        return url

    def clean(self) -> dict[str, object]:
        """Reject date ranges that end before they start."""
        cleaned = super().clean()

        for start_field, end_field in (("starts_at", "ends_at"), ("cfp_starts_at", "cfp_ends_at")):
            start = cleaned.get(start_field)
            end = cleaned.get(end_field)
            if start and end and end < start:
                self.add_error(end_field, "This date must not be before the start date.")

        return cleaned
