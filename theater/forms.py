# theater/forms.py
from __future__ import annotations

from django import forms
from django.utils import timezone

from .models import Genre, Movie, Ticket

INPUT_CSS = "w-full rounded-lg bg-gray-800 border border-gray-700 px-3 py-2"


def _prefill(form, defaults):
    # ModelForm.initial carries the blank instance's Nones; fill only those
    for name, value in defaults.items():
        if form.initial.get(name) is None:
            form.initial[name] = value


class ServiceErrorsMixin:
    """Copy field-tagged errors from a ``SaveResult`` onto the bound form."""

    def add_service_errors(self, errors):
        for field_name, messages in errors.items():
            target = field_name if field_name in self.fields else None
            for message in messages:
                self.add_error(target, message)


class GenreForm(ServiceErrorsMixin, forms.ModelForm):
    class Meta:
        model = Genre
        fields = ["title", "description"]
        widgets = {
            "title": forms.TextInput(attrs={"class": INPUT_CSS}),
            "description": forms.Textarea(attrs={"class": INPUT_CSS, "rows": 4}),
        }

    def validate_unique(self):
        # title uniqueness is decided by GenreService.save
        pass


class MovieForm(ServiceErrorsMixin, forms.ModelForm):
    class Meta:
        model = Movie
        fields = [
            "title",
            "genre",
            "ticket_price",
            "duration_minutes",
            "release_year",
            "rating",
            "description",
        ]
        widgets = {
            "title": forms.TextInput(attrs={"class": INPUT_CSS}),
            "genre": forms.Select(attrs={"class": INPUT_CSS}),
            "ticket_price": forms.NumberInput(attrs={"class": INPUT_CSS, "min": 100, "max": 1000}),
            "duration_minutes": forms.NumberInput(attrs={"class": INPUT_CSS, "min": 60}),
            "release_year": forms.NumberInput(attrs={"class": INPUT_CSS, "min": 1900, "max": 2100}),
            "rating": forms.NumberInput(attrs={"class": INPUT_CSS, "min": 0, "max": 10, "step": "0.1"}),
            "description": forms.Textarea(attrs={"class": INPUT_CSS, "rows": 4}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["genre"].queryset = Genre.objects.ordered_by_title()
        if not self.instance.pk and not self.is_bound:
            _prefill(self, {
                "ticket_price": 300,
                "duration_minutes": 120,
                "release_year": timezone.localdate().year,
            })


class TicketForm(ServiceErrorsMixin, forms.ModelForm):
    # Not assigned by construct_instance: the view moves the ticket with
    # Ticket.transfer_to so both sides of the association stay in step.
    movie = forms.ModelChoiceField(
        queryset=Movie.objects.none(),
        widget=forms.Select(attrs={"class": INPUT_CSS}),
    )

    class Meta:
        model = Ticket
        fields = ["count", "date", "customer_name"]
        widgets = {
            "count": forms.NumberInput(attrs={"class": INPUT_CSS, "min": 1, "max": 50}),
            "date": forms.DateTimeInput(
                attrs={"class": INPUT_CSS, "type": "datetime-local"},
                format="%Y-%m-%dT%H:%M",
            ),
            "customer_name": forms.TextInput(attrs={"class": INPUT_CSS}),
        }

    def __init__(self, *args, **kwargs):
        # Allow caller to preselect a movie (ticket sale started from a movie page)
        movie = kwargs.pop("movie", None)
        super().__init__(*args, **kwargs)
        self.fields["movie"].queryset = Movie.objects.ordered_by_title()
        self.fields["date"].required = False

        current = movie or self.instance.current_movie
        if current is not None:
            self.initial["movie"] = current.pk
        if not self.instance.pk and not self.is_bound:
            _prefill(self, {
                "count": 1,
                "date": timezone.localtime().replace(second=0, microsecond=0),
            })
