from decimal import Decimal

import pytest

from theater.models import Genre, Movie, Ticket


@pytest.fixture(autouse=True)
def cinema_settings(settings):
    settings.CINEMA_CURRENCY_SUFFIX = "RUB"
    settings.TIME_ZONE = "UTC"
    return settings


@pytest.fixture
def make_genre(db):
    def _make(title="Drama", description=""):
        return Genre.objects.create(title=title, description=description)
    return _make


@pytest.fixture
def make_movie(db):
    def _make(title="Joker", genre=None, ticket_price=400, duration_minutes=122,
              release_year=2019, rating=Decimal("8.4"), description=""):
        if genre is None:
            genre, _ = Genre.objects.get_or_create(title="Drama")
        return Movie.objects.create(
            title=title,
            genre=genre,
            ticket_price=ticket_price,
            duration_minutes=duration_minutes,
            release_year=release_year,
            rating=rating,
            description=description,
        )
    return _make


@pytest.fixture
def make_ticket(db):
    def _make(movie, count=1, customer_name="Ivan Petrov", date=None):
        ticket = Ticket.for_movie(movie, count, customer_name, date=date)
        ticket.save()
        return ticket
    return _make
