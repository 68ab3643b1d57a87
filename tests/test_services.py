from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from theater.models import Genre, Movie, Ticket
from theater.services import (
    DUPLICATE_GENRE_TITLE,
    GENRE_IN_USE,
    GENRE_NOT_FOUND,
    RATING_OUT_OF_RANGE,
    GenreService,
    MovieService,
    TicketService,
    _rating_in_range,
)

pytestmark = pytest.mark.django_db


# ===== Genres ==================================================================
class TestGenreDeletion:
    def test_unused_genre_is_deleted(self, make_genre):
        genre = make_genre("Western")

        result = GenreService().delete(genre.pk)

        assert result.deleted
        assert GenreService().get(genre.pk) is None

    def test_genre_with_movies_is_kept(self, make_genre, make_movie):
        genre = make_genre("Drama")
        movie = make_movie(genre=genre)

        result = GenreService().delete(genre.pk)

        assert not result
        assert result.reason == GENRE_IN_USE
        assert Genre.objects.filter(pk=genre.pk).exists()
        assert Movie.objects.filter(pk=movie.pk).exists()

    def test_missing_genre(self):
        result = GenreService().delete(4242)
        assert not result.deleted
        assert result.reason == GENRE_NOT_FOUND


class TestGenreSave:
    def test_new_genre_is_saved(self):
        result = GenreService().save(Genre(title="Comedy", description="Funny"))

        assert result.ok
        assert result.instance.pk is not None
        assert Genre.objects.get(title="Comedy").description == "Funny"

    def test_duplicate_title_is_rejected(self, make_genre):
        make_genre("Comedy")
        before = Genre.objects.count()

        result = GenreService().save(Genre(title="Comedy"))

        assert not result.ok
        assert result.errors == {"title": [DUPLICATE_GENRE_TITLE]}
        assert Genre.objects.count() == before

    def test_unchanged_title_on_update_is_not_a_duplicate(self, make_genre):
        genre = make_genre("Comedy")
        make_genre("Drama")

        genre = Genre.objects.get(pk=genre.pk)
        genre.description = "Updated"
        result = GenreService().save(genre)

        assert result.ok
        assert Genre.objects.get(pk=genre.pk).description == "Updated"

    def test_rename_onto_existing_title_is_rejected(self, make_genre):
        genre = make_genre("Comedy")
        make_genre("Drama")

        genre.title = "Drama"
        result = GenreService().save(genre)

        assert "title" in result.errors
        assert Genre.objects.get(pk=genre.pk).title == "Comedy"

    def test_title_match_is_case_sensitive(self, make_genre):
        make_genre("Comedy")
        assert GenreService().save(Genre(title="comedy")).ok

    def test_blank_title_is_a_field_error(self):
        result = GenreService().save(Genre(title=""))
        assert "title" in result.errors
        assert not Genre.objects.exists()

    def test_whitespace_title_is_a_field_error(self):
        result = GenreService().save(Genre(title="   "))

        assert result.errors == {"title": ["This field cannot be blank."]}
        assert not Genre.objects.exists()

    def test_listing_and_lookup(self, make_genre, make_movie):
        drama = make_genre("Drama")
        make_genre("Action")
        make_movie(title="Joker", genre=drama)
        service = GenreService()

        assert [g.title for g in service.list_all()] == ["Action", "Drama"]
        assert service.title_exists("Drama")
        assert not service.title_exists("Horror")
        assert [m.title for m in service.movies_of(drama.pk)] == ["Joker"]

    def test_injected_managers_are_used(self, make_genre):
        make_genre("Drama")
        service = GenreService(genres=Genre.objects.filter(title__startswith="X"))
        assert list(service.list_all()) == []


# ===== Movies ==================================================================
class TestMovieService:
    def _movie(self, genre, **overrides):
        fields = dict(
            title="Dune",
            genre=genre,
            ticket_price=550,
            duration_minutes=155,
            release_year=2021,
            rating=Decimal("8.0"),
        )
        fields.update(overrides)
        return Movie(**fields)

    def test_valid_movie_is_saved(self, make_genre):
        result = MovieService().save(self._movie(make_genre("Sci-Fi")))
        assert result.ok
        assert Movie.objects.filter(title="Dune").exists()

    def test_rating_above_ten_is_rejected(self, make_genre):
        movie = self._movie(make_genre("Sci-Fi"), rating=Decimal("10.5"))

        result = MovieService().save(movie)

        assert result.errors["rating"] == [RATING_OUT_OF_RANGE]
        assert movie.pk is None

    def test_negative_rating_is_rejected(self, make_genre):
        result = MovieService().save(self._movie(make_genre("Sci-Fi"), rating=Decimal("-0.1")))
        assert result.errors["rating"] == [RATING_OUT_OF_RANGE]

    def test_missing_rating_is_allowed(self, make_genre):
        assert MovieService().save(self._movie(make_genre("Sci-Fi"), rating=None)).ok

    @pytest.mark.parametrize("field, value", [
        ("ticket_price", 99),
        ("ticket_price", 1001),
        ("duration_minutes", 59),
        ("release_year", 1899),
        ("release_year", 2101),
        ("title", ""),
        ("title", "   "),
    ])
    def test_field_bounds(self, make_genre, field, value):
        result = MovieService().save(self._movie(make_genre("Sci-Fi"), **{field: value}))
        assert field in result.errors
        assert not Movie.objects.exists()

    def test_search_is_case_insensitive_substring(self, make_movie):
        make_movie(title="Joker")
        make_movie(title="Dune")

        assert [m.title for m in MovieService().search("jok")] == ["Joker"]
        assert [m.title for m in MovieService().search("  UNE ")] == ["Dune"]

    def test_by_genre_and_year(self, make_genre, make_movie):
        horror = make_genre("Horror")
        make_movie(title="It", genre=horror, release_year=2017)
        make_movie(title="Joker", release_year=2019)
        make_movie(title="Avengers: Endgame", release_year=2019)
        service = MovieService()

        assert [m.title for m in service.by_genre(horror.pk)] == ["It"]
        assert [m.title for m in service.released_in(2019)] == ["Avengers: Endgame", "Joker"]
        assert [m.title for m in service.list_all()] == ["Avengers: Endgame", "It", "Joker"]

    def test_delete_removes_tickets(self, make_movie, make_ticket):
        movie = make_movie()
        other = make_movie(title="Dune")
        make_ticket(movie)
        make_ticket(movie)
        kept = make_ticket(other)

        assert MovieService().delete(movie.pk)

        assert not Movie.objects.filter(pk=movie.pk).exists()
        assert list(Ticket.objects.all()) == [kept]

    def test_delete_missing_movie(self):
        assert MovieService().delete(999) is False


def test_rating_range_helper():
    assert _rating_in_range(Decimal("0.0"))
    assert _rating_in_range("10.0")
    assert not _rating_in_range("10.1")
    assert not _rating_in_range("abc")
    assert not _rating_in_range("NaN")


# ===== Tickets =================================================================
class TestTicketService:
    def test_issue_links_ticket_to_movie(self, make_movie):
        movie = make_movie(ticket_price=400)

        result = TicketService().issue(movie, 3, "Alexey Ivanov")

        assert result.ok
        assert result.instance in movie.tickets
        assert result.instance.total_price == 1200
        assert Ticket.objects.get(pk=result.instance.pk).movie_id == movie.pk

    def test_invalid_issue_leaves_movie_untouched(self, make_movie):
        movie = make_movie()

        result = TicketService().issue(movie, 0, "Alexey Ivanov")

        assert "count" in result.errors
        assert movie.tickets == []
        assert not Ticket.objects.exists()

    def test_ticket_without_movie_is_rejected(self):
        result = TicketService().save(Ticket(count=1, customer_name="Ivan"))
        assert "movie" in result.errors

    def test_missing_date_defaults_to_now(self, make_movie):
        ticket = Ticket.for_movie(make_movie(), 1, "Ivan")
        ticket.date = None

        assert TicketService().save(ticket).ok
        assert ticket.date is not None

    def test_customer_search_newest_first(self, make_movie, make_ticket):
        movie = make_movie()
        make_ticket(movie, customer_name="Ivan Petrov", date=datetime(2024, 1, 5, tzinfo=dt_timezone.utc))
        make_ticket(movie, customer_name="Maria Sidorova", date=datetime(2024, 1, 6, tzinfo=dt_timezone.utc))
        make_ticket(movie, customer_name="ivan ivanov", date=datetime(2024, 1, 7, tzinfo=dt_timezone.utc))
        service = TicketService()

        assert [t.customer_name for t in service.by_customer("IVAN")] == ["ivan ivanov", "Ivan Petrov"]
        assert [t.customer_name for t in service.list_all()] == ["ivan ivanov", "Maria Sidorova", "Ivan Petrov"]

    def test_delete(self, make_movie, make_ticket):
        ticket = make_ticket(make_movie())
        service = TicketService()

        assert service.delete(ticket.pk)
        assert service.get(ticket.pk) is None
        assert service.delete(ticket.pk) is False

    def test_whitespace_customer_name_is_rejected(self, make_movie):
        movie = make_movie()
        service = TicketService()

        saved = service.save(Ticket.for_movie(make_movie(title="Dune"), 1, "   "))
        issued = service.issue(movie, 1, " \t ")

        assert saved.errors == {"customer_name": ["This field cannot be blank."]}
        assert "customer_name" in issued.errors
        assert not Ticket.objects.exists()
        assert movie.tickets == []
