# theater/services.py
"""
Business rules for the theater app.

Views talk to these services instead of the ORM. Rule violations (duplicate
genre titles, genres still in use, out-of-range ratings) come back as values;
only storage failures are raised, and those propagate untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from .models import RATING_MAX, RATING_MIN, Genre, Movie, Ticket

logger = logging.getLogger(__name__)

DUPLICATE_GENRE_TITLE = "A genre with this title already exists."
GENRE_NOT_FOUND = "Genre not found."
GENRE_IN_USE = "Cannot delete the genre: there are movies in this genre."
RATING_OUT_OF_RANGE = "Rating must be between 0.0 and 10.0."


@dataclass
class SaveResult:
    """
    Outcome of a save.

    ``errors`` maps a field name to its messages (``__all__`` for
    non-field errors). Nothing was written when it is non-empty.
    """

    instance: Any
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)


@dataclass
class DeleteResult:
    deleted: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.deleted


def _field_errors(instance) -> Dict[str, List[str]]:
    """Run the model's field validators and collect messages instead of raising."""
    try:
        instance.full_clean(validate_unique=False)
    except ValidationError as exc:
        return {name: list(messages) for name, messages in exc.message_dict.items()}
    return {}


def _rating_in_range(rating) -> bool:
    try:
        value = Decimal(str(rating))
    except (InvalidOperation, ValueError):
        return False
    return value.is_finite() and RATING_MIN <= value <= RATING_MAX


# ===== Genres ====================================================================
class GenreService:
    def __init__(self, genres=None, movies=None):
        self.genres = genres if genres is not None else Genre.objects
        self.movies = movies if movies is not None else Movie.objects

    def list_all(self):
        return self.genres.ordered_by_title()

    def get(self, genre_id) -> Genre | None:
        return self.genres.get_or_none(genre_id)

    def title_exists(self, title) -> bool:
        return self.genres.title_taken(title)

    def movies_of(self, genre_id):
        return self.movies.for_genre(genre_id)

    def save(self, genre: Genre) -> SaveResult:
        result = SaveResult(genre, _field_errors(genre))
        if "title" not in result.errors and self._title_clashes(genre):
            result.add_error("title", DUPLICATE_GENRE_TITLE)

        if not result.ok:
            logger.info(f"Genre not saved, invalid fields: {sorted(result.errors)}")
            return result

        genre.save()
        logger.info(f"Genre saved: ID {genre.pk}, {genre.title}")
        return result

    def _title_clashes(self, genre: Genre) -> bool:
        if genre.pk is not None:
            stored = self.get(genre.pk)
            # unchanged title must not collide with its own row
            if stored is not None and stored.title == genre.title:
                return False
        return self.title_exists(genre.title)

    def delete(self, genre_id) -> DeleteResult:
        """
        Delete a genre only if no movie references it.

        The lookup, the movie check and the delete run in one transaction with
        the genre row locked, so a movie cannot be attached in between.
        """
        with transaction.atomic():
            genre = self.genres.select_for_update().filter(pk=genre_id).first()
            if genre is None:
                logger.warning(f"Attempt to delete a non-existent genre ID {genre_id}")
                return DeleteResult(False, GENRE_NOT_FOUND)

            if self.movies.for_genre(genre_id).exists():
                logger.warning(f"Refused to delete genre ID {genre_id} ({genre.title}): movies still use it")
                return DeleteResult(False, GENRE_IN_USE)

            genre.delete()

        logger.info(f"Deleted genre ID {genre_id}: {genre.title}")
        return DeleteResult(True)


# ===== Movies ====================================================================
class MovieService:
    def __init__(self, movies=None, tickets=None):
        self.movies = movies if movies is not None else Movie.objects
        self.tickets = tickets if tickets is not None else Ticket.objects

    def list_all(self):
        return self.movies.ordered_by_title()

    def get(self, movie_id) -> Movie | None:
        return self.movies.get_or_none(movie_id)

    def search(self, text):
        return self.movies.search_title((text or "").strip())

    def by_genre(self, genre_id):
        return self.movies.for_genre(genre_id)

    def released_in(self, year):
        return self.movies.released_in(year)

    def save(self, movie: Movie) -> SaveResult:
        result = SaveResult(movie, _field_errors(movie))

        # checked here as well as by the field validators
        if movie.rating is not None and not _rating_in_range(movie.rating):
            result.errors["rating"] = [RATING_OUT_OF_RANGE]

        if not result.ok:
            logger.info(f"Movie not saved, invalid fields: {sorted(result.errors)}")
            return result

        movie.save()
        logger.info(f"Movie saved: ID {movie.pk}, {movie.title}")
        return result

    def delete(self, movie_id) -> bool:
        """Delete a movie together with every ticket sold for it."""
        with transaction.atomic():
            movie = self.movies.select_for_update().filter(pk=movie_id).first()
            if movie is None:
                logger.warning(f"Attempt to delete a non-existent movie ID {movie_id}")
                return False

            ticket_count, _ = self.tickets.filter(movie_id=movie_id).delete()
            movie.delete()

        logger.info(f"Deleted movie ID {movie_id}: {movie.title} ({ticket_count} ticket(s) removed)")
        return True


# ===== Tickets ===================================================================
class TicketService:
    def __init__(self, tickets=None):
        self.tickets = tickets if tickets is not None else Ticket.objects

    def list_all(self):
        return self.tickets.latest_first()

    def get(self, ticket_id) -> Ticket | None:
        return self.tickets.get_or_none(ticket_id)

    def by_customer(self, name):
        return self.tickets.for_customer((name or "").strip())

    def save(self, ticket: Ticket) -> SaveResult:
        if ticket.date is None:
            ticket.date = timezone.now()

        result = SaveResult(ticket, _field_errors(ticket))
        if not result.ok:
            logger.info(f"Ticket not saved, invalid fields: {sorted(result.errors)}")
            return result

        ticket.save()
        movie = ticket.current_movie
        logger.info(
            f"Ticket saved: ID {ticket.pk}, movie={movie.pk if movie else None}, "
            f"customer={ticket.customer_name}, count={ticket.count}"
        )
        return result

    def issue(self, movie: Movie, count, customer_name) -> SaveResult:
        """Sell ``count`` seats for ``movie``."""
        ticket = Ticket.for_movie(movie, count, customer_name)
        result = self.save(ticket)
        if not result.ok:
            ticket.detach()
        return result

    def delete(self, ticket_id) -> bool:
        ticket = self.get(ticket_id)
        if ticket is None:
            logger.warning(f"Attempt to delete a non-existent ticket ID {ticket_id}")
            return False

        ticket.detach()
        ticket.delete()
        logger.info(f"Deleted ticket ID {ticket_id}")
        return True
