# theater/models.py
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from .managers import GenreQuerySet, MovieQuerySet, TicketQuerySet
from .utils import format_duration, format_price, format_timestamp

RATING_MIN = Decimal("0.0")
RATING_MAX = Decimal("10.0")


def _discard(items, item):
    # list.remove() raises when the item is missing
    if item in items:
        items.remove(item)


def _reject_blank(instance, *field_names):
    # CharField only refuses "", so "   " would otherwise pass full_clean
    errors = {}
    for name in field_names:
        value = getattr(instance, name)
        if value and not value.strip():
            errors[name] = ["This field cannot be blank."]
    if errors:
        raise ValidationError(errors)


class TicketList(list):
    """
    Snapshot of a movie's tickets.

    Membership follows the ticket's own ``movie`` reference, so
    ``ticket in movie.tickets`` agrees with ``ticket.movie == movie`` even
    when the ticket was moved through another loaded copy of the movie.
    """

    def __init__(self, movie, tickets=()):
        super().__init__(tickets)
        self.movie = movie

    def __contains__(self, item):
        if isinstance(item, Ticket):
            current = item.current_movie
            return current is not None and current == self.movie
        return super().__contains__(item)


# -----------------------------
# 🎭 Genre Model
# -----------------------------

class Genre(models.Model):
    title = models.CharField(max_length=100, unique=True)
    description = models.CharField(max_length=500, blank=True)

    objects = GenreQuerySet.as_manager()

    class Meta:
        ordering = ["title"]

    def __str__(self):
        return self.title

    def clean(self):
        _reject_blank(self, "title")


# -----------------------------
# 🎥 Movie Model
# -----------------------------

class Movie(models.Model):
    title = models.CharField(max_length=200)
    # PROTECT: a genre with movies is never deleted, see GenreService.delete
    genre = models.ForeignKey(Genre, on_delete=models.PROTECT, related_name="movies")
    ticket_price = models.PositiveIntegerField(
        validators=[MinValueValidator(100), MaxValueValidator(1000)],
    )
    duration_minutes = models.PositiveIntegerField(
        validators=[MinValueValidator(60)],
        help_text="Duration in minutes",
    )
    release_year = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1900), MaxValueValidator(2100)],
    )
    rating = models.DecimalField(
        max_digits=3,
        decimal_places=1,
        null=True,
        blank=True,
        validators=[MinValueValidator(RATING_MIN), MaxValueValidator(RATING_MAX)],
    )
    description = models.CharField(max_length=500, blank=True)

    objects = MovieQuerySet.as_manager()

    # In-memory edits made through this instance, layered over the
    # ``ticket_set`` rows on every read of ``tickets``.
    _attached = None
    _released = None

    class Meta:
        ordering = ["title"]

    def __str__(self):
        return self.title

    def clean(self):
        _reject_blank(self, "title")

    @property
    def tickets(self) -> TicketList:
        """
        Tickets owned by this movie.

        Rebuilt on every access: the saved ``ticket_set`` rows plus tickets
        attached through this instance and not yet saved, minus tickets
        detached through it. Nothing is kept between reads, so every loaded
        copy of the movie lists a transfer once the ticket is saved.
        """
        attached, released = self._overlay()
        listed = [t for t in attached if t.current_movie is self]
        if self.pk is not None:
            rows = list(self.ticket_set.all())
            # a released ticket missing from the rows was saved elsewhere
            released[:] = [t for t in released if t in rows]
            for row in rows:
                if row not in listed and row not in released:
                    listed.append(row)
        return TicketList(self, listed)

    def _overlay(self):
        if self._attached is None:
            self._attached, self._released = [], []
        return self._attached, self._released

    def _lists(self, ticket) -> bool:
        # equality lookup, unlike TicketList.__contains__
        return any(t == ticket for t in self.tickets)

    def _hold(self, ticket):
        attached, released = self._overlay()
        _discard(released, ticket)
        if ticket not in attached:
            attached.append(ticket)

    def _release(self, ticket):
        attached, released = self._overlay()
        _discard(attached, ticket)
        if ticket.pk is not None and ticket not in released:
            released.append(ticket)

    def add_ticket(self, ticket):
        ticket.set_movie(self)

    def remove_ticket(self, ticket):
        self._release(ticket)
        ticket.set_movie(None)

    @property
    def formatted_duration(self) -> str:
        return format_duration(self.duration_minutes)

    @property
    def formatted_ticket_price(self) -> str:
        return format_price(self.ticket_price) if self.ticket_price is not None else ""


# -----------------------------
# 🎟️ Ticket Model
# -----------------------------

class Ticket(models.Model):
    movie = models.ForeignKey(Movie, on_delete=models.CASCADE)
    count = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(50)],
    )
    date = models.DateTimeField(default=timezone.now)
    customer_name = models.CharField(max_length=200)

    objects = TicketQuerySet.as_manager()

    class Meta:
        ordering = ["-date", "-id"]

    def __str__(self):
        movie = self.current_movie
        return f"Ticket for {movie.title if movie else 'no movie'} - {self.customer_name}"

    def clean(self):
        _reject_blank(self, "customer_name")

    # Two tickets are equal only when both are persisted with the same id.
    # A transient ticket equals nothing but the very same object.
    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Ticket):
            return NotImplemented
        return self.pk is not None and self.pk == other.pk

    # Constant per class. A hash built from the id would change when a
    # transient ticket is saved, losing it inside any set or dict key.
    def __hash__(self):
        return hash(self.__class__)

    @classmethod
    def for_movie(cls, movie, count, customer_name, date=None):
        ticket = cls(count=count, customer_name=customer_name)
        if date is not None:
            ticket.date = date
        ticket.set_movie(movie)
        return ticket

    @property
    def current_movie(self):
        # the descriptor raises RelatedObjectDoesNotExist (an AttributeError) when unset
        return getattr(self, "movie", None)

    # ✅ Association helpers
    def set_movie(self, movie):
        """
        Point this ticket at ``movie`` and keep both sides in step.

        Re-setting the current movie is a no-op. ``None`` detaches.
        """
        current = self.current_movie
        if current is not None and current == movie:
            return
        if current is not None:
            self.movie = None
            current._release(self)
        self.movie = movie
        if movie is not None and not movie._lists(self):
            movie._hold(self)

    def detach(self):
        current = self.current_movie
        if current is None:
            return
        self.movie = None
        current._release(self)

    def transfer_to(self, movie):
        self.set_movie(movie)

    @property
    def total_price(self) -> int:
        movie = self.current_movie
        if movie is not None and movie.ticket_price is not None and self.count is not None:
            return movie.ticket_price * self.count
        return 0

    @property
    def formatted_total_price(self) -> str:
        total = self.total_price
        return format_price(total) if total > 0 else ""

    @property
    def formatted_date(self) -> str:
        return format_timestamp(self.date)
