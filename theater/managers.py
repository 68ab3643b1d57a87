# theater/managers.py
from django.db import models


class GenreQuerySet(models.QuerySet):
    def get_or_none(self, pk):
        return self.filter(pk=pk).first()

    def ordered_by_title(self):
        return self.order_by("title")

    def title_taken(self, title) -> bool:
        # exact match, same as the unique index on genres.title
        return self.filter(title=title).exists()


class MovieQuerySet(models.QuerySet):
    def get_or_none(self, pk):
        return self.select_related("genre").filter(pk=pk).first()

    def ordered_by_title(self):
        return self.select_related("genre").order_by("title")

    def for_genre(self, genre_id):
        return self.ordered_by_title().filter(genre_id=genre_id)

    def search_title(self, text):
        """Case-insensitive substring match on the title."""
        return self.ordered_by_title().filter(title__icontains=text)

    def released_in(self, year):
        return self.ordered_by_title().filter(release_year=year)


class TicketQuerySet(models.QuerySet):
    def get_or_none(self, pk):
        return self.select_related("movie", "movie__genre").filter(pk=pk).first()

    def latest_first(self):
        return self.select_related("movie").order_by("-date", "-id")

    def for_customer(self, name):
        return self.latest_first().filter(customer_name__icontains=name)
