from datetime import datetime
from decimal import Decimal
import random

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from theater.models import Genre, Movie, Ticket
from theater.services import TicketService

GENRES = [
    ("Action", "Lots of action and special effects"),
    ("Comedy", "Feel-good films to lift the mood"),
    ("Drama", "Serious films with a deep plot"),
    ("Science Fiction", "Films about the future and technology"),
    ("Horror", "Scary films with a touch of the supernatural"),
]

# title, genre, ticket price, minutes, year, rating, description
MOVIES = [
    ("Avengers: Endgame", "Action", 500, 181, 2019, "8.4", "The finale of the superhero saga"),
    ("The Gentlemen", "Comedy", 450, 113, 2019, "8.1", "Guy Ritchie's crime comedy"),
    ("Joker", "Drama", 400, 122, 2019, "8.4", "How a villain is made"),
    ("Dune", "Science Fiction", 550, 155, 2021, "8.0", "An epic science fiction saga"),
    ("It", "Horror", 350, 135, 2017, "7.3", "Based on the Stephen King novel"),
]

# movie, seats, sold at, customer
TICKETS = [
    ("Avengers: Endgame", 2, datetime(2024, 1, 5, 19, 30), "Ivan Petrov"),
    ("The Gentlemen", 1, datetime(2024, 1, 5, 20, 0), "Maria Sidorova"),
    ("Joker", 3, datetime(2024, 1, 6, 18, 0), "Alexey Ivanov"),
    ("Dune", 2, datetime(2024, 1, 6, 21, 0), "Ekaterina Smirnova"),
    ("It", 1, datetime(2024, 1, 7, 22, 0), "Dmitry Kuznetsov"),
]

CUSTOMERS = ["Anna Volkova", "Pavel Orlov", "Olga Lebedeva", "Sergey Morozov", "Irina Sokolova"]


class Command(BaseCommand):
    help = "Seed the demo cinema catalogue (genres, movies and a few ticket sales)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--tickets",
            type=int,
            default=0,
            help="Number of extra random ticket sales to create (default=0)",
        )
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete existing tickets, movies and genres before seeding.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            Ticket.objects.all().delete()
            Movie.objects.all().delete()
            Genre.objects.all().delete()
            self.stdout.write("Existing cinema data removed.")

        genres = {}
        for title, description in GENRES:
            genres[title], _ = Genre.objects.get_or_create(
                title=title, defaults={"description": description}
            )

        movies = {}
        new_titles = set()
        for title, genre, price, minutes, year, rating, description in MOVIES:
            movies[title], created = Movie.objects.get_or_create(
                title=title,
                defaults={
                    "genre": genres[genre],
                    "ticket_price": price,
                    "duration_minutes": minutes,
                    "release_year": year,
                    "rating": Decimal(rating),
                    "description": description,
                },
            )
            if created:
                new_titles.add(title)

        tickets = TicketService()
        created_tickets = 0
        # a fixed sale only comes with the movie it belongs to
        for title, count, sold_at, customer in TICKETS:
            if title not in new_titles:
                continue
            ticket = Ticket.for_movie(
                movies[title], count, customer,
                date=timezone.make_aware(sold_at),
            )
            if tickets.save(ticket).ok:
                created_tickets += 1

        catalogue = list(movies.values())
        for _ in range(options["tickets"]):
            result = tickets.issue(
                random.choice(catalogue),
                random.randint(1, 5),
                random.choice(CUSTOMERS),
            )
            if result.ok:
                created_tickets += 1

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {len(genres)} genre(s), {len(new_titles)} new movie(s), {created_tickets} ticket(s)."
        ))
