# theater/views.py
from __future__ import annotations

import logging

from django.contrib import messages
from django.shortcuts import redirect, render

from .forms import GenreForm, MovieForm, TicketForm
from .models import Genre, Movie, Ticket
from .services import GenreService, MovieService, TicketService

logger = logging.getLogger(__name__)

genre_service = GenreService()
movie_service = MovieService()
ticket_service = TicketService()


# ===== Helpers =================================================================
def _missing(request, what: str, object_id, to: str):
    logger.warning(f"A non-existent {what.lower()} ID was requested: {object_id}")
    messages.error(request, f"{what} not found.")
    return redirect(to)


def _parse_int(raw):
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


# ===== Genres ==================================================================
def genre_list(request):
    return render(request, "theater/genre_list.html", {"genres": genre_service.list_all()})


def genre_detail(request, genre_id: int):
    genre = genre_service.get(genre_id)
    if genre is None:
        return _missing(request, "Genre", genre_id, "genre-list")

    return render(request, "theater/genre_detail.html", {
        "genre": genre,
        "movies": genre_service.movies_of(genre_id),
    })


def _genre_form(request, genre: Genre, template_title: str):
    if request.method == "POST":
        form = GenreForm(request.POST, instance=genre)
        if form.is_valid():
            result = genre_service.save(form.save(commit=False))
            if result.ok:
                messages.success(request, "Genre saved.")
                return redirect("genre-list")
            form.add_service_errors(result.errors)
    else:
        form = GenreForm(instance=genre)

    return render(request, "theater/genre_form.html", {
        "form": form,
        "genre": genre,
        "page_title": template_title,
    })


def add_genre(request):
    return _genre_form(request, Genre(), "New genre")


def edit_genre(request, genre_id: int):
    genre = genre_service.get(genre_id)
    if genre is None:
        return _missing(request, "Genre", genre_id, "genre-list")
    return _genre_form(request, genre, "Edit genre")


def delete_genre(request, genre_id: int):
    genre = genre_service.get(genre_id)
    if genre is None:
        return _missing(request, "Genre", genre_id, "genre-list")

    if request.method == "POST":
        result = genre_service.delete(genre_id)
        if result:
            messages.success(request, f"Deleted “{genre.title}”.")
        else:
            messages.error(request, result.reason)
        return redirect("genre-list")

    # Confirm screen
    return render(request, "theater/confirm_delete.html", {
        "object": genre,
        "kind": "genre",
        "cancel_url": "genre-list",
    })


# ===== Movies ==================================================================
def movie_list(request):
    """
    Movie catalogue. A non-blank ``search`` wins over a ``genre`` filter;
    with neither, every movie is listed by title.
    """
    search = (request.GET.get("search") or "").strip()
    genre_id = _parse_int(request.GET.get("genre"))
    filter_genre = None

    if search:
        movies = movie_service.search(search)
    elif genre_id is not None:
        movies = movie_service.by_genre(genre_id)
        filter_genre = genre_service.get(genre_id)
    else:
        movies = movie_service.list_all()

    return render(request, "theater/movie_list.html", {
        "movies": movies,
        "genres": genre_service.list_all(),
        "search": search,
        "filter_genre": filter_genre,
    })


def movie_detail(request, movie_id: int):
    movie = movie_service.get(movie_id)
    if movie is None:
        return _missing(request, "Movie", movie_id, "movie-list")
    return render(request, "theater/movie_detail.html", {"movie": movie, "tickets": movie.tickets})


def _movie_form(request, movie: Movie, template_title: str):
    if request.method == "POST":
        form = MovieForm(request.POST, instance=movie)
        if form.is_valid():
            result = movie_service.save(form.save(commit=False))
            if result.ok:
                messages.success(request, "Movie saved.")
                return redirect("movie-list")
            form.add_service_errors(result.errors)
    else:
        form = MovieForm(instance=movie)

    return render(request, "theater/movie_form.html", {
        "form": form,
        "movie": movie,
        "page_title": template_title,
    })


def add_movie(request):
    return _movie_form(request, Movie(), "New movie")


def edit_movie(request, movie_id: int):
    movie = movie_service.get(movie_id)
    if movie is None:
        return _missing(request, "Movie", movie_id, "movie-list")
    return _movie_form(request, movie, "Edit movie")


def delete_movie(request, movie_id: int):
    movie = movie_service.get(movie_id)
    if movie is None:
        return _missing(request, "Movie", movie_id, "movie-list")

    if request.method == "POST":
        if movie_service.delete(movie_id):
            messages.success(request, f"Deleted “{movie.title}” and its tickets.")
        else:
            # removed by another request after the lookup above
            messages.error(request, "Movie not found.")
        return redirect("movie-list")

    return render(request, "theater/confirm_delete.html", {
        "object": movie,
        "kind": "movie",
        "cancel_url": "movie-list",
    })


# ===== Tickets =================================================================
def ticket_list(request):
    customer = (request.GET.get("customer") or "").strip()
    if customer:
        tickets = ticket_service.by_customer(customer)
        logger.info(f"Ticket search for customer: {customer}")
    else:
        tickets = ticket_service.list_all()

    tickets = list(tickets)
    movies = movie_service.list_all()
    if not movies.exists():
        logger.warning("No movies in the catalogue, tickets cannot be sold")

    return render(request, "theater/ticket_list.html", {
        "tickets": tickets,
        "movies": movies,
        "customer": customer,
        "revenue": sum(t.total_price for t in tickets),
    })


def ticket_detail(request, ticket_id: int):
    ticket = ticket_service.get(ticket_id)
    if ticket is None:
        return _missing(request, "Ticket", ticket_id, "ticket-list")
    return render(request, "theater/ticket_detail.html", {"ticket": ticket})


def _ticket_form(request, ticket: Ticket, template_title: str, movie: Movie | None = None):
    if request.method == "POST":
        form = TicketForm(request.POST, instance=ticket)
        if form.is_valid():
            ticket = form.save(commit=False)
            ticket.transfer_to(form.cleaned_data["movie"])
            result = ticket_service.save(ticket)
            if result.ok:
                messages.success(request, "Ticket saved.")
                return redirect("ticket-list")
            form.add_service_errors(result.errors)
    else:
        form = TicketForm(instance=ticket, movie=movie)

    return render(request, "theater/ticket_form.html", {
        "form": form,
        "ticket": ticket,
        "page_title": template_title,
    })


def add_ticket(request):
    return _ticket_form(request, Ticket(), "Sell tickets")


def add_ticket_for_movie(request, movie_id: int):
    movie = movie_service.get(movie_id)
    if movie is None:
        return _missing(request, "Movie", movie_id, "movie-list")
    return _ticket_form(request, Ticket(), f"Sell tickets for “{movie.title}”", movie=movie)


def edit_ticket(request, ticket_id: int):
    ticket = ticket_service.get(ticket_id)
    if ticket is None:
        return _missing(request, "Ticket", ticket_id, "ticket-list")
    return _ticket_form(request, ticket, "Edit ticket")


def delete_ticket(request, ticket_id: int):
    ticket = ticket_service.get(ticket_id)
    if ticket is None:
        return _missing(request, "Ticket", ticket_id, "ticket-list")

    if request.method == "POST":
        ticket_service.delete(ticket_id)
        messages.success(request, "Ticket deleted.")
        return redirect("ticket-list")

    return render(request, "theater/confirm_delete.html", {
        "object": ticket,
        "kind": "ticket",
        "cancel_url": "ticket-list",
    })
