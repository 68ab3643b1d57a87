# theater/urls.py
from django.urls import path
from . import views

urlpatterns = [
    # Genres
    path("genres/",                          views.genre_list,   name="genre-list"),
    path("genres/add/",                      views.add_genre,    name="add-genre"),
    path("genres/<int:genre_id>/",           views.genre_detail, name="genre-detail"),
    path("genres/<int:genre_id>/edit/",      views.edit_genre,   name="edit-genre"),
    path("genres/<int:genre_id>/delete/",    views.delete_genre, name="delete-genre"),

    # Movies
    path("movies/",                          views.movie_list,   name="movie-list"),
    path("movies/add/",                      views.add_movie,    name="add-movie"),
    path("movies/<int:movie_id>/",           views.movie_detail, name="movie-detail"),
    path("movies/<int:movie_id>/edit/",      views.edit_movie,   name="edit-movie"),
    path("movies/<int:movie_id>/delete/",    views.delete_movie, name="delete-movie"),

    # Tickets
    path("tickets/",                             views.ticket_list,          name="ticket-list"),
    path("tickets/add/",                         views.add_ticket,           name="add-ticket"),
    path("movies/<int:movie_id>/tickets/add/",   views.add_ticket_for_movie, name="add-ticket-for-movie"),
    path("tickets/<int:ticket_id>/",             views.ticket_detail,        name="ticket-detail"),
    path("tickets/<int:ticket_id>/edit/",        views.edit_ticket,          name="edit-ticket"),
    path("tickets/<int:ticket_id>/delete/",      views.delete_ticket,        name="delete-ticket"),
]
