"""
URL configuration for the cinemahall project.

Everything lives in the theater app; the site root lands on the movie list.
"""

from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path("", RedirectView.as_view(pattern_name="movie-list", permanent=False), name="home"),
    path("", include("theater.urls")),
]
