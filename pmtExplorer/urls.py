"""URL configuration for the PMT data explorer."""

from __future__ import annotations

from django.urls import include, path

urlpatterns = [
    path("", include("explorer.urls")),
]
