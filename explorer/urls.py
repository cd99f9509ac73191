"""URL configuration for explorer views."""

from __future__ import annotations

from django.urls import path

from explorer import views

app_name = "explorer"

urlpatterns = [
    path("", views.dashboard, name="dashboard"),
    path("chart.svg", views.chart_svg, name="chart_svg"),
    path("api/scene/", views.scene_api, name="scene_api"),
    path("api/snapshot/", views.snapshot_api, name="snapshot_api"),
]
