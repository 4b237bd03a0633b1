"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("charts/<str:kind>.svg", views.chart_svg, name="chart_svg"),
    path("api/charts/<str:kind>/", views.chart_frame_api, name="chart_frame_api"),
]
