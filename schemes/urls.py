from django.urls import path

from schemes.views import (
    SchemeListCreateView,
    SchemeDetailView,
    SchemeStatusView,
    SchemeStatsView,
)

app_name = "schemes"

urlpatterns = [
    path("", SchemeListCreateView.as_view(), name="list-create"),
    path("stats/", SchemeStatsView.as_view(), name="stats"),
    path("<str:id>/", SchemeDetailView.as_view(), name="detail"),
    path("<str:id>/status/", SchemeStatusView.as_view(), name="status"),
]
