from django.urls import path

from payouts.views import (
    PayoutListCreateView,
    PayoutDetailView,
    PayoutProcessView,
    PayoutSkipView,
    PayoutStatsView,
)

app_name = "payouts"

urlpatterns = [
    path("", PayoutListCreateView.as_view(), name="list-create"),
    path("stats/", PayoutStatsView.as_view(), name="stats"),
    path("<str:id>/", PayoutDetailView.as_view(), name="detail"),
    path("<str:id>/process/", PayoutProcessView.as_view(), name="process"),
    path("<str:id>/skip/", PayoutSkipView.as_view(), name="skip"),
]
