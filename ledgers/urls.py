from django.urls import path

from ledgers.views import LedgerEntryListCreateView, LedgerEntryDetailView, LedgerStatsView

app_name = "ledgers"

urlpatterns = [
    path("", LedgerEntryListCreateView.as_view(), name="list-create"),
    path("stats/", LedgerStatsView.as_view(), name="stats"),
    path("<str:id>/", LedgerEntryDetailView.as_view(), name="detail"),
]
