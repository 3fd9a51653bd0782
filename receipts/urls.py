from django.urls import path

from receipts.views import (
    ReceiptListCreateView,
    ReceiptDetailView,
    ReceiptCancelView,
    ReceiptStatsView,
)

app_name = "receipts"

urlpatterns = [
    path("", ReceiptListCreateView.as_view(), name="list-create"),
    path("stats/", ReceiptStatsView.as_view(), name="stats"),
    path("<str:id>/", ReceiptDetailView.as_view(), name="detail"),
    path("<str:id>/cancel/", ReceiptCancelView.as_view(), name="cancel"),
]
