from django.urls import path

from transactions.views import (
    TransactionListCreateView,
    TransactionDetailView,
    TransactionReverseView,
    TransactionSummaryView,
)

app_name = "transactions"

urlpatterns = [
    path("", TransactionListCreateView.as_view(), name="list-create"),
    path("summary/", TransactionSummaryView.as_view(), name="summary"),
    path("<str:id>/", TransactionDetailView.as_view(), name="detail"),
    path("<str:id>/reverse/", TransactionReverseView.as_view(), name="reverse"),
]
