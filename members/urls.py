from django.urls import path

from members.views import (
    MemberListCreateView,
    MemberDetailView,
    MemberStatusView,
    MemberPhotoView,
    MemberStatsView,
)
from installments.views import MemberUpcomingInstallmentsView
from payouts.views import MemberPayoutsView
from bookings.views import MemberBookingsView
from ledgers.views import MemberLedgerStatementView
from transactions.views import MemberTransactionSummaryView

app_name = "members"

urlpatterns = [
    path("", MemberListCreateView.as_view(), name="list-create"),
    path("stats/", MemberStatsView.as_view(), name="stats"),
    path("<str:id>/", MemberDetailView.as_view(), name="detail"),
    path("<str:id>/status/", MemberStatusView.as_view(), name="status"),
    path("<str:id>/photo/", MemberPhotoView.as_view(), name="photo"),
    # Member sub-resources
    path(
        "<str:id>/installments/upcoming/",
        MemberUpcomingInstallmentsView.as_view(),
        name="upcoming-installments",
    ),
    path("<str:id>/payouts/", MemberPayoutsView.as_view(), name="payouts"),
    path("<str:id>/bookings/", MemberBookingsView.as_view(), name="bookings"),
    path("<str:id>/ledger/", MemberLedgerStatementView.as_view(), name="ledger"),
    path(
        "<str:id>/transactions/summary/",
        MemberTransactionSummaryView.as_view(),
        name="transaction-summary",
    ),
]
