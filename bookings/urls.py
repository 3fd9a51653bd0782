from django.urls import path

from bookings.views import (
    BookingListCreateView,
    BookingDetailView,
    BookingConfirmView,
    BookingRejectView,
    BookingStatsView,
)

app_name = "bookings"

urlpatterns = [
    path("", BookingListCreateView.as_view(), name="list-create"),
    path("stats/", BookingStatsView.as_view(), name="stats"),
    path("<str:id>/", BookingDetailView.as_view(), name="detail"),
    path("<str:id>/confirm/", BookingConfirmView.as_view(), name="confirm"),
    path("<str:id>/reject/", BookingRejectView.as_view(), name="reject"),
]
