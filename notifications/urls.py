from django.urls import path

from notifications.views import (
    NotificationListCreateView,
    NotificationDetailView,
    NotificationReadView,
    MyNotificationsView,
    MarkAllReadView,
    UnreadCountView,
    NotificationStatsView,
)

app_name = "notifications"

urlpatterns = [
    path("", NotificationListCreateView.as_view(), name="list-create"),
    path("me/", MyNotificationsView.as_view(), name="mine"),
    path("read-all/", MarkAllReadView.as_view(), name="read-all"),
    path("unread-count/", UnreadCountView.as_view(), name="unread-count"),
    path("stats/", NotificationStatsView.as_view(), name="stats"),
    path("<str:id>/", NotificationDetailView.as_view(), name="detail"),
    path("<str:id>/read/", NotificationReadView.as_view(), name="read"),
]
