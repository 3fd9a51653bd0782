from django.urls import path

from groups.views import (
    GroupListCreateView,
    GroupDetailView,
    GroupMembersView,
    GroupMemberRemoveView,
    GroupAdvanceView,
)
from installments.views import GroupScheduleView

app_name = "groups"

urlpatterns = [
    path("", GroupListCreateView.as_view(), name="list-create"),
    path("<str:id>/", GroupDetailView.as_view(), name="detail"),
    path("<str:id>/members/", GroupMembersView.as_view(), name="members"),
    path(
        "<str:id>/members/<str:member_id>/",
        GroupMemberRemoveView.as_view(),
        name="remove-member",
    ),
    path("<str:id>/advance/", GroupAdvanceView.as_view(), name="advance"),
    path("<str:id>/schedule/", GroupScheduleView.as_view(), name="schedule"),
]
