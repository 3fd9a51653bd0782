import logging

from django.db import transaction
from rest_framework import generics, serializers, status
from rest_framework.exceptions import NotFound

from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope, either_lookup
from accounts.permissions import IsManagerOrReadOnly, IsManager
from branches.models import Branch
from groups.models import Group
from groups.serializers import (
    GroupSerializer,
    GroupUpdateSerializer,
    AddGroupMemberSerializer,
    GroupMemberSerializer,
)
from groups.utils import (
    add_group_member,
    remove_group_member,
    advance_group_month,
    group_has_activity,
)
from members.models import Member
from schemes.models import Scheme

logger = logging.getLogger(__name__)


class GroupLookupMixin(EitherLookupMixin):
    not_found_message = "Group not found"


class GroupListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Group.objects.select_related("branch", "scheme").prefetch_related(
        "members__member"
    )
    serializer_class = GroupSerializer
    permission_classes = [IsManagerOrReadOnly]

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        if params.get("branch"):
            branch = either_lookup(Branch.objects.all(), params["branch"])
            queryset = queryset.filter(branch=branch) if branch else queryset.none()
        if params.get("scheme"):
            scheme = either_lookup(Scheme.objects.all(), params["scheme"])
            queryset = queryset.filter(scheme=scheme) if scheme else queryset.none()
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        return queryset

    def perform_create(self, serializer):
        initial_members = serializer.validated_data.get("initial_members", [])
        with transaction.atomic():
            group = serializer.save()
            for item in initial_members:
                add_group_member(group, item["member"], item["payout_month"])
        logger.info(
            f"Group {group.identity} created with {len(initial_members)} members by {self.request.user.identity}"
        )


class GroupDetailView(EnvelopeMixin, GroupLookupMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Group.objects.select_related("branch", "scheme").prefetch_related(
        "members__member"
    )
    permission_classes = [IsManagerOrReadOnly]

    def get_serializer_class(self):
        if self.request.method in ("PUT", "PATCH"):
            return GroupUpdateSerializer
        return GroupSerializer

    def destroy(self, request, *args, **kwargs):
        group = self.get_object()
        if group_has_activity(group):
            raise serializers.ValidationError(
                {
                    "detail": "Group has installments, payouts or transactions recorded and cannot be deleted"
                }
            )
        identity = group.identity
        group.delete()
        logger.info(f"Group {identity} deleted by {request.user.identity}")
        return envelope(message="Group deleted successfully")


class GroupMembersView(GroupLookupMixin, generics.GenericAPIView):
    """
    List a group's members or add one with a payout month
    """

    queryset = Group.objects.select_related("scheme")
    serializer_class = AddGroupMemberSerializer
    permission_classes = [IsManagerOrReadOnly]

    def get(self, request, *args, **kwargs):
        group = self.get_object()
        members = GroupMemberSerializer(
            group.members.select_related("member"), many=True
        ).data
        return envelope(data=members, count=len(members))

    def post(self, request, *args, **kwargs):
        group = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        add_group_member(
            group,
            serializer.validated_data["member"],
            serializer.validated_data["payout_month"],
        )
        group.refresh_from_db()
        return envelope(
            data=GroupSerializer(group).data,
            message="Member added to group successfully",
            status_code=status.HTTP_201_CREATED,
        )


class GroupMemberRemoveView(GroupLookupMixin, generics.GenericAPIView):
    queryset = Group.objects.select_related("scheme")
    permission_classes = [IsManager]

    def delete(self, request, *args, **kwargs):
        group = self.get_object()
        member = either_lookup(
            Member.objects.all(), self.kwargs["member_id"], ("identity", "uid")
        )
        if member is None:
            raise NotFound("Member not found")
        remove_group_member(group, member)
        group.refresh_from_db()
        return envelope(
            data=GroupSerializer(group).data,
            message="Member removed from group successfully",
        )


class GroupAdvanceView(GroupLookupMixin, generics.GenericAPIView):
    queryset = Group.objects.select_related("scheme")
    permission_classes = [IsManager]

    def post(self, request, *args, **kwargs):
        group = advance_group_month(self.get_object())
        message = (
            "Group completed"
            if group.status == "Completed"
            else f"Group advanced to month {group.current_month}"
        )
        return envelope(data=GroupSerializer(group).data, message=message)
