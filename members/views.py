import logging

from django.db.models import Count, Q
from rest_framework import generics, serializers
from rest_framework.exceptions import PermissionDenied
from rest_framework.views import APIView

from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope, either_lookup
from accounts.permissions import IsEmployee
from branches.models import Branch
from members.models import Member
from members.serializers import MemberSerializer, MemberPhotoSerializer

logger = logging.getLogger(__name__)


class MemberLookupMixin(EitherLookupMixin):
    identity_fields = ("identity", "uid")
    not_found_message = "Member not found"


class MemberListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Member.objects.select_related("branch", "registered_by")
    serializer_class = MemberSerializer
    permission_classes = [IsEmployee]

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        if params.get("branch"):
            branch = either_lookup(Branch.objects.all(), params["branch"])
            queryset = queryset.filter(branch=branch) if branch else queryset.none()
        if params.get("active") in ("true", "false"):
            queryset = queryset.filter(active=params["active"] == "true")
        if params.get("gender"):
            queryset = queryset.filter(gender=params["gender"])
        if params.get("q"):
            query = params["q"]
            queryset = queryset.filter(
                Q(mem_name__icontains=query)
                | Q(identity__icontains=query)
                | Q(mobile__icontains=query)
                | Q(uid__icontains=query)
            )
        return queryset

    def perform_create(self, serializer):
        member = serializer.save(registered_by=self.request.user)
        logger.info(f"Member {member.identity} registered by {self.request.user.identity}")


class MemberDetailView(EnvelopeMixin, MemberLookupMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Member.objects.select_related("branch", "registered_by")
    serializer_class = MemberSerializer
    permission_classes = [IsEmployee]

    def destroy(self, request, *args, **kwargs):
        if not request.user.is_manager:
            raise PermissionDenied("Only managers can delete members")
        member = self.get_object()
        if member.group_memberships.filter(group__status="Active").exists():
            raise serializers.ValidationError(
                {"detail": "Member belongs to an active group and cannot be deleted"}
            )
        identity = member.identity
        member.delete()
        logger.info(f"Member {identity} deleted by {request.user.identity}")
        return envelope(message="Member deleted successfully")


class MemberStatusView(MemberLookupMixin, generics.GenericAPIView):
    """
    Toggle a member between active and inactive
    """

    queryset = Member.objects.all()
    serializer_class = MemberSerializer
    permission_classes = [IsEmployee]

    def patch(self, request, *args, **kwargs):
        member = self.get_object()
        active = request.data.get("active")
        member.active = (not member.active) if active is None else str(active).lower() == "true"
        member.save(update_fields=["active", "updated_at"])
        state = "activated" if member.active else "deactivated"
        return envelope(
            data=self.get_serializer(member).data,
            message=f"Member {state} successfully",
        )


class MemberPhotoView(EnvelopeMixin, MemberLookupMixin, generics.UpdateAPIView):
    queryset = Member.objects.all()
    serializer_class = MemberPhotoSerializer
    permission_classes = [IsEmployee]


class MemberStatsView(APIView):
    permission_classes = [IsEmployee]

    def get(self, request):
        totals = Member.objects.aggregate(
            total=Count("id"),
            active=Count("id", filter=Q(active=True)),
            inactive=Count("id", filter=Q(active=False)),
        )
        by_branch = list(
            Member.objects.values("branch__identity", "branch__bname")
            .annotate(
                total=Count("id"),
                active=Count("id", filter=Q(active=True)),
            )
            .order_by("branch__bname")
        )
        return envelope(data={**totals, "by_branch": by_branch})
