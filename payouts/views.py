import logging

from django.db.models import Count, Q, Sum
from rest_framework import generics
from rest_framework.exceptions import NotFound
from rest_framework.views import APIView

from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope, either_lookup
from accounts.permissions import IsEmployee, IsManager
from accounts.filters import filter_date_range
from groups.models import Group
from members.models import Member
from payouts.models import Payout
from payouts.serializers import (
    PayoutSerializer,
    PayoutUpdateSerializer,
    ProcessPayoutSerializer,
)
from payouts.utils import process_payout, skip_payout

logger = logging.getLogger(__name__)


class PayoutLookupMixin(EitherLookupMixin):
    not_found_message = "Payout not found"


class PayoutListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Payout.objects.select_related("group__scheme", "member", "transaction")
    serializer_class = PayoutSerializer
    permission_classes = [IsEmployee]

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        if params.get("group"):
            group = either_lookup(Group.objects.all(), params["group"])
            queryset = queryset.filter(group=group) if group else queryset.none()
        if params.get("member"):
            member = either_lookup(Member.objects.all(), params["member"], ("identity", "uid"))
            queryset = queryset.filter(member=member) if member else queryset.none()
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        if params.get("month_number"):
            queryset = queryset.filter(month_number=params["month_number"])
        return queryset

    def perform_create(self, serializer):
        payout = serializer.save()
        logger.info(
            f"Payout {payout.identity} of {payout.payout_amount} scheduled for {payout.member.identity}"
        )


class PayoutDetailView(EnvelopeMixin, PayoutLookupMixin, generics.RetrieveUpdateAPIView):
    queryset = Payout.objects.select_related("group__scheme", "member", "transaction")
    permission_classes = [IsEmployee]

    def get_serializer_class(self):
        if self.request.method in ("PUT", "PATCH"):
            return PayoutUpdateSerializer
        return PayoutSerializer


class PayoutProcessView(PayoutLookupMixin, generics.GenericAPIView):
    queryset = Payout.objects.select_related("group", "member")
    serializer_class = ProcessPayoutSerializer
    permission_classes = [IsManager]

    def post(self, request, *args, **kwargs):
        payout = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payout = process_payout(payout, serializer.validated_data["transaction"])
        return envelope(
            data=PayoutSerializer(payout).data,
            message="Payout processed successfully",
        )


class PayoutSkipView(PayoutLookupMixin, generics.GenericAPIView):
    queryset = Payout.objects.select_related("group", "member")
    serializer_class = PayoutSerializer
    permission_classes = [IsManager]

    def post(self, request, *args, **kwargs):
        payout = skip_payout(self.get_object())
        return envelope(
            data=self.get_serializer(payout).data,
            message="Payout skipped successfully",
        )


class PayoutStatsView(APIView):
    permission_classes = [IsEmployee]

    def get(self, request):
        payouts = filter_date_range(Payout.objects.all(), request.query_params, "created_at")
        totals = payouts.aggregate(
            count=Count("id"),
            total_amount=Sum("payout_amount"),
            total_fees=Sum("processing_fee"),
            paid_amount=Sum("payout_amount", filter=Q(status="Paid")),
        )
        by_status = list(
            payouts.values("status")
            .annotate(count=Count("id"), total_amount=Sum("payout_amount"))
            .order_by("status")
        )
        return envelope(data={"totals": totals, "by_status": by_status})


class MemberPayoutsView(EnvelopeMixin, generics.ListAPIView):
    serializer_class = PayoutSerializer
    permission_classes = [IsEmployee]

    def get_queryset(self):
        member = either_lookup(Member.objects.all(), self.kwargs["id"], ("identity", "uid"))
        if member is None:
            raise NotFound("Member not found")
        return Payout.objects.filter(member=member).select_related(
            "group__scheme", "member", "transaction"
        )
