import logging
from decimal import Decimal

from django.db.models import Count, Q, Sum
from django.utils import timezone
from rest_framework import generics, status
from rest_framework.exceptions import NotFound
from rest_framework.views import APIView

from accounts.filters import filter_date_range, filter_amount_range
from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope, either_lookup
from accounts.permissions import IsEmployee, IsManager
from groups.models import Group
from installments.models import Installment
from installments.serializers import (
    InstallmentSerializer,
    InstallmentUpdateSerializer,
    InstallmentPaymentSerializer,
)
from installments.utils import record_payment, generate_group_schedule
from members.models import Member
from receipts.serializers import ReceiptSerializer
from schemes.models import Scheme

logger = logging.getLogger(__name__)

OPEN_STATUSES = ("Pending", "Partial", "Late")


class InstallmentLookupMixin(EitherLookupMixin):
    not_found_message = "Installment not found"


class InstallmentListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Installment.objects.select_related("group", "member", "scheme", "collected_by")
    serializer_class = InstallmentSerializer
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
        if params.get("scheme"):
            scheme = either_lookup(Scheme.objects.all(), params["scheme"])
            queryset = queryset.filter(scheme=scheme) if scheme else queryset.none()
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        if params.get("overdue") == "true":
            queryset = queryset.filter(
                due_date__lt=timezone.now(), pending_amount__gt=0
            )
        queryset = filter_date_range(queryset, params, "due_date")
        queryset = filter_amount_range(queryset, params, "amount")
        return queryset

    def perform_create(self, serializer):
        installment = serializer.save(collected_by=self.request.user)
        logger.info(
            f"Installment {installment.identity} ({installment.installment_period}) created for {installment.member.identity}"
        )


class InstallmentDetailView(EnvelopeMixin, InstallmentLookupMixin, generics.RetrieveUpdateAPIView):
    queryset = Installment.objects.select_related("group", "member", "scheme", "collected_by")
    permission_classes = [IsEmployee]

    def get_serializer_class(self):
        if self.request.method in ("PUT", "PATCH"):
            return InstallmentUpdateSerializer
        return InstallmentSerializer


class InstallmentPaymentView(InstallmentLookupMixin, generics.GenericAPIView):
    queryset = Installment.objects.select_related("member__branch", "scheme")
    serializer_class = InstallmentPaymentSerializer
    permission_classes = [IsEmployee]

    def post(self, request, *args, **kwargs):
        installment = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        installment, receipt = record_payment(
            installment,
            serializer.validated_data["paid_amount"],
            serializer.validated_data["payment_mode"],
            collected_by=serializer.validated_data.get("collected_by") or request.user,
            remarks=serializer.validated_data.get("receipt_remarks")
            or serializer.validated_data.get("remarks"),
        )
        return envelope(
            data={
                "installment": InstallmentSerializer(installment).data,
                "receipt": ReceiptSerializer(receipt).data,
            },
            message="Payment recorded successfully",
        )


class InstallmentStatsView(APIView):
    permission_classes = [IsEmployee]

    def get(self, request):
        totals = Installment.objects.aggregate(
            count=Count("id"),
            total_amount=Sum("amount"),
            total_paid=Sum("paid_amount"),
            total_pending=Sum("pending_amount"),
            total_late_fees=Sum("late_fee"),
            overdue=Count(
                "id", filter=Q(due_date__lt=timezone.now(), pending_amount__gt=0)
            ),
        )
        total_amount = totals["total_amount"] or Decimal("0")
        total_paid = totals["total_paid"] or Decimal("0")
        totals["paid_percentage"] = (
            (total_paid / total_amount * 100).quantize(Decimal("0.01"))
            if total_amount
            else Decimal("0.00")
        )

        by_status = list(
            Installment.objects.values("status")
            .annotate(count=Count("id"), amount=Sum("amount"), paid=Sum("paid_amount"))
            .order_by("status")
        )
        by_scheme = list(
            Installment.objects.values("scheme__identity", "scheme__scheme_name")
            .annotate(count=Count("id"), amount=Sum("amount"), paid=Sum("paid_amount"))
            .order_by("scheme__identity")
        )
        return envelope(data={"totals": totals, "by_status": by_status, "by_scheme": by_scheme})


class MemberUpcomingInstallmentsView(EnvelopeMixin, generics.ListAPIView):
    serializer_class = InstallmentSerializer
    permission_classes = [IsEmployee]

    def get_queryset(self):
        member = either_lookup(Member.objects.all(), self.kwargs["id"], ("identity", "uid"))
        if member is None:
            raise NotFound("Member not found")
        return (
            Installment.objects.filter(member=member, status__in=OPEN_STATUSES)
            .select_related("group", "member", "scheme", "collected_by")
            .order_by("due_date")
        )


class GroupScheduleView(EitherLookupMixin, generics.GenericAPIView):
    """
    Generate the installment schedule for every member of a group
    """

    queryset = Group.objects.select_related("scheme")
    permission_classes = [IsManager]
    not_found_message = "Group not found"

    def post(self, request, *args, **kwargs):
        group = self.get_object()
        created = generate_group_schedule(group, collected_by=request.user)
        data = InstallmentSerializer(created, many=True).data
        return envelope(
            data=data,
            count=len(data),
            message=f"Generated {len(data)} installments",
            status_code=status.HTTP_201_CREATED,
        )
