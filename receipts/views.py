import logging

from django.db.models import Count, Q, Sum
from django.db.models.functions import TruncMonth
from rest_framework import generics, serializers
from rest_framework.views import APIView

from accounts.filters import filter_date_range, filter_amount_range
from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope, either_lookup
from accounts.permissions import IsEmployee, IsManager
from branches.models import Branch
from groups.models import Group
from members.models import Member
from receipts.models import Receipt
from receipts.serializers import ReceiptSerializer, ReceiptUpdateSerializer

logger = logging.getLogger(__name__)


class ReceiptLookupMixin(EitherLookupMixin):
    identity_fields = ("identity", "receipt_no")
    not_found_message = "Receipt not found"


class ReceiptListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Receipt.objects.select_related("branch", "member", "group", "transaction", "received_by")
    serializer_class = ReceiptSerializer
    permission_classes = [IsEmployee]

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        if params.get("branch"):
            branch = either_lookup(Branch.objects.all(), params["branch"])
            queryset = queryset.filter(branch=branch) if branch else queryset.none()
        if params.get("member"):
            member = either_lookup(Member.objects.all(), params["member"], ("identity", "uid"))
            queryset = queryset.filter(member=member) if member else queryset.none()
        if params.get("group"):
            group = either_lookup(Group.objects.all(), params["group"])
            queryset = queryset.filter(group=group) if group else queryset.none()
        if params.get("payment_mode"):
            queryset = queryset.filter(payment_mode=params["payment_mode"])
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        queryset = filter_date_range(queryset, params, "receipt_date")
        queryset = filter_amount_range(queryset, params, "receipt_amount")
        return queryset

    def perform_create(self, serializer):
        receipt = serializer.save(received_by=self.request.user)
        logger.info(f"Receipt {receipt.receipt_no} issued for {receipt.member.identity}")


class ReceiptDetailView(EnvelopeMixin, ReceiptLookupMixin, generics.RetrieveUpdateAPIView):
    queryset = Receipt.objects.select_related("branch", "member", "group", "transaction", "received_by")
    permission_classes = [IsEmployee]

    def get_serializer_class(self):
        if self.request.method in ("PUT", "PATCH"):
            return ReceiptUpdateSerializer
        return ReceiptSerializer


class ReceiptCancelView(ReceiptLookupMixin, generics.GenericAPIView):
    queryset = Receipt.objects.all()
    serializer_class = ReceiptSerializer
    permission_classes = [IsManager]

    def post(self, request, *args, **kwargs):
        receipt = self.get_object()
        if receipt.status == "Cancelled":
            raise serializers.ValidationError({"detail": "Receipt is already cancelled"})

        receipt.status = "Cancelled"
        reason = request.data.get("reason")
        if reason:
            receipt.remarks = f"{receipt.remarks or ''}\nCancelled: {reason}".strip()
        receipt.save(update_fields=["status", "remarks", "updated_at"])
        logger.info(f"Receipt {receipt.receipt_no} cancelled by {request.user.identity}")
        return envelope(
            data=self.get_serializer(receipt).data,
            message="Receipt cancelled successfully",
        )


class ReceiptStatsView(APIView):
    permission_classes = [IsEmployee]

    def get(self, request):
        receipts = filter_date_range(Receipt.objects.all(), request.query_params, "receipt_date")
        totals = receipts.aggregate(
            count=Count("id"),
            total_amount=Sum("receipt_amount", filter=~Q(status="Cancelled")),
            cancelled=Count("id", filter=Q(status="Cancelled")),
        )
        monthly = list(
            receipts.exclude(status="Cancelled")
            .annotate(month=TruncMonth("receipt_date"))
            .values("month")
            .annotate(count=Count("id"), total_amount=Sum("receipt_amount"))
            .order_by("month")
        )
        by_mode = list(
            receipts.exclude(status="Cancelled")
            .values("payment_mode")
            .annotate(count=Count("id"), total_amount=Sum("receipt_amount"))
            .order_by("payment_mode")
        )
        return envelope(data={"totals": totals, "monthly": monthly, "by_payment_mode": by_mode})
