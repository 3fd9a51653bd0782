import logging

from django.db.models import Avg, Count, Sum
from rest_framework import generics, status
from rest_framework.exceptions import NotFound
from rest_framework.views import APIView

from accounts.filters import filter_date_range, filter_amount_range
from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope, either_lookup
from accounts.permissions import IsEmployee, IsManager
from branches.models import Branch
from groups.models import Group
from members.models import Member
from transactions.models import Transaction
from transactions.serializers import TransactionSerializer, TransactionUpdateSerializer
from transactions.utils import reverse_transaction

logger = logging.getLogger(__name__)


class TransactionLookupMixin(EitherLookupMixin):
    not_found_message = "Transaction not found"


def summarize_by_type(queryset):
    by_type = list(
        queryset.values("transaction_type")
        .annotate(
            count=Count("id"),
            total_amount=Sum("amount"),
            average_amount=Avg("amount"),
        )
        .order_by("transaction_type")
    )
    overall = queryset.aggregate(count=Count("id"), net_amount=Sum("amount"))
    return {"by_type": by_type, "overall": overall}


class TransactionListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Transaction.objects.select_related(
        "branch", "member", "group", "recorded_by", "related_transaction"
    )
    serializer_class = TransactionSerializer
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
        if params.get("transaction_type"):
            queryset = queryset.filter(transaction_type=params["transaction_type"])
        if params.get("payment_mode"):
            queryset = queryset.filter(payment_mode=params["payment_mode"])
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        queryset = filter_date_range(queryset, params, "transaction_date")
        queryset = filter_amount_range(queryset, params, "amount")
        return queryset

    def perform_create(self, serializer):
        txn = serializer.save(recorded_by=self.request.user)
        logger.info(
            f"Transaction {txn.identity} ({txn.transaction_type} {txn.amount}) recorded by {self.request.user.identity}"
        )


class TransactionDetailView(EnvelopeMixin, TransactionLookupMixin, generics.RetrieveUpdateAPIView):
    queryset = Transaction.objects.select_related(
        "branch", "member", "group", "recorded_by", "related_transaction"
    )
    permission_classes = [IsEmployee]

    def get_serializer_class(self):
        if self.request.method in ("PUT", "PATCH"):
            return TransactionUpdateSerializer
        return TransactionSerializer


class TransactionReverseView(TransactionLookupMixin, generics.GenericAPIView):
    queryset = Transaction.objects.all()
    serializer_class = TransactionSerializer
    permission_classes = [IsManager]

    def post(self, request, *args, **kwargs):
        original, reversal = reverse_transaction(self.get_object())
        return envelope(
            data={
                "original": self.get_serializer(original).data,
                "reversal": self.get_serializer(reversal).data,
            },
            message=f"Transaction {original.identity} reversed successfully",
            status_code=status.HTTP_201_CREATED,
        )


class TransactionSummaryView(APIView):
    permission_classes = [IsEmployee]

    def get(self, request):
        params = request.query_params
        queryset = Transaction.objects.exclude(status="Reversed")
        if params.get("branch"):
            branch = either_lookup(Branch.objects.all(), params["branch"])
            queryset = queryset.filter(branch=branch) if branch else queryset.none()
        queryset = filter_date_range(queryset, params, "transaction_date")
        return envelope(data=summarize_by_type(queryset))


class MemberTransactionSummaryView(APIView):
    permission_classes = [IsEmployee]

    def get(self, request, id):
        member = either_lookup(Member.objects.all(), id, ("identity", "uid"))
        if member is None:
            raise NotFound("Member not found")
        queryset = filter_date_range(
            Transaction.objects.filter(member=member).exclude(status="Reversed"),
            request.query_params,
            "transaction_date",
        )
        return envelope(data={"member": member.identity, **summarize_by_type(queryset)})
