import logging

from django.db.models import Count, Sum
from rest_framework import generics
from rest_framework.exceptions import NotFound
from rest_framework.views import APIView

from accounts.filters import filter_date_range, filter_amount_range, parse_date_param
from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope, either_lookup
from accounts.permissions import IsEmployee
from branches.models import Branch
from groups.models import Group
from ledgers.models import LedgerEntry
from ledgers.serializers import (
    LedgerEntrySerializer,
    LedgerEntryUpdateSerializer,
    LedgerStatementSerializer,
)
from ledgers.utils import member_statement
from members.models import Member
from transactions.models import Transaction

logger = logging.getLogger(__name__)


class LedgerEntryListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = LedgerEntry.objects.select_related("branch", "member", "group", "transaction")
    serializer_class = LedgerEntrySerializer
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
        if params.get("transaction"):
            txn = either_lookup(Transaction.objects.all(), params["transaction"])
            queryset = queryset.filter(transaction=txn) if txn else queryset.none()
        queryset = filter_date_range(queryset, params, "date")

        amount_field = "debit" if params.get("amount_type") == "debit" else "credit"
        queryset = filter_amount_range(queryset, params, amount_field)
        return queryset

    def perform_create(self, serializer):
        entry = serializer.save()
        logger.info(
            f"Ledger entry {entry.identity} for {entry.member.identity}: balance {entry.balance}"
        )


class LedgerEntryDetailView(EnvelopeMixin, EitherLookupMixin, generics.RetrieveUpdateAPIView):
    queryset = LedgerEntry.objects.select_related("branch", "member", "group", "transaction")
    permission_classes = [IsEmployee]
    not_found_message = "Ledger entry not found"

    def get_serializer_class(self):
        if self.request.method in ("PUT", "PATCH"):
            return LedgerEntryUpdateSerializer
        return LedgerEntrySerializer


class MemberLedgerStatementView(APIView):
    """
    Ledger statement for a member over an optional date range
    """

    permission_classes = [IsEmployee]

    def get(self, request, id):
        member = either_lookup(Member.objects.all(), id, ("identity", "uid"))
        if member is None:
            raise NotFound("Member not found")

        params = request.query_params
        start_date = parse_date_param(params["start_date"], "start_date") if params.get("start_date") else None
        end_date = parse_date_param(params["end_date"], "end_date") if params.get("end_date") else None

        statement = member_statement(member, start_date, end_date)
        data = LedgerStatementSerializer(
            {
                "member": member.identity,
                "member_name": member.mem_name,
                "start_date": start_date,
                "end_date": end_date,
                **statement,
            }
        ).data
        return envelope(data=data, count=len(statement["entries"]))


class LedgerStatsView(APIView):
    permission_classes = [IsEmployee]

    def get(self, request):
        entries = filter_date_range(LedgerEntry.objects.all(), request.query_params, "date")
        totals = entries.aggregate(
            count=Count("id"),
            total_debit=Sum("debit"),
            total_credit=Sum("credit"),
            member_count=Count("member", distinct=True),
        )
        by_branch = list(
            entries.values("branch__identity", "branch__bname")
            .annotate(total_debit=Sum("debit"), total_credit=Sum("credit"), count=Count("id"))
            .order_by("branch__bname")
        )
        return envelope(data={"totals": totals, "by_branch": by_branch})
