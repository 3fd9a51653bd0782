from rest_framework import serializers

from accounts.fields import IdentityRelatedField, LockedFieldsMixin
from branches.models import Branch
from groups.models import Group
from ledgers.models import LedgerEntry
from members.models import Member
from transactions.models import Transaction


class LedgerEntrySerializer(serializers.ModelSerializer):
    branch = IdentityRelatedField(queryset=Branch.objects.all(), label_name="branch")
    member = IdentityRelatedField(
        queryset=Member.objects.all(), label_name="member", identity_fields=("identity", "uid")
    )
    group = IdentityRelatedField(
        queryset=Group.objects.all(), label_name="group", required=False, allow_null=True
    )
    transaction = IdentityRelatedField(
        queryset=Transaction.objects.all(), label_name="transaction"
    )

    class Meta:
        model = LedgerEntry
        fields = (
            "id",
            "identity",
            "branch",
            "member",
            "group",
            "transaction",
            "date",
            "debit",
            "credit",
            "balance",
            "description",
            "reference",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "identity", "balance", "created_at", "updated_at")

    def validate(self, attrs):
        debit = attrs.get("debit", getattr(self.instance, "debit", 0)) or 0
        credit = attrs.get("credit", getattr(self.instance, "credit", 0)) or 0
        if not debit and not credit:
            raise serializers.ValidationError("Either debit or credit must be greater than 0")
        return attrs


class LedgerEntryUpdateSerializer(LockedFieldsMixin, LedgerEntrySerializer):
    class Meta(LedgerEntrySerializer.Meta):
        locked_fields = (
            "branch",
            "member",
            "transaction",
        )


class LedgerStatementSerializer(serializers.Serializer):
    member = serializers.CharField()
    member_name = serializers.CharField()
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
    opening_balance = serializers.DecimalField(max_digits=15, decimal_places=2)
    closing_balance = serializers.DecimalField(max_digits=15, decimal_places=2)
    entries = LedgerEntrySerializer(many=True)
