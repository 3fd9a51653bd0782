from rest_framework import serializers

from accounts.fields import IdentityRelatedField, LockedFieldsMixin
from branches.models import Branch
from groups.models import Group
from members.models import Member
from transactions.models import Transaction
from transactions.utils import validate_transaction_rules


class TransactionSerializer(serializers.ModelSerializer):
    branch = IdentityRelatedField(queryset=Branch.objects.all(), label_name="branch")
    member = IdentityRelatedField(
        queryset=Member.objects.all(),
        label_name="member",
        identity_fields=("identity", "uid"),
        required=False,
        allow_null=True,
    )
    group = IdentityRelatedField(
        queryset=Group.objects.all(), label_name="group", required=False, allow_null=True
    )
    recorded_by = serializers.SlugRelatedField(slug_field="identity", read_only=True)
    related_transaction = serializers.SlugRelatedField(slug_field="identity", read_only=True)

    class Meta:
        model = Transaction
        fields = (
            "id",
            "identity",
            "branch",
            "member",
            "group",
            "transaction_type",
            "amount",
            "transaction_date",
            "description",
            "payment_mode",
            "reference_id",
            "recorded_by",
            "status",
            "related_transaction",
            "created_at",
            "updated_at",
        )
        read_only_fields = (
            "id",
            "identity",
            "recorded_by",
            "related_transaction",
            "created_at",
            "updated_at",
        )

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than 0")
        return value

    def validate_status(self, value):
        if value == "Reversed":
            raise serializers.ValidationError(
                "Use the reverse action to reverse a transaction"
            )
        return value

    def validate(self, attrs):
        errors = validate_transaction_rules(attrs)
        if errors:
            raise serializers.ValidationError(errors)
        return attrs


class TransactionUpdateSerializer(LockedFieldsMixin, TransactionSerializer):
    """
    Amount, type and parties are fixed once booked.
    """

    related_transaction = IdentityRelatedField(
        queryset=Transaction.objects.all(),
        label_name="transaction",
        required=False,
        allow_null=True,
    )

    class Meta(TransactionSerializer.Meta):
        read_only_fields = ("id", "identity", "recorded_by", "created_at", "updated_at")
        locked_fields = ("branch", "member", "group", "transaction_type", "amount")

    def validate_status(self, value):
        return value

    def validate(self, attrs):
        related = attrs.get(
            "related_transaction", getattr(self.instance, "related_transaction", None)
        )
        if attrs.get("status") == "Reversed" and related is None:
            raise serializers.ValidationError(
                {"related_transaction": "A reversed transaction must reference its reversal"}
            )
        if attrs.get("payment_mode", self.instance.payment_mode) != "Cash" and not attrs.get(
            "reference_id", self.instance.reference_id
        ):
            raise serializers.ValidationError(
                {"reference_id": "Reference ID is required for non-cash payments"}
            )
        return attrs
