from rest_framework import serializers

from accounts.fields import IdentityRelatedField, LockedFieldsMixin
from branches.models import Branch
from groups.models import Group
from members.models import Member
from receipts.models import Receipt
from transactions.models import Transaction


class ChequeDetailsSerializer(serializers.Serializer):
    cheque_no = serializers.CharField(max_length=50, required=False, allow_null=True)
    bank_name = serializers.CharField(
        source="cheque_bank_name", max_length=255, required=False, allow_null=True
    )
    branch_name = serializers.CharField(
        source="cheque_branch_name", max_length=255, required=False, allow_null=True
    )
    cheque_date = serializers.DateField(required=False, allow_null=True)


class ReceiptSerializer(serializers.ModelSerializer):
    branch = IdentityRelatedField(queryset=Branch.objects.all(), label_name="branch")
    member = IdentityRelatedField(
        queryset=Member.objects.all(), label_name="member", identity_fields=("identity", "uid")
    )
    group = IdentityRelatedField(
        queryset=Group.objects.all(), label_name="group", required=False, allow_null=True
    )
    transaction = IdentityRelatedField(
        queryset=Transaction.objects.all(),
        label_name="transaction",
        required=False,
        allow_null=True,
    )
    cheque_details = ChequeDetailsSerializer(source="*", required=False)
    received_by = serializers.SlugRelatedField(slug_field="identity", read_only=True)

    class Meta:
        model = Receipt
        fields = (
            "id",
            "identity",
            "receipt_no",
            "branch",
            "member",
            "group",
            "receipt_date",
            "receipt_amount",
            "payment_mode",
            "cheque_details",
            "transaction",
            "transaction_ref",
            "received_by",
            "remarks",
            "status",
            "created_at",
            "updated_at",
        )
        read_only_fields = (
            "id",
            "identity",
            "receipt_no",
            "received_by",
            "created_at",
            "updated_at",
        )

    def validate_receipt_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Receipt amount must be greater than 0")
        return value

    def validate(self, attrs):
        payment_mode = attrs.get(
            "payment_mode", getattr(self.instance, "payment_mode", "Cash")
        )
        cheque_no = attrs.get("cheque_no", getattr(self.instance, "cheque_no", None))
        transaction_ref = attrs.get(
            "transaction_ref", getattr(self.instance, "transaction_ref", None)
        )
        transaction = attrs.get("transaction", getattr(self.instance, "transaction", None))

        if payment_mode == "Cheque" and not cheque_no:
            raise serializers.ValidationError(
                {"cheque_details": "Cheque number is required for cheque payments"}
            )
        if payment_mode in ("Online", "Bank Transfer") and not (transaction_ref or transaction):
            raise serializers.ValidationError(
                {"transaction_ref": f"Transaction reference is required for {payment_mode} payments"}
            )
        return attrs


class ReceiptUpdateSerializer(LockedFieldsMixin, ReceiptSerializer):
    class Meta(ReceiptSerializer.Meta):
        locked_fields = (
            "branch",
            "member",
            "receipt_amount",
            "status",
        )
