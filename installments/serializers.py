from django.contrib.auth import get_user_model
from rest_framework import serializers

from accounts.fields import IdentityRelatedField, LockedFieldsMixin
from groups.models import Group
from installments.models import Installment
from installments.utils import payment_progress
from members.models import Member
from schemes.models import Scheme

Employee = get_user_model()


class InstallmentSerializer(serializers.ModelSerializer):
    group = IdentityRelatedField(queryset=Group.objects.all(), label_name="group")
    member = IdentityRelatedField(
        queryset=Member.objects.all(), label_name="member", identity_fields=("identity", "uid")
    )
    scheme = IdentityRelatedField(queryset=Scheme.objects.all(), label_name="scheme")
    member_name = serializers.CharField(source="member.mem_name", read_only=True)
    collected_by = serializers.SlugRelatedField(slug_field="identity", read_only=True)
    payment_progress = serializers.SerializerMethodField()

    class Meta:
        model = Installment
        fields = (
            "id",
            "identity",
            "group",
            "member",
            "member_name",
            "scheme",
            "installment_number",
            "installment_period",
            "due_date",
            "amount",
            "paid_date",
            "paid_amount",
            "pending_amount",
            "status",
            "late_fee",
            "collected_by",
            "payment_mode",
            "transaction_ref",
            "payment_progress",
            "created_at",
            "updated_at",
        )
        read_only_fields = (
            "id",
            "identity",
            "installment_number",
            "installment_period",
            "paid_date",
            "paid_amount",
            "pending_amount",
            "status",
            "late_fee",
            "collected_by",
            "created_at",
            "updated_at",
        )

    def get_payment_progress(self, obj):
        return payment_progress(obj.amount, obj.paid_amount)

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than 0")
        return value

    def validate(self, attrs):
        group = attrs.get("group")
        member = attrs.get("member")
        if group and member and not group.has_member(member):
            raise serializers.ValidationError(
                {"member": f"Member {member.identity} is not part of group {group.identity}"}
            )
        return attrs


class InstallmentUpdateSerializer(LockedFieldsMixin, InstallmentSerializer):
    class Meta(InstallmentSerializer.Meta):
        locked_fields = (
            "group",
            "member",
            "scheme",
        )


class InstallmentPaymentSerializer(serializers.Serializer):
    paid_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    payment_mode = serializers.ChoiceField(
        choices=Installment.PAYMENT_MODE_CHOICES, default="Cash"
    )
    collected_by = IdentityRelatedField(
        queryset=Employee.objects.all(),
        label_name="employee",
        identity_fields=("identity", "email"),
        required=False,
        allow_null=True,
    )
    receipt_remarks = serializers.CharField(required=False, allow_blank=True)
    remarks = serializers.CharField(required=False, allow_blank=True)

    def validate_paid_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Paid amount must be greater than 0")
        return value
