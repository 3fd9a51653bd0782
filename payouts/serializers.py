from rest_framework import serializers

from accounts.fields import IdentityRelatedField, LockedFieldsMixin
from groups.models import Group
from members.models import Member
from payouts.models import Payout
from transactions.models import Transaction


class PayoutSerializer(serializers.ModelSerializer):
    group = IdentityRelatedField(queryset=Group.objects.all(), label_name="group")
    member = IdentityRelatedField(
        queryset=Member.objects.all(), label_name="member", identity_fields=("identity", "uid")
    )
    member_name = serializers.CharField(source="member.mem_name", read_only=True)
    transaction = serializers.SlugRelatedField(slug_field="identity", read_only=True)
    net_amount = serializers.DecimalField(max_digits=15, decimal_places=2, read_only=True)
    payout_amount = serializers.DecimalField(
        max_digits=15, decimal_places=2, required=False
    )

    class Meta:
        model = Payout
        fields = (
            "id",
            "identity",
            "group",
            "month_number",
            "member",
            "member_name",
            "payout_amount",
            "processing_fee",
            "net_amount",
            "status",
            "payment_date",
            "transaction",
            "created_at",
            "updated_at",
        )
        read_only_fields = (
            "id",
            "identity",
            "status",
            "payment_date",
            "transaction",
            "created_at",
            "updated_at",
        )

    def validate_payout_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Payout amount must be greater than 0")
        return value

    def validate(self, attrs):
        group = attrs.get("group", getattr(self.instance, "group", None))
        member = attrs.get("member", getattr(self.instance, "member", None))
        month_number = attrs.get("month_number", getattr(self.instance, "month_number", None))

        if not group.has_member(member):
            raise serializers.ValidationError(
                {"member": f"Member {member.identity} is not part of group {group.identity}"}
            )
        duration = group.scheme.duration_months
        if month_number > duration:
            raise serializers.ValidationError(
                {"month_number": f"Month {month_number} is outside the scheme duration of {duration} months"}
            )
        clashes = Payout.objects.filter(group=group, month_number=month_number).exclude(
            status="Skipped"
        )
        if self.instance is not None:
            clashes = clashes.exclude(pk=self.instance.pk)
        if clashes.exists():
            raise serializers.ValidationError(
                {"month_number": f"Group {group.identity} already has a payout for month {month_number}"}
            )

        if self.instance is None and not attrs.get("payout_amount"):
            attrs["payout_amount"] = group.scheme.net_payout
        return attrs


class PayoutUpdateSerializer(LockedFieldsMixin, PayoutSerializer):
    class Meta(PayoutSerializer.Meta):
        locked_fields = ("group", "member")


class ProcessPayoutSerializer(serializers.Serializer):
    transaction = IdentityRelatedField(
        queryset=Transaction.objects.all(), label_name="transaction"
    )
