from decimal import Decimal

from rest_framework import serializers

from schemes.models import Scheme


class SchemeSerializer(serializers.ModelSerializer):
    created_by = serializers.SlugRelatedField(slug_field="identity", read_only=True)
    total_commission = serializers.DecimalField(
        max_digits=15, decimal_places=2, read_only=True
    )
    net_payout = serializers.DecimalField(max_digits=15, decimal_places=2, read_only=True)

    class Meta:
        model = Scheme
        fields = (
            "id",
            "identity",
            "scheme_name",
            "chit_amount",
            "duration_months",
            "installment_amount",
            "commission_rate",
            "late_fee_rate",
            "min_members",
            "max_members",
            "auction_frequency",
            "enabled",
            "created_by",
            "description",
            "total_commission",
            "net_payout",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "identity", "created_by", "created_at", "updated_at")

    def validate(self, attrs):
        chit_amount = attrs.get("chit_amount", getattr(self.instance, "chit_amount", None))
        duration = attrs.get("duration_months", getattr(self.instance, "duration_months", None))
        installment = attrs.get(
            "installment_amount", getattr(self.instance, "installment_amount", None)
        )
        min_members = attrs.get("min_members", getattr(self.instance, "min_members", None))
        max_members = attrs.get("max_members", getattr(self.instance, "max_members", None))

        if chit_amount and duration and installment is not None:
            expected = chit_amount / Decimal(duration)
            if abs(expected - installment) > 1:
                raise serializers.ValidationError(
                    {
                        "installment_amount": f"Installment amount should be about {expected.quantize(Decimal('0.01'))} (chit amount / duration)"
                    }
                )
        if min_members is not None and max_members is not None and min_members >= max_members:
            raise serializers.ValidationError(
                {"min_members": "Minimum members must be less than maximum members"}
            )
        return attrs
