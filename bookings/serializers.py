from rest_framework import serializers

from accounts.fields import IdentityRelatedField, LockedFieldsMixin
from bookings.models import Booking
from groups.models import Group
from members.models import Member


def validate_month_in_scheme(group, month, field):
    duration = group.scheme.duration_months
    if month < 1 or month > duration:
        raise serializers.ValidationError(
            {field: f"Month {month} is outside the scheme duration of {duration} months"}
        )


class BookingSerializer(serializers.ModelSerializer):
    member = IdentityRelatedField(
        queryset=Member.objects.all(), label_name="member", identity_fields=("identity", "uid")
    )
    group = IdentityRelatedField(queryset=Group.objects.all(), label_name="group")
    member_name = serializers.CharField(source="member.mem_name", read_only=True)

    class Meta:
        model = Booking
        fields = (
            "id",
            "identity",
            "member",
            "member_name",
            "group",
            "preferred_month",
            "status",
            "confirmed_month",
            "booking_fee",
            "booked_at",
            "created_at",
            "updated_at",
        )
        read_only_fields = (
            "id",
            "identity",
            "status",
            "confirmed_month",
            "booked_at",
            "created_at",
            "updated_at",
        )

    def validate(self, attrs):
        group = attrs.get("group", getattr(self.instance, "group", None))
        member = attrs.get("member", getattr(self.instance, "member", None))
        preferred_month = attrs.get(
            "preferred_month", getattr(self.instance, "preferred_month", None)
        )

        if not group.has_member(member):
            raise serializers.ValidationError(
                {"member": f"Member {member.identity} is not part of group {group.identity}"}
            )
        validate_month_in_scheme(group, preferred_month, "preferred_month")

        open_bookings = Booking.objects.filter(
            member=member, group=group, status__in=Booking.OPEN_STATUSES
        )
        if self.instance is not None:
            open_bookings = open_bookings.exclude(pk=self.instance.pk)
        if open_bookings.exists():
            raise serializers.ValidationError(
                {"detail": f"Member {member.identity} already has an open booking in this group"}
            )
        return attrs


class BookingUpdateSerializer(LockedFieldsMixin, BookingSerializer):
    class Meta(BookingSerializer.Meta):
        locked_fields = ("member", "group")


class ConfirmBookingSerializer(serializers.Serializer):
    confirmed_month = serializers.IntegerField(min_value=1, required=False)
