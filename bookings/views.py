import logging

from django.db.models import Count, Sum
from rest_framework import generics, serializers
from rest_framework.exceptions import NotFound
from rest_framework.views import APIView

from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope, either_lookup
from accounts.permissions import IsEmployee, IsManager
from bookings.models import Booking
from bookings.serializers import (
    BookingSerializer,
    BookingUpdateSerializer,
    ConfirmBookingSerializer,
    validate_month_in_scheme,
)
from groups.models import Group
from members.models import Member

logger = logging.getLogger(__name__)


class BookingLookupMixin(EitherLookupMixin):
    not_found_message = "Booking not found"


def ensure_pending(booking, action):
    if booking.status != "Pending":
        raise serializers.ValidationError(
            {"detail": f"Only pending bookings can be {action}; booking is {booking.status}"}
        )


class BookingListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Booking.objects.select_related("member", "group__scheme")
    serializer_class = BookingSerializer
    permission_classes = [IsEmployee]

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        if params.get("group"):
            group = either_lookup(Group.objects.all(), params["group"])
            queryset = queryset.filter(group=group) if group else queryset.none()
        if params.get("member"):
            member = either_lookup(Member.objects.all(), params["member"], ("identity", "uid"))
            queryset = queryset.filter(member=member) if member else queryset.none()
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        return queryset

    def perform_create(self, serializer):
        booking = serializer.save()
        logger.info(
            f"Booking {booking.identity} for month {booking.preferred_month} by {booking.member.identity}"
        )


class BookingDetailView(EnvelopeMixin, BookingLookupMixin, generics.RetrieveUpdateAPIView):
    queryset = Booking.objects.select_related("member", "group__scheme")
    permission_classes = [IsEmployee]

    def get_serializer_class(self):
        if self.request.method in ("PUT", "PATCH"):
            return BookingUpdateSerializer
        return BookingSerializer


class BookingConfirmView(BookingLookupMixin, generics.GenericAPIView):
    """
    Confirm a pending booking, optionally for a different month
    """

    queryset = Booking.objects.select_related("member", "group__scheme")
    serializer_class = ConfirmBookingSerializer
    permission_classes = [IsManager]

    def post(self, request, *args, **kwargs):
        booking = self.get_object()
        ensure_pending(booking, "confirmed")
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        month = serializer.validated_data.get("confirmed_month", booking.preferred_month)
        validate_month_in_scheme(booking.group, month, "confirmed_month")

        booking.status = "Confirmed"
        booking.confirmed_month = month
        booking.save(update_fields=["status", "confirmed_month", "updated_at"])
        logger.info(f"Booking {booking.identity} confirmed for month {month}")
        return envelope(
            data=BookingSerializer(booking).data,
            message="Booking confirmed successfully",
        )


class BookingRejectView(BookingLookupMixin, generics.GenericAPIView):
    queryset = Booking.objects.select_related("member", "group__scheme")
    serializer_class = BookingSerializer
    permission_classes = [IsManager]

    def post(self, request, *args, **kwargs):
        booking = self.get_object()
        ensure_pending(booking, "rejected")
        booking.status = "Rejected"
        booking.save(update_fields=["status", "updated_at"])
        logger.info(f"Booking {booking.identity} rejected")
        return envelope(
            data=self.get_serializer(booking).data,
            message="Booking rejected successfully",
        )


class BookingStatsView(APIView):
    permission_classes = [IsEmployee]

    def get(self, request):
        totals = Booking.objects.aggregate(
            count=Count("id"), total_fees=Sum("booking_fee")
        )
        by_status = list(
            Booking.objects.values("status")
            .annotate(count=Count("id"), total_fees=Sum("booking_fee"))
            .order_by("status")
        )
        by_month = list(
            Booking.objects.values("preferred_month")
            .annotate(count=Count("id"))
            .order_by("preferred_month")
        )
        return envelope(data={"totals": totals, "by_status": by_status, "by_month": by_month})


class MemberBookingsView(EnvelopeMixin, generics.ListAPIView):
    serializer_class = BookingSerializer
    permission_classes = [IsEmployee]

    def get_queryset(self):
        member = either_lookup(Member.objects.all(), self.kwargs["id"], ("identity", "uid"))
        if member is None:
            raise NotFound("Member not found")
        return Booking.objects.filter(member=member).select_related("member", "group__scheme")
