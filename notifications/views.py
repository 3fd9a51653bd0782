import logging

from django.db.models import Count, Q
from django.utils import timezone
from rest_framework import generics
from rest_framework.exceptions import NotFound
from rest_framework.views import APIView

from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope, either_lookup
from accounts.permissions import IsEmployee
from notifications.models import Notification
from notifications.serializers import NotificationSerializer
from notifications.utils import recipient_model

logger = logging.getLogger(__name__)


def active_notifications():
    return Notification.objects.filter(expiry_date__gt=timezone.now())


class NotificationListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Notification.objects.select_related("created_by")
    serializer_class = NotificationSerializer
    permission_classes = [IsEmployee]

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        if params.get("recipient_type"):
            queryset = queryset.filter(recipient_type=params["recipient_type"])
            if params.get("recipient_id"):
                recipient = either_lookup(
                    recipient_model(params["recipient_type"]).objects.all(),
                    params["recipient_id"],
                )
                queryset = (
                    queryset.filter(recipient_id=recipient.pk) if recipient else queryset.none()
                )
        if params.get("is_read") in ("true", "false"):
            queryset = queryset.filter(is_read=params["is_read"] == "true")
        if params.get("notification_type"):
            queryset = queryset.filter(notification_type=params["notification_type"])
        if params.get("priority"):
            queryset = queryset.filter(priority=params["priority"])
        if params.get("include_expired") != "true":
            queryset = queryset.filter(expiry_date__gt=timezone.now())
        return queryset

    def perform_create(self, serializer):
        notification = serializer.save(created_by=self.request.user)
        logger.info(
            f"Notification {notification.identity} created for {notification.recipient_type} {notification.recipient_id}"
        )


class NotificationDetailView(EnvelopeMixin, EitherLookupMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Notification.objects.select_related("created_by")
    serializer_class = NotificationSerializer
    permission_classes = [IsEmployee]
    not_found_message = "Notification not found"

    def destroy(self, request, *args, **kwargs):
        notification = self.get_object()
        notification.delete()
        return envelope(message="Notification deleted successfully")


class NotificationReadView(EitherLookupMixin, generics.GenericAPIView):
    queryset = Notification.objects.all()
    serializer_class = NotificationSerializer
    permission_classes = [IsEmployee]
    not_found_message = "Notification not found"

    def patch(self, request, *args, **kwargs):
        notification = self.get_object().mark_read()
        return envelope(
            data=self.get_serializer(notification).data,
            message="Notification marked as read",
        )

    post = patch


class MyNotificationsView(EnvelopeMixin, generics.ListAPIView):
    """
    Latest ten live notifications addressed to the signed in employee
    """

    serializer_class = NotificationSerializer
    permission_classes = [IsEmployee]

    def get_queryset(self):
        return active_notifications().filter(
            recipient_type="Employee", recipient_id=self.request.user.pk
        )[:10]


class MarkAllReadView(APIView):
    permission_classes = [IsEmployee]

    def post(self, request):
        updated = Notification.objects.filter(
            recipient_type="Employee", recipient_id=request.user.pk, is_read=False
        ).update(is_read=True, read_at=timezone.now())
        return envelope(data={"updated": updated}, message=f"{updated} notifications marked as read")


class UnreadCountView(APIView):
    permission_classes = [IsEmployee]

    def get(self, request):
        params = request.query_params
        recipient_type = params.get("recipient_type", "Employee")
        if params.get("recipient_id"):
            recipient = either_lookup(
                recipient_model(recipient_type).objects.all(), params["recipient_id"]
            )
            if recipient is None:
                raise NotFound(f"{recipient_type} not found")
            recipient_id = recipient.pk
        else:
            recipient_id = request.user.pk

        count = active_notifications().filter(
            recipient_type=recipient_type, recipient_id=recipient_id, is_read=False
        ).count()
        return envelope(data={"unread": count})


class NotificationStatsView(APIView):
    permission_classes = [IsEmployee]

    def get(self, request):
        by_type = []
        for row in (
            Notification.objects.values("notification_type")
            .annotate(total=Count("id"), read=Count("id", filter=Q(is_read=True)))
            .order_by("notification_type")
        ):
            row["read_percentage"] = round(row["read"] / row["total"] * 100, 2)
            by_type.append(row)

        totals = Notification.objects.aggregate(
            total=Count("id"),
            unread=Count("id", filter=Q(is_read=False)),
            expired=Count("id", filter=Q(expiry_date__lte=timezone.now())),
        )
        return envelope(data={"totals": totals, "by_type": by_type})
