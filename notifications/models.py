from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)


def default_expiry_date():
    return timezone.now() + timedelta(days=30)


class Notification(UniversalIdModel, TimeStampedModel, SequentialIdentityModel):
    IDENTITY_PREFIX = "NOT"

    RECIPIENT_TYPE_CHOICES = [
        ("Employee", "Employee"),
        ("Member", "Member"),
    ]
    NOTIFICATION_TYPE_CHOICES = [
        ("Payment", "Payment"),
        ("Auction", "Auction"),
        ("Installment", "Installment"),
        ("Group", "Group"),
        ("System", "System"),
        ("Alert", "Alert"),
        ("Reminder", "Reminder"),
        ("Other", "Other"),
    ]
    RELATED_ENTITY_CHOICES = [
        ("Booking", "Booking"),
        ("Group", "Group"),
        ("Installment", "Installment"),
        ("Payout", "Payout"),
        ("Transaction", "Transaction"),
    ]
    PRIORITY_CHOICES = [
        ("Low", "Low"),
        ("Medium", "Medium"),
        ("High", "High"),
        ("Critical", "Critical"),
    ]

    recipient_type = models.CharField(max_length=20, choices=RECIPIENT_TYPE_CHOICES)
    recipient_id = models.UUIDField()
    title = models.CharField(max_length=100)
    message = models.CharField(max_length=500)
    notification_type = models.CharField(max_length=20, choices=NOTIFICATION_TYPE_CHOICES)
    related_entity_type = models.CharField(
        max_length=20, choices=RELATED_ENTITY_CHOICES, blank=True, null=True
    )
    related_entity_id = models.UUIDField(blank=True, null=True)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(blank=True, null=True)
    priority = models.CharField(max_length=20, choices=PRIORITY_CHOICES, default="Medium")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="sent_notifications",
        blank=True,
        null=True,
    )
    expiry_date = models.DateTimeField(default=default_expiry_date)

    class Meta:
        verbose_name = "Notification"
        verbose_name_plural = "Notifications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["recipient_type", "recipient_id", "is_read"],
                name="notification_recipient_idx",
            ),
        ]

    def __str__(self):
        return f"{self.identity} - {self.title}"

    @property
    def is_expired(self):
        return self.expiry_date <= timezone.now()

    def mark_read(self):
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=["is_read", "read_at", "updated_at"])
        return self
