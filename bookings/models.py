from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)


class Booking(UniversalIdModel, TimeStampedModel, SequentialIdentityModel):
    IDENTITY_PREFIX = "BKG"

    STATUS_CHOICES = [
        ("Pending", "Pending"),
        ("Confirmed", "Confirmed"),
        ("Rejected", "Rejected"),
    ]
    OPEN_STATUSES = ("Pending", "Confirmed")

    member = models.ForeignKey(
        "members.Member", on_delete=models.PROTECT, related_name="bookings"
    )
    group = models.ForeignKey(
        "groups.Group", on_delete=models.PROTECT, related_name="bookings"
    )
    preferred_month = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="Pending")
    confirmed_month = models.PositiveIntegerField(blank=True, null=True)
    booking_fee = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    booked_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = "Booking"
        verbose_name_plural = "Bookings"
        ordering = ["-booked_at"]

    def __str__(self):
        return f"{self.identity} - {self.member.identity} month {self.preferred_month}"
