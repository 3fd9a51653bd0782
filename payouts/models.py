from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)


class Payout(UniversalIdModel, TimeStampedModel, SequentialIdentityModel):
    IDENTITY_PREFIX = "PYT"

    STATUS_CHOICES = [
        ("Pending", "Pending"),
        ("Paid", "Paid"),
        ("Skipped", "Skipped"),
    ]

    group = models.ForeignKey(
        "groups.Group", on_delete=models.PROTECT, related_name="payouts"
    )
    month_number = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    member = models.ForeignKey(
        "members.Member", on_delete=models.PROTECT, related_name="payouts"
    )
    payout_amount = models.DecimalField(
        max_digits=15, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    processing_fee = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="Pending")
    payment_date = models.DateTimeField(blank=True, null=True)
    transaction = models.ForeignKey(
        "transactions.Transaction",
        on_delete=models.SET_NULL,
        related_name="payouts",
        blank=True,
        null=True,
    )

    class Meta:
        verbose_name = "Payout"
        verbose_name_plural = "Payouts"
        ordering = ["group", "month_number"]

    def __str__(self):
        return f"{self.identity} - {self.member.identity} month {self.month_number}"

    @property
    def net_amount(self):
        return self.payout_amount - self.processing_fee
