from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)


class Scheme(UniversalIdModel, TimeStampedModel, SequentialIdentityModel):
    IDENTITY_PREFIX = "SCH"

    FREQUENCY_CHOICES = [
        ("Monthly", "Monthly"),
        ("Weekly", "Weekly"),
        ("Biweekly", "Biweekly"),
    ]

    scheme_name = models.CharField(max_length=255)
    chit_amount = models.DecimalField(
        max_digits=15, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    duration_months = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    installment_amount = models.DecimalField(
        max_digits=15, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    commission_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("5.00"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )
    late_fee_rate = models.DecimalField(
        max_digits=6,
        decimal_places=4,
        default=Decimal(settings.DEFAULT_LATE_FEE_RATE),
        validators=[MinValueValidator(Decimal("0"))],
    )
    min_members = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    max_members = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    auction_frequency = models.CharField(
        max_length=20, choices=FREQUENCY_CHOICES, default="Monthly"
    )
    enabled = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="created_schemes",
        blank=True,
        null=True,
    )
    description = models.TextField(blank=True, null=True)

    class Meta:
        verbose_name = "Scheme"
        verbose_name_plural = "Schemes"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.identity} - {self.scheme_name}"

    @property
    def total_commission(self):
        return (self.chit_amount * self.commission_rate / Decimal("100")).quantize(
            Decimal("0.01")
        )

    @property
    def net_payout(self):
        return self.chit_amount - self.total_commission
