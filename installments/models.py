from decimal import Decimal

from django.conf import settings
from django.db import models, transaction
from django.db.models import Max

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)
from installments.utils import derive_status, installment_period_label


class Installment(UniversalIdModel, TimeStampedModel, SequentialIdentityModel):
    IDENTITY_PREFIX = "INS"

    STATUS_CHOICES = [
        ("Pending", "Pending"),
        ("Paid", "Paid"),
        ("Partial", "Partial"),
        ("Late", "Late"),
    ]
    PAYMENT_MODE_CHOICES = [
        ("Cash", "Cash"),
        ("Cheque", "Cheque"),
        ("Online", "Online"),
        ("Bank Transfer", "Bank Transfer"),
    ]

    group = models.ForeignKey(
        "groups.Group", on_delete=models.PROTECT, related_name="installments"
    )
    member = models.ForeignKey(
        "members.Member", on_delete=models.PROTECT, related_name="installments"
    )
    scheme = models.ForeignKey(
        "schemes.Scheme", on_delete=models.PROTECT, related_name="installments"
    )
    installment_number = models.PositiveIntegerField(blank=True, null=True)
    installment_period = models.CharField(max_length=50, blank=True)
    due_date = models.DateTimeField()
    amount = models.DecimalField(max_digits=15, decimal_places=2)
    paid_date = models.DateTimeField(blank=True, null=True)
    paid_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    pending_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="Pending")
    late_fee = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    collected_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="collected_installments",
        blank=True,
        null=True,
    )
    payment_mode = models.CharField(
        max_length=20, choices=PAYMENT_MODE_CHOICES, default="Cash"
    )
    transaction_ref = models.CharField(max_length=100, blank=True, null=True)

    class Meta:
        verbose_name = "Installment"
        verbose_name_plural = "Installments"
        ordering = ["due_date", "installment_number"]
        indexes = [
            models.Index(fields=["group", "member"], name="installment_group_member_idx"),
            models.Index(fields=["status", "due_date"], name="installment_status_due_idx"),
        ]

    def __str__(self):
        return f"{self.identity} - {self.member.identity} {self.installment_period}"

    def save(self, *args, **kwargs):
        with transaction.atomic():
            if self.installment_number is None:
                last_number = Installment.objects.filter(
                    member=self.member, group=self.group
                ).aggregate(last=Max("installment_number"))["last"]
                self.installment_number = (last_number or 0) + 1
            if not self.installment_period:
                self.installment_period = installment_period_label(
                    self.scheme.auction_frequency, self.installment_number
                )

            self.pending_amount = self.amount - self.paid_amount
            self.status = derive_status(self.paid_amount, self.pending_amount, self.due_date)

            super().save(*args, **kwargs)
