from django.conf import settings
from django.db import models, transaction
from django.utils import timezone

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)


class Receipt(UniversalIdModel, TimeStampedModel, SequentialIdentityModel):
    IDENTITY_PREFIX = "RCP"

    PAYMENT_MODE_CHOICES = [
        ("Cash", "Cash"),
        ("Cheque", "Cheque"),
        ("Online", "Online"),
        ("Bank Transfer", "Bank Transfer"),
    ]
    STATUS_CHOICES = [
        ("Pending", "Pending"),
        ("Completed", "Completed"),
        ("Cancelled", "Cancelled"),
    ]

    branch = models.ForeignKey(
        "branches.Branch", on_delete=models.PROTECT, related_name="receipts"
    )
    member = models.ForeignKey(
        "members.Member", on_delete=models.PROTECT, related_name="receipts"
    )
    group = models.ForeignKey(
        "groups.Group",
        on_delete=models.PROTECT,
        related_name="receipts",
        blank=True,
        null=True,
    )
    receipt_date = models.DateTimeField(default=timezone.now)
    receipt_amount = models.DecimalField(max_digits=15, decimal_places=2)
    receipt_no = models.CharField(max_length=30, blank=True, editable=False, db_index=True)
    payment_mode = models.CharField(
        max_length=20, choices=PAYMENT_MODE_CHOICES, default="Cash"
    )
    cheque_no = models.CharField(max_length=50, blank=True, null=True)
    cheque_bank_name = models.CharField(max_length=255, blank=True, null=True)
    cheque_branch_name = models.CharField(max_length=255, blank=True, null=True)
    cheque_date = models.DateField(blank=True, null=True)
    transaction = models.ForeignKey(
        "transactions.Transaction",
        on_delete=models.SET_NULL,
        related_name="receipts",
        blank=True,
        null=True,
    )
    transaction_ref = models.CharField(max_length=100, blank=True, null=True)
    received_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="received_receipts",
        blank=True,
        null=True,
    )
    remarks = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="Completed")

    class Meta:
        verbose_name = "Receipt"
        verbose_name_plural = "Receipts"
        ordering = ["-receipt_date", "-created_at"]
        indexes = [
            models.Index(fields=["branch", "receipt_date"], name="receipt_branch_date_idx"),
        ]

    def __str__(self):
        return f"{self.receipt_no} - {self.receipt_amount}"

    def generate_receipt_no(self):
        """
        <BRANCHCODE>-<YY>-<NNNNN>, continuing the branch's last number
        """
        year = f"{timezone.now().year % 100:02d}"
        last_receipt_no = (
            Receipt.objects.filter(branch=self.branch)
            .exclude(receipt_no="")
            .order_by("-receipt_no")
            .values_list("receipt_no", flat=True)
            .first()
        )
        sequence = int(last_receipt_no.rsplit("-", 1)[1]) + 1 if last_receipt_no else 1
        self.receipt_no = f"{self.branch.code}-{year}-{sequence:05d}"

    def save(self, *args, **kwargs):
        with transaction.atomic():
            if not self.receipt_no:
                self.generate_receipt_no()
            super().save(*args, **kwargs)
