from django.conf import settings
from django.db import models
from django.utils import timezone

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)


class Transaction(UniversalIdModel, TimeStampedModel, SequentialIdentityModel):
    IDENTITY_PREFIX = "TXN"

    TYPE_CHOICES = [
        ("Deposit", "Deposit"),
        ("Withdrawal", "Withdrawal"),
        ("Installment", "Installment"),
        ("Auction", "Auction"),
        ("Commission", "Commission"),
        ("Penalty", "Penalty"),
        ("Other", "Other"),
    ]
    PAYMENT_MODE_CHOICES = [
        ("Cash", "Cash"),
        ("Cheque", "Cheque"),
        ("Online", "Online"),
        ("Bank Transfer", "Bank Transfer"),
    ]
    STATUS_CHOICES = [
        ("Pending", "Pending"),
        ("Completed", "Completed"),
        ("Failed", "Failed"),
        ("Reversed", "Reversed"),
    ]

    branch = models.ForeignKey(
        "branches.Branch", on_delete=models.PROTECT, related_name="transactions"
    )
    member = models.ForeignKey(
        "members.Member",
        on_delete=models.PROTECT,
        related_name="transactions",
        blank=True,
        null=True,
    )
    group = models.ForeignKey(
        "groups.Group",
        on_delete=models.PROTECT,
        related_name="transactions",
        blank=True,
        null=True,
    )
    transaction_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    amount = models.DecimalField(max_digits=15, decimal_places=2)
    transaction_date = models.DateTimeField(default=timezone.now)
    description = models.TextField(blank=True, null=True)
    payment_mode = models.CharField(
        max_length=20, choices=PAYMENT_MODE_CHOICES, default="Cash"
    )
    reference_id = models.CharField(max_length=100, blank=True, null=True)
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="recorded_transactions",
        blank=True,
        null=True,
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="Completed")
    related_transaction = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        related_name="+",
        blank=True,
        null=True,
    )

    class Meta:
        verbose_name = "Transaction"
        verbose_name_plural = "Transactions"
        ordering = ["-transaction_date", "-created_at"]
        indexes = [
            models.Index(fields=["branch", "transaction_type"], name="txn_branch_type_idx"),
            models.Index(fields=["member", "transaction_date"], name="txn_member_date_idx"),
        ]

    def __str__(self):
        return f"{self.identity} - {self.transaction_type} {self.amount}"

    def identity_prefix(self):
        # TXN<YY><NNN>: the counter restarts every calendar year
        return f"{self.IDENTITY_PREFIX}{timezone.now().year % 100:02d}"
