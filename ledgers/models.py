from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models, transaction
from django.db.models.functions import Length
from django.utils import timezone

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)


class LedgerEntry(UniversalIdModel, TimeStampedModel, SequentialIdentityModel):
    IDENTITY_PREFIX = "LGR"

    branch = models.ForeignKey(
        "branches.Branch", on_delete=models.PROTECT, related_name="ledger_entries"
    )
    member = models.ForeignKey(
        "members.Member", on_delete=models.PROTECT, related_name="ledger_entries"
    )
    group = models.ForeignKey(
        "groups.Group",
        on_delete=models.PROTECT,
        related_name="ledger_entries",
        blank=True,
        null=True,
    )
    transaction = models.ForeignKey(
        "transactions.Transaction",
        on_delete=models.PROTECT,
        related_name="ledger_entries",
    )
    date = models.DateTimeField(default=timezone.now)
    debit = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    credit = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    balance = models.DecimalField(max_digits=15, decimal_places=2, blank=True)
    description = models.TextField(blank=True, null=True)
    reference = models.CharField(max_length=100, blank=True, null=True)

    class Meta:
        verbose_name = "Ledger Entry"
        verbose_name_plural = "Ledger Entries"
        ordering = ["-date", "-created_at"]
        indexes = [
            models.Index(fields=["member", "created_at"], name="ledger_member_created_idx"),
            models.Index(fields=["branch", "date"], name="ledger_branch_date_idx"),
        ]

    def __str__(self):
        return f"{self.identity} - {self.member.identity} balance {self.balance}"

    def previous_balance(self):
        """
        Balance of the member's most recently created entry, or zero.
        """
        last_entry = (
            LedgerEntry.objects.filter(member=self.member)
            .exclude(pk=self.pk)
            .order_by("-created_at", Length("identity").desc(), "-identity")
            .first()
        )
        return last_entry.balance if last_entry else Decimal("0.00")

    def save(self, *args, **kwargs):
        with transaction.atomic():
            if self._state.adding:
                self.balance = self.previous_balance() + self.credit - self.debit
            super().save(*args, **kwargs)
