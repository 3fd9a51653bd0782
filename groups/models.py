from django.db import models
from django.utils import timezone

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)


class Group(UniversalIdModel, TimeStampedModel, SequentialIdentityModel):
    IDENTITY_PREFIX = "GRP"

    STATUS_CHOICES = [
        ("Forming", "Forming"),
        ("Active", "Active"),
        ("Completed", "Completed"),
    ]

    branch = models.ForeignKey(
        "branches.Branch", on_delete=models.PROTECT, related_name="groups"
    )
    scheme = models.ForeignKey(
        "schemes.Scheme", on_delete=models.PROTECT, related_name="groups"
    )
    start_date = models.DateField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="Forming")
    current_month = models.PositiveIntegerField(default=1)

    class Meta:
        verbose_name = "Group"
        verbose_name_plural = "Groups"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["branch", "status"], name="group_branch_status_idx"),
        ]

    def __str__(self):
        return f"{self.identity} - {self.scheme.scheme_name}"

    def has_member(self, member):
        return self.members.filter(member=member).exists()


class GroupMember(UniversalIdModel, TimeStampedModel):
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name="members")
    member = models.ForeignKey(
        "members.Member", on_delete=models.PROTECT, related_name="group_memberships"
    )
    join_date = models.DateTimeField(default=timezone.now)
    payout_month = models.PositiveIntegerField()
    payout_received = models.BooleanField(default=False)

    class Meta:
        verbose_name = "Group Member"
        verbose_name_plural = "Group Members"
        ordering = ["payout_month"]
        constraints = [
            models.UniqueConstraint(
                fields=["group", "member"], name="unique_member_per_group"
            ),
            models.UniqueConstraint(
                fields=["group", "payout_month"], name="unique_payout_month_per_group"
            ),
        ]

    def __str__(self):
        return f"{self.group.identity} - {self.member.identity} (month {self.payout_month})"
