from django.db import models
from django.utils import timezone

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)


class Branch(UniversalIdModel, TimeStampedModel, SequentialIdentityModel):
    IDENTITY_PREFIX = "BRN"

    STATUS_CHOICES = [
        ("Active", "Active"),
        ("Inactive", "Inactive"),
    ]

    bname = models.CharField(max_length=255, unique=True)
    parent_id = models.CharField(max_length=50, blank=True, null=True)
    start_date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="Active")

    class Meta:
        verbose_name = "Branch"
        verbose_name_plural = "Branches"
        ordering = ["bname"]

    def __str__(self):
        return f"{self.identity} - {self.bname}"

    @property
    def code(self):
        """
        Three letter code used in receipt numbers
        """
        return self.bname[:3].upper()
