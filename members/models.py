from django.conf import settings
from django.db import models
from django.utils import timezone
from cloudinary.models import CloudinaryField

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)
from members.utils import calculate_age


class Member(UniversalIdModel, TimeStampedModel, SequentialIdentityModel):
    IDENTITY_PREFIX = "MEM"

    GENDER_CHOICES = [
        ("Male", "Male"),
        ("Female", "Female"),
        ("Other", "Other"),
    ]

    branch = models.ForeignKey(
        "branches.Branch", on_delete=models.PROTECT, related_name="members"
    )
    mem_name = models.CharField(max_length=255)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    dob = models.DateField()
    age = models.PositiveIntegerField(blank=True, null=True)
    address = models.TextField()
    pincode = models.CharField(max_length=10)
    phone = models.CharField(max_length=25, blank=True, null=True)
    mobile = models.CharField(max_length=25)
    nominee_name = models.CharField(max_length=255, blank=True, null=True)
    nominee_relation = models.CharField(max_length=100, blank=True, null=True)
    uid = models.CharField(max_length=50, unique=True)
    photo = CloudinaryField("member_photos", blank=True, null=True)
    active = models.BooleanField(default=True)
    registered_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="registered_members",
        blank=True,
        null=True,
    )
    registration_date = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = "Member"
        verbose_name_plural = "Members"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["branch", "active"], name="member_branch_active_idx"),
            models.Index(fields=["mobile"], name="member_mobile_idx"),
        ]

    def __str__(self):
        return f"{self.identity} - {self.mem_name}"

    def save(self, *args, **kwargs):
        self.age = calculate_age(self.dob)
        super().save(*args, **kwargs)
