from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.db import models
from django.utils import timezone
from cloudinary.models import CloudinaryField

from accounts.abstracts import (
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
)


class EmployeeManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("Employees must have an email address.")
        email = self.normalize_email(email)
        employee = self.model(email=email, **extra_fields)
        if password:
            employee.set_password(password)
        else:
            employee.set_unusable_password()
        employee.save(using=self._db)
        return employee

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("role", "Employee")
        extra_fields.setdefault("status", "Active")

        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password, **extra_fields):
        extra_fields.setdefault("role", "Admin")
        extra_fields.setdefault("status", "Active")

        if extra_fields.get("role") != "Admin":
            raise ValueError("Superuser must have role=Admin.")

        return self._create_user(email, password, **extra_fields)


class Employee(
    AbstractBaseUser,
    UniversalIdModel,
    TimeStampedModel,
    SequentialIdentityModel,
):
    IDENTITY_PREFIX = "EMP"

    GENDER_CHOICES = [
        ("Male", "Male"),
        ("Female", "Female"),
        ("Other", "Other"),
    ]
    ROLE_CHOICES = [
        ("Admin", "Admin"),
        ("Manager", "Manager"),
        ("Employee", "Employee"),
    ]
    STATUS_CHOICES = [
        ("Active", "Active"),
        ("Inactive", "Inactive"),
        ("Suspended", "Suspended"),
    ]

    emp_name = models.CharField(max_length=255)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    dob = models.DateField(blank=True, null=True)
    phone = models.CharField(max_length=25)
    email = models.EmailField(unique=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="Active")
    address = models.TextField(blank=True, null=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="Employee")
    photo = CloudinaryField("employee_photos", blank=True, null=True)
    branch = models.ForeignKey(
        "branches.Branch",
        on_delete=models.PROTECT,
        related_name="employees",
        blank=True,
        null=True,
    )
    joining_date = models.DateField(default=timezone.localdate)

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["emp_name", "gender", "phone"]

    objects = EmployeeManager()

    class Meta:
        verbose_name = "Employee"
        verbose_name_plural = "Employees"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["branch", "role"], name="employee_branch_role_idx"),
        ]

    def __str__(self):
        return f"{self.identity} - {self.emp_name}"

    @property
    def is_active(self):
        return self.status == "Active"

    @property
    def is_admin(self):
        return self.role == "Admin"

    @property
    def is_manager(self):
        return self.role in ("Admin", "Manager")

    # Django admin access is limited to Admin employees
    @property
    def is_staff(self):
        return self.is_active and self.is_admin

    @property
    def is_superuser(self):
        return self.is_staff

    def has_perm(self, perm, obj=None):
        return self.is_staff

    def has_module_perms(self, app_label):
        return self.is_staff
