import uuid

from django.db import models, transaction
from django.db.models.functions import Length


class UniversalIdModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


def next_identity(last_identity, prefix, width=3):
    """
    MEM007 -> MEM008; None -> MEM001. Grows past the padding when needed.
    """
    if not last_identity:
        return f"{prefix}{1:0{width}d}"
    number = int(last_identity[len(prefix) :])
    return f"{prefix}{number + 1:0{width}d}"


class SequentialIdentityModel(models.Model):
    """
    Human readable identity such as MEM001, generated from the last stored one.
    """

    IDENTITY_PREFIX = None

    identity = models.CharField(max_length=20, unique=True, blank=True, editable=False)

    class Meta:
        abstract = True

    def identity_prefix(self):
        return self.IDENTITY_PREFIX

    def last_identity(self, prefix):
        return (
            type(self)
            ._default_manager.filter(identity__startswith=prefix)
            .order_by(Length("identity").desc(), "-identity")
            .values_list("identity", flat=True)
            .first()
        )

    def generate_identity(self):
        prefix = self.identity_prefix()
        self.identity = next_identity(self.last_identity(prefix), prefix)

    def save(self, *args, **kwargs):
        with transaction.atomic():
            if not self.identity:
                self.generate_identity()
            super().save(*args, **kwargs)
