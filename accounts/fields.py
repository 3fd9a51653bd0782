from rest_framework import serializers

from accounts.mixins import either_lookup


class IdentityRelatedField(serializers.RelatedField):
    """
    Accepts a UUID or a human identity on input and renders the identity.
    """

    default_error_messages = {
        "does_not_exist": "{label} not found",
    }

    def __init__(self, label_name=None, identity_fields=("identity",), **kwargs):
        self.label_name = label_name
        self.identity_fields = identity_fields
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        obj = either_lookup(self.get_queryset(), data, self.identity_fields)
        if obj is None:
            label = self.label_name or self.get_queryset().model._meta.verbose_name
            self.fail("does_not_exist", label=label.capitalize())
        return obj

    def to_representation(self, value):
        return value.identity


class LockedFieldsMixin:
    """
    Makes Meta.locked_fields read-only, declared fields included.
    """

    def get_fields(self):
        fields = super().get_fields()
        for name in getattr(self.Meta, "locked_fields", ()):
            fields[name].read_only = True
            fields[name].required = False
        return fields
