from rest_framework import serializers

from accounts.mixins import either_lookup
from notifications.models import Notification
from notifications.utils import recipient_model, related_entity_model


class NotificationSerializer(serializers.ModelSerializer):
    recipient_id = serializers.CharField()
    related_entity_id = serializers.CharField(required=False, allow_null=True)
    created_by = serializers.SlugRelatedField(slug_field="identity", read_only=True)
    is_expired = serializers.BooleanField(read_only=True)

    class Meta:
        model = Notification
        fields = (
            "id",
            "identity",
            "recipient_type",
            "recipient_id",
            "title",
            "message",
            "notification_type",
            "related_entity_type",
            "related_entity_id",
            "is_read",
            "read_at",
            "priority",
            "created_by",
            "expiry_date",
            "is_expired",
            "created_at",
            "updated_at",
        )
        read_only_fields = (
            "id",
            "identity",
            "is_read",
            "read_at",
            "created_by",
            "created_at",
            "updated_at",
        )

    def validate(self, attrs):
        recipient_type = attrs.get(
            "recipient_type", getattr(self.instance, "recipient_type", None)
        )
        if "recipient_id" in attrs or "recipient_type" in attrs:
            recipient_id = attrs.get(
                "recipient_id", getattr(self.instance, "recipient_id", None)
            )
            recipient = either_lookup(
                recipient_model(recipient_type).objects.all(), recipient_id
            )
            if recipient is None:
                raise serializers.ValidationError(
                    {"recipient_id": f"{recipient_type} not found"}
                )
            attrs["recipient_id"] = recipient.pk

        entity_type = attrs.get(
            "related_entity_type", getattr(self.instance, "related_entity_type", None)
        )
        entity_id = attrs.get("related_entity_id")
        if entity_id:
            if not entity_type:
                raise serializers.ValidationError(
                    {"related_entity_type": "Related entity type is required with a related entity"}
                )
            entity = either_lookup(related_entity_model(entity_type).objects.all(), entity_id)
            if entity is None:
                raise serializers.ValidationError(
                    {"related_entity_id": f"{entity_type} not found"}
                )
            attrs["related_entity_id"] = entity.pk
        return attrs
