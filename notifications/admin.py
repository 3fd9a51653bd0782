from django.contrib import admin

from notifications.models import Notification


class NotificationAdmin(admin.ModelAdmin):
    list_display = (
        "identity",
        "title",
        "recipient_type",
        "notification_type",
        "priority",
        "is_read",
        "created_at",
    )
    list_filter = ("recipient_type", "notification_type", "priority", "is_read")
    search_fields = ("identity", "title", "message")


admin.site.register(Notification, NotificationAdmin)
