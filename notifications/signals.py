from django.db.models.signals import post_save
from django.dispatch import receiver

from notifications.models import Notification
from notifications.utils import should_email, send_notification_email


@receiver(post_save, sender=Notification)
def email_urgent_notification(sender, instance, created, **kwargs):
    if created and should_email(instance):
        send_notification_email(instance)
