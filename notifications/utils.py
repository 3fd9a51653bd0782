import resend
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.template.loader import render_to_string
from django.utils import timezone
from rest_framework import serializers

logger = logging.getLogger(__name__)

EMAIL_PRIORITIES = ("High", "Critical")


def recipient_model(recipient_type):
    from members.models import Member

    models = {"Employee": get_user_model(), "Member": Member}
    if recipient_type not in models:
        raise serializers.ValidationError({"recipient_type": "Recipient type must be Employee or Member"})
    return models[recipient_type]


def related_entity_model(entity_type):
    from bookings.models import Booking
    from groups.models import Group
    from installments.models import Installment
    from payouts.models import Payout
    from transactions.models import Transaction

    return {
        "Booking": Booking,
        "Group": Group,
        "Installment": Installment,
        "Payout": Payout,
        "Transaction": Transaction,
    }[entity_type]


def should_email(notification):
    return (
        bool(settings.RESEND_API_KEY)
        and notification.recipient_type == "Employee"
        and notification.priority in EMAIL_PRIORITIES
    )


def send_notification_email(notification):
    """
    Resend email integration
    """
    employee = get_user_model().objects.filter(pk=notification.recipient_id).first()
    if employee is None or not employee.email:
        logger.warning(f"No email recipient for notification {notification.identity}")
        return None

    try:
        email_body = render_to_string(
            "notification_alert.html",
            {
                "employee": employee,
                "notification": notification,
                "domain": settings.DOMAIN,
                "current_year": timezone.now().year,
            },
        )
        params = {
            "from": settings.RESEND_FROM_EMAIL,
            "to": [employee.email],
            "subject": f"[{notification.priority}] {notification.title}",
            "html": email_body,
        }
        response = resend.Emails.send(params)
        logger.info(f"Email sent to {employee.email} with response: {response}")
        return response

    except Exception as e:
        logger.error(f"Error sending email to {employee.email}: {str(e)}")
        return None
