from datetime import timedelta
from unittest.mock import patch

from django.test import override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.testing import create_branch, create_employee, create_member
from notifications.models import Notification


class NotificationTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.employee = create_employee(self.branch, role="Employee")
        self.manager = create_employee(self.branch, role="Manager")
        self.member = create_member(self.branch)

    def notify(self, recipient=None, **kwargs):
        recipient = recipient or self.employee
        kwargs.setdefault("title", "Installment due")
        kwargs.setdefault("message", "Month 3 installment is due tomorrow")
        kwargs.setdefault("notification_type", "Installment")
        return Notification.objects.create(
            recipient_type="Member" if recipient == self.member else "Employee",
            recipient_id=recipient.pk,
            **kwargs,
        )

    def test_create_resolves_recipient_identity(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.post(
            "/api/v1/notifications/",
            {
                "recipient_type": "Member",
                "recipient_id": self.member.identity,
                "title": "Welcome",
                "message": "You have joined the chit fund",
                "notification_type": "Group",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data["data"]
        self.assertEqual(data["recipient_id"], str(self.member.pk))
        self.assertEqual(data["created_by"], self.manager.identity)
        self.assertFalse(data["is_expired"])

    def test_unknown_recipient_is_rejected(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.post(
            "/api/v1/notifications/",
            {
                "recipient_type": "Member",
                "recipient_id": "MEM999",
                "title": "Welcome",
                "message": "Hello",
                "notification_type": "Group",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "recipient_id: Member not found")

    def test_expiry_defaults_to_thirty_days(self):
        notification = self.notify()
        remaining = notification.expiry_date - timezone.now()
        self.assertGreater(remaining, timedelta(days=29))
        self.assertLessEqual(remaining, timedelta(days=30))

    def test_mark_read(self):
        notification = self.notify()
        self.client.force_authenticate(user=self.employee)
        response = self.client.patch(f"/api/v1/notifications/{notification.identity}/read/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["data"]["is_read"])
        notification.refresh_from_db()
        self.assertIsNotNone(notification.read_at)

    def test_my_notifications_skip_expired_and_others(self):
        self.notify()
        self.notify(expiry_date=timezone.now() - timedelta(minutes=1))
        self.notify(recipient=self.manager)
        self.client.force_authenticate(user=self.employee)
        response = self.client.get("/api/v1/notifications/me/")
        self.assertEqual(response.data["count"], 1)

    def test_my_notifications_are_capped_at_ten(self):
        for _ in range(12):
            self.notify()
        self.client.force_authenticate(user=self.employee)
        response = self.client.get("/api/v1/notifications/me/")
        self.assertEqual(response.data["count"], 10)

    def test_unread_count_and_read_all(self):
        self.notify()
        self.notify()
        self.notify(is_read=True)
        self.client.force_authenticate(user=self.employee)

        response = self.client.get("/api/v1/notifications/unread-count/")
        self.assertEqual(response.data["data"]["unread"], 2)

        response = self.client.post("/api/v1/notifications/read-all/")
        self.assertEqual(response.data["data"]["updated"], 2)
        response = self.client.get("/api/v1/notifications/unread-count/")
        self.assertEqual(response.data["data"]["unread"], 0)

    def test_unread_count_for_member(self):
        self.notify(recipient=self.member)
        self.client.force_authenticate(user=self.employee)
        response = self.client.get(
            "/api/v1/notifications/unread-count/",
            {"recipient_type": "Member", "recipient_id": self.member.identity},
        )
        self.assertEqual(response.data["data"]["unread"], 1)

    def test_stats_read_percentage(self):
        self.notify(is_read=True)
        self.notify()
        self.client.force_authenticate(user=self.employee)
        response = self.client.get("/api/v1/notifications/stats/")
        row = response.data["data"]["by_type"][0]
        self.assertEqual(row["notification_type"], "Installment")
        self.assertEqual(row["read_percentage"], 50.0)
        self.assertEqual(response.data["data"]["totals"]["unread"], 1)


class NotificationEmailTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.employee = create_employee(self.branch, role="Employee")

    def notify(self, priority):
        return Notification.objects.create(
            recipient_type="Employee",
            recipient_id=self.employee.pk,
            title="Payout pending",
            message="Group payout awaits approval",
            notification_type="Alert",
            priority=priority,
        )

    @override_settings(RESEND_API_KEY="re_test_key")
    @patch("notifications.utils.resend.Emails.send")
    def test_urgent_notification_is_emailed(self, send):
        self.notify("Critical")
        send.assert_called_once()
        params = send.call_args[0][0]
        self.assertEqual(params["to"], [self.employee.email])
        self.assertEqual(params["subject"], "[Critical] Payout pending")

    @override_settings(RESEND_API_KEY="re_test_key")
    @patch("notifications.utils.resend.Emails.send")
    def test_routine_notification_is_not_emailed(self, send):
        self.notify("Low")
        send.assert_not_called()

    @override_settings(RESEND_API_KEY="")
    @patch("notifications.utils.resend.Emails.send")
    def test_no_email_without_api_key(self, send):
        self.notify("High")
        send.assert_not_called()

    @override_settings(RESEND_API_KEY="re_test_key")
    @patch("notifications.utils.resend.Emails.send", side_effect=Exception("boom"))
    def test_email_failure_does_not_block_notification(self, send):
        notification = self.notify("High")
        self.assertTrue(Notification.objects.filter(pk=notification.pk).exists())
