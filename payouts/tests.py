from decimal import Decimal

from rest_framework import serializers, status
from rest_framework.test import APITestCase

from accounts.testing import (
    create_branch,
    create_employee,
    create_member,
    create_scheme,
    create_group,
    create_transaction,
)
from groups.models import GroupMember
from groups.utils import add_group_member
from payouts.models import Payout
from payouts.utils import process_payout, skip_payout


class PayoutTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.clerk = create_employee(self.branch, role="Employee")
        self.manager = create_employee(self.branch, role="Manager")
        self.scheme = create_scheme()
        self.group = create_group(self.branch, self.scheme)
        self.member = create_member(self.branch)
        add_group_member(self.group, self.member, 1)

    def create_payout(self, month_number=1, **kwargs):
        kwargs.setdefault("payout_amount", Decimal("95000.00"))
        return Payout.objects.create(
            group=self.group, member=self.member, month_number=month_number, **kwargs
        )

    def test_create_defaults_to_net_payout(self):
        self.client.force_authenticate(user=self.clerk)
        response = self.client.post(
            "/api/v1/payouts/",
            {
                "group": self.group.identity,
                "member": self.member.identity,
                "month_number": 1,
                "processing_fee": "500.00",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data["data"]
        self.assertEqual(data["payout_amount"], "95000.00")
        self.assertEqual(data["net_amount"], "94500.00")
        self.assertEqual(data["status"], "Pending")

    def test_member_must_belong_to_group(self):
        outsider = create_member(self.branch)
        self.client.force_authenticate(user=self.clerk)
        response = self.client.post(
            "/api/v1/payouts/",
            {"group": self.group.identity, "member": outsider.identity, "month_number": 2},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("member", response.data["errors"])

    def test_month_beyond_duration_is_rejected(self):
        self.client.force_authenticate(user=self.clerk)
        response = self.client.post(
            "/api/v1/payouts/",
            {"group": self.group.identity, "member": self.member.identity, "month_number": 11},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("month_number", response.data["errors"])

    def test_one_payout_per_group_month(self):
        self.create_payout(month_number=1)
        self.client.force_authenticate(user=self.clerk)
        payload = {
            "group": self.group.identity,
            "member": self.member.identity,
            "month_number": 1,
        }
        response = self.client.post("/api/v1/payouts/", payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        Payout.objects.update(status="Skipped")
        response = self.client.post("/api/v1/payouts/", payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_process_marks_member_paid(self):
        payout = self.create_payout()
        txn = create_transaction(
            self.branch, member=self.member, transaction_type="Withdrawal", amount=Decimal("95000.00")
        )
        process_payout(payout, txn)

        payout.refresh_from_db()
        self.assertEqual(payout.status, "Paid")
        self.assertIsNotNone(payout.payment_date)
        self.assertEqual(payout.transaction, txn)
        self.assertTrue(
            GroupMember.objects.get(group=self.group, member=self.member).payout_received
        )

    def test_process_endpoint_requires_manager(self):
        payout = self.create_payout()
        txn = create_transaction(self.branch, member=self.member, transaction_type="Withdrawal")
        url = f"/api/v1/payouts/{payout.identity}/process/"

        self.client.force_authenticate(user=self.clerk)
        response = self.client.post(url, {"transaction": txn.identity}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.manager)
        response = self.client.post(url, {"transaction": txn.identity}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["transaction"], txn.identity)

    def test_paid_payout_cannot_be_processed_again(self):
        payout = self.create_payout()
        txn = create_transaction(self.branch, member=self.member, transaction_type="Withdrawal")
        process_payout(payout, txn)
        with self.assertRaises(serializers.ValidationError):
            process_payout(payout, txn)

    def test_skip_only_from_pending(self):
        payout = self.create_payout()
        self.client.force_authenticate(user=self.manager)
        url = f"/api/v1/payouts/{payout.identity}/skip/"
        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["status"], "Skipped")

        again = self.client.post(url)
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            again.data["message"], "Only pending payouts can be skipped; payout is Skipped"
        )

    def test_skip_util_rejects_paid(self):
        payout = self.create_payout(status="Paid")
        with self.assertRaises(serializers.ValidationError):
            skip_payout(payout)

    def test_member_payouts(self):
        self.create_payout()
        self.client.force_authenticate(user=self.clerk)
        response = self.client.get(f"/api/v1/members/{self.member.identity}/payouts/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
