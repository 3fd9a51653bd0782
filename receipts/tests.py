from decimal import Decimal

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.testing import create_branch, create_employee, create_member
from receipts.models import Receipt


class ReceiptNumberTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.member = create_member(self.branch)
        self.year = f"{timezone.now().year % 100:02d}"

    def create_receipt(self, branch=None, **kwargs):
        kwargs.setdefault("receipt_amount", Decimal("500.00"))
        return Receipt.objects.create(
            branch=branch or self.branch, member=self.member, **kwargs
        )

    def test_numbers_follow_branch_code_and_year(self):
        first = self.create_receipt()
        second = self.create_receipt()
        self.assertEqual(first.receipt_no, f"CEN-{self.year}-00001")
        self.assertEqual(second.receipt_no, f"CEN-{self.year}-00002")
        self.assertEqual(first.identity, "RCP001")

    def test_each_branch_has_its_own_sequence(self):
        self.create_receipt()
        other = create_branch("Westend")
        receipt = self.create_receipt(branch=other)
        self.assertEqual(receipt.receipt_no, f"WES-{self.year}-00001")

    def test_sequence_continues_from_last_number(self):
        self.create_receipt(receipt_no="CEN-00-00041")
        receipt = self.create_receipt()
        self.assertEqual(receipt.receipt_no, f"CEN-{self.year}-00042")


class ReceiptApiTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.clerk = create_employee(self.branch, role="Employee")
        self.manager = create_employee(self.branch, role="Manager")
        self.member = create_member(self.branch)

    def payload(self, **overrides):
        data = {
            "branch": self.branch.identity,
            "member": self.member.identity,
            "receipt_amount": "2500.00",
            "payment_mode": "Cash",
        }
        data.update(overrides)
        return data

    def test_create_records_receiver(self):
        self.client.force_authenticate(user=self.clerk)
        response = self.client.post("/api/v1/receipts/", self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["received_by"], self.clerk.identity)
        self.assertTrue(response.data["data"]["receipt_no"].startswith("CEN-"))

    def test_cheque_requires_number(self):
        self.client.force_authenticate(user=self.clerk)
        response = self.client.post(
            "/api/v1/receipts/",
            self.payload(payment_mode="Cheque", cheque_details={"bank_name": "SBI"}),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("cheque_details", response.data["errors"])

    def test_cheque_details_are_nested(self):
        self.client.force_authenticate(user=self.clerk)
        response = self.client.post(
            "/api/v1/receipts/",
            self.payload(
                payment_mode="Cheque",
                cheque_details={"cheque_no": "004512", "bank_name": "SBI"},
            ),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["cheque_details"]["cheque_no"], "004512")
        receipt = Receipt.objects.get(identity=response.data["data"]["identity"])
        self.assertEqual(receipt.cheque_bank_name, "SBI")

    def test_online_payment_requires_reference(self):
        self.client.force_authenticate(user=self.clerk)
        response = self.client.post(
            "/api/v1/receipts/", self.payload(payment_mode="Online"), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_lookup_by_receipt_number(self):
        receipt = Receipt.objects.create(
            branch=self.branch, member=self.member, receipt_amount=Decimal("100.00")
        )
        self.client.force_authenticate(user=self.clerk)
        response = self.client.get(f"/api/v1/receipts/{receipt.receipt_no}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["identity"], receipt.identity)

    def test_update_cannot_change_amount(self):
        receipt = Receipt.objects.create(
            branch=self.branch, member=self.member, receipt_amount=Decimal("100.00")
        )
        self.client.force_authenticate(user=self.clerk)
        response = self.client.patch(
            f"/api/v1/receipts/{receipt.identity}/",
            {"receipt_amount": "9999.00", "remarks": "Counter 2"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        receipt.refresh_from_db()
        self.assertEqual(receipt.receipt_amount, Decimal("100.00"))
        self.assertEqual(receipt.remarks, "Counter 2")

    def test_manager_cancels_once(self):
        receipt = Receipt.objects.create(
            branch=self.branch, member=self.member, receipt_amount=Decimal("100.00")
        )
        self.client.force_authenticate(user=self.manager)
        url = f"/api/v1/receipts/{receipt.identity}/cancel/"
        response = self.client.post(url, {"reason": "Duplicate"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["status"], "Cancelled")

        again = self.client.post(url, format="json")
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(again.data["message"], "Receipt is already cancelled")

    def test_employee_cannot_cancel(self):
        receipt = Receipt.objects.create(
            branch=self.branch, member=self.member, receipt_amount=Decimal("100.00")
        )
        self.client.force_authenticate(user=self.clerk)
        response = self.client.post(f"/api/v1/receipts/{receipt.identity}/cancel/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_stats_exclude_cancelled_amounts(self):
        Receipt.objects.create(
            branch=self.branch, member=self.member, receipt_amount=Decimal("100.00")
        )
        Receipt.objects.create(
            branch=self.branch,
            member=self.member,
            receipt_amount=Decimal("50.00"),
            status="Cancelled",
        )
        self.client.force_authenticate(user=self.clerk)
        response = self.client.get("/api/v1/receipts/stats/")
        totals = response.data["data"]["totals"]
        self.assertEqual(totals["count"], 2)
        self.assertEqual(totals["cancelled"], 1)
        self.assertEqual(totals["total_amount"], Decimal("100.00"))
