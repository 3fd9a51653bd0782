from datetime import timedelta
from decimal import Decimal

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.testing import (
    create_branch,
    create_employee,
    create_member,
    create_scheme,
    create_group,
    create_transaction,
)
from transactions.models import Transaction


def year_prefix(offset=0):
    return f"TXN{(timezone.now().year + offset) % 100:02d}"


class TransactionIdentityTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")

    def test_identity_carries_year(self):
        first = create_transaction(self.branch, transaction_type="Commission")
        second = create_transaction(self.branch, transaction_type="Commission")
        self.assertEqual(first.identity, f"{year_prefix()}001")
        self.assertEqual(second.identity, f"{year_prefix()}002")

    def test_counter_restarts_in_new_year(self):
        create_transaction(
            self.branch, transaction_type="Commission", identity=f"{year_prefix(-1)}007"
        )
        txn = create_transaction(self.branch, transaction_type="Commission")
        self.assertEqual(txn.identity, f"{year_prefix()}001")


class TransactionApiTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.employee = create_employee(self.branch, role="Employee")
        self.manager = create_employee(self.branch, role="Manager")
        self.member = create_member(self.branch)
        self.group = create_group(self.branch, create_scheme())
        self.client.force_authenticate(user=self.employee)

    def post(self, **data):
        payload = {"branch": self.branch.identity, "amount": "500.00"}
        payload.update(data)
        return self.client.post("/api/v1/transactions/", payload, format="json")

    def test_deposit_is_recorded(self):
        response = self.post(transaction_type="Deposit", member=self.member.identity)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data["data"]
        self.assertEqual(data["status"], "Completed")
        self.assertEqual(data["recorded_by"], self.employee.identity)

    def test_deposit_without_member_is_rejected(self):
        response = self.post(transaction_type="Deposit")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["message"], "member: Member is required for Deposit transactions"
        )
        self.assertFalse(Transaction.objects.exists())

    def test_commission_without_member_is_accepted(self):
        response = self.post(transaction_type="Commission")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_installment_requires_group(self):
        response = self.post(transaction_type="Installment", member=self.member.identity)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("group", response.data["errors"])

    def test_other_requires_description(self):
        response = self.post(transaction_type="Other")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("description", response.data["errors"])

    def test_non_cash_requires_reference(self):
        response = self.post(
            transaction_type="Deposit", member=self.member.identity, payment_mode="Online"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("reference_id", response.data["errors"])

    def test_future_date_is_rejected(self):
        response = self.post(
            transaction_type="Deposit",
            member=self.member.identity,
            transaction_date=(timezone.now() + timedelta(days=2)).isoformat(),
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("transaction_date", response.data["errors"])

    def test_non_positive_amount_is_rejected(self):
        response = self.post(
            transaction_type="Deposit", member=self.member.identity, amount="-5.00"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("amount", response.data["errors"])

    def test_reverse_transaction(self):
        original = create_transaction(
            self.branch,
            member=self.member,
            amount=Decimal("750.00"),
            transaction_date=timezone.now() - timedelta(days=40),
        )
        self.client.force_authenticate(user=self.manager)
        response = self.client.post(f"/api/v1/transactions/{original.identity}/reverse/")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        original.refresh_from_db()
        reversal = Transaction.objects.get(identity=response.data["data"]["reversal"]["identity"])
        self.assertEqual(original.status, "Reversed")
        self.assertEqual(original.related_transaction, reversal)
        self.assertEqual(reversal.related_transaction, original)
        self.assertEqual(reversal.amount, Decimal("-750.00"))
        self.assertEqual(reversal.status, "Completed")
        self.assertEqual(reversal.description, f"Reversal of {original.identity}")
        self.assertEqual(reversal.transaction_date, original.transaction_date)

    def test_reversing_twice_is_rejected(self):
        original = create_transaction(self.branch, member=self.member)
        self.client.force_authenticate(user=self.manager)
        self.client.post(f"/api/v1/transactions/{original.identity}/reverse/")
        response = self.client.post(f"/api/v1/transactions/{original.identity}/reverse/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Transaction.objects.count(), 2)

    def test_employee_cannot_reverse(self):
        original = create_transaction(self.branch, member=self.member)
        response = self.client.post(f"/api/v1/transactions/{original.identity}/reverse/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_cannot_mark_reversed_without_link(self):
        txn = create_transaction(self.branch, member=self.member)
        response = self.client.patch(
            f"/api/v1/transactions/{txn.identity}/", {"status": "Reversed"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("related_transaction", response.data["errors"])

    def test_update_ignores_amount(self):
        txn = create_transaction(self.branch, member=self.member, amount=Decimal("100.00"))
        response = self.client.patch(
            f"/api/v1/transactions/{txn.identity}/",
            {"amount": "900.00", "description": "Counter deposit"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        txn.refresh_from_db()
        self.assertEqual(txn.amount, Decimal("100.00"))
        self.assertEqual(txn.description, "Counter deposit")

    def test_summary_by_type(self):
        create_transaction(self.branch, member=self.member, amount=Decimal("100.00"))
        create_transaction(self.branch, member=self.member, amount=Decimal("300.00"))
        create_transaction(self.branch, transaction_type="Commission", amount=Decimal("50.00"))
        response = self.client.get("/api/v1/transactions/summary/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        by_type = {row["transaction_type"]: row for row in response.data["data"]["by_type"]}
        self.assertEqual(by_type["Deposit"]["count"], 2)
        self.assertEqual(by_type["Deposit"]["total_amount"], Decimal("400.00"))
        self.assertEqual(response.data["data"]["overall"]["count"], 3)

    def test_member_summary(self):
        create_transaction(self.branch, member=self.member, amount=Decimal("100.00"))
        response = self.client.get(f"/api/v1/members/{self.member.identity}/transactions/summary/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["member"], self.member.identity)
        self.assertEqual(response.data["data"]["overall"]["count"], 1)
