from datetime import datetime
from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.testing import (
    create_branch,
    create_employee,
    create_member,
    create_transaction,
)
from ledgers.models import LedgerEntry
from ledgers.utils import chain_mismatches, member_statement


def aware(year, month, day):
    return timezone.make_aware(datetime(year, month, day, 12, 0))


class LedgerBalanceTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.member = create_member(self.branch)
        self.transaction = create_transaction(self.branch, member=self.member)

    def add_entry(self, credit="0.00", debit="0.00", member=None, **kwargs):
        return LedgerEntry.objects.create(
            branch=self.branch,
            member=member or self.member,
            transaction=self.transaction,
            credit=Decimal(credit),
            debit=Decimal(debit),
            **kwargs,
        )

    def test_balance_chains_per_member(self):
        first = self.add_entry(credit="100.00")
        second = self.add_entry(debit="50.00")
        self.assertEqual(first.balance, Decimal("100.00"))
        self.assertEqual(second.balance, Decimal("50.00"))

        other = create_member(self.branch)
        self.assertEqual(self.add_entry(credit="10.00", member=other).balance, Decimal("10.00"))

    def test_balance_is_not_recomputed_on_update(self):
        entry = self.add_entry(credit="100.00")
        entry.description = "Opening deposit"
        entry.save()
        entry.refresh_from_db()
        self.assertEqual(entry.balance, Decimal("100.00"))

    def test_statement_opening_and_closing_balance(self):
        self.add_entry(credit="1000.00", date=aware(2024, 1, 10))
        self.add_entry(debit="300.00", date=aware(2024, 2, 10))
        self.add_entry(credit="200.00", date=aware(2024, 3, 10))

        statement = member_statement(self.member, start_date=datetime(2024, 2, 1).date())
        self.assertEqual(len(statement["entries"]), 2)
        self.assertEqual(statement["opening_balance"], Decimal("1000.00"))
        self.assertEqual(statement["closing_balance"], Decimal("900.00"))

    def test_backdated_entry_chains_in_creation_order(self):
        march = self.add_entry(credit="1000.00", date=aware(2024, 3, 10))
        january = self.add_entry(debit="300.00", date=aware(2024, 1, 10))
        self.assertEqual(january.balance, Decimal("700.00"))

        statement = member_statement(self.member)
        self.assertEqual(statement["entries"], [january, march])
        self.assertEqual(statement["opening_balance"], Decimal("1000.00"))
        self.assertEqual(statement["closing_balance"], Decimal("1000.00"))

    def test_same_instant_entries_chain_off_highest_identity(self):
        self.add_entry(credit="100.00", identity="LGR999")
        self.add_entry(credit="50.00", identity="LGR1000")
        LedgerEntry.objects.filter(member=self.member).update(created_at=aware(2024, 1, 10))

        latest = self.add_entry(debit="20.00")
        self.assertEqual(latest.identity, "LGR1001")
        self.assertEqual(latest.balance, Decimal("130.00"))
        self.assertEqual(chain_mismatches(self.member), [])

    def test_empty_statement(self):
        statement = member_statement(self.member)
        self.assertEqual(statement["entries"], [])
        self.assertEqual(statement["closing_balance"], Decimal("0.00"))

    def test_chain_check_reports_tampered_balance(self):
        self.add_entry(credit="100.00")
        tampered = self.add_entry(credit="100.00")
        LedgerEntry.objects.filter(pk=tampered.pk).update(balance=Decimal("500.00"))

        mismatches = chain_mismatches(self.member)
        self.assertEqual(len(mismatches), 1)
        self.assertEqual(mismatches[0][1], Decimal("200.00"))

        out = StringIO()
        call_command("check_ledger_balances", stdout=out)
        self.assertIn("Found 1 mismatched ledger entries", out.getvalue())

    def test_chain_check_passes_for_clean_ledger(self):
        self.add_entry(credit="100.00")
        out = StringIO()
        call_command("check_ledger_balances", stdout=out)
        self.assertIn("All ledger balances are consistent", out.getvalue())


class LedgerApiTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.employee = create_employee(self.branch, role="Employee")
        self.member = create_member(self.branch)
        self.transaction = create_transaction(self.branch, member=self.member)
        self.client.force_authenticate(user=self.employee)

    def payload(self, **overrides):
        data = {
            "branch": self.branch.identity,
            "member": self.member.identity,
            "transaction": self.transaction.identity,
        }
        data.update(overrides)
        return data

    def test_create_entry_computes_balance(self):
        response = self.client.post(
            "/api/v1/ledgers/", self.payload(credit="750.00"), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["balance"], "750.00")

    def test_entry_needs_an_amount(self):
        response = self.client.post("/api/v1/ledgers/", self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["message"], "Either debit or credit must be greater than 0"
        )

    def test_balance_cannot_be_written(self):
        response = self.client.post(
            "/api/v1/ledgers/",
            self.payload(credit="100.00", balance="99999.00"),
            format="json",
        )
        self.assertEqual(response.data["data"]["balance"], "100.00")

    def test_member_statement_endpoint(self):
        self.client.post("/api/v1/ledgers/", self.payload(credit="500.00"), format="json")
        self.client.post("/api/v1/ledgers/", self.payload(debit="120.00"), format="json")

        response = self.client.get(f"/api/v1/members/{self.member.identity}/ledger/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)
        self.assertEqual(response.data["data"]["opening_balance"], "0.00")
        self.assertEqual(response.data["data"]["closing_balance"], "380.00")

    def test_statement_for_unknown_member(self):
        response = self.client.get("/api/v1/members/MEM999/ledger/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_amount_filter_uses_requested_side(self):
        self.client.post("/api/v1/ledgers/", self.payload(credit="500.00"), format="json")
        self.client.post("/api/v1/ledgers/", self.payload(debit="120.00"), format="json")

        response = self.client.get(
            "/api/v1/ledgers/", {"amount_type": "debit", "min_amount": "100"}
        )
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["data"][0]["debit"], "120.00")
