from datetime import date, timedelta
from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import SimpleTestCase
from django.utils import timezone
from rest_framework import serializers, status
from rest_framework.test import APITestCase

from accounts.testing import (
    create_branch,
    create_employee,
    create_member,
    create_scheme,
    create_group,
)
from groups.utils import add_group_member
from installments.models import Installment
from installments.utils import (
    derive_status,
    calculate_late_fee,
    days_late,
    installment_period_label,
    schedule_due_dates,
    record_payment,
    generate_group_schedule,
)
from receipts.models import Receipt


class InstallmentRuleTests(SimpleTestCase):
    def setUp(self):
        self.now = timezone.now()

    def test_status_precedence(self):
        past = self.now - timedelta(hours=1)
        future = self.now + timedelta(days=3)
        self.assertEqual(derive_status(Decimal("400"), Decimal("600"), past, self.now), "Late")
        self.assertEqual(derive_status(Decimal("1000"), Decimal("0"), past, self.now), "Paid")
        self.assertEqual(derive_status(Decimal("1200"), Decimal("-200"), future, self.now), "Paid")
        self.assertEqual(derive_status(Decimal("400"), Decimal("600"), future, self.now), "Partial")
        self.assertEqual(derive_status(Decimal("0"), Decimal("1000"), future, self.now), "Pending")

    def test_days_late_rounds_up(self):
        self.assertEqual(days_late(self.now - timedelta(hours=36), self.now), 2)
        self.assertEqual(days_late(self.now - timedelta(days=3), self.now), 3)
        self.assertEqual(days_late(self.now + timedelta(days=1), self.now), 0)

    def test_late_fee(self):
        fee = calculate_late_fee(
            Decimal("1000.00"), Decimal("0.02"), self.now - timedelta(hours=36), self.now
        )
        self.assertEqual(fee, Decimal("40.00"))
        on_time = calculate_late_fee(
            Decimal("1000.00"), Decimal("0.02"), self.now + timedelta(hours=1), self.now
        )
        self.assertEqual(on_time, Decimal("0.00"))

    def test_period_labels(self):
        self.assertEqual(installment_period_label("Monthly", 3), "Month 3")
        self.assertEqual(installment_period_label("Weekly", 2), "Week 2")
        self.assertEqual(installment_period_label("Biweekly", 1), "Biweek 1")

    def test_monthly_schedule_steps_by_calendar_month(self):
        due_dates = schedule_due_dates(date(2024, 1, 31), "Monthly", 3)
        self.assertEqual(
            [timezone.localtime(due).date() for due in due_dates],
            [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31)],
        )


class InstallmentPaymentTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.employee = create_employee(self.branch, role="Employee")
        self.scheme = create_scheme()
        self.group = create_group(self.branch, self.scheme)
        self.member = create_member(self.branch)
        add_group_member(self.group, self.member, 1)

    def create_installment(self, due_date, amount=Decimal("1000.00")):
        return Installment.objects.create(
            group=self.group,
            member=self.member,
            scheme=self.scheme,
            due_date=due_date,
            amount=amount,
        )

    def test_numbering_and_period(self):
        first = self.create_installment(timezone.now() + timedelta(days=30))
        second = self.create_installment(timezone.now() + timedelta(days=60))
        self.assertEqual(first.installment_number, 1)
        self.assertEqual(second.installment_number, 2)
        self.assertEqual(second.installment_period, "Month 2")
        self.assertEqual(first.status, "Pending")
        self.assertEqual(first.pending_amount, Decimal("1000.00"))

    def test_full_payment_after_due_date_is_paid(self):
        installment = self.create_installment(timezone.now() - timedelta(hours=20))
        self.assertEqual(installment.status, "Late")

        installment, receipt = record_payment(
            installment, Decimal("1000.00"), "Cash", collected_by=self.employee
        )
        self.assertEqual(installment.status, "Paid")
        self.assertEqual(installment.pending_amount, Decimal("0.00"))
        self.assertEqual(installment.late_fee, Decimal("20.00"))
        self.assertEqual(receipt.receipt_amount, Decimal("1000.00"))
        self.assertEqual(receipt.remarks, "Payment for Month 1 installment")

    def test_partial_payment_before_due_date(self):
        installment = self.create_installment(timezone.now() + timedelta(days=10))
        installment, _ = record_payment(installment, Decimal("400.00"), "Cash")
        self.assertEqual(installment.status, "Partial")
        self.assertEqual(installment.pending_amount, Decimal("600.00"))
        self.assertEqual(installment.late_fee, Decimal("0.00"))

    def test_partial_payment_after_due_date_is_late(self):
        installment = self.create_installment(timezone.now() - timedelta(hours=36))
        installment, _ = record_payment(installment, Decimal("400.00"), "Cash")
        self.assertEqual(installment.status, "Late")
        self.assertEqual(installment.late_fee, Decimal("40.00"))

    def test_paid_installment_rejects_further_payment(self):
        installment = self.create_installment(timezone.now() + timedelta(days=10))
        record_payment(installment, Decimal("1000.00"), "Cash")
        with self.assertRaises(serializers.ValidationError):
            record_payment(installment, Decimal("10.00"), "Cash")
        self.assertEqual(Receipt.objects.count(), 1)

    def test_pay_endpoint(self):
        installment = self.create_installment(timezone.now() + timedelta(days=10))
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            f"/api/v1/installments/{installment.identity}/pay/",
            {"paid_amount": "1000.00", "payment_mode": "Cash"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data["data"]
        self.assertEqual(data["installment"]["status"], "Paid")
        self.assertEqual(data["installment"]["payment_progress"], Decimal("100.00"))
        year = f"{timezone.now().year % 100:02d}"
        self.assertEqual(data["receipt"]["receipt_no"], f"CEN-{year}-00001")

    def test_pay_endpoint_records_named_collector(self):
        collector = create_employee(self.branch, role="Employee")
        installment = self.create_installment(timezone.now() + timedelta(days=10))
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            f"/api/v1/installments/{installment.identity}/pay/",
            {
                "paid_amount": "1000.00",
                "payment_mode": "Cash",
                "collected_by": collector.identity,
                "receipt_remarks": "Collected at the member's shop",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data["data"]
        self.assertEqual(data["installment"]["collected_by"], collector.identity)
        self.assertEqual(data["receipt"]["received_by"], collector.identity)
        self.assertEqual(data["receipt"]["remarks"], "Collected at the member's shop")

    def test_pay_endpoint_defaults_collector_to_requester(self):
        installment = self.create_installment(timezone.now() + timedelta(days=10))
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            f"/api/v1/installments/{installment.identity}/pay/",
            {"paid_amount": "500.00", "payment_mode": "Cash", "remarks": "Part payment"},
            format="json",
        )
        data = response.data["data"]
        self.assertEqual(data["installment"]["collected_by"], self.employee.identity)
        self.assertEqual(data["receipt"]["remarks"], "Part payment")

    def test_pay_endpoint_rejects_unknown_collector(self):
        installment = self.create_installment(timezone.now() + timedelta(days=10))
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            f"/api/v1/installments/{installment.identity}/pay/",
            {"paid_amount": "500.00", "collected_by": "EMP999"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "collected_by: Employee not found")

    def test_pay_endpoint_rejects_non_positive_amount(self):
        installment = self.create_installment(timezone.now() + timedelta(days=10))
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            f"/api/v1/installments/{installment.identity}/pay/",
            {"paid_amount": "0", "payment_mode": "Cash"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_requires_group_membership(self):
        outsider = create_member(self.branch)
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            "/api/v1/installments/",
            {
                "group": self.group.identity,
                "member": outsider.identity,
                "scheme": self.scheme.identity,
                "due_date": (timezone.now() + timedelta(days=30)).isoformat(),
                "amount": "10000.00",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("member", response.data["errors"])

    def test_create_sets_collector(self):
        self.client.force_authenticate(user=self.employee)
        response = self.client.post(
            "/api/v1/installments/",
            {
                "group": self.group.identity,
                "member": self.member.identity,
                "scheme": self.scheme.identity,
                "due_date": (timezone.now() + timedelta(days=30)).isoformat(),
                "amount": "10000.00",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["collected_by"], self.employee.identity)
        self.assertEqual(response.data["data"]["installment_period"], "Month 1")

    def test_overdue_filter(self):
        self.create_installment(timezone.now() - timedelta(days=5))
        self.create_installment(timezone.now() + timedelta(days=5))
        self.client.force_authenticate(user=self.employee)
        response = self.client.get("/api/v1/installments/", {"overdue": "true"})
        self.assertEqual(response.data["count"], 1)

    def test_generate_schedule(self):
        second = create_member(self.branch)
        add_group_member(self.group, second, 2)
        created = generate_group_schedule(self.group)
        self.assertEqual(len(created), 2 * self.scheme.duration_months)
        self.assertEqual(generate_group_schedule(self.group), [])

    def test_refresh_command_marks_overdue_installments_late(self):
        installment = self.create_installment(timezone.now() + timedelta(days=1))
        Installment.objects.filter(pk=installment.pk).update(
            due_date=timezone.now() - timedelta(days=1)
        )
        out = StringIO()
        call_command("refresh_installment_statuses", stdout=out)
        installment.refresh_from_db()
        self.assertEqual(installment.status, "Late")
        self.assertIn("Marked 1 installments as Late", out.getvalue())
