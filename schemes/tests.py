from decimal import Decimal

from rest_framework import status
from rest_framework.test import APITestCase

from accounts.testing import create_branch, create_employee, create_scheme, create_group
from schemes.models import Scheme


class SchemeTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.manager = create_employee(self.branch, role="Manager")
        self.clerk = create_employee(self.branch, role="Employee")
        self.client.force_authenticate(user=self.manager)

    def payload(self, **overrides):
        data = {
            "scheme_name": "Silver 50K",
            "chit_amount": "50000.00",
            "duration_months": 20,
            "installment_amount": "2500.00",
            "commission_rate": "5.00",
            "min_members": 10,
            "max_members": 20,
            "auction_frequency": "Monthly",
        }
        data.update(overrides)
        return data

    def test_create_scheme(self):
        response = self.client.post("/api/v1/schemes/", self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data["data"]
        self.assertEqual(data["identity"], "SCH001")
        self.assertEqual(data["total_commission"], "2500.00")
        self.assertEqual(data["net_payout"], "47500.00")
        self.assertEqual(data["late_fee_rate"], "0.0200")
        self.assertEqual(data["created_by"], self.manager.identity)

    def test_installment_must_match_chit_over_duration(self):
        response = self.client.post(
            "/api/v1/schemes/", self.payload(installment_amount="3000.00"), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("installment_amount", response.data["errors"])

    def test_min_members_must_be_below_max(self):
        response = self.client.post(
            "/api/v1/schemes/", self.payload(min_members=20, max_members=20), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("min_members", response.data["errors"])

    def test_employee_cannot_create_scheme(self):
        self.client.force_authenticate(user=self.clerk)
        response = self.client.post("/api/v1/schemes/", self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_status_toggle(self):
        scheme = create_scheme()
        response = self.client.patch(f"/api/v1/schemes/{scheme.identity}/status/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        scheme.refresh_from_db()
        self.assertFalse(scheme.enabled)

    def test_scheme_in_use_cannot_be_deleted(self):
        scheme = create_scheme()
        create_group(self.branch, scheme)
        response = self.client.delete(f"/api/v1/schemes/{scheme.identity}/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Scheme.objects.filter(pk=scheme.pk).exists())

    def test_filter_enabled(self):
        create_scheme(scheme_name="Open")
        create_scheme(scheme_name="Closed", enabled=False)
        response = self.client.get("/api/v1/schemes/", {"enabled": "true"})
        self.assertEqual([row["scheme_name"] for row in response.data["data"]], ["Open"])

    def test_commission_properties(self):
        scheme = create_scheme(chit_amount=Decimal("100000.00"), commission_rate=Decimal("4.00"))
        self.assertEqual(scheme.total_commission, Decimal("4000.00"))
        self.assertEqual(scheme.net_payout, Decimal("96000.00"))
