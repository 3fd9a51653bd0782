from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.test import SimpleTestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.testing import (
    create_branch,
    create_employee,
    create_member,
    create_scheme,
    create_group,
)
from groups.utils import add_group_member
from members.models import Member
from members.utils import calculate_age


class CalculateAgeTests(SimpleTestCase):
    def test_age_counts_completed_years(self):
        self.assertEqual(calculate_age(date(1990, 6, 15), today=date(2024, 6, 14)), 33)
        self.assertEqual(calculate_age(date(1990, 6, 15), today=date(2024, 6, 15)), 34)

    def test_missing_dob(self):
        self.assertIsNone(calculate_age(None))


class MemberTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.employee = create_employee(self.branch, role="Employee")
        self.manager = create_employee(self.branch, role="Manager")
        self.client.force_authenticate(user=self.employee)

    def payload(self, **overrides):
        data = {
            "branch": self.branch.identity,
            "mem_name": "Lakshmi Devi",
            "gender": "Female",
            "dob": str(timezone.localdate() - relativedelta(years=40)),
            "address": "4 Temple Street",
            "pincode": "600001",
            "mobile": "9845012345",
            "uid": "AADHAAR0001",
            "nominee_name": "Suresh",
            "nominee_relation": "Son",
        }
        data.update(overrides)
        return data

    def test_register_member_derives_age(self):
        response = self.client.post("/api/v1/members/", self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data["data"]
        self.assertEqual(data["identity"], "MEM001")
        self.assertEqual(data["age"], 40)
        self.assertEqual(data["registered_by"], self.employee.identity)

    def test_duplicate_mobile_is_rejected(self):
        create_member(self.branch, mobile="9845012345")
        response = self.client.post("/api/v1/members/", self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["message"],
            "Member with this mobile or phone number already exists",
        )

    def test_duplicate_uid_is_rejected(self):
        create_member(self.branch, uid="AADHAAR0001")
        response = self.client.post("/api/v1/members/", self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("uid", response.data["errors"])

    def test_unknown_branch_is_rejected(self):
        response = self.client.post(
            "/api/v1/members/", self.payload(branch="BRN404"), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "branch: Branch not found")

    def test_lookup_by_uid(self):
        member = create_member(self.branch, uid="UIDLOOKUP1")
        response = self.client.get("/api/v1/members/UIDLOOKUP1/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["identity"], member.identity)

    def test_status_toggle(self):
        member = create_member(self.branch)
        response = self.client.patch(f"/api/v1/members/{member.identity}/status/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        member.refresh_from_db()
        self.assertFalse(member.active)

    def test_member_in_active_group_cannot_be_deleted(self):
        scheme = create_scheme(min_members=1, max_members=5, duration_months=5, installment_amount=Decimal("20000.00"))
        group = create_group(self.branch, scheme)
        member = create_member(self.branch)
        add_group_member(group, member, 1)
        group.refresh_from_db()
        self.assertEqual(group.status, "Active")

        self.client.force_authenticate(user=self.manager)
        response = self.client.delete(f"/api/v1/members/{member.identity}/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Member.objects.filter(pk=member.pk).exists())

    def test_member_without_groups_is_deleted(self):
        member = create_member(self.branch)
        self.client.force_authenticate(user=self.manager)
        response = self.client.delete(f"/api/v1/members/{member.identity}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Member.objects.filter(pk=member.pk).exists())

    def test_stats_by_branch(self):
        create_member(self.branch)
        create_member(self.branch, active=False)
        response = self.client.get("/api/v1/members/stats/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["total"], 2)
        self.assertEqual(response.data["data"]["inactive"], 1)
