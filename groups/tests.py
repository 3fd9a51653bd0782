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
from groups.models import Group
from groups.utils import add_group_member, remove_group_member, advance_group_month


class GroupRuleTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.scheme = create_scheme(duration_months=10, min_members=5, max_members=10)
        self.group = create_group(self.branch, self.scheme)
        self.members = [create_member(self.branch) for _ in range(6)]

    def test_group_activates_at_minimum_members(self):
        for month, member in enumerate(self.members[:4], start=1):
            add_group_member(self.group, member, month)
        self.group.refresh_from_db()
        self.assertEqual(self.group.status, "Forming")

        add_group_member(self.group, self.members[4], 5)
        self.group.refresh_from_db()
        self.assertEqual(self.group.status, "Active")

    def test_removal_below_minimum_returns_to_forming(self):
        for month, member in enumerate(self.members[:5], start=1):
            add_group_member(self.group, member, month)
        remove_group_member(self.group, self.members[0])
        self.group.refresh_from_db()
        self.assertEqual(self.group.status, "Forming")
        self.assertEqual(self.group.members.count(), 4)

    def test_duplicate_payout_month_is_rejected(self):
        add_group_member(self.group, self.members[0], 3)
        with self.assertRaises(serializers.ValidationError):
            add_group_member(self.group, self.members[1], 3)
        self.assertEqual(self.group.members.count(), 1)

    def test_payout_month_beyond_duration_is_rejected(self):
        with self.assertRaises(serializers.ValidationError):
            add_group_member(self.group, self.members[0], 11)
        with self.assertRaises(serializers.ValidationError):
            add_group_member(self.group, self.members[0], 0)

    def test_member_appears_once(self):
        add_group_member(self.group, self.members[0], 1)
        with self.assertRaises(serializers.ValidationError):
            add_group_member(self.group, self.members[0], 2)

    def test_advance_requires_active_group(self):
        with self.assertRaises(serializers.ValidationError):
            advance_group_month(self.group)

    def test_advance_completes_at_duration(self):
        self.group.status = "Active"
        self.group.current_month = 9
        self.group.save()

        advance_group_month(self.group)
        self.assertEqual(self.group.current_month, 10)
        self.assertEqual(self.group.status, "Active")

        advance_group_month(self.group)
        self.group.refresh_from_db()
        self.assertEqual(self.group.current_month, 10)
        self.assertEqual(self.group.status, "Completed")


class GroupApiTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.manager = create_employee(self.branch, role="Manager")
        self.scheme = create_scheme(duration_months=10, min_members=2, max_members=10)
        self.members = [create_member(self.branch) for _ in range(3)]
        self.client.force_authenticate(user=self.manager)

    def test_create_group_with_initial_members(self):
        response = self.client.post(
            "/api/v1/groups/",
            {
                "branch": self.branch.identity,
                "scheme": self.scheme.identity,
                "start_date": "2024-01-01",
                "initial_members": [
                    {"member": self.members[0].identity, "payout_month": 1},
                    {"member": self.members[1].identity, "payout_month": 2},
                ],
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        group = Group.objects.get(identity=response.data["data"]["identity"])
        self.assertEqual(group.status, "Active")
        self.assertEqual(group.members.count(), 2)

    def test_initial_members_with_shared_month_are_rejected(self):
        response = self.client.post(
            "/api/v1/groups/",
            {
                "branch": self.branch.identity,
                "scheme": self.scheme.identity,
                "start_date": "2024-01-01",
                "initial_members": [
                    {"member": self.members[0].identity, "payout_month": 4},
                    {"member": self.members[1].identity, "payout_month": 4},
                ],
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Group.objects.exists())

    def test_add_member_endpoint(self):
        group = create_group(self.branch, self.scheme)
        response = self.client.post(
            f"/api/v1/groups/{group.identity}/members/",
            {"member": self.members[2].identity, "payout_month": 7},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["members"][0]["payout_month"], 7)

        duplicate = self.client.post(
            f"/api/v1/groups/{group.identity}/members/",
            {"member": self.members[1].identity, "payout_month": 7},
            format="json",
        )
        self.assertEqual(duplicate.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(duplicate.data["success"])

    def test_advance_endpoint(self):
        group = create_group(self.branch, self.scheme, status="Active")
        response = self.client.post(f"/api/v1/groups/{group.identity}/advance/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["current_month"], 2)

    def test_group_with_transactions_cannot_be_deleted(self):
        group = create_group(self.branch, self.scheme)
        add_group_member(group, self.members[0], 1)
        create_transaction(
            self.branch,
            member=self.members[0],
            group=group,
            transaction_type="Installment",
            amount=Decimal("10000.00"),
        )
        response = self.client.delete(f"/api/v1/groups/{group.identity}/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Group.objects.filter(pk=group.pk).exists())

    def test_empty_group_can_be_deleted(self):
        group = create_group(self.branch, self.scheme)
        response = self.client.delete(f"/api/v1/groups/{group.identity}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Group.objects.filter(pk=group.pk).exists())
