from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.abstracts import next_identity
from accounts.testing import create_branch, create_employee, create_member
from members.models import Member


class SequentialIdentityTests(TestCase):
    def setUp(self):
        self.branch = create_branch("Central")

    def test_first_records_are_numbered_from_one(self):
        first = create_member(self.branch)
        second = create_member(self.branch)
        self.assertEqual(first.identity, "MEM001")
        self.assertEqual(second.identity, "MEM002")
        self.assertEqual(self.branch.identity, "BRN001")

    def test_counter_grows_past_padding(self):
        create_member(self.branch, identity="MEM999")
        self.assertEqual(create_member(self.branch).identity, "MEM1000")
        self.assertEqual(create_member(self.branch).identity, "MEM1001")

    def test_explicit_identity_is_kept(self):
        member = create_member(self.branch, identity="MEM050")
        self.assertEqual(Member.objects.get(pk=member.pk).identity, "MEM050")

    def test_next_identity(self):
        self.assertEqual(next_identity(None, "SCH"), "SCH001")
        self.assertEqual(next_identity("SCH041", "SCH"), "SCH042")
        self.assertEqual(next_identity("TXN26099", "TXN26"), "TXN26100")


class EmployeeAuthTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.admin = create_employee(self.branch, role="Admin", email="admin@example.com")

    def test_login_returns_bearer_token(self):
        response = self.client.post(
            "/api/v1/employees/login/",
            {"email": "admin@example.com", "password": "Chit@2024"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        token = response.data["data"]["token"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        profile = self.client.get("/api/v1/employees/profile/")
        self.assertEqual(profile.status_code, status.HTTP_200_OK)
        self.assertEqual(profile.data["data"]["identity"], self.admin.identity)

    def test_login_with_bad_password_is_rejected(self):
        response = self.client.post(
            "/api/v1/employees/login/",
            {"email": "admin@example.com", "password": "wrong-password"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])

    def test_inactive_employee_cannot_log_in(self):
        create_employee(
            self.branch, role="Employee", email="gone@example.com", status="Inactive"
        )
        response = self.client.post(
            "/api/v1/employees/login/",
            {"email": "gone@example.com", "password": "Chit@2024"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_requests_without_token_are_unauthorized(self):
        response = self.client.get("/api/v1/members/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])


class EmployeeManagementTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.other_branch = create_branch("Northside")
        self.admin = create_employee(self.branch, role="Admin")
        self.manager = create_employee(self.branch, role="Manager")
        self.clerk = create_employee(self.branch, role="Employee")
        self.remote_clerk = create_employee(self.other_branch, role="Employee")

    def test_admin_registers_employee(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            "/api/v1/employees/register/",
            {
                "emp_name": "Ravi Kumar",
                "gender": "Male",
                "phone": "9123456780",
                "email": "ravi@example.com",
                "password": "Secret@123",
                "role": "Employee",
                "branch": self.branch.identity,
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["data"]["identity"].startswith("EMP"))
        self.assertNotIn("password", response.data["data"])

    def test_manager_cannot_assign_admin_role(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.patch(
            f"/api/v1/employees/{self.clerk.identity}/role/", {"role": "Admin"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.clerk.refresh_from_db()
        self.assertEqual(self.clerk.role, "Employee")

    def test_manager_sees_only_own_branch(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.get("/api/v1/employees/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        identities = {row["identity"] for row in response.data["data"]}
        self.assertIn(self.clerk.identity, identities)
        self.assertNotIn(self.remote_clerk.identity, identities)
        self.assertEqual(response.data["count"], len(response.data["data"]))

    def test_employee_cannot_list_employees(self):
        self.client.force_authenticate(user=self.clerk)
        response = self.client.get("/api/v1/employees/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_cannot_delete_self(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(f"/api/v1/employees/{self.admin.identity}/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "You cannot delete your own account")

    def test_lookup_by_uuid_or_identity(self):
        self.client.force_authenticate(user=self.admin)
        by_identity = self.client.get(f"/api/v1/employees/{self.clerk.identity}/")
        by_uuid = self.client.get(f"/api/v1/employees/{self.clerk.pk}/")
        self.assertEqual(by_identity.data["data"]["id"], by_uuid.data["data"]["id"])

    def test_unknown_employee_is_not_found(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get("/api/v1/employees/EMP999/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(
            response.data, {"success": False, "message": "Employee not found"}
        )
