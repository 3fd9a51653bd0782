from rest_framework import status
from rest_framework.test import APITestCase

from accounts.testing import create_branch, create_employee
from branches.models import Branch


class BranchTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.admin = create_employee(self.branch, role="Admin")
        self.clerk = create_employee(self.branch, role="Employee")

    def test_admin_creates_branch(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            "/api/v1/branches/", {"bname": "Lakeside", "start_date": "2024-04-01"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["identity"], "BRN002")
        self.assertEqual(response.data["data"]["code"], "LAK")

    def test_duplicate_branch_name_is_rejected(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post("/api/v1/branches/", {"bname": "Central"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
        self.assertIn("bname", response.data["errors"])

    def test_employee_has_read_only_access(self):
        self.client.force_authenticate(user=self.clerk)
        listing = self.client.get("/api/v1/branches/")
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual(listing.data["count"], 1)

        response = self.client.post("/api/v1/branches/", {"bname": "Hillview"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_deactivates_branch(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(f"/api/v1/branches/{self.branch.identity}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(Branch.objects.filter(pk=self.branch.pk).exists())
        self.branch.refresh_from_db()
        self.assertEqual(self.branch.status, "Inactive")

    def test_search_by_name(self):
        create_branch("Riverside")
        self.client.force_authenticate(user=self.clerk)
        response = self.client.get("/api/v1/branches/search/", {"q": "river"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["bname"] for row in response.data["data"]], ["Riverside"])
