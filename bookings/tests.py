from rest_framework import status
from rest_framework.test import APITestCase

from accounts.testing import (
    create_branch,
    create_employee,
    create_member,
    create_scheme,
    create_group,
)
from bookings.models import Booking
from groups.utils import add_group_member


class BookingTests(APITestCase):
    def setUp(self):
        self.branch = create_branch("Central")
        self.clerk = create_employee(self.branch, role="Employee")
        self.manager = create_employee(self.branch, role="Manager")
        self.group = create_group(self.branch, create_scheme())
        self.member = create_member(self.branch)
        add_group_member(self.group, self.member, 4)

    def book(self, preferred_month=3, member=None):
        return self.client.post(
            "/api/v1/bookings/",
            {
                "member": (member or self.member).identity,
                "group": self.group.identity,
                "preferred_month": preferred_month,
                "booking_fee": "250.00",
            },
            format="json",
        )

    def test_create_booking(self):
        self.client.force_authenticate(user=self.clerk)
        response = self.book()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["status"], "Pending")
        self.assertEqual(response.data["data"]["identity"], "BKG001")

    def test_second_open_booking_is_rejected(self):
        self.client.force_authenticate(user=self.clerk)
        self.book()
        response = self.book(preferred_month=5)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["message"],
            f"Member {self.member.identity} already has an open booking in this group",
        )

    def test_rejected_booking_frees_the_member(self):
        Booking.objects.create(
            member=self.member, group=self.group, preferred_month=2, status="Rejected"
        )
        self.client.force_authenticate(user=self.clerk)
        self.assertEqual(self.book().status_code, status.HTTP_201_CREATED)

    def test_month_beyond_duration_is_rejected(self):
        self.client.force_authenticate(user=self.clerk)
        response = self.book(preferred_month=11)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("preferred_month", response.data["errors"])

    def test_non_member_cannot_book(self):
        self.client.force_authenticate(user=self.clerk)
        response = self.book(member=create_member(self.branch))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("member", response.data["errors"])

    def test_confirm_uses_preferred_month_by_default(self):
        booking = Booking.objects.create(
            member=self.member, group=self.group, preferred_month=6
        )
        self.client.force_authenticate(user=self.manager)
        response = self.client.post(f"/api/v1/bookings/{booking.identity}/confirm/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["status"], "Confirmed")
        self.assertEqual(response.data["data"]["confirmed_month"], 6)

    def test_confirm_with_other_month_outside_duration(self):
        booking = Booking.objects.create(
            member=self.member, group=self.group, preferred_month=6
        )
        self.client.force_authenticate(user=self.manager)
        response = self.client.post(
            f"/api/v1/bookings/{booking.identity}/confirm/",
            {"confirmed_month": 12},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        booking.refresh_from_db()
        self.assertEqual(booking.status, "Pending")

    def test_only_pending_bookings_change_state(self):
        booking = Booking.objects.create(
            member=self.member, group=self.group, preferred_month=6
        )
        self.client.force_authenticate(user=self.manager)
        reject = self.client.post(f"/api/v1/bookings/{booking.identity}/reject/")
        self.assertEqual(reject.data["data"]["status"], "Rejected")

        confirm = self.client.post(f"/api/v1/bookings/{booking.identity}/confirm/")
        self.assertEqual(confirm.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            confirm.data["message"],
            "Only pending bookings can be confirmed; booking is Rejected",
        )

    def test_employee_cannot_confirm(self):
        booking = Booking.objects.create(
            member=self.member, group=self.group, preferred_month=6
        )
        self.client.force_authenticate(user=self.clerk)
        response = self.client.post(f"/api/v1/bookings/{booking.identity}/confirm/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_cannot_move_booking_to_other_group(self):
        booking = Booking.objects.create(
            member=self.member, group=self.group, preferred_month=6
        )
        other_group = create_group(self.branch, create_scheme(scheme_name="Silver"))
        self.client.force_authenticate(user=self.clerk)
        response = self.client.patch(
            f"/api/v1/bookings/{booking.identity}/",
            {"group": other_group.identity, "preferred_month": 7},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        booking.refresh_from_db()
        self.assertEqual(booking.group, self.group)
        self.assertEqual(booking.preferred_month, 7)

    def test_stats_and_member_bookings(self):
        Booking.objects.create(member=self.member, group=self.group, preferred_month=2)
        self.client.force_authenticate(user=self.clerk)
        stats = self.client.get("/api/v1/bookings/stats/")
        self.assertEqual(stats.data["data"]["totals"]["count"], 1)

        listing = self.client.get(f"/api/v1/members/{self.member.identity}/bookings/")
        self.assertEqual(listing.data["count"], 1)
