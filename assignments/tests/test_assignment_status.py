from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from assignments.models import OrderAssignment
from common.testing import create_admin, create_custom_order, create_tailor, create_user


class AssignmentStatusTests(APITestCase):
    def setUp(self):
        self.admin, self.admin_token = create_admin()
        self.cust, _ = create_user("cust")
        self.t1_user, self.t1_token, self.t1 = create_tailor("tailor1")
        self.t2_user, self.t2_token, self.t2 = create_tailor("tailor2")
        self.order = create_custom_order(self.cust, status="assigned", tailor=self.t1)
        self.assignment = OrderAssignment.objects.create(
            order_source="CustomOrder", order_id=self.order.id, tailor=self.t1
        )
        self.url = reverse("assignment-status", args=[self.assignment.id])

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def test_tailor_accepts_and_order_follows(self):
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "accepted"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["status"], "accepted")
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "accepted")
        self.assertEqual(self.order.assigned_tailor_id, self.t1.id)

    def test_reject_returns_order_to_pool(self):
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "rejected"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "pending")
        self.assertIsNone(self.order.assigned_tailor_id)

    def test_other_tailor_forbidden(self):
        self.auth(self.t2_token)
        res = self.client.patch(self.url, {"status": "accepted"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_tailor_cannot_set_unassigned(self):
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "unassigned"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_can_unassign(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "unassigned"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertIsNone(self.order.assigned_tailor_id)

    def test_admin_limited_to_status_domain(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "delivered"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_extra_fields_400(self):
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "accepted", "tailorId": self.t2.id}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_assignment_404(self):
        self.auth(self.t1_token)
        res = self.client.patch(reverse("assignment-status", args=[999999]), {"status": "accepted"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_tailor_status_skipping_ahead_leaves_order_status(self):
        self.order.status = "accepted"
        self.order.save()
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "completed"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["status"], "completed")
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "accepted")
        self.assertEqual(self.order.assigned_tailor_id, self.t1.id)

    def test_tailor_status_following_table_moves_order(self):
        self.order.status = "accepted"
        self.order.save()
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "in_progress"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "in_progress")

    def test_delivered_order_never_regresses(self):
        self.order.status = "delivered"
        self.order.save()
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "assigned"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "delivered")

        res = self.client.patch(self.url, {"status": "rejected"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "delivered")
        self.assertEqual(self.order.assigned_tailor_id, self.t1.id)

    def test_admin_cannot_reopen_delivered_order(self):
        self.order.status = "delivered"
        self.order.save()
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "in_progress"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "delivered")
