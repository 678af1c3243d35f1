from unittest import mock

from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from assignments.models import OrderAssignment
from common.testing import create_admin, create_cloth_design, create_custom_order, create_tailor, create_user


class AssignTests(APITestCase):
    def setUp(self):
        self.url = reverse("assignment-assign")
        self.admin, self.admin_token = create_admin()
        self.cust, self.cust_token = create_user("cust")
        self.t1_user, self.t1_token, self.t1 = create_tailor("tailor1")
        self.t2_user, self.t2_token, self.t2 = create_tailor("tailor2")
        self.order = create_custom_order(self.cust)

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def assign(self, tailor, source="CustomOrder", order_id=None):
        payload = {"orderSource": source, "orderId": order_id or self.order.id, "tailorId": tailor.id}
        return self.client.post(self.url, payload, format="json")

    def test_assign_mirrors_onto_custom_order(self):
        self.auth(self.admin_token)
        res = self.assign(self.t1)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["message"], "Order assigned")
        self.assertEqual(res.data["data"]["status"], "assigned")
        self.assertEqual(res.data["data"]["tailorId"], self.t1.id)
        self.assertTrue(res.data["data"]["mirrored"])

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "assigned")
        self.assertEqual(self.order.assigned_tailor_id, self.t1.id)
        self.assertIsNotNone(self.order.assigned_at)

    def test_reassign_overwrites_binding(self):
        self.auth(self.admin_token)
        self.assign(self.t1)
        res = self.assign(self.t2)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(OrderAssignment.objects.count(), 1)
        self.order.refresh_from_db()
        self.assertEqual(self.order.assigned_tailor_id, self.t2.id)

    def test_inactive_tailor_rejected(self):
        self.t1.is_active = False
        self.t1.save(update_fields=["is_active"])
        self.auth(self.admin_token)
        res = self.assign(self.t1)
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("tailorId", res.data["errors"])
        self.assertFalse(OrderAssignment.objects.exists())
        self.order.refresh_from_db()
        self.assertIsNone(self.order.assigned_tailor_id)

    def test_cloth_customizer_is_not_mirrored(self):
        design = create_cloth_design(self.cust)
        self.auth(self.admin_token)
        res = self.assign(self.t1, source="ClothCustomizer", order_id=design.id)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(res.data["data"]["mirrored"])
        self.assertEqual(OrderAssignment.objects.get().order_source, "ClothCustomizer")

    def test_unknown_order_404(self):
        self.auth(self.admin_token)
        res = self.assign(self.t1, order_id=999999)
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_invalid_source_400(self):
        self.auth(self.admin_token)
        res = self.assign(self.t1, source="Invoice")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_admin_403(self):
        self.auth(self.t1_token)
        res = self.assign(self.t1)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(OrderAssignment.objects.exists())

    def test_mirror_failure_keeps_assignment(self):
        self.auth(self.admin_token)
        with mock.patch("assignments.services.sync_order_mirror", side_effect=DatabaseError("down")):
            res = self.assign(self.t1)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(res.data["data"]["mirrored"])
        self.assertTrue(OrderAssignment.objects.filter(order_id=self.order.id).exists())

        assignment = OrderAssignment.objects.get()
        res = self.client.post(reverse("assignment-sync", args=[assignment.id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["data"]["mirrored"])
        self.order.refresh_from_db()
        self.assertEqual(self.order.assigned_tailor_id, self.t1.id)

    def test_sync_reports_dependency_failure(self):
        self.auth(self.admin_token)
        self.assign(self.t1)
        assignment = OrderAssignment.objects.get()
        with mock.patch("assignments.services.sync_order_mirror", side_effect=DatabaseError("down")):
            res = self.client.post(reverse("assignment-sync", args=[assignment.id]))
        self.assertEqual(res.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(res.data["code"], "dependency_failure")
