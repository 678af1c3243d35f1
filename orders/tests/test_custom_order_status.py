from unittest import mock

from django.test import SimpleTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from common.exceptions import InvalidTransition
from common.testing import create_admin, create_custom_order, create_tailor, create_user
from orders import services
from orders.transitions import allowed_next, can_transition


class TransitionTableTests(SimpleTestCase):
    def test_linear_workflow(self):
        self.assertTrue(can_transition("pending", "assigned"))
        self.assertTrue(can_transition("assigned", "accepted"))
        self.assertTrue(can_transition("accepted", "in_progress"))
        self.assertTrue(can_transition("in_progress", "completed"))
        self.assertTrue(can_transition("completed", "delivered"))

    def test_skips_and_terminal_states_rejected(self):
        self.assertFalse(can_transition("accepted", "completed"))
        self.assertFalse(can_transition("assigned", "in_progress"))
        self.assertEqual(allowed_next("delivered"), ())
        self.assertEqual(allowed_next("cancelled"), ())


class CustomOrderStatusPatchTests(APITestCase):
    def setUp(self):
        self.admin, self.admin_token = create_admin()
        self.cust, self.cust_token = create_user("cust")
        self.t1_user, self.t1_token, self.t1 = create_tailor("tailor1")
        self.t2_user, self.t2_token, self.t2 = create_tailor("tailor2")
        self.order = create_custom_order(self.cust, status="assigned", tailor=self.t1)
        self.url = reverse("custom-order-status", args=[self.order.id])

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def test_assigned_tailor_follows_workflow(self):
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "accepted"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["status"], "accepted")
        res = self.client.patch(self.url, {"status": "in_progress"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "in_progress")

    def test_skipping_accepted_is_invalid_transition(self):
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "in_progress"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["code"], "invalid_transition")
        self.assertEqual(res.data["message"], "Invalid status transition from assigned to in_progress")
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "assigned")

    def test_accepted_cannot_jump_to_completed(self):
        self.order.status = "accepted"
        self.order.save(update_fields=["status"])
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "completed"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        res = self.client.patch(self.url, {"status": "in_progress"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_other_tailor_forbidden(self):
        self.auth(self.t2_token)
        for target in ("accepted", "in_progress", "cancelled"):
            res = self.client.patch(self.url, {"status": target}, format="json")
            self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "assigned")

    def test_other_tailor_with_unknown_status_forbidden(self):
        self.auth(self.t2_token)
        res = self.client.patch(self.url, {"status": "shipped"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_assigned_tailor_unknown_status_400(self):
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "shipped"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_customer_forbidden(self):
        self.auth(self.cust_token)
        res = self.client.patch(self.url, {"status": "accepted"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_bypasses_transition_table(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "delivered"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["status"], "delivered")

    def test_admin_still_limited_to_status_domain(self):
        self.auth(self.admin_token)
        res = self.client.patch(self.url, {"status": "shipped"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_extra_fields_cause_400(self):
        self.auth(self.t1_token)
        res = self.client.patch(self.url, {"status": "accepted", "price": "1.00"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_not_found_404(self):
        self.auth(self.t1_token)
        res = self.client.patch(
            reverse("custom-order-status", args=[999999]), {"status": "accepted"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_unauthenticated_401(self):
        res = self.client.patch(self.url, {"status": "accepted"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)


class ConditionalStatusWriteTests(APITestCase):
    def setUp(self):
        self.cust, _ = create_user("cust")
        self.t_user, _, self.tailor = create_tailor("tailor1")
        self.order = create_custom_order(self.cust, status="assigned", tailor=self.tailor)

    def test_concurrent_transition_from_same_state_loses(self):
        stale = services.get_custom_order(self.order.id)
        services.update_status(self.order.id, "accepted", self.t_user)
        with mock.patch("orders.services.get_custom_order", return_value=stale):
            with self.assertRaises(InvalidTransition):
                services.update_status(self.order.id, "accepted", self.t_user)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, "accepted")
