from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from common.testing import create_admin, create_custom_order, create_tailor, create_user
from orders.models import CustomOrder


class CustomOrderCreateTests(APITestCase):
    def setUp(self):
        self.url = reverse("custom-order-list")
        self.cust, self.cust_token = create_user("cust")

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def test_create_order_success(self):
        self.auth(self.cust_token)
        payload = {
            "config": {"clothingType": "shirt", "size": "M", "color": "navy"},
            "design": {"collar": "mandarin"},
            "measurements": {"chest": 98.5, "waist": 84},
            "price": "149.90",
        }
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["status"], "ok")
        self.assertEqual(res.data["message"], "Order created")
        data = res.data["data"]
        self.assertEqual(data["customerId"], self.cust.id)
        self.assertEqual(data["status"], "pending")
        self.assertIsNone(data["assignedTailor"])
        self.assertEqual(data["config"]["quantity"], 1)
        self.assertEqual(CustomOrder.objects.get(pk=data["id"]).customer, self.cust)

    def test_missing_config_400(self):
        self.auth(self.cust_token)
        res = self.client.post(self.url, {"design": {}}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["status"], "error")
        self.assertIn("config", res.data["errors"])

    def test_unauthenticated_401(self):
        res = self.client.post(self.url, {"config": {}}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(res.data["status"], "error")
        self.assertEqual(res.data["code"], "not_authenticated")


class CustomOrderListTests(APITestCase):
    def setUp(self):
        self.admin, self.admin_token = create_admin()
        self.cust, self.cust_token = create_user("cust")
        self.other, self.other_token = create_user("other")
        self.t_user, self.t_token, self.tailor = create_tailor("tailor1")

        self.mine = create_custom_order(self.cust)
        self.assigned = create_custom_order(self.other, status="assigned", tailor=self.tailor)

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def test_admin_lists_all_orders(self):
        self.auth(self.admin_token)
        res = self.client.get(reverse("custom-order-list"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)

    def test_admin_filters_by_status_and_tailor(self):
        self.auth(self.admin_token)
        res = self.client.get(reverse("custom-order-list"), {"status": "assigned"})
        self.assertEqual([o["id"] for o in res.data["data"]], [self.assigned.id])
        res = self.client.get(reverse("custom-order-list"), {"tailorId": self.tailor.id})
        self.assertEqual([o["id"] for o in res.data["data"]], [self.assigned.id])

    def test_customer_cannot_list_all_403(self):
        self.auth(self.cust_token)
        res = self.client.get(reverse("custom-order-list"))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_mine_returns_only_own_orders(self):
        self.auth(self.cust_token)
        res = self.client.get(reverse("custom-order-mine"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([o["id"] for o in res.data["data"]], [self.mine.id])

    def test_assigned_returns_tailor_orders(self):
        self.auth(self.t_token)
        res = self.client.get(reverse("custom-order-assigned"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([o["id"] for o in res.data["data"]], [self.assigned.id])
        self.assertEqual(res.data["data"][0]["assignedTailor"]["id"], self.tailor.id)

    def test_assigned_without_tailor_profile_403(self):
        self.auth(self.cust_token)
        res = self.client.get(reverse("custom-order-assigned"))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)


class CustomOrderDetailTests(APITestCase):
    def setUp(self):
        self.admin, self.admin_token = create_admin()
        self.cust, self.cust_token = create_user("cust")
        self.other, self.other_token = create_user("other")
        self.t_user, self.t_token, self.tailor = create_tailor("tailor1")
        self.order = create_custom_order(self.cust, status="assigned", tailor=self.tailor)
        self.url = reverse("custom-order-detail", args=[self.order.id])

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def test_owner_admin_and_tailor_can_view(self):
        for token in (self.cust_token, self.admin_token, self.t_token):
            self.auth(token)
            res = self.client.get(self.url)
            self.assertEqual(res.status_code, status.HTTP_200_OK)
            self.assertEqual(res.data["data"]["id"], self.order.id)

    def test_other_customer_403(self):
        self.auth(self.other_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_not_found_404(self):
        self.auth(self.admin_token)
        res = self.client.get(reverse("custom-order-detail", args=[999999]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["status"], "error")
