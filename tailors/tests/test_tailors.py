from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from assignments.models import OrderAssignment
from common.testing import create_admin, create_cloth_design, create_custom_order, create_tailor, create_user
from profiles.models import Profile
from tailors.models import Tailor
from tailors.services import active_order_count


class TailorRegisterTests(APITestCase):
    def setUp(self):
        self.url = reverse("tailor-register")
        self.user, self.token = create_user("newtailor", Profile.Type.APPLICANT)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.token.key}")

    def test_register_then_update(self):
        payload = {"name": "Ada Stitch", "skills": ["suits", "alterations"], "payoutEmail": "ada@pay.example.com"}
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        data = res.data["data"]
        self.assertEqual(data["userId"], self.user.id)
        self.assertEqual(data["skills"], ["suits", "alterations"])
        self.assertTrue(data["isActive"])

        res = self.client.post(self.url, {"name": "Ada S."}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["name"], "Ada S.")
        self.assertEqual(Tailor.objects.filter(user=self.user).count(), 1)

    def test_register_requires_name(self):
        res = self.client.post(self.url, {"skills": []}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", res.data["errors"])

    def test_reregister_reactivates(self):
        Tailor.objects.create(user=self.user, name="Old", is_active=False)
        res = self.client.post(self.url, {"name": "Back"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["data"]["isActive"])


class TailorProfileTests(APITestCase):
    def setUp(self):
        self.admin, self.admin_token = create_admin()
        self.cust, self.cust_token = create_user("cust")
        self.t_user, self.t_token, self.tailor = create_tailor("tailor1")

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")

    def test_me_without_profile_404(self):
        self.auth(self.cust_token)
        res = self.client.get(reverse("tailor-me"))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_me_includes_workload(self):
        create_custom_order(self.cust, status="assigned", tailor=self.tailor)
        create_custom_order(self.cust, status="delivered", tailor=self.tailor)
        self.auth(self.t_token)
        res = self.client.get(reverse("tailor-me"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["activeOrderCount"], 1)
        self.assertFalse(res.data["data"]["busy"])

    @override_settings(TAILOR_BUSY_THRESHOLD=1)
    def test_busy_above_threshold(self):
        create_custom_order(self.cust, status="accepted", tailor=self.tailor)
        design = create_cloth_design(self.cust)
        OrderAssignment.objects.create(
            order_source="ClothCustomizer", order_id=design.id, tailor=self.tailor, status="in_progress"
        )
        self.auth(self.admin_token)
        res = self.client.get(reverse("tailor-list"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        entry = res.data["data"][0]
        self.assertEqual(entry["activeOrderCount"], 2)
        self.assertTrue(entry["busy"])

    def test_order_counted_once_when_mirrored_and_assigned(self):
        order = create_custom_order(self.cust, status="assigned", tailor=self.tailor)
        OrderAssignment.objects.create(order_source="CustomOrder", order_id=order.id, tailor=self.tailor)
        self.assertEqual(active_order_count(self.tailor), 1)

    def test_rejected_assignment_not_counted(self):
        order = create_custom_order(self.cust, status="assigned", tailor=self.tailor)
        assignment = OrderAssignment.objects.create(
            order_source="CustomOrder", order_id=order.id, tailor=self.tailor
        )
        self.auth(self.t_token)
        res = self.client.patch(
            reverse("assignment-status", args=[assignment.id]), {"status": "rejected"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        order.refresh_from_db()
        self.assertEqual(order.status, "pending")
        self.assertEqual(active_order_count(self.tailor), 0)

    def test_list_admin_only(self):
        self.auth(self.t_token)
        res = self.client.get(reverse("tailor-list"))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_deactivates_tailor(self):
        self.auth(self.admin_token)
        url = reverse("tailor-detail", args=[self.tailor.id])
        res = self.client.patch(url, {"isActive": False}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(res.data["data"]["isActive"])
        self.tailor.refresh_from_db()
        self.assertFalse(self.tailor.is_active)

    def test_patch_without_fields_400(self):
        self.auth(self.admin_token)
        res = self.client.patch(reverse("tailor-detail", args=[self.tailor.id]), {}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_patch_unknown_tailor_404(self):
        self.auth(self.admin_token)
        res = self.client.patch(reverse("tailor-detail", args=[999999]), {"name": "x"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)


class TailorSyncTests(APITestCase):
    def setUp(self):
        self.admin, self.admin_token = create_admin()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.admin_token.key}")

    def test_sync_creates_missing_and_reactivates(self):
        create_user("fresh", Profile.Type.TAILOR)
        _, _, dormant = create_tailor("dormant", is_active=False)
        create_user("customer")

        res = self.client.post(reverse("tailor-sync"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"], {"created": 1, "updated": 1, "total": 2})
        dormant.refresh_from_db()
        self.assertTrue(dormant.is_active)
        self.assertTrue(Tailor.objects.filter(user__username="fresh").exists())

        res = self.client.post(reverse("tailor-sync"))
        self.assertEqual(res.data["data"], {"created": 0, "updated": 0, "total": 2})
