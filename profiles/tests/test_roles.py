from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from common.testing import create_admin, create_user
from profiles.models import Profile
from profiles.roles import is_admin, user_type

User = get_user_model()


class RoleHelperTests(TestCase):
    def test_admin_by_profile_type_or_staff_flag(self):
        admin, _ = create_admin()
        staff = User.objects.create_user("staff", "staff@example.com", "pass1234", is_staff=True)
        customer, _ = create_user("cust")
        self.assertTrue(is_admin(admin))
        self.assertTrue(is_admin(staff))
        self.assertFalse(is_admin(customer))
        self.assertFalse(is_admin(AnonymousUser()))

    def test_user_type_without_profile_is_empty(self):
        bare = User.objects.create_user("bare", "bare@example.com", "pass1234")
        self.assertEqual(user_type(bare), "")
        tailor, _ = create_user("t", Profile.Type.TAILOR)
        self.assertEqual(user_type(tailor), "tailor")
