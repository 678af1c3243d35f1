from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from rest_framework.authtoken.models import Token

from inventory.models import ClothingItem
from profiles.models import Profile
from tailors.models import Tailor

DEMO_USERS = {
    Profile.Type.CUSTOMER: {"username": "demo_customer", "password": "demo1234", "email": "customer@example.com"},
    Profile.Type.TAILOR: {"username": "demo_tailor", "password": "demo1234", "email": "tailor@example.com"},
    Profile.Type.ADMIN: {"username": "demo_admin", "password": "demo1234", "email": "admin@example.com"},
}

DEMO_ITEMS = (
    {"name": "Basic Tee", "sku": "TEE-BASIC", "price": Decimal("19.99"), "stock": 50},
    {"name": "Linen Shirt", "sku": "SHIRT-LINEN", "price": Decimal("59.00"), "stock": 12},
    {"name": "Denim Jacket", "sku": "JACKET-DENIM", "price": Decimal("129.00"), "stock": 3},
)


class Command(BaseCommand):
    help = "Create or update demo users (customer, tailor, admin) and outlet stock."

    def handle(self, *args, **options):
        User = get_user_model()

        for role, cfg in DEMO_USERS.items():
            u, created = User.objects.get_or_create(
                username=cfg["username"],
                defaults={"email": cfg["email"]},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created user '{u.username}'"))
            else:
                self.stdout.write(f"User '{u.username}' already exists")

            u.set_password(cfg["password"])
            u.save(update_fields=["password"])

            prof, _ = Profile.objects.get_or_create(user=u, defaults={"type": role})
            if prof.type != role:
                prof.type = role
                prof.save(update_fields=["type"])

            if role == Profile.Type.TAILOR:
                Tailor.objects.update_or_create(
                    user=u,
                    defaults={"name": "Demo Tailor", "skills": ["shirts", "alterations"], "is_active": True},
                )

            token, _ = Token.objects.get_or_create(user=u)
            self.stdout.write(f"  -> type={role}, token={token.key}")

        for item in DEMO_ITEMS:
            ClothingItem.objects.update_or_create(sku=item["sku"], defaults=item)
        self.stdout.write(f"  -> {len(DEMO_ITEMS)} clothing items stocked")

        self.stdout.write(self.style.SUCCESS("Demo data ready."))
