"""
Test data factories shared by the app test suites.
"""
from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.authtoken.models import Token

from profiles.models import Profile

User = get_user_model()


def create_user(username, user_type=Profile.Type.CUSTOMER, is_staff=False, password="pass1234"):
    """Create a user with a profile of ``user_type`` and return ``(user, token)``."""
    user = User.objects.create_user(username, f"{username}@example.com", password, is_staff=is_staff)
    Profile.objects.create(user=user, type=user_type)
    token = Token.objects.create(user=user)
    return user, token


def create_admin(username="admin"):
    return create_user(username, Profile.Type.ADMIN)


def create_tailor(username, name=None, is_active=True):
    """Tailor user plus Tailor record; returns ``(user, token, tailor)``."""
    from tailors.models import Tailor

    user, token = create_user(username, Profile.Type.TAILOR)
    tailor = Tailor.objects.create(
        user=user,
        name=name or username.title(),
        payout_email=f"{username}@example.com",
        is_active=is_active,
    )
    return user, token, tailor


def create_custom_order(customer, status="pending", tailor=None, **extra):
    from orders.models import CustomOrder

    return CustomOrder.objects.create(
        customer=customer,
        config={"fabric": "linen", "color": "navy", "size": "M"},
        design={"collar": "mandarin"},
        status=status,
        assigned_tailor=tailor,
        price=extra.pop("price", Decimal("120.00")),
        **extra,
    )


def create_cloth_design(user, **extra):
    from orders.models import ClothCustomizer

    values = {
        "color": "white",
        "size": "L",
        "quantity": 1,
        "total_price": Decimal("25.00"),
    }
    values.update(extra)
    return ClothCustomizer.objects.create(user=user, **values)


def create_item(name="Basic Tee", stock=10, price=Decimal("19.99")):
    from inventory.models import ClothingItem

    return ClothingItem.objects.create(name=name, stock=stock, price=price)
