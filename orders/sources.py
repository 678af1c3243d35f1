"""Order source abstraction.

One logical order, two physical tables. ``resolve_order`` loads an order by
``(source, id)`` and maps it onto a single read shape::

    {source, id, customer, config, design, price, status, createdAt, assignedTailor}

``SOURCE_CAPABILITIES`` states what each source supports so callers never
compare source strings to decide behaviour. This module never writes.
"""

from typing import NamedTuple, Optional

from .models import ClothCustomizer, CustomOrder, OrderSource


class SourceCapabilities(NamedTuple):
    model: type
    # The table has its own multi-state status column.
    has_native_status: bool
    # Assignment writes are projected onto the order row.
    mirrors_assignment: bool


SOURCE_CAPABILITIES = {
    OrderSource.CUSTOM_ORDER: SourceCapabilities(
        model=CustomOrder, has_native_status=True, mirrors_assignment=True
    ),
    OrderSource.CLOTH_CUSTOMIZER: SourceCapabilities(
        model=ClothCustomizer, has_native_status=False, mirrors_assignment=False
    ),
}


def capabilities_for(source) -> SourceCapabilities:
    """Return the capabilities of ``source``; KeyError for unknown sources."""
    return SOURCE_CAPABILITIES[OrderSource(source)]


def is_valid_source(source) -> bool:
    return source in OrderSource.values


def _customer_summary(user):
    if user is None:
        return None
    return {"id": user.id, "username": user.username, "email": user.email}


def _custom_order_view(order: CustomOrder) -> dict:
    tailor = order.assigned_tailor
    return {
        "source": OrderSource.CUSTOM_ORDER.value,
        "id": order.id,
        "customer": _customer_summary(order.customer),
        "config": order.config,
        "design": order.design,
        "price": order.price,
        "status": order.status,
        "createdAt": order.created_at,
        "assignedTailor": {"id": tailor.id, "name": tailor.name} if tailor else None,
    }


def _cloth_customizer_view(design: ClothCustomizer) -> dict:
    selected = design.selected_design or {}
    return {
        "source": OrderSource.CLOTH_CUSTOMIZER.value,
        "id": design.id,
        "customer": _customer_summary(design.user),
        "config": {
            "clothingType": design.clothing_type,
            "color": design.color,
            "size": design.size,
            "quantity": design.quantity,
        },
        "design": {
            "designImageUrl": selected.get("preview") or None,
            "selectedDesign": selected or None,
            "placedDesigns": design.placed_designs if isinstance(design.placed_designs, list) else [],
        },
        "price": design.total_price,
        # No status column: an order reachable through an assignment is "assigned".
        "status": "assigned",
        "createdAt": design.created_at,
        # The assignment record is the only binding for this source.
        "assignedTailor": None,
    }


_LOADERS = {
    OrderSource.CUSTOM_ORDER: lambda order_id: CustomOrder.objects.select_related(
        "customer", "assigned_tailor"
    ).get(pk=order_id),
    OrderSource.CLOTH_CUSTOMIZER: lambda order_id: ClothCustomizer.objects.select_related(
        "user"
    ).get(pk=order_id),
}

_VIEWS = {
    OrderSource.CUSTOM_ORDER: _custom_order_view,
    OrderSource.CLOTH_CUSTOMIZER: _cloth_customizer_view,
}


def order_exists(source, order_id) -> bool:
    if not is_valid_source(source):
        return False
    try:
        return capabilities_for(source).model.objects.filter(pk=int(order_id)).exists()
    except (TypeError, ValueError):
        return False


def resolve_order(source, order_id) -> Optional[dict]:
    """Return the normalized view of ``(source, order_id)`` or None.

    None covers unknown sources, malformed ids and deleted orders.
    """
    if not is_valid_source(source):
        return None
    source = OrderSource(source)
    try:
        obj = _LOADERS[source](int(order_id))
    except (TypeError, ValueError):
        return None
    except capabilities_for(source).model.DoesNotExist:
        return None
    return _VIEWS[source](obj)
