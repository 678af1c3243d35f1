"""Query-string filters for assignment listings (camelCase parameter names)."""

import django_filters

from orders.models import OrderSource
from ..models import OrderAssignment


class OrderAssignmentFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(field_name="status", choices=OrderAssignment.Status.choices)
    tailorId = django_filters.NumberFilter(field_name="tailor_id")
    orderSource = django_filters.ChoiceFilter(field_name="order_source", choices=OrderSource.choices)

    class Meta:
        model = OrderAssignment
        fields = ["status", "tailorId", "orderSource"]
