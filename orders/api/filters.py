import django_filters

from ..models import CustomOrder


class CustomOrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(field_name="status", choices=CustomOrder.Status.choices)
    tailorId = django_filters.NumberFilter(field_name="assigned_tailor_id")

    class Meta:
        model = CustomOrder
        fields = ["status", "tailorId"]
