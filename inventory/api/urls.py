from django.urls import path

from .views import AdjustmentApplyView, AdjustmentCreateView, AdjustmentDetailView, ClothingItemListView

urlpatterns = [
    path("inventory/items/", ClothingItemListView.as_view(), name="clothing-item-list"),
    path("inventory/adjustments/", AdjustmentCreateView.as_view(), name="adjustment-create"),
    path("inventory/adjustments/apply/", AdjustmentApplyView.as_view(), name="adjustment-apply"),
    path("inventory/adjustments/<str:payment_id>/", AdjustmentDetailView.as_view(), name="adjustment-detail"),
]
