from django.urls import path
from .views import (
    AssignedCustomOrdersAPIView,
    ClothCustomizerListCreateAPIView,
    CustomOrderDetailAPIView,
    CustomOrderListCreateAPIView,
    CustomOrderStatusAPIView,
    MyClothCustomizerAPIView,
    MyCustomOrdersAPIView,
)

urlpatterns = [
    path("custom-orders/", CustomOrderListCreateAPIView.as_view(), name="custom-order-list"),
    path("custom-orders/mine/", MyCustomOrdersAPIView.as_view(), name="custom-order-mine"),
    path("custom-orders/assigned/", AssignedCustomOrdersAPIView.as_view(), name="custom-order-assigned"),
    path("custom-orders/<int:pk>/", CustomOrderDetailAPIView.as_view(), name="custom-order-detail"),
    path("custom-orders/<int:pk>/status/", CustomOrderStatusAPIView.as_view(), name="custom-order-status"),
    path("cloth-customizer/", ClothCustomizerListCreateAPIView.as_view(), name="cloth-customizer-list"),
    path("cloth-customizer/mine/", MyClothCustomizerAPIView.as_view(), name="cloth-customizer-mine"),
]
