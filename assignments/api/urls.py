from django.urls import path
from .views import (
    AssignView,
    AssignmentByOrderView,
    AssignmentDetailView,
    AssignmentListView,
    AssignmentStatusView,
    AssignmentSyncView,
    AssignmentsByTailorView,
    MyAssignmentsView,
)

urlpatterns = [
    path("order-assignments/", AssignmentListView.as_view(), name="assignment-list"),
    path("order-assignments/assign/", AssignView.as_view(), name="assignment-assign"),
    path("order-assignments/by-tailor/", AssignmentsByTailorView.as_view(), name="assignment-by-tailor"),
    path("order-assignments/by-order/", AssignmentByOrderView.as_view(), name="assignment-by-order"),
    path("order-assignments/mine/", MyAssignmentsView.as_view(), name="assignment-mine"),
    path("order-assignments/<int:pk>/", AssignmentDetailView.as_view(), name="assignment-detail"),
    path("order-assignments/<int:pk>/status/", AssignmentStatusView.as_view(), name="assignment-status"),
    path("order-assignments/<int:pk>/sync/", AssignmentSyncView.as_view(), name="assignment-sync"),
]
