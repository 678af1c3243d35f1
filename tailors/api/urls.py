from django.urls import path
from .views import (
    MyTailorProfileView,
    TailorDetailView,
    TailorListView,
    TailorRegisterView,
    TailorSyncView,
)

urlpatterns = [
    path("tailors/", TailorListView.as_view(), name="tailor-list"),
    path("tailors/register/", TailorRegisterView.as_view(), name="tailor-register"),
    path("tailors/me/", MyTailorProfileView.as_view(), name="tailor-me"),
    path("tailors/sync/", TailorSyncView.as_view(), name="tailor-sync"),
    path("tailors/<int:pk>/", TailorDetailView.as_view(), name="tailor-detail"),
]
