"""Root URL configuration.

Every app exposes its endpoints under ``/api/``.
"""

from django.contrib import admin
from django.urls import include, path

admin.site.site_header = "Apparel Orders Admin"
admin.site.site_title = "Apparel Orders Admin Portal"

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("user_auth_app.api.urls")),
    path("api/", include("tailors.api.urls")),
    path("api/", include("orders.api.urls")),
    path("api/", include("assignments.api.urls")),
    path("api/", include("inventory.api.urls")),
]
