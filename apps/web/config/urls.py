"""
URL configuration for the Watee Baroesa site.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("dashboard/", include("apps.web.dashboard.urls")),
    path("dashboard/content/", include("apps.web.restaurant.dashboard_urls")),
    path("dashboard/reservations/", include("apps.web.reservations.dashboard_urls")),
    # Public API endpoints
    path("api/", include("apps.web.restaurant.urls")),
    path("api/", include("apps.web.reservations.urls")),
]
