"""Django app configuration for the dashboard."""

from django.apps import AppConfig


class DashboardConfig(AppConfig):
    """Dashboard app configuration."""

    name = "apps.web.dashboard"
    verbose_name = "Dashboard"
