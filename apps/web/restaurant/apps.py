"""Django app configuration for the marketing site content."""

from django.apps import AppConfig


class RestaurantConfig(AppConfig):
    """Menu, gallery, offers, reviews and home page sections."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.restaurant"
    verbose_name = "Site content"
