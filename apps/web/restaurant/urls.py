"""
Content API URL routes.

Mounted under /api/.
"""

from django.urls import path

from . import views

app_name = "content_api"

urlpatterns = [
    path("home", views.home, name="home"),
    path("menu", views.menu, name="menu"),
    path("gallery", views.gallery, name="gallery"),
    path("offers", views.offers, name="offers"),
    path("reviews", views.reviews, name="reviews"),
    path("hero", views.hero, name="hero"),
    path("about", views.about, name="about"),
    path("contact", views.contact, name="contact"),
    path("newsletter", views.subscribe, name="newsletter"),
]
