"""
Content dashboard URL routes.

Mounted under /dashboard/content/.
"""

from django.urls import path

from . import dashboard_views as views

app_name = "content"

urlpatterns = [
    # Menu
    path("menu/", views.menu_list, name="menu_list"),
    path("menu/new/", views.menu_edit, name="menu_create"),
    path("menu/<int:item_id>/edit/", views.menu_edit, name="menu_edit"),
    path("menu/<int:item_id>/delete/", views.menu_delete, name="menu_delete"),
    # Gallery
    path("gallery/", views.gallery_list, name="gallery_list"),
    path("gallery/new/", views.gallery_edit, name="gallery_create"),
    path("gallery/<int:item_id>/edit/", views.gallery_edit, name="gallery_edit"),
    path("gallery/<int:item_id>/delete/", views.gallery_delete, name="gallery_delete"),
    # Special offers
    path("offers/", views.offer_list, name="offer_list"),
    path("offers/new/", views.offer_edit, name="offer_create"),
    path("offers/<int:item_id>/edit/", views.offer_edit, name="offer_edit"),
    path("offers/<int:item_id>/delete/", views.offer_delete, name="offer_delete"),
    # Reviews
    path("reviews/", views.review_list, name="review_list"),
    path(
        "reviews/<int:review_id>/approve/",
        views.review_approve,
        name="review_approve",
    ),
    path("reviews/<int:review_id>/delete/", views.review_delete, name="review_delete"),
    # Single-row sections
    path("hero/", views.hero_edit, name="hero"),
    path("hero/images/", views.hero_image_upload, name="hero_image_upload"),
    path(
        "hero/images/<int:image_id>/select/",
        views.hero_image_select,
        name="hero_image_select",
    ),
    path(
        "hero/images/<int:image_id>/delete/",
        views.hero_image_delete,
        name="hero_image_delete",
    ),
    path("about/", views.about_edit, name="about"),
    path("contact/", views.contact_edit, name="contact"),
    # Newsletter
    path("subscribers/", views.subscriber_list, name="subscriber_list"),
]
