"""
Reservation dashboard URL routes.

Mounted under /dashboard/reservations/.
"""

from django.urls import path

from . import dashboard_views as views

app_name = "reservations"

urlpatterns = [
    path("", views.reservation_list, name="list"),
    path("<uuid:reservation_id>/", views.reservation_detail, name="detail"),
    path("<uuid:reservation_id>/update/", views.update_field, name="update"),
    path("<uuid:reservation_id>/confirm/", views.confirm_payment, name="confirm"),
    path("<uuid:reservation_id>/reject/", views.reject, name="reject"),
    path("<uuid:reservation_id>/arrived/", views.mark_arrived, name="arrived"),
    path(
        "<uuid:reservation_id>/undo-check-in/",
        views.undo_check_in,
        name="undo_check_in",
    ),
    path("<uuid:reservation_id>/delete/", views.delete, name="delete"),
    path(
        "<uuid:reservation_id>/send-invoice/",
        views.send_invoice,
        name="send_invoice",
    ),
]
