"""
Reservation API URL routes.

Mounted under /api/.
"""

from django.urls import path

from . import views

app_name = "reservations_api"

urlpatterns = [
    path("reservations", views.create_reservation, name="create"),
    path("reservations/options", views.booking_options, name="options"),
    path("reservations/upcoming", views.upcoming, name="upcoming"),
    path(
        "reservations/<uuid:reservation_id>",
        views.reservation_status,
        name="status",
    ),
    path(
        "reservations/<uuid:reservation_id>/payment-proof",
        views.upload_payment_proof,
        name="payment_proof",
    ),
    path("functions/<slug:name>", views.invoke_function, name="function"),
]
