"""
Reservation API views - public booking flow.

- Booking form: options, upcoming confirmed bookings, create
- Status page: fetch by id, upload payment proof
- Functions: named e-mail functions invoked with {"bookingId": ...}
"""

import json
import logging
from functools import partial
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views.decorators.cache import cache_control
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from pydantic import ValidationError as PydanticValidationError

from apps.web.core.decorators import idempotency_key_required
from apps.web.core.http import json_response, validation_details, validation_error_response
from apps.web.core.schemas import ValidationErrorDetail
from apps.web.core.storage import StorageError

from . import lifecycle, notifications
from .models import Reservation
from .serializers import (
    BankDetailsSchema,
    BookingOptionsResponse,
    FunctionInvokeRequest,
    ReservationCreateRequest,
    ReservationCreateResponse,
    ReservationStatusResponse,
    UpcomingReservationSchema,
    UpcomingReservationsResponse,
)
from .tables import PUBLIC_TABLE_OPTIONS

logger = logging.getLogger(__name__)

ERROR_FIELDS = {
    "invalid_table": "table_number",
    "invalid_guests": "guests",
    "invalid_percentage": "deposit_percentage",
}


def _not_found(reservation_id: UUID) -> JsonResponse:
    return json_response({"error": f"Reservation {reservation_id} not found"}, status=404)


def _status_response(reservation: Reservation) -> ReservationStatusResponse:
    response = ReservationStatusResponse.model_validate(reservation)
    if reservation.can_upload_proof:
        response.bank_details = BankDetailsSchema(
            bank_name=settings.BANK_NAME,
            account_name=settings.BANK_ACCOUNT_NAME,
            account_number=settings.BANK_ACCOUNT_NUMBER,
        )
    return response


@require_GET
@cache_control(max_age=3600, public=True)
def booking_options(request: HttpRequest) -> JsonResponse:
    """
    GET /api/reservations/options

    Table choices and pricing for the booking form.
    """
    response = BookingOptionsResponse(
        tables=PUBLIC_TABLE_OPTIONS,
        price_per_guest=lifecycle.price_per_guest(),
        min_deposit_percentage=lifecycle.min_deposit_percentage(),
    )
    return json_response(response.model_dump(mode="json"))


@require_GET
@cache_control(max_age=60, public=True)
def upcoming(request: HttpRequest) -> JsonResponse:
    """
    GET /api/reservations/upcoming

    Confirmed bookings from today on, ordered by date then time.
    """
    reservations = Reservation.objects.upcoming_confirmed(timezone.localdate())
    response = UpcomingReservationsResponse(
        reservations=[
            UpcomingReservationSchema.model_validate(r) for r in reservations
        ]
    )
    return json_response(response.model_dump(mode="json"))


@csrf_exempt
@require_POST
@idempotency_key_required
def create_reservation(request: HttpRequest) -> JsonResponse:
    """
    POST /api/reservations

    Create a booking (status Pending, payment Pending) and send the
    pending-invoice e-mail once the row is committed.

    Request body: ReservationCreateRequest schema
    Response: ReservationCreateResponse (201) or ValidationErrorResponse (400)
    """
    try:
        body = json.loads(request.body)
        booking = ReservationCreateRequest.model_validate(body)
    except json.JSONDecodeError:
        return json_response({"error": "Invalid JSON in request body"}, status=400)
    except PydanticValidationError as e:
        return validation_error_response(validation_details(e))

    try:
        with transaction.atomic():
            reservation = lifecycle.book(**booking.model_dump())
            transaction.on_commit(
                partial(
                    notifications.notify,
                    notifications.SEND_PENDING_INVOICE,
                    str(reservation.pk),
                )
            )
    except lifecycle.TransitionError as e:
        field = ERROR_FIELDS.get(e.code, "guests")
        return validation_error_response(
            [ValidationErrorDetail(field=field, message=e.message)]
        )

    response = ReservationCreateResponse(
        id=reservation.pk,
        booking_ref=reservation.booking_ref,
        status=reservation.status,
        payment_status=reservation.payment_status,
        total_bill=reservation.total_bill,
        deposit_amount=reservation.deposit_amount,
        deposit_percentage=reservation.deposit_percentage,
        status_url=notifications.status_page_url(reservation),
    )
    return json_response(response.model_dump(mode="json"), status=201)


@require_GET
def reservation_status(request: HttpRequest, reservation_id: UUID) -> JsonResponse:
    """
    GET /api/reservations/{reservation_id}

    Everything the guest status page shows. Bank details are included only
    while a payment proof can still be uploaded.
    """
    reservation = Reservation.objects.filter(pk=reservation_id).first()
    if reservation is None:
        return _not_found(reservation_id)
    return json_response(_status_response(reservation).model_dump(mode="json"))


@csrf_exempt
@require_POST
def upload_payment_proof(request: HttpRequest, reservation_id: UUID) -> JsonResponse:
    """
    POST /api/reservations/{reservation_id}/payment-proof

    Multipart upload (field "file") of a transfer receipt, image or PDF.
    """
    upload = request.FILES.get("file")
    if not upload:
        return validation_error_response(
            [ValidationErrorDetail(field="file", message="Please choose a file to upload")]
        )

    with transaction.atomic():
        try:
            reservation = Reservation.objects.select_for_update().get(pk=reservation_id)
        except Reservation.DoesNotExist:
            return _not_found(reservation_id)

        try:
            lifecycle.attach_payment_proof(reservation, upload)
        except lifecycle.TransitionError as e:
            return json_response({"error": e.message}, status=409)
        except StorageError as e:
            return validation_error_response(
                [ValidationErrorDetail(field="file", message=e.message)]
            )

    return json_response(_status_response(reservation).model_dump(mode="json"))


@csrf_exempt
@require_POST
def invoke_function(request: HttpRequest, name: str) -> JsonResponse:
    """
    POST /api/functions/{name}

    Run one of the reservation e-mail functions.

    Request body: {"bookingId": "<reservation id>"}
    Response: {"ok": true, ...} or {"error": ...} with 400/404/5xx
    """
    try:
        body = json.loads(request.body or b"{}")
        invoke_request = FunctionInvokeRequest.model_validate(body)
    except json.JSONDecodeError:
        return json_response({"error": "Invalid JSON in request body"}, status=400)
    except PydanticValidationError:
        return json_response({"error": "bookingId is required"}, status=400)

    try:
        result = notifications.invoke(name, invoke_request.booking_id)
    except notifications.NotificationError as e:
        return json_response({"error": e.message}, status=e.status)

    return json_response(result)
