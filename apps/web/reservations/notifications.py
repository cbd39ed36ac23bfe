"""
Reservation e-mail functions.

Three named functions, each keyed by booking id:

- send-pending-invoice: after booking, asks the guest to pay the deposit.
- send-booking-confirmation: after an admin confirms the payment.
- send-invoice: the full invoice, sent on demand from the dashboard.

Each re-fetches the reservation, renders an HTML template and sends it via
Resend. A "sent at" column guards against sending twice; it is claimed with
a conditional update before sending and released again if sending fails.

These functions can be called synchronously (after commit) or wrapped as
background tasks; they return a result dict either way.
"""

import logging
from collections.abc import Callable
from typing import Any

from django.conf import settings
from django.core.exceptions import ValidationError
from django.template.loader import render_to_string
from django.utils import timezone

from apps.web.core.email import EmailError, send_email

from .lifecycle import generate_invoice_no
from .models import Reservation

logger = logging.getLogger(__name__)

SEND_PENDING_INVOICE = "send-pending-invoice"
SEND_BOOKING_CONFIRMATION = "send-booking-confirmation"
SEND_INVOICE = "send-invoice"


class NotificationError(Exception):
    """Raised when a reservation e-mail cannot be sent."""

    def __init__(self, message: str, status: int = 500):
        super().__init__(message)
        self.message = message
        self.status = status


def status_page_url(reservation: Reservation) -> str:
    return f"{settings.SITE_URL.rstrip('/')}/reservation/{reservation.id}"


def _get_reservation(booking_id: Any) -> Reservation:
    if not booking_id:
        raise NotificationError("bookingId is required", status=400)
    try:
        return Reservation.objects.get(pk=booking_id)
    except (Reservation.DoesNotExist, ValidationError, ValueError) as e:
        raise NotificationError(f"Reservation {booking_id} not found", status=404) from e


def _context(reservation: Reservation) -> dict[str, Any]:
    return {
        "reservation": reservation,
        "restaurant_name": settings.RESTAURANT_NAME,
        "status_url": status_page_url(reservation),
        "bank_name": settings.BANK_NAME,
        "bank_account_name": settings.BANK_ACCOUNT_NAME,
        "bank_account_number": settings.BANK_ACCOUNT_NUMBER,
    }


def _release(reservation: Reservation, guard_field: str) -> None:
    Reservation.objects.filter(pk=reservation.pk).update(**{guard_field: None})


def _deliver(
    booking_id: Any,
    *,
    guard_field: str,
    template: str,
    subject: Callable[[Reservation], str],
    prepare: Callable[[Reservation], None] | None = None,
) -> dict[str, Any]:
    reservation = _get_reservation(booking_id)

    if not reservation.email:
        raise NotificationError("Reservation has no email address", status=400)

    if getattr(reservation, guard_field):
        logger.info(
            "Skipping %s for %s: already sent", guard_field, reservation.booking_ref
        )
        return {"ok": True, "skipped": True, "message": "Email already sent."}

    # Claim the send; a concurrent call that loses the race skips it.
    claimed = Reservation.objects.filter(
        pk=reservation.pk, **{f"{guard_field}__isnull": True}
    ).update(**{guard_field: timezone.now()})
    if not claimed:
        logger.info(
            "Skipping %s for %s: claimed by another request",
            guard_field,
            reservation.booking_ref,
        )
        return {"ok": True, "skipped": True, "message": "Email already sent."}

    try:
        if prepare is not None:
            prepare(reservation)
        html = render_to_string(template, _context(reservation))
        email_id = send_email(reservation.email, subject(reservation), html)
    except EmailError as e:
        _release(reservation, guard_field)
        raise NotificationError(str(e), status=502) from e
    except Exception as e:
        logger.exception(
            "Failed to build %s email for %s", guard_field, reservation.booking_ref
        )
        _release(reservation, guard_field)
        raise NotificationError("Could not prepare the email.") from e

    logger.info(
        "Sent %s email for reservation %s", guard_field, reservation.booking_ref
    )
    return {"ok": True, "skipped": False, "email_id": email_id}


def send_pending_invoice(booking_id: Any) -> dict[str, Any]:
    """Invoice asking the guest to pay the deposit, with a status page link."""
    return _deliver(
        booking_id,
        guard_field="email_pending_sent_at",
        template="reservations/email/pending_invoice.html",
        subject=lambda r: f"Invoice {r.invoice_no} – Pending Payment",
    )


def send_booking_confirmation(booking_id: Any) -> dict[str, Any]:
    """Tells the guest the booking is confirmed."""
    return _deliver(
        booking_id,
        guard_field="email_confirmed_sent_at",
        template="reservations/email/booking_confirmation.html",
        subject=lambda r: f"Reservation Confirmed – {settings.RESTAURANT_NAME}",
    )


def _issue_invoice(reservation: Reservation) -> None:
    if reservation.invoice_no:
        return
    reservation.invoice_no = generate_invoice_no()
    reservation.invoice_issued_at = timezone.now()
    reservation.save(update_fields=["invoice_no", "invoice_issued_at", "updated_at"])


def send_invoice(booking_id: Any) -> dict[str, Any]:
    """Full invoice with amounts paid and outstanding."""
    return _deliver(
        booking_id,
        guard_field="email_invoice_sent_at",
        template="reservations/email/invoice.html",
        subject=lambda r: f"Invoice {r.invoice_no} – {settings.RESTAURANT_NAME}",
        prepare=_issue_invoice,
    )


FUNCTIONS: dict[str, Callable[[Any], dict[str, Any]]] = {
    SEND_PENDING_INVOICE: send_pending_invoice,
    SEND_BOOKING_CONFIRMATION: send_booking_confirmation,
    SEND_INVOICE: send_invoice,
}


def invoke(name: str, booking_id: Any) -> dict[str, Any]:
    """
    Run a named e-mail function.

    Raises:
        NotificationError: Unknown function name (404), missing or unknown
            booking (400/404), or a sending failure.
    """
    function = FUNCTIONS.get(name)
    if function is None:
        raise NotificationError(f"Unknown function: {name}", status=404)
    return function(booking_id)


def notify(name: str, booking_id: Any) -> dict[str, Any]:
    """
    Fire-and-forget variant of invoke() used after bookings and confirmations.

    Failures are logged and reported in the result instead of raised, so the
    guest or admin action that triggered the e-mail still succeeds.
    """
    try:
        return invoke(name, booking_id)
    except NotificationError as e:
        logger.warning("%s for %s failed: %s", name, booking_id, e.message)
        return {"ok": False, "error": e.message}
