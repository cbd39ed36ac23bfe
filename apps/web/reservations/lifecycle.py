"""
Reservation lifecycle - booking, payment proof and admin transitions.

Status and payment status are separate axes. Each function applies one
transition to a reservation, saves only the fields it changed and raises
TransitionError when the current state does not allow it. Admin actions
take the acting user's identity explicitly.

Callers that need the change applied to the current row (dashboard actions)
fetch the reservation with select_for_update() inside transaction.atomic().
"""

import logging
import secrets
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from django.conf import settings
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.utils import timezone

from apps.web.core.storage import AssetPrefix, StorageError, remove_asset, upload_asset

from .models import PaymentStatus, Reservation, ReservationStatus
from .tables import TABLE_OPTIONS, normalize_table

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
HUNDRED = Decimal("100")
# Largest value the deposit_percentage column holds.
MAX_DEPOSIT_PERCENTAGE = Decimal("999.99")

INLINE_FIELDS = ("status", "table_number", "notes")


class TransitionError(Exception):
    """Raised when a lifecycle action is not allowed in the current state."""

    def __init__(self, message: str, code: str = "invalid_transition"):
        super().__init__(message)
        self.message = message
        self.code = code


@dataclass(frozen=True)
class Quote:
    """Amounts for a booking."""

    total_bill: Decimal
    deposit_amount: Decimal
    deposit_percentage: Decimal


def price_per_guest() -> Decimal:
    return Decimal(settings.PRICE_PER_GUEST)


def min_deposit_percentage() -> Decimal:
    return Decimal(settings.MIN_DEPOSIT_PERCENTAGE)


def _to_decimal(value: Any) -> Decimal:
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise TransitionError(
            "Deposit percentage must be a number.", code="invalid_percentage"
        ) from e
    if not number.is_finite():
        raise TransitionError(
            "Deposit percentage must be a number.", code="invalid_percentage"
        )
    return number


def deposit_for(total_bill: Decimal, percentage: Decimal) -> Decimal:
    return (total_bill * percentage / HUNDRED).quantize(CENT, rounding=ROUND_HALF_UP)


def quote(guests: int, deposit_percentage: Decimal | int | None = None) -> Quote:
    """
    Price a booking: total_bill = guests x per-guest price.

    Raises:
        TransitionError: If guests < 1 or the percentage is outside
            [MIN_DEPOSIT_PERCENTAGE, 100].
    """
    if guests < 1:
        raise TransitionError("At least one guest is required.", code="invalid_guests")

    percentage = (
        min_deposit_percentage()
        if deposit_percentage is None
        else _to_decimal(deposit_percentage)
    )
    if percentage < min_deposit_percentage() or percentage > HUNDRED:
        raise TransitionError(
            f"Deposit must be between {min_deposit_percentage()}% and 100%.",
            code="invalid_percentage",
        )

    total_bill = (price_per_guest() * guests).quantize(CENT)
    return Quote(
        total_bill=total_bill,
        deposit_amount=deposit_for(total_bill, percentage),
        deposit_percentage=percentage,
    )


def payment_status_for_amounts(deposit_amount: Decimal, total_bill: Decimal) -> str:
    """Paid when the deposit covers the bill, Deposit when partial, else Pending."""
    if total_bill <= 0 or deposit_amount <= 0:
        return PaymentStatus.PENDING
    if deposit_amount >= total_bill:
        return PaymentStatus.PAID
    return PaymentStatus.DEPOSIT


def payment_status_for_percentage(percentage: Decimal) -> str:
    if percentage >= HUNDRED:
        return PaymentStatus.PAID
    if percentage > 0:
        return PaymentStatus.DEPOSIT
    return PaymentStatus.PENDING


def generate_booking_ref() -> str:
    return f"WB-{secrets.token_hex(3).upper()}"


def generate_invoice_no() -> str:
    return f"INV-{timezone.localdate():%Y%m%d}-{secrets.token_hex(2).upper()}"


def qr_payload_for(reservation: Reservation) -> str:
    """Payload encoded in the payment QR code on the status page."""
    return f"id={reservation.id};dep={int(reservation.deposit_amount)}"


def _ensure_not_final(reservation: Reservation) -> None:
    if reservation.is_final:
        raise TransitionError(
            f"Reservation is already {reservation.status}; it can no longer be edited.",
            code="final_status",
        )


# =============================================================================
# Guest actions
# =============================================================================


def book(
    *,
    name: str,
    email: str,
    date: Any,
    time: Any,
    guests: int,
    phone: str = "",
    table_number: str = "",
    message: str = "",
    deposit_percentage: Decimal | int | None = None,
) -> Reservation:
    """
    Create a reservation from the public booking form.

    Starts with status=Pending and payment_status=Pending; the invoice
    number is issued immediately so the pending-invoice e-mail can quote it.
    """
    table = normalize_table(table_number)
    if table and table not in TABLE_OPTIONS:
        raise TransitionError(f"Unknown table: {table}", code="invalid_table")

    amounts = quote(guests, deposit_percentage)

    with transaction.atomic():
        reservation = Reservation(
            booking_ref=generate_booking_ref(),
            name=name,
            email=email,
            phone=phone,
            date=date,
            time=time,
            guests=guests,
            table_number=table,
            message=message,
            total_bill=amounts.total_bill,
            deposit_amount=amounts.deposit_amount,
            deposit_percentage=amounts.deposit_percentage,
            status=ReservationStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            invoice_no=generate_invoice_no(),
            invoice_issued_at=timezone.now(),
        )
        reservation.qr_payload = qr_payload_for(reservation)
        reservation.save()

    logger.info(
        "Reservation %s booked for %s guests on %s %s",
        reservation.booking_ref,
        guests,
        date,
        time,
    )
    return reservation


def attach_payment_proof(reservation: Reservation, upload: UploadedFile) -> Reservation:
    """
    Store the guest's proof of payment and mark the deposit as submitted.

    Only allowed while payment is Pending and the booking is not Rejected.
    The status itself is unchanged; an admin still has to confirm.

    Raises:
        TransitionError: If a proof cannot be uploaded in the current state.
        StorageError: If the file cannot be stored.
    """
    if not reservation.can_upload_proof:
        raise TransitionError(
            "Payment proof can no longer be uploaded for this reservation.",
            code="proof_not_allowed",
        )

    url = upload_asset(AssetPrefix.PAYMENT_PROOFS, upload, label=reservation.name)
    reservation.payment_proof_url = url
    reservation.payment_status = PaymentStatus.DEPOSIT
    reservation.save(update_fields=["payment_proof_url", "payment_status", "updated_at"])

    logger.info("Payment proof uploaded for reservation %s", reservation.booking_ref)
    return reservation


# =============================================================================
# Admin actions
# =============================================================================


def confirm_payment(reservation: Reservation, actor: str) -> Reservation:
    """
    Approve the booking after reviewing the payment proof.

    payment_status is recomputed from deposit_amount vs total_bill, a
    Pending or Rejected booking becomes Confirmed, and any earlier
    rejection is cleared.

    Raises:
        TransitionError: If no proof has been uploaded, payment is already
            Paid, or the booking is already Confirmed or final.
    """
    _ensure_not_final(reservation)
    if not reservation.payment_proof_url:
        raise TransitionError(
            "No payment proof has been uploaded yet.", code="missing_proof"
        )
    if not reservation.can_confirm_payment:
        raise TransitionError(
            f"Payment cannot be confirmed while the booking is {reservation.status} "
            f"and payment is {reservation.payment_status}."
        )

    reservation.payment_status = payment_status_for_amounts(
        reservation.deposit_amount, reservation.total_bill
    )
    if reservation.status in (ReservationStatus.PENDING, ReservationStatus.REJECTED):
        reservation.status = ReservationStatus.CONFIRMED
    reservation.confirmed_at = timezone.now()
    reservation.confirmed_by = actor
    reservation.rejected_at = None
    reservation.rejected_by = ""
    reservation.rejection_reason = ""
    reservation.save(
        update_fields=[
            "payment_status",
            "status",
            "confirmed_at",
            "confirmed_by",
            "rejected_at",
            "rejected_by",
            "rejection_reason",
            "updated_at",
        ]
    )

    logger.info(
        "Reservation %s confirmed by %s (payment %s)",
        reservation.booking_ref,
        actor,
        reservation.payment_status,
    )
    return reservation


def reject(reservation: Reservation, actor: str, reason: str) -> Reservation:
    """
    Reject the booking with a reason shown to the guest.

    Raises:
        TransitionError: If the reason is blank, or the booking is already
            Arrived, Canceled or Rejected. Nothing is written in that case.
    """
    reason = (reason or "").strip()
    if not reason:
        raise TransitionError("A rejection reason is required.", code="reason_required")
    if not reservation.can_reject:
        raise TransitionError(
            f"A reservation that is {reservation.status} cannot be rejected.",
            code="reject_not_allowed",
        )

    reservation.status = ReservationStatus.REJECTED
    reservation.payment_status = PaymentStatus.REJECTED
    reservation.rejected_at = timezone.now()
    reservation.rejected_by = actor
    reservation.rejection_reason = reason
    reservation.confirmed_at = None
    reservation.confirmed_by = ""
    reservation.save(
        update_fields=[
            "status",
            "payment_status",
            "rejected_at",
            "rejected_by",
            "rejection_reason",
            "confirmed_at",
            "confirmed_by",
            "updated_at",
        ]
    )

    logger.info("Reservation %s rejected by %s", reservation.booking_ref, actor)
    return reservation


def mark_arrived(reservation: Reservation) -> Reservation:
    """Check the guest in. An existing check-in time is kept."""
    if not reservation.can_mark_arrived:
        raise TransitionError(
            "Only confirmed reservations can be checked in.",
            code="arrive_not_allowed",
        )

    reservation.status = ReservationStatus.ARRIVED
    if reservation.check_in_time is None:
        reservation.check_in_time = timezone.now()
    reservation.save(update_fields=["status", "check_in_time", "updated_at"])

    logger.info("Reservation %s checked in", reservation.booking_ref)
    return reservation


def undo_check_in(reservation: Reservation) -> Reservation:
    """Revert to Confirmed and clear the check-in time, whatever the status was."""
    reservation.status = ReservationStatus.CONFIRMED
    reservation.check_in_time = None
    reservation.save(update_fields=["status", "check_in_time", "updated_at"])

    logger.info("Check-in undone for reservation %s", reservation.booking_ref)
    return reservation


def set_deposit_percentage(reservation: Reservation, value: Any) -> Reservation:
    """
    Change the deposit percentage and recompute the deposit amount.

    payment_status follows the percentage: Paid at 100 or more, Deposit
    above 0, Pending at 0.
    """
    _ensure_not_final(reservation)

    percentage = _to_decimal(value)
    if percentage < 0:
        raise TransitionError(
            "Deposit percentage must be 0 or more.", code="invalid_percentage"
        )
    if percentage > MAX_DEPOSIT_PERCENTAGE:
        raise TransitionError(
            f"Deposit percentage must be at most {MAX_DEPOSIT_PERCENTAGE}.",
            code="invalid_percentage",
        )

    reservation.deposit_percentage = percentage
    reservation.deposit_amount = deposit_for(reservation.total_bill, percentage)
    reservation.payment_status = payment_status_for_percentage(percentage)
    reservation.qr_payload = qr_payload_for(reservation)
    reservation.save(
        update_fields=[
            "deposit_percentage",
            "deposit_amount",
            "payment_status",
            "qr_payload",
            "updated_at",
        ]
    )

    logger.info(
        "Reservation %s deposit set to %s%% (%s)",
        reservation.booking_ref,
        percentage,
        reservation.deposit_amount,
    )
    return reservation


def update_field(reservation: Reservation, field: str, value: str) -> Reservation:
    """
    Inline edit of status, table_number or notes.

    Setting the status to Arrived stamps check_in_time when it is unset.
    """
    if field == "deposit_percentage":
        return set_deposit_percentage(reservation, value)
    if field not in INLINE_FIELDS:
        raise TransitionError(f"{field} cannot be edited inline.", code="invalid_field")

    _ensure_not_final(reservation)

    value = (value or "").strip()
    update_fields = [field, "updated_at"]

    match field:
        case "status":
            if value not in ReservationStatus.values:
                raise TransitionError(f"Unknown status: {value}", code="invalid_status")
            reservation.status = value
            if value == ReservationStatus.ARRIVED and reservation.check_in_time is None:
                reservation.check_in_time = timezone.now()
                update_fields.append("check_in_time")
        case "table_number":
            table = normalize_table(value)
            if table and table not in TABLE_OPTIONS:
                raise TransitionError(f"Unknown table: {table}", code="invalid_table")
            reservation.table_number = table
        case "notes":
            reservation.notes = value

    reservation.save(update_fields=update_fields)
    logger.info("Reservation %s %s set to %r", reservation.booking_ref, field, value)
    return reservation


def delete_reservation(reservation: Reservation) -> None:
    """
    Delete the reservation and its stored payment proof.

    Raises:
        StorageError: If the row was deleted but the proof file could not be.
    """
    proof_url = reservation.payment_proof_url
    booking_ref = reservation.booking_ref
    reservation.delete()
    logger.info("Reservation %s deleted", booking_ref)

    if proof_url:
        try:
            remove_asset(AssetPrefix.PAYMENT_PROOFS, proof_url)
        except StorageError:
            logger.warning("Payment proof for %s could not be removed", booking_ref)
            raise
