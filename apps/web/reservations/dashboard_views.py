"""
Reservation dashboard views - booking management for staff.

The list supports search and filters; each row offers inline edits and
lifecycle actions (confirm payment, reject, check in, undo check-in,
delete, send invoice). Actions lock the row while applying a transition and
redirect back to the list with a flash message.
"""

import logging
from collections.abc import Callable
from datetime import date
from functools import partial
from uuid import UUID

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError, transaction
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.dateparse import parse_date
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_GET, require_POST

from apps.web.core.decorators import editor_required
from apps.web.core.storage import StorageError

from . import lifecycle, notifications
from .models import Reservation, ReservationStatus
from .tables import TABLE_OPTIONS

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again."


def _back_to_list(request: HttpRequest) -> HttpResponse:
    """Return to the list the action was submitted from, keeping its filters."""
    next_url = request.POST.get("next", "")
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}
    ):
        return redirect(next_url)
    return redirect("reservations:list")


def _parse_date(value: str) -> date | None:
    try:
        return parse_date(value) if value else None
    except ValueError:
        return None


def _apply(
    request: HttpRequest,
    reservation_id: UUID,
    action: Callable[[Reservation], Reservation],
    success_message: str,
) -> Reservation | None:
    """
    Run a lifecycle action on the locked row and report the outcome.

    Returns the updated reservation, or None if the action was refused.
    """
    try:
        with transaction.atomic():
            reservation = get_object_or_404(
                Reservation.objects.select_for_update(), pk=reservation_id
            )
            action(reservation)
    except lifecycle.TransitionError as e:
        messages.error(request, e.message)
        return None
    except DatabaseError:
        logger.exception("Failed to update reservation %s", reservation_id)
        messages.error(request, GENERIC_ERROR)
        return None

    messages.success(request, success_message)
    return reservation


@login_required
@require_GET
def reservation_list(request: HttpRequest) -> HttpResponse:
    """
    GET /dashboard/reservations/

    Reservations by date and time, newest first.
    Filters: q (name, email, phone, message, notes, invoice no), status,
    date_from, date_to, table.
    """
    filters = {
        key: request.GET.get(key, "").strip()
        for key in ("q", "status", "date_from", "date_to", "table")
    }
    reservations = (
        Reservation.objects.search(filters["q"])
        .with_status(filters["status"])
        .between(_parse_date(filters["date_from"]), _parse_date(filters["date_to"]))
        .at_table(filters["table"])
        .order_by("-date", "-time")
    )

    context = {
        "section": "reservations",
        "reservations": reservations,
        "filters": filters,
        "statuses": ReservationStatus.choices,
        "tables": TABLE_OPTIONS,
        "total_count": Reservation.objects.count(),
        "current_url": request.get_full_path(),
    }

    # Return partial for HTMX requests, full page otherwise
    if request.headers.get("HX-Request"):
        return render(request, "reservations/dashboard/partials/rows.html", context)

    return render(request, "reservations/dashboard/list.html", context)


@login_required
@require_GET
def reservation_detail(request: HttpRequest, reservation_id: UUID) -> HttpResponse:
    """
    GET /dashboard/reservations/{reservation_id}/

    Full booking details, payment proof and audit trail.
    """
    reservation = get_object_or_404(Reservation, pk=reservation_id)
    return render(
        request,
        "reservations/dashboard/detail.html",
        {
            "section": "reservations",
            "reservation": reservation,
            "statuses": ReservationStatus.choices,
            "tables": TABLE_OPTIONS,
        },
    )


@login_required
@editor_required
@require_POST
def update_field(request: HttpRequest, reservation_id: UUID) -> HttpResponse:
    """
    POST /dashboard/reservations/{reservation_id}/update/

    Inline edit: form fields "field" (status, table_number, notes or
    deposit_percentage) and "value".
    """
    field = request.POST.get("field", "")
    value = request.POST.get("value", "")
    label = field.replace("_", " ").capitalize()
    _apply(
        request,
        reservation_id,
        lambda r: lifecycle.update_field(r, field, value),
        f"{label} updated.",
    )
    return _back_to_list(request)


@login_required
@editor_required
@require_POST
def confirm_payment(request: HttpRequest, reservation_id: UUID) -> HttpResponse:
    """
    POST /dashboard/reservations/{reservation_id}/confirm/

    Approve the booking and e-mail the guest a confirmation.
    """
    actor = request.user.actor_label  # type: ignore[union-attr]
    reservation = _apply(
        request,
        reservation_id,
        lambda r: lifecycle.confirm_payment(r, actor),
        "Payment confirmed.",
    )
    if reservation is not None:
        transaction.on_commit(
            partial(
                notifications.notify,
                notifications.SEND_BOOKING_CONFIRMATION,
                str(reservation.pk),
            )
        )
    return _back_to_list(request)


@login_required
@editor_required
@require_POST
def reject(request: HttpRequest, reservation_id: UUID) -> HttpResponse:
    """
    POST /dashboard/reservations/{reservation_id}/reject/

    Requires a non-empty "reason"; nothing is written without one.
    """
    reason = request.POST.get("reason", "")
    if not reason.strip():
        messages.error(request, "Please enter a reason for rejecting this reservation.")
        return _back_to_list(request)

    actor = request.user.actor_label  # type: ignore[union-attr]
    _apply(
        request,
        reservation_id,
        lambda r: lifecycle.reject(r, actor, reason),
        "Reservation rejected.",
    )
    return _back_to_list(request)


@login_required
@editor_required
@require_POST
def mark_arrived(request: HttpRequest, reservation_id: UUID) -> HttpResponse:
    """POST /dashboard/reservations/{reservation_id}/arrived/"""
    _apply(request, reservation_id, lifecycle.mark_arrived, "Guest checked in.")
    return _back_to_list(request)


@login_required
@editor_required
@require_POST
def undo_check_in(request: HttpRequest, reservation_id: UUID) -> HttpResponse:
    """POST /dashboard/reservations/{reservation_id}/undo-check-in/"""
    _apply(request, reservation_id, lifecycle.undo_check_in, "Check-in undone.")
    return _back_to_list(request)


@login_required
@editor_required
@require_POST
def delete(request: HttpRequest, reservation_id: UUID) -> HttpResponse:
    """
    POST /dashboard/reservations/{reservation_id}/delete/

    Permanently removes the booking and its payment proof.
    """
    reservation = get_object_or_404(Reservation, pk=reservation_id)
    try:
        lifecycle.delete_reservation(reservation)
    except StorageError:
        messages.warning(
            request, "Reservation deleted, but its payment proof could not be removed."
        )
        return _back_to_list(request)
    except DatabaseError:
        logger.exception("Failed to delete reservation %s", reservation_id)
        messages.error(request, GENERIC_ERROR)
        return _back_to_list(request)

    messages.success(request, "Reservation deleted.")
    return _back_to_list(request)


@login_required
@editor_required
@require_POST
def send_invoice(request: HttpRequest, reservation_id: UUID) -> HttpResponse:
    """POST /dashboard/reservations/{reservation_id}/send-invoice/"""
    reservation = get_object_or_404(Reservation, pk=reservation_id)
    try:
        result = notifications.invoke(notifications.SEND_INVOICE, str(reservation.pk))
    except notifications.NotificationError as e:
        messages.error(request, f"Invoice could not be sent: {e.message}")
        return _back_to_list(request)

    if result.get("skipped"):
        messages.info(request, "The invoice was already sent to this guest.")
    else:
        messages.success(request, f"Invoice sent to {reservation.email}.")
    return _back_to_list(request)
