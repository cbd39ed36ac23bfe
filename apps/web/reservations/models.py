"""
Reservation model - one row per booking attempt.

A reservation carries two independent lifecycles: the guest-visible status
and the payment status. Transitions are applied by the functions in
apps.web.reservations.lifecycle; the model only stores them.
"""

import uuid
from decimal import Decimal

from django.db import models

from apps.web.core.models import TimeStampedModel

from .managers import ReservationQuerySet


class ReservationStatus(models.TextChoices):
    """Guest-visible lifecycle stage."""

    PENDING = "Pending", "Pending"
    CONFIRMED = "Confirmed", "Confirmed"
    ARRIVED = "Arrived", "Arrived"
    CANCELED = "Canceled", "Canceled"
    NO_SHOW = "No-show", "No-show"
    REJECTED = "Rejected", "Rejected"


# Once reached, inline edits are no longer accepted.
FINAL_STATUSES = frozenset(
    {
        ReservationStatus.ARRIVED,
        ReservationStatus.CANCELED,
        ReservationStatus.NO_SHOW,
    }
)


class PaymentStatus(models.TextChoices):
    """Payment lifecycle, independent of ReservationStatus."""

    PENDING = "Pending", "Pending"
    DEPOSIT = "Deposit", "Deposit"
    PAID = "Paid", "Paid"
    REJECTED = "Rejected", "Rejected"


class Reservation(TimeStampedModel):
    """
    A guest's request to dine.

    Created by the public booking form with status=Pending and
    payment_status=Pending. total_bill is guests x the per-guest price;
    deposit_amount is at least MIN_DEPOSIT_PERCENTAGE of it when booked.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking_ref = models.CharField(
        max_length=20,
        unique=True,
        help_text="Short reference shared with the guest",
    )

    # Guest
    name = models.CharField(max_length=200)
    email = models.EmailField()
    phone = models.CharField(max_length=30, blank=True)

    # Booking
    date = models.DateField()
    time = models.TimeField()
    guests = models.PositiveIntegerField()
    table_number = models.CharField(
        max_length=20,
        blank=True,
        help_text="Blank = auto assign",
    )
    message = models.TextField(blank=True, help_text="Guest's note")
    notes = models.TextField(blank=True, help_text="Internal staff notes")

    # Commercial (IDR)
    total_bill = models.DecimalField(max_digits=12, decimal_places=2)
    deposit_amount = models.DecimalField(max_digits=12, decimal_places=2)
    deposit_percentage = models.DecimalField(max_digits=5, decimal_places=2)

    # Lifecycle
    status = models.CharField(
        max_length=20,
        choices=ReservationStatus.choices,
        default=ReservationStatus.PENDING,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )

    # Payment evidence
    payment_proof_url = models.CharField(max_length=500, blank=True)
    qr_payload = models.CharField(max_length=255, blank=True)

    # Audit
    confirmed_at = models.DateTimeField(null=True, blank=True)
    confirmed_by = models.CharField(max_length=254, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)
    rejected_by = models.CharField(max_length=254, blank=True)
    rejection_reason = models.TextField(blank=True)
    check_in_time = models.DateTimeField(null=True, blank=True)
    invoice_no = models.CharField(max_length=40, blank=True)
    invoice_issued_at = models.DateTimeField(null=True, blank=True)

    # E-mail send guards
    email_pending_sent_at = models.DateTimeField(null=True, blank=True)
    email_confirmed_sent_at = models.DateTimeField(null=True, blank=True)
    email_invoice_sent_at = models.DateTimeField(null=True, blank=True)

    objects = ReservationQuerySet.as_manager()

    class Meta:
        ordering = ["-date", "-time"]
        indexes = [
            models.Index(fields=["date", "time"], name="reservation_date_3f8c1e_idx"),
            models.Index(
                fields=["status", "date"], name="reservation_status_9a4b2d_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.booking_ref} - {self.name} ({self.date} {self.time:%H:%M})"

    @property
    def short_id(self) -> str:
        """First 8 characters of the id, as shown to guests."""
        return str(self.id)[:8]

    @property
    def balance_due(self) -> Decimal:
        """Amount still owed at the restaurant after the deposit."""
        return max(self.total_bill - self.deposit_amount, 0)

    @property
    def is_final(self) -> bool:
        return self.status in FINAL_STATUSES

    @property
    def can_upload_proof(self) -> bool:
        """Guests may upload proof while payment is pending and not rejected."""
        return (
            self.payment_status == PaymentStatus.PENDING
            and self.status != ReservationStatus.REJECTED
        )

    @property
    def can_confirm_payment(self) -> bool:
        return (
            bool(self.payment_proof_url)
            and self.payment_status != PaymentStatus.PAID
            and self.status
            not in (
                ReservationStatus.ARRIVED,
                ReservationStatus.CANCELED,
                ReservationStatus.CONFIRMED,
            )
        )

    @property
    def can_reject(self) -> bool:
        return self.status not in (
            ReservationStatus.ARRIVED,
            ReservationStatus.CANCELED,
            ReservationStatus.REJECTED,
        )

    @property
    def can_mark_arrived(self) -> bool:
        return self.status == ReservationStatus.CONFIRMED

    @property
    def status_headline(self) -> str:
        """Headline shown on the guest status page."""
        if self.status == ReservationStatus.CONFIRMED:
            return "Reservation Confirmed"
        if self.status == ReservationStatus.REJECTED:
            return "Reservation Rejected"
        if self.status == ReservationStatus.ARRIVED:
            return "Checked In"
        if self.status in (ReservationStatus.CANCELED, ReservationStatus.NO_SHOW):
            return f"Reservation {self.get_status_display()}"
        if self.payment_status == PaymentStatus.PENDING:
            return "Pending Payment"
        return "Pending Admin Confirmation"
