"""
Tests for the reservation lifecycle.
"""

import datetime
from decimal import Decimal
from unittest.mock import patch

from django.utils import timezone

import pytest

from apps.web.core.storage import AssetPrefix, StorageError
from apps.web.core.tests.helpers import image_upload, pdf_upload
from apps.web.reservations import lifecycle
from apps.web.reservations.models import PaymentStatus, Reservation, ReservationStatus
from apps.web.reservations.tests.factories import ReservationFactory


def booking(**overrides) -> dict:
    data = {
        "name": "Cut Nyak Dhien",
        "email": "cut@example.com",
        "date": timezone.localdate(),
        "time": "19:30",
        "guests": 4,
    }
    data.update(overrides)
    return data


class TestQuote:
    """Tests for quote()."""

    def test_four_guests_at_minimum_deposit(self):
        quote = lifecycle.quote(4)

        assert quote.total_bill == Decimal("400000")
        assert quote.deposit_amount == Decimal("80000")
        assert quote.deposit_percentage == Decimal("20")

    def test_custom_percentage(self):
        assert lifecycle.quote(2, 50).deposit_amount == Decimal("100000")

    def test_uses_configured_price(self, settings):
        settings.PRICE_PER_GUEST = 150000

        assert lifecycle.quote(2).total_bill == Decimal("300000")

    @pytest.mark.parametrize("guests", [0, -1])
    def test_rejects_no_guests(self, guests):
        with pytest.raises(lifecycle.TransitionError) as exc_info:
            lifecycle.quote(guests)

        assert exc_info.value.code == "invalid_guests"

    @pytest.mark.parametrize("percentage", [10, 101, "abc"])
    def test_rejects_percentage_out_of_range(self, percentage):
        with pytest.raises(lifecycle.TransitionError) as exc_info:
            lifecycle.quote(4, percentage)

        assert exc_info.value.code == "invalid_percentage"


class TestPaymentStatusRules:
    """Tests for the payment status derivations."""

    @pytest.mark.parametrize(
        ("deposit", "total", "expected"),
        [
            ("400000", "400000", PaymentStatus.PAID),
            ("500000", "400000", PaymentStatus.PAID),
            ("80000", "400000", PaymentStatus.DEPOSIT),
            ("0", "400000", PaymentStatus.PENDING),
            ("0", "0", PaymentStatus.PENDING),
        ],
    )
    def test_for_amounts(self, deposit, total, expected):
        assert (
            lifecycle.payment_status_for_amounts(Decimal(deposit), Decimal(total))
            == expected
        )

    @pytest.mark.parametrize(
        ("percentage", "expected"),
        [
            ("100", PaymentStatus.PAID),
            ("150", PaymentStatus.PAID),
            ("50", PaymentStatus.DEPOSIT),
            ("0", PaymentStatus.PENDING),
        ],
    )
    def test_for_percentage(self, percentage, expected):
        assert lifecycle.payment_status_for_percentage(Decimal(percentage)) == expected


class TestReferences:
    """Tests for booking and invoice references."""

    def test_booking_ref_format(self):
        ref = lifecycle.generate_booking_ref()

        assert ref.startswith("WB-")
        assert len(ref) == 9

    def test_invoice_no_uses_today(self):
        invoice_no = lifecycle.generate_invoice_no()

        assert invoice_no.startswith(f"INV-{timezone.localdate():%Y%m%d}-")


@pytest.mark.django_db
class TestBook:
    """Tests for book()."""

    def test_creates_pending_reservation(self):
        reservation = lifecycle.book(**booking())

        reservation.refresh_from_db()
        assert reservation.status == ReservationStatus.PENDING
        assert reservation.payment_status == PaymentStatus.PENDING
        assert reservation.total_bill == Decimal("400000")
        assert reservation.deposit_amount == Decimal("80000")
        assert reservation.deposit_amount >= reservation.total_bill * Decimal("0.2")
        assert reservation.invoice_no.startswith("INV-")
        assert reservation.qr_payload == f"id={reservation.id};dep=80000"

    def test_auto_assign_stored_blank(self):
        reservation = lifecycle.book(**booking(table_number="Auto Assign"))

        assert reservation.table_number == ""

    def test_unknown_table_rejected(self):
        with pytest.raises(lifecycle.TransitionError) as exc_info:
            lifecycle.book(**booking(table_number="Rooftop-99"))

        assert exc_info.value.code == "invalid_table"
        assert not Reservation.objects.exists()


@pytest.mark.django_db
class TestAttachPaymentProof:
    """Tests for attach_payment_proof()."""

    def test_stores_proof_and_marks_deposit(self):
        reservation = ReservationFactory(name="Teuku Umar")

        lifecycle.attach_payment_proof(reservation, image_upload("receipt.jpg"))

        reservation.refresh_from_db()
        assert reservation.payment_status == PaymentStatus.DEPOSIT
        assert reservation.status == ReservationStatus.PENDING
        assert reservation.payment_proof_url.startswith("/assets/payment_proofs/")
        assert reservation.payment_proof_url.endswith("-Teuku_Umar.webp")

    def test_pdf_kept_as_pdf(self):
        reservation = ReservationFactory()

        lifecycle.attach_payment_proof(reservation, pdf_upload())

        assert reservation.payment_proof_url.endswith(".pdf")

    def test_refused_after_deposit(self):
        reservation = ReservationFactory(with_proof=True)

        with pytest.raises(lifecycle.TransitionError):
            lifecycle.attach_payment_proof(reservation, pdf_upload())

    def test_refused_when_rejected(self):
        reservation = ReservationFactory(status=ReservationStatus.REJECTED)

        with pytest.raises(lifecycle.TransitionError):
            lifecycle.attach_payment_proof(reservation, pdf_upload())


@pytest.mark.django_db
class TestConfirmPayment:
    """Tests for confirm_payment()."""

    def test_partial_deposit(self):
        reservation = ReservationFactory(with_proof=True)

        lifecycle.confirm_payment(reservation, "owner@example.com")

        reservation.refresh_from_db()
        assert reservation.status == ReservationStatus.CONFIRMED
        assert reservation.payment_status == PaymentStatus.DEPOSIT
        assert reservation.confirmed_by == "owner@example.com"
        assert reservation.confirmed_at is not None

    def test_full_deposit_is_paid(self):
        reservation = ReservationFactory(
            with_proof=True,
            deposit_amount=Decimal("400000"),
            deposit_percentage=Decimal("100"),
        )

        lifecycle.confirm_payment(reservation, "owner@example.com")

        assert reservation.payment_status == PaymentStatus.PAID

    def test_zero_deposit_stays_pending(self):
        reservation = ReservationFactory(with_proof=True, deposit_amount=Decimal("0"))

        lifecycle.confirm_payment(reservation, "owner@example.com")

        assert reservation.payment_status == PaymentStatus.PENDING

    def test_clears_previous_rejection(self):
        reservation = ReservationFactory(with_proof=True)
        lifecycle.reject(reservation, "staff@example.com", "Transfer not received")

        lifecycle.confirm_payment(reservation, "owner@example.com")

        reservation.refresh_from_db()
        assert reservation.status == ReservationStatus.CONFIRMED
        assert reservation.rejection_reason == ""
        assert reservation.rejected_at is None
        assert reservation.rejected_by == ""

    def test_refused_without_proof(self):
        reservation = ReservationFactory(payment_proof_url="")

        with pytest.raises(lifecycle.TransitionError) as exc_info:
            lifecycle.confirm_payment(reservation, "owner@example.com")

        assert exc_info.value.code == "missing_proof"
        reservation.refresh_from_db()
        assert reservation.status == ReservationStatus.PENDING
        assert reservation.payment_status == PaymentStatus.PENDING
        assert reservation.confirmed_at is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"confirmed": True},
            {"with_proof": True, "payment_status": PaymentStatus.PAID},
        ],
    )
    def test_refused_when_already_settled(self, overrides):
        reservation = ReservationFactory(**overrides)

        with pytest.raises(lifecycle.TransitionError):
            lifecycle.confirm_payment(reservation, "staff@example.com")

    def test_refused_when_final(self):
        reservation = ReservationFactory(status=ReservationStatus.ARRIVED)

        with pytest.raises(lifecycle.TransitionError):
            lifecycle.confirm_payment(reservation, "owner@example.com")


@pytest.mark.django_db
class TestReject:
    """Tests for reject()."""

    def test_rejects_with_reason(self):
        reservation = ReservationFactory(confirmed=True)

        lifecycle.reject(reservation, "owner@example.com", "  Fully booked  ")

        reservation.refresh_from_db()
        assert reservation.status == ReservationStatus.REJECTED
        assert reservation.payment_status == PaymentStatus.REJECTED
        assert reservation.rejection_reason == "Fully booked"
        assert reservation.rejected_by == "owner@example.com"
        assert reservation.confirmed_at is None

    @pytest.mark.parametrize("reason", ["", "   "])
    def test_blank_reason_writes_nothing(self, reason):
        reservation = ReservationFactory()
        before = reservation.updated_at

        with pytest.raises(lifecycle.TransitionError) as exc_info:
            lifecycle.reject(reservation, "owner@example.com", reason)

        assert exc_info.value.code == "reason_required"
        reservation.refresh_from_db()
        assert reservation.status == ReservationStatus.PENDING
        assert reservation.updated_at == before

    @pytest.mark.parametrize(
        "status",
        [ReservationStatus.ARRIVED, ReservationStatus.CANCELED, ReservationStatus.REJECTED],
    )
    def test_refused_for_closed_statuses(self, status):
        reservation = ReservationFactory(status=status)

        with pytest.raises(lifecycle.TransitionError):
            lifecycle.reject(reservation, "owner@example.com", "Too late")


@pytest.mark.django_db
class TestCheckIn:
    """Tests for mark_arrived() and undo_check_in()."""

    def test_mark_arrived_stamps_check_in(self):
        reservation = ReservationFactory(confirmed=True)

        lifecycle.mark_arrived(reservation)

        assert reservation.status == ReservationStatus.ARRIVED
        assert reservation.check_in_time is not None

    def test_mark_arrived_requires_confirmed(self):
        reservation = ReservationFactory()

        with pytest.raises(lifecycle.TransitionError):
            lifecycle.mark_arrived(reservation)

    def test_mark_arrived_keeps_existing_check_in(self):
        earlier = timezone.now() - datetime.timedelta(hours=2)
        reservation = ReservationFactory(confirmed=True, check_in_time=earlier)

        lifecycle.mark_arrived(reservation)

        reservation.refresh_from_db()
        assert reservation.check_in_time == earlier

    @pytest.mark.parametrize(
        "status", [ReservationStatus.PENDING, ReservationStatus.NO_SHOW]
    )
    def test_undo_resets_from_any_status(self, status):
        reservation = ReservationFactory(status=status, check_in_time=timezone.now())

        lifecycle.undo_check_in(reservation)

        assert reservation.status == ReservationStatus.CONFIRMED
        assert reservation.check_in_time is None

    def test_undo_restores_confirmed(self):
        reservation = ReservationFactory(confirmed=True)
        lifecycle.mark_arrived(reservation)

        lifecycle.undo_check_in(reservation)

        reservation.refresh_from_db()
        assert reservation.status == ReservationStatus.CONFIRMED
        assert reservation.check_in_time is None


@pytest.mark.django_db
class TestSetDepositPercentage:
    """Tests for set_deposit_percentage()."""

    def test_fifty_percent_of_four_guests(self):
        reservation = ReservationFactory()

        lifecycle.set_deposit_percentage(reservation, "50")

        reservation.refresh_from_db()
        assert reservation.deposit_amount == Decimal("200000")
        assert reservation.payment_status == PaymentStatus.DEPOSIT
        assert reservation.qr_payload.endswith(";dep=200000")

    def test_hundred_percent_is_paid(self):
        reservation = ReservationFactory()

        lifecycle.set_deposit_percentage(reservation, 100)

        assert reservation.payment_status == PaymentStatus.PAID
        assert reservation.deposit_amount == reservation.total_bill

    def test_zero_is_pending(self):
        reservation = ReservationFactory(with_proof=True)

        lifecycle.set_deposit_percentage(reservation, "0")

        assert reservation.payment_status == PaymentStatus.PENDING
        assert reservation.deposit_amount == Decimal("0")

    @pytest.mark.parametrize("value", ["-1", "abc", "nan", "1000"])
    def test_invalid_values(self, value):
        reservation = ReservationFactory()

        with pytest.raises(lifecycle.TransitionError):
            lifecycle.set_deposit_percentage(reservation, value)

        reservation.refresh_from_db()
        assert reservation.deposit_percentage == Decimal("20.00")

    def test_refused_when_final(self):
        reservation = ReservationFactory(status=ReservationStatus.CANCELED)

        with pytest.raises(lifecycle.TransitionError):
            lifecycle.set_deposit_percentage(reservation, "50")


@pytest.mark.django_db
class TestUpdateField:
    """Tests for inline edits."""

    def test_status_arrived_stamps_check_in(self):
        reservation = ReservationFactory()

        lifecycle.update_field(reservation, "status", "Arrived")

        assert reservation.check_in_time is not None

    def test_status_allows_any_known_value(self):
        reservation = ReservationFactory(payment_status=PaymentStatus.PENDING)

        lifecycle.update_field(reservation, "status", "Confirmed")

        reservation.refresh_from_db()
        assert reservation.status == ReservationStatus.CONFIRMED
        assert reservation.payment_status == PaymentStatus.PENDING

    def test_unknown_status(self):
        reservation = ReservationFactory()

        with pytest.raises(lifecycle.TransitionError):
            lifecycle.update_field(reservation, "status", "Lost")

    def test_table(self):
        reservation = ReservationFactory()

        lifecycle.update_field(reservation, "table_number", "VIP-03")

        reservation.refresh_from_db()
        assert reservation.table_number == "VIP-03"

    def test_notes(self):
        reservation = ReservationFactory()

        lifecycle.update_field(reservation, "notes", "Birthday cake at 20:00")

        reservation.refresh_from_db()
        assert reservation.notes == "Birthday cake at 20:00"

    def test_deposit_percentage_delegates(self):
        reservation = ReservationFactory()

        lifecycle.update_field(reservation, "deposit_percentage", "50")

        assert reservation.deposit_amount == Decimal("200000")

    def test_other_fields_refused(self):
        reservation = ReservationFactory()

        with pytest.raises(lifecycle.TransitionError):
            lifecycle.update_field(reservation, "total_bill", "1")

    def test_final_status_blocks_edits(self):
        reservation = ReservationFactory(status=ReservationStatus.NO_SHOW)

        with pytest.raises(lifecycle.TransitionError) as exc_info:
            lifecycle.update_field(reservation, "notes", "late")

        assert exc_info.value.code == "final_status"


@pytest.mark.django_db
class TestDeleteReservation:
    """Tests for delete_reservation()."""

    def test_deletes_row_and_proof(self):
        reservation = ReservationFactory(with_proof=True)
        proof_url = reservation.payment_proof_url

        with patch("apps.web.reservations.lifecycle.remove_asset") as remove:
            lifecycle.delete_reservation(reservation)

        assert not Reservation.objects.exists()
        remove.assert_called_once_with(AssetPrefix.PAYMENT_PROOFS, proof_url)

    def test_storage_failure_still_deletes_row(self):
        reservation = ReservationFactory(with_proof=True)

        with patch(
            "apps.web.reservations.lifecycle.remove_asset",
            side_effect=StorageError("boom"),
        ):
            with pytest.raises(StorageError):
                lifecycle.delete_reservation(reservation)

        assert not Reservation.objects.exists()

    def test_without_proof(self):
        reservation = ReservationFactory()

        with patch("apps.web.reservations.lifecycle.remove_asset") as remove:
            lifecycle.delete_reservation(reservation)

        remove.assert_not_called()
