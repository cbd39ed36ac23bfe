"""
Integration tests for the public reservation API.
"""

import json
import uuid
from decimal import Decimal
from unittest.mock import patch

from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client as DjangoClient
from django.utils import timezone

import pytest

from apps.web.core.tests.helpers import image_upload
from apps.web.reservations.models import PaymentStatus, Reservation, ReservationStatus
from apps.web.reservations.tests.factories import ReservationFactory


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


def booking_body(**overrides) -> dict:
    body = {
        "name": "Cut Meutia",
        "email": "cut.meutia@example.com",
        "phone": "+62 812 1111 2222",
        "date": (timezone.localdate()).isoformat(),
        "time": "19:30",
        "guests": 4,
        "table_number": "Auto Assign",
        "message": "Anniversary dinner",
    }
    body.update(overrides)
    return body


def create(client: DjangoClient, body: dict, key: str = "key-1"):
    return client.post(
        "/api/reservations",
        data=json.dumps(body),
        content_type="application/json",
        HTTP_IDEMPOTENCY_KEY=key,
    )


@pytest.mark.django_db
class TestCreateReservation:
    """Tests for POST /api/reservations."""

    def test_creates_booking(self, api_client: DjangoClient):
        response = create(api_client, booking_body())

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "Pending"
        assert data["payment_status"] == "Pending"
        assert Decimal(data["total_bill"]) == Decimal("400000")
        assert Decimal(data["deposit_amount"]) == Decimal("80000")
        assert data["status_url"] == f"https://wateebaroesa.test/reservation/{data['id']}"

        reservation = Reservation.objects.get(pk=data["id"])
        assert reservation.table_number == ""
        assert reservation.message == "Anniversary dinner"

    def test_guest_may_choose_higher_deposit(self, api_client: DjangoClient):
        response = create(api_client, booking_body(deposit_percentage=50))

        assert Decimal(response.json()["deposit_amount"]) == Decimal("200000")

    def test_deposit_below_minimum_rejected(self, api_client: DjangoClient):
        response = create(api_client, booking_body(deposit_percentage=10))

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "deposit_percentage"
        assert not Reservation.objects.exists()

    def test_requires_idempotency_key(self, api_client: DjangoClient):
        response = api_client.post(
            "/api/reservations",
            data=json.dumps(booking_body()),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert not Reservation.objects.exists()

    def test_same_key_books_once(self, api_client: DjangoClient):
        first = create(api_client, booking_body(), key="same")
        second = create(api_client, booking_body(), key="same")

        assert first.json()["id"] == second.json()["id"]
        assert Reservation.objects.count() == 1

    def test_validation_errors(self, api_client: DjangoClient):
        response = create(api_client, booking_body(email="nope", guests=0))

        assert response.status_code == 400
        fields = {d["field"] for d in response.json()["details"]}
        assert fields == {"email", "guests"}

    def test_unknown_table(self, api_client: DjangoClient):
        response = create(api_client, booking_body(table_number="Roof-01"))

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "table_number"

    def test_sends_pending_invoice_after_commit(
        self, api_client: DjangoClient, django_capture_on_commit_callbacks
    ):
        with patch(
            "apps.web.reservations.notifications.send_email", return_value="em_1"
        ) as send:
            with django_capture_on_commit_callbacks(execute=True):
                response = create(api_client, booking_body())

        reservation = Reservation.objects.get(pk=response.json()["id"])
        send.assert_called_once()
        to_email, subject, html = send.call_args.args
        assert to_email == "cut.meutia@example.com"
        assert subject == f"Invoice {reservation.invoice_no} – Pending Payment"
        assert "Rp 80.000" in html
        assert reservation.email_pending_sent_at is not None

    def test_email_failure_does_not_fail_booking(
        self, api_client: DjangoClient, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            response = create(api_client, booking_body())

        assert response.status_code == 201
        reservation = Reservation.objects.get(pk=response.json()["id"])
        assert reservation.email_pending_sent_at is None


@pytest.mark.django_db
class TestBookingOptions:
    """Tests for GET /api/reservations/options."""

    def test_lists_tables_and_pricing(self, api_client: DjangoClient):
        data = api_client.get("/api/reservations/options").json()

        assert data["tables"][0] == "Auto Assign"
        assert "Terrace-05" in data["tables"]
        assert len(data["tables"]) == 51
        assert Decimal(data["price_per_guest"]) == Decimal("100000")
        assert Decimal(data["min_deposit_percentage"]) == Decimal("20")


@pytest.mark.django_db
class TestUpcoming:
    """Tests for GET /api/reservations/upcoming."""

    def test_only_confirmed_future(self, api_client: DjangoClient):
        ReservationFactory(confirmed=True, name="Confirmed Guest")
        ReservationFactory(name="Pending Guest")

        data = api_client.get("/api/reservations/upcoming").json()

        assert [r["name"] for r in data["reservations"]] == ["Confirmed Guest"]
        assert "email" not in data["reservations"][0]


@pytest.mark.django_db
class TestReservationStatus:
    """Tests for GET /api/reservations/{id}."""

    def test_pending_payment_includes_bank_details(self, api_client: DjangoClient, settings):
        settings.BANK_ACCOUNT_NUMBER = "1234567890"
        reservation = ReservationFactory()

        data = api_client.get(f"/api/reservations/{reservation.pk}").json()

        assert data["status_headline"] == "Pending Payment"
        assert data["can_upload_proof"] is True
        assert data["short_id"] == str(reservation.pk)[:8]
        assert data["bank_details"]["account_number"] == "1234567890"

    def test_awaiting_confirmation_hides_bank_details(self, api_client: DjangoClient):
        reservation = ReservationFactory(with_proof=True)

        data = api_client.get(f"/api/reservations/{reservation.pk}").json()

        assert data["status_headline"] == "Pending Admin Confirmation"
        assert data["bank_details"] is None

    def test_rejected_shows_reason(self, api_client: DjangoClient):
        reservation = ReservationFactory(
            status=ReservationStatus.REJECTED,
            payment_status=PaymentStatus.REJECTED,
            rejection_reason="Fully booked",
        )

        data = api_client.get(f"/api/reservations/{reservation.pk}").json()

        assert data["status_headline"] == "Reservation Rejected"
        assert data["rejection_reason"] == "Fully booked"

    def test_unknown_id(self, api_client: DjangoClient):
        response = api_client.get(f"/api/reservations/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response["Content-Type"] == "application/json"
        assert "not found" in response.json()["error"]


@pytest.mark.django_db
class TestUploadPaymentProof:
    """Tests for POST /api/reservations/{id}/payment-proof."""

    def test_upload(self, api_client: DjangoClient):
        reservation = ReservationFactory()

        response = api_client.post(
            f"/api/reservations/{reservation.pk}/payment-proof",
            {"file": image_upload("transfer.png", fmt="PNG")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["payment_status"] == "Deposit"
        assert data["status_headline"] == "Pending Admin Confirmation"
        assert data["payment_proof_url"].startswith("/assets/payment_proofs/")

    def test_missing_file(self, api_client: DjangoClient):
        reservation = ReservationFactory()

        response = api_client.post(f"/api/reservations/{reservation.pk}/payment-proof")

        assert response.status_code == 400

    def test_unknown_reservation_is_json_404(self, api_client: DjangoClient):
        response = api_client.post(
            f"/api/reservations/{uuid.uuid4()}/payment-proof",
            {"file": image_upload()},
        )

        assert response.status_code == 404
        assert "not found" in response.json()["error"]

    def test_second_upload_conflicts(self, api_client: DjangoClient):
        reservation = ReservationFactory(with_proof=True)

        response = api_client.post(
            f"/api/reservations/{reservation.pk}/payment-proof",
            {"file": image_upload()},
        )

        assert response.status_code == 409

    def test_invalid_image(self, api_client: DjangoClient):
        reservation = ReservationFactory()

        response = api_client.post(
            f"/api/reservations/{reservation.pk}/payment-proof",
            {"file": SimpleUploadedFile("x.jpg", b"garbage", content_type="image/jpeg")},
        )

        assert response.status_code == 400
        reservation.refresh_from_db()
        assert reservation.payment_status == PaymentStatus.PENDING


@pytest.mark.django_db
class TestInvokeFunction:
    """Tests for POST /api/functions/{name}."""

    def invoke(self, client: DjangoClient, name: str, body: dict):
        return client.post(
            f"/api/functions/{name}",
            data=json.dumps(body),
            content_type="application/json",
        )

    def test_sends_confirmation(self, api_client: DjangoClient):
        reservation = ReservationFactory(confirmed=True)

        with patch(
            "apps.web.reservations.notifications.send_email", return_value="em_2"
        ):
            response = self.invoke(
                api_client,
                "send-booking-confirmation",
                {"bookingId": str(reservation.pk)},
            )

        assert response.status_code == 200
        assert response.json() == {"ok": True, "skipped": False, "email_id": "em_2"}

    def test_unknown_function(self, api_client: DjangoClient):
        response = self.invoke(api_client, "send-fax", {"bookingId": "x"})

        assert response.status_code == 404

    def test_missing_booking_id(self, api_client: DjangoClient):
        response = self.invoke(api_client, "send-invoice", {})

        assert response.status_code == 400

    def test_unknown_booking(self, api_client: DjangoClient):
        response = self.invoke(
            api_client, "send-invoice", {"bookingId": str(uuid.uuid4())}
        )

        assert response.status_code == 404
