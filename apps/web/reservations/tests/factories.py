"""Factory classes for reservation models."""

import datetime
from decimal import Decimal

from django.utils import timezone

import factory

from apps.web.reservations.models import PaymentStatus, Reservation, ReservationStatus


class ReservationFactory(factory.django.DjangoModelFactory):
    """A 4-guest booking at the minimum deposit, awaiting payment."""

    class Meta:
        model = Reservation

    booking_ref = factory.Sequence(lambda n: f"WB-{n:06X}")
    name = factory.Faker("name")
    email = factory.Sequence(lambda n: f"guest{n}@example.com")
    phone = "+62 812 0000 0000"
    date = factory.LazyFunction(
        lambda: timezone.localdate() + datetime.timedelta(days=3)
    )
    time = datetime.time(19, 0)
    guests = 4
    table_number = ""
    message = ""
    total_bill = factory.LazyFunction(lambda: Decimal("400000.00"))
    deposit_amount = factory.LazyFunction(lambda: Decimal("80000.00"))
    deposit_percentage = factory.LazyFunction(lambda: Decimal("20.00"))
    status = ReservationStatus.PENDING
    payment_status = PaymentStatus.PENDING
    invoice_no = factory.Sequence(lambda n: f"INV-20260101-{n:04X}")

    class Params:
        with_proof = factory.Trait(
            payment_proof_url="/assets/payment_proofs/1700000000000-guest.webp",
            payment_status=PaymentStatus.DEPOSIT,
        )
        confirmed = factory.Trait(
            status=ReservationStatus.CONFIRMED,
            payment_status=PaymentStatus.DEPOSIT,
            payment_proof_url="/assets/payment_proofs/1700000000000-guest.webp",
            confirmed_by="owner@example.com",
            confirmed_at=factory.LazyFunction(timezone.now),
        )
