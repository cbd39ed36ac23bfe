"""
Pydantic schemas for the reservation API.
"""

from datetime import date as date_type
from datetime import datetime
from datetime import time as time_type
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from apps.web.core.schemas import EMAIL_PATTERN

# =============================================================================
# Booking
# =============================================================================


class ReservationCreateRequest(BaseModel):
    """Request body for POST /api/reservations."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=200)
    email: str = Field(..., max_length=254, pattern=EMAIL_PATTERN)
    phone: str = Field(default="", max_length=30)
    date: date_type
    time: time_type
    guests: int = Field(..., ge=1, le=100)
    table_number: str = Field(default="", max_length=20)
    message: str = Field(default="", max_length=2000)
    deposit_percentage: Decimal | None = Field(default=None, ge=0, le=100)


class ReservationCreateResponse(BaseModel):
    """Response for POST /api/reservations."""

    id: UUID
    booking_ref: str
    status: str
    payment_status: str
    total_bill: Decimal
    deposit_amount: Decimal
    deposit_percentage: Decimal
    status_url: str


class BankDetailsSchema(BaseModel):
    """Where to transfer the deposit."""

    bank_name: str
    account_name: str
    account_number: str


class ReservationStatusResponse(BaseModel):
    """Response for GET /api/reservations/{id} (the guest status page)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    short_id: str
    booking_ref: str
    name: str
    email: str
    phone: str
    date: date_type
    time: time_type
    guests: int
    table_number: str
    message: str
    total_bill: Decimal
    deposit_amount: Decimal
    deposit_percentage: Decimal
    status: str
    payment_status: str
    status_headline: str
    rejection_reason: str
    payment_proof_url: str
    qr_payload: str
    can_upload_proof: bool
    invoice_no: str
    confirmed_at: datetime | None
    check_in_time: datetime | None
    bank_details: BankDetailsSchema | None = None


class UpcomingReservationSchema(BaseModel):
    """A confirmed booking in the public 'upcoming' list."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    date: date_type
    time: time_type
    table_number: str


class UpcomingReservationsResponse(BaseModel):
    """Response for GET /api/reservations/upcoming."""

    reservations: list[UpcomingReservationSchema]


class BookingOptionsResponse(BaseModel):
    """Response for GET /api/reservations/options."""

    tables: list[str]
    price_per_guest: Decimal
    min_deposit_percentage: Decimal


# =============================================================================
# Functions
# =============================================================================


class FunctionInvokeRequest(BaseModel):
    """Request body for POST /api/functions/{name}."""

    booking_id: str = Field(..., alias="bookingId", min_length=1)
