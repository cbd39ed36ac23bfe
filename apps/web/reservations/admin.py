"""Admin registration for reservations."""

from django.contrib import admin

from apps.web.reservations.models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin for reservations."""

    list_display = [
        "booking_ref",
        "name",
        "date",
        "time",
        "guests",
        "table_number",
        "status",
        "payment_status",
        "total_bill",
    ]
    list_filter = ["status", "payment_status", "date"]
    search_fields = ["booking_ref", "name", "email", "phone", "invoice_no"]
    readonly_fields = [
        "id",
        "booking_ref",
        "created_at",
        "updated_at",
        "confirmed_at",
        "confirmed_by",
        "rejected_at",
        "rejected_by",
        "check_in_time",
        "invoice_issued_at",
        "email_pending_sent_at",
        "email_confirmed_sent_at",
        "email_invoice_sent_at",
    ]
    date_hierarchy = "date"

    fieldsets = [
        (None, {"fields": ["id", "booking_ref", "status", "payment_status"]}),
        ("Guest", {"fields": ["name", "email", "phone"]}),
        (
            "Booking",
            {"fields": ["date", "time", "guests", "table_number", "message", "notes"]},
        ),
        (
            "Payment",
            {
                "fields": [
                    "total_bill",
                    "deposit_percentage",
                    "deposit_amount",
                    "payment_proof_url",
                    "qr_payload",
                    "invoice_no",
                    "invoice_issued_at",
                ]
            },
        ),
        (
            "Audit",
            {
                "fields": [
                    "confirmed_at",
                    "confirmed_by",
                    "rejected_at",
                    "rejected_by",
                    "rejection_reason",
                    "check_in_time",
                ],
                "classes": ["collapse"],
            },
        ),
        (
            "E-mails",
            {
                "fields": [
                    "email_pending_sent_at",
                    "email_confirmed_sent_at",
                    "email_invoice_sent_at",
                ],
                "classes": ["collapse"],
            },
        ),
        (
            "Timestamps",
            {"fields": ["created_at", "updated_at"], "classes": ["collapse"]},
        ),
    ]
