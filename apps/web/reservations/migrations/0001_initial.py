import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "booking_ref",
                    models.CharField(
                        help_text="Short reference shared with the guest",
                        max_length=20,
                        unique=True,
                    ),
                ),
                ("name", models.CharField(max_length=200)),
                ("email", models.EmailField(max_length=254)),
                ("phone", models.CharField(blank=True, max_length=30)),
                ("date", models.DateField()),
                ("time", models.TimeField()),
                ("guests", models.PositiveIntegerField()),
                (
                    "table_number",
                    models.CharField(
                        blank=True, help_text="Blank = auto assign", max_length=20
                    ),
                ),
                ("message", models.TextField(blank=True, help_text="Guest's note")),
                (
                    "notes",
                    models.TextField(blank=True, help_text="Internal staff notes"),
                ),
                ("total_bill", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "deposit_amount",
                    models.DecimalField(decimal_places=2, max_digits=12),
                ),
                (
                    "deposit_percentage",
                    models.DecimalField(decimal_places=2, max_digits=5),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Pending", "Pending"),
                            ("Confirmed", "Confirmed"),
                            ("Arrived", "Arrived"),
                            ("Canceled", "Canceled"),
                            ("No-show", "No-show"),
                            ("Rejected", "Rejected"),
                        ],
                        default="Pending",
                        max_length=20,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("Pending", "Pending"),
                            ("Deposit", "Deposit"),
                            ("Paid", "Paid"),
                            ("Rejected", "Rejected"),
                        ],
                        default="Pending",
                        max_length=20,
                    ),
                ),
                ("payment_proof_url", models.CharField(blank=True, max_length=500)),
                ("qr_payload", models.CharField(blank=True, max_length=255)),
                ("confirmed_at", models.DateTimeField(blank=True, null=True)),
                ("confirmed_by", models.CharField(blank=True, max_length=254)),
                ("rejected_at", models.DateTimeField(blank=True, null=True)),
                ("rejected_by", models.CharField(blank=True, max_length=254)),
                ("rejection_reason", models.TextField(blank=True)),
                ("check_in_time", models.DateTimeField(blank=True, null=True)),
                ("invoice_no", models.CharField(blank=True, max_length=40)),
                ("invoice_issued_at", models.DateTimeField(blank=True, null=True)),
                (
                    "email_pending_sent_at",
                    models.DateTimeField(blank=True, null=True),
                ),
                (
                    "email_confirmed_sent_at",
                    models.DateTimeField(blank=True, null=True),
                ),
                (
                    "email_invoice_sent_at",
                    models.DateTimeField(blank=True, null=True),
                ),
            ],
            options={
                "ordering": ["-date", "-time"],
                "indexes": [
                    models.Index(
                        fields=["date", "time"], name="reservation_date_3f8c1e_idx"
                    ),
                    models.Index(
                        fields=["status", "date"], name="reservation_status_9a4b2d_idx"
                    ),
                ],
            },
        ),
    ]
