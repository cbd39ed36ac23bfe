import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


def _timestamps():
    return [
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


def _id():
    return (
        "id",
        models.BigAutoField(
            auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
        ),
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                _id(),
                *_timestamps(),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField()),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2, help_text="Price in IDR", max_digits=12
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("appetizer", "Appetizer"),
                            ("main", "Main Course"),
                            ("dessert", "Dessert"),
                            ("drink", "Drink"),
                        ],
                        default="main",
                        max_length=20,
                    ),
                ),
                (
                    "cuisine_type",
                    models.CharField(
                        choices=[
                            ("acehnese", "Acehnese"),
                            ("french", "French"),
                            ("other", "Other"),
                        ],
                        default="acehnese",
                        max_length=20,
                    ),
                ),
                ("image_url", models.CharField(blank=True, max_length=500)),
                ("sort_order", models.PositiveIntegerField(default=0)),
            ],
            options={
                "ordering": ["sort_order", "-created_at"],
                "indexes": [
                    models.Index(
                        fields=["category", "cuisine_type"],
                        name="restaurant__categor_6c1f0e_idx",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="GalleryImage",
            fields=[
                _id(),
                *_timestamps(),
                ("image_url", models.CharField(max_length=500)),
                ("alt_text", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("sort_order", models.PositiveIntegerField(default=0)),
            ],
            options={"ordering": ["sort_order", "-created_at"]},
        ),
        migrations.CreateModel(
            name="SpecialOffer",
            fields=[
                _id(),
                *_timestamps(),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField()),
                (
                    "time_period",
                    models.CharField(
                        blank=True,
                        help_text="When the offer applies, e.g. 'Every Friday 17:00-20:00'",
                        max_length=200,
                    ),
                ),
                ("image_url", models.CharField(blank=True, max_length=500)),
                ("sort_order", models.PositiveIntegerField(default=0)),
            ],
            options={"ordering": ["sort_order", "-created_at"]},
        ),
        migrations.CreateModel(
            name="Review",
            fields=[
                _id(),
                ("name", models.CharField(max_length=200)),
                (
                    "rating",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ]
                    ),
                ),
                ("comment", models.TextField()),
                ("is_approved", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["is_approved", "-created_at"],
                        name="restaurant__is_appr_4b2d9a_idx",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="ContactInfo",
            fields=[
                _id(),
                *_timestamps(),
                ("address", models.TextField()),
                ("phone", models.CharField(blank=True, max_length=50)),
                ("email", models.EmailField(blank=True, max_length=254)),
                (
                    "google_maps_embed_url",
                    models.URLField(blank=True, max_length=1000),
                ),
                (
                    "opening_hours",
                    models.TextField(
                        blank=True,
                        help_text="HTML shown as-is in the contact section",
                    ),
                ),
            ],
            options={"verbose_name_plural": "contact info"},
        ),
        migrations.CreateModel(
            name="AboutSection",
            fields=[
                _id(),
                *_timestamps(),
                ("title", models.CharField(max_length=200)),
                ("content", models.TextField()),
                ("image_url", models.CharField(blank=True, max_length=500)),
            ],
            options={"abstract": False},
        ),
        migrations.CreateModel(
            name="HeroImage",
            fields=[
                _id(),
                *_timestamps(),
                ("image_url", models.CharField(max_length=500)),
                (
                    "alt_text",
                    models.CharField(default="Hero Background", max_length=200),
                ),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="HeroContent",
            fields=[
                _id(),
                *_timestamps(),
                ("title", models.CharField(max_length=200)),
                ("subtitle", models.TextField(blank=True)),
                ("image_url", models.CharField(blank=True, max_length=500)),
                (
                    "selected_image",
                    models.ForeignKey(
                        blank=True,
                        help_text="Background currently shown (falls back to image_url)",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="restaurant.heroimage",
                    ),
                ),
            ],
            options={"verbose_name_plural": "hero content"},
        ),
        migrations.CreateModel(
            name="NewsletterSubscriber",
            fields=[
                _id(),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={"ordering": ["-created_at"]},
        ),
    ]
