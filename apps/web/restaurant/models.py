"""
Restaurant content models - menu, gallery, offers, reviews and site sections.

Collections (menu items, gallery images, offers) are ordered by sort_order,
newest first within the same position. Hero, about and contact content are
single rows (see SingletonModel).
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.web.core.models import SingletonModel, TimeStampedModel

from .managers import MenuItemQuerySet, ReviewQuerySet, SpecialOfferQuerySet


class MenuCategory(models.TextChoices):
    """Course a menu item is listed under."""

    APPETIZER = "appetizer", "Appetizer"
    MAIN = "main", "Main Course"
    DESSERT = "dessert", "Dessert"
    DRINK = "drink", "Drink"


class CuisineType(models.TextChoices):
    """Kitchen the dish comes from."""

    ACEHNESE = "acehnese", "Acehnese"
    FRENCH = "french", "French"
    OTHER = "other", "Other"


class MenuItem(TimeStampedModel):
    """A dish or drink shown on the public menu."""

    name = models.CharField(max_length=200)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Price in IDR",
    )
    category = models.CharField(
        max_length=20,
        choices=MenuCategory.choices,
        default=MenuCategory.MAIN,
    )
    cuisine_type = models.CharField(
        max_length=20,
        choices=CuisineType.choices,
        default=CuisineType.ACEHNESE,
    )
    image_url = models.CharField(max_length=500, blank=True)
    sort_order = models.PositiveIntegerField(default=0)

    objects = MenuItemQuerySet.as_manager()

    class Meta:
        ordering = ["sort_order", "-created_at"]
        indexes = [
            models.Index(
                fields=["category", "cuisine_type"],
                name="restaurant__categor_6c1f0e_idx",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class GalleryImage(TimeStampedModel):
    """A photo in the public gallery."""

    image_url = models.CharField(max_length=500)
    alt_text = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "-created_at"]

    def __str__(self) -> str:
        return self.alt_text


class SpecialOffer(TimeStampedModel):
    """A promotion shown in the offers section."""

    title = models.CharField(max_length=200)
    description = models.TextField()
    time_period = models.CharField(
        max_length=200,
        blank=True,
        help_text="When the offer applies, e.g. 'Every Friday 17:00-20:00'",
    )
    image_url = models.CharField(max_length=500, blank=True)
    sort_order = models.PositiveIntegerField(default=0)

    objects = SpecialOfferQuerySet.as_manager()

    class Meta:
        ordering = ["sort_order", "-created_at"]

    def __str__(self) -> str:
        return self.title


class Review(models.Model):
    """
    A guest review.

    Submitted from the public site and hidden until approved by an editor.
    """

    name = models.CharField(max_length=200)
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    comment = models.TextField()
    is_approved = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = ReviewQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["is_approved", "-created_at"],
                name="restaurant__is_appr_4b2d9a_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.rating}/5)"


class ContactInfo(SingletonModel):
    """Address, phone, e-mail, map and opening hours."""

    address = models.TextField()
    phone = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)
    google_maps_embed_url = models.URLField(max_length=1000, blank=True)
    opening_hours = models.TextField(
        blank=True,
        help_text="HTML shown as-is in the contact section",
    )

    class Meta:
        verbose_name_plural = "contact info"

    def __str__(self) -> str:
        return "Contact info"


class AboutSection(SingletonModel):
    """The 'about us' section."""

    title = models.CharField(max_length=200)
    content = models.TextField()
    image_url = models.CharField(max_length=500, blank=True)

    def __str__(self) -> str:
        return self.title


class HeroImage(TimeStampedModel):
    """A background image uploaded for the hero banner."""

    image_url = models.CharField(max_length=500)
    alt_text = models.CharField(max_length=200, default="Hero Background")

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.image_url


class HeroContent(SingletonModel):
    """Headline, subtitle and background of the home page banner."""

    title = models.CharField(max_length=200)
    subtitle = models.TextField(blank=True)
    image_url = models.CharField(max_length=500, blank=True)
    selected_image = models.ForeignKey(
        HeroImage,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        help_text="Background currently shown (falls back to image_url)",
    )

    class Meta:
        verbose_name_plural = "hero content"

    def __str__(self) -> str:
        return self.title

    @property
    def background_url(self) -> str:
        if self.selected_image_id and self.selected_image:
            return self.selected_image.image_url
        return self.image_url


class NewsletterSubscriber(models.Model):
    """An e-mail address subscribed from the site footer."""

    email = models.EmailField(unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.email
