"""Admin registration for restaurant content models."""

from django.contrib import admin

from apps.web.restaurant.models import (
    AboutSection,
    ContactInfo,
    GalleryImage,
    HeroContent,
    HeroImage,
    MenuItem,
    NewsletterSubscriber,
    Review,
    SpecialOffer,
)


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin for menu items."""

    list_display = ["name", "category", "cuisine_type", "price", "sort_order"]
    list_filter = ["category", "cuisine_type"]
    search_fields = ["name", "description"]
    list_editable = ["sort_order"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(GalleryImage)
class GalleryImageAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin for gallery images."""

    list_display = ["alt_text", "sort_order", "created_at"]
    search_fields = ["alt_text", "description"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(SpecialOffer)
class SpecialOfferAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin for special offers."""

    list_display = ["title", "time_period", "sort_order"]
    search_fields = ["title", "description"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin for guest reviews."""

    list_display = ["name", "rating", "is_approved", "created_at"]
    list_filter = ["is_approved", "rating"]
    search_fields = ["name", "comment"]
    actions = ["approve"]
    date_hierarchy = "created_at"

    @admin.action(description="Approve selected reviews")
    def approve(self, request, queryset):  # type: ignore[no-untyped-def]
        queryset.update(is_approved=True)


@admin.register(HeroImage)
class HeroImageAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["image_url", "alt_text", "created_at"]


@admin.register(ContactInfo, AboutSection, HeroContent)
class SingletonAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Single-row sections cannot be added twice."""

    readonly_fields = ["created_at", "updated_at"]

    def has_add_permission(self, request):  # type: ignore[no-untyped-def]
        return not self.model.objects.exists()


@admin.register(NewsletterSubscriber)
class NewsletterSubscriberAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["email", "created_at"]
    search_fields = ["email"]
    date_hierarchy = "created_at"
