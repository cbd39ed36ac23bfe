"""Factory classes for restaurant models."""

from decimal import Decimal

import factory

from apps.web.restaurant.models import (
    AboutSection,
    ContactInfo,
    CuisineType,
    GalleryImage,
    HeroContent,
    HeroImage,
    MenuCategory,
    MenuItem,
    NewsletterSubscriber,
    Review,
    SpecialOffer,
)


class MenuItemFactory(factory.django.DjangoModelFactory):
    """Factory for MenuItem model."""

    class Meta:
        model = MenuItem

    name = factory.Sequence(lambda n: f"Dish {n}")
    description = factory.Faker("sentence", nb_words=8)
    price = factory.LazyFunction(lambda: Decimal("45000.00"))
    category = MenuCategory.MAIN
    cuisine_type = CuisineType.ACEHNESE
    image_url = ""
    sort_order = 0


class GalleryImageFactory(factory.django.DjangoModelFactory):
    """Factory for GalleryImage model."""

    class Meta:
        model = GalleryImage

    image_url = factory.Sequence(lambda n: f"/assets/gallery/{1700000000000 + n}.webp")
    alt_text = factory.Sequence(lambda n: f"Dining room {n}")
    description = ""
    sort_order = 0


class SpecialOfferFactory(factory.django.DjangoModelFactory):
    """Factory for SpecialOffer model."""

    class Meta:
        model = SpecialOffer

    title = factory.Sequence(lambda n: f"Offer {n}")
    description = factory.Faker("sentence", nb_words=8)
    time_period = "Every Friday"
    image_url = ""
    sort_order = 0


class ReviewFactory(factory.django.DjangoModelFactory):
    """Factory for Review model."""

    class Meta:
        model = Review

    name = factory.Faker("name")
    rating = 5
    comment = factory.Faker("sentence", nb_words=10)
    is_approved = True


class NewsletterSubscriberFactory(factory.django.DjangoModelFactory):
    """Factory for NewsletterSubscriber model."""

    class Meta:
        model = NewsletterSubscriber

    email = factory.Sequence(lambda n: f"guest{n}@example.com")


class HeroImageFactory(factory.django.DjangoModelFactory):
    """Factory for HeroImage model."""

    class Meta:
        model = HeroImage

    image_url = factory.Sequence(lambda n: f"/assets/hero/{1700000000000 + n}.webp")


class HeroContentFactory(factory.django.DjangoModelFactory):
    """Factory for the HeroContent singleton."""

    class Meta:
        model = HeroContent

    title = "Authentic Acehnese Cuisine"
    subtitle = "Flavours from the tip of Sumatra"
    image_url = "/assets/hero/default.webp"


class AboutSectionFactory(factory.django.DjangoModelFactory):
    """Factory for the AboutSection singleton."""

    class Meta:
        model = AboutSection

    title = "Our Story"
    content = "Family recipes from Banda Aceh, cooked fresh every day."
    image_url = ""


class ContactInfoFactory(factory.django.DjangoModelFactory):
    """Factory for the ContactInfo singleton."""

    class Meta:
        model = ContactInfo

    address = "Jl. Sudirman No. 1, Jakarta"
    phone = "+62 21 555 0101"
    email = "hello@wateebaroesa.test"
    google_maps_embed_url = ""
    opening_hours = "<p>Daily 11:00 - 22:00</p>"
