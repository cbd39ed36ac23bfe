"""
Pydantic schemas for the content API and dashboard forms.

Response schemas define the public API contract; form schemas validate what
editors and guests submit before anything is written.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from apps.web.core.schemas import EMAIL_PATTERN

URL_PATTERN = r"^https?://\S+$"

# =============================================================================
# Content Responses
# =============================================================================


class MenuItemSchema(BaseModel):
    """A dish on the public menu."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: Decimal
    category: str
    type: str = Field(validation_alias="cuisine_type")
    image_url: str
    sort_order: int


class MenuListResponse(BaseModel):
    """Response for GET /api/menu."""

    items: list[MenuItemSchema]


class GalleryImageSchema(BaseModel):
    """A gallery photo."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    image_url: str
    alt_text: str
    description: str


class GalleryListResponse(BaseModel):
    """Response for GET /api/gallery."""

    images: list[GalleryImageSchema]


class SpecialOfferSchema(BaseModel):
    """A special offer."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    time_period: str
    image_url: str


class OfferListResponse(BaseModel):
    """Response for GET /api/offers."""

    offers: list[SpecialOfferSchema]


class ReviewSchema(BaseModel):
    """An approved guest review."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    rating: int
    comment: str
    created_at: datetime


class ReviewListResponse(BaseModel):
    """Response for GET /api/reviews."""

    reviews: list[ReviewSchema]


class ContactInfoSchema(BaseModel):
    """Contact section content."""

    model_config = ConfigDict(from_attributes=True)

    address: str
    phone: str
    email: str
    google_maps_embed_url: str
    opening_hours: str


class AboutSectionSchema(BaseModel):
    """About section content."""

    model_config = ConfigDict(from_attributes=True)

    title: str
    content: str
    image_url: str


class HeroContentSchema(BaseModel):
    """Hero banner content."""

    model_config = ConfigDict(from_attributes=True)

    title: str
    subtitle: str
    image_url: str = Field(validation_alias="background_url")


class HomeResponse(BaseModel):
    """Everything the home page renders, in one payload."""

    hero: HeroContentSchema | None
    about: AboutSectionSchema | None
    offers: list[SpecialOfferSchema]
    gallery: list[GalleryImageSchema]
    reviews: list[ReviewSchema]
    contact: ContactInfoSchema | None


# =============================================================================
# Public Requests
# =============================================================================


class ReviewCreateRequest(BaseModel):
    """Request body for POST /api/reviews."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=200)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=10, max_length=2000)


class ReviewCreateResponse(BaseModel):
    """Response for POST /api/reviews."""

    id: int
    message: str


class NewsletterSubscribeRequest(BaseModel):
    """Request body for POST /api/newsletter."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., max_length=254, pattern=EMAIL_PATTERN)


# =============================================================================
# Dashboard Forms
# =============================================================================


class FormSchema(BaseModel):
    """
    Base for dashboard form validation.

    Blank submitted values are treated as "not provided" so optional fields
    fall back to their defaults and required ones report "Field required".
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (isinstance(value, str) and not value.strip())
            }
        return data


class MenuItemForm(FormSchema):
    name: str = Field(..., min_length=2, max_length=200)
    description: str = Field(..., min_length=10)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    category: Literal["appetizer", "main", "dessert", "drink"]
    cuisine_type: Literal["acehnese", "french", "other"]
    sort_order: int = Field(default=0, ge=0)


class GalleryImageForm(FormSchema):
    alt_text: str = Field(..., min_length=2, max_length=200)
    description: str = ""
    sort_order: int = Field(default=0, ge=0)


class SpecialOfferForm(FormSchema):
    title: str = Field(..., min_length=2, max_length=200)
    description: str = Field(..., min_length=10)
    time_period: str = Field(default="", max_length=200)
    sort_order: int = Field(default=0, ge=0)


class ContactInfoForm(FormSchema):
    address: str = Field(..., min_length=5)
    phone: str = Field(default="", max_length=50)
    email: str = Field(default="", max_length=254, pattern=EMAIL_PATTERN)
    google_maps_embed_url: str = Field(
        default="", max_length=1000, pattern=URL_PATTERN
    )
    opening_hours: str = ""


class AboutSectionForm(FormSchema):
    title: str = Field(..., min_length=2, max_length=200)
    content: str = Field(..., min_length=10)


class HeroContentForm(FormSchema):
    title: str = Field(..., min_length=2, max_length=200)
    subtitle: str = ""
