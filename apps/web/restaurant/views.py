"""
Content API views - public endpoints for the restaurant website.

Read endpoints serve the marketing pages (menu, gallery, offers, reviews,
hero, about, contact). Guests can submit reviews (held for approval) and
subscribe to the newsletter.
"""

import json
import logging

from django.db import IntegrityError, transaction
from django.http import HttpRequest, JsonResponse
from django.views.decorators.cache import cache_control
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from pydantic import ValidationError as PydanticValidationError

from apps.web.core.http import json_response, validation_details, validation_error_response
from apps.web.restaurant.models import (
    AboutSection,
    ContactInfo,
    GalleryImage,
    HeroContent,
    MenuItem,
    NewsletterSubscriber,
    Review,
    SpecialOffer,
)
from apps.web.restaurant.serializers import (
    AboutSectionSchema,
    ContactInfoSchema,
    GalleryImageSchema,
    GalleryListResponse,
    HeroContentSchema,
    HomeResponse,
    MenuItemSchema,
    MenuListResponse,
    NewsletterSubscribeRequest,
    OfferListResponse,
    ReviewCreateRequest,
    ReviewCreateResponse,
    ReviewListResponse,
    ReviewSchema,
    SpecialOfferSchema,
)

logger = logging.getLogger(__name__)

ALREADY_SUBSCRIBED = "This email is already subscribed!"


def _parse_json(request: HttpRequest) -> dict | None:
    try:
        body = json.loads(request.body)
    except json.JSONDecodeError:
        return None
    return body if isinstance(body, dict) else None


def _invalid_json() -> JsonResponse:
    return json_response({"error": "Invalid JSON in request body"}, status=400)


def _not_found(what: str) -> JsonResponse:
    return json_response({"error": f"{what} has not been set up yet"}, status=404)


def _hero() -> HeroContentSchema | None:
    hero = HeroContent.load()
    if hero is None:
        return None
    return HeroContentSchema.model_validate(hero)


def _about() -> AboutSectionSchema | None:
    about = AboutSection.load()
    return AboutSectionSchema.model_validate(about) if about else None


def _contact() -> ContactInfoSchema | None:
    contact = ContactInfo.load()
    return ContactInfoSchema.model_validate(contact) if contact else None


@require_GET
@cache_control(max_age=60, public=True)
def home(request: HttpRequest) -> JsonResponse:
    """
    GET /api/home

    Returns every home page section in one payload.
    """
    response = HomeResponse(
        hero=_hero(),
        about=_about(),
        offers=[SpecialOfferSchema.model_validate(o) for o in SpecialOffer.objects.all()],
        gallery=[GalleryImageSchema.model_validate(g) for g in GalleryImage.objects.all()],
        reviews=[ReviewSchema.model_validate(r) for r in Review.objects.public()],
        contact=_contact(),
    )
    return json_response(response.model_dump(mode="json"))


@require_GET
@cache_control(max_age=60, public=True)
def menu(request: HttpRequest) -> JsonResponse:
    """
    GET /api/menu?category=main&type=acehnese&q=...

    Returns menu items, optionally filtered.
    """
    items = MenuItem.objects.filtered(
        query=request.GET.get("q", ""),
        category=request.GET.get("category", ""),
        cuisine_type=request.GET.get("type", ""),
        min_price=request.GET.get("min_price", ""),
        max_price=request.GET.get("max_price", ""),
    )
    response = MenuListResponse(
        items=[MenuItemSchema.model_validate(item) for item in items]
    )
    return json_response(response.model_dump(mode="json"))


@require_GET
@cache_control(max_age=60, public=True)
def gallery(request: HttpRequest) -> JsonResponse:
    """GET /api/gallery"""
    response = GalleryListResponse(
        images=[GalleryImageSchema.model_validate(g) for g in GalleryImage.objects.all()]
    )
    return json_response(response.model_dump(mode="json"))


@require_GET
@cache_control(max_age=60, public=True)
def offers(request: HttpRequest) -> JsonResponse:
    """GET /api/offers"""
    response = OfferListResponse(
        offers=[SpecialOfferSchema.model_validate(o) for o in SpecialOffer.objects.all()]
    )
    return json_response(response.model_dump(mode="json"))


@require_GET
@cache_control(max_age=300, public=True)
def hero(request: HttpRequest) -> JsonResponse:
    """GET /api/hero"""
    schema = _hero()
    if schema is None:
        return _not_found("Hero content")
    return json_response(schema.model_dump(mode="json"))


@require_GET
@cache_control(max_age=300, public=True)
def about(request: HttpRequest) -> JsonResponse:
    """GET /api/about"""
    schema = _about()
    if schema is None:
        return _not_found("About section")
    return json_response(schema.model_dump(mode="json"))


@require_GET
@cache_control(max_age=300, public=True)
def contact(request: HttpRequest) -> JsonResponse:
    """GET /api/contact"""
    schema = _contact()
    if schema is None:
        return _not_found("Contact info")
    return json_response(schema.model_dump(mode="json"))


@csrf_exempt
@require_http_methods(["GET", "POST"])
def reviews(request: HttpRequest) -> JsonResponse:
    """
    GET /api/reviews
    POST /api/reviews

    GET returns the latest approved reviews.
    POST submits a review; it stays hidden until an editor approves it.

    Request body: ReviewCreateRequest schema
    Response: ReviewCreateResponse (201) or ValidationErrorResponse (400)
    """
    if request.method == "GET":
        response = ReviewListResponse(
            reviews=[ReviewSchema.model_validate(r) for r in Review.objects.public()]
        )
        return json_response(response.model_dump(mode="json"))

    body = _parse_json(request)
    if body is None:
        return _invalid_json()

    try:
        review_request = ReviewCreateRequest.model_validate(body)
    except PydanticValidationError as e:
        return validation_error_response(validation_details(e))

    review = Review.objects.create(
        name=review_request.name,
        rating=review_request.rating,
        comment=review_request.comment,
    )
    logger.info("Review %s submitted by %s", review.pk, review.name)

    created = ReviewCreateResponse(
        id=review.pk,
        message="Thank you! Your review will appear once it has been approved.",
    )
    return json_response(created.model_dump(), status=201)


@csrf_exempt
@require_POST
def subscribe(request: HttpRequest) -> JsonResponse:
    """
    POST /api/newsletter

    Subscribe an e-mail address. Returns 409 when it is already subscribed.
    """
    body = _parse_json(request)
    if body is None:
        return _invalid_json()

    try:
        subscribe_request = NewsletterSubscribeRequest.model_validate(body)
    except PydanticValidationError as e:
        return validation_error_response(validation_details(e))

    email = subscribe_request.email.lower()
    try:
        with transaction.atomic():
            NewsletterSubscriber.objects.create(email=email)
    except IntegrityError:
        return json_response({"error": ALREADY_SUBSCRIBED}, status=409)

    logger.info("Newsletter subscription for %s", email)
    return json_response({"message": "Thank you for subscribing!"}, status=201)
