"""
Content dashboard views - CRUD screens for the marketing site.

Full page views return complete HTML; list views return just the rows
partial on HTMX requests. Every mutation redirects back to its list with a
flash message, and validation errors re-render the form inline.
"""

import logging
from collections.abc import Callable
from typing import Any

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError, models, transaction
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from apps.web.core.decorators import editor_required
from apps.web.core.http import field_errors
from apps.web.core.storage import AssetPrefix, StorageError, remove_asset, upload_asset
from apps.web.dashboard.forms import FormField, bind_fields, post_data

from .models import (
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
from .serializers import (
    AboutSectionForm,
    ContactInfoForm,
    GalleryImageForm,
    HeroContentForm,
    MenuItemForm,
    SpecialOfferForm,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again."
IMAGE_REQUIRED = "Please select an image to upload."


# =============================================================================
# Field definitions
# =============================================================================


def _menu_fields() -> list[FormField]:
    return [
        FormField("name", "Name", required=True),
        FormField("description", "Description", kind="textarea", required=True),
        FormField("price", "Price (IDR)", kind="number", required=True),
        FormField(
            "category",
            "Category",
            kind="select",
            choices=list(MenuCategory.choices),
            required=True,
        ),
        FormField(
            "cuisine_type",
            "Type",
            kind="select",
            choices=list(CuisineType.choices),
            required=True,
        ),
        FormField("sort_order", "Sort order", kind="number", value=0),
        FormField("image", "Image", kind="file"),
    ]


def _gallery_fields() -> list[FormField]:
    return [
        FormField("image", "Image", kind="file", required=True),
        FormField("alt_text", "Alt text", required=True),
        FormField("description", "Description", kind="textarea"),
        FormField("sort_order", "Sort order", kind="number", value=0),
    ]


def _offer_fields() -> list[FormField]:
    return [
        FormField("title", "Title", required=True),
        FormField("description", "Description", kind="textarea", required=True),
        FormField("time_period", "Time period", help_text="e.g. Every Friday"),
        FormField("sort_order", "Sort order", kind="number", value=0),
        FormField("image", "Image", kind="file"),
    ]


def _hero_fields() -> list[FormField]:
    return [
        FormField("title", "Title", required=True),
        FormField("subtitle", "Subtitle", kind="textarea"),
        FormField("image", "Background image", kind="file"),
    ]


def _about_fields() -> list[FormField]:
    return [
        FormField("title", "Title", required=True),
        FormField("content", "Content", kind="textarea", required=True),
        FormField("image", "Image", kind="file"),
    ]


def _contact_fields() -> list[FormField]:
    return [
        FormField("address", "Address", kind="textarea", required=True),
        FormField("phone", "Phone"),
        FormField("email", "Email", kind="email"),
        FormField("google_maps_embed_url", "Google Maps embed URL", kind="url"),
        FormField(
            "opening_hours",
            "Opening hours",
            kind="textarea",
            help_text="HTML is allowed",
        ),
    ]


# =============================================================================
# Shared helpers
# =============================================================================


def _instance_values(instance: models.Model, fields: list[FormField]) -> dict[str, Any]:
    return {
        f.name: getattr(instance, f.name, "")
        for f in fields
        if f.kind != "file" and hasattr(instance, f.name)
    }


def _render_form(
    request: HttpRequest,
    *,
    section: str,
    title: str,
    fields: list[FormField],
    action_url: str,
    cancel_url: str,
    image_url: str = "",
    form_error: str = "",
    status: int = 200,
) -> HttpResponse:
    return render(
        request,
        "dashboard/form.html",
        {
            "section": section,
            "title": title,
            "fields": fields,
            "action_url": action_url,
            "cancel_url": cancel_url,
            "image_url": image_url,
            "form_error": form_error,
        },
        status=status,
    )


def _remove_image(request: HttpRequest, prefix: str, url: str) -> None:
    """Remove a stored file; a failure is reported but does not undo the change."""
    try:
        remove_asset(prefix, url)
    except StorageError as e:
        logger.warning("Could not remove %s: %s", url, e.message)
        messages.warning(request, "The old image could not be removed from storage.")


def _save_with_image(
    request: HttpRequest,
    instance: models.Model,
    form_class: type[BaseModel],
    prefix: str | None,
    *,
    image_required: bool = False,
) -> dict[str, str]:
    """
    Validate the submitted form, store a newly uploaded image and save the row.

    The previous image is removed only once the row points at the new one.

    Returns:
        Inline errors keyed by field name (empty on success).
    """
    errors: dict[str, str] = {}
    form: BaseModel | None = None
    try:
        form = form_class.model_validate(post_data(request))
    except PydanticValidationError as e:
        errors = field_errors(e)

    upload = request.FILES.get("image") if prefix else None
    previous_url = getattr(instance, "image_url", "")
    if image_required and not upload and not previous_url:
        errors["image"] = IMAGE_REQUIRED
    if errors or form is None:
        return errors

    if upload:
        try:
            instance.image_url = upload_asset(prefix, upload)  # type: ignore[arg-type,attr-defined]
        except StorageError as e:
            return {"image": e.message}

    for name, value in form.model_dump().items():
        setattr(instance, name, value)
    try:
        instance.save()
    except DatabaseError:
        logger.exception("Failed to save %s", instance._meta.label)
        return {"form": GENERIC_ERROR}

    if upload and previous_url:
        _remove_image(request, prefix, previous_url)  # type: ignore[arg-type]
    return {}


def _edit_item(
    request: HttpRequest,
    *,
    model: type[models.Model],
    item_id: int | None,
    form_class: type[BaseModel],
    fields_factory: Callable[[], list[FormField]],
    prefix: str,
    section: str,
    noun: str,
    list_url: str,
    create_url: str,
    edit_url: str,
    image_required: bool = False,
) -> HttpResponse:
    """Create (item_id is None) or edit one row of a content collection."""
    if item_id is None:
        instance = model()
        action_url = reverse(create_url)
        title = f"Add {noun}"
    else:
        instance = get_object_or_404(model, pk=item_id)
        action_url = reverse(edit_url, args=[item_id])
        title = f"Edit {noun}"

    fields = fields_factory()
    errors: dict[str, str] = {}
    values = _instance_values(instance, fields) if item_id else {}

    if request.method == "POST":
        errors = _save_with_image(
            request, instance, form_class, prefix, image_required=image_required
        )
        if not errors:
            verb = "added" if item_id is None else "updated"
            logger.info("%s %s %s by %s", noun, instance.pk, verb, request.user)
            messages.success(request, f"{noun} {verb} successfully.")
            return redirect(list_url)
        values = post_data(request)

    return _render_form(
        request,
        section=section,
        title=title,
        fields=bind_fields(fields, values, errors),
        action_url=action_url,
        cancel_url=reverse(list_url),
        image_url=getattr(instance, "image_url", ""),
        form_error=errors.get("form", ""),
        status=400 if errors else 200,
    )


def _delete_item(
    request: HttpRequest,
    *,
    model: type[models.Model],
    item_id: int,
    prefix: str,
    noun: str,
    list_url: str,
) -> HttpResponse:
    """Delete a row and its stored image."""
    instance = get_object_or_404(model, pk=item_id)
    image_url = getattr(instance, "image_url", "")
    try:
        instance.delete()
    except DatabaseError:
        logger.exception("Failed to delete %s %s", noun, item_id)
        messages.error(request, GENERIC_ERROR)
        return redirect(list_url)

    if image_url:
        _remove_image(request, prefix, image_url)
    logger.info("%s %s deleted by %s", noun, item_id, request.user)
    messages.success(request, f"{noun} deleted successfully.")
    return redirect(list_url)


def _list_response(
    request: HttpRequest, template: str, partial: str, context: dict[str, Any]
) -> HttpResponse:
    # Return partial for HTMX requests, full page otherwise
    if request.headers.get("HX-Request"):
        return render(request, partial, context)
    return render(request, template, context)


# =============================================================================
# Menu
# =============================================================================


@login_required
@require_GET
def menu_list(request: HttpRequest) -> HttpResponse:
    """
    GET /dashboard/content/menu/

    Menu items with search, category, type and price range filters.
    """
    filters = {
        key: request.GET.get(key, "").strip()
        for key in ("q", "category", "type", "min_price", "max_price")
    }
    items = MenuItem.objects.filtered(
        query=filters["q"],
        category=filters["category"],
        cuisine_type=filters["type"],
        min_price=filters["min_price"],
        max_price=filters["max_price"],
    )
    context = {
        "section": "menu",
        "items": items,
        "filters": filters,
        "categories": MenuCategory.choices,
        "cuisine_types": CuisineType.choices,
        "total_count": MenuItem.objects.count(),
    }
    return _list_response(
        request,
        "restaurant/dashboard/menu_list.html",
        "restaurant/dashboard/partials/menu_rows.html",
        context,
    )


@login_required
@editor_required
@require_http_methods(["GET", "POST"])
def menu_edit(request: HttpRequest, item_id: int | None = None) -> HttpResponse:
    """
    GET/POST /dashboard/content/menu/new/
    GET/POST /dashboard/content/menu/{item_id}/edit/
    """
    return _edit_item(
        request,
        model=MenuItem,
        item_id=item_id,
        form_class=MenuItemForm,
        fields_factory=_menu_fields,
        prefix=AssetPrefix.MENU,
        section="menu",
        noun="Menu item",
        list_url="content:menu_list",
        create_url="content:menu_create",
        edit_url="content:menu_edit",
    )


@login_required
@editor_required
@require_POST
def menu_delete(request: HttpRequest, item_id: int) -> HttpResponse:
    """POST /dashboard/content/menu/{item_id}/delete/"""
    return _delete_item(
        request,
        model=MenuItem,
        item_id=item_id,
        prefix=AssetPrefix.MENU,
        noun="Menu item",
        list_url="content:menu_list",
    )


# =============================================================================
# Gallery
# =============================================================================


@login_required
@require_GET
def gallery_list(request: HttpRequest) -> HttpResponse:
    """GET /dashboard/content/gallery/"""
    return render(
        request,
        "restaurant/dashboard/gallery_list.html",
        {"section": "gallery", "images": GalleryImage.objects.all()},
    )


@login_required
@editor_required
@require_http_methods(["GET", "POST"])
def gallery_edit(request: HttpRequest, item_id: int | None = None) -> HttpResponse:
    """
    GET/POST /dashboard/content/gallery/new/
    GET/POST /dashboard/content/gallery/{item_id}/edit/

    An image is required when adding.
    """
    return _edit_item(
        request,
        model=GalleryImage,
        item_id=item_id,
        form_class=GalleryImageForm,
        fields_factory=_gallery_fields,
        prefix=AssetPrefix.GALLERY,
        section="gallery",
        noun="Gallery image",
        list_url="content:gallery_list",
        create_url="content:gallery_create",
        edit_url="content:gallery_edit",
        image_required=True,
    )


@login_required
@editor_required
@require_POST
def gallery_delete(request: HttpRequest, item_id: int) -> HttpResponse:
    """POST /dashboard/content/gallery/{item_id}/delete/"""
    return _delete_item(
        request,
        model=GalleryImage,
        item_id=item_id,
        prefix=AssetPrefix.GALLERY,
        noun="Gallery image",
        list_url="content:gallery_list",
    )


# =============================================================================
# Special offers
# =============================================================================


@login_required
@require_GET
def offer_list(request: HttpRequest) -> HttpResponse:
    """
    GET /dashboard/content/offers/

    Offers with search over title and description.
    """
    search_query = request.GET.get("q", "").strip()
    context = {
        "section": "offers",
        "offers": SpecialOffer.objects.search(search_query),
        "search_query": search_query,
    }
    return _list_response(
        request,
        "restaurant/dashboard/offer_list.html",
        "restaurant/dashboard/partials/offer_rows.html",
        context,
    )


@login_required
@editor_required
@require_http_methods(["GET", "POST"])
def offer_edit(request: HttpRequest, item_id: int | None = None) -> HttpResponse:
    """
    GET/POST /dashboard/content/offers/new/
    GET/POST /dashboard/content/offers/{item_id}/edit/
    """
    return _edit_item(
        request,
        model=SpecialOffer,
        item_id=item_id,
        form_class=SpecialOfferForm,
        fields_factory=_offer_fields,
        prefix=AssetPrefix.OFFERS,
        section="offers",
        noun="Special offer",
        list_url="content:offer_list",
        create_url="content:offer_create",
        edit_url="content:offer_edit",
    )


@login_required
@editor_required
@require_POST
def offer_delete(request: HttpRequest, item_id: int) -> HttpResponse:
    """POST /dashboard/content/offers/{item_id}/delete/"""
    return _delete_item(
        request,
        model=SpecialOffer,
        item_id=item_id,
        prefix=AssetPrefix.OFFERS,
        noun="Special offer",
        list_url="content:offer_list",
    )


# =============================================================================
# Reviews
# =============================================================================


@login_required
@require_GET
def review_list(request: HttpRequest) -> HttpResponse:
    """
    GET /dashboard/content/reviews/?status=pending|approved

    All reviews, newest first.
    """
    reviews = Review.objects.all()
    status = request.GET.get("status", "")
    if status == "pending":
        reviews = reviews.pending()
    elif status == "approved":
        reviews = reviews.approved()

    return render(
        request,
        "restaurant/dashboard/review_list.html",
        {
            "section": "reviews",
            "reviews": reviews,
            "status": status,
            "pending_count": Review.objects.pending().count(),
        },
    )


@login_required
@editor_required
@require_POST
def review_approve(request: HttpRequest, review_id: int) -> HttpResponse:
    """POST /dashboard/content/reviews/{review_id}/approve/"""
    review = get_object_or_404(Review, pk=review_id)
    review.is_approved = True
    review.save(update_fields=["is_approved"])
    logger.info("Review %s approved by %s", review_id, request.user)
    messages.success(request, "Review approved.")
    return redirect("content:review_list")


@login_required
@editor_required
@require_POST
def review_delete(request: HttpRequest, review_id: int) -> HttpResponse:
    """POST /dashboard/content/reviews/{review_id}/delete/"""
    review = get_object_or_404(Review, pk=review_id)
    review.delete()
    logger.info("Review %s deleted by %s", review_id, request.user)
    messages.success(request, "Review deleted.")
    return redirect("content:review_list")


# =============================================================================
# Single-row sections (hero, about, contact)
# =============================================================================


def _edit_section(
    request: HttpRequest,
    *,
    instance: models.Model,
    form_class: type[BaseModel],
    fields_factory: Callable[[], list[FormField]],
    prefix: str | None,
    section: str,
    title: str,
    url_name: str,
    extra_context: dict[str, Any] | None = None,
    save: Callable[..., dict[str, str]] = _save_with_image,
) -> HttpResponse:
    fields = fields_factory()
    errors: dict[str, str] = {}
    values = _instance_values(instance, fields) if instance.pk else {}

    if request.method == "POST":
        if not getattr(request.user, "can_edit", False):
            return HttpResponse("Read-only access", status=403)
        errors = save(request, instance, form_class, prefix)
        if not errors:
            logger.info("%s updated by %s", title, request.user)
            messages.success(request, f"{title} saved successfully.")
            return redirect(url_name)
        values = post_data(request)

    context = {
        "section": section,
        "title": title,
        "fields": bind_fields(fields, values, errors),
        "action_url": reverse(url_name),
        "cancel_url": reverse("dashboard:home"),
        "image_url": getattr(instance, "image_url", ""),
        "form_error": errors.get("form", ""),
        **(extra_context or {}),
    }
    return render(
        request,
        "restaurant/dashboard/section_form.html",
        context,
        status=400 if errors else 200,
    )


def _select_hero_image(hero: HeroContent, image: HeroImage) -> None:
    hero.selected_image = image
    hero.image_url = image.image_url


def _save_hero(
    request: HttpRequest,
    hero: HeroContent,
    form_class: type[BaseModel],
    prefix: str,
) -> dict[str, str]:
    """
    Save the hero text; an uploaded background joins the image library and
    becomes the selected one.

    Library files are removed only from the library, never on replace.
    """
    try:
        form = form_class.model_validate(post_data(request))
    except PydanticValidationError as e:
        return field_errors(e)

    upload = request.FILES.get("image")
    image_url = ""
    if upload:
        try:
            image_url = upload_asset(prefix, upload)
        except StorageError as e:
            return {"image": e.message}

    for name, value in form.model_dump().items():
        setattr(hero, name, value)
    try:
        with transaction.atomic():
            if image_url:
                _select_hero_image(hero, HeroImage.objects.create(image_url=image_url))
            hero.save()
    except DatabaseError:
        logger.exception("Failed to save hero content")
        return {"form": GENERIC_ERROR}
    return {}


@login_required
@require_http_methods(["GET", "POST"])
def hero_edit(request: HttpRequest) -> HttpResponse:
    """
    GET/POST /dashboard/content/hero/

    Title, subtitle and background of the home page banner, plus the
    library of uploaded hero backgrounds.
    """
    hero = HeroContent.load() or HeroContent()
    return _edit_section(
        request,
        instance=hero,
        form_class=HeroContentForm,
        fields_factory=_hero_fields,
        prefix=AssetPrefix.HERO,
        section="hero",
        title="Hero Section",
        url_name="content:hero",
        extra_context={
            "hero_images": HeroImage.objects.all(),
            "selected_image_id": hero.selected_image_id,
        },
        save=_save_hero,
    )


@login_required
@editor_required
@require_POST
def hero_image_upload(request: HttpRequest) -> HttpResponse:
    """
    POST /dashboard/content/hero/images/

    Upload a new hero background and select it.
    """
    upload = request.FILES.get("image")
    if not upload:
        messages.error(request, IMAGE_REQUIRED)
        return redirect("content:hero")

    try:
        image_url = upload_asset(AssetPrefix.HERO, upload)
    except StorageError as e:
        messages.error(request, e.message)
        return redirect("content:hero")

    hero = HeroContent.load() or HeroContent()
    try:
        with transaction.atomic():
            image = HeroImage.objects.create(image_url=image_url)
            _select_hero_image(hero, image)
            hero.save()
    except DatabaseError:
        logger.exception("Failed to record hero image %s", image_url)
        messages.error(request, GENERIC_ERROR)
        return redirect("content:hero")
    logger.info("Hero image %s uploaded by %s", image.pk, request.user)
    messages.success(request, "Hero image uploaded.")
    return redirect("content:hero")


@login_required
@editor_required
@require_POST
def hero_image_select(request: HttpRequest, image_id: int) -> HttpResponse:
    """POST /dashboard/content/hero/images/{image_id}/select/"""
    image = get_object_or_404(HeroImage, pk=image_id)
    hero = HeroContent.load() or HeroContent()
    _select_hero_image(hero, image)
    hero.save()
    messages.success(request, "Hero background updated.")
    return redirect("content:hero")


@login_required
@editor_required
@require_POST
def hero_image_delete(request: HttpRequest, image_id: int) -> HttpResponse:
    """POST /dashboard/content/hero/images/{image_id}/delete/"""
    image = get_object_or_404(HeroImage, pk=image_id)
    response = _delete_item(
        request,
        model=HeroImage,
        item_id=image_id,
        prefix=AssetPrefix.HERO,
        noun="Hero image",
        list_url="content:hero",
    )
    if not HeroImage.objects.filter(pk=image_id).exists():
        HeroContent.objects.filter(image_url=image.image_url).update(image_url="")
    return response


@login_required
@require_http_methods(["GET", "POST"])
def about_edit(request: HttpRequest) -> HttpResponse:
    """GET/POST /dashboard/content/about/"""
    return _edit_section(
        request,
        instance=AboutSection.load() or AboutSection(),
        form_class=AboutSectionForm,
        fields_factory=_about_fields,
        prefix=AssetPrefix.ABOUT,
        section="about",
        title="About Section",
        url_name="content:about",
    )


@login_required
@require_http_methods(["GET", "POST"])
def contact_edit(request: HttpRequest) -> HttpResponse:
    """GET/POST /dashboard/content/contact/"""
    return _edit_section(
        request,
        instance=ContactInfo.load() or ContactInfo(),
        form_class=ContactInfoForm,
        fields_factory=_contact_fields,
        prefix=None,
        section="contact",
        title="Contact Info",
        url_name="content:contact",
    )


# =============================================================================
# Newsletter
# =============================================================================


@login_required
@require_GET
def subscriber_list(request: HttpRequest) -> HttpResponse:
    """GET /dashboard/content/subscribers/"""
    subscribers = NewsletterSubscriber.objects.all()
    search_query = request.GET.get("q", "").strip()
    if search_query:
        subscribers = subscribers.filter(email__icontains=search_query)

    return render(
        request,
        "restaurant/dashboard/subscriber_list.html",
        {
            "section": "subscribers",
            "subscribers": subscribers,
            "search_query": search_query,
            "subscriber_count": NewsletterSubscriber.objects.count(),
        },
    )
