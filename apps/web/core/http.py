"""
JSON response helpers shared by the public API views.
"""

from typing import Any

from django.http import JsonResponse

from pydantic import ValidationError as PydanticValidationError

from apps.web.core.schemas import ValidationErrorDetail, ValidationErrorResponse


def cors_headers() -> dict[str, str]:
    """CORS headers for the public website."""
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Idempotency-Key",
    }


def json_response(data: dict[str, Any], status: int = 200) -> JsonResponse:
    """Create a JSON response with CORS headers."""
    response = JsonResponse(data, status=status)
    for key, value in cors_headers().items():
        response[key] = value
    return response


def validation_details(exc: PydanticValidationError) -> list[ValidationErrorDetail]:
    """Flatten pydantic errors into field/message pairs."""
    return [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in err["loc"]) or "__all__",
            message=err["msg"],
        )
        for err in exc.errors()
    ]


def validation_error_response(
    details: list[ValidationErrorDetail],
) -> JsonResponse:
    """400 response in the shared validation error format."""
    response = ValidationErrorResponse(error="validation_error", details=details)
    return json_response(response.model_dump(), status=400)


def field_errors(exc: PydanticValidationError) -> dict[str, str]:
    """First error message per field, for rendering inline in dashboard forms."""
    errors: dict[str, str] = {}
    for detail in validation_details(exc):
        errors.setdefault(detail.field, detail.message)
    return errors
