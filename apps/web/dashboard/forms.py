"""
Form rendering helpers for dashboard screens.

Validation lives in pydantic form schemas; these dataclasses only carry what
the shared form template needs to render each field with its current value
and inline error.
"""

from dataclasses import dataclass, field
from typing import Any

from django.http import HttpRequest


@dataclass
class FormField:
    name: str
    label: str
    kind: str = "text"  # text, textarea, number, select, file, email, url, date
    value: Any = ""
    choices: list[tuple[str, str]] = field(default_factory=list)
    required: bool = False
    help_text: str = ""
    error: str = ""


def bind_fields(
    fields: list[FormField],
    values: dict[str, Any] | None = None,
    errors: dict[str, str] | None = None,
) -> list[FormField]:
    """Fill current values and inline errors into field definitions."""
    values = values or {}
    errors = errors or {}
    for form_field in fields:
        if form_field.name in values and form_field.kind != "file":
            value = values[form_field.name]
            form_field.value = "" if value is None else value
        form_field.error = errors.get(form_field.name, "")
    return fields


def post_data(request: HttpRequest) -> dict[str, str]:
    """Submitted form values without the CSRF token."""
    data = request.POST.dict()
    data.pop("csrfmiddlewaretoken", None)
    return data
