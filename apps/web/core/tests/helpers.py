"""Shared helpers for building uploads in tests."""

import io

from django.core.files.uploadedfile import SimpleUploadedFile

from PIL import Image


def image_upload(
    name: str = "photo.jpg", size: tuple[int, int] = (64, 48), fmt: str = "JPEG"
) -> SimpleUploadedFile:
    """A real encoded image, small enough to keep tests fast."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(139, 69, 19)).save(buffer, format=fmt)
    return SimpleUploadedFile(
        name, buffer.getvalue(), content_type=f"image/{fmt.lower()}"
    )


def pdf_upload(name: str = "transfer.pdf") -> SimpleUploadedFile:
    return SimpleUploadedFile(
        name, b"%PDF-1.4\n%fake proof\n", content_type="application/pdf"
    )
