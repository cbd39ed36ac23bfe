"""
Image compression for uploaded site assets.

Uploaded photos are re-encoded as WebP, bounded to MAX_DIMENSION on the
longest side, and the quality is stepped down until the file fits
TARGET_BYTES (or QUALITY_FLOOR is reached).
"""

import io
import logging
from pathlib import PurePath

from django.core.files.base import ContentFile
from django.core.files.uploadedfile import UploadedFile

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)

MAX_DIMENSION = 1920
TARGET_BYTES = 300 * 1024
INITIAL_QUALITY = 85
QUALITY_STEP = 10
QUALITY_FLOOR = 35

PASSTHROUGH_EXTENSIONS = {"pdf"}


class ImageCompressionError(Exception):
    """Raised when an upload cannot be read as an image."""

    pass


def file_extension(name: str) -> str:
    """Lower-cased extension without the dot ('' when there is none)."""
    return PurePath(name).suffix.lstrip(".").lower()


def is_passthrough(upload: UploadedFile) -> bool:
    """Documents (PDF proofs) are stored as uploaded."""
    content_type = getattr(upload, "content_type", "") or ""
    return (
        file_extension(upload.name or "") in PASSTHROUGH_EXTENSIONS
        or content_type == "application/pdf"
    )


def compress_image(upload: UploadedFile) -> ContentFile:
    """
    Re-encode an uploaded image as a bounded WebP file.

    Args:
        upload: The uploaded image file.

    Returns:
        ContentFile named "<original stem>.webp".

    Raises:
        ImageCompressionError: If the upload is not a readable image.
    """
    upload.seek(0)
    try:
        image = Image.open(upload)
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageCompressionError(f"Invalid image file: {upload.name}") from e

    image = ImageOps.exif_transpose(image)
    if image.mode not in ("RGB", "RGBA"):
        image = image.convert("RGBA" if "A" in image.getbands() else "RGB")
    image.thumbnail((MAX_DIMENSION, MAX_DIMENSION))

    quality = INITIAL_QUALITY
    while True:
        buffer = io.BytesIO()
        image.save(buffer, format="WEBP", quality=quality)
        size = buffer.tell()
        if size <= TARGET_BYTES or quality <= QUALITY_FLOOR:
            break
        quality -= QUALITY_STEP

    logger.debug(
        "Compressed %s to %d bytes (%dx%d, quality %d)",
        upload.name,
        size,
        image.width,
        image.height,
        quality,
    )

    stem = PurePath(upload.name or "image").stem
    return ContentFile(buffer.getvalue(), name=f"{stem}.webp")


def prepare_upload(upload: UploadedFile) -> tuple[ContentFile | UploadedFile, str]:
    """
    Compress images and pass documents through.

    Returns:
        Tuple of (file to store, extension for the stored name).
    """
    if is_passthrough(upload):
        upload.seek(0)
        return upload, file_extension(upload.name or "") or "pdf"
    return compress_image(upload), "webp"
