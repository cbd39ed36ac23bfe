"""
Asset storage - uploads and removals in the "assets" storage.

Files are grouped by feature prefix (hero/, about/, gallery/, menu/,
offers/, payment_proofs/) and referenced from rows by their public URL.
"""

import logging
import re
import time
from urllib.parse import unquote, urlsplit

from django.core.files.storage import Storage, storages
from django.core.files.uploadedfile import UploadedFile

from apps.web.core.images import ImageCompressionError, prepare_upload

logger = logging.getLogger(__name__)

ASSETS_STORAGE = "assets"


class AssetPrefix:
    HERO = "hero"
    ABOUT = "about"
    GALLERY = "gallery"
    MENU = "menu"
    OFFERS = "offers"
    PAYMENT_PROOFS = "payment_proofs"


class StorageError(Exception):
    """Raised when an asset cannot be stored or removed."""

    def __init__(self, message: str, code: str = "storage_error"):
        super().__init__(message)
        self.message = message
        self.code = code


def assets_storage() -> Storage:
    return storages[ASSETS_STORAGE]


def _timestamp() -> int:
    return int(time.time() * 1000)


def _safe_label(label: str) -> str:
    """Whitespace becomes underscores; anything else unsafe in a path is dropped."""
    label = re.sub(r"\s+", "_", label.strip())
    return re.sub(r"[^\w.-]", "", label)


def upload_asset(prefix: str, upload: UploadedFile, label: str = "") -> str:
    """
    Compress (when an image) and store an upload under a feature prefix.

    The stored name is "<prefix>/<timestamp>[-<label>].<ext>".

    Args:
        prefix: Feature prefix, one of AssetPrefix.
        upload: The uploaded file.
        label: Optional readable part of the name (e.g. guest name).

    Returns:
        Public URL of the stored file.

    Raises:
        StorageError: If the file is not a valid image or cannot be saved.
    """
    try:
        content, extension = prepare_upload(upload)
    except ImageCompressionError as e:
        raise StorageError(str(e), code="invalid_image") from e

    safe_label = _safe_label(label)
    name = f"{prefix}/{_timestamp()}"
    if safe_label:
        name = f"{name}-{safe_label}"
    name = f"{name}.{extension}"

    storage = assets_storage()
    try:
        saved_name = storage.save(name, content)
    except OSError as e:
        logger.exception("Failed to store asset %s", name)
        raise StorageError(f"Failed to store file: {e}") from e

    logger.info("Stored asset %s", saved_name)
    return storage.url(saved_name)


def asset_path_from_url(prefix: str, url: str) -> str:
    """Storage path derived from a public URL: "<prefix>/<last path segment>"."""
    file_name = unquote(urlsplit(url).path.rstrip("/").split("/")[-1])
    return f"{prefix}/{file_name}"


def remove_asset(prefix: str, url: str) -> str | None:
    """
    Remove the stored file a public URL points to.

    Returns:
        The removed storage path, or None when there was no URL.
    """
    if not url:
        return None

    path = asset_path_from_url(prefix, url)
    storage = assets_storage()
    try:
        storage.delete(path)
    except OSError as e:
        logger.exception("Failed to remove asset %s", path)
        raise StorageError(f"Failed to remove file: {e}") from e

    logger.info("Removed asset %s", path)
    return path

