"""
Settings for the test suite.

Provides safe defaults for required environment variables, an in-memory
asset storage and no e-mail provider key.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from .settings import *  # noqa: E402,F403

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    },
}

STORAGES = {
    **STORAGES,  # noqa: F405
    "assets": {
        "BACKEND": "django.core.files.storage.InMemoryStorage",
        "OPTIONS": {
            "base_url": "/assets/",
        },
    },
}

RESEND_API_KEY = ""
SITE_URL = "https://wateebaroesa.test"
TIME_ZONE = "UTC"
