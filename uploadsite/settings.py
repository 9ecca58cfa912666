"""
Django settings for the upload storage project.

Storage is configured from the environment:
    STORAGE_PROVIDER   AWS, Google or Local (default: Local)
    STORAGE_DIRECTORY  bucket name, or directory under local_root
    STORAGE_HOST       host that public URLs are rooted at
    STORAGE_PUBLIC     "false" to store files privately
    STORAGE_MOCK       "false" to talk to the real object stores

Provider credentials are read from the environment by key name
(AWS_ACCESS_KEY_ID, GOOGLE_STORAGE_ACCESS_KEY_ID, LOCAL_ROOT...) and can be
overridden in STORAGE_CREDENTIALS.
"""

import os
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    raise ImproperlyConfigured("SECRET_KEY environment variable is required")

DEBUG = os.getenv("DEBUG", "False").lower() == "true"

ALLOWED_HOSTS = [host for host in os.getenv("ALLOWED_HOSTS", "localhost").split(",") if host]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "uploads",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

USE_TZ = True

MEDIA_ROOT = BASE_DIR / "media"
MEDIA_URL = "/media/"

UPLOAD_STORAGE = {
    "PROVIDER": os.getenv("STORAGE_PROVIDER", "Local"),
    "DIRECTORY": os.getenv("STORAGE_DIRECTORY", "uploads"),
    "HOST": os.getenv("STORAGE_HOST") or None,
    "PUBLIC": os.getenv("STORAGE_PUBLIC", "true").lower() != "false",
    "ATTRIBUTES": {},
}

# Object stores are served from memory unless STORAGE_MOCK=false
UPLOAD_STORAGE_MOCK = os.getenv("STORAGE_MOCK", "true").lower() != "false"

STORAGE_CREDENTIALS = {
    "local_root": os.getenv("LOCAL_ROOT", str(MEDIA_ROOT)),
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "infrastructure": {
            "handlers": ["console"],
            "level": os.getenv("STORAGE_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "uploads": {
            "handlers": ["console"],
            "level": os.getenv("STORAGE_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
