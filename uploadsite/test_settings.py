import os
import time

# Mock SECRET_KEY for tests BEFORE importing settings to bypass validation
os.environ.setdefault("SECRET_KEY", "django-insecure-test-key-for-unit-tests-only")

from .settings import *  # noqa: F403

# Override Database to use in-memory SQLite for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Object stores stay in memory unless STORAGE_MOCK=false is exported explicitly
UPLOAD_STORAGE_MOCK = os.getenv("STORAGE_MOCK", "true").lower() != "false"

UPLOAD_STORAGE["PROVIDER"] = "AWS"  # noqa: F405
UPLOAD_STORAGE["DIRECTORY"] = os.getenv("STORAGE_DIRECTORY") or f"uploads{int(time.time())}"  # noqa: F405
UPLOAD_STORAGE["HOST"] = None  # noqa: F405
UPLOAD_STORAGE["PUBLIC"] = True  # noqa: F405

# Let pytest's caplog see storage logs
for _logger in LOGGING["loggers"].values():  # noqa: F405
    _logger["propagate"] = True
