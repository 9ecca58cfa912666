import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class UploadsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "uploads"

    def ready(self):
        """
        Report which storage backend uploads will use.
        """
        from django.conf import settings

        options = getattr(settings, "UPLOAD_STORAGE", {})
        mode = "mock" if getattr(settings, "UPLOAD_STORAGE_MOCK", False) else "live"
        logger.info(f"Uploads stored with {options.get('PROVIDER', 'Local')} ({mode}) in {options.get('DIRECTORY')}")
