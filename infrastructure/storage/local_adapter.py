"""
Local Storage Adapter
=====================

Stores uploads on the local filesystem under {local_root}/{directory}
using Django's FileSystemStorage. Local files have no public URL of their
own; one is only produced when a host is configured.
"""

import logging
import os
import shutil
from typing import Optional

from django.core.files.storage import FileSystemStorage, Storage

from .config import Provider
from .interface import StorageAdapter

logger = logging.getLogger(__name__)


class LocalStorageAdapter(StorageAdapter):
    """Local filesystem storage."""

    provider = Provider.LOCAL

    @property
    def location(self) -> str:
        return os.path.join(self.config.credentials["local_root"], self.config.directory)

    def _build_storage(self) -> Storage:
        logger.info(f"Using local storage at {self.location}")
        return FileSystemStorage(location=self.location)

    def default_url(self, path: str) -> Optional[str]:
        return None

    def _remove_directory(self) -> None:
        if os.path.isdir(self.location):
            shutil.rmtree(self.location)
            logger.info(f"Removed local storage directory {self.location}")
