"""
Uploaders
=========

Thin upload-side collaborator of the storage adapters: decides where a
file goes (store_dir/filename) and with which per-call configuration,
then hands the bytes to the adapter.

Usage:
    uploader = Uploader()
    stored = uploader.store(request.FILES["avatar"])
    stored.public_url()
"""

import logging
import posixpath
from typing import Optional

from infrastructure.container import container
from infrastructure.storage import ProviderConfig, StorageAdapter, StorageFactory, StoredFile
from infrastructure.storage.interface import Uploadable

logger = logging.getLogger(__name__)


class Uploader:
    """
    Stores and retrieves uploads through a storage adapter.

    Subclasses override store_dir (or store_path) to place files elsewhere.
    """

    store_dir = "uploads"

    def __init__(self, config: Optional[ProviderConfig] = None, storage: Optional[StorageAdapter] = None):
        """
        Args:
            config: Provider configuration. If None, the project default from settings
            storage: Adapter to use. If None, built from config or taken from the container
        """
        self._config = config
        self._storage = storage

    @property
    def config(self) -> ProviderConfig:
        if self._config is None:
            self._config = self.storage.config
        return self._config

    @property
    def storage(self) -> StorageAdapter:
        """Adapter shared by every call made through this uploader."""
        if self._storage is None:
            if self._config is not None:
                self._storage = StorageFactory.create(self._config)
            else:
                self._storage = container.storage()
        return self._storage

    def store_path(self, filename: str) -> str:
        return posixpath.join(self.store_dir, filename) if self.store_dir else filename

    def store(self, file: Uploadable, filename: Optional[str] = None) -> StoredFile:
        """
        Store a file under store_dir.

        Args:
            file: Bytes, a file object or a Django File / UploadedFile
            filename: Name to store under; defaults to the file's own name

        Raises:
            ValueError: If no filename is given and the file has none
        """
        filename = filename or posixpath.basename(getattr(file, "name", "") or "")
        if not filename:
            raise ValueError("A filename is required to store this upload")

        stored = self.storage.store(file, self.store_path(filename), self.config)
        logger.info(f"Uploaded {filename} to {stored.path}")
        return stored

    def retrieve_from_store(self, identifier: str) -> StoredFile:
        """
        Raises:
            StorageNotFoundError: If nothing was stored under identifier
        """
        stored = self.storage.retrieve(self.store_path(identifier))
        stored.config = self.config
        return stored

    def remove(self, identifier: str) -> None:
        self.storage.delete(self.store_path(identifier))

    def url(self, identifier: str) -> Optional[str]:
        return self.storage.public_url(self.store_path(identifier), self.config)
