"""
Storage Interface
=================

Abstract base class defining the contract every storage provider implements,
and the StoredFile handle returned by it.

Each adapter wraps a Django storage backend (django-storages' S3Boto3Storage,
FileSystemStorage, InMemoryStorage) built lazily on first use, so one
connection is shared by every call made through the adapter.
"""

import logging
import mimetypes
import posixpath
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import BinaryIO, List, Optional, Union

from django.core.files import File
from django.core.files.base import ContentFile
from django.core.files.storage import Storage

from .config import Provider, ProviderConfig
from .exceptions import StorageConnectionError, StorageException, StorageNotFoundError

logger = logging.getLogger(__name__)

Uploadable = Union[bytes, BinaryIO, File]


class StoredFile:
    """
    Handle for one stored object.

    The handle references the object, not its bytes: content and size are
    fetched through the adapter on first use and cached afterwards.

    Attributes:
        path: Object path inside the provider directory
        config: Configuration the object was stored or retrieved with
    """

    def __init__(
        self,
        adapter: "StorageAdapter",
        path: str,
        config: ProviderConfig,
        size: Optional[int] = None,
        content: Optional[bytes] = None,
    ):
        self.adapter = adapter
        self.path = path
        self.config = config
        self._size = size
        self._content = content

    def __repr__(self):
        return f"<StoredFile {self.adapter.provider.value}:{self.config.directory}/{self.path}>"

    @property
    def is_public(self) -> bool:
        return self.config.public

    @property
    def content_type(self) -> str:
        content_type, _ = mimetypes.guess_type(self.path)
        return content_type or "application/octet-stream"

    def size(self) -> int:
        """Object length in bytes as of the last fetch."""
        if self._size is None:
            self._size = self.adapter.size(self.path)
        return self._size

    def read(self) -> bytes:
        """Object content, fetched once and cached."""
        if self._content is None:
            self._content = self.adapter.read(self.path)
            self._size = len(self._content)
        return self._content

    def exists(self) -> bool:
        return self.adapter.exists(self.path)

    def delete(self) -> None:
        """Delete the object; later read()/size() calls raise StorageNotFoundError."""
        self.adapter.delete(self.path)
        self._content = None
        self._size = None

    def public_url(self, config: Optional[ProviderConfig] = None) -> Optional[str]:
        return self.adapter.public_url(self.path, config or self.config)

    def authenticated_url(self, expires_in: int = 3600) -> Optional[str]:
        return self.adapter.authenticated_url(self.path, expires_in=expires_in)


class StorageAdapter(ABC):
    """
    Abstract interface for provider storage operations.

    Concrete implementations:
        - AWSStorageAdapter: Amazon S3 (or any S3 endpoint)
        - GoogleStorageAdapter: Google Cloud Storage via its S3 interoperability API
        - LocalStorageAdapter: Local filesystem

    Object store adapters built with mock=True keep their URL behaviour but
    keep objects in memory instead of calling the provider.
    """

    provider: Provider

    def __init__(self, config: ProviderConfig, mock: bool = False):
        """
        Raises:
            StorageAuthError: If required credentials are missing
            ValueError: If the config belongs to another provider
        """
        if config.provider != self.provider:
            raise ValueError(f"{type(self).__name__} cannot use {config.provider.value} configuration")

        config.validate()
        self.config = config
        self.mock = mock
        self._storage: Optional[Storage] = None

    def __repr__(self):
        mode = " (mock)" if self.mock else ""
        return f"<{type(self).__name__} {self.config.directory}{mode}>"

    @property
    def directory(self) -> str:
        return self.config.directory

    @property
    def storage(self) -> Storage:
        """Django storage backend, created on first use."""
        if self._storage is None:
            self._storage = self._build_storage()
            logger.debug(f"Created {type(self._storage).__name__} for {self!r}")
        return self._storage

    @abstractmethod
    def _build_storage(self) -> Storage:
        """Create the Django storage backend for this provider."""
        pass

    @abstractmethod
    def default_url(self, path: str) -> Optional[str]:
        """Provider URL for a public object, or None if the provider has none."""
        pass

    def public_url(self, path: str, config: Optional[ProviderConfig] = None) -> Optional[str]:
        """
        Get the public URL of an object.

        Args:
            path: Object path
            config: Per-call configuration (defaults to the adapter's)

        Returns:
            None when the object is private or the provider has no public
            URLs; "{host}/{path}" when a host is configured; otherwise the
            provider's default URL
        """
        config = config or self.config
        if not config.public:
            return None
        if config.host:
            return f"{config.host.rstrip('/')}/{path}"
        return self.default_url(path)

    def authenticated_url(self, path: str, expires_in: int = 3600) -> Optional[str]:
        """Time-limited URL for a private object, when the provider supports one."""
        return None

    def _translate_error(self, error: Exception, path: str) -> StorageException:
        """Map a backend exception onto the storage error taxonomy."""
        if isinstance(error, (FileNotFoundError, IsADirectoryError)):
            return StorageNotFoundError(f"File not found: {path}")
        if isinstance(error, ConnectionError):
            return StorageConnectionError(f"{self.provider.value} storage unreachable: {error}")
        return StorageException(f"{self.provider.value} storage error for {path}: {error}")

    @contextmanager
    def _backend_errors(self, action: str, path: str):
        try:
            yield
        except StorageException:
            raise
        except Exception as e:
            error = self._translate_error(e, path)
            if isinstance(error, StorageNotFoundError):
                logger.debug(f"{self.provider.value} {action} found nothing at {path}")
            else:
                logger.error(f"Failed to {action} {path} on {self.provider.value}. Error: {str(e)}")
            raise error from e

    @staticmethod
    def _as_file(file: Uploadable, path: str) -> File:
        if isinstance(file, File):
            return file
        if isinstance(file, (bytes, bytearray)):
            return ContentFile(bytes(file), name=posixpath.basename(path))
        if hasattr(file, "read"):
            return File(file, name=posixpath.basename(path))
        raise TypeError(f"Cannot store object of type {type(file).__name__}")

    def _save(self, content: File, path: str, config: ProviderConfig) -> str:
        """Write content at path, replacing any existing object."""
        if not getattr(self.storage, "file_overwrite", False) and self.storage.exists(path):
            self.storage.delete(path)
        return self.storage.save(path, content)

    def store(self, file: Uploadable, path: str, config: Optional[ProviderConfig] = None) -> StoredFile:
        """
        Upload a file to storage.

        Args:
            file: Bytes, a binary file object or a Django File
            path: Destination path inside the directory; existing objects are overwritten
            config: Per-call configuration (visibility, host, attributes)

        Returns:
            StoredFile handle for the new object

        Raises:
            StorageAuthError: If the provider rejects the credentials
            StorageConnectionError: If the provider is unreachable
            StorageException: If the upload fails otherwise
        """
        config = config or self.config
        content = self._as_file(file, path)

        with self._backend_errors("store", path):
            size = content.size
            saved_path = self._save(content, path, config)

        if saved_path != path:
            logger.warning(f"{self.provider.value} stored {path} as {saved_path}")

        logger.info(f"Stored {size} bytes at {self.provider.value}:{self.directory}/{saved_path}")
        return StoredFile(self, saved_path, config, size=size)

    def retrieve(self, path: str) -> StoredFile:
        """
        Get a handle for an existing object.

        Raises:
            StorageNotFoundError: If no object exists at path
        """
        if not self.exists(path) or self._is_directory(path):
            raise StorageNotFoundError(f"File not found: {path}")
        return StoredFile(self, path, self.config)

    def _is_directory(self, path: str) -> bool:
        parent, name = posixpath.split(path.rstrip("/"))
        try:
            with self._backend_errors("list", parent):
                directories, _ = self.storage.listdir(parent)
        except StorageNotFoundError:
            return False
        return name in directories

    def exists(self, path: str) -> bool:
        with self._backend_errors("check", path):
            return self.storage.exists(path)

    def size(self, path: str) -> int:
        with self._backend_errors("size", path):
            return self.storage.size(path)

    def read(self, path: str) -> bytes:
        with self._backend_errors("read", path):
            with self.storage.open(path, "rb") as f:
                return f.read()

    def delete(self, path: str) -> None:
        """
        Delete an object. Deleting a missing object is not an error.

        Raises:
            StorageConnectionError: If the provider is unreachable
        """
        try:
            with self._backend_errors("delete", path):
                self.storage.delete(path)
        except StorageNotFoundError:
            logger.debug(f"Nothing to delete at {self.provider.value}:{path}")
            return

        logger.info(f"Deleted {self.provider.value}:{self.directory}/{path}")

    def list_paths(self, prefix: str = "") -> List[str]:
        """Every object path under prefix, recursively."""
        try:
            with self._backend_errors("list", prefix):
                directories, files = self.storage.listdir(prefix)
        except StorageNotFoundError:
            return []

        paths = [posixpath.join(prefix, name) for name in files]
        for name in directories:
            paths.extend(self.list_paths(posixpath.join(prefix, name)))
        return paths

    def _remove_directory(self) -> None:
        """Remove the (empty) directory itself. Nothing to do by default."""
        pass

    def destroy_directory(self) -> int:
        """
        Delete every object and then the directory itself.

        Returns:
            Number of objects deleted
        """
        paths = self.list_paths()
        for path in paths:
            self.delete(path)

        try:
            with self._backend_errors("remove directory", self.directory):
                self._remove_directory()
        except StorageNotFoundError:
            pass

        logger.info(f"Destroyed {self.provider.value} directory {self.directory} ({len(paths)} files)")
        return len(paths)
