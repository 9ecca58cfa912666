"""
Storage Exceptions
==================

Error taxonomy shared by every storage adapter. Backend-specific errors
(botocore, filesystem) are translated into these before reaching callers.
"""


class StorageException(Exception):
    """Base exception for storage operations."""

    pass


class StorageAuthError(StorageException):
    """Credentials are missing or were rejected by the provider."""

    pass


class StorageConnectionError(StorageException):
    """The provider could not be reached. Not retried by the adapter."""

    pass


class StorageNotFoundError(StorageException):
    """No object exists at the requested path."""

    pass
