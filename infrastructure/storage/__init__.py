"""
Storage Abstraction Layer
==========================

Provides a unified interface for upload storage across providers
(Amazon S3, Google Cloud Storage, local filesystem).
"""

from .config import Provider, ProviderConfig
from .credentials import CredentialResolver
from .exceptions import StorageAuthError, StorageConnectionError, StorageException, StorageNotFoundError
from .factory import StorageFactory
from .interface import StorageAdapter, StoredFile
from .local_adapter import LocalStorageAdapter
from .s3_adapter import AWSStorageAdapter, GoogleStorageAdapter

__all__ = [
    "Provider",
    "ProviderConfig",
    "CredentialResolver",
    "StorageAdapter",
    "StoredFile",
    "StorageException",
    "StorageAuthError",
    "StorageConnectionError",
    "StorageNotFoundError",
    "AWSStorageAdapter",
    "GoogleStorageAdapter",
    "LocalStorageAdapter",
    "StorageFactory",
]
