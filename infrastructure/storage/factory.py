"""
Storage Factory
===============

Factory pattern for creating storage adapters.
Picks the adapter class for a ProviderConfig at construction time.
"""

import logging
from typing import Dict, Optional, Type

from django.conf import settings

from .config import Provider, ProviderConfig
from .interface import StorageAdapter
from .local_adapter import LocalStorageAdapter
from .s3_adapter import AWSStorageAdapter, GoogleStorageAdapter

logger = logging.getLogger(__name__)

ADAPTERS: Dict[Provider, Type[StorageAdapter]] = {
    Provider.AWS: AWSStorageAdapter,
    Provider.GOOGLE: GoogleStorageAdapter,
    Provider.LOCAL: LocalStorageAdapter,
}


class StorageFactory:
    """
    Factory for creating storage adapters.

    Usage:
        # In settings.py
        UPLOAD_STORAGE = {"PROVIDER": "AWS", "DIRECTORY": "my-bucket"}

        # In your code
        storage = StorageFactory.create()
    """

    @staticmethod
    def create(config: Optional[ProviderConfig] = None, mock: Optional[bool] = None) -> StorageAdapter:
        """
        Create a storage adapter.

        Args:
            config: Provider configuration. If None, built from settings.UPLOAD_STORAGE
            mock: Serve object stores from memory. If None, reads settings.UPLOAD_STORAGE_MOCK

        Returns:
            StorageAdapter implementation for config.provider

        Raises:
            StorageAuthError: If the provider's credentials are incomplete
        """
        if mock is None:
            mock = getattr(settings, "UPLOAD_STORAGE_MOCK", False)
        if config is None:
            config = ProviderConfig.from_settings(mock=mock)

        adapter_class = ADAPTERS[config.provider]
        logger.info(f"Creating {config.provider.value} storage backend{' (mock)' if mock else ''}")
        return adapter_class(config, mock=mock)

    @staticmethod
    def create_aws(config: ProviderConfig, mock: bool = False) -> AWSStorageAdapter:
        """Create Amazon S3 storage explicitly."""
        return AWSStorageAdapter(config, mock=mock)

    @staticmethod
    def create_google(config: ProviderConfig, mock: bool = False) -> GoogleStorageAdapter:
        """Create Google Cloud Storage explicitly."""
        return GoogleStorageAdapter(config, mock=mock)

    @staticmethod
    def create_local(config: ProviderConfig) -> LocalStorageAdapter:
        """Create local filesystem storage explicitly."""
        return LocalStorageAdapter(config)
