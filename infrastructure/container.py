"""
Dependency Injection Container
================================

Simple service locator for the project-wide storage adapter.
Keeps one adapter (and therefore one provider connection) per process.

Usage:
    from infrastructure.container import container

    storage = container.storage()
"""

import logging
from typing import Optional

from .storage import StorageAdapter, StorageFactory

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for infrastructure dependencies.

    Implements lazy initialization and caching of service instances.
    Singleton pattern.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self._storage: Optional[StorageAdapter] = None
            self._initialized = True
            logger.info("Service container initialized")

    def storage(self) -> StorageAdapter:
        """
        Get the default storage adapter configured in settings.

        Returns:
            StorageAdapter implementation (cached)
        """
        if self._storage is None:
            self._storage = StorageFactory.create()
            logger.debug(f"Created storage service: {type(self._storage).__name__}")

        return self._storage

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when switching between environments.
        """
        self._storage = None
        logger.info("Service container reset")

    def configure_for_testing(self):
        """Configure container with in-memory storage for testing."""
        self._storage = StorageFactory.create(mock=True)
        logger.info("Service container configured for testing")


# Global singleton instance
container = ServiceContainer()


def get_storage() -> StorageAdapter:
    """Get storage service from global container."""
    return container.storage()
