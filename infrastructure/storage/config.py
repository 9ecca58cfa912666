"""
Provider Configuration
======================

Explicit, validated configuration for each supported storage provider.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from .exceptions import StorageAuthError

logger = logging.getLogger(__name__)


class Provider(str, Enum):
    """Supported storage providers."""

    AWS = "AWS"
    GOOGLE = "Google"
    LOCAL = "Local"

    @classmethod
    def parse(cls, value) -> "Provider":
        """Parse a provider name case-insensitively."""
        if isinstance(value, cls):
            return value
        for provider in cls:
            if provider.value.lower() == str(value).strip().lower():
                return provider
        raise ValueError(f"Unknown storage provider: {value}. Must be one of {', '.join(p.value for p in cls)}")


# Credential keys each provider needs before an adapter can be built
REQUIRED_CREDENTIALS: Dict[Provider, Tuple[str, ...]] = {
    Provider.AWS: ("aws_access_key_id", "aws_secret_access_key"),
    Provider.GOOGLE: ("google_storage_access_key_id", "google_storage_secret_access_key"),
    Provider.LOCAL: ("local_root",),
}

OPTIONAL_CREDENTIALS: Dict[Provider, Tuple[str, ...]] = {
    Provider.AWS: ("region", "endpoint_url"),
    Provider.GOOGLE: (),
    Provider.LOCAL: (),
}


@dataclass
class ProviderConfig:
    """
    Configuration for one storage provider.

    Attributes:
        provider: Which backend to talk to
        credentials: Provider-specific credential keys (see REQUIRED_CREDENTIALS)
        directory: Bucket name for object stores, subdirectory for Local
        host: Optional host that public URLs are rooted at
        public: Whether stored objects are publicly readable
        attributes: Extra object attributes (e.g. Cache-Control) sent on upload
    """

    provider: Provider
    credentials: Dict[str, str]
    directory: str
    host: Optional[str] = None
    public: bool = True
    attributes: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.provider = Provider.parse(self.provider)
        self.credentials = dict(self.credentials or {})
        self.attributes = dict(self.attributes or {})

    @property
    def required_keys(self) -> Tuple[str, ...]:
        return REQUIRED_CREDENTIALS[self.provider]

    def missing_credentials(self) -> Tuple[str, ...]:
        return tuple(key for key in self.required_keys if not self.credentials.get(key))

    def validate(self) -> None:
        """
        Check that the configuration can back an adapter.

        Raises:
            StorageAuthError: If a required credential key is missing
            ValueError: If no directory is configured
        """
        missing = self.missing_credentials()
        if missing:
            raise StorageAuthError(f"Missing {self.provider.value} credentials: {', '.join(missing)}")
        if not self.directory:
            raise ValueError(f"No storage directory configured for {self.provider.value}")

    def with_overrides(self, **changes) -> "ProviderConfig":
        """Return a copy with per-call changes (host, public, attributes...)."""
        return replace(self, **changes)

    @classmethod
    def from_settings(cls, mock: Optional[bool] = None) -> "ProviderConfig":
        """
        Build the project default configuration from Django settings.

        Reads settings.UPLOAD_STORAGE for the provider, directory, host,
        visibility and attributes. Credentials come from the resolver's
        default source (environment overlaid with settings.STORAGE_CREDENTIALS).

        Raises:
            StorageAuthError: If the configured provider lacks credentials
        """
        from django.conf import settings

        from .credentials import CredentialResolver

        options = getattr(settings, "UPLOAD_STORAGE", {})
        if mock is None:
            mock = getattr(settings, "UPLOAD_STORAGE_MOCK", False)

        resolver = CredentialResolver(
            directory=options.get("DIRECTORY", "uploads"),
            mock=mock,
            host=options.get("HOST"),
            public=options.get("PUBLIC", True),
            attributes=options.get("ATTRIBUTES", {}),
        )
        return resolver.for_provider(options.get("PROVIDER", Provider.LOCAL))
