"""
Credential Resolver
===================

Turns a loose credential source (environment variables, a settings dict)
into validated ProviderConfig records, one per provider that has every
required key available.

Usage:
    resolver = CredentialResolver(directory="uploads")
    for config in resolver.resolve():
        adapter = StorageFactory.create(config)
"""

import logging
import os
from typing import Dict, Iterable, List, Mapping, Optional

from utils.logging_utils import mask_credentials

from .config import OPTIONAL_CREDENTIALS, REQUIRED_CREDENTIALS, Provider, ProviderConfig
from .exceptions import StorageAuthError

logger = logging.getLogger(__name__)

# Object stores are served from memory in mock mode, so any credentials do
MOCKED_PROVIDERS = (Provider.AWS, Provider.GOOGLE)


class CredentialResolver:
    """
    Resolves provider credentials and selects the usable adapter variants.

    Unknown or partial credential sets are skipped rather than treated as
    errors, so a test run or cleanup job simply covers whatever providers
    are configured.
    """

    def __init__(
        self,
        directory: str,
        mock: bool = False,
        host: Optional[str] = None,
        public: bool = True,
        attributes: Optional[Dict[str, str]] = None,
        providers: Optional[Iterable] = None,
    ):
        self.directory = directory
        self.mock = mock
        self.host = host
        self.public = public
        self.attributes = dict(attributes or {})
        self.providers = [Provider.parse(p) for p in providers] if providers else list(REQUIRED_CREDENTIALS)

    @staticmethod
    def default_source() -> Dict[str, str]:
        """Environment variables overlaid with settings.STORAGE_CREDENTIALS."""
        from django.conf import settings

        source = dict(os.environ)
        source.update(getattr(settings, "STORAGE_CREDENTIALS", {}) or {})
        return source

    @staticmethod
    def _normalize(source: Mapping[str, str]) -> Dict[str, str]:
        return {str(key).lower(): value for key, value in source.items() if value not in (None, "")}

    def _credentials_for(self, provider: Provider, source: Dict[str, str]) -> Dict[str, str]:
        if self.mock and provider in MOCKED_PROVIDERS:
            return {key: key for key in REQUIRED_CREDENTIALS[provider]}

        keys = REQUIRED_CREDENTIALS[provider] + OPTIONAL_CREDENTIALS[provider]
        return {key: source[key] for key in keys if key in source}

    def _build(self, provider: Provider, credentials: Dict[str, str]) -> ProviderConfig:
        return ProviderConfig(
            provider=provider,
            credentials=credentials,
            directory=self.directory,
            host=self.host,
            public=self.public,
            attributes=dict(self.attributes),
        )

    def resolve(self, source: Optional[Mapping[str, str]] = None) -> List[ProviderConfig]:
        """
        Build a config for every provider whose required keys are all present.

        Args:
            source: Credential mapping; keys are matched case-insensitively.
                    Defaults to default_source().

        Returns:
            Configs in provider order (AWS, Google, Local)
        """
        normalized = self._normalize(self.default_source() if source is None else source)
        configs = []

        for provider in self.providers:
            config = self._build(provider, self._credentials_for(provider, normalized))
            missing = config.missing_credentials()
            if missing:
                logger.debug(f"Skipping {provider.value} storage: missing {', '.join(missing)}")
                continue

            logger.debug(f"Resolved {provider.value} storage credentials: {mask_credentials(config.credentials)}")
            configs.append(config)

        return configs

    def for_provider(self, provider, source: Optional[Mapping[str, str]] = None) -> ProviderConfig:
        """
        Build the config for one provider.

        Raises:
            StorageAuthError: If the provider's credentials are incomplete
            ValueError: If the provider name is unknown
        """
        provider = Provider.parse(provider)
        normalized = self._normalize(self.default_source() if source is None else source)
        config = self._build(provider, self._credentials_for(provider, normalized))
        config.validate()
        return config
