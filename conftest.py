"""
Shared storage fixtures.

Object stores run in mock mode (in memory) unless STORAGE_MOCK=false is
exported, in which case every provider with credentials in the environment
is exercised for real and its test directory is destroyed when the session
ends. Providers without credentials are skipped.
"""

import os
from pathlib import Path

import pytest

from infrastructure.storage import CredentialResolver, Provider, ProviderConfig, StorageFactory

LIVE = os.getenv("STORAGE_MOCK", "true").lower() == "false"
FIXTURES = Path(__file__).resolve().parent / "infrastructure" / "tests" / "fixtures"

_live_adapters = {}


@pytest.fixture(scope="session")
def storage_directory():
    from django.conf import settings

    return settings.UPLOAD_STORAGE["DIRECTORY"]


@pytest.fixture
def fixture_file():
    with open(FIXTURES / "test.jpg", "rb") as f:
        yield f


@pytest.fixture(params=list(Provider), ids=lambda provider: provider.value)
def storage_config(request, tmp_path, storage_directory):
    provider = request.param
    if provider is Provider.LOCAL and not LIVE:
        return ProviderConfig(provider, {"local_root": str(tmp_path)}, directory=storage_directory)

    resolver = CredentialResolver(directory=storage_directory, mock=not LIVE)
    configs = {config.provider: config for config in resolver.resolve()}
    if provider not in configs:
        pytest.skip(f"No {provider.value} credentials configured")
    return configs[provider]


@pytest.fixture
def storage(storage_config):
    adapter = StorageFactory.create(storage_config, mock=not LIVE)
    if LIVE:
        _live_adapters.setdefault(storage_config.provider, adapter)
    return adapter


@pytest.fixture(scope="session", autouse=True)
def purge_live_storage():
    yield
    for adapter in _live_adapters.values():
        adapter.destroy_directory()
