from typing import Dict, Mapping

# Credential keys whose values are locations, not secrets
UNMASKED_KEYS = frozenset({"local_root", "region", "endpoint_url"})


def mask_value(value: str) -> str:
    if not isinstance(value, str):
        return value
    if len(value) > 12:
        return value[:4] + "..." + value[-4:]
    return "***"


def mask_credentials(credentials: Mapping[str, str]) -> Dict[str, str]:
    """Return a copy of a credential mapping that is safe to log."""
    return {key: value if key in UNMASKED_KEYS else mask_value(value) for key, value in credentials.items()}
