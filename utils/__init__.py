# Shared helpers for the upload storage project

from .logging_utils import mask_credentials, mask_value

__all__ = ["mask_credentials", "mask_value"]
