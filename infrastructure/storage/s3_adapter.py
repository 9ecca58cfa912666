"""
S3 Storage Adapters
===================

Concrete StorageAdapter implementations for S3-compatible object stores,
using django-storages' S3Boto3Storage on top of boto3.

Google Cloud Storage is reached through its S3 interoperability endpoint
with HMAC keys, so both providers share one client stack and differ only
in endpoint, credential names and public URL format.
"""

import logging
import mimetypes
import posixpath
from typing import Any, Dict, Optional
from urllib.parse import quote

from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import ClientError
from botocore.exceptions import ConnectionError as BotoConnectionError
from botocore.exceptions import HTTPClientError, NoCredentialsError, PartialCredentialsError
from django.core.files import File
from django.core.files.storage import InMemoryStorage, Storage
from storages.backends.s3boto3 import S3Boto3Storage

from .config import Provider, ProviderConfig
from .exceptions import StorageAuthError, StorageConnectionError, StorageException, StorageNotFoundError
from .interface import StorageAdapter

logger = logging.getLogger(__name__)

AUTH_ERROR_CODES = {"403", "AccessDenied", "Forbidden", "InvalidAccessKeyId", "SignatureDoesNotMatch", "ExpiredToken"}
NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound", "NoSuchBucket"}

# Upload attributes given as HTTP header names, mapped to boto3 ExtraArgs
HEADER_EXTRA_ARGS = {
    "cache-control": "CacheControl",
    "content-disposition": "ContentDisposition",
    "content-encoding": "ContentEncoding",
    "content-language": "ContentLanguage",
    "content-type": "ContentType",
    "expires": "Expires",
}
METADATA_PREFIX = "x-amz-meta-"


class S3CompatibleStorageAdapter(StorageAdapter):
    """
    Shared behaviour of the S3-compatible providers.

    Subclasses provide the credential keys, endpoint and public URL format.
    """

    access_key_setting: str
    secret_key_setting: str

    @property
    def bucket_name(self) -> str:
        return self.config.directory

    def _storage_options(self) -> Dict[str, Any]:
        return {
            "access_key": self.config.credentials[self.access_key_setting],
            "secret_key": self.config.credentials[self.secret_key_setting],
            "bucket_name": self.bucket_name,
            "file_overwrite": True,
            "querystring_auth": True,
            "signature_version": "s3v4",
        }

    def _build_storage(self) -> Storage:
        if self.mock:
            logger.info(f"Using in-memory {self.provider.value} storage for bucket {self.bucket_name}")
            return InMemoryStorage(base_url=self.default_url("").rstrip("/") + "/")

        logger.info(f"Connecting to {self.provider.value} bucket {self.bucket_name}")
        return S3Boto3Storage(**self._storage_options())

    def _write_parameters(self, path: str, config: ProviderConfig) -> Dict[str, Any]:
        """boto3 ExtraArgs for an upload: ACL, content type and custom attributes."""
        params: Dict[str, Any] = {
            "ACL": "public-read" if config.public else "private",
            "ContentType": self._guess_content_type(path),
        }

        metadata = {}
        for name, value in config.attributes.items():
            lowered = name.lower()
            if lowered.startswith(METADATA_PREFIX):
                metadata[name[len(METADATA_PREFIX):]] = value
            else:
                params[HEADER_EXTRA_ARGS.get(lowered, name)] = value

        if metadata:
            params["Metadata"] = metadata
        return params

    @staticmethod
    def _guess_content_type(path: str) -> str:
        content_type, _ = mimetypes.guess_type(posixpath.basename(path))
        return content_type or "application/octet-stream"

    def _save(self, content: File, path: str, config: ProviderConfig) -> str:
        if self.mock:
            return super()._save(content, path, config)

        # ACL and attributes are per call; storage.save() only applies storage-wide defaults
        if hasattr(content, "seek"):
            content.seek(0)
        self.storage.bucket.Object(path).upload_fileobj(content, ExtraArgs=self._write_parameters(path, config))
        return path

    def _is_directory(self, path: str) -> bool:
        # Bucket keys are flat; exists() is only true for real objects
        if not self.mock:
            return False
        return super()._is_directory(path)

    def authenticated_url(self, path: str, expires_in: int = 3600) -> Optional[str]:
        with self._backend_errors("sign", path):
            if self.mock:
                return self.storage.url(path)
            return self.storage.url(path, expire=expires_in)

    def _remove_directory(self) -> None:
        if self.mock:
            return
        self.storage.bucket.delete()
        logger.info(f"Deleted {self.provider.value} bucket {self.bucket_name}")

    def _translate_error(self, error: Exception, path: str) -> StorageException:
        if isinstance(error, (NoCredentialsError, PartialCredentialsError)):
            return StorageAuthError(f"{self.provider.value} credentials not found or invalid")

        if isinstance(error, (BotoConnectionError, HTTPClientError)):
            return StorageConnectionError(f"{self.provider.value} storage unreachable: {str(error)}")

        if isinstance(error, ClientError):
            error_code = str(error.response.get("Error", {}).get("Code", ""))
            if error_code in AUTH_ERROR_CODES:
                return StorageAuthError(f"Access denied to {self.provider.value} bucket '{self.bucket_name}'")
            if error_code in NOT_FOUND_CODES:
                return StorageNotFoundError(f"File not found: {path}")

        if isinstance(error, S3UploadFailedError):
            # boto3 flattens the ClientError of a failed transfer into the message
            message = str(error)
            if any(code in message for code in AUTH_ERROR_CODES if not code.isdigit()):
                return StorageAuthError(f"Access denied to {self.provider.value} bucket '{self.bucket_name}'")

        return super()._translate_error(error, path)


class AWSStorageAdapter(S3CompatibleStorageAdapter):
    """
    Amazon S3 storage.

    Credentials:
        aws_access_key_id, aws_secret_access_key (required)
        region, endpoint_url (optional; endpoint_url targets MinIO and other S3 servers)
    """

    provider = Provider.AWS
    access_key_setting = "aws_access_key_id"
    secret_key_setting = "aws_secret_access_key"

    @property
    def region(self) -> Optional[str]:
        return self.config.credentials.get("region")

    @property
    def endpoint_url(self) -> Optional[str]:
        return self.config.credentials.get("endpoint_url")

    def _storage_options(self) -> Dict[str, Any]:
        options = super()._storage_options()
        if self.region:
            options["region_name"] = self.region
        if self.endpoint_url:
            options["endpoint_url"] = self.endpoint_url
            options["addressing_style"] = "path"
        return options

    def default_url(self, path: str) -> Optional[str]:
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{quote(path)}"
        if self.region:
            return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{quote(path)}"
        return f"https://{self.bucket_name}.s3.amazonaws.com/{quote(path)}"


class GoogleStorageAdapter(S3CompatibleStorageAdapter):
    """
    Google Cloud Storage through the S3 interoperability API.

    Credentials:
        google_storage_access_key_id, google_storage_secret_access_key (HMAC keys)
    """

    provider = Provider.GOOGLE
    access_key_setting = "google_storage_access_key_id"
    secret_key_setting = "google_storage_secret_access_key"

    endpoint_url = "https://storage.googleapis.com"
    public_host = "https://commondatastorage.googleapis.com"

    def _storage_options(self) -> Dict[str, Any]:
        options = super()._storage_options()
        options["endpoint_url"] = self.endpoint_url
        options["addressing_style"] = "path"
        return options

    def default_url(self, path: str) -> Optional[str]:
        return f"{self.public_host}/{self.bucket_name}/{quote(path)}"
