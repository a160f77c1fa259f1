"""
core/storage.py

Blob storage for user images (avatars, portfolio pictures).
- Validates image MIME type using content sniffing
- Enforces the configured maximum size
- Uploads bytes to an S3 bucket and returns the public URL
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import boto3
import filetype
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError, PartialCredentialsError
from starlette.concurrency import run_in_threadpool

from gladiator.core.config import settings
from gladiator.core.exceptions import InvalidFile, TransportError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES: set[str] = {"image/jpeg", "image/png", "image/gif", "image/webp"}


@dataclass(frozen=True)
class ImageInfo:
    mime: str
    extension: str
    size: int


def inspect_image(data: bytes, max_size: int | None = None) -> ImageInfo:
    """
    Validate raw image bytes and detect their type.

    Raises:
        InvalidFile: If the payload is empty, too large or not a supported image.
    """
    if max_size is None:
        max_size = settings.MAX_IMAGE_SIZE
    size = len(data)
    if size == 0:
        raise InvalidFile("Received an empty file.")
    if size > max_size:
        logger.warning(f"Upload rejected: size ({size} bytes) exceeds limit ({max_size} bytes).")
        raise InvalidFile(f"Image size must be less than {max_size // 1024 // 1024}MB.")

    kind = filetype.guess(data[:261])
    detected_mime = kind.mime if kind else "unknown"
    if not kind or detected_mime not in ALLOWED_IMAGE_TYPES:
        logger.warning(f"Upload rejected: invalid file type '{detected_mime}'.")
        raise InvalidFile(
            f"Unsupported file type: '{detected_mime}'. Allowed types: "
            f"{', '.join(sorted(mt.split('/')[1].upper() for mt in ALLOWED_IMAGE_TYPES))}."
        )
    return ImageInfo(mime=detected_mime, extension=kind.extension, size=size)


class BlobStorage(ABC):
    """Upload capability: upload(bucket, path, bytes) -> public URL."""

    @abstractmethod
    async def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str: ...


class S3BlobStorage(BlobStorage):
    def __init__(self) -> None:
        try:
            self.client = boto3.client(
                "s3",
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
                region_name=settings.AWS_REGION,
            )
        except (NoCredentialsError, PartialCredentialsError):
            logger.error("AWS credentials not found or incomplete in environment settings.")
            self.client = None
        except BotoCoreError as e:
            logger.error(f"Failed to initialize Boto3 S3 client: {e}")
            self.client = None

    def public_url(self, bucket: str, path: str) -> str:
        if settings.STORAGE_PUBLIC_BASE_URL:
            return f"{settings.STORAGE_PUBLIC_BASE_URL.rstrip('/')}/{bucket}/{path}"
        return f"https://{bucket}.s3.{settings.AWS_REGION}.amazonaws.com/{path}"

    async def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        if not self.client:
            raise TransportError("Storage service is not configured or unavailable.")

        key = path.lstrip("/")
        logger.info(f"Uploading {len(data)} bytes ({content_type}) to '{bucket}/{key}'")
        try:
            await run_in_threadpool(
                self.client.put_object,
                Bucket=bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            logger.error(f"S3 ClientError uploading '{key}': {error_code} - {e}")
            raise TransportError(f"Storage upload failed: {error_code}") from e
        except BotoCoreError as e:
            logger.error(f"Unexpected error during S3 upload for '{key}': {e}", exc_info=True)
            raise TransportError("Storage upload failed.") from e

        file_url = self.public_url(bucket, key)
        logger.debug(f"Generated file URL: {file_url}")
        return file_url


_default_storage: BlobStorage | None = None


def get_blob_storage() -> BlobStorage:
    """Dependency returning the process-wide S3 storage."""
    global _default_storage
    if _default_storage is None:
        _default_storage = S3BlobStorage()
    return _default_storage
