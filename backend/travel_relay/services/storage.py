"""
Travel Relay — Image Upload & S3 Storage
==========================================

What:  Decodes a base64 image sent by the front-end and writes it to S3.
How:   Strips an optional data-URL prefix, base64-decodes the payload, and issues
       one PutObject through aiobotocore. The public URL is built from the
       bucket, region and key.
Who:   /upload-image route.
When:  After a logo is generated, the front-end uploads it for a stable URL.

Payload formats accepted:
    "data:image/png;base64,iVBORw0..."   → content type image/png
    "data:image/jpeg;base64,/9j/4AA..."  → content type image/jpeg
    "iVBORw0..."                         → content type image/png (no prefix)
"""

import base64
import binascii
import logging
import re
import time
from dataclasses import dataclass

from aiobotocore.session import get_session
from botocore.config import Config

from travel_relay.services.storage_base import ObjectStorage

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = re.compile(r"^data:image/(\w+);base64,")

DEFAULT_IMAGE_CONTENT_TYPE = "image/png"


@dataclass(frozen=True)
class DecodedImage:
    """Raw image bytes plus the content type taken from the data-URL prefix."""

    data: bytes
    content_type: str


def decode_image_payload(image_binary: str) -> DecodedImage:
    """
    Decode a (possibly data-URL prefixed) base64 image string.

    Missing "=" padding is tolerated, matching what browsers produce when
    they trim canvas output.

    Raises:
        ValueError: If the remaining payload is not valid base64.
    """
    content_type = DEFAULT_IMAGE_CONTENT_TYPE
    match = DATA_URL_PREFIX.match(image_binary)
    if match:
        content_type = f"image/{match.group(1).lower()}"
        image_binary = image_binary[match.end():]

    payload = "".join(image_binary.split())
    payload += "=" * (-len(payload) % 4)
    try:
        data = base64.b64decode(payload)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image payload: {e}") from e

    return DecodedImage(data=data, content_type=content_type)


class S3ObjectStorage(ObjectStorage):
    """
    Amazon S3 object store.

    A client is opened per upload inside `async with`, so nothing outlives the
    request. Botocore's own retries are limited to a single attempt.
    """

    def __init__(
        self,
        bucket: str,
        region: str,
        access_key_id: str = "",
        secret_access_key: str = "",
        timeout: float = 60.0,
    ):
        self.bucket = bucket
        self.region = region
        self._access_key_id = access_key_id or None
        self._secret_access_key = secret_access_key or None
        self._session = get_session()
        self._config = Config(
            region_name=region,
            connect_timeout=timeout,
            read_timeout=timeout,
            retries={"max_attempts": 1, "mode": "standard"},
        )

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def put_object(self, key: str, body: bytes, content_type: str) -> str:
        start_time = time.perf_counter()

        async with self._session.create_client(
            "s3",
            region_name=self.region,
            aws_access_key_id=self._access_key_id,
            aws_secret_access_key=self._secret_access_key,
            config=self._config,
        ) as client:
            await client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )

        logger.info(
            "Stored s3://%s/%s (%d bytes, %s) in %.0fms",
            self.bucket,
            key,
            len(body),
            content_type,
            (time.perf_counter() - start_time) * 1000,
        )
        return self.public_url(key)


class ImageUploadService:
    """Decode-then-store workflow behind /upload-image."""

    def __init__(self, storage: ObjectStorage):
        self.storage = storage

    async def upload(self, image_binary: str, file_name: str) -> str:
        """
        Store the image under file_name.

        Returns:
            Public URL of the stored object.

        Raises:
            ValueError: Payload is not base64.
            Exception:  Whatever the storage backend raises; not retried.
        """
        image = decode_image_payload(image_binary)
        logger.info(
            "Uploading %s (%d bytes, %s)", file_name, len(image.data), image.content_type
        )
        return await self.storage.put_object(file_name, image.data, image.content_type)
