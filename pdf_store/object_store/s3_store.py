"""
pdf_store/object_store/s3_store.py

S3 implementation of the ObjectStore interface.

Talks to AWS S3 or any S3-compatible endpoint (MinIO in the Docker
Compose deployment) through a single boto3 client. All backend-specific
details are fully contained here; the rest of the application never
imports from `boto3` or `botocore` directly.
"""

from __future__ import annotations

from typing import Any, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from pdf_store.core.config import settings
from pdf_store.core.exceptions import ObjectNotFoundError, ObjectStoreError
from pdf_store.core.logger import get_logger
from pdf_store.object_store.base import BlobStream, ObjectStore

logger = get_logger(__name__)

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}
_MISSING_BUCKET_CODES = {"NoSuchBucket", "404", "NotFound"}


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3ObjectStore(ObjectStore):
    """
    ObjectStore backed by one S3 bucket.

    The boto3 client is created once on construction and reused for the
    lifetime of the object; boto3 clients are thread-safe, so a single
    instance serves every concurrent request.
    """

    def __init__(
        self,
        bucket: str | None = None,
        client: Any | None = None,
        chunk_size: int | None = None,
    ) -> None:
        """
        Args:
            bucket     : Bucket holding the blobs. Defaults to ``settings.s3_bucket``.
            client     : Pre-built boto3 S3 client. Built from settings when omitted.
            chunk_size : Bytes per chunk when streaming a blob back.
                         Defaults to ``settings.stream_chunk_size``.
        """
        self._bucket = bucket or settings.s3_bucket
        self._chunk_size = chunk_size or settings.stream_chunk_size
        self._client = client or self._build_client()

        logger.info("S3ObjectStore ready: bucket=%s", self._bucket)

    @staticmethod
    def _build_client() -> Any:
        return boto3.client(
            "s3",
            endpoint_url=settings.s3_endpoint_url,
            region_name=settings.s3_region,
            aws_access_key_id=settings.s3_access_key,
            aws_secret_access_key=settings.s3_secret_key,
            config=BotoConfig(
                connect_timeout=settings.s3_connect_timeout,
                read_timeout=settings.s3_read_timeout,
                retries={"max_attempts": 1},
            ),
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    # ── ObjectStore interface ──────────────────────────────────────────────────

    def initialize(self) -> None:
        """Create the bucket if it does not exist yet."""
        try:
            self._client.head_bucket(Bucket=self._bucket)
            logger.info("Bucket '%s' already exists.", self._bucket)
            return
        except ClientError as exc:
            if _error_code(exc) not in _MISSING_BUCKET_CODES:
                raise ObjectStoreError(f"head_bucket failed for '{self._bucket}': {exc}") from exc
        except BotoCoreError as exc:
            raise ObjectStoreError(f"head_bucket failed for '{self._bucket}': {exc}") from exc

        create_kwargs: dict[str, Any] = {"Bucket": self._bucket}
        # us-east-1 rejects an explicit LocationConstraint.
        region = self._client.meta.region_name
        if region and region != "us-east-1":
            create_kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}

        try:
            self._client.create_bucket(**create_kwargs)
        except ClientError as exc:
            if _error_code(exc) in {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}:
                logger.info("Bucket '%s' was created concurrently.", self._bucket)
                return
            raise ObjectStoreError(f"create_bucket failed for '{self._bucket}': {exc}") from exc
        except BotoCoreError as exc:
            raise ObjectStoreError(f"create_bucket failed for '{self._bucket}': {exc}") from exc

        logger.info("Bucket '%s' created.", self._bucket)

    def put(self, key: str, data: bytes, content_type: str) -> None:
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentLength=len(data),
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(f"put_object failed for '{key}': {exc}") from exc

        logger.debug("Stored %d byte(s) at s3://%s/%s", len(data), self._bucket, key)

    def get(self, key: str) -> BlobStream:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            if _error_code(exc) in _MISSING_KEY_CODES:
                raise ObjectNotFoundError(f"No object at s3://{self._bucket}/{key}") from exc
            raise ObjectStoreError(f"get_object failed for '{key}': {exc}") from exc
        except BotoCoreError as exc:
            raise ObjectStoreError(f"get_object failed for '{key}': {exc}") from exc

        body = response["Body"]
        length: Optional[int] = response.get("ContentLength")
        return BlobStream(
            body.iter_chunks(chunk_size=self._chunk_size),
            content_length=length,
            close=body.close,
        )
