from __future__ import annotations

import logging
from typing import Any, Optional

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from s3_directory_buckets.models.directory_bucket import HeadObjectResult, ServiceErrorDetail
from s3_directory_buckets.services.config import DirectoryBucketConfig
from s3_directory_buckets.services.directory_bucket_operations import (
    delete_directory_bucket,
    fetch_object_metadata,
)


logger = logging.getLogger(__name__)

# Error codes S3 uses for a missing bucket or object. HeadObject has no body,
# so a missing key surfaces as the bare status code.
NOT_FOUND_CODES = frozenset({"NoSuchBucket", "NoSuchKey", "NotFound", "404"})


class DirectoryBucketServiceError(RuntimeError):
    """A directory bucket call failed on the S3 side."""

    def __init__(self, message: str, *, code: str = "Unknown", operation: Optional[str] = None) -> None:
        self.code = code
        self.message = message
        self.operation = operation
        super().__init__(f"{code}: {message}")

    @staticmethod
    def from_client_error(exc: ClientError, *, operation: str) -> "DirectoryBucketServiceError":
        detail = ServiceErrorDetail.from_client_error(exc)
        return DirectoryBucketServiceError(detail.message, code=detail.code, operation=operation)

    @staticmethod
    def from_botocore_error(exc: BotoCoreError, *, operation: str) -> "DirectoryBucketServiceError":
        return DirectoryBucketServiceError(str(exc), code=type(exc).__name__, operation=operation)

    @property
    def is_not_found(self) -> bool:
        return self.code in NOT_FOUND_CODES


class DirectoryBucketService:
    def __init__(
        self,
        config: DirectoryBucketConfig,
        *,
        session: Any = None,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config
        self._session = session if session is not None else aioboto3.Session()
        self._log = log or logger

    @property
    def config(self) -> DirectoryBucketConfig:
        return self._config

    def client(self) -> Any:
        """Async context manager yielding an S3 client for the configured region."""

        return self._session.client(
            "s3",
            region_name=self._config.region_name,
            endpoint_url=self._config.endpoint_url,
        )

    async def head_object(self, *, bucket: str, key: str) -> HeadObjectResult:
        if not bucket:
            raise ValueError("'bucket' must be provided")
        if not key:
            raise ValueError("'key' must be provided")

        try:
            s3_client: Any = self.client()
            async with s3_client as s3:
                return await fetch_object_metadata(s3, bucket, key, log=self._log)
        except BotoCoreError as exc:
            self._log.exception("S3 head_object failed (bucket=%s, key=%s)", bucket, key)
            raise DirectoryBucketServiceError.from_botocore_error(exc, operation="HeadObject") from exc

    async def delete_bucket(self, *, bucket: str) -> None:
        if not bucket:
            raise ValueError("'bucket' must be provided")

        try:
            s3_client: Any = self.client()
            async with s3_client as s3:
                await delete_directory_bucket(s3, bucket, log=self._log)
        except ClientError as exc:
            raise DirectoryBucketServiceError.from_client_error(exc, operation="DeleteBucket") from exc
        except BotoCoreError as exc:
            self._log.exception("S3 delete_bucket failed (bucket=%s)", bucket)
            raise DirectoryBucketServiceError.from_botocore_error(exc, operation="DeleteBucket") from exc
