from __future__ import annotations

import logging
from typing import Any, Optional

from botocore.exceptions import ClientError

from s3_directory_buckets.models.directory_bucket import (
    HeadObjectResult,
    ObjectMetadata,
    ServiceErrorDetail,
)


logger = logging.getLogger(__name__)


async def fetch_object_metadata(
    s3: Any,
    bucket_name: str,
    object_key: str,
    *,
    log: Optional[logging.Logger] = None,
) -> HeadObjectResult:
    """Retrieve metadata for an object in a directory bucket.

    Service-reported errors are logged and returned in the result. Anything
    that is not a `ClientError` (transport or credential failures) propagates.
    """

    log = log or logger
    log.info("Retrieving metadata for object: %s from bucket: %s", object_key, bucket_name)

    try:
        response = await s3.head_object(Bucket=bucket_name, Key=object_key)
    except ClientError as exc:
        detail = ServiceErrorDetail.from_client_error(exc)
        log.error("Failed to retrieve object metadata: %s - Error code: %s", detail.message, detail.code)
        return HeadObjectResult(bucket=bucket_name, key=object_key, found=False, error=detail)

    metadata = ObjectMetadata.from_head_object(response)
    log.info(
        'Amazon S3 object: "%s" found in bucket: "%s" with ETag: "%s"',
        object_key,
        bucket_name,
        metadata.etag,
    )
    log.info("Content-Type: %s", metadata.content_type)
    log.info("Content-Length: %s", metadata.content_length)
    log.info("Last Modified: %s", metadata.last_modified)
    return HeadObjectResult(bucket=bucket_name, key=object_key, found=True, metadata=metadata)


async def head_directory_bucket_object(
    s3: Any,
    bucket_name: str,
    object_key: str,
    *,
    log: Optional[logging.Logger] = None,
) -> bool:
    """Return True if the object exists, False on a service-reported error."""

    result = await fetch_object_metadata(s3, bucket_name, object_key, log=log)
    return bool(result)


async def delete_directory_bucket(
    s3: Any,
    bucket_name: str,
    *,
    log: Optional[logging.Logger] = None,
) -> None:
    """Delete a directory bucket. The bucket must already be empty.

    Unlike the metadata fetch, a `ClientError` is logged and re-raised.
    """

    log = log or logger
    log.info("Deleting bucket: %s", bucket_name)

    try:
        await s3.delete_bucket(Bucket=bucket_name)
    except ClientError as exc:
        detail = ServiceErrorDetail.from_client_error(exc)
        log.error("Failed to delete bucket: %s - Error code: %s", detail.message, detail.code)
        raise

    log.info("Successfully deleted bucket: %s", bucket_name)
