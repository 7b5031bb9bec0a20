from __future__ import annotations

import logging
import mimetypes
import time
from pathlib import Path
from typing import Any, Optional

from botocore.exceptions import ClientError

from s3_directory_buckets.models.directory_bucket import ServiceErrorDetail


logger = logging.getLogger(__name__)

DIRECTORY_BUCKET_SUFFIX = "--x-s3"

# DeleteObjects accepts at most 1000 keys per request.
_DELETE_BATCH_SIZE = 1000


def directory_bucket_name(prefix: str, zone: str, *, suffix: Optional[str] = None) -> str:
    """Build a directory bucket name: ``<prefix>-<suffix>--<zone>--x-s3``.

    `suffix` defaults to the current time in milliseconds.
    """

    if not prefix:
        raise ValueError("'prefix' must be provided")
    if not zone:
        raise ValueError("'zone' must be provided")

    unique = suffix if suffix is not None else str(time.time_ns() // 1_000_000)
    return f"{prefix}-{unique}--{zone}{DIRECTORY_BUCKET_SUFFIX}"


def _log_client_error(log: logging.Logger, action: str, exc: ClientError) -> None:
    detail = ServiceErrorDetail.from_client_error(exc)
    log.error("%s: %s - Error code: %s", action, detail.message, detail.code)


async def create_directory_bucket(
    s3: Any,
    bucket_name: str,
    zone: str,
    *,
    log: Optional[logging.Logger] = None,
) -> None:
    log = log or logger
    log.info("Creating bucket: %s", bucket_name)

    configuration = {
        "Location": {"Type": "AvailabilityZone", "Name": zone},
        "Bucket": {"DataRedundancy": "SingleAvailabilityZone", "Type": "Directory"},
    }

    try:
        await s3.create_bucket(Bucket=bucket_name, CreateBucketConfiguration=configuration)
    except ClientError as exc:
        _log_client_error(log, "Failed to create bucket", exc)
        raise

    log.info("Bucket created successfully with location: %s", zone)


async def put_directory_bucket_object(
    s3: Any,
    bucket_name: str,
    object_key: str,
    path: Path,
    *,
    content_type: Optional[str] = None,
    log: Optional[logging.Logger] = None,
) -> None:
    """Upload a local file into a directory bucket."""

    log = log or logger

    if not object_key:
        raise ValueError("'object_key' must be provided")
    if not path.exists() or not path.is_file():
        raise FileNotFoundError(str(path))

    body = path.read_bytes()
    effective_content_type = content_type
    if effective_content_type is None:
        guessed, _ = mimetypes.guess_type(str(path))
        effective_content_type = guessed

    extra_args: dict[str, Any] = {}
    if effective_content_type:
        extra_args["ContentType"] = effective_content_type

    try:
        await s3.put_object(Bucket=bucket_name, Key=object_key, Body=body, **extra_args)
    except ClientError as exc:
        _log_client_error(log, "Failed to put object", exc)
        raise

    log.info("Successfully placed %s into bucket %s", object_key, bucket_name)


async def delete_directory_bucket_object(
    s3: Any,
    bucket_name: str,
    object_key: str,
    *,
    log: Optional[logging.Logger] = None,
) -> None:
    log = log or logger

    try:
        await s3.delete_object(Bucket=bucket_name, Key=object_key)
    except ClientError as exc:
        _log_client_error(log, "Failed to delete object", exc)
        raise

    log.info("Deleted object: %s from bucket: %s", object_key, bucket_name)


async def delete_all_objects_in_directory_bucket(
    s3: Any,
    bucket_name: str,
    *,
    log: Optional[logging.Logger] = None,
) -> int:
    """Empty a directory bucket. Returns the number of deleted keys."""

    log = log or logger

    try:
        keys: list[str] = []
        kwargs: dict[str, Any] = {"Bucket": bucket_name}
        while True:
            response = await s3.list_objects_v2(**kwargs)
            keys.extend(str(obj["Key"]) for obj in response.get("Contents", []))

            token = response.get("NextContinuationToken")
            if not response.get("IsTruncated") or not token:
                break
            kwargs["ContinuationToken"] = token

        if not keys:
            log.info("No objects found in bucket: %s", bucket_name)
            return 0

        failed = 0
        for start in range(0, len(keys), _DELETE_BATCH_SIZE):
            batch = keys[start : start + _DELETE_BATCH_SIZE]
            response = await s3.delete_objects(
                Bucket=bucket_name,
                Delete={"Objects": [{"Key": key} for key in batch]},
            )
            for error in response.get("Errors", []):
                failed += 1
                log.error(
                    "Failed to delete object %s: %s - Error code: %s",
                    error.get("Key"),
                    error.get("Message"),
                    error.get("Code"),
                )
    except ClientError as exc:
        _log_client_error(log, "Failed to delete objects in bucket", exc)
        raise

    deleted = len(keys) - failed
    log.info("Deleted %d objects from bucket: %s", deleted, bucket_name)
    return deleted
