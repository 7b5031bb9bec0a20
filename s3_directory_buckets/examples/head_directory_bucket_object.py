"""Retrieve object metadata from an S3 directory bucket.

Before running this example:

- AWS credentials must be resolvable by botocore (env vars, profile, SSO, ...).
- Directory buckets are served through zonal endpoints. Configure a gateway VPC
  endpoint or otherwise make sure the zone in S3_DIRECTORY_BUCKET_ZONE is
  reachable from where this runs.

Run with ``python -m s3_directory_buckets.examples.head_directory_bucket_object``.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

import aioboto3
from botocore.exceptions import ClientError

from s3_directory_buckets.logging_setup import ensure_logging
from s3_directory_buckets.models.directory_bucket import ServiceErrorDetail
from s3_directory_buckets.services.config import DirectoryBucketConfig
from s3_directory_buckets.services.directory_bucket_operations import (
    delete_directory_bucket,
    head_directory_bucket_object,
)
from s3_directory_buckets.services.setup.directory_bucket_setup_service import (
    create_directory_bucket,
    delete_all_objects_in_directory_bucket,
    directory_bucket_name,
    put_directory_bucket_object,
)

logger = logging.getLogger(__name__)

DEFAULT_OBJECT_KEY = "example-object-2"
SAMPLE_FILE = Path(__file__).resolve().parent / "resources" / "sample1.txt"


async def run(
    s3: Any,
    *,
    config: DirectoryBucketConfig,
    bucket_name: Optional[str] = None,
    object_key: str = DEFAULT_OBJECT_KEY,
    file_path: Path = SAMPLE_FILE,
) -> bool:
    """Create a bucket, upload one object, head it, then tear everything down.

    Returns whether the metadata was retrieved. The bucket is emptied and
    deleted on every exit path.
    """

    bucket_name = bucket_name or directory_bucket_name(config.bucket_prefix, config.zone)
    object_exists = False

    try:
        await create_directory_bucket(s3, bucket_name, config.zone)
        await put_directory_bucket_object(s3, bucket_name, object_key, file_path)

        object_exists = await head_directory_bucket_object(s3, bucket_name, object_key)
        if object_exists:
            logger.info("Object metadata retrieved successfully.")
        else:
            logger.error("Failed to retrieve object metadata.")
    except ClientError as exc:
        detail = ServiceErrorDetail.from_client_error(exc)
        logger.error("An error occurred during S3 operations: %s - Error code: %s", detail.message, detail.code)
    finally:
        await _cleanup(s3, bucket_name)

    return object_exists


async def _cleanup(s3: Any, bucket_name: str) -> None:
    try:
        logger.info("Deleting the objects in bucket: %s", bucket_name)
        await delete_all_objects_in_directory_bucket(s3, bucket_name)
        logger.info("Attempting to delete bucket: %s", bucket_name)
        await delete_directory_bucket(s3, bucket_name)
    except ClientError as exc:
        detail = ServiceErrorDetail.from_client_error(exc)
        logger.error("Failed to delete bucket: %s - Error code: %s", detail.message, detail.code)
    except Exception as exc:
        logger.error("Failed to delete the bucket due to unexpected error: %s", exc)


async def _main(config: DirectoryBucketConfig) -> bool:
    session: Any = aioboto3.Session()
    async with session.client("s3", region_name=config.region_name, endpoint_url=config.endpoint_url) as s3:
        return await run(s3, config=config)


def main() -> int:
    ensure_logging()
    config = DirectoryBucketConfig.from_env()
    return 0 if asyncio.run(_main(config)) else 1


if __name__ == "__main__":
    raise SystemExit(main())
