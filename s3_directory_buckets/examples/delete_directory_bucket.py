"""Create and then delete an S3 directory bucket.

Uses the same credentials and zone settings as the head-object example.
Run with ``python -m s3_directory_buckets.examples.delete_directory_bucket``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import aioboto3
from botocore.exceptions import ClientError

from s3_directory_buckets.logging_setup import ensure_logging
from s3_directory_buckets.models.directory_bucket import ServiceErrorDetail
from s3_directory_buckets.services.config import DirectoryBucketConfig
from s3_directory_buckets.services.directory_bucket_operations import delete_directory_bucket
from s3_directory_buckets.services.setup.directory_bucket_setup_service import (
    create_directory_bucket,
    directory_bucket_name,
)

logger = logging.getLogger(__name__)


async def run(s3: Any, *, config: DirectoryBucketConfig, bucket_name: Optional[str] = None) -> bool:
    bucket_name = bucket_name or directory_bucket_name(config.bucket_prefix, config.zone)

    try:
        await create_directory_bucket(s3, bucket_name, config.zone)
        await delete_directory_bucket(s3, bucket_name)
    except ClientError as exc:
        detail = ServiceErrorDetail.from_client_error(exc)
        logger.error("An error occurred during S3 operations: %s - Error code: %s", detail.message, detail.code)
        return False
    except Exception as exc:
        logger.error("Unexpected error: %s", exc)
        return False

    return True


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
