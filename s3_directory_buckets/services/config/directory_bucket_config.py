from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar, Optional


@dataclass(frozen=True)
class DirectoryBucketConfig:
    """Runtime configuration for talking to S3 directory buckets.

    Directory buckets live in a single Availability Zone; `zone` is the zone ID
    (e.g. "usw2-az1") and must belong to `region_name`.
    """

    region_name: str
    zone: str
    bucket_prefix: str = "test-bucket"
    endpoint_url: Optional[str] = None

    _DEFAULT_REGION: ClassVar[str] = "us-west-2"
    _DEFAULT_ZONE: ClassVar[str] = "usw2-az1"
    _DEFAULT_BUCKET_PREFIX: ClassVar[str] = "test-bucket"

    @staticmethod
    def from_env() -> "DirectoryBucketConfig":
        region_name = (
            os.getenv("AWS_REGION")
            or os.getenv("AWS_DEFAULT_REGION")
            or DirectoryBucketConfig._DEFAULT_REGION
        )

        zone = os.getenv("S3_DIRECTORY_BUCKET_ZONE", DirectoryBucketConfig._DEFAULT_ZONE).strip()
        if not zone:
            raise ValueError("Invalid S3_DIRECTORY_BUCKET_ZONE; must not be empty")

        bucket_prefix = os.getenv(
            "S3_DIRECTORY_BUCKET_PREFIX", DirectoryBucketConfig._DEFAULT_BUCKET_PREFIX
        ).strip()
        if not bucket_prefix:
            raise ValueError("Invalid S3_DIRECTORY_BUCKET_PREFIX; must not be empty")

        endpoint_url = os.getenv("S3_ENDPOINT_URL") or None

        return DirectoryBucketConfig(
            region_name=region_name,
            zone=zone,
            bucket_prefix=bucket_prefix,
            endpoint_url=endpoint_url,
        )
