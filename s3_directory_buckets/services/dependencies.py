from __future__ import annotations

from s3_directory_buckets.services.config import DirectoryBucketConfig
from s3_directory_buckets.services.directory_bucket_service import DirectoryBucketService


def get_directory_bucket_service() -> DirectoryBucketService:
    """FastAPI dependency provider for a DirectoryBucketService instance."""

    return DirectoryBucketService(DirectoryBucketConfig.from_env())
