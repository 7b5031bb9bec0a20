"""Configuration package (Facade).

Re-exports the public config types so callers import from one stable path:

	from s3_directory_buckets.services.config import DirectoryBucketConfig
"""

from s3_directory_buckets.services.config.directory_bucket_config import DirectoryBucketConfig

__all__ = ["DirectoryBucketConfig"]
