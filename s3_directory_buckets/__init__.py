"""Example programs for Amazon S3 directory buckets."""
