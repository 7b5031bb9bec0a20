import hashlib
import os
from datetime import datetime, timezone
from typing import Any, Optional

import pytest
from botocore.exceptions import ClientError

from s3_directory_buckets.services.config import DirectoryBucketConfig


def pytest_configure(config):
    """Keep tests away from real AWS configuration."""
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")


def client_error(code: str, message: str, operation: str, status: int = 400) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


class FakeS3Client:
    """In-memory stand-in for an aioboto3 S3 client.

    Only the calls the directory bucket helpers make are implemented. Errors
    are real botocore ClientErrors shaped like the ones S3 returns.
    """

    def __init__(self, *, page_size: int = 1000) -> None:
        self.buckets: dict[str, dict[str, dict[str, Any]]] = {}
        self.bucket_configs: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.page_size = page_size
        self.enter_count = 0
        self.exit_count = 0
        self._failures: dict[str, Exception] = {}

    async def __aenter__(self) -> "FakeS3Client":
        self.enter_count += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.exit_count += 1

    def fail_next(self, method: str, exc: Exception) -> None:
        self._failures[method] = exc

    def _record(self, method: str, **kwargs: Any) -> None:
        self.calls.append((method, kwargs))
        exc = self._failures.pop(method, None)
        if exc is not None:
            raise exc

    def _bucket(self, bucket: str, operation: str) -> dict[str, dict[str, Any]]:
        if bucket not in self.buckets:
            raise client_error("NoSuchBucket", "The specified bucket does not exist", operation, 404)
        return self.buckets[bucket]

    async def create_bucket(self, *, Bucket: str, CreateBucketConfiguration: Optional[dict] = None) -> dict:
        self._record("create_bucket", Bucket=Bucket, CreateBucketConfiguration=CreateBucketConfiguration)
        if Bucket in self.buckets:
            raise client_error(
                "BucketAlreadyOwnedByYou",
                "Your previous request to create the named bucket succeeded and you already own it.",
                "CreateBucket",
                409,
            )
        self.buckets[Bucket] = {}
        self.bucket_configs[Bucket] = CreateBucketConfiguration or {}
        return {"Location": f"/{Bucket}"}

    async def put_object(self, *, Bucket: str, Key: str, Body: bytes, ContentType: Optional[str] = None) -> dict:
        self._record("put_object", Bucket=Bucket, Key=Key, ContentType=ContentType)
        objects = self._bucket(Bucket, "PutObject")
        etag = f'"{hashlib.md5(Body).hexdigest()}"'
        objects[Key] = {
            "Body": Body,
            "ContentType": ContentType or "binary/octet-stream",
            "ContentLength": len(Body),
            "ETag": etag,
            "LastModified": datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
        }
        return {"ETag": etag}

    async def head_object(self, *, Bucket: str, Key: str) -> dict:
        self._record("head_object", Bucket=Bucket, Key=Key)
        objects = self._bucket(Bucket, "HeadObject")
        if Key not in objects:
            raise client_error("404", "Not Found", "HeadObject", 404)
        obj = objects[Key]
        return {
            "ETag": obj["ETag"],
            "ContentType": obj["ContentType"],
            "ContentLength": obj["ContentLength"],
            "LastModified": obj["LastModified"],
        }

    async def list_objects_v2(self, *, Bucket: str, ContinuationToken: Optional[str] = None) -> dict:
        self._record("list_objects_v2", Bucket=Bucket, ContinuationToken=ContinuationToken)
        keys = sorted(self._bucket(Bucket, "ListObjectsV2"))
        start = int(ContinuationToken) if ContinuationToken else 0
        page = keys[start : start + self.page_size]
        response: dict[str, Any] = {"KeyCount": len(page), "IsTruncated": start + self.page_size < len(keys)}
        if page:
            response["Contents"] = [{"Key": key} for key in page]
        if response["IsTruncated"]:
            response["NextContinuationToken"] = str(start + self.page_size)
        return response

    async def delete_objects(self, *, Bucket: str, Delete: dict) -> dict:
        keys = [item["Key"] for item in Delete["Objects"]]
        self._record("delete_objects", Bucket=Bucket, Keys=keys)
        objects = self._bucket(Bucket, "DeleteObjects")
        for key in keys:
            objects.pop(key, None)
        return {"Deleted": [{"Key": key} for key in keys]}

    async def delete_object(self, *, Bucket: str, Key: str) -> dict:
        self._record("delete_object", Bucket=Bucket, Key=Key)
        self._bucket(Bucket, "DeleteObject").pop(Key, None)
        return {}

    async def delete_bucket(self, *, Bucket: str) -> dict:
        self._record("delete_bucket", Bucket=Bucket)
        objects = self._bucket(Bucket, "DeleteBucket")
        if objects:
            raise client_error("BucketNotEmpty", "The bucket you tried to delete is not empty", "DeleteBucket", 409)
        del self.buckets[Bucket]
        return {}


class FakeSession:
    """Mimics aioboto3.Session.client(), handing out one shared fake client."""

    def __init__(self, s3: FakeS3Client) -> None:
        self.s3 = s3
        self.client_kwargs: list[dict[str, Any]] = []

    def client(self, service_name: str, **kwargs: Any) -> FakeS3Client:
        assert service_name == "s3"
        self.client_kwargs.append(kwargs)
        return self.s3


@pytest.fixture
def fake_s3() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def fake_session(fake_s3: FakeS3Client) -> FakeSession:
    return FakeSession(fake_s3)


@pytest.fixture
def config() -> DirectoryBucketConfig:
    return DirectoryBucketConfig(region_name="us-west-2", zone="usw2-az1", bucket_prefix="test-bucket")


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample1.txt"
    path.write_text("Hello from a directory bucket!\n")
    return path
