from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from botocore.exceptions import ClientError
from pydantic import BaseModel, Field


class ObjectMetadata(BaseModel):
    etag: Optional[str] = None
    content_type: Optional[str] = None
    content_length: Optional[int] = None
    last_modified: Optional[datetime] = None

    @staticmethod
    def from_head_object(response: dict[str, Any]) -> "ObjectMetadata":
        return ObjectMetadata(
            etag=response.get("ETag"),
            content_type=response.get("ContentType"),
            content_length=response.get("ContentLength"),
            last_modified=response.get("LastModified"),
        )


class ServiceErrorDetail(BaseModel):
    code: str = "Unknown"
    message: str = ""

    @staticmethod
    def from_client_error(exc: ClientError) -> "ServiceErrorDetail":
        error = exc.response.get("Error") or {}
        return ServiceErrorDetail(
            code=str(error.get("Code") or "Unknown"),
            message=str(error.get("Message") or exc),
        )


class HeadObjectResult(BaseModel):
    """Outcome of a metadata fetch.

    A service-reported failure (missing bucket, missing object, access denied)
    is recorded in ``error`` instead of being raised. The result is truthy only
    when the object was found.
    """

    bucket: str
    key: str
    found: bool
    metadata: Optional[ObjectMetadata] = None
    error: Optional[ServiceErrorDetail] = None

    def __bool__(self) -> bool:
        return self.found


class HeadObjectResponse(BaseModel):
    bucket: str = Field(..., description="Directory bucket name")
    key: str = Field(..., description="S3 object key")
    metadata: ObjectMetadata


class DeleteBucketResponse(BaseModel):
    bucket: str
    deleted: bool


class ErrorResponse(BaseModel):
    detail: str
    code: Optional[str] = None
