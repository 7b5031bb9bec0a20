from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from starlette import status

from s3_directory_buckets.models.directory_bucket import (
    DeleteBucketResponse,
    ErrorResponse,
    HeadObjectResponse,
)
from s3_directory_buckets.services.dependencies import get_directory_bucket_service
from s3_directory_buckets.services.directory_bucket_service import (
    DirectoryBucketService,
    DirectoryBucketServiceError,
)

router = APIRouter(prefix="/directory-buckets", tags=["directory-buckets"])

_ERROR_RESPONSES = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
}


@router.get(
    "/{bucket}/objects/{key:path}/metadata",
    response_model=HeadObjectResponse,
    responses=_ERROR_RESPONSES,
)
async def head_object(
    bucket: str = Path(..., description="Directory bucket name"),
    key: str = Path(..., description="S3 object key"),
    svc: DirectoryBucketService = Depends(get_directory_bucket_service),
) -> HeadObjectResponse:
    result = await svc.head_object(bucket=bucket, key=key)
    if not result or result.metadata is None:
        # The app handler turns missing buckets/objects into 404, anything else into 502.
        if result.error is None:
            raise DirectoryBucketServiceError("Object not found", code="NotFound", operation="HeadObject")
        raise DirectoryBucketServiceError(result.error.message, code=result.error.code, operation="HeadObject")
    return HeadObjectResponse(bucket=bucket, key=key, metadata=result.metadata)


@router.delete("/{bucket}", response_model=DeleteBucketResponse, responses=_ERROR_RESPONSES)
async def delete_bucket(
    bucket: str = Path(..., description="Directory bucket name"),
    svc: DirectoryBucketService = Depends(get_directory_bucket_service),
) -> DeleteBucketResponse:
    await svc.delete_bucket(bucket=bucket)
    return DeleteBucketResponse(bucket=bucket, deleted=True)
