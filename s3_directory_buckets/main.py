from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status

from s3_directory_buckets.logging_setup import ensure_logging
from s3_directory_buckets.routes.directory_buckets import router as directory_buckets_router
from s3_directory_buckets.services.directory_bucket_service import DirectoryBucketServiceError


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_logging()
    yield


app = FastAPI(lifespan=lifespan)

app.include_router(directory_buckets_router)


@app.exception_handler(DirectoryBucketServiceError)
async def directory_bucket_error_handler(request: Request, exc: DirectoryBucketServiceError) -> JSONResponse:
    """Map directory bucket failures to a consistent HTTP response.

    Returns:
        404 when S3 reports a missing bucket/object, otherwise 502 Bad Gateway,
        with a JSON body: {"detail": "...", "code": "..."}
    """
    status_code = status.HTTP_404_NOT_FOUND if exc.is_not_found else status.HTTP_502_BAD_GATEWAY
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.get("/")
async def root():
    return {"message": "Hello World! S3 directory bucket examples are running."}
