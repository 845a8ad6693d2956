"""Entry point for the record server."""

import time
import uuid

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.exceptions import (
    BackendError,
    ChecksumMismatchError,
    NotFoundError,
    RecordTooLargeError,
)
from common.logging_config import setup_logging
from recordstore.base import RecordStore
from server.config import SERVER_HOST, SERVER_PORT
from server.dependencies import get_store
from server.routes import router as record_router
from server.schemas import ErrorResponse, StatusResponse

logger = setup_logging('server')
setup_logging('recordstore')

app = FastAPI(
    title="Stash Record Server",
    description="Size-limited partition record store for content-addressed blobs",
    version="1.0.0"
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()
    logger.info(f"Request started: {request.method} {request.url.path} [request_id={request_id}]")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id
    return response


def _error_response(status_code: int, exc: Exception, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), code=code).model_dump()
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.info(f"Not found: {exc} [request_id={request_id}] path={request.url.path}")
    return _error_response(status.HTTP_404_NOT_FOUND, exc, "NOT_FOUND")


@app.exception_handler(RecordTooLargeError)
async def record_too_large_handler(request: Request, exc: RecordTooLargeError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(f"Record too large: {exc} [request_id={request_id}] path={request.url.path}")
    return _error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, exc, "RECORD_TOO_LARGE")


@app.exception_handler(ChecksumMismatchError)
async def checksum_mismatch_handler(request: Request, exc: ChecksumMismatchError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(f"Checksum mismatch: {exc} [request_id={request_id}] path={request.url.path}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc, "CHECKSUM_MISMATCH")


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Backend error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc, "BACKEND_ERROR")


app.include_router(record_router)


@app.get("/", response_model=StatusResponse)
async def root(store: RecordStore = Depends(get_store)):
    """
    Root endpoint for health check; reports the record size ceiling.
    """
    return StatusResponse(status="running", max_record_size=store.max_record_size)


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)


if __name__ == "__main__":
    main()
