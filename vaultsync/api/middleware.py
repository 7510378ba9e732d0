"""Middleware and exception handlers for the FastAPI application."""

import time
import traceback
import uuid
from typing import Union

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from vaultsync.core.config import settings
from vaultsync.core.exceptions import (
    InvalidStateError,
    NotFoundException,
    PermissionException,
    VaultSyncException,
    unpack_validation_error,
)
from vaultsync.core.logging import logger


async def add_request_id(request: Request, call_next: callable) -> Response:
    """Tag the request with an id, reusing the gateway's X-Request-Id when present.

    The id is echoed back in the response headers and ends up in every log line of
    the request through the ApiContext logger.
    """
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    return response


async def log_requests(request: Request, call_next: callable) -> Response:
    """Middleware to log incoming requests."""
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.info(
        f"Handled request {request.method} {request.url.path} in {duration:.2f} seconds. "
        f"Response code: {response.status_code}"
    )
    return response


async def exception_logging_middleware(request: Request, call_next: callable) -> Response:
    """Turn exceptions that escaped every handler into a logged 500 response."""
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")

        response_content = {
            "detail": f"Internal Server Error: {exc.__class__.__name__}: {str(exc)}"
        }
        if settings.LOCAL_DEVELOPMENT or settings.DEBUG:
            response_content["trace"] = traceback.format_exc()

        return JSONResponse(status_code=500, content=response_content)


# Exception handlers
async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, ValidationError]
) -> JSONResponse:
    """Exception handler for validation errors that occur during request processing.

    Returns:
    -------
        JSONResponse: A 422 response; each error maps the location of the invalid field
            to its message, e.g. ``{"errors": [{"body.source_environment": "Field required"}]}``.

    """
    error_messages = unpack_validation_error(exc)
    logger.warning(f"Validation error on {request.method} {request.url.path}: {error_messages}")
    return JSONResponse(status_code=422, content=error_messages)


async def permission_exception_handler(request: Request, exc: PermissionException) -> JSONResponse:
    """Exception handler for PermissionException.

    Args:
    ----
        request (Request): The incoming request that triggered the exception.
        exc (PermissionException): The exception object that was raised.

    Returns:
    -------
        JSONResponse: A 403 Forbidden response with the denied action and subject.

    """
    return JSONResponse(status_code=403, content=exc.to_dict())


async def not_found_exception_handler(request: Request, exc: NotFoundException) -> JSONResponse:
    """Exception handler for NotFoundException.

    Returns:
    -------
        JSONResponse: A 404 Not Found status response that details the error message.

    """
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def invalid_state_exception_handler(request: Request, exc: InvalidStateError) -> JSONResponse:
    """Exception handler for InvalidStateError.

    A row breaking a structural expectation is a server-side fault, not a client error.
    """
    logger.error(f"Invalid state on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


async def vaultsync_exception_handler(request: Request, exc: VaultSyncException) -> JSONResponse:
    """Fallback handler for every other VaultSyncException."""
    return JSONResponse(status_code=400, content={"detail": str(exc)})
