"""Main module of the FastAPI application.

This module sets up the FastAPI application and the middleware to log incoming requests
and unhandled exceptions.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from vaultsync.api.middleware import (
    add_request_id,
    exception_logging_middleware,
    invalid_state_exception_handler,
    log_requests,
    not_found_exception_handler,
    permission_exception_handler,
    validation_exception_handler,
    vaultsync_exception_handler,
)
from vaultsync.api.v1.api import api_router
from vaultsync.core.config import settings
from vaultsync.core.exceptions import (
    InvalidStateError,
    NotFoundException,
    PermissionException,
    VaultSyncException,
)
from vaultsync.core.logging import logger
from vaultsync.platform.temporal.client import temporal_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events.

    Closes the Temporal client connection on shutdown.
    """
    logger.info(
        f"Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT}), "
        f"temporal {'enabled' if settings.TEMPORAL_ENABLED else 'disabled'}"
    )
    yield
    await temporal_client.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api/v1")

# Register middleware directly
app.middleware("http")(add_request_id)
app.middleware("http")(log_requests)
app.middleware("http")(exception_logging_middleware)

# Register exception handlers
app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(ValidationError)(validation_exception_handler)
app.exception_handler(PermissionException)(permission_exception_handler)
app.exception_handler(NotFoundException)(not_found_exception_handler)
app.exception_handler(InvalidStateError)(invalid_state_exception_handler)
app.exception_handler(VaultSyncException)(vaultsync_exception_handler)
