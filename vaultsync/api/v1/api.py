"""API routes for the FastAPI application."""

from fastapi import APIRouter

from vaultsync.api.v1.endpoints import health, integrations

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(integrations.router, tags=["integrations"])
