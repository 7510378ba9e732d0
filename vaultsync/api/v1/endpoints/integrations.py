"""API endpoints for managing integrations."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vaultsync import schemas
from vaultsync.api import deps
from vaultsync.api.context import ApiContext
from vaultsync.core.integration_service import integration_service

router = APIRouter()


@router.post("/integrations", response_model=schemas.CreateIntegrationResult)
async def create_integration(
    *,
    db: AsyncSession = Depends(deps.get_db),
    integration_in: schemas.IntegrationCreate,
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.CreateIntegrationResult:
    """Create an integration that pushes a folder's secrets to an external target.

    Args:
    -----
        db: The database session
        integration_in: The auth to use, the source scope and the target descriptor
        ctx: The actor context

    Returns:
    --------
        schemas.CreateIntegrationResult: The new integration and the auth it uses
    """
    return await integration_service.create_integration(db, integration_in=integration_in, ctx=ctx)


@router.patch("/integrations/{integration_id}", response_model=schemas.Integration)
async def update_integration(
    *,
    db: AsyncSession = Depends(deps.get_db),
    integration_id: UUID,
    integration_in: schemas.IntegrationUpdate,
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.Integration:
    """Move an integration to another scope or change its target."""
    return await integration_service.update_integration(
        db, id=integration_id, integration_in=integration_in, ctx=ctx
    )


@router.delete("/integrations/{integration_id}", response_model=schemas.Integration)
async def delete_integration(
    *,
    db: AsyncSession = Depends(deps.get_db),
    integration_id: UUID,
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.Integration:
    """Delete an integration.

    The integration auth goes with it when no other integration uses that auth.
    """
    return await integration_service.delete_integration(db, id=integration_id, ctx=ctx)


@router.post("/integrations/{integration_id}/sync", response_model=schemas.Integration)
async def sync_integration(
    *,
    db: AsyncSession = Depends(deps.get_db),
    integration_id: UUID,
    ctx: ApiContext = Depends(deps.get_context),
) -> schemas.Integration:
    """Trigger a sync pass for the integration's scope."""
    return await integration_service.sync_integration(db, id=integration_id, ctx=ctx)


@router.get("/projects/{project_id}/integrations", response_model=list[schemas.Integration])
async def list_integrations(
    *,
    db: AsyncSession = Depends(deps.get_db),
    project_id: UUID,
    ctx: ApiContext = Depends(deps.get_context),
) -> list[schemas.Integration]:
    """List the integrations of a project."""
    return await integration_service.list_integration_by_project(
        db, project_id=project_id, ctx=ctx
    )
