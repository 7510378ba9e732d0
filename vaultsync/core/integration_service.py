"""Integration lifecycle service.

Every operation resolves the project from the record it touches, checks the
actor's capabilities before any folder lookup or write, and every mutation
triggers a sync pass for the affected secret scope before returning.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vaultsync import crud, schemas
from vaultsync.api.context import ApiContext
from vaultsync.core.exceptions import (
    FolderNotFoundException,
    IntegrationAuthNotFoundException,
    IntegrationNotFoundException,
    PermissionException,
)
from vaultsync.core.permission_service import ProjectPermission, permission_service
from vaultsync.core.shared_models import ProjectPermissionAction, ProjectPermissionSub
from vaultsync.core.temporal_service import temporal_service
from vaultsync.db.unit_of_work import UnitOfWork


class IntegrationService:
    """Create, update, delete, list and manually sync integrations."""

    async def _get_permission(
        self, db: AsyncSession, project_id: UUID, ctx: ApiContext
    ) -> ProjectPermission:
        return await permission_service.get_project_permission(
            db,
            actor=ctx.actor,
            actor_id=ctx.actor_id,
            project_id=project_id,
            actor_auth_method=ctx.actor_auth_method,
            actor_org_id=ctx.actor_org_id,
        )

    def _enforce(
        self,
        permission: ProjectPermission,
        ctx: ApiContext,
        action: ProjectPermissionAction,
        subject: ProjectPermissionSub,
        attributes: dict | None = None,
    ) -> None:
        try:
            permission.throw_unless_can(action, subject, attributes)
        except PermissionException as e:
            ctx.logger.warning(
                f"Denied {e.action} on {e.subject} in project {permission.project_id}",
                extra={"attributes": e.attributes},
            )
            raise

    async def _get_integration(self, db: AsyncSession, id: UUID) -> schemas.Integration:
        integration = await crud.integration.get(db, id)
        if integration is None:
            raise IntegrationNotFoundException()
        return schemas.Integration.model_validate(integration)

    async def create_integration(
        self,
        db: AsyncSession,
        integration_in: schemas.IntegrationCreate,
        ctx: ApiContext,
    ) -> schemas.CreateIntegrationResult:
        """Bind a secret scope to an external target.

        Args:
        ----
            db (AsyncSession): The database session.
            integration_in (schemas.IntegrationCreate): Auth id, source scope and target.
            ctx (ApiContext): The actor context.

        Returns:
        -------
            schemas.CreateIntegrationResult: The new integration and the auth it uses.

        Raises:
        ------
            IntegrationAuthNotFoundException: If the auth does not exist.
            PermissionException: If the actor may not create integrations or read the
                secrets of the source scope.
            FolderNotFoundException: If the secret path does not resolve to a folder.

        """
        integration_auth = await crud.integration_auth.get(db, integration_in.integration_auth_id)
        if integration_auth is None:
            raise IntegrationAuthNotFoundException()
        auth = schemas.IntegrationAuth.model_validate(integration_auth)

        permission = await self._get_permission(db, auth.project_id, ctx)
        self._enforce(
            permission, ctx, ProjectPermissionAction.CREATE, ProjectPermissionSub.INTEGRATIONS
        )
        self._enforce(
            permission,
            ctx,
            ProjectPermissionAction.READ,
            ProjectPermissionSub.SECRETS,
            {
                "environment": integration_in.source_environment,
                "secret_path": integration_in.secret_path,
            },
        )

        folder = await crud.secret_folder.find_by_secret_path(
            db,
            project_id=auth.project_id,
            environment=integration_in.source_environment,
            secret_path=integration_in.secret_path,
        )
        if folder is None:
            raise FolderNotFoundException()

        target = integration_in.model_dump(include=set(schemas.IntegrationTarget.model_fields))
        db_obj = await crud.integration.create(
            db,
            obj_in={
                **target,
                "env_id": folder.env_id,
                "integration_auth_id": auth.id,
                "integration": auth.integration,
                "is_active": integration_in.is_active,
                "secret_path": integration_in.secret_path,
                "integration_metadata": integration_in.metadata,
            },
        )
        integration = await self._get_integration(db, db_obj.id)
        ctx.logger.info(
            f"Created {integration.integration} integration {integration.id} for "
            f"{integration_in.source_environment}:{integration.secret_path}"
        )

        await temporal_service.sync_integrations(
            environment=integration_in.source_environment,
            secret_path=integration_in.secret_path,
            project_id=auth.project_id,
        )
        return schemas.CreateIntegrationResult(integration=integration, integration_auth=auth)

    async def update_integration(
        self,
        db: AsyncSession,
        id: UUID,
        integration_in: schemas.IntegrationUpdate,
        ctx: ApiContext,
    ) -> schemas.Integration:
        """Move or retarget an integration.

        Permissions are checked against the requested scope, not the stored one, so
        an integration cannot be moved into a scope the actor may not read. Sent
        target fields replace stored ones; metadata is merged.

        Raises:
        ------
            IntegrationNotFoundException: If the integration does not exist.
            PermissionException: If the actor may not edit integrations or read the
                secrets of the new scope.
            FolderNotFoundException: If the new secret path does not resolve to a folder.

        """
        integration = await self._get_integration(db, id)

        permission = await self._get_permission(db, integration.project_id, ctx)
        self._enforce(
            permission, ctx, ProjectPermissionAction.EDIT, ProjectPermissionSub.INTEGRATIONS
        )
        self._enforce(
            permission,
            ctx,
            ProjectPermissionAction.READ,
            ProjectPermissionSub.SECRETS,
            {"environment": integration_in.environment, "secret_path": integration_in.secret_path},
        )

        folder = await crud.secret_folder.find_by_secret_path(
            db,
            project_id=integration.project_id,
            environment=integration_in.environment,
            secret_path=integration_in.secret_path,
        )
        if folder is None:
            raise FolderNotFoundException()
        # Read before the commit expires the folder
        environment_slug = folder.environment.slug
        project_id = folder.project_id

        replaced = integration_in.model_dump(
            exclude_unset=True, exclude={"environment", "secret_path", "metadata"}
        )
        db_obj = await crud.integration.get(db, id)
        await crud.integration.update(
            db,
            db_obj=db_obj,
            obj_in={
                **replaced,
                "env_id": folder.env_id,
                "secret_path": integration_in.secret_path,
                "integration_metadata": schemas.merge_metadata(
                    integration.metadata, integration_in.metadata
                ),
            },
        )
        updated = await self._get_integration(db, id)
        ctx.logger.info(
            f"Updated integration {id}, now bound to "
            f"{environment_slug}:{updated.secret_path}"
        )

        await temporal_service.sync_integrations(
            environment=environment_slug,
            secret_path=integration_in.secret_path,
            project_id=project_id,
        )
        return updated

    async def delete_integration(
        self, db: AsyncSession, id: UUID, ctx: ApiContext
    ) -> schemas.Integration:
        """Delete an integration, and its auth when no other integration uses it.

        The delete, the lookup of remaining integrations on the same auth and the
        conditional auth delete share one transaction; a failure anywhere rolls all
        of it back.

        Raises:
        ------
            IntegrationNotFoundException: If the integration does not exist.
            PermissionException: If the actor may not delete integrations.

        """
        integration = await self._get_integration(db, id)

        permission = await self._get_permission(db, integration.project_id, ctx)
        self._enforce(
            permission, ctx, ProjectPermissionAction.DELETE, ProjectPermissionSub.INTEGRATIONS
        )

        async with UnitOfWork(db) as uow:
            deleted_obj = await crud.integration.remove(db, id=id, uow=uow)
            deleted = schemas.IntegrationInDB.model_validate(deleted_obj)

            remaining = await crud.integration.find(
                db, {"integration_auth_id": integration.integration_auth_id}, uow=uow
            )
            if not remaining:
                await crud.integration_auth.remove(
                    db, id=integration.integration_auth_id, uow=uow
                )
                ctx.logger.info(
                    f"Deleted integration auth {integration.integration_auth_id}, "
                    "no integration references it anymore"
                )

        ctx.logger.info(f"Deleted integration {id}")
        return schemas.Integration.model_validate(
            {**integration.model_dump(), **deleted.model_dump()}
        )

    async def list_integration_by_project(
        self, db: AsyncSession, project_id: UUID, ctx: ApiContext
    ) -> list[schemas.Integration]:
        """List every integration of a project.

        Raises:
        ------
            PermissionException: If the actor may not read integrations.

        """
        permission = await self._get_permission(db, project_id, ctx)
        self._enforce(
            permission, ctx, ProjectPermissionAction.READ, ProjectPermissionSub.INTEGRATIONS
        )

        integrations = await crud.integration.get_by_project_id(db, project_id)
        return [schemas.Integration.model_validate(integration) for integration in integrations]

    async def sync_integration(
        self, db: AsyncSession, id: UUID, ctx: ApiContext
    ) -> schemas.Integration:
        """Manually trigger a sync pass for an integration's own scope.

        Only Read on integrations is required: re-syncing does not change the binding.

        Raises:
        ------
            IntegrationNotFoundException: If the integration does not exist.
            PermissionException: If the actor may not read integrations.

        """
        integration = await self._get_integration(db, id)

        permission = await self._get_permission(db, integration.project_id, ctx)
        self._enforce(
            permission, ctx, ProjectPermissionAction.READ, ProjectPermissionSub.INTEGRATIONS
        )

        await temporal_service.sync_integrations(
            environment=integration.environment.slug,
            secret_path=integration.secret_path,
            project_id=integration.project_id,
        )
        ctx.logger.info(f"Triggered manual sync of integration {id}")
        return integration.model_copy(update={"env_id": integration.environment.id})


# Singleton instance
integration_service = IntegrationService()
