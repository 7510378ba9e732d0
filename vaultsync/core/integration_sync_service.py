"""Sync pass over the integrations bound to one secret scope."""

from uuid import UUID

from vaultsync import crud
from vaultsync.core.logging import LoggerConfigurator
from vaultsync.db.session import get_db_context
from vaultsync.schemas.folder import normalize_secret_path

logger = LoggerConfigurator.configure_logger(__name__, dimensions={"component": "integration_sync"})


class IntegrationSyncService:
    """Resolves which integrations a secret change has to be pushed to.

    The pass reads the current state on every run, so running it more than once
    for the same scope is harmless. Pushing secret values to the external
    providers happens downstream of the ids returned here.
    """

    async def run_sync_pass(
        self, project_id: UUID, environment: str, secret_path: str
    ) -> list[UUID]:
        """Collect the active integrations of a secret scope.

        Args:
            project_id: The project owning the secrets
            environment: The environment slug
            secret_path: The folder path inside the environment

        Returns:
            Ids of the active integrations bound to the scope, oldest first
        """
        secret_path = normalize_secret_path(secret_path)
        scope_logger = logger.with_context(
            project_id=str(project_id), environment=environment, secret_path=secret_path
        )

        async with get_db_context() as db:
            folder = await crud.secret_folder.find_by_secret_path(
                db, project_id=project_id, environment=environment, secret_path=secret_path
            )
            if folder is None:
                scope_logger.warning("Sync pass skipped, folder path no longer exists")
                return []

            integrations = await crud.integration.get_active_by_scope(
                db, env_id=folder.env_id, secret_path=secret_path
            )

        integration_ids = [integration.id for integration in integrations]
        scope_logger.info(f"Sync pass covers {len(integration_ids)} active integration(s)")
        return integration_ids


integration_sync_service = IntegrationSyncService()
