"""CRUD operations for integrations."""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from vaultsync.crud._base import CRUDBase
from vaultsync.models.integration import Integration
from vaultsync.models.project_environment import ProjectEnvironment
from vaultsync.schemas.integration import IntegrationCreate, IntegrationUpdate


class CRUDIntegration(CRUDBase[Integration, IntegrationCreate, IntegrationUpdate]):
    """CRUD operations for integrations.

    Every query eager-loads the integration's environment, which is where its
    project id and environment slug come from.
    """

    def _select(self) -> Select:
        return select(Integration).order_by(Integration.created_at)

    async def get_by_project_id(self, db: AsyncSession, project_id: UUID) -> list[Integration]:
        """Get all integrations of a project, oldest first."""
        query = (
            self._select()
            .join(ProjectEnvironment, Integration.env_id == ProjectEnvironment.id)
            .where(ProjectEnvironment.project_id == project_id)
        )
        result = await db.execute(query)
        return list(result.unique().scalars().all())

    async def get_active_by_scope(
        self, db: AsyncSession, env_id: UUID, secret_path: str
    ) -> list[Integration]:
        """Get the active integrations bound to one environment and secret path."""
        query = self._select().where(
            Integration.env_id == env_id,
            Integration.secret_path == secret_path,
            Integration.is_active.is_(True),
        )
        result = await db.execute(query)
        return list(result.unique().scalars().all())


integration = CRUDIntegration(Integration)
