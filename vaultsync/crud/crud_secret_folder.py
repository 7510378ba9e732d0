"""CRUD operations for secret folders."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vaultsync.core.exceptions import InvalidStateError
from vaultsync.crud._base import CRUDBase
from vaultsync.crud.crud_project import project_environment
from vaultsync.models.secret_folder import SecretFolder
from vaultsync.schemas.folder import split_secret_path


class CRUDSecretFolder(CRUDBase[SecretFolder, BaseModel, BaseModel]):
    """CRUD operations for secret folders."""

    async def get_root(self, db: AsyncSession, env_id: UUID) -> Optional[SecretFolder]:
        """Get the root folder of an environment."""
        query = select(SecretFolder).where(
            SecretFolder.env_id == env_id, SecretFolder.parent_id.is_(None)
        )
        result = await db.execute(query)
        return result.unique().scalar_one_or_none()

    async def get_child(
        self, db: AsyncSession, parent_id: UUID, name: str
    ) -> Optional[SecretFolder]:
        """Get the direct child folder with the given name."""
        query = select(SecretFolder).where(
            SecretFolder.parent_id == parent_id, SecretFolder.name == name
        )
        result = await db.execute(query)
        return result.unique().scalar_one_or_none()

    async def find_by_secret_path(
        self,
        db: AsyncSession,
        project_id: UUID,
        environment: str,
        secret_path: str,
    ) -> Optional[SecretFolder]:
        """Resolve the folder a secret path points at.

        Args:
        ----
            db (AsyncSession): The database session.
            project_id (UUID): The project the environment belongs to.
            environment (str): The environment slug.
            secret_path (str): Slash-separated folder path, "/" being the root.

        Returns:
        -------
            Optional[SecretFolder]: The folder, None if the environment or any
                path segment does not exist.

        Raises:
        ------
            InvalidStateError: If the environment exists but has no root folder.

        """
        env = await project_environment.get_by_slug(db, project_id=project_id, slug=environment)
        if env is None:
            return None

        folder = await self.get_root(db, env.id)
        if folder is None:
            raise InvalidStateError(f"Environment '{environment}' has no root folder")

        for name in split_secret_path(secret_path):
            folder = await self.get_child(db, parent_id=folder.id, name=name)
            if folder is None:
                return None

        return folder


secret_folder = CRUDSecretFolder(SecretFolder)
