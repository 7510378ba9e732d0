"""CRUD operations for projects, environments and memberships."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vaultsync.core.shared_models import ActorType
from vaultsync.crud._base import CRUDBase
from vaultsync.models.project import Project
from vaultsync.models.project_environment import ProjectEnvironment
from vaultsync.models.project_membership import ProjectMembership


class CRUDProject(CRUDBase[Project, BaseModel, BaseModel]):
    """CRUD operations for projects."""


class CRUDProjectEnvironment(CRUDBase[ProjectEnvironment, BaseModel, BaseModel]):
    """CRUD operations for project environments."""

    async def get_by_slug(
        self, db: AsyncSession, project_id: UUID, slug: str
    ) -> Optional[ProjectEnvironment]:
        """Get a project's environment by its slug."""
        query = select(ProjectEnvironment).where(
            ProjectEnvironment.project_id == project_id, ProjectEnvironment.slug == slug
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


class CRUDProjectMembership(CRUDBase[ProjectMembership, BaseModel, BaseModel]):
    """CRUD operations for project memberships."""

    async def get_by_actor(
        self,
        db: AsyncSession,
        project_id: UUID,
        actor_id: UUID,
        actor_type: ActorType,
    ) -> Optional[ProjectMembership]:
        """Get the membership of one actor in a project."""
        query = select(ProjectMembership).where(
            ProjectMembership.project_id == project_id,
            ProjectMembership.actor_id == actor_id,
            ProjectMembership.actor_type == ActorType(actor_type).value,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


project = CRUDProject(Project)
project_environment = CRUDProjectEnvironment(ProjectEnvironment)
project_membership = CRUDProjectMembership(ProjectMembership)
