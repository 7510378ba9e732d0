"""Project model."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vaultsync.models._base import Base

if TYPE_CHECKING:
    from vaultsync.models.project_environment import ProjectEnvironment


class Project(Base):
    """A project groups environments, secrets and integrations of one organization."""

    __tablename__ = "project"

    name: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    organization_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)

    environments: Mapped[list["ProjectEnvironment"]] = relationship(
        "ProjectEnvironment", back_populates="project", cascade="all, delete-orphan", lazy="noload"
    )
