"""Secret folder model."""

from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vaultsync.models._base import Base
from vaultsync.models.project_environment import ProjectEnvironment

ROOT_FOLDER_NAME = "root"


class SecretFolder(Base):
    """A folder in an environment's secret tree.

    Every environment owns exactly one root folder (``parent_id`` is NULL); a secret
    path such as ``/app/api`` names the chain root -> app -> api.
    """

    __tablename__ = "secret_folder"

    name: Mapped[str] = mapped_column(String, nullable=False)
    env_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("project_environment.id", ondelete="CASCADE"), nullable=False
    )
    parent_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("secret_folder.id", ondelete="CASCADE"), nullable=True
    )

    environment: Mapped[ProjectEnvironment] = relationship(ProjectEnvironment, lazy="joined")

    @property
    def project_id(self) -> UUID:
        """Project owning the folder's environment."""
        return self.environment.project_id
