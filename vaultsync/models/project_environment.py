"""Project environment model."""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vaultsync.models._base import ProjectBase

if TYPE_CHECKING:
    from vaultsync.models.project import Project


class ProjectEnvironment(ProjectBase):
    """An environment (dev, staging, prod, ...) inside a project."""

    __tablename__ = "project_environment"

    name: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[str] = mapped_column(String, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    project: Mapped["Project"] = relationship(
        "Project", back_populates="environments", lazy="noload"
    )

    __table_args__ = (UniqueConstraint("project_id", "slug", name="uq_project_environment_slug"),)
