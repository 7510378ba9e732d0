"""Project membership model."""

from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vaultsync.core.shared_models import ActorType, ProjectRole
from vaultsync.models._base import ProjectBase


class ProjectMembership(ProjectBase):
    """Grants one actor (user, machine identity or service token) a role in a project."""

    __tablename__ = "project_membership"

    actor_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    actor_type: Mapped[ActorType] = mapped_column(String, nullable=False)
    role: Mapped[ProjectRole] = mapped_column(String, nullable=False)
    # Extra rules appended after the role's rules, e.g.
    # {"action": "read", "subject": "secrets", "conditions": {"environment": "dev"}}
    custom_rules: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        UniqueConstraint("project_id", "actor_id", "actor_type", name="uq_project_membership"),
    )
