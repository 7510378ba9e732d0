"""Integration model."""

from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vaultsync.models._base import Base
from vaultsync.models.integration_auth import IntegrationAuth
from vaultsync.models.project_environment import ProjectEnvironment


class Integration(Base):
    """Binds the secrets at one environment + secret path to an external target."""

    __tablename__ = "integration"

    env_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("project_environment.id", ondelete="CASCADE"), nullable=False
    )
    # RESTRICT: an auth row can only go once nothing references it
    integration_auth_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("integration_auth.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    integration: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    secret_path: Mapped[str] = mapped_column(String, nullable=False, default="/")

    url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    app: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    app_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    owner: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    path: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    region: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    scope: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    target_service: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    target_service_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    target_environment: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    target_environment_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    # "metadata" is reserved on declarative classes
    integration_metadata: Mapped[dict] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )

    environment: Mapped[ProjectEnvironment] = relationship(ProjectEnvironment, lazy="joined")
    integration_auth: Mapped[IntegrationAuth] = relationship(
        IntegrationAuth, back_populates="integrations", lazy="noload"
    )

    @property
    def project_id(self) -> UUID:
        """Project owning the integration, through its environment."""
        return self.environment.project_id
