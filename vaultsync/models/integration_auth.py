"""Integration auth model."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vaultsync.models._base import ProjectBase

if TYPE_CHECKING:
    from vaultsync.models.integration import Integration


class IntegrationAuth(ProjectBase):
    """Shared connection to one external provider.

    Created by the provider authorization flow; referenced by any number of
    integrations and dropped together with the last of them.
    """

    __tablename__ = "integration_auth"

    integration: Mapped[str] = mapped_column(String, nullable=False)
    team_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    url: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    namespace: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    account_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    encrypted_access: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    access_expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    # "metadata" is reserved on declarative classes
    auth_metadata: Mapped[Optional[dict]] = mapped_column("metadata", JSON, nullable=True)

    integrations: Mapped[list["Integration"]] = relationship(
        "Integration", back_populates="integration_auth", lazy="noload"
    )
