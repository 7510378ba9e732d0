"""Base models for the application."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from vaultsync.core.datetime_utils import utc_now_naive


class Base(DeclarativeBase):
    """Base class for all models."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now_naive, nullable=False)
    modified_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, onupdate=utc_now_naive, nullable=False
    )


class ProjectBase(Base):
    """Base class for project-owned tables."""

    __abstract__ = True

    @declared_attr
    def project_id(cls) -> Mapped[uuid.UUID]:
        """Project ID column."""
        return mapped_column(Uuid, ForeignKey("project.id", ondelete="CASCADE"), nullable=False)
