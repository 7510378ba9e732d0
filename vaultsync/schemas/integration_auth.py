"""Schemas for integration auths."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class IntegrationAuthBase(BaseModel):
    """Base schema for integration auths."""

    integration: str
    team_id: Optional[str] = None
    url: Optional[str] = None
    namespace: Optional[str] = None
    account_id: Optional[str] = None


class IntegrationAuthCreate(IntegrationAuthBase):
    """Schema used by the provider authorization flow to persist a new auth."""

    project_id: UUID
    encrypted_access: Optional[str] = None
    access_expires_at: Optional[datetime] = None
    auth_metadata: Optional[dict[str, Any]] = None


class IntegrationAuth(IntegrationAuthBase):
    """Integration auth as returned to callers; the encrypted credential is never exposed."""

    id: UUID
    project_id: UUID
    access_expires_at: Optional[datetime] = None
    metadata: Optional[dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("auth_metadata", "metadata")
    )
    created_at: datetime
    modified_at: datetime

    model_config = ConfigDict(from_attributes=True)
