"""Schemas for integrations."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from vaultsync.schemas.folder import EnvironmentInfo, normalize_secret_path
from vaultsync.schemas.integration_auth import IntegrationAuth


def merge_metadata(
    existing: Optional[dict[str, Any]], incoming: Optional[dict[str, Any]]
) -> dict[str, Any]:
    """Merge-patch integration metadata.

    Keys in ``incoming`` win; keys only present in ``existing`` are kept. Unlike the
    scalar target fields, metadata is never replaced wholesale.
    """
    return {**(existing or {}), **(incoming or {})}


class IntegrationTarget(BaseModel):
    """Target descriptor fields of an integration."""

    url: Optional[str] = None
    app: Optional[str] = None
    app_id: Optional[str] = None
    owner: Optional[str] = None
    path: Optional[str] = None
    region: Optional[str] = None
    scope: Optional[str] = None
    target_service: Optional[str] = None
    target_service_id: Optional[str] = None
    target_environment: Optional[str] = None
    target_environment_id: Optional[str] = None


class IntegrationCreate(IntegrationTarget):
    """Request to bind a secret scope to an external target."""

    integration_auth_id: UUID
    source_environment: str = Field(..., min_length=1, description="Environment slug.")
    secret_path: str = Field("/", description="Folder path inside the environment.")
    is_active: bool = True
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("secret_path")
    @classmethod
    def _normalize_secret_path(cls, v: str) -> str:
        return normalize_secret_path(v)


class IntegrationUpdate(IntegrationTarget):
    """Request to move or retarget an integration.

    ``environment`` and ``secret_path`` are always required so the new scope can be
    authorized. Target fields and ``is_active`` replace stored values only when sent;
    ``metadata`` is merged.
    """

    environment: str = Field(..., min_length=1, description="Environment slug.")
    secret_path: str = Field(..., description="Folder path inside the environment.")
    is_active: Optional[bool] = None
    metadata: Optional[dict[str, Any]] = None

    @field_validator("secret_path")
    @classmethod
    def _normalize_secret_path(cls, v: str) -> str:
        return normalize_secret_path(v)


class IntegrationInDB(IntegrationTarget):
    """Column view of an integration row."""

    id: UUID
    env_id: UUID
    integration_auth_id: UUID
    integration: str
    is_active: bool
    secret_path: str
    metadata: dict[str, Any] = Field(
        default_factory=dict, validation_alias=AliasChoices("integration_metadata", "metadata")
    )
    created_at: datetime
    modified_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Integration(IntegrationInDB):
    """Integration with its project and environment resolved."""

    project_id: UUID
    environment: EnvironmentInfo


class CreateIntegrationResult(BaseModel):
    """Result of creating an integration: the new row and the auth it uses."""

    integration: Integration
    integration_auth: IntegrationAuth
