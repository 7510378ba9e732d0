"""Schemas for environments and secret folders."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


def split_secret_path(secret_path: str) -> list[str]:
    """Split a secret path into its folder names.

    ``"/"``, ``""`` and ``"//"`` all name the root and yield no segments.
    """
    return [segment for segment in (secret_path or "").strip().split("/") if segment]


def normalize_secret_path(secret_path: str) -> str:
    """Canonical form of a secret path: leading slash, no trailing or doubled slashes."""
    return "/" + "/".join(split_secret_path(secret_path))


class EnvironmentInfo(BaseModel):
    """Denormalized environment descriptor embedded in integrations and folders."""

    id: UUID
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class Folder(BaseModel):
    """A resolved secret folder."""

    id: UUID
    name: str
    env_id: UUID
    parent_id: UUID | None = None
    project_id: UUID
    environment: EnvironmentInfo

    model_config = ConfigDict(from_attributes=True)
