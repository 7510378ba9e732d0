# flake8: noqa: F401
"""Schemas for the application."""

from .folder import EnvironmentInfo, Folder, normalize_secret_path, split_secret_path
from .integration import (
    CreateIntegrationResult,
    Integration,
    IntegrationCreate,
    IntegrationInDB,
    IntegrationTarget,
    IntegrationUpdate,
    merge_metadata,
)
from .integration_auth import IntegrationAuth, IntegrationAuthCreate
