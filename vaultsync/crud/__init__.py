"""CRUD operations for the application."""

from .crud_integration import integration
from .crud_integration_auth import integration_auth
from .crud_project import project, project_environment, project_membership
from .crud_secret_folder import secret_folder

__all__ = [
    "integration",
    "integration_auth",
    "project",
    "project_environment",
    "project_membership",
    "secret_folder",
]
