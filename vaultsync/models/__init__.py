"""Models for the application."""

from ._base import Base
from .integration import Integration
from .integration_auth import IntegrationAuth
from .project import Project
from .project_environment import ProjectEnvironment
from .project_membership import ProjectMembership
from .secret_folder import SecretFolder

__all__ = [
    "Base",
    "Integration",
    "IntegrationAuth",
    "Project",
    "ProjectEnvironment",
    "ProjectMembership",
    "SecretFolder",
]
