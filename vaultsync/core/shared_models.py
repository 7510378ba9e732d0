"""Shared enums for the backend."""

from enum import Enum


class ActorType(str, Enum):
    """Kind of principal performing a request."""

    USER = "user"
    IDENTITY = "identity"
    SERVICE = "service"


class ProjectPermissionAction(str, Enum):
    """Actions a project permission rule can grant."""

    READ = "read"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"


class ProjectPermissionSub(str, Enum):
    """Project-scoped permission subjects."""

    INTEGRATIONS = "integrations"
    SECRETS = "secrets"


class ProjectRole(str, Enum):
    """Built-in project membership roles."""

    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"
    NO_ACCESS = "no-access"
