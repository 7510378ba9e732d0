"""Shared exceptions module."""

from typing import Any, Optional

from pydantic import ValidationError


class VaultSyncException(Exception):
    """Base exception for vaultsync services."""

    pass


class PermissionException(VaultSyncException):
    """Exception raised when an actor does not have the necessary permissions."""

    def __init__(
        self,
        message: Optional[str] = "Actor does not have the right to perform this action",
        action: Optional[str] = None,
        subject: Optional[str] = None,
        attributes: Optional[dict[str, Any]] = None,
    ):
        """Create a new PermissionException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.
            action (str, optional): The action that was denied.
            subject (str, optional): The subject the action was checked against.
            attributes (dict, optional): The attributes qualifying the subject.

        """
        self.message = message
        self.action = action
        self.subject = subject
        self.attributes = attributes
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the denial for error responses."""
        details: dict[str, Any] = {"detail": self.message}
        if self.action is not None:
            details["action"] = self.action
        if self.subject is not None:
            details["subject"] = self.subject
        if self.attributes:
            details["attributes"] = self.attributes
        return details


class NotFoundException(VaultSyncException):
    """Exception raised when an object is not found."""

    def __init__(self, message: Optional[str] = "Object not found"):
        """Create a new NotFoundException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class IntegrationNotFoundException(NotFoundException):
    """Raised when an integration is not found."""

    def __init__(self, message: Optional[str] = "Integration not found"):
        """Create a new IntegrationNotFoundException instance."""
        super().__init__(message)


class IntegrationAuthNotFoundException(NotFoundException):
    """Raised when an integration auth is not found."""

    def __init__(self, message: Optional[str] = "Integration auth not found"):
        """Create a new IntegrationAuthNotFoundException instance."""
        super().__init__(message)


class FolderNotFoundException(NotFoundException):
    """Raised when a secret path does not resolve to a folder."""

    def __init__(self, message: Optional[str] = "Folder path not found"):
        """Create a new FolderNotFoundException instance."""
        super().__init__(message)


class InvalidStateError(VaultSyncException):
    """Exception raised when an object is in an invalid state.

    Used when a persisted row breaks a structural expectation of another row,
    e.g. an environment without a root folder.
    """

    def __init__(self, message: Optional[str] = "Object is in an invalid state"):
        """Create a new InvalidStateError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


def unpack_validation_error(exc: ValidationError) -> dict:
    """Unpack a Pydantic validation error into a dictionary.

    Args:
    ----
        exc (ValidationError): The Pydantic validation error.

    Returns:
    -------
        dict: The dictionary representation of the validation error.

    """
    error_messages = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        message = error["msg"]
        error_messages.append({field: message})

    return {"errors": error_messages}
