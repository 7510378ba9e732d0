"""Unified context for requests against the integration service.

Combines the actor identity, the request id and a contextual logger into a single
object that endpoints receive through dependency injection and pass to services.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from vaultsync.core.logging import ContextualLogger, LoggerConfigurator
from vaultsync.core.shared_models import ActorType


class ApiContext(BaseModel):
    """Actor context carried by every service call.

    ``actor`` is the kind of principal, ``actor_id`` its id, ``actor_org_id`` the
    organization it authenticated against and ``actor_auth_method`` how it did so.
    """

    request_id: str

    actor: ActorType
    actor_id: UUID
    actor_org_id: UUID
    actor_auth_method: str

    logger: ContextualLogger

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def build(
        cls,
        *,
        request_id: str,
        actor: ActorType,
        actor_id: UUID,
        actor_org_id: UUID,
        actor_auth_method: str,
    ) -> "ApiContext":
        """Create a context with a logger bound to the actor dimensions."""
        logger = LoggerConfigurator.configure_logger(
            "vaultsync.api",
            dimensions={
                "request_id": request_id,
                "actor": ActorType(actor).value,
                "actor_id": str(actor_id),
                "actor_org_id": str(actor_org_id),
            },
        )
        return cls(
            request_id=request_id,
            actor=actor,
            actor_id=actor_id,
            actor_org_id=actor_org_id,
            actor_auth_method=actor_auth_method,
            logger=logger,
        )

    def __str__(self) -> str:
        """String representation for logging."""
        return (
            f"ApiContext(request_id={self.request_id[:8]}..., actor={self.actor.value}, "
            f"actor_id={self.actor_id}, org={self.actor_org_id})"
        )
