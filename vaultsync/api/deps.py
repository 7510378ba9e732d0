"""Dependencies that are used in the API endpoints."""

import uuid
from typing import Optional

from fastapi import Header, HTTPException, Request

from vaultsync.api.context import ApiContext
from vaultsync.core.logging import logger
from vaultsync.core.shared_models import ActorType
from vaultsync.db.session import get_db

__all__ = ["get_context", "get_db"]


def _parse_uuid(value: Optional[str], header: str) -> uuid.UUID:
    if not value:
        raise HTTPException(status_code=401, detail=f"Missing {header} header")
    try:
        return uuid.UUID(value)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=f"Invalid {header} header") from e


async def get_context(
    request: Request,
    x_actor_id: Optional[str] = Header(None, alias="X-Actor-Id"),
    x_actor_type: str = Header(ActorType.USER.value, alias="X-Actor-Type"),
    x_actor_org_id: Optional[str] = Header(None, alias="X-Actor-Org-Id"),
    x_actor_auth_method: str = Header("jwt", alias="X-Actor-Auth-Method"),
) -> ApiContext:
    """Create the actor context for the request.

    Authentication happens upstream; the gateway forwards the verified identity in
    ``X-Actor-*`` headers.

    Args:
    ----
        request (Request): The FastAPI request object.
        x_actor_id (Optional[str]): Id of the authenticated actor.
        x_actor_type (str): Kind of actor, defaults to ``user``.
        x_actor_org_id (Optional[str]): Organization the actor authenticated against.
        x_actor_auth_method (str): How the actor authenticated, defaults to ``jwt``.

    Returns:
    -------
        ApiContext: Actor context with a logger bound to the request dimensions.

    Raises:
    ------
        HTTPException: 401 if an identity header is missing or malformed.

    """
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))

    actor_id = _parse_uuid(x_actor_id, "X-Actor-Id")
    actor_org_id = _parse_uuid(x_actor_org_id, "X-Actor-Org-Id")
    try:
        actor = ActorType(x_actor_type)
    except ValueError as e:
        logger.warning(f"Rejected request {request_id} with actor type '{x_actor_type}'")
        raise HTTPException(status_code=401, detail="Invalid X-Actor-Type header") from e

    return ApiContext.build(
        request_id=request_id,
        actor=actor,
        actor_id=actor_id,
        actor_org_id=actor_org_id,
        actor_auth_method=x_actor_auth_method,
    )
