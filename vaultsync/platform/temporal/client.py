"""Temporal client configuration and utilities."""

from typing import Optional

from temporalio.client import Client

from vaultsync.core.config import settings
from vaultsync.core.logging import logger


class TemporalClient:
    """Lazily connected, process-wide Temporal client."""

    _client: Optional[Client] = None

    @classmethod
    async def get_client(cls) -> Client:
        """Get or create the Temporal client."""
        if cls._client is None:
            logger.info(
                f"Connecting to Temporal at {settings.temporal_address}, "
                f"namespace: {settings.TEMPORAL_NAMESPACE}"
            )
            cls._client = await Client.connect(
                target_host=settings.temporal_address,
                namespace=settings.TEMPORAL_NAMESPACE,
            )

        return cls._client

    @classmethod
    async def close(cls) -> None:
        """Drop the client reference; the SDK client has no close method."""
        cls._client = None


temporal_client = TemporalClient()
