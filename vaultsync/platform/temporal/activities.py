"""Temporal activities for integration syncs."""

from uuid import UUID

from temporalio import activity


@activity.defn
async def sync_integrations_activity(
    project_id: str, environment: str, secret_path: str
) -> list[str]:
    """Activity wrapping ``integration_sync_service.run_sync_pass``.

    Args:
        project_id: The project owning the secrets
        environment: The environment slug
        secret_path: The folder path inside the environment

    Returns:
        Ids of the integrations the pass covered, as strings
    """
    # Imported here to keep the workflow sandbox free of database imports
    from vaultsync.core.integration_sync_service import integration_sync_service

    integration_ids = await integration_sync_service.run_sync_pass(
        project_id=UUID(project_id), environment=environment, secret_path=secret_path
    )
    return [str(integration_id) for integration_id in integration_ids]
