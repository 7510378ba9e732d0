"""Service for enqueueing integration syncs through Temporal."""

import hashlib
from typing import Optional
from uuid import UUID

from temporalio.client import WorkflowHandle
from temporalio.common import WorkflowIDReusePolicy

from vaultsync.core.config import settings
from vaultsync.core.integration_sync_service import integration_sync_service
from vaultsync.core.logging import logger
from vaultsync.platform.temporal.client import temporal_client
from vaultsync.platform.temporal.workflows import REQUEST_PASS_SIGNAL, SyncIntegrationsWorkflow
from vaultsync.schemas.folder import normalize_secret_path


def sync_workflow_id(project_id: UUID, environment: str, secret_path: str) -> str:
    """Deterministic workflow id of the sync passes for one secret scope."""
    digest = hashlib.sha1(normalize_secret_path(secret_path).encode("utf-8")).hexdigest()[:12]
    return f"integration-sync-{project_id}-{environment}-{digest}"


class TemporalService:
    """Triggers sync passes for secret scopes."""

    async def sync_integrations(
        self,
        environment: str,
        secret_path: str,
        project_id: UUID,
    ) -> Optional[WorkflowHandle]:
        """Trigger a sync pass for every integration bound to a secret scope.

        With Temporal enabled the trigger is a signal-with-start on the scope's workflow:
        it starts a workflow when none is running, and otherwise makes the running one
        do another pass after the current. This returns once Temporal accepted it.

        With Temporal disabled the pass runs inline. That mode is meant for local runs;
        the caller's write is already committed, so a failed pass is logged, not raised.

        Args:
            environment: The environment slug
            secret_path: The folder path inside the environment
            project_id: The project owning the secrets

        Returns:
            The workflow handle, or None when the pass ran inline
        """
        if not settings.TEMPORAL_ENABLED:
            try:
                await integration_sync_service.run_sync_pass(
                    project_id=project_id, environment=environment, secret_path=secret_path
                )
            except Exception as e:
                logger.exception(
                    f"Inline sync pass for {environment}:{secret_path} in project "
                    f"{project_id} failed: {e}"
                )
            return None

        workflow_id = sync_workflow_id(project_id, environment, secret_path)
        client = await temporal_client.get_client()
        handle = await client.start_workflow(
            SyncIntegrationsWorkflow.run,
            args=[
                str(project_id),
                environment,
                normalize_secret_path(secret_path),
                settings.INTEGRATION_SYNC_TIMEOUT_SECONDS,
                settings.INTEGRATION_SYNC_MAX_ATTEMPTS,
            ],
            id=workflow_id,
            task_queue=settings.TEMPORAL_TASK_QUEUE,
            id_reuse_policy=WorkflowIDReusePolicy.ALLOW_DUPLICATE,
            start_signal=REQUEST_PASS_SIGNAL,
        )

        logger.info(f"Signaled sync workflow {workflow_id}")
        return handle


temporal_service = TemporalService()
