"""Temporal workflows for integration syncs."""

from __future__ import annotations

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

REQUEST_PASS_SIGNAL = "request_pass"


@workflow.defn
class SyncIntegrationsWorkflow:
    """Runs sync passes over every active integration bound to a secret scope.

    Each trigger signals the running workflow. A trigger that arrives while a pass is
    in flight schedules one more pass, so every change committed before its trigger is
    covered by a pass that starts after it.
    """

    def __init__(self) -> None:
        self._pass_requested = False

    @workflow.signal(name=REQUEST_PASS_SIGNAL)
    def request_pass(self) -> None:
        """Ask for another pass once the current one finishes."""
        self._pass_requested = True

    @workflow.run
    async def run(
        self,
        project_id: str,
        environment: str,
        secret_path: str,
        timeout_seconds: int,
        max_attempts: int,
    ) -> list[str]:
        """Run sync passes until no trigger is pending.

        Args:
            project_id: The project owning the secrets
            environment: The environment slug
            secret_path: The folder path inside the environment
            timeout_seconds: Start-to-close timeout of the sync activity
            max_attempts: Attempts before the pass is reported failed

        Returns:
            Ids of the integrations the last pass covered
        """
        from vaultsync.platform.temporal.activities import sync_integrations_activity

        while True:
            # Triggers received so far are covered by the pass about to start
            self._pass_requested = False
            covered = await workflow.execute_activity(
                sync_integrations_activity,
                args=[project_id, environment, secret_path],
                start_to_close_timeout=timedelta(seconds=timeout_seconds),
                retry_policy=RetryPolicy(
                    initial_interval=timedelta(seconds=5),
                    backoff_coefficient=2.0,
                    maximum_attempts=max_attempts,
                ),
            )
            if not self._pass_requested:
                return covered
            workflow.logger.info("Trigger received during the pass, running another")
